# stickman/surface.py
"""
Pillow implementation of DrawingSurface.

Pillow has no global alpha or transform stack, so both are kept here:
points go through the current affine matrix before drawing, and everything
drawn at one alpha lands on a transparent layer that is composited onto the
canvas (with its alpha channel scaled) when the alpha changes.

A uniform scale maps scene coordinates onto canvases smaller or larger
than the scene's own 640x400; radii and stroke widths follow it.
"""
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .drawing import DrawingSurface, Point
from .models import CANVAS_HEIGHT, CANVAS_WIDTH

DEFAULT_SIZE = (CANVAS_WIDTH, CANVAS_HEIGHT)
BACKGROUND = (255, 255, 255, 255)


class PillowSurface(DrawingSurface):
    def __init__(self, size: Tuple[int, int] = DEFAULT_SIZE, background=BACKGROUND, scale: float = 1.0):
        self.size = size
        self.background = background
        self.scale = float(scale)
        self._matrix = np.diag([self.scale, self.scale, 1.0])
        self._stack: List[np.ndarray] = []
        self._alpha = 1.0
        self.clear()

    # canvas / layers

    def clear(self) -> None:
        self._canvas = Image.new("RGBA", self.size, self.background)
        self._new_layer()

    def _new_layer(self) -> None:
        self._layer = Image.new("RGBA", self.size, (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self._layer)
        self._dirty = False

    def _flush(self) -> None:
        if not self._dirty:
            return
        layer = self._layer
        if self._alpha < 1.0:
            a = layer.getchannel("A").point(lambda v: int(v * self._alpha))
            layer.putalpha(a)
        self._canvas.alpha_composite(layer)
        self._new_layer()

    def set_alpha(self, alpha: float) -> None:
        alpha = max(0.0, min(1.0, float(alpha)))
        if alpha != self._alpha:
            self._flush()
            self._alpha = alpha

    @property
    def alpha(self) -> float:
        return self._alpha

    def image(self) -> Image.Image:
        self._flush()
        return self._canvas.convert("RGB")

    def to_array(self) -> np.ndarray:
        return np.array(self.image())

    # transforms

    def save(self) -> None:
        self._stack.append(self._matrix.copy())

    def restore(self) -> None:
        if self._stack:
            self._matrix = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        t = np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ t

    def rotate(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ r

    def _map(self, points: Sequence[Point]) -> List[Tuple[float, float]]:
        pts = np.array([[x, y, 1.0] for x, y in points]).T
        out = self._matrix @ pts
        return [(float(x), float(y)) for x, y in zip(out[0], out[1])]

    def _width(self, width: int) -> int:
        return max(1, int(round(width * self.scale)))

    # primitives

    def line(self, p1: Point, p2: Point, color: str, width: int = 1) -> None:
        self._draw.line(self._map([p1, p2]), fill=color, width=self._width(width))
        self._dirty = True

    def circle(self, center: Point, radius: float, fill: Optional[str] = None,
               outline: Optional[str] = None, width: int = 1) -> None:
        (cx, cy), = self._map([center])
        radius *= self.scale
        self._draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius],
                           fill=fill, outline=outline, width=self._width(width))
        self._dirty = True

    def polygon(self, points: Sequence[Point], fill: Optional[str] = None,
                outline: Optional[str] = None, width: int = 1) -> None:
        if len(points) < 2:
            return
        mapped = self._map(points)
        if fill is not None:
            self._draw.polygon(mapped, fill=fill)
        if outline is not None:
            self._draw.line(mapped + [mapped[0]], fill=outline, width=self._width(width))
        self._dirty = True
