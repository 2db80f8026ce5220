# stickman/drawing.py
"""
Frame drawing on top of an injected 2-D surface.

DrawingSurface is the capability the playback engine draws through; the
functions below turn poses, catalog objects and effects into surface calls.
"""
import math
from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .models import Effect, FrameObjectState, Pose, Scene, SceneObject
from .pose import BONES

Point = Tuple[float, float]

ONION_ALPHA = 0.2
DEFAULT_OBJECT_COLOR = "#888888"
FIGURE_COLOR = "#000000"
HEAD_RADIUS = 8


class DrawingSurface(ABC):
    """2-D drawing capability: primitives, a save/restore transform stack and a global alpha."""

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def save(self) -> None: ...

    @abstractmethod
    def restore(self) -> None: ...

    @abstractmethod
    def translate(self, dx: float, dy: float) -> None: ...

    @abstractmethod
    def rotate(self, angle: float) -> None: ...

    @abstractmethod
    def set_alpha(self, alpha: float) -> None: ...

    @abstractmethod
    def line(self, p1: Point, p2: Point, color: str, width: int = 1) -> None: ...

    @abstractmethod
    def circle(self, center: Point, radius: float, fill: Optional[str] = None,
               outline: Optional[str] = None, width: int = 1) -> None: ...

    @abstractmethod
    def polygon(self, points: Sequence[Point], fill: Optional[str] = None,
                outline: Optional[str] = None, width: int = 1) -> None: ...


def draw_stickman(surface: DrawingSurface, pose: Pose) -> None:
    head = pose["head"]
    surface.circle((head.x, head.y), HEAD_RADIUS, fill=FIGURE_COLOR)
    for j1, j2 in BONES:
        p1, p2 = pose[j1], pose[j2]
        surface.line((p1.x, p1.y), (p2.x, p2.y), FIGURE_COLOR, width=2)


def _draw_shape(surface: DrawingSurface, obj: SceneObject) -> None:
    color = obj.color or DEFAULT_OBJECT_COLOR
    if obj.type == "rect":
        if obj.width and obj.height:
            w, h = obj.width / 2, obj.height / 2
            surface.polygon([(-w, -h), (w, -h), (w, h), (-w, h)], fill=color)
    elif obj.type == "circle":
        if obj.radius:
            surface.circle((0, 0), obj.radius, fill=color)
    elif obj.type == "polygon":
        if obj.points:
            surface.polygon([(p.x, p.y) for p in obj.points], fill=color)
    else:
        # placeholder: crossed box
        surface.polygon([(-15, -15), (15, -15), (15, 15), (-15, 15)], outline="#999999", width=2)
        surface.line((-15, -15), (15, 15), "#999999", width=2)
        surface.line((15, -15), (-15, 15), "#999999", width=2)


def draw_object(surface: DrawingSurface, state: FrameObjectState, catalog: Mapping[str, SceneObject]) -> None:
    obj = catalog.get(state.id)
    if obj is None or not state.visible:
        return
    surface.save()
    surface.translate(state.position.x, state.position.y)
    surface.rotate(state.rotation)
    _draw_shape(surface, obj)
    surface.restore()


def draw_effects(surface: DrawingSurface, effects: Iterable[Effect]) -> None:
    for effect in effects:
        params = effect.params or {}
        surface.save()
        surface.translate(effect.position.x, effect.position.y)
        if effect.type == "bang":
            rays = int(params.get("rays", 8))
            radius = float(params.get("radius", 20))
            for i in range(rays):
                angle = i * math.pi * 2 / rays
                surface.line((0, 0), (math.cos(angle) * radius, math.sin(angle) * radius), "#FF6600", width=3)
        else:
            surface.circle((0, 0), 5, fill="#FFFF00")
        surface.restore()


def draw_frame(surface: DrawingSurface, scene: Scene, index: int, alpha: float = 1.0) -> None:
    """Draw one frame: actors, then objects, then effects."""
    if index < 0 or index >= scene.frame_count:
        return
    frame = scene.frames[index]
    surface.set_alpha(alpha)
    for pose in frame.actors.values():
        draw_stickman(surface, pose)
    for state in frame.objects:
        draw_object(surface, state, scene.catalog)
    draw_effects(surface, frame.effects)
    surface.set_alpha(1.0)


def render_frame(surface: DrawingSurface, scene: Scene, index: int, onion_skin: bool = False) -> None:
    """Clear, lay down neighbouring frames when onion-skinning, then the frame itself."""
    surface.clear()
    if onion_skin:
        if index > 0:
            draw_frame(surface, scene, index - 1, ONION_ALPHA)
        if index < scene.frame_count - 1:
            draw_frame(surface, scene, index + 1, ONION_ALPHA)
    draw_frame(surface, scene, index)
