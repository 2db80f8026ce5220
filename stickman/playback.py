# stickman/playback.py
"""
Playback engine: a Paused/Playing controller over one scene's 36 frames.

Time comes from a FrameDriver that calls the engine back once per display
refresh (the role requestAnimationFrame plays in a browser). Logical frames
advance on a fixed 1000/12 ms step regardless of how often the driver calls.

The engine is single-threaded. Its mutable state (current frame, play and
loop flags, listeners) belongs to whoever owns the instance; scenes passed
in are immutable values.
"""
import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, List, Optional

from .drawing import DrawingSurface, render_frame
from .models import FPS, Scene
from .utils import clamp

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 1000.0 / FPS

FrameListener = Callable[[int], None]
DriverCallback = Callable[[float], None]


class FrameDriver(ABC):
    """Source of per-refresh callbacks, each carrying a timestamp in ms."""

    @abstractmethod
    def now(self) -> float: ...

    @abstractmethod
    def request(self, callback: DriverCallback) -> int:
        """Schedule callback for the next refresh; returns a handle for cancel()."""

    @abstractmethod
    def cancel(self, handle: int) -> None: ...


class ManualFrameDriver(FrameDriver):
    """Driver whose clock only moves when advance() is called. Used offline and in tests."""

    def __init__(self, start_ms: float = 0.0):
        self._clock = start_ms
        self._next_handle = 1
        self._pending: Dict[int, DriverCallback] = {}

    def now(self) -> float:
        return self._clock

    def request(self, callback: DriverCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, elapsed_ms: float) -> None:
        """Move the clock and fire the callbacks that were pending at this refresh."""
        self._clock += elapsed_ms
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(self._clock)

    def run(self, duration_ms: float, step_ms: float = 1000.0 / 60) -> None:
        """Fire refreshes every step_ms for duration_ms (a 60 Hz display by default)."""
        elapsed = 0.0
        while elapsed + step_ms <= duration_ms + 1e-9:
            self.advance(step_ms)
            elapsed += step_ms


class PlaybackState(Enum):
    PAUSED = "paused"
    PLAYING = "playing"


class PlaybackEngine:
    def __init__(self, surface: DrawingSurface, scene: Scene, driver: Optional[FrameDriver] = None):
        self.surface = surface
        self.driver = driver or ManualFrameDriver()
        self._scene = scene
        self._current = 0
        self._state = PlaybackState.PAUSED
        self._loop = False
        self._onion_skin = False
        self._accumulator = 0.0
        self._last_time = 0.0
        self._pending: Optional[int] = None
        self._listeners: List[FrameListener] = []
        self._redraw()

    # --- read-only state ---

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def current_frame(self) -> int:
        return self._current

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def onion_skin(self) -> bool:
        return self._onion_skin

    @property
    def last_frame(self) -> int:
        return self._scene.frame_count - 1

    # --- operations ---

    def play(self, loop: bool = False) -> None:
        self._loop = loop
        if self.is_playing:
            return
        self._state = PlaybackState.PLAYING
        self._accumulator = 0.0
        self._last_time = self.driver.now()
        self._pending = self.driver.request(self._on_refresh)
        logger.debug("play (loop=%s) from frame %d", loop, self._current)

    def pause(self) -> None:
        if self._pending is not None:
            self.driver.cancel(self._pending)
            self._pending = None
        if self.is_playing:
            logger.debug("pause at frame %d", self._current)
        self._state = PlaybackState.PAUSED
        self._accumulator = 0.0

    def goto(self, index: float) -> None:
        """Show a frame; out-of-range requests (infinities included) are clamped, NaN means 0."""
        if math.isnan(index):
            index = 0
        self._show(int(clamp(index, 0, self.last_frame)))

    def set_scene(self, scene: Scene) -> None:
        self._scene = scene
        self._accumulator = 0.0
        self._show(0)

    def set_onion_skin(self, enabled: bool) -> None:
        self._onion_skin = bool(enabled)
        self._redraw()

    def on_frame(self, listener: FrameListener) -> Callable[[], None]:
        """Register a frame-change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def tick(self, elapsed_ms: float) -> int:
        """
        Feed elapsed wall time while playing; returns how many frames advanced.

        Whole intervals are taken off the accumulator one at a time and the
        remainder carries over to the next call.
        """
        if not self.is_playing:
            return 0
        self._accumulator += max(0.0, elapsed_ms)
        advanced = 0
        while self.is_playing and self._accumulator >= FRAME_INTERVAL_MS:
            self._accumulator -= FRAME_INTERVAL_MS
            self._advance()
            advanced += 1
        return advanced

    # --- internals ---

    def _on_refresh(self, timestamp: float) -> None:
        self._pending = None
        if not self.is_playing:
            return
        elapsed = timestamp - self._last_time
        self._last_time = timestamp
        self.tick(elapsed)
        if self.is_playing:
            self._pending = self.driver.request(self._on_refresh)

    def _advance(self) -> None:
        if self._current < self.last_frame:
            self._show(self._current + 1)
            if self._current == self.last_frame and not self._loop:
                self.pause()
        elif self._loop:
            self._show(0)
        else:
            self.pause()

    def _show(self, index: int) -> None:
        self._current = index
        self._redraw()
        for listener in list(self._listeners):
            listener(index)

    def _redraw(self) -> None:
        render_frame(self.surface, self._scene, self._current, self._onion_skin)
