# stickman/session.py
"""
Editor session: owns the current scene and the playback engine.

Generating or importing a scene pauses playback and rewinds to frame 0.
A failed import leaves the current scene in place and hands back the error
text for display.
"""
import logging
from typing import Optional

from .config import Settings, load_settings
from .drawing import DrawingSurface
from .errors import SceneError
from .models import Scene
from .playback import FrameDriver, PlaybackEngine
from .remote import generate_scene_from_prompt
from .synthesizer import build_throw_scene
from .utils import clean_filename, save_scene_document
from .validator import export_scene, parse_scene

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "A throws a vase at B"


class EditorSession:
    def __init__(self, surface: DrawingSurface, driver: Optional[FrameDriver] = None,
                 settings: Optional[Settings] = None, scene: Optional[Scene] = None):
        self.settings = settings or load_settings()
        scene = scene or build_throw_scene(DEFAULT_PROMPT, self.settings.default_seed)
        self.engine = PlaybackEngine(surface, scene, driver)
        self.loop = True
        self.last_error: Optional[str] = None

    @property
    def scene(self) -> Scene:
        return self.engine.scene

    def _replace(self, scene: Scene) -> None:
        self.engine.pause()
        self.engine.set_scene(scene)

    def generate(self, text: str, seed: Optional[int] = None) -> Scene:
        scene = generate_scene_from_prompt(text, seed, self.settings)
        self._replace(scene)
        self.last_error = None
        return scene

    def import_json(self, text) -> Optional[str]:
        """Load a scene from JSON text. Returns None on success, else the error message."""
        try:
            scene = parse_scene(text)
        except SceneError as e:
            logger.warning("import rejected: %s", e)
            self.last_error = str(e)
            return self.last_error
        self._replace(scene)
        self.last_error = None
        return None

    def export_json(self) -> str:
        return export_scene(self.scene)

    def save(self, prefix: str = "scene") -> str:
        return save_scene_document(self.scene.to_dict(), self.settings.output_dir, prefix=clean_filename(prefix))

    # playback controls

    def toggle_play(self) -> bool:
        if self.engine.is_playing:
            self.engine.pause()
        else:
            self.engine.play(self.loop)
        return self.engine.is_playing

    def set_loop(self, loop: bool) -> None:
        self.loop = loop
        if self.engine.is_playing:
            self.engine.play(loop)

    def set_onion_skin(self, enabled: bool) -> None:
        self.engine.set_onion_skin(enabled)

    def step(self, delta: int) -> int:
        self.engine.goto(self.engine.current_frame + delta)
        return self.engine.current_frame
