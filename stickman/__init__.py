"""
Stickman: deterministic two-actor throw scenes, strict scene validation and
frame-accurate playback.

Usage:
    from stickman import build_throw_scene, parse_scene, PlaybackEngine, PillowSurface

    scene = build_throw_scene("A throws a vase at B", seed=7)
    engine = PlaybackEngine(PillowSurface(), scene)
    engine.play(loop=True)
"""

from .errors import SceneError, SceneImportError, SceneValidationError, ReferentialIntegrityError
from .models import Scene, Frame, FrameObjectState, SceneObject, Effect, Vec2, JOINT_NAMES
from .random_source import SeededRandom
from .pose import standing_pose, interpolate_pose, ease_in, ease_out, ease_in_out
from .synthesizer import build_throw_scene
from .validator import parse_scene, check_scene, export_scene
from .drawing import DrawingSurface
from .playback import PlaybackEngine, PlaybackState, FrameDriver, ManualFrameDriver
from .surface import PillowSurface
from .session import EditorSession

__all__ = [
    'SceneError', 'SceneImportError', 'SceneValidationError', 'ReferentialIntegrityError',
    'Scene', 'Frame', 'FrameObjectState', 'SceneObject', 'Effect', 'Vec2', 'JOINT_NAMES',
    'SeededRandom',
    'standing_pose', 'interpolate_pose', 'ease_in', 'ease_out', 'ease_in_out',
    'build_throw_scene',
    'parse_scene', 'check_scene', 'export_scene',
    'DrawingSurface',
    'PlaybackEngine', 'PlaybackState', 'FrameDriver', 'ManualFrameDriver',
    'PillowSurface',
    'EditorSession',
]
