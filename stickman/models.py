"""Immutable scene data model and its JSON-document form."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

FPS = 12
FRAME_COUNT = 36
CANVAS_WIDTH = 640
CANVAS_HEIGHT = 400

JOINT_NAMES: Tuple[str, ...] = (
    "head", "neck",
    "shoulderL", "shoulderR",
    "elbowL", "elbowR",
    "handL", "handR",
    "pelvis",
    "hipL", "hipR",
    "kneeL", "kneeR",
    "footL", "footR",
)

OBJECT_TYPES = ("rect", "circle", "polygon", "placeholder")
OBJECT_STATUSES = ("idle", "attached", "flying", "destroyed", "fallen")

Pose = Mapping[str, "Vec2"]


def _frozen_mapping(items) -> Mapping:
    return MappingProxyType(dict(items))


def _freeze(value: Any) -> Any:
    """Read-only copy of a JSON value: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Vec2":
        return cls(float(d["x"]), float(d["y"]))


def pose_from_dict(d: Mapping[str, Any]) -> Pose:
    return _frozen_mapping((name, Vec2.from_dict(d[name])) for name in JOINT_NAMES)


def pose_to_dict(pose: Pose) -> Dict[str, Dict[str, float]]:
    return {name: pose[name].to_dict() for name in JOINT_NAMES}


@dataclass(frozen=True)
class SceneObject:
    id: str
    type: str
    color: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    radius: Optional[float] = None
    points: Optional[Tuple[Vec2, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id, "type": self.type}
        for key in ("color", "width", "height", "radius"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        if self.points is not None:
            d["points"] = [p.to_dict() for p in self.points]
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SceneObject":
        points = d.get("points")
        return cls(
            id=d["id"],
            type=d["type"],
            color=d.get("color"),
            width=d.get("width"),
            height=d.get("height"),
            radius=d.get("radius"),
            points=tuple(Vec2.from_dict(p) for p in points) if points is not None else None,
        )


@dataclass(frozen=True)
class FrameObjectState:
    id: str
    position: Vec2
    rotation: float
    status: str
    visible: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "rotation": self.rotation,
            "status": self.status,
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "FrameObjectState":
        return cls(
            id=d["id"],
            position=Vec2.from_dict(d["position"]),
            rotation=float(d["rotation"]),
            status=d["status"],
            visible=bool(d["visible"]),
        )


@dataclass(frozen=True)
class Effect:
    type: str
    position: Vec2
    params: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"type": self.type, "position": self.position.to_dict()}
        if self.params is not None:
            d["params"] = _thaw(self.params)
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Effect":
        params = d.get("params")
        return cls(
            type=d["type"],
            position=Vec2.from_dict(d["position"]),
            params=_freeze(params) if params is not None else None,
        )


@dataclass(frozen=True)
class Frame:
    actors: Mapping[str, Pose] = field(default_factory=lambda: MappingProxyType({}))
    objects: Tuple[FrameObjectState, ...] = ()
    effects: Tuple[Effect, ...] = ()

    def object(self, object_id: str) -> Optional[FrameObjectState]:
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actors": {name: pose_to_dict(pose) for name, pose in self.actors.items()},
            "objects": [o.to_dict() for o in self.objects],
            "effects": [e.to_dict() for e in self.effects],
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Frame":
        return cls(
            actors=_frozen_mapping((name, pose_from_dict(p)) for name, p in d["actors"].items()),
            objects=tuple(FrameObjectState.from_dict(o) for o in d["objects"]),
            effects=tuple(Effect.from_dict(e) for e in d["effects"]),
        )


@dataclass(frozen=True)
class Scene:
    """A complete 36-frame scene. Build one through the synthesizer or parse_scene."""

    frames: Tuple[Frame, ...]
    catalog: Mapping[str, SceneObject]
    fps: int = FPS

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fps": self.fps,
            "frames": [f.to_dict() for f in self.frames],
            "catalog": {oid: obj.to_dict() for oid, obj in self.catalog.items()},
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Scene":
        # No checks here: callers go through stickman.validator.parse_scene.
        return cls(
            frames=tuple(Frame.from_dict(f) for f in d["frames"]),
            catalog=_frozen_mapping((oid, SceneObject.from_dict(o)) for oid, o in d["catalog"].items()),
            fps=int(d["fps"]),
        )
