# stickman/pose.py
"""
Skeleton template, pose interpolation and easing curves.

standing_pose() is a constant anatomical template measured from the pelvis;
the feet rest on the floor line passed in.
"""
import math
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Any

from .models import JOINT_NAMES, Pose, Scene, Vec2
from .utils import lerp

# offsets (dx, dy) from the pelvis pivot
_TEMPLATE: Dict[str, Tuple[float, float]] = {
    "pelvis": (0, 0),
    "hipL": (-10, 5),
    "hipR": (10, 5),
    "kneeL": (-12, 40),
    "kneeR": (12, 40),
    "footL": (-12, 80),
    "footR": (12, 80),
    "neck": (0, -50),
    "head": (0, -65),
    "shoulderL": (-20, -45),
    "shoulderR": (20, -45),
    "elbowL": (-25, -20),
    "elbowR": (25, -20),
    "handL": (-25, 5),
    "handR": (25, 5),
}

# pelvis sits this far above the floor so the feet touch it
PELVIS_HEIGHT = 80.0

BONES: List[Tuple[str, str]] = [
    ("head", "neck"),
    ("neck", "shoulderL"),
    ("neck", "shoulderR"),
    ("shoulderL", "elbowL"),
    ("elbowL", "handL"),
    ("shoulderR", "elbowR"),
    ("elbowR", "handR"),
    ("neck", "pelvis"),
    ("pelvis", "hipL"),
    ("hipL", "kneeL"),
    ("kneeL", "footL"),
    ("pelvis", "hipR"),
    ("hipR", "kneeR"),
    ("kneeR", "footR"),
]


def make_pose(points: Mapping[str, Vec2]) -> Pose:
    return MappingProxyType({name: points[name] for name in JOINT_NAMES})


def standing_pose(center_x: float, floor_y: float) -> Pose:
    pelvis_y = floor_y - PELVIS_HEIGHT
    return make_pose({
        name: Vec2(center_x + dx, pelvis_y + dy) for name, (dx, dy) in _TEMPLATE.items()
    })


def with_joints(pose: Pose, **joints: Vec2) -> Pose:
    """Copy of pose with some joints replaced."""
    points = dict(pose)
    points.update(joints)
    return make_pose(points)


def interpolate_pose(a: Pose, b: Pose, t: float) -> Pose:
    """Linear per-joint blend. t is not clamped; ease it before calling."""
    return make_pose({
        name: Vec2(lerp(a[name].x, b[name].x, t), lerp(a[name].y, b[name].y, t))
        for name in JOINT_NAMES
    })


def ease_in(t: float) -> float:
    return t * t * t


def ease_out(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - ((-2 * t + 2) ** 3) / 2


def _expected_lengths() -> Dict[Tuple[str, str], float]:
    return {
        (j1, j2): math.hypot(_TEMPLATE[j2][0] - _TEMPLATE[j1][0], _TEMPLATE[j2][1] - _TEMPLATE[j1][1])
        for j1, j2 in BONES
    }


def skeleton_deviations(scene: Scene, tolerance_px: float = 2.0) -> List[Dict[str, Any]]:
    """
    List bones whose length differs from the template by more than tolerance_px.

    Stretching is expected in hand-authored poses, so this is a report only.
    """
    expected = _expected_lengths()
    warnings = []
    for frame_index, frame in enumerate(scene.frames):
        for actor, pose in frame.actors.items():
            for (j1, j2), length in expected.items():
                p1, p2 = pose[j1], pose[j2]
                deviation = abs(math.hypot(p2.x - p1.x, p2.y - p1.y) - length)
                if deviation > tolerance_px:
                    warnings.append({
                        "frame": frame_index,
                        "actor": actor,
                        "joint1": j1,
                        "joint2": j2,
                        "deviation": deviation,
                    })
    return warnings
