# stickman/synthesizer.py
"""
Procedural throw choreography.

build_throw_scene(text, seed) returns a 36-frame scene in which actor A throws
a vase at actor B. The vase breaks on B's head into six shards that fall to
the floor. Frame indices of every phase are fixed; the seed only jitters the
throw velocity and the shard scatter.
"""
import logging
import math
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from .models import (
    FRAME_COUNT, FPS, Effect, Frame, FrameObjectState, Pose, Scene, SceneObject, Vec2,
)
from .pose import (
    PELVIS_HEIGHT, ease_in_out, ease_out, interpolate_pose, standing_pose, with_joints,
)
from .random_source import SeededRandom

logger = logging.getLogger(__name__)

FLOOR_Y = 360.0
GRAVITY = 0.9  # px / frame^2

A_X = 120.0
B_X = 320.0

PROP_ID = "vase01"
SHARD_COUNT = 6
PROP_COLOR = "#8B4513"

BASE_THROW_VELOCITY = (5.0, -10.0)
THROW_JITTER = (0.5, 1.0)

# phase boundaries (inclusive)
ATTACH_END = 5
WINDUP_END = 10
RELEASE = 11
FLIGHT_END = 16
IMPACT = 17
STUMBLE_END = 20
HOLD_END = 25

_SHARD_OUTLINES = [
    [(-3, -3), (3, -2), (1, 3), (-2, 2)],
    [(-2, -4), (4, -1), (2, 2), (-3, 1)],
    [(-4, -2), (2, -3), (3, 2), (-1, 3)],
    [(-3, -1), (1, -3), (3, 1), (0, 3)],
    [(-2, -2), (3, -3), (2, 3), (-3, 2)],
    [(-1, -4), (4, 0), (1, 3), (-2, 1)],
]


def shard_id(index: int) -> str:
    return f"{PROP_ID}_shard{index}"


def _actor_poses() -> Dict[str, Pose]:
    py = FLOOR_Y - PELVIS_HEIGHT
    a_idle = standing_pose(A_X, FLOOR_Y)
    b_idle = standing_pose(B_X, FLOOR_Y)
    b_hit = with_joints(
        b_idle,
        head=Vec2(B_X + 6, py - 63),
        neck=Vec2(B_X + 3, py - 49),
    )
    return {
        "a_idle": a_idle,
        "a_windup": with_joints(
            a_idle,
            shoulderR=Vec2(A_X + 15, py - 55),
            elbowR=Vec2(A_X + 5, py - 65),
            handR=Vec2(A_X - 10, py - 60),
        ),
        "a_throw": with_joints(
            a_idle,
            shoulderR=Vec2(A_X + 20, py - 45),
            elbowR=Vec2(A_X + 35, py - 35),
            handR=Vec2(A_X + 50, py - 30),
        ),
        "b_idle": b_idle,
        "b_hit": b_hit,
        "b_stumble": with_joints(
            b_hit,
            pelvis=Vec2(B_X + 6, py + 4),
            hipL=Vec2(B_X - 4, py + 9),
            hipR=Vec2(B_X + 16, py + 9),
            footL=Vec2(B_X - 8, FLOOR_Y),
            footR=Vec2(B_X + 22, FLOOR_Y),
        ),
    }


def _pose_for_a(i: int, poses: Dict[str, Pose]) -> Pose:
    if i <= ATTACH_END:
        return interpolate_pose(poses["a_idle"], poses["a_windup"], ease_in_out(i / ATTACH_END) * 0.3)
    if i <= WINDUP_END:
        return poses["a_windup"]
    if i == RELEASE:
        return poses["a_throw"]
    if i <= FLIGHT_END:
        t = (i - (RELEASE + 1)) / (FLIGHT_END - RELEASE - 1)
        return interpolate_pose(poses["a_throw"], poses["a_idle"], ease_out(t))
    return poses["a_idle"]


def _pose_for_b(i: int, poses: Dict[str, Pose]) -> Pose:
    if i < IMPACT:
        return poses["b_idle"]
    if i == IMPACT:
        return poses["b_hit"]
    if i <= STUMBLE_END:
        return interpolate_pose(poses["b_hit"], poses["b_stumble"], (i - IMPACT) / (STUMBLE_END - IMPACT))
    if i <= HOLD_END:
        return poses["b_stumble"]
    t = (i - (HOLD_END + 1)) / (FRAME_COUNT - 1 - (HOLD_END + 1))
    return interpolate_pose(poses["b_stumble"], poses["b_idle"], ease_out(t))


class _Body:
    """Point mass integrated once per frame: position, then velocity."""

    def __init__(self, x: float, y: float, vx: float, vy: float, rotation: float = 0.0, spin: float = 0.0):
        self.x, self.y = x, y
        self.vx, self.vy = vx, vy
        self.rotation = rotation
        self.spin = spin
        self.fallen = False

    def step(self, floor_y: Optional[float] = None) -> None:
        if self.fallen:
            return
        self.x += self.vx
        self.y += self.vy
        self.vy += GRAVITY
        self.rotation += self.spin
        if floor_y is not None and self.y >= floor_y:
            self.y = floor_y
            self.fallen = True

    @property
    def position(self) -> Vec2:
        return Vec2(self.x, self.y)


def _spawn_shards(rng: SeededRandom, impact: Vec2) -> List[_Body]:
    shards = []
    for _ in range(SHARD_COUNT):
        rotation = rng.range(0, math.pi * 2)
        # screen y grows downward: the burst scatters sideways and down
        angle = rng.range(0.15 * math.pi, 0.85 * math.pi)
        speed = rng.range(2.0, 5.0)
        spin = rng.range(-0.6, 0.6)
        shards.append(_Body(impact.x, impact.y, math.cos(angle) * speed, math.sin(angle) * speed, rotation, spin))
    return shards


def _catalog() -> Dict[str, SceneObject]:
    catalog = {PROP_ID: SceneObject(id=PROP_ID, type="placeholder", color=PROP_COLOR)}
    for j, outline in enumerate(_SHARD_OUTLINES):
        sid = shard_id(j)
        catalog[sid] = SceneObject(
            id=sid,
            type="polygon",
            color=PROP_COLOR,
            points=tuple(Vec2(float(x), float(y)) for x, y in outline),
        )
    return catalog


def build_throw_scene(text: str, seed: int = 0) -> Scene:
    """
    Build the throw scene for a prompt and a seed.

    The prompt is accepted for later prompt-conditioned generation and does not
    change the result: identical seeds give identical scenes.
    """
    logger.debug("building throw scene (seed=%s, prompt=%r)", seed, text)
    rng = SeededRandom(seed)
    poses = _actor_poses()

    throw_v: Tuple[float, float] = (
        BASE_THROW_VELOCITY[0] + rng.range(-THROW_JITTER[0], THROW_JITTER[0]),
        BASE_THROW_VELOCITY[1] + rng.range(-THROW_JITTER[1], THROW_JITTER[1]),
    )
    impact = poses["b_idle"]["head"]
    vase = None
    shards: List[_Body] = []

    frames = []
    for i in range(FRAME_COUNT):
        a_pose = _pose_for_a(i, poses)
        actors = {"A": a_pose, "B": _pose_for_b(i, poses)}
        objects: List[FrameObjectState] = []
        effects: List[Effect] = []

        if i < RELEASE:
            objects.append(FrameObjectState(PROP_ID, a_pose["handR"], 0.0, "attached", True))
        elif i == RELEASE:
            hand = a_pose["handR"]
            vase = _Body(hand.x, hand.y, throw_v[0], throw_v[1], spin=0.3)
            objects.append(FrameObjectState(PROP_ID, vase.position, vase.rotation, "flying", True))
        elif i < IMPACT:
            vase.step()
            objects.append(FrameObjectState(PROP_ID, vase.position, vase.rotation, "flying", True))
        else:
            objects.append(FrameObjectState(PROP_ID, impact, 0.0, "destroyed", False))

        if i == IMPACT:
            effects.append(Effect("bang", impact, MappingProxyType({"rays": 8, "radius": 20})))
            shards = _spawn_shards(rng, impact)
        elif i > IMPACT:
            for shard in shards:
                shard.step(FLOOR_Y)

        for j, shard in enumerate(shards):
            status = "fallen" if shard.fallen else "flying"
            objects.append(FrameObjectState(shard_id(j), shard.position, shard.rotation, status, True))

        frames.append(Frame(
            actors=MappingProxyType(actors),
            objects=tuple(objects),
            effects=tuple(effects),
        ))

    return Scene(frames=tuple(frames), catalog=MappingProxyType(_catalog()), fps=FPS)
