import pytest

from stickman.models import CANVAS_HEIGHT, CANVAS_WIDTH, FPS, FRAME_COUNT, JOINT_NAMES
from stickman.surface import DEFAULT_SIZE
from stickman.synthesizer import FLOOR_Y, GRAVITY, PROP_ID, SHARD_COUNT, build_throw_scene, shard_id
from stickman.validator import parse_scene

SHARDS = [shard_id(j) for j in range(SHARD_COUNT)]


def _shards(frame):
    return [o for o in frame.objects if o.id in SHARDS]


def test_shape_and_catalog(scene):
    assert scene.fps == FPS
    assert len(scene.frames) == FRAME_COUNT
    assert set(scene.catalog) == {PROP_ID, *SHARDS}
    for frame in scene.frames:
        assert set(frame.actors) == {"A", "B"}
        for pose in frame.actors.values():
            assert set(pose) == set(JOINT_NAMES)


def test_passes_validation(scene):
    assert parse_scene(scene.to_dict()) == scene


def test_same_seed_is_deterministic():
    assert build_throw_scene("Test", 42) == build_throw_scene("Test", 42)
    assert build_throw_scene("Test", 42).to_dict() == build_throw_scene("Test", 42).to_dict()


@pytest.mark.parametrize("s1,s2", [(0, 1), (42, 43), (7, -7), (1, 233281)])
def test_different_seeds_differ(s1, s2):
    assert build_throw_scene("Test", s1).to_dict() != build_throw_scene("Test", s2).to_dict()


def test_prompt_text_is_inert():
    assert build_throw_scene("A throws a vase at B", 5) == build_throw_scene("something else", 5)


def test_prop_attached_to_throwing_hand(scene):
    for i in range(11):
        frame = scene.frames[i]
        vase = frame.object(PROP_ID)
        assert vase.status == "attached"
        assert vase.position == frame.actors["A"]["handR"]
    assert scene.frames[0].actors["A"] != scene.frames[5].actors["A"]
    assert scene.frames[6].actors["A"] == scene.frames[10].actors["A"]


def test_release_and_flight(scene):
    release = scene.frames[11]
    vase = release.object(PROP_ID)
    assert vase.status == "flying"
    assert vase.position == release.actors["A"]["handR"]

    ys = [scene.frames[i].object(PROP_ID).position.y for i in range(11, 17)]
    xs = [scene.frames[i].object(PROP_ID).position.x for i in range(11, 17)]
    assert 4.5 <= xs[1] - xs[0] <= 5.5
    assert -11.0 <= ys[1] - ys[0] <= -9.0
    for k in range(1, len(xs) - 1):
        assert xs[k + 1] - xs[k] == pytest.approx(xs[1] - xs[0])
        assert (ys[k + 1] - ys[k]) - (ys[k] - ys[k - 1]) == pytest.approx(GRAVITY)
    for i in range(12, 17):
        assert scene.frames[i].object(PROP_ID).status == "flying"


@pytest.mark.parametrize("seed", [0, 1, 2, 99, 12345])
def test_impact_frame(seed):
    scene = build_throw_scene("A throws a vase at B", seed)
    f17 = scene.frames[17]
    bangs = [e for e in f17.effects if e.type == "bang"]
    assert len(bangs) == 1
    vase = f17.object(PROP_ID)
    assert vase.status == "destroyed"
    assert vase.visible is False
    assert bangs[0].position == vase.position
    shards = _shards(f17)
    assert len(shards) == 6
    assert all(s.status == "flying" and s.position == bangs[0].position for s in shards)
    assert f17.actors["B"] != scene.frames[16].actors["B"]


def test_no_shards_or_effects_before_impact(scene):
    for i in range(17):
        assert _shards(scene.frames[i]) == []
        assert scene.frames[i].effects == ()
    for i in range(18, 36):
        assert scene.frames[i].effects == ()
        assert scene.frames[i].object(PROP_ID).status == "destroyed"


def test_shards_fall_under_gravity(scene):
    for sid in SHARDS:
        ys = [scene.frames[i].object(sid).position.y for i in (17, 18, 19, 20)]
        assert (ys[3] - ys[2]) - (ys[2] - ys[1]) == pytest.approx(GRAVITY)


@pytest.mark.parametrize("seed", range(30))
def test_shards_reach_floor_by_last_frame(seed):
    scene = build_throw_scene("A throws a vase at B", seed)
    last = _shards(scene.frames[35])
    assert len(last) == 6
    for shard in last:
        assert shard.status == "fallen" or shard.position.y >= FLOOR_Y
    for frame in scene.frames[17:]:
        assert all(s.position.y <= FLOOR_Y for s in _shards(frame))


@pytest.mark.parametrize("seed", [0, 3, 8])
def test_fallen_shards_are_frozen(seed):
    scene = build_throw_scene("A throws a vase at B", seed)
    for sid in SHARDS:
        states = [scene.frames[i].object(sid) for i in range(17, 36)]
        first = next(k for k, s in enumerate(states) if s.status == "fallen")
        assert states[first].position.y == FLOOR_Y
        for s in states[first:]:
            assert s.status == "fallen"
            assert s.position == states[first].position
            assert s.rotation == states[first].rotation


def test_target_recovers_to_idle(scene):
    assert scene.frames[35].actors["B"] == scene.frames[0].actors["B"]
    assert scene.frames[21].actors["B"] == scene.frames[25].actors["B"]
    assert scene.frames[20].actors["B"] == scene.frames[21].actors["B"]


@pytest.mark.parametrize("seed", [0, 1, 42, -7])
def test_everything_stays_on_the_canvas(seed):
    scene = build_throw_scene("A throws a vase at B", seed=seed)
    points = []
    for frame in scene.frames:
        for pose in frame.actors.values():
            points.extend(pose.values())
        points.extend(state.position for state in frame.objects if state.visible)
    assert all(0 <= p.x <= CANVAS_WIDTH and 0 <= p.y <= CANVAS_HEIGHT for p in points)
    assert DEFAULT_SIZE == (CANVAS_WIDTH, CANVAS_HEIGHT)
