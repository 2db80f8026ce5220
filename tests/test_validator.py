import json

import pytest

from stickman.errors import ReferentialIntegrityError, SceneImportError, SceneValidationError
from stickman.models import Scene
from stickman.validator import check_scene, export_scene, parse_scene


def _empty_document():
    return {
        "fps": 12,
        "frames": [{"actors": {}, "objects": [], "effects": []} for _ in range(36)],
        "catalog": {},
    }


def _paths(err):
    return [path for path, _ in err.violations]


def test_valid_document_parses(document):
    scene = parse_scene(document)
    assert isinstance(scene, Scene)
    assert scene.frame_count == 36


def test_minimal_empty_scene_is_valid():
    assert parse_scene(_empty_document()).frame_count == 36


def test_json_text_is_accepted(scene):
    assert parse_scene(export_scene(scene)) == scene
    assert parse_scene(export_scene(scene).encode("utf-8")) == scene


def test_export_is_indented_json(scene):
    text = export_scene(scene)
    assert text.startswith("{\n  ")
    assert json.loads(text)["fps"] == 12


@pytest.mark.parametrize("count", [0, 35, 37])
def test_rejects_wrong_frame_count(document, count):
    frames = document["frames"]
    document["frames"] = (frames * 2)[:count]
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    assert "frames" in _paths(exc.value)
    assert str(exc.value)


@pytest.mark.parametrize("fps", [24, 0, "12", True, None])
def test_rejects_wrong_fps(document, fps):
    document["fps"] = fps
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    assert "fps" in _paths(exc.value)


def test_collects_all_structural_problems(document):
    document["fps"] = 24
    document["frames"] = document["frames"][:35]
    document["frames"][2]["objects"][0]["status"] = "exploded"
    del document["frames"][4]["actors"]["A"]["footR"]
    document["catalog"]["vase01"]["type"] = "hexagon"
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    paths = _paths(exc.value)
    assert "fps" in paths
    assert "frames" in paths
    assert "frames.2.objects.0.status" in paths
    assert "frames.4.actors.A" in paths
    assert "catalog.vase01.type" in paths
    assert "footR" in str(exc.value)


def test_rejects_unknown_joint(document):
    document["frames"][0]["actors"]["A"]["tail"] = {"x": 0, "y": 0}
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    assert "frames.0.actors.A" in _paths(exc.value)


def test_rejects_wrong_types(document):
    document["frames"][1]["objects"][0]["visible"] = "yes"
    document["frames"][1]["objects"][0]["position"]["x"] = "10"
    document["frames"][1]["effects"] = {}
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    paths = _paths(exc.value)
    assert "frames.1.objects.0.visible" in paths
    assert "frames.1.objects.0.position.x" in paths
    assert "frames.1.effects" in paths


def test_rejects_catalog_key_mismatch(document):
    document["catalog"]["vase01"]["id"] = "vase02"
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    assert "catalog.vase01.id" in _paths(exc.value)


def test_rejects_unknown_object_reference():
    doc = _empty_document()
    doc["frames"][3]["objects"].append(
        {"id": "ghost", "position": {"x": 0, "y": 0}, "rotation": 0, "status": "idle", "visible": True}
    )
    doc["frames"][9]["objects"].append(
        {"id": "ghost", "position": {"x": 1, "y": 1}, "rotation": 0, "status": "idle", "visible": True}
    )
    with pytest.raises(ReferentialIntegrityError) as exc:
        parse_scene(doc)
    assert exc.value.missing_refs == [(3, "ghost"), (9, "ghost")]
    assert exc.value.violations == []
    assert "frames.3" in str(exc.value) and "ghost" in str(exc.value)

    doc["catalog"]["ghost"] = {"id": "ghost", "type": "circle", "radius": 4}
    scene = parse_scene(doc)
    assert scene.catalog["ghost"].radius == 4


def test_missing_catalog_entry_in_synthesized_scene(document):
    del document["catalog"]["vase01_shard3"]
    with pytest.raises(ReferentialIntegrityError) as exc:
        parse_scene(document)
    assert exc.value.missing_refs == [(i, "vase01_shard3") for i in range(17, 36)]


def test_structural_and_referential_reported_together(document):
    document["fps"] = 30
    del document["catalog"]["vase01"]
    with pytest.raises(SceneValidationError) as exc:
        parse_scene(document)
    assert not isinstance(exc.value, ReferentialIntegrityError)
    assert "fps" in _paths(exc.value)
    assert (0, "vase01") in exc.value.missing_refs
    assert len(exc.value.messages()) == 1 + 36


def test_malformed_json_is_an_import_error():
    with pytest.raises(SceneImportError):
        parse_scene("{not json")


def test_non_object_document():
    with pytest.raises(SceneValidationError) as exc:
        parse_scene([1, 2, 3])
    assert "<root>" in _paths(exc.value)


def test_check_scene(document):
    ok, scene, errors = check_scene(document)
    assert ok and scene is not None and errors == []

    ok, scene, errors = check_scene("{")
    assert not ok and scene is None and errors[0].startswith("Invalid JSON")

    document["fps"] = 1
    ok, scene, errors = check_scene(document)
    assert not ok and scene is None
    assert any(e.startswith("fps:") for e in errors)


def test_deeply_nested_json_is_an_import_error():
    with pytest.raises(SceneImportError):
        parse_scene("[" * 200000 + "]" * 200000)


def test_bytes_must_be_valid_utf8(document):
    document["catalog"]["vase01"]["color"] = "rXd"
    raw = json.dumps(document).encode("utf-8").replace(b'"rXd"', b'"r\xffd"')
    with pytest.raises(SceneImportError, match="UTF-8"):
        parse_scene(raw)
    assert parse_scene(raw.replace(b"\xff", b"e")).catalog["vase01"].color == "red"


def test_many_unknown_references_keep_document_order():
    doc = _empty_document()
    ids = [f"ghost{n}" for n in range(20000)]
    doc["frames"][0]["objects"] = [
        {"id": oid, "position": {"x": 0, "y": 0}, "rotation": 0, "status": "idle", "visible": True}
        for oid in ids + ids
    ]
    with pytest.raises(ReferentialIntegrityError) as exc:
        parse_scene(doc)
    assert exc.value.missing_refs == [(0, oid) for oid in ids]


def test_effect_params_are_read_only_all_the_way_down(document):
    document["frames"][17]["effects"][0]["params"]["palette"] = {"colors": ["#FF6600", "#FFFF00"]}
    scene = parse_scene(document)
    params = scene.frames[17].effects[0].params
    with pytest.raises(TypeError):
        params["palette"]["colors"] = []
    with pytest.raises(AttributeError):
        params["palette"]["colors"].append("#000000")
    assert params["palette"]["colors"] == ("#FF6600", "#FFFF00")
    assert scene.to_dict() == document
