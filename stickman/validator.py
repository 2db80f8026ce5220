#!/usr/bin/env python3
"""
Scene validator using the JSON Schema at stickman/scene_schema.json.

Functions:
- load_schema() -> dict
- parse_scene(obj_or_text) -> Scene            (raises SceneError subclasses)
- check_scene(obj_or_text) -> (is_valid, scene_or_none, errors)
- export_scene(scene) -> str

Usage:
  from stickman.validator import parse_scene
  scene = parse_scene(maybe_json_text)
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Set, Tuple

from jsonschema import Draft7Validator

from .errors import ReferentialIntegrityError, SceneError, SceneImportError, SceneValidationError
from .models import Scene

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "scene_schema.json"

def load_schema() -> dict:
    with _SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)

_SCHEMA = load_schema()
_VALIDATOR = Draft7Validator(_SCHEMA)

def _path(parts) -> str:
    return ".".join(str(p) for p in parts) or "<root>"

def _decode(obj_or_text: Any) -> Any:
    if isinstance(obj_or_text, (bytes, bytearray)):
        try:
            obj_or_text = obj_or_text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SceneImportError(f"Invalid UTF-8: {e}") from e
    if isinstance(obj_or_text, str):
        try:
            return json.loads(obj_or_text)
        except (ValueError, RecursionError) as e:
            raise SceneImportError(f"Invalid JSON: {e}") from e
    return obj_or_text

def _structural_violations(doc: Any) -> List[Tuple[str, str]]:
    violations = [(_path(e.absolute_path), e.message) for e in _VALIDATOR.iter_errors(doc)]
    catalog = doc.get("catalog") if isinstance(doc, Mapping) else None
    if isinstance(catalog, Mapping):
        for key, entry in catalog.items():
            if isinstance(entry, Mapping) and isinstance(entry.get("id"), str) and entry["id"] != key:
                violations.append((f"catalog.{key}.id", f"{entry['id']!r} does not match its catalog key {key!r}"))
    return violations

def _missing_references(doc: Any) -> List[Tuple[int, str]]:
    """(frame index, id) pairs whose id is absent from the catalog, in document order."""
    if not isinstance(doc, Mapping) or not isinstance(doc.get("frames"), list):
        return []
    catalog = doc.get("catalog")
    known = set(catalog.keys()) if isinstance(catalog, Mapping) else set()
    missing: List[Tuple[int, str]] = []
    seen: Set[Tuple[int, str]] = set()
    for i, frame in enumerate(doc["frames"]):
        objects = frame.get("objects") if isinstance(frame, Mapping) else None
        if not isinstance(objects, list):
            continue
        for obj in objects:
            oid = obj.get("id") if isinstance(obj, Mapping) else None
            if isinstance(oid, str) and oid not in known and (i, oid) not in seen:
                seen.add((i, oid))
                missing.append((i, oid))
    return missing

def parse_scene(obj_or_text: Any) -> Scene:
    """
    Validate a scene document (mapping or JSON text) and return the typed Scene.

    Every structural violation and every unknown object reference found in
    the document is reported in a single exception.
    """
    doc = _decode(obj_or_text)
    try:
        violations = _structural_violations(doc)
    except RecursionError as e:
        raise SceneImportError("Scene document is nested too deeply") from e
    missing = _missing_references(doc)
    if violations:
        logger.info("scene rejected: %d violation(s), %d unknown reference(s)", len(violations), len(missing))
        raise SceneValidationError(violations, missing)
    if missing:
        logger.info("scene rejected: %d unknown reference(s)", len(missing))
        raise ReferentialIntegrityError(missing)
    try:
        return Scene.from_dict(doc)
    except RecursionError as e:
        raise SceneImportError("Scene document is nested too deeply") from e

def check_scene(obj_or_text: Any) -> Tuple[bool, Optional[Scene], List[str]]:
    """
    Non-raising variant of parse_scene.

    Returns:
      (is_valid, scene_or_none, errors_list)
    """
    try:
        return True, parse_scene(obj_or_text), []
    except SceneValidationError as e:
        return False, None, e.messages()
    except SceneError as e:
        return False, None, [str(e)]

def export_scene(scene: Scene, indent: int = 2) -> str:
    return json.dumps(scene.to_dict(), indent=indent)
