# stickman/utils.py
import os
import re
import json
import hashlib
from typing import Dict, Any

def ensure_directory(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def save_scene_document(document: Dict[str, Any], output_dir: str = "outputs", prefix: str = "scene") -> str:
    """Write a scene document under <output_dir>/scenes, named by content hash."""
    scenes_dir = os.path.join(output_dir, "scenes")
    ensure_directory(scenes_dir)
    h = hashlib.md5(json.dumps(document, sort_keys=True).encode()).hexdigest()[:8]
    path = os.path.join(scenes_dir, f"{prefix}_{h}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    return path

def clean_filename(text: str, default: str = "scene") -> str:
    """Reduce text to a single path-safe name component."""
    cleaned = re.sub(r"[^A-Za-z0-9_\-]+", "_", text).strip("_")
    return cleaned[:64] or default

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def clamp(value, lo, hi):
    return max(lo, min(hi, value))
