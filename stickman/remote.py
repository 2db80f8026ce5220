# stickman/remote.py
"""
Scene source selection: a configured remote scene service, or the local
throw synthesizer. Remote replies go through parse_scene like any import.
"""
import logging
from typing import Optional

import requests

from .config import Settings, load_settings
from .errors import SceneImportError
from .models import Scene
from .synthesizer import build_throw_scene
from .validator import parse_scene

logger = logging.getLogger(__name__)


def fetch_remote_scene(url: str, prompt: str, timeout: float = 10.0) -> Scene:
    try:
        resp = requests.post(url, json={"prompt": prompt}, timeout=timeout)
    except requests.RequestException as e:
        raise SceneImportError(f"scene service request failed: {e}") from e
    if not resp.ok:
        raise SceneImportError(f"scene service request failed: {resp.status_code} {resp.reason}")
    return parse_scene(resp.text)


def generate_scene_from_prompt(prompt: str, seed: Optional[int] = None,
                               settings: Optional[Settings] = None) -> Scene:
    settings = settings or load_settings()
    if settings.scene_url:
        logger.info("requesting scene from %s", settings.scene_url)
        return fetch_remote_scene(settings.scene_url, prompt, timeout=settings.request_timeout)
    return build_throw_scene(prompt, settings.default_seed if seed is None else seed)
