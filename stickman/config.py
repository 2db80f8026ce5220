# stickman/config.py
"""
Runtime settings read from the environment (and a .env file when present).

    STICKMAN_SCENE_URL        remote scene service; empty -> local synthesizer
    STICKMAN_REQUEST_TIMEOUT  seconds, default 10
    STICKMAN_OUTPUT_DIR       default "outputs"
    STICKMAN_DEFAULT_SEED     default 0
    STICKMAN_LOG_LEVEL        default INFO
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv, find_dotenv


@dataclass(frozen=True)
class Settings:
    scene_url: Optional[str] = None
    request_timeout: float = 10.0
    output_dir: str = "outputs"
    default_seed: int = 0
    log_level: str = "INFO"


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        env_path = find_dotenv(usecwd=True)
        if env_path:
            load_dotenv(env_path)
    return Settings(
        scene_url=os.getenv("STICKMAN_SCENE_URL") or None,
        request_timeout=float(os.getenv("STICKMAN_REQUEST_TIMEOUT", "10")),
        output_dir=os.getenv("STICKMAN_OUTPUT_DIR", "outputs"),
        default_seed=int(os.getenv("STICKMAN_DEFAULT_SEED", "0")),
        log_level=os.getenv("STICKMAN_LOG_LEVEL", "INFO").upper(),
    )
