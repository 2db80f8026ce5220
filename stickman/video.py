# stickman/video.py
"""
Offline renderer: plays a scene through the playback engine on a Pillow
surface and writes the frames to a video (mp4) or gif with moviepy.
"""
import logging
import os
from typing import List, Optional, Tuple

import numpy as np
from moviepy import ImageSequenceClip

from .models import CANVAS_HEIGHT, CANVAS_WIDTH, Scene
from .playback import FRAME_INTERVAL_MS, ManualFrameDriver, PlaybackEngine
from .surface import DEFAULT_SIZE, PillowSurface

logger = logging.getLogger(__name__)


def render_frames(scene: Scene, onion_skin: bool = False,
                  size: Tuple[int, int] = DEFAULT_SIZE) -> List[np.ndarray]:
    """
    One RGB array per frame, produced by a single non-looping playthrough.

    The scene is scaled uniformly to fit size.
    """
    scale = min(size[0] / CANVAS_WIDTH, size[1] / CANVAS_HEIGHT)
    surface = PillowSurface(size, scale=scale)
    driver = ManualFrameDriver()
    engine = PlaybackEngine(surface, scene, driver)
    engine.set_onion_skin(onion_skin)

    frames = [surface.to_array()]
    engine.on_frame(lambda i: frames.append(surface.to_array()))
    engine.play(loop=False)
    while engine.is_playing:
        driver.advance(FRAME_INTERVAL_MS)
    return frames


def export_video(scene: Scene, output_filename: Optional[str] = None, onion_skin: bool = False) -> str:
    frames = render_frames(scene, onion_skin=onion_skin)
    if not output_filename:
        output_filename = os.path.join("outputs", "scene_render.mp4")
    out_dir = os.path.dirname(output_filename)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    clip = ImageSequenceClip(frames, fps=scene.fps)
    if output_filename.lower().endswith(".gif"):
        clip.write_gif(output_filename, fps=scene.fps, logger=None)
    else:
        clip.write_videofile(output_filename, fps=scene.fps, codec="libx264", audio=False, logger=None)
    logger.info("wrote %d frames to %s", len(frames), output_filename)
    return output_filename
