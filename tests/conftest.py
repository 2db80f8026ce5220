import pytest

from stickman.config import Settings
from stickman.drawing import DrawingSurface
from stickman.playback import ManualFrameDriver, PlaybackEngine
from stickman.synthesizer import build_throw_scene


class RecordingSurface(DrawingSurface):
    """Surface that records every call instead of drawing."""

    def __init__(self):
        self.ops = []
        self.alpha = 1.0

    def clear(self):
        self.ops.append(("clear",))

    def save(self):
        self.ops.append(("save",))

    def restore(self):
        self.ops.append(("restore",))

    def translate(self, dx, dy):
        self.ops.append(("translate", dx, dy))

    def rotate(self, angle):
        self.ops.append(("rotate", angle))

    def set_alpha(self, alpha):
        self.alpha = alpha
        self.ops.append(("alpha", alpha))

    def line(self, p1, p2, color, width=1):
        self.ops.append(("line", color, self.alpha))

    def circle(self, center, radius, fill=None, outline=None, width=1):
        self.ops.append(("circle", fill or outline, self.alpha))

    def polygon(self, points, fill=None, outline=None, width=1):
        self.ops.append(("polygon", fill or outline, self.alpha))

    def count(self, name):
        return sum(1 for op in self.ops if op[0] == name)

    def reset(self):
        self.ops = []


@pytest.fixture
def scene():
    return build_throw_scene("A throws a vase at B", seed=0)


@pytest.fixture
def document(scene):
    return scene.to_dict()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def driver():
    return ManualFrameDriver()


@pytest.fixture
def engine(surface, scene, driver):
    return PlaybackEngine(surface, scene, driver)


@pytest.fixture
def settings(tmp_path):
    return Settings(scene_url=None, output_dir=str(tmp_path), default_seed=0)
