"""
Shared fixtures for Canvas Node Editor tests.

Provides a deterministic text metrics fake, editors with and without
plugins, and in-memory image sources.
"""
import sys
import os
import pytest

# Headless Qt for CI and local runs alike
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Text metrics fake ───────────────────────────────────────────────────

class FixedWidthMetrics:
    """Every character is char_width pixels wide, ascent is 80% of size."""

    def __init__(self, char_width=10):
        self.char_width = char_width

    def width(self, text, family, size, weight='normal'):
        return float(len(text) * self.char_width)

    def ascent(self, family, size, weight='normal'):
        return size * 0.8


@pytest.fixture
def metrics():
    """Fixed 10px-per-character metrics"""
    return FixedWidthMetrics()


# ── Editors ─────────────────────────────────────────────────────────────

@pytest.fixture
def editor(qapp, metrics):
    """800x600 editor without plugins"""
    from components.canvas_editor import CanvasEditor
    return CanvasEditor(800, 600, text_metrics=metrics)


@pytest.fixture
def text_plugin():
    from components.plugins import TextEditorPlugin
    return TextEditorPlugin()


@pytest.fixture
def editing_editor(editor, text_plugin):
    """Editor with the text editing plugin registered"""
    editor.use(text_plugin)
    yield editor
    editor.remove_plugin(text_plugin)


# ── Images ──────────────────────────────────────────────────────────────

def make_qimage(width, height, color=(255, 0, 0, 255)):
    """Solid-color RGBA QImage built through numpy"""
    import numpy as np
    from services.image_loader import array_to_qimage
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[:, :] = color
    return array_to_qimage(arr)


@pytest.fixture
def image_factory(qapp):
    """Build ready ImageSources: image_factory(width, height, color=...)"""
    from services.image_loader import ImageSource

    def _make(width, height, color=(255, 0, 0, 255)):
        return ImageSource.from_qimage(make_qimage(width, height, color))
    return _make


@pytest.fixture
def image_file(tmp_path):
    """Write a 40x20 PNG with PIL and return its path"""
    from PIL import Image
    path = tmp_path / "sample.png"
    Image.new('RGBA', (40, 20), (0, 128, 255, 255)).save(path)
    return str(path)
