"""
Tests for CanvasEditor: node collection, plugin routing, background,
rendering and export

Tests cover:
- add/remove/activate/reset semantics
- Plugin hook order, capture and key consumption
- Async image add (success and decode failure)
- Cover-fit background and placeholder background
- Chrome-free rendering and PNG/JPEG export
"""
import gc
import io
import pytest
from unittest.mock import MagicMock
from PIL import Image

from components.canvas_editor import CanvasEditor, EditorOptions
from components.input_events import KeyEvent, PointerEvent
from components.plugins import CanvasEditorPlugin
from models.nodes import ImageNode, TextNode
from services.export import ExportError, save_image


class RecordingPlugin(CanvasEditorPlugin):
    """Logs hook calls; optionally consumes presses and keys."""

    def __init__(self, capture=False, consume_keys=False):
        self.calls = []
        self.capture = capture
        self.consume_keys = consume_keys

    def init(self, editor):
        super().init(editor)
        self.calls.append('init')

    def destroy(self):
        self.calls.append('destroy')

    def on_add_node(self, node, editor):
        self.calls.append('add')

    def on_remove_node(self, node, editor):
        self.calls.append('remove')

    def on_pointer_capture(self, event, editor):
        self.calls.append('capture')
        return self.capture

    def on_pointer_down(self, event, editor):
        self.calls.append('down')

    def on_key_press(self, event, editor):
        self.calls.append('key')
        return self.consume_keys


def pixel(image, x, y):
    color = image.pixelColor(x, y)
    return color.red(), color.green(), color.blue()


# ══════════════════════════════════════════════════════════════════════════
# Node collection
# ══════════════════════════════════════════════════════════════════════════

class TestNodes:

    def test_add_makes_active(self, editor, metrics):
        node = editor.add_node(TextNode("a", metrics=metrics))
        assert editor.nodes == [node]
        assert editor.active_node is node
        assert editor.has_selection()

    def test_remove_absent_node_is_noop(self, editor, metrics):
        editor.add_text("a")
        editor.remove_node(TextNode("other", metrics=metrics))
        assert len(editor.nodes) == 1

    def test_remove_active_clears_selection(self, editor):
        node = editor.add_text("a")
        editor.remove_node(node)
        assert editor.active_node is None
        assert editor.nodes == []

    def test_activate_foreign_node_raises(self, editor, metrics):
        with pytest.raises(ValueError):
            editor.set_active_node(TextNode("x", metrics=metrics))

    def test_add_text_at_point(self, editor):
        node = editor.add_text("abcd", 100, 50)
        center = node.get_center()
        assert (center.x, center.y) == (100, 50)

    def test_text_nodes_filter(self, editor, image_factory):
        text = editor.add_text("a")
        editor.add_image(image_factory(10, 10))
        assert editor.text_nodes() == [text]
        assert len(editor.nodes_of_type(ImageNode)) == 1

    def test_reset(self, editor, image_factory):
        editor.add_text("a")
        editor.set_background_image(image_factory(10, 10))
        editor.reset()
        assert editor.nodes == []
        assert editor.active_node is None
        assert editor.background is None

    def test_delete_key_removes_active(self, editor):
        node = editor.add_text("a")
        assert editor.key_press(KeyEvent('Delete'))
        assert node not in editor.nodes

    def test_delete_key_without_selection(self, editor):
        assert not editor.key_press(KeyEvent('Delete'))

    def test_render_requests_reach_listeners(self, editor):
        listener = MagicMock()
        editor.add_render_listener(listener)
        editor.add_text("a")
        assert listener.called


# ══════════════════════════════════════════════════════════════════════════
# Plugins
# ══════════════════════════════════════════════════════════════════════════

class TestPlugins:

    def test_hook_order(self, editor):
        plugin = editor.use(RecordingPlugin())
        node = editor.add_text("a")
        editor.pointer_down(PointerEvent(5, 5))
        editor.remove_node(node)
        editor.remove_plugin(plugin)
        assert plugin.calls == ['init', 'add', 'capture', 'down', 'remove', 'destroy']
        assert plugin.editor is editor

    def test_capture_consumes_press(self, editor):
        plugin = editor.use(RecordingPlugin(capture=True))
        node = editor.add_text("a")
        editor.pointer_down(PointerEvent(5, 5))
        # Selection survives because default hit testing never ran
        assert editor.active_node is node
        assert 'down' not in plugin.calls

    def test_consumed_key_skips_default_delete(self, editor):
        editor.use(RecordingPlugin(consume_keys=True))
        node = editor.add_text("a")
        assert editor.key_press(KeyEvent('Delete'))
        assert node in editor.nodes

    def test_remove_unknown_plugin_is_noop(self, editor):
        plugin = RecordingPlugin()
        editor.remove_plugin(plugin)
        assert plugin.calls == []


# ══════════════════════════════════════════════════════════════════════════
# Images
# ══════════════════════════════════════════════════════════════════════════

class TestImages:

    def test_ready_source_is_added_immediately(self, editor, image_factory):
        node = editor.add_image(image_factory(1600, 1200))
        assert node in editor.nodes
        assert node.scale_x == pytest.approx(0.5)
        center = node.get_center()
        assert (center.x, center.y) == pytest.approx((400, 300))

    def test_file_is_added_after_decode(self, qtbot, editor, image_file):
        node = editor.add_image(image_file)
        assert node not in editor.nodes
        with qtbot.waitSignal(node.source.loaded, timeout=5000):
            pass
        assert editor.nodes == [node]
        assert editor.active_node is node
        assert node.content_size() == (40, 20)

    def test_decode_failure_adds_nothing(self, qtbot, editor, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        node = editor.add_image(str(path))
        with qtbot.waitSignal(node.source.failed, timeout=5000) as blocker:
            pass
        assert "broken.png" in blocker.args[0]
        assert editor.nodes == []

    def test_pending_background_survives_collection(self, qtbot, editor, image_file):
        editor.set_background_image(image_file)
        gc.collect()
        qtbot.waitUntil(lambda: editor.background is not None, timeout=5000)
        assert editor.background.width == 40
        assert editor._pending_sources == []

    def test_pending_placeholder_survives_collection(self, qtbot, metrics, image_file):
        editor = CanvasEditor(800, 600, EditorOptions(placeholder_image=image_file), metrics)
        gc.collect()
        qtbot.waitUntil(lambda: editor.placeholder_background is not None, timeout=5000)
        assert editor.show_placeholder

    def test_failed_background_is_released(self, qtbot, editor, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        source = editor.set_background_image(str(path))
        with qtbot.waitSignal(source.failed, timeout=5000):
            pass
        assert editor.background is None
        assert editor._pending_sources == []


# ══════════════════════════════════════════════════════════════════════════
# Rendering
# ══════════════════════════════════════════════════════════════════════════

class TestRendering:

    def test_render_reports_selection(self, editor):
        assert editor.render(MagicMock()) is False
        editor.add_text("a")
        assert editor.render(MagicMock()) is True

    def test_chrome_only_with_selection_and_flag(self, editor):
        editor.add_text("a")
        painter = MagicMock()
        editor.render(painter, with_chrome=False)
        assert not painter.drawRect.called
        editor.render(painter)
        assert painter.drawRect.called

    def test_image_node_pixels(self, editor, image_factory):
        editor.add_node(ImageNode(image_factory(100, 50, (255, 0, 0, 255)), 100, 100))
        image = editor.render_to_image()
        assert (image.width(), image.height()) == (800, 600)
        assert pixel(image, 150, 125) == (255, 0, 0)
        assert pixel(image, 20, 20) == (255, 255, 255)

    def test_background_covers_canvas(self, editor, image_factory):
        editor.set_background_image(image_factory(1600, 100, (0, 0, 255, 255)))
        image = editor.render_to_image()
        assert pixel(image, 2, 2) == (0, 0, 255)
        assert pixel(image, 797, 597) == (0, 0, 255)

    def test_placeholder_background(self, qapp, metrics, image_factory):
        editor = CanvasEditor(800, 600, text_metrics=metrics)
        editor.set_placeholder_image(image_factory(8, 6, (0, 255, 0, 255)))
        assert editor.show_placeholder
        assert pixel(editor.render_to_image(), 400, 10) == (0, 255, 0)

        editor.add_text("a")
        assert not editor.show_placeholder
        assert pixel(editor.render_to_image(), 400, 10) == (255, 255, 255)

        editor.reset()
        assert editor.show_placeholder

    def test_placeholder_from_options(self, qtbot, metrics, image_file):
        editor = CanvasEditor(800, 600, EditorOptions(placeholder_image=image_file), metrics)
        qtbot.waitUntil(lambda: editor.show_placeholder, timeout=5000)
        assert editor.placeholder_background.width == 40

    def test_limited_handle_set(self, qapp, metrics):
        editor = CanvasEditor(800, 600, EditorOptions(active_handles=('rotate',)), metrics)
        assert [h.kind for h in editor.registry.get_handles()] == ['rotate']


# ══════════════════════════════════════════════════════════════════════════
# Export
# ══════════════════════════════════════════════════════════════════════════

class TestExport:

    def test_png(self, editor):
        editor.add_text("a")
        data = editor.export('png')
        assert data.startswith(b'\x89PNG\r\n\x1a\n')
        assert Image.open(io.BytesIO(data)).size == (800, 600)

    def test_jpeg(self, editor, image_factory):
        editor.add_node(ImageNode(image_factory(100, 50), 0, 0))
        data = editor.export('jpeg', quality=50)
        assert data.startswith(b'\xff\xd8')
        decoded = Image.open(io.BytesIO(data))
        assert decoded.mode == 'RGB'

    def test_export_keeps_selection(self, editor):
        node = editor.add_text("a")
        editor.export()
        assert editor.active_node is node

    def test_unsupported_format(self, editor):
        with pytest.raises(ExportError):
            editor.export('gif')

    def test_save_image_picks_format_from_extension(self, editor, tmp_path):
        path = tmp_path / "out.jpg"
        save_image(editor.render_to_image(), str(path))
        assert path.read_bytes().startswith(b'\xff\xd8')

    def test_save_image_write_failure(self, editor, tmp_path):
        with pytest.raises(ExportError):
            save_image(editor.render_to_image(), str(tmp_path / "missing" / "out.png"))
