"""
pytest-qt widget integration tests.

Drives the CanvasWidget with real Qt events and checks that they reach the
editor, its gesture state machine and the text editing plugin.
"""
import pytest
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt, QPoint, QPointF, QEvent
from PyQt5.QtGui import QMouseEvent

from components.canvas_editor import CanvasEditor
from components.canvas_widget import CanvasWidget
from components.plugins import TextEditorPlugin, ColorPickerPlugin


@pytest.fixture
def widget(qtbot, metrics):
    """Shown 800x600 canvas widget with both plugins"""
    editor = CanvasEditor(800, 600, text_metrics=metrics)
    editor.use(TextEditorPlugin())
    editor.use(ColorPickerPlugin())
    canvas = CanvasWidget(editor)
    qtbot.addWidget(canvas)
    canvas.show()
    canvas.resize(800, 600)
    yield canvas
    canvas.shutdown()


def hover(widget, x, y):
    event = QMouseEvent(QEvent.MouseMove, QPointF(x, y), Qt.NoButton, Qt.NoButton, Qt.NoModifier)
    QApplication.sendEvent(widget, event)


def point(x, y):
    return QPoint(int(round(x)), int(round(y)))


# ══════════════════════════════════════════════════════════════════════════
# Keyboard
# ══════════════════════════════════════════════════════════════════════════

class TestKeyboard:

    def test_typing_reaches_new_text_node(self, qtbot, widget):
        node = widget.editor.add_text()
        qtbot.keyClicks(widget, "Hi")
        assert node.lines == ["Hi"]

    def test_shift_enter_then_return_commits(self, qtbot, widget):
        node = widget.editor.add_text("ab")
        qtbot.keyClick(widget, Qt.Key_Return, Qt.ShiftModifier)
        assert node.lines == ["ab", ""]
        qtbot.keyClick(widget, Qt.Key_Return)
        plugin = widget.editor.plugins[0]
        assert not plugin.is_editing

    def test_delete_removes_selected_after_commit(self, qtbot, widget):
        node = widget.editor.add_text("ab")
        qtbot.keyClick(widget, Qt.Key_Escape)
        qtbot.keyClick(widget, Qt.Key_Delete)
        assert node not in widget.editor.nodes


# ══════════════════════════════════════════════════════════════════════════
# Mouse
# ══════════════════════════════════════════════════════════════════════════

class TestMouse:

    def test_translate_drag(self, qtbot, widget):
        node = widget.editor.add_text("ab")
        corner = node.get_selection_bounds()
        start_x, start_y = node.x, node.y
        qtbot.mousePress(widget, Qt.LeftButton, pos=point(corner.x, corner.y))
        hover(widget, corner.x + 30, corner.y + 10)
        qtbot.mouseRelease(widget, Qt.LeftButton, pos=point(corner.x + 30, corner.y + 10))
        assert node.x == pytest.approx(start_x + 30, abs=1)
        assert node.y == pytest.approx(start_y + 10, abs=1)

    def test_click_empty_area_deselects(self, qtbot, widget):
        widget.editor.add_text("ab")
        qtbot.mouseClick(widget, Qt.LeftButton, pos=QPoint(5, 5))
        assert widget.editor.active_node is None

    def test_hover_cursor_follows_handles(self, widget):
        node = widget.editor.add_text("ab")
        corner = node.get_selection_bounds()
        hover(widget, corner.x, corner.y)
        assert widget.cursor().shape() == Qt.OpenHandCursor
        hover(widget, 5, 5)
        assert widget.cursor().shape() == Qt.ArrowCursor

    def test_swatch_click_recolors(self, qtbot, widget):
        node = widget.editor.add_text("ab")
        picker = widget.editor.plugins[1]
        x, y = picker.swatch_centers(node)[2]
        qtbot.mouseClick(widget, Qt.LeftButton, pos=point(x, y))
        assert node.color == 'red'


# ══════════════════════════════════════════════════════════════════════════
# Painting, resize and export
# ══════════════════════════════════════════════════════════════════════════

class TestPainting:

    def test_paint_keeps_loop_running_with_selection(self, widget):
        widget.editor.add_text("ab")
        widget.grab()
        assert widget.render_loop.frames >= 1
        assert widget.render_loop.is_running()

    def test_paint_idles_without_selection(self, widget):
        widget.grab()
        assert not widget.render_loop.is_running()

    def test_resize_updates_editor(self, widget):
        widget.resize(640, 480)
        assert (widget.editor.width, widget.editor.height) == (640, 480)

    def test_export_to_file(self, widget, tmp_path):
        widget.editor.add_text("ab")
        path = widget.export_to_file(str(tmp_path / "canvas.png"))
        with open(path, 'rb') as f:
            assert f.read(8) == b'\x89PNG\r\n\x1a\n'
