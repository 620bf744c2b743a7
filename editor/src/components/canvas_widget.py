"""Qt widget hosting a CanvasEditor.

The widget is the only place Qt input and paint events reach the editor:
mouse and key events are converted to PointerEvent / KeyEvent, and
paintEvent hands a QPainter to CanvasEditor.render(). A RenderLoop keeps
repainting while a node is selected.
"""

import logging

from PyQt5.QtWidgets import QWidget, QSizePolicy, QApplication
from PyQt5.QtCore import Qt, QSize, pyqtSignal
from PyQt5.QtGui import QPainter

from services.export import save_image
from .canvas_editor import CanvasEditor
from .input_events import pointer_event_from_qt, key_event_from_qt
from .render_loop import RenderLoop


logger = logging.getLogger(__name__)


class CanvasWidget(QWidget):
	"""Canvas surface: input routing, painting and export for one editor.

	Args:
		editor: CanvasEditor to host (a default one is created if None)
	"""

	# Emitted after any interaction that may have changed the nodes
	canvas_changed = pyqtSignal()

	def __init__(self, editor=None, parent=None):
		super().__init__(parent)
		self.editor = editor if editor is not None else CanvasEditor()

		# Hover cursor feedback needs move events without a pressed button
		self.setFocusPolicy(Qt.StrongFocus)
		self.setMouseTracking(True)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

		self.render_loop = RenderLoop(self.update, self.editor.has_selection, parent=self)
		self.editor.add_render_listener(self.render_loop.request_frame)
		self.editor.gesture.add_cursor_listener(self._on_cursor_changed)

	def sizeHint(self):
		return QSize(int(self.editor.width), int(self.editor.height))

	def _on_cursor_changed(self, cursor_shape):
		self.setCursor(cursor_shape)

	# ========================================
	# Qt Event Overrides
	# ========================================

	def paintEvent(self, event):
		painter = QPainter(self)
		try:
			self.editor.render(painter)
		finally:
			painter.end()
		self.render_loop.frame_rendered()

	def resizeEvent(self, event):
		super().resizeEvent(event)
		size = event.size()
		self.editor.resize(size.width(), size.height())

	def mousePressEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return
		self.setFocus()
		self.editor.pointer_down(pointer_event_from_qt(event))
		self.canvas_changed.emit()
		event.accept()

	def mouseMoveEvent(self, event):
		self.editor.pointer_move(pointer_event_from_qt(event))
		if self.editor.gesture.is_dragging:
			self.canvas_changed.emit()

	def mouseReleaseEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mouseReleaseEvent(event)
			return
		self.editor.pointer_up(pointer_event_from_qt(event))
		event.accept()

	def mouseDoubleClickEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mouseDoubleClickEvent(event)
			return
		self.editor.double_click(pointer_event_from_qt(event))
		event.accept()

	def keyPressEvent(self, event):
		key_event = key_event_from_qt(event, QApplication.clipboard().text())
		if key_event is not None and self.editor.key_press(key_event):
			self.canvas_changed.emit()
			event.accept()
			return
		super().keyPressEvent(event)

	# ========================================
	# Export
	# ========================================

	def export_to_file(self, filename, fmt=None, quality=None):
		"""Render the canvas without selection chrome and write it to disk.

		Args:
			filename: Destination path; the extension picks the format if fmt is None
			fmt: 'png' or 'jpeg'
			quality: JPEG quality

		Raises:
			ExportError: On unsupported format or write failure
		"""
		image = self.editor.render_to_image()
		return save_image(image, filename, fmt, quality)

	def shutdown(self):
		"""Stop timers before the widget goes away."""
		self.render_loop.stop()
		for plugin in list(self.editor.plugins):
			self.editor.remove_plugin(plugin)
