"""Text editing plugin.

Opens an edit session on a text node (new text nodes start in one), routes
keys into a TextCaret, draws the placeholder for empty text nodes and a
blinking caret for the node being edited.

Enter policy:
	commit_on_enter=True   Enter commits, Shift/Ctrl+Enter breaks the line
	commit_on_enter=False  Enter breaks the line, Ctrl+Enter commits
Escape always commits.
"""

import logging

from PyQt5.QtCore import QRectF, QTimer
from PyQt5.QtGui import QColor

from constants import (
	PLACEHOLDER_TEXT, PLACEHOLDER_COLOR, CARET_BLINK_INTERVAL_MS,
	CARET_WIDTH, CARET_HEIGHT_RATIO, CARET_EMPTY_COLOR
)
from models.nodes import TextNode
from models.text_caret import TextCaret
from utils.transform_math import localize_point
from ..input_events import (
	KEY_ENTER, KEY_ESCAPE, KEY_BACKSPACE, KEY_DELETE, KEY_LEFT, KEY_RIGHT,
	KEY_UP, KEY_DOWN, KEY_HOME, KEY_END, KEY_PASTE
)
from .base import CanvasEditorPlugin


logger = logging.getLogger(__name__)


class TextEditorPlugin(CanvasEditorPlugin):
	"""Edit sessions for text nodes.

	Args:
		commit_on_enter: Whether plain Enter ends the session
		placeholder_text: Shown (and reserved) while a node is empty
		placeholder_color: Placeholder text color
	"""

	def __init__(self, commit_on_enter=True, placeholder_text=PLACEHOLDER_TEXT,
	             placeholder_color=PLACEHOLDER_COLOR):
		self.editor = None
		self.commit_on_enter = commit_on_enter
		self.placeholder_text = placeholder_text
		self.placeholder_color = placeholder_color

		self.is_editing = False
		self.text_node = None
		self.caret = None
		self.cursor_visible = False
		self._blink_timer = None

	@property
	def placeholder_lines(self):
		return self.placeholder_text.split("\n")

	def destroy(self):
		self.stop_editing()

	# ------------------------------------------------------------------
	# Edit session
	# ------------------------------------------------------------------

	def reserve_placeholder(self, node):
		"""Make node at least as large as the placeholder it shows when empty."""
		lines = self.placeholder_lines
		node.min_width = max((node.measure(line) for line in lines), default=0.0)
		node.min_lines = len(lines)

	def start_editing(self, node):
		"""Open an edit session on node with the caret after its last character."""
		if self.text_node is not None and self.text_node is not node:
			self.stop_editing()

		self.reserve_placeholder(node)
		if node is not self.editor.active_node:
			self.editor.set_active_node(node)

		if self.text_node is not node:
			self.caret = TextCaret(node)
			self.caret.move_to_end()
			logger.debug(f"Editing {node!r}")

		self.is_editing = True
		self.text_node = node
		self.editor.gesture.enter_text_editing(node)
		self._start_blink()
		self.editor.request_render()

	def stop_editing(self):
		"""Close the edit session; the blink timer stops before this returns."""
		if self._blink_timer is not None:
			self._blink_timer.stop()
			self._blink_timer = None
		if not self.is_editing:
			return

		logger.debug(f"Finished editing {self.text_node!r}")
		self.is_editing = False
		self.text_node = None
		self.caret = None
		self.cursor_visible = False
		if self.editor is not None:
			self.editor.gesture.leave_text_editing()
			self.editor.request_render()

	def _start_blink(self):
		self.cursor_visible = True
		if self._blink_timer is None:
			self._blink_timer = QTimer()
			self._blink_timer.setInterval(CARET_BLINK_INTERVAL_MS)
			self._blink_timer.timeout.connect(self._toggle_cursor)
		# Restart so the caret stays solid right after input
		self._blink_timer.start()

	def _toggle_cursor(self):
		self.cursor_visible = not self.cursor_visible
		self.editor.request_render()

	@property
	def blink_active(self):
		return self._blink_timer is not None and self._blink_timer.isActive()

	def caret_at(self, node, x, y):
		"""(line, char) nearest to a canvas point inside node.

		Args:
			node: TextNode
			x, y: Canvas coordinates

		Returns:
			tuple: (line, char) clamped to the node's lines
		"""
		bounds = node.get_bounds()
		local = localize_point((x, y), bounds.center, bounds.rotation)
		local_x = (local.x - bounds.x) / node.scale_x if node.scale_x else 0.0
		local_y = (local.y - bounds.y) / node.scale_y if node.scale_y else 0.0

		line = int(local_y // node.font_size) if node.font_size else 0
		line = max(0, min(line, len(node.lines) - 1))
		text = node.lines[line]
		offset = node.line_offset(text)
		char = min(range(len(text) + 1),
		           key=lambda i: abs(offset + node.measure(text[:i]) - local_x))
		return line, char

	# ------------------------------------------------------------------
	# Hooks
	# ------------------------------------------------------------------

	def on_add_node(self, node, editor):
		if isinstance(node, TextNode):
			self.start_editing(node)
		else:
			self.stop_editing()

	def on_remove_node(self, node, editor):
		if node is self.text_node:
			self.stop_editing()

	def on_pointer_down(self, event, editor):
		# A handle drag keeps the session open
		if editor.gesture.is_dragging:
			return

		node = editor.active_node
		if isinstance(node, TextNode) and node.contains(event.x, event.y):
			self.start_editing(node)
			if not node.is_empty():
				self.caret.move_to(*self.caret_at(node, event.x, event.y))
		else:
			self.stop_editing()

	def on_double_click(self, event, editor):
		node = editor.node_at(event.x, event.y)
		if isinstance(node, TextNode):
			self.start_editing(node)

	def on_key_press(self, event, editor):
		"""Apply a key to the caret while editing.

		Returns:
			bool: True if the key was consumed by the edit session
		"""
		if not self.is_editing or self.caret is None:
			return False

		# Selection moved elsewhere; keys belong to the new active node
		if editor.active_node is not self.text_node:
			self.stop_editing()
			return False

		key = event.key
		if key == KEY_ESCAPE:
			self.stop_editing()
			return True

		if key == KEY_ENTER:
			if self.commit_on_enter:
				commits = not (event.shift or event.ctrl)
			else:
				commits = event.ctrl
			if commits:
				self.stop_editing()
			else:
				self.caret.break_line()
				self._start_blink()
			return True

		actions = {
			KEY_BACKSPACE: self.caret.backspace,
			KEY_DELETE: self.caret.delete_forward,
			KEY_LEFT: self.caret.move_left,
			KEY_RIGHT: self.caret.move_right,
			KEY_UP: self.caret.move_up,
			KEY_DOWN: self.caret.move_down,
			KEY_HOME: self.caret.move_home,
			KEY_END: self.caret.move_end,
		}
		if key in actions:
			actions[key]()
		elif key == KEY_PASTE:
			self.caret.paste(event.text)
		elif event.is_printable():
			self.caret.insert_char(key)
		else:
			return False

		self._start_blink()
		return True

	# ------------------------------------------------------------------
	# Rendering
	# ------------------------------------------------------------------

	def on_render(self, painter, editor):
		# Placeholder and caret are editing aids, never exported
		if not editor.chrome_visible:
			return

		for node in editor.text_nodes():
			editing = self.is_editing and node is self.text_node
			if not node.is_empty() and not (editing and self.cursor_visible):
				continue

			painter.save()
			node.begin_local_paint(painter)
			if node.is_empty():
				node.draw_lines(painter, self.placeholder_lines, self.placeholder_color)
			if editing and self.cursor_visible:
				self._draw_caret(painter, node)
			painter.restore()

	def _draw_caret(self, painter, node):
		line, char = self.caret.position
		text = node.lines[line] if line < len(node.lines) else ""
		caret_x = node.line_offset(text) + node.measure(text[:char])
		caret_y = line * node.font_size
		color = CARET_EMPTY_COLOR if node.is_empty() else node.color
		painter.fillRect(QRectF(caret_x, caret_y, CARET_WIDTH, node.font_size * CARET_HEIGHT_RATIO),
		                 QColor(color))
