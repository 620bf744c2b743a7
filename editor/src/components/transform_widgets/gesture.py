"""Gesture state machine - pointer routing for the active node.

States:
	IDLE          no drag, nothing being edited
	SELECTING     last press selected a node (no drag)
	DRAGGING      a translate/rotate/resize handle is held
	EDITING_TEXT  a text edit session is open on the active node

Clicking a node's interior only selects it; dragging is handle-gated.
"""

import logging
from enum import Enum

from PyQt5.QtCore import Qt

from models.transform import Vec2
from .drag_context import DragContext


logger = logging.getLogger(__name__)


class GestureState(Enum):
	IDLE = 'idle'
	SELECTING = 'selecting'
	DRAGGING = 'dragging'
	EDITING_TEXT = 'editing_text'


DEFAULT_CURSOR = Qt.ArrowCursor


class GestureStateMachine:
	"""Dispatches pointer events to the editor's active node.

	The machine never owns nodes; it asks the editor to select, hit test
	and remove them so the editor's active-node invariants hold.
	"""

	def __init__(self, editor, registry):
		self.editor = editor
		self.registry = registry
		self.state = GestureState.IDLE
		self.drag = None  # DragContext while DRAGGING
		self.editing_node = None
		self.cursor = DEFAULT_CURSOR
		self._cursor_listeners = []

	# ------------------------------------------------------------------
	# Cursor feedback
	# ------------------------------------------------------------------

	def add_cursor_listener(self, callback):
		"""callback(cursor_shape) runs only when the hover cursor changes."""
		self._cursor_listeners.append(callback)

	def _set_cursor(self, cursor):
		if cursor == self.cursor:
			return
		self.cursor = cursor
		for callback in self._cursor_listeners:
			callback(cursor)

	def _update_hover(self, event):
		node = self.editor.active_node
		handle = self.registry.get_handle_at_pos(node, event.x, event.y) if node else None
		self._set_cursor(handle.get_cursor() if handle else DEFAULT_CURSOR)

	# ------------------------------------------------------------------
	# Pointer events
	# ------------------------------------------------------------------

	@property
	def is_dragging(self):
		return self.state == GestureState.DRAGGING

	def pointer_down(self, event):
		"""Handle press: handles of the active node first, then node selection."""
		node = self.editor.active_node
		if node is not None:
			handle = self.registry.get_handle_at_pos(node, event.x, event.y)
			if handle is not None:
				self._press_handle(node, handle, event)
				return

		# Topmost (last inserted) node wins
		clicked = self.editor.node_at(event.x, event.y)
		if clicked is not self.editor.active_node:
			self.editor.set_active_node(clicked)
		self.state = GestureState.SELECTING if clicked is not None else GestureState.IDLE

	def _press_handle(self, node, handle, event):
		if handle.removes_node:
			logger.debug(f"Delete handle pressed on {node!r}")
			self.editor.remove_node(node)
			self.drag = None
			self.state = GestureState.IDLE
			return

		anchor = handle.begin_drag(node, event)
		self.drag = DragContext(handle=handle, last=Vec2(event.x, event.y), anchor=anchor)
		self.state = GestureState.DRAGGING
		self._set_cursor(handle.get_cursor())

	def pointer_move(self, event):
		"""Apply a drag step, or refresh the hover cursor.

		Returns:
			bool: True if the active node was changed
		"""
		node = self.editor.active_node
		if self.is_dragging and node is not None and self.drag is not None:
			self.drag.handle.drag(node, event, self.drag)
			self.drag.last = Vec2(event.x, event.y)
			return True

		self._update_hover(event)
		return False

	def pointer_up(self, event=None):
		"""Release ends any drag regardless of pointer position."""
		if self.drag is not None and self.editor.active_node is not None:
			self.editor.active_node.end_gesture()
		self.drag = None
		self.state = GestureState.EDITING_TEXT if self.editing_node is not None else GestureState.IDLE

	# ------------------------------------------------------------------
	# Text editing
	# ------------------------------------------------------------------

	def enter_text_editing(self, node):
		self.editing_node = node
		if not self.is_dragging:
			self.state = GestureState.EDITING_TEXT

	def leave_text_editing(self):
		self.editing_node = None
		if self.state == GestureState.EDITING_TEXT:
			self.state = GestureState.SELECTING if self.editor.active_node else GestureState.IDLE

	def reset(self):
		self.drag = None
		self.editing_node = None
		self.state = GestureState.IDLE
