"""Transform handle system - ABC-based handle architecture.

Each handle kind is a class that knows:
- Where it sits on the selection box (normalized anchor)
- How to draw itself
- How to test if a (localized) pointer hits it
- What a drag does to the node
- Which cursor to show on hover
"""

from abc import ABC, abstractmethod

from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QPen, QBrush, QColor

from constants import (
	HANDLE_TRANSLATE, HANDLE_DELETE, HANDLE_RESIZE, HANDLE_ROTATE,
	HANDLE_ANCHORS, HANDLE_RADIUS, HANDLE_RADII,
	HANDLE_FILL_COLOR, HANDLE_OUTLINE_COLOR, HANDLE_GLYPH_COLOR
)
from models.transform import Vec2
from utils.transform_math import distance


class Handle(ABC):
	"""Abstract base class for selection box handles."""

	kind = None
	# True for handles that act on press and never start a drag
	removes_node = False

	def __init__(self, radius=None):
		"""
		Args:
			radius: Hit/visual radius in pixels (defaults per kind from constants)
		"""
		self.anchor = Vec2(*HANDLE_ANCHORS[self.kind])
		self.radius = radius if radius is not None else HANDLE_RADII.get(self.kind, HANDLE_RADIUS)

	def get_local_pos(self, bounds):
		"""Handle center in the node's unrotated frame.

		Args:
			bounds: Padded selection Bounds
		"""
		return Vec2(bounds.x + bounds.width * self.anchor.x,
		            bounds.y + bounds.height * self.anchor.y)

	def hit_test(self, local_x, local_y, bounds):
		"""Test a pointer that has already been localized about bounds.center."""
		return distance(self.get_local_pos(bounds), (local_x, local_y)) <= self.radius

	def draw(self, painter, bounds):
		"""Draw the handle circle and glyph.

		The painter must already be rotated about the selection box center.
		"""
		pos = self.get_local_pos(bounds)
		painter.setPen(QPen(QColor(*HANDLE_OUTLINE_COLOR), 1))
		painter.setBrush(QBrush(QColor(*HANDLE_FILL_COLOR)))
		painter.drawEllipse(QPointF(pos.x, pos.y), float(self.radius), float(self.radius))

		painter.setPen(QPen(QColor(*HANDLE_GLYPH_COLOR), 2, Qt.SolidLine, Qt.RoundCap))
		painter.setBrush(Qt.NoBrush)
		self.draw_glyph(painter, pos.x, pos.y, self.radius * 0.5)

	@abstractmethod
	def draw_glyph(self, painter, cx, cy, size):
		"""Draw the icon inside the handle circle."""

	def begin_drag(self, node, event):
		"""Called on press. Returns the GestureAnchor (or None)."""
		return None

	@abstractmethod
	def drag(self, node, event, context):
		"""Apply a pointer move to the node.

		Args:
			node: Active node
			event: PointerEvent for this move
			context: DragContext of the running gesture
		"""

	@abstractmethod
	def get_cursor(self):
		"""Qt.CursorShape to show when hovering this handle."""


class TranslateHandle(Handle):
	"""Top-left handle: moves the node by the pointer delta."""

	kind = HANDLE_TRANSLATE

	def draw_glyph(self, painter, cx, cy, size):
		painter.drawLine(QPointF(cx - size, cy), QPointF(cx + size, cy))
		painter.drawLine(QPointF(cx, cy - size), QPointF(cx, cy + size))

	def drag(self, node, event, context):
		# Incremental: delta since the previous move event
		node.move(event.x - context.last.x, event.y - context.last.y)

	def get_cursor(self):
		return Qt.OpenHandCursor


class DeleteHandle(Handle):
	"""Top-right handle: removes the node on press."""

	kind = HANDLE_DELETE
	removes_node = True

	def draw_glyph(self, painter, cx, cy, size):
		painter.drawLine(QPointF(cx - size, cy - size), QPointF(cx + size, cy + size))
		painter.drawLine(QPointF(cx - size, cy + size), QPointF(cx + size, cy - size))

	def drag(self, node, event, context):
		pass

	def get_cursor(self):
		return Qt.PointingHandCursor


class ResizeHandle(Handle):
	"""Bottom-right handle: uniform scale by radial distance from center."""

	kind = HANDLE_RESIZE

	def draw_glyph(self, painter, cx, cy, size):
		painter.drawLine(QPointF(cx - size, cy - size), QPointF(cx + size, cy + size))
		painter.drawLine(QPointF(cx + size, cy + size), QPointF(cx + size * 0.2, cy + size))
		painter.drawLine(QPointF(cx + size, cy + size), QPointF(cx + size, cy + size * 0.2))

	def begin_drag(self, node, event):
		return node.start_resize(event.x, event.y)

	def drag(self, node, event, context):
		node.update_resize(event.x, event.y)

	def get_cursor(self):
		return Qt.SizeFDiagCursor


class RotateHandle(Handle):
	"""Bottom-left handle: rotates by bearing delta about the center."""

	kind = HANDLE_ROTATE

	def draw_glyph(self, painter, cx, cy, size):
		# Three-quarter arc; Qt angles are in 1/16 degree
		painter.drawArc(int(cx - size), int(cy - size), int(size * 2), int(size * 2),
		                90 * 16, 270 * 16)
		tip_x = cx + size
		painter.drawLine(QPointF(tip_x, cy), QPointF(tip_x - size * 0.5, cy - size * 0.4))
		painter.drawLine(QPointF(tip_x, cy), QPointF(tip_x + size * 0.4, cy - size * 0.5))

	def begin_drag(self, node, event):
		return node.start_rotate(event.x, event.y)

	def drag(self, node, event, context):
		node.update_rotate(event.x, event.y)

	def get_cursor(self):
		return Qt.CrossCursor


HANDLE_CLASSES = {
	HANDLE_TRANSLATE: TranslateHandle,
	HANDLE_DELETE: DeleteHandle,
	HANDLE_RESIZE: ResizeHandle,
	HANDLE_ROTATE: RotateHandle,
}
