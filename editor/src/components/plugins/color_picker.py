"""Color swatches under the active text node.

Swatches sit in a row below the padded selection box and rotate with it.
A press on a swatch is captured before default hit testing, so choosing a
color never deselects the node or ends its edit session.
"""

import math

from PyQt5.QtCore import Qt, QPointF
from PyQt5.QtGui import QColor, QPen

from constants import (
	COLOR_PICKER_COLORS, COLOR_PICKER_RADIUS, COLOR_PICKER_SPACING,
	COLOR_PICKER_X_OFFSET, COLOR_PICKER_Y_OFFSET, COLOR_PICKER_HIGHLIGHT
)
from models.nodes import TextNode
from utils.transform_math import localize_point, distance
from .base import CanvasEditorPlugin


class ColorPickerPlugin(CanvasEditorPlugin):
	"""Recolor the active text node from a fixed palette.

	Args:
		colors: Color names or hex strings (default: black, white, red, blue, green)
	"""

	def __init__(self, colors=None, radius=COLOR_PICKER_RADIUS, spacing=COLOR_PICKER_SPACING):
		self.editor = None
		self.colors = list(colors) if colors else list(COLOR_PICKER_COLORS)
		self.radius = radius
		self.spacing = spacing

	def swatch_centers(self, node):
		"""Swatch centers in the node's unrotated frame, in palette order."""
		bounds = node.get_selection_bounds()
		start_x = bounds.x + COLOR_PICKER_X_OFFSET
		y = bounds.y + bounds.height + COLOR_PICKER_Y_OFFSET
		step = self.radius * 2 + self.spacing
		return [(start_x + i * step, y) for i in range(len(self.colors))]

	def swatch_at(self, node, x, y):
		"""Index of the swatch under a canvas point, or None."""
		bounds = node.get_selection_bounds()
		local = localize_point((x, y), bounds.center, bounds.rotation)
		for index, center in enumerate(self.swatch_centers(node)):
			if distance(local, center) <= self.radius:
				return index
		return None

	def on_pointer_capture(self, event, editor):
		node = editor.active_node
		if not isinstance(node, TextNode):
			return False
		index = self.swatch_at(node, event.x, event.y)
		if index is None:
			return False
		node.color = self.colors[index]
		editor.request_render()
		return True

	def on_render(self, painter, editor):
		node = editor.active_node
		if not isinstance(node, TextNode) or not editor.chrome_visible:
			return

		bounds = node.get_selection_bounds()
		center = bounds.center
		painter.save()
		painter.translate(center.x, center.y)
		painter.rotate(math.degrees(bounds.rotation))
		painter.translate(-center.x, -center.y)

		for color, (cx, cy) in zip(self.colors, self.swatch_centers(node)):
			if node.color == color:
				painter.setPen(QPen(QColor(COLOR_PICKER_HIGHLIGHT), 2))
				painter.setBrush(Qt.NoBrush)
				painter.drawEllipse(QPointF(cx, cy), self.radius + 3, self.radius + 3)

			painter.setPen(Qt.NoPen)
			painter.setBrush(QColor(color))
			painter.drawEllipse(QPointF(cx, cy), self.radius, self.radius)

		painter.restore()
