"""Handle registry - which handles are active and in what priority.

Hit testing localizes the pointer into the node's unrotated frame (about the
padded selection box center) and then walks the active handles in declared
priority order, so overlapping hit circles resolve to the earlier kind.
"""

import math

from PyQt5.QtGui import QPen, QColor
from PyQt5.QtCore import Qt

from constants import HANDLE_PRIORITY, SELECTION_BOX_COLOR, SELECTION_BOX_WIDTH
from utils.transform_math import localize_point
from .handles import HANDLE_CLASSES


class HandleRegistry:
	"""Ordered set of active handles for the selection box."""

	def __init__(self, active_kinds=None, radii=None):
		"""
		Args:
			active_kinds: Iterable of handle kinds to enable (default: all).
				Order is always the global HANDLE_PRIORITY order.
			radii: Optional {kind: radius} overrides
		"""
		radii = radii or {}
		enabled = set(HANDLE_PRIORITY if active_kinds is None else active_kinds)
		unknown = enabled - set(HANDLE_PRIORITY)
		if unknown:
			raise ValueError(f"Unknown handle kinds: {sorted(unknown)}")

		self.handles = {}  # kind -> Handle, insertion order = priority
		for kind in HANDLE_PRIORITY:
			if kind in enabled:
				self.handles[kind] = HANDLE_CLASSES[kind](radii.get(kind))

	def get_handles(self):
		return list(self.handles.values())

	def get(self, kind):
		return self.handles.get(kind)

	def get_handle_at_pos(self, node, mx, my):
		"""Find the active handle under a canvas point.

		Returns:
			Handle object or None
		"""
		bounds = node.get_selection_bounds()
		local = localize_point((mx, my), bounds.center, bounds.rotation)
		for handle in self.handles.values():
			if handle.hit_test(local.x, local.y, bounds):
				return handle
		return None

	def draw(self, painter, node):
		"""Draw the selection box and all active handles for a node."""
		bounds = node.get_selection_bounds()
		center = bounds.center

		painter.save()
		painter.translate(center.x, center.y)
		painter.rotate(math.degrees(bounds.rotation))
		painter.translate(-center.x, -center.y)

		painter.setPen(QPen(QColor(*SELECTION_BOX_COLOR), SELECTION_BOX_WIDTH))
		painter.setBrush(Qt.NoBrush)
		painter.drawRect(int(round(bounds.x)), int(round(bounds.y)),
		                 int(round(bounds.width)), int(round(bounds.height)))

		for handle in self.handles.values():
			handle.draw(painter, bounds)

		painter.restore()
