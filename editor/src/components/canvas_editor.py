"""
Canvas Editor - composition root for nodes, gestures, plugins and rendering

Owns:
- The node collection (draw order = insertion order)
- The active node
- Pointer and key routing (plugins + gesture state machine)
- Background image with cover fit
- Rendering onto any QPainter, with or without selection chrome

The editor does not own a widget. CanvasWidget feeds it events and paints
through it; tests drive it directly.
"""

import logging
from dataclasses import dataclass, field

from PyQt5.QtCore import QRectF
from PyQt5.QtGui import QColor, QImage, QPainter

from constants import (
	DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT, CANVAS_CLEAR_COLOR,
	HANDLE_PRIORITY, DEFAULT_EXPORT_FORMAT
)
from models.nodes import TextNode, ImageNode
from services.export import encode_image
from services.image_loader import ImageSource
from utils.transform_math import cover_rect
from .input_events import KEY_DELETE
from .transform_widgets import HandleRegistry, GestureStateMachine


logger = logging.getLogger(__name__)


@dataclass
class EditorOptions:
	"""Editor construction options.

	- active_handles: handle kinds shown on the selection box
	- handle_radii: per-kind radius overrides
	- placeholder_image: image path shown until content is added
	"""
	active_handles: tuple = HANDLE_PRIORITY
	handle_radii: dict = field(default_factory=dict)
	placeholder_image: str = None


class CanvasEditor:
	"""Interactive node editor over a fixed-size canvas."""

	def __init__(self, width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT,
	             options=None, text_metrics=None):
		self.width = width
		self.height = height
		self.options = options or EditorOptions()
		self.text_metrics = text_metrics

		self.nodes = []
		self.active_node = None
		self.plugins = []

		self.registry = HandleRegistry(self.options.active_handles, self.options.handle_radii)
		self.gesture = GestureStateMachine(self, self.registry)

		self.background = None
		self.placeholder_background = None
		self.show_placeholder = False

		# True while the current frame includes selection chrome
		self.chrome_visible = True

		self._render_listeners = []
		self._pending_images = []
		# Background sources still decoding
		self._pending_sources = []

		if self.options.placeholder_image:
			self.set_placeholder_image(ImageSource.from_file(self.options.placeholder_image))

	# ------------------------------------------------------------------
	# Plugins
	# ------------------------------------------------------------------

	def use(self, plugin):
		"""Register a plugin; hooks run in registration order."""
		self.plugins.append(plugin)
		plugin.init(self)
		return plugin

	def remove_plugin(self, plugin):
		if plugin in self.plugins:
			self.plugins.remove(plugin)
			plugin.destroy()

	# ------------------------------------------------------------------
	# Render requests
	# ------------------------------------------------------------------

	def add_render_listener(self, callback):
		"""callback() is invoked whenever the editor needs a repaint."""
		self._render_listeners.append(callback)

	def request_render(self):
		for callback in self._render_listeners:
			callback()

	def has_selection(self):
		return self.active_node is not None

	# ------------------------------------------------------------------
	# Node collection
	# ------------------------------------------------------------------

	def add_node(self, node):
		"""Append a node, make it active and notify plugins."""
		self.nodes.append(node)
		self.show_placeholder = False
		self.active_node = node
		logger.debug(f"Added {node!r}")
		for plugin in list(self.plugins):
			plugin.on_add_node(node, self)
		self.request_render()
		return node

	def add_text(self, text="", x=None, y=None):
		"""Add a text node centered on (x, y), default the canvas center."""
		node = TextNode(text, metrics=self.text_metrics)
		self.add_node(node)
		cx = self.width / 2 if x is None else x
		cy = self.height / 2 if y is None else y
		# Center after plugins reserved placeholder space
		node.center_on(cx, cy)
		self.request_render()
		return node

	def add_image(self, source):
		"""Add an image node once its source is decoded.

		The node is shrunk to fit the canvas and centered on it.

		Args:
			source: ImageSource or a file path

		Returns:
			ImageNode (added immediately if already decoded)
		"""
		if not isinstance(source, ImageSource):
			source = ImageSource.from_file(source)
		node = ImageNode(source, self.width / 2, self.height / 2, self.width, self.height)
		if source.is_ready():
			return self.add_node(node)

		# Keep a reference until decode finishes
		self._pending_images.append(node)

		def _ready():
			self._pending_images.remove(node)
			self.add_node(node)

		source.when_ready(_ready)
		source.failed.connect(lambda message: self._pending_images.remove(node))
		return node

	def remove_node(self, node):
		"""Remove a node; no-op if it is not in the collection."""
		if node not in self.nodes:
			return
		self.nodes.remove(node)
		if self.active_node is node:
			self.active_node = None
		logger.debug(f"Removed {node!r}")
		for plugin in list(self.plugins):
			plugin.on_remove_node(node, self)
		self.request_render()

	def set_active_node(self, node):
		if node is not None and node not in self.nodes:
			raise ValueError("Cannot activate a node that is not on the canvas")
		self.active_node = node
		self.request_render()

	def node_at(self, x, y):
		"""Topmost node containing (x, y), or None."""
		for node in reversed(self.nodes):
			if node.contains(x, y):
				return node
		return None

	def nodes_of_type(self, node_type):
		return [node for node in self.nodes if isinstance(node, node_type)]

	def text_nodes(self):
		return self.nodes_of_type(TextNode)

	def reset(self):
		"""Clear nodes, selection and background."""
		for node in list(self.nodes):
			self.remove_node(node)
		self.active_node = None
		self.gesture.reset()
		self.background = None
		self.show_placeholder = self.placeholder_background is not None
		self.request_render()

	# ------------------------------------------------------------------
	# Background
	# ------------------------------------------------------------------

	def set_background_image(self, source):
		"""Show source behind all nodes (cover fit) once decoded."""
		if not isinstance(source, ImageSource):
			source = ImageSource.from_file(source)

		def _ready():
			self.background = source
			self.show_placeholder = False
			self.request_render()

		self._hold_until_settled(source)
		source.when_ready(_ready)
		return source

	def set_placeholder_image(self, source):
		"""Background shown until a node or a real background is added."""
		if not isinstance(source, ImageSource):
			source = ImageSource.from_file(source)

		def _ready():
			self.placeholder_background = source
			self.show_placeholder = True
			self.request_render()

		self._hold_until_settled(source)
		source.when_ready(_ready)
		return source

	def _hold_until_settled(self, source):
		"""Keep a decoding source alive until it loads or fails."""
		if source.is_ready():
			return
		self._pending_sources.append(source)

		def _release(*args):
			if source in self._pending_sources:
				self._pending_sources.remove(source)

		source.loaded.connect(_release)
		source.failed.connect(_release)

	def _draw_background(self, painter):
		source = self.placeholder_background if self.show_placeholder else self.background
		if source is None or not source.is_ready():
			return
		offset_x, offset_y, draw_w, draw_h = cover_rect(source.width, source.height,
		                                                self.width, self.height)
		painter.drawImage(QRectF(offset_x, offset_y, draw_w, draw_h), source.image)

	# ------------------------------------------------------------------
	# Input routing
	# ------------------------------------------------------------------

	def pointer_down(self, event):
		for plugin in list(self.plugins):
			if plugin.on_pointer_capture(event, self):
				self.request_render()
				return

		self.gesture.pointer_down(event)

		for plugin in list(self.plugins):
			plugin.on_pointer_down(event, self)
		self.request_render()

	def pointer_move(self, event):
		changed = self.gesture.pointer_move(event)
		for plugin in list(self.plugins):
			plugin.on_pointer_move(event, self)
		if changed:
			self.request_render()

	def pointer_up(self, event):
		self.gesture.pointer_up(event)
		for plugin in list(self.plugins):
			plugin.on_pointer_up(event, self)

	def double_click(self, event):
		for plugin in list(self.plugins):
			plugin.on_double_click(event, self)
		self.request_render()

	def key_press(self, event):
		"""Route a KeyEvent to plugins, then to the default Delete behavior.

		Returns:
			bool: True if the key was handled
		"""
		for plugin in list(self.plugins):
			if plugin.on_key_press(event, self):
				self.request_render()
				return True

		if event.key == KEY_DELETE and self.active_node is not None:
			self.remove_node(self.active_node)
			return True
		return False

	# ------------------------------------------------------------------
	# Rendering
	# ------------------------------------------------------------------

	def render(self, painter, with_chrome=True):
		"""Draw one frame.

		Args:
			painter: Active QPainter sized to the canvas
			with_chrome: Draw the selection box and handles

		Returns:
			bool: True if another frame should be scheduled (selection exists)
		"""
		self.chrome_visible = with_chrome
		try:
			painter.save()
			painter.setRenderHint(QPainter.Antialiasing)
			painter.setRenderHint(QPainter.SmoothPixmapTransform)
			painter.fillRect(QRectF(0, 0, self.width, self.height), QColor(*CANVAS_CLEAR_COLOR))

			self._draw_background(painter)

			for node in self.nodes:
				node.draw(painter)

			for plugin in list(self.plugins):
				plugin.on_render(painter, self)

			if with_chrome and self.active_node is not None:
				self.registry.draw(painter, self.active_node)
			painter.restore()
		finally:
			self.chrome_visible = True

		return self.has_selection()

	def render_to_image(self, width=None, height=None):
		"""Render the canvas without selection chrome into a new QImage."""
		width = width or self.width
		height = height or self.height
		image = QImage(int(width), int(height), QImage.Format_ARGB32)
		image.fill(QColor(*CANVAS_CLEAR_COLOR))
		painter = QPainter(image)
		try:
			if (width, height) != (self.width, self.height):
				painter.scale(width / self.width, height / self.height)
			self.render(painter, with_chrome=False)
		finally:
			painter.end()
		return image

	def export(self, fmt=DEFAULT_EXPORT_FORMAT, quality=None):
		"""Render without chrome and hand the surface to the encoder.

		Returns:
			bytes: Encoded image
		"""
		return encode_image(self.render_to_image(), fmt, quality)

	def resize(self, width, height):
		self.width = width
		self.height = height
		self.request_render()


__all__ = ['CanvasEditor', 'EditorOptions']
