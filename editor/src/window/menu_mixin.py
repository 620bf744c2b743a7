"""Menu bar creation and menu action handlers for the editor window"""

import os
import logging

from PyQt5.QtWidgets import QFileDialog, QMessageBox

from services.export import ExportError, normalize_format
from utils.logger import loggerRaise


logger = logging.getLogger(__name__)

IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp);;All Files (*)"
EXPORT_FILTERS = {
	'png': "PNG Files (*.png);;All Files (*)",
	'jpeg': "JPEG Files (*.jpg *.jpeg);;All Files (*)",
}
EXPORT_EXTENSIONS = {
	'png': ('.png',),
	'jpeg': ('.jpg', '.jpeg'),
}


class MenuMixin:
	"""Menu bar and menu action handlers

	Expects self.canvas_widget (CanvasWidget) and the ConfigMixin helpers.
	"""

	def _create_menu_bar(self):
		"""Create the menu bar with File and Edit menus"""
		menubar = self.menuBar()

		# File Menu
		file_menu = menubar.addMenu("&File")

		reset_action = file_menu.addAction("&Reset Canvas")
		reset_action.setShortcut("Ctrl+N")
		reset_action.triggered.connect(self.reset_canvas)

		file_menu.addSeparator()

		background_action = file_menu.addAction("Set &Background...")
		background_action.setShortcut("Ctrl+B")
		background_action.triggered.connect(self.set_background)

		file_menu.addSeparator()

		export_png_action = file_menu.addAction("Export as &PNG...")
		export_png_action.setShortcut("Ctrl+E")
		export_png_action.triggered.connect(lambda: self.export_image('png'))

		export_jpeg_action = file_menu.addAction("Export as &JPEG...")
		export_jpeg_action.setShortcut("Ctrl+Shift+E")
		export_jpeg_action.triggered.connect(lambda: self.export_image('jpeg'))

		file_menu.addSeparator()

		exit_action = file_menu.addAction("E&xit")
		exit_action.setShortcut("Alt+F4")
		exit_action.triggered.connect(self.close)

		# Edit Menu
		edit_menu = menubar.addMenu("&Edit")

		add_text_action = edit_menu.addAction("Add &Text")
		add_text_action.setShortcut("Ctrl+T")
		add_text_action.triggered.connect(self.add_text)

		add_image_action = edit_menu.addAction("Add &Image...")
		add_image_action.setShortcut("Ctrl+I")
		add_image_action.triggered.connect(self.add_image)

		edit_menu.addSeparator()

		delete_action = edit_menu.addAction("&Delete Selected")
		delete_action.triggered.connect(self.delete_selected)

	# ========================================
	# Action Handlers
	# ========================================

	def _choose_image(self, caption):
		filename, _ = QFileDialog.getOpenFileName(self, caption, self.last_directory, IMAGE_FILTER)
		if filename:
			self._remember_directory(filename)
		return filename

	def _on_image_failed(self, message):
		QMessageBox.warning(self, "Image Load Failed", message)

	def add_text(self):
		"""Add an empty text node at the canvas center (starts in edit mode)"""
		self.canvas_widget.editor.add_text()
		self.canvas_widget.setFocus()

	def add_image(self):
		"""Pick an image file and add it as a node once decoded"""
		try:
			filename = self._choose_image("Add Image")
			if not filename:
				return
			node = self.canvas_widget.editor.add_image(filename)
			node.source.failed.connect(self._on_image_failed)
		except Exception as e:
			loggerRaise(e, "Failed to add image")

	def set_background(self):
		"""Pick an image file and show it behind all nodes"""
		try:
			filename = self._choose_image("Set Background")
			if not filename:
				return
			source = self.canvas_widget.editor.set_background_image(filename)
			source.failed.connect(self._on_image_failed)
		except Exception as e:
			loggerRaise(e, "Failed to set background")

	def delete_selected(self):
		editor = self.canvas_widget.editor
		if editor.active_node is not None:
			editor.remove_node(editor.active_node)

	def reset_canvas(self):
		"""Clear all nodes and the background after confirmation"""
		editor = self.canvas_widget.editor
		if editor.nodes or editor.background is not None:
			reply = QMessageBox.question(
				self, "Reset Canvas",
				"Remove all text, images and the background?",
				QMessageBox.Yes | QMessageBox.No, QMessageBox.No
			)
			if reply != QMessageBox.Yes:
				return
		editor.reset()

	def export_image(self, fmt='png'):
		"""Export the canvas without selection chrome as PNG or JPEG"""
		try:
			fmt = normalize_format(fmt)
			default_name = os.path.join(self.last_directory, "canvas" + EXPORT_EXTENSIONS[fmt][0])
			filename, _ = QFileDialog.getSaveFileName(
				self,
				f"Export as {fmt.upper()}",
				default_name,
				EXPORT_FILTERS[fmt]
			)

			if not filename:
				return

			# Ensure a matching extension
			if not filename.lower().endswith(EXPORT_EXTENSIONS[fmt]):
				filename += EXPORT_EXTENSIONS[fmt][0]

			self._remember_directory(filename)
			self.canvas_widget.export_to_file(filename, fmt)
			self.statusBar().showMessage(f"Exported to {filename}", 5000)
		except ExportError as e:
			logger.warning(str(e))
			QMessageBox.warning(self, "Export Failed", str(e))
		except Exception as e:
			loggerRaise(e, f"Failed to export {fmt.upper()}")
