import sys
import os
import argparse
import logging

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    # Get the directory containing this file (editor/src)
    current_dir = os.path.dirname(os.path.abspath(__file__))
    # Add it to the Python path
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor

# Component imports
from components.canvas_editor import CanvasEditor, EditorOptions
from components.canvas_widget import CanvasWidget
from components.plugins import TextEditorPlugin, ColorPickerPlugin

# Utility imports
from utils.logger import configure_logging, set_main_window

# Mixin imports
from window.menu_mixin import MenuMixin
from window.config_mixin import ConfigMixin

from constants import DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT


logger = logging.getLogger(__name__)


class CanvasNodeEditorWindow(MenuMixin, ConfigMixin, QMainWindow):
    def __init__(self, options=None):
        super().__init__()
        self.setWindowTitle("Canvas Node Editor")

        # Recent directory for file dialogs
        self._init_config()

        # Initialize global logger with main window reference
        set_main_window(self)

        self.editor = CanvasEditor(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT, options)
        self.editor.use(TextEditorPlugin())
        self.editor.use(ColorPickerPlugin())

        self.setup_ui()

    # ============= UI Setup =============

    def setup_ui(self):
        self._create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        self.canvas_widget = CanvasWidget(self.editor, central_widget)
        layout.addWidget(self.canvas_widget)

        self.statusBar().showMessage("Ctrl+T adds text, Ctrl+I adds an image")
        self.resize(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT + 60)
        self.canvas_widget.setFocus()

    def closeEvent(self, event):
        self.canvas_widget.shutdown()
        super().closeEvent(event)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Canvas Node Editor")
    parser.add_argument('--verbose', action='store_true', help="Enable debug logging")
    parser.add_argument('--placeholder', metavar='IMAGE',
                        help="Background image shown until content is added")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the Canvas Node Editor application"""
    args = parse_args(argv)
    configure_logging(args.verbose)

    app = QtWidgets.QApplication(sys.argv[:1])

    # Use Fusion style with dark palette
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)

    window = CanvasNodeEditorWindow(EditorOptions(placeholder_image=args.placeholder))
    window.show()
    logger.debug("Editor window shown")
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
