"""
Canvas Node Editor - Editor Plugins

- base.py: CanvasEditorPlugin hook interface (all hooks no-op)
- text_editor.py: Edit sessions, placeholder and blinking caret for text nodes
- color_picker.py: Palette swatches under the active text node
"""

from .base import CanvasEditorPlugin
from .text_editor import TextEditorPlugin
from .color_picker import ColorPickerPlugin

__all__ = ['CanvasEditorPlugin', 'TextEditorPlugin', 'ColorPickerPlugin']
