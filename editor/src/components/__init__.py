"""UI components for Canvas Node Editor

This package contains the editor core and its Qt host:
- canvas_editor.py: Node collection, input routing, rendering
- canvas_widget.py: QWidget that feeds Qt events to the editor
- render_loop.py: Repaint scheduling while a node is selected
- input_events.py: Toolkit-neutral pointer and key events
- transform_widgets: Selection handles and the gesture state machine
- plugins: Text editing and color picker collaborators
"""

from .canvas_editor import CanvasEditor, EditorOptions
from .canvas_widget import CanvasWidget
from .render_loop import RenderLoop

__all__ = [
    'CanvasEditor',
    'EditorOptions',
    'CanvasWidget',
    'RenderLoop',
]
