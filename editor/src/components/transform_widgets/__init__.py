"""
Canvas Node Editor - Transform Widget Components

This package contains the selection box interaction architecture:
- handles.py: ABC-based handle classes (TranslateHandle, DeleteHandle, etc.)
- registry.py: Active handle set, priority-ordered hit testing and drawing
- drag_context.py: Unified drag state management
- gesture.py: Pointer-driven gesture state machine
"""

from .handles import (
    Handle, TranslateHandle, DeleteHandle, ResizeHandle, RotateHandle, HANDLE_CLASSES
)
from .registry import HandleRegistry
from .drag_context import DragContext
from .gesture import GestureStateMachine, GestureState

__all__ = [
    'Handle', 'TranslateHandle', 'DeleteHandle', 'ResizeHandle', 'RotateHandle',
    'HANDLE_CLASSES', 'HandleRegistry', 'DragContext',
    'GestureStateMachine', 'GestureState',
]
