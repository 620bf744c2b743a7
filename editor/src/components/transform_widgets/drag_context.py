"""Drag context dataclass for the gesture state machine.

Unified drag state management instead of multiple boolean flags.
"""

from dataclasses import dataclass

from models.transform import Vec2


@dataclass
class DragContext:
    """State of one handle drag, from press to release.

    - handle: the grabbed Handle object
    - last: pointer position at the previous move (translate deltas)
    - anchor: GestureAnchor captured by rotate/resize at press
    """
    handle: object
    last: Vec2
    anchor: object = None

    @property
    def operation(self):
        return self.handle.kind
