"""Transform data structures for coordinate and state representation."""
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair on the canvas:
    - Canvas pixels (top-left origin, Y-down)
    - Node-local pixels (unrotated frame)
    - Normalized handle anchors (0-1)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass
class Bounds:
    """Axis-aligned box of a node in its own unrotated frame.

    x, y is the top-left corner in canvas pixels. The rotation is carried
    along so callers can rotate the box about its center when drawing.
    """
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    @property
    def center(self):
        return Vec2(self.x + self.width / 2, self.y + self.height / 2)

    def expanded(self, padding):
        """Return a copy grown by padding on every side (rotation unchanged)."""
        return Bounds(
            self.x - padding,
            self.y - padding,
            self.width + padding * 2,
            self.height + padding * 2,
            self.rotation,
        )


@dataclass
class GestureAnchor:
    """Node state captured when a rotate or resize drag starts.

    Every later pointer move is computed against this fixed start instead of
    the previous frame, so rounding error never accumulates.

    - pivot: bounds center at gesture start
    - reference: start bearing (rotate) or start distance (resize)
    - rotation, scale_x, scale_y: node transform at gesture start
    """
    pivot: Vec2
    reference: float
    rotation: float
    scale_x: float
    scale_y: float
