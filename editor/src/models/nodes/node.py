"""Base node: a placed, transformable canvas element.

A node owns its position (top-left of the unrotated box), rotation about the
box center, and a scale pair. Variants supply the content size and drawing;
everything geometric (bounds, hit test, gestures) lives here.
"""

from abc import ABC, abstractmethod

from constants import DEFAULT_ROTATION, DEFAULT_SCALE_X, DEFAULT_SCALE_Y
from models.transform import Bounds, GestureAnchor, Vec2
from utils.transform_math import bearing, distance, localize_point, point_in_rect


class Node(ABC):
    """Abstract canvas node.

    Subclasses implement content_size() and draw(). Bounds are always
    derived from x/y/scale and the content size, never stored.
    """

    transformer_padding = 0

    def __init__(self, x=0.0, y=0.0):
        self.x = float(x)
        self.y = float(y)
        self.rotation = DEFAULT_ROTATION
        self.scale_x = DEFAULT_SCALE_X
        self.scale_y = DEFAULT_SCALE_Y

        # Recorded at rotate/resize start, cleared when the next gesture begins
        self._anchor = None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @abstractmethod
    def content_size(self):
        """Rendered (scaled) content size as (width, height) in pixels."""

    @abstractmethod
    def draw(self, painter):
        """Paint the node onto a QPainter."""

    def get_bounds(self, padding=0):
        """Content bounds grown symmetrically by padding.

        Args:
            padding: Extra pixels on every side (rotation is unaffected)

        Returns:
            Bounds
        """
        width, height = self.content_size()
        bounds = Bounds(self.x, self.y, width, height, self.rotation)
        if padding:
            return bounds.expanded(padding)
        return bounds

    def get_selection_bounds(self):
        """Bounds used for the selection box and handles."""
        return self.get_bounds(self.transformer_padding)

    def get_center(self):
        """Center of the unpadded bounding box (rotation pivot)."""
        return self.get_bounds().center

    def contains(self, mx, my):
        """Hit test against the unpadded, rotated box."""
        bounds = self.get_bounds()
        local = localize_point((mx, my), bounds.center, bounds.rotation)
        return point_in_rect(local, bounds)

    def center_on(self, cx, cy):
        """Move the node so its bounds center lands on (cx, cy)."""
        width, height = self.content_size()
        self.x = cx - width / 2
        self.y = cy - height / 2

    def move(self, dx, dy):
        self.x += dx
        self.y += dy

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def _capture_anchor(self, reference):
        self._anchor = GestureAnchor(
            pivot=self.get_center(),
            reference=reference,
            rotation=self.rotation,
            scale_x=self.scale_x,
            scale_y=self.scale_y,
        )
        return self._anchor

    def start_rotate(self, mx, my):
        """Record the bearing from the box center to the pointer.

        Returns:
            GestureAnchor: the captured start state
        """
        center = self.get_center()
        return self._capture_anchor(bearing(center, (mx, my)))

    def update_rotate(self, mx, my):
        """Set rotation from the bearing delta since start_rotate."""
        anchor = self._anchor
        if anchor is None:
            return
        current = bearing(anchor.pivot, (mx, my))
        self.rotation = anchor.rotation + (current - anchor.reference)

    def start_resize(self, mx, my):
        """Record the distance from the box center to the pointer.

        Returns:
            GestureAnchor: the captured start state
        """
        center = self.get_center()
        return self._capture_anchor(distance(center, (mx, my)))

    def update_resize(self, mx, my):
        """Scale uniformly by current distance / start distance.

        A zero start distance leaves the scale frozen. The node stays
        centered on the pivot recorded at gesture start.
        """
        anchor = self._anchor
        if anchor is None or anchor.reference == 0:
            return
        factor = distance(anchor.pivot, (mx, my)) / anchor.reference
        self.scale_x = anchor.scale_x * factor
        self.scale_y = anchor.scale_y * factor
        self.center_on(anchor.pivot.x, anchor.pivot.y)

    def end_gesture(self):
        self._anchor = None

    @property
    def gesture_anchor(self):
        return self._anchor

    def __repr__(self):
        return (f"{type(self).__name__}(x={self.x:.1f}, y={self.y:.1f}, "
                f"rotation={self.rotation:.3f}, scale=({self.scale_x:.3f}, {self.scale_y:.3f}))")
