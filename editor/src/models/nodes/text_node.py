"""Text node: multi-line text that can be moved, scaled and rotated.

Lines split on newline only; there is no automatic wrapping. Each line is
centered horizontally inside the block.
"""

import math

from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QColor

from constants import (
    DEFAULT_FONT_SIZE, DEFAULT_FONT_FAMILY, DEFAULT_FONT_WEIGHT,
    DEFAULT_TEXT_COLOR, TEXT_TRANSFORMER_PADDING
)
from models.nodes.node import Node
from utils.text_metrics import default_metrics, make_font


class TextNode(Node):
    """Text content with font settings and an optional reserved size.

    min_width / min_lines let an editing collaborator reserve room (e.g. for
    placeholder text) so an empty node never collapses to zero size.
    """

    transformer_padding = TEXT_TRANSFORMER_PADDING

    def __init__(self, text="", x=0.0, y=0.0, metrics=None):
        super().__init__(x, y)
        self.font_size = DEFAULT_FONT_SIZE
        self.font_family = DEFAULT_FONT_FAMILY
        self.font_weight = DEFAULT_FONT_WEIGHT
        self.color = DEFAULT_TEXT_COLOR

        self.min_width = 0.0  # Unscaled pixels
        self.min_lines = 0

        self.metrics = metrics if metrics is not None else default_metrics()

        self.lines = text.split("\n")

        # Measured unscaled block width, keyed on everything it depends on
        self._width_cache_key = None
        self._width_cache = 0.0

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def text(self):
        return "\n".join(self.lines)

    def set_text(self, text):
        self.lines = text.split("\n")

    def set_lines(self, lines):
        # Always keep at least one (possibly empty) line for the caret
        self.lines = list(lines) if lines else [""]

    def is_empty(self):
        return self.text == ""

    def line_count(self):
        """Lines used for layout; an empty node falls back to its reserved count."""
        if self.is_empty():
            return max(self.min_lines, 1)
        return len(self.lines)

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def measure(self, text):
        """Unscaled advance width of a string in this node's font."""
        return self.metrics.width(text, self.font_family, self.font_size, self.font_weight)

    def text_width(self):
        """Widest line at the unscaled font size (cached)."""
        key = (tuple(self.lines), self.font_family, self.font_size, self.font_weight)
        if key != self._width_cache_key:
            self._width_cache = max((self.measure(line) for line in self.lines), default=0.0)
            self._width_cache_key = key
        return self._width_cache

    def block_size(self):
        """Unscaled (width, height) of the text block including reserved space."""
        width = max(self.text_width(), self.min_width)
        height = self.line_count() * self.font_size
        return width, height

    def content_size(self):
        width, height = self.block_size()
        return width * self.scale_x, height * self.scale_y

    def line_offset(self, line):
        """Left offset that centers a line inside the block (unscaled)."""
        block_width, _ = self.block_size()
        return (block_width - self.measure(line)) / 2

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def begin_local_paint(self, painter):
        """Transform the painter into the node's unscaled, unrotated frame.

        After this call (0, 0) is the top-left of the text block and one
        unit is one unscaled pixel. Caller must painter.save() first.
        """
        bounds = self.get_bounds()
        center = bounds.center
        block_width, block_height = self.block_size()
        painter.translate(center.x, center.y)
        painter.rotate(math.degrees(self.rotation))
        painter.scale(self.scale_x, self.scale_y)
        painter.translate(-block_width / 2, -block_height / 2)

    def draw_lines(self, painter, lines, color):
        """Draw centered lines inside an already-localized painter."""
        painter.setFont(make_font(self.font_family, self.font_size, self.font_weight))
        painter.setPen(QColor(color))
        ascent = self.metrics.ascent(self.font_family, self.font_size, self.font_weight)
        for i, line in enumerate(lines):
            painter.drawText(QPointF(self.line_offset(line), i * self.font_size + ascent), line)

    def draw(self, painter):
        if self.is_empty():
            return
        painter.save()
        self.begin_local_paint(painter)
        self.draw_lines(painter, self.lines, self.color)
        painter.restore()
