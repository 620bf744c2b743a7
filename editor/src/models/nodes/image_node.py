"""Image node: a raster image that can be moved, scaled and rotated."""

import math

from PyQt5.QtCore import QRectF

from constants import IMAGE_TRANSFORMER_PADDING
from models.nodes.node import Node
from utils.transform_math import fit_scale


class ImageNode(Node):
    """Wraps an ImageSource.

    While the source is still decoding the node has zero size and is
    skipped when drawing. When fit_width/fit_height are given the node is
    shrunk to fit that viewport once decoded and centered on (x, y).
    """

    transformer_padding = IMAGE_TRANSFORMER_PADDING

    def __init__(self, source, x=0.0, y=0.0, fit_width=None, fit_height=None):
        super().__init__(x, y)
        self.source = source
        self.anchor_x = float(x)
        self.anchor_y = float(y)

        if fit_width is not None and fit_height is not None:
            # Deferred until decode completes
            source.when_ready(lambda: self.scale_to_fit(fit_width, fit_height))

    def is_ready(self):
        return self.source.is_ready()

    def intrinsic_size(self):
        return self.source.width, self.source.height

    def content_size(self):
        width, height = self.intrinsic_size()
        return width * self.scale_x, height * self.scale_y

    def scale_to_fit(self, width, height):
        """Shrink (never enlarge) to fit width x height, then center on the anchor."""
        img_w, img_h = self.intrinsic_size()
        factor = fit_scale(img_w, img_h, width, height)
        if factor != 1.0:
            self.scale_x = factor
            self.scale_y = factor
        self.center_on(self.anchor_x, self.anchor_y)

    def draw(self, painter):
        if not self.is_ready():
            return

        img_w, img_h = self.intrinsic_size()
        center = self.get_center()

        painter.save()
        painter.translate(center.x, center.y)
        painter.rotate(math.degrees(self.rotation))
        painter.scale(self.scale_x, self.scale_y)
        painter.drawImage(QRectF(-img_w / 2, -img_h / 2, img_w, img_h), self.source.image)
        painter.restore()
