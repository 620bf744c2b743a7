"""
Unit tests for selection handles and the handle registry

Tests cover:
- Handle anchors on the padded box
- Priority order when hit circles overlap
- Hit testing on rotated nodes
- Configurable active handle set and radii
"""
import math
import pytest
from unittest.mock import MagicMock
from PyQt5.QtCore import Qt

from models.nodes import ImageNode, TextNode
from utils.transform_math import rotate_point_around
from components.transform_widgets import (
    HandleRegistry, TranslateHandle, DeleteHandle, ResizeHandle, RotateHandle
)


@pytest.fixture
def image_node(image_factory):
    """100x50 image at the origin, no padding"""
    return ImageNode(image_factory(100, 50), 0, 0)


def kind_at(registry, node, x, y):
    handle = registry.get_handle_at_pos(node, x, y)
    return handle.kind if handle else None


# ══════════════════════════════════════════════════════════════════════════
# Registry hit testing
# ══════════════════════════════════════════════════════════════════════════

class TestHandleHitTesting:

    def test_each_corner(self, image_node):
        registry = HandleRegistry()
        assert kind_at(registry, image_node, 0, 0) == 'translate'
        assert kind_at(registry, image_node, 100, 0) == 'delete'
        assert kind_at(registry, image_node, 100, 50) == 'resize'
        assert kind_at(registry, image_node, 0, 50) == 'rotate'

    def test_center_misses(self, image_node):
        assert HandleRegistry().get_handle_at_pos(image_node, 50, 25) is None

    def test_translate_has_larger_radius(self, image_node):
        registry = HandleRegistry()
        assert kind_at(registry, image_node, 18, 0) == 'translate'
        assert kind_at(registry, image_node, 100, 14) is None

    def test_priority_on_overlap(self, image_factory):
        # 10x10 node: translate and delete circles overlap
        node = ImageNode(image_factory(10, 10), 0, 0)
        assert kind_at(HandleRegistry(), node, 10, 0) == 'translate'
        assert kind_at(HandleRegistry(active_kinds=['delete']), node, 10, 0) == 'delete'

    def test_text_handles_sit_on_padded_box(self, metrics):
        node = TextNode("Hello", 100, 100, metrics=metrics)
        padded = node.get_selection_bounds()
        registry = HandleRegistry()
        assert kind_at(registry, node, padded.x + padded.width, padded.y) == 'delete'
        assert kind_at(registry, node, 150, 100) is None

    def test_rotated_node(self, image_node):
        image_node.rotation = math.pi / 2
        bounds = image_node.get_selection_bounds()
        corner = rotate_point_around((100, 0), bounds.center, bounds.rotation)
        registry = HandleRegistry()
        assert kind_at(registry, image_node, corner.x, corner.y) == 'delete'
        # The unrotated corner is no longer a handle
        assert kind_at(registry, image_node, 100, 0) is None


# ══════════════════════════════════════════════════════════════════════════
# Registry configuration
# ══════════════════════════════════════════════════════════════════════════

class TestRegistryConfig:

    def test_default_order(self):
        kinds = [h.kind for h in HandleRegistry().get_handles()]
        assert kinds == ['translate', 'delete', 'resize', 'rotate']

    def test_subset_keeps_priority_order(self):
        kinds = [h.kind for h in HandleRegistry(active_kinds=['rotate', 'translate']).get_handles()]
        assert kinds == ['translate', 'rotate']

    def test_inactive_handle_is_not_hit(self, image_node):
        registry = HandleRegistry(active_kinds=['rotate'])
        assert registry.get_handle_at_pos(image_node, 0, 0) is None
        assert registry.get('translate') is None

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            HandleRegistry(active_kinds=['scale'])

    def test_radius_override(self, image_node):
        registry = HandleRegistry(radii={'delete': 30})
        assert registry.get('delete').radius == 30
        assert kind_at(registry, image_node, 100, 28) == 'delete'

    def test_draw_box_and_handles(self, image_node):
        painter = MagicMock()
        HandleRegistry().draw(painter, image_node)
        assert painter.drawRect.called
        assert painter.drawEllipse.call_count >= 4
        assert painter.save.call_count == painter.restore.call_count


# ══════════════════════════════════════════════════════════════════════════
# Handle classes
# ══════════════════════════════════════════════════════════════════════════

class TestHandleClasses:

    @pytest.mark.parametrize("handle_cls, cursor", [
        (TranslateHandle, Qt.OpenHandCursor),
        (DeleteHandle, Qt.PointingHandCursor),
        (ResizeHandle, Qt.SizeFDiagCursor),
        (RotateHandle, Qt.CrossCursor),
    ])
    def test_cursor_hints(self, handle_cls, cursor):
        assert handle_cls().get_cursor() == cursor

    def test_only_delete_removes(self):
        assert DeleteHandle.removes_node
        assert not TranslateHandle.removes_node

    def test_default_radii(self):
        assert TranslateHandle().radius == 20
        assert RotateHandle().radius == 12
