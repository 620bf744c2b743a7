"""
Canvas Node Editor - Data Models

This module contains the data model classes for canvas content.
This is the MODEL in MVC architecture.

Public API: geometry value types are re-exported here. Import node
variants from models.nodes and the caret model from models.text_caret
(kept out of this package init so utils can depend on models.transform
without a circular import).
"""

from .transform import Vec2, Bounds, GestureAnchor

__all__ = ['Vec2', 'Bounds', 'GestureAnchor']
