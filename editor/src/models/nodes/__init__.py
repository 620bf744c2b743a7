"""
Canvas node variants.

A single shared base (Node) with two leaves: TextNode and ImageNode.
"""

from .node import Node
from .text_node import TextNode
from .image_node import ImageNode

__all__ = ['Node', 'TextNode', 'ImageNode']
