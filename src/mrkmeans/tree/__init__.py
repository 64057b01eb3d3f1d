"""Spatial index over the input points."""

from .mrkd import Tree, Leaf, NonLeaf

__all__ = [
    'Tree',
    'Leaf',
    'NonLeaf'
]
