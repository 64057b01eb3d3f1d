"""Geometric primitives used by the mrkd-tree."""

from .hyper_rectangle import HyperRectangle
from .quickselect import median, select, partition

__all__ = [
    'HyperRectangle',
    'median',
    'select',
    'partition'
]
