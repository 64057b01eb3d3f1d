"""Update strategies: tree-pruned and brute force."""

from .centers import Centers
from .pruned import TreeUpdate
from .naive import NaiveUpdate, naive_update, nearest_centers

__all__ = [
    'Centers',
    'TreeUpdate',
    'NaiveUpdate',
    'naive_update',
    'nearest_centers'
]
