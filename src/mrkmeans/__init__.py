"""
mrkmeans: exact k-means accelerated with geometric reasoning.

Implements the "simple" algorithm of Pelleg & Moore (1999): a
multi-resolution kd-tree caches per-region statistics of the points, and
each k-means iteration assigns whole regions to a center at once whenever
that center provably owns the region. The result is identical to Lloyd's
algorithm on the same center trajectory.

Example usage:
    >>> import torch
    >>> from mrkmeans import KMeans
    >>>
    >>> X = torch.randn(1000, 2, dtype=torch.float64)
    >>>
    >>> kmeans = KMeans(n_clusters=4, random_state=0)
    >>> kmeans.fit(X)
    >>>
    >>> labels = kmeans.labels_
"""

__version__ = '0.1.0'

from .algorithms.kmeans import KMeans

# Core data structures
from .geometry import HyperRectangle, median
from .tree import Tree, Leaf, NonLeaf
from .assignments import Centers, TreeUpdate, NaiveUpdate

from .io import read_points, write_centers

__all__ = [
    # Algorithms
    'KMeans',

    # Core
    'HyperRectangle',
    'median',
    'Tree',
    'Leaf',
    'NonLeaf',
    'Centers',

    # Update strategies
    'TreeUpdate',
    'NaiveUpdate',

    # I/O
    'read_points',
    'write_centers',

    # Version
    '__version__'
]
