"""
Brute-force update step (Lloyd, 1982).

Every point is compared against every center on every iteration. Kept as
the reference the tree-pruned update must agree with.
"""

from typing import Optional, Tuple
import torch
from torch import Tensor

from ..base.interfaces import UpdateStrategy
from ..base.data_structures import UpdateResult
from ..utils.validation import validate_data, check_dimension


def nearest_centers(points: Tensor, centers: Tensor, batch_size: int = 4096) -> Tensor:
    """Index of the nearest center for every point, first minimum on ties.

    Args:
        points: (n, M) data points
        centers: (K, M) centers
        batch_size: Number of points compared at once

    Returns:
        (n,) long tensor of center indices
    """
    labels = torch.empty(points.shape[0], dtype=torch.long)
    for start in range(0, points.shape[0], batch_size):
        batch = points[start:start + batch_size]
        distances = torch.linalg.vector_norm(
            batch.unsqueeze(1) - centers.unsqueeze(0), dim=2
        )
        labels[start:start + batch_size] = torch.argmin(distances, dim=1)
    return labels


def naive_update(points: Tensor, centers: Tensor,
                 batch_size: int = 4096) -> Tuple[Tensor, Tensor, Tensor]:
    """Assign every point to its nearest center and aggregate.

    Returns:
        sums: (K, M) summed positions per center
        counts: (K,) point counts per center
        labels: (n,) nearest center of every point
    """
    check_dimension(centers, points.shape[1])
    n_clusters = centers.shape[0]

    labels = nearest_centers(points, centers, batch_size)
    sums = torch.zeros(n_clusters, points.shape[1], dtype=points.dtype)
    sums.index_add_(0, labels, points)
    counts = torch.bincount(labels, minlength=n_clusters)
    return sums, counts, labels


class NaiveUpdate(UpdateStrategy):
    """Update step scanning all points against all centers."""

    def __init__(self, batch_size: int = 4096):
        """
        Args:
            batch_size: Number of points compared against the centers at once
        """
        self.batch_size = batch_size
        self._points: Optional[Tensor] = None

    def prepare(self, points: Tensor,
                generator: Optional[torch.Generator] = None) -> None:
        """Keep a reference to the points; nothing is precomputed."""
        self._points = validate_data(points)

    def compute(self, centers: Tensor) -> UpdateResult:
        if self._points is None:
            raise RuntimeError("prepare must be called before compute")

        sums, counts, labels = naive_update(self._points, centers, self.batch_size)
        return UpdateResult(
            sums=sums,
            counts=counts,
            info={'distance_computations': self._points.shape[0] * centers.shape[0]}
        )
