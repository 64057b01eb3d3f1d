"""
Random initialization strategy.

Selects random points from the dataset as initial cluster centers.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..utils.validation import check_n_clusters


class RandomInit(InitializationStrategy):
    """Random initialization by selecting points from the dataset.

    Selects n_clusters distinct points (without replacement) as initial centers.
    """

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Initialize centers with random points.

        Args:
            points: (n, M) data points
            n_clusters: Number of clusters
            generator: Random source

        Returns:
            (n_clusters, M) tensor of centers
        """
        check_n_clusters(n_clusters, points.shape[0])

        indices = torch.randperm(points.shape[0], generator=generator)[:n_clusters]
        return points[indices].clone()
