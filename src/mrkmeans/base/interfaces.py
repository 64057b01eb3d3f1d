"""
Core interfaces for the mrkd-accelerated k-means.

This module defines the abstract base classes the estimator is assembled
from, so that the pruned and the brute-force update steps share one driving
loop.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import torch
from torch import Tensor

from .data_structures import UpdateResult


class UpdateStrategy(ABC):
    """Computes, for fixed centers, the per-center sums and counts of nearest points.

    `prepare` is called once per fit with the full data set; `compute` is
    called once per iteration and must not modify the centers it is given.
    """

    @abstractmethod
    def prepare(self, points: Tensor,
                generator: Optional[torch.Generator] = None) -> None:
        """Precompute anything that depends on the points only.

        Args:
            points: (n, M) data points
            generator: Random source for randomized preprocessing
        """
        pass

    @abstractmethod
    def compute(self, centers: Tensor) -> UpdateResult:
        """Aggregate the points around the given centers.

        Args:
            centers: (K, M) current centers

        Returns:
            UpdateResult with (K, M) sums and (K,) counts
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for center initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Choose initial centers.

        Args:
            points: (n, M) data points
            n_clusters: Number of centers K
            generator: Random source

        Returns:
            (K, M) tensor of initial centers
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary with at least 'iteration',
                'previous_centers' and 'centers'

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
