"""
Data structures passed between the update step and the driving loop.
"""

from typing import Dict, Any
import torch
from torch import Tensor
from dataclasses import dataclass, field


@dataclass
class UpdateResult:
    """Output of one update step.

    Attributes:
        sums: (K, M) summed positions of the points nearest to each center
        counts: (K,) number of points nearest to each center
        info: Strategy-specific diagnostics (e.g. pruning statistics)
    """
    sums: Tensor
    counts: Tensor
    info: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        assert self.sums.dim() == 2
        assert self.counts.shape == (self.sums.shape[0],)

    @property
    def n_clusters(self) -> int:
        return self.sums.shape[0]

    @property
    def n_points(self) -> int:
        return int(self.counts.sum().item())


@dataclass
class ClusterState:
    """Centers and the number of points assigned to each at a given iteration."""

    centers: Tensor  # (K, M)
    counts: Tensor   # (K,)

    def __post_init__(self):
        assert self.centers.dim() == 2
        assert self.counts.shape == (self.centers.shape[0],)

    @property
    def n_clusters(self) -> int:
        return self.centers.shape[0]

    @property
    def dimension(self) -> int:
        return self.centers.shape[1]

    @classmethod
    def from_update(cls, previous_centers: Tensor, result: UpdateResult) -> 'ClusterState':
        """New centers as the means of their points.

        A center without points keeps its previous position.
        """
        if result.n_clusters != previous_centers.shape[0]:
            raise ValueError(f"Update step returned {result.n_clusters} clusters, "
                             f"expected {previous_centers.shape[0]}")
        counts = result.counts
        nonempty = counts > 0
        centers = previous_centers.clone()
        centers[nonempty] = result.sums[nonempty] / counts[nonempty].unsqueeze(1).to(result.sums.dtype)
        return cls(centers=centers, counts=counts.clone())

    @property
    def empty_clusters(self) -> Tensor:
        """Indices of centers that received no points."""
        return torch.nonzero(self.counts == 0).flatten()


@dataclass
class AlgorithmState:
    """State of the clustering loop after one iteration.

    Used for convergence checking and debugging.
    """
    iteration: int
    cluster_state: ClusterState
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
