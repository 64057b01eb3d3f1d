"""
Initialization from explicit centers.

Useful for warm starts and for reproducing a known center trajectory.
"""

from typing import Optional, Union
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import ClusterState
from ..utils.validation import validate_data


class FromPreviousInit(InitializationStrategy):
    """Initialize from given centers or from a previous ClusterState."""

    def __init__(self, initial_state: Union[Tensor, np.ndarray, list, ClusterState]):
        """
        Args:
            initial_state: (K, M) centers or the state of an earlier run
        """
        if isinstance(initial_state, ClusterState):
            initial_state = initial_state.centers
        self.initial_centers = validate_data(initial_state)

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Return a copy of the stored centers after checking their shape."""
        centers = self.initial_centers

        if centers.shape[0] != n_clusters:
            raise ValueError(f"Initial centers has {centers.shape[0]} clusters, "
                             f"but n_clusters={n_clusters}")
        if centers.shape[1] != points.shape[1]:
            raise ValueError(f"Initial centers has dimension {centers.shape[1]}, "
                             f"but data has dimension {points.shape[1]}")

        return centers.clone()
