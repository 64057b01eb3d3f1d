"""Base classes and data structures for the clustering loop."""

from .interfaces import (
    UpdateStrategy,
    InitializationStrategy,
    ConvergenceCriterion
)

from .data_structures import (
    UpdateResult,
    ClusterState,
    AlgorithmState
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'UpdateStrategy',
    'InitializationStrategy',
    'ConvergenceCriterion',

    # Data structures
    'UpdateResult',
    'ClusterState',
    'AlgorithmState',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
