"""
Base class for the k-means estimators.

Provides the fixed-point loop shared by the tree-pruned and the brute-force
variants: compute per-center aggregates, move every center to the mean of
its points, repeat until the centers stop changing.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import numpy as np
import time
import warnings

from .interfaces import UpdateStrategy, InitializationStrategy, ConvergenceCriterion
from .data_structures import ClusterState, AlgorithmState
from ..utils.validation import validate_data, check_n_clusters, check_random_state


class BaseClusteringAlgorithm:
    """Base class implementing the Lloyd fixed-point iteration.

    Subclasses need to specify:
    - Update strategy
    - Initialization strategy
    - Convergence criterion
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 300,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum iterations
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for initialization and tree
                construction (None for fresh entropy)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_state = random_state

        # These will be set by subclasses
        self.update_strategy: Optional[UpdateStrategy] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None

        # Algorithm state
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self._state: Optional[ClusterState] = None

    @abstractmethod
    def _create_components(self, data: Tensor) -> None:
        """Create algorithm-specific components for (n, M) data.

        Subclasses must implement this to instantiate:
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        """
        pass

    def fit(self, X: Union[Tensor, np.ndarray], y=None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, M) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X: Union[Tensor, np.ndarray], y=None) -> Tensor:
        """Fit and return cluster assignments."""
        self._fit(X)
        return self.labels_

    def predict(self, X: Union[Tensor, np.ndarray]) -> Tensor:
        """Nearest fitted center for every row of X.

        Returns:
            (n,) tensor of cluster indices
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        if X.shape[1] != self._state.dimension:
            raise ValueError(f"Expected dimension {self._state.dimension}, got {X.shape[1]}")

        return self._labels(X, self._state.centers)

    @abstractmethod
    def _labels(self, X: Tensor, centers: Tensor) -> Tensor:
        """Final point-to-center labels for the given centers."""
        pass

    def _fit(self, X: Union[Tensor, np.ndarray]) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the fixed-point iteration."""
        X = self._validate_data(X)
        n_points, dimension = X.shape
        check_n_clusters(self.n_clusters, n_points)

        self._create_components(X)
        generator = check_random_state(self.random_state)

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters on {n_points} points...")

        start_time = time.time()
        centers = self.initialization_strategy.initialize(X, self.n_clusters, generator)

        prepare_start = time.time()
        self.update_strategy.prepare(X, generator)
        if self.verbose:
            print(f"Prepared {type(self.update_strategy).__name__} "
                  f"({time.time() - prepare_start:.3f}s)")

        self.n_iter_ = 0
        self.history_ = []
        self.converged_ = False
        self.convergence_criterion.reset()
        state = ClusterState(centers=centers,
                             counts=torch.zeros(self.n_clusters, dtype=torch.long))

        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            result = self.update_strategy.compute(state.centers)
            if result.n_points != n_points:
                raise RuntimeError(f"Update step assigned {result.n_points} of {n_points} points")
            new_state = ClusterState.from_update(state.centers, result)

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'previous_centers': state.centers,
                'centers': new_state.centers,
                'cluster_state': new_state
            })

            self.history_.append(AlgorithmState(
                iteration=iteration,
                cluster_state=new_state,
                converged=converged,
                metadata=dict(result.info)
            ))
            state = new_state
            self.n_iter_ = iteration + 1

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: {self._describe(result.info)} "
                      f"empty={len(state.empty_clusters)} ({iter_time:.3f}s)")

            if converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        if not self.converged_:
            warnings.warn(f"Failed to converge after {self.max_iter} iterations")

        self._state = state
        self.labels_ = self._labels(X, state.centers)
        self.fitted_ = True

        if self.verbose:
            print(f"Total fitting time: {time.time() - start_time:.3f}s")

        return self

    @staticmethod
    def _describe(info: Dict[str, Any]) -> str:
        return ' '.join(f"{key}={value}" for key, value in info.items())

    def _validate_data(self, X: Union[Tensor, np.ndarray]) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=torch.float64, ensure_2d=True)

    @property
    def cluster_centers_(self) -> Tensor:
        """Fitted centers, (K, M)."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._state.centers.clone()

    @property
    def counts_(self) -> Tensor:
        """Number of points assigned to each center in the last iteration."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._state.counts.clone()

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'verbose': self.verbose,
            'random_state': self.random_state
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter '{key}' for {type(self).__name__}")
            setattr(self, key, value)
        return self
