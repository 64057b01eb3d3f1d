"""
K-means clustering algorithm.

Exact k-means whose update step is either accelerated by an mrkd-tree
("simple", Pelleg & Moore 1999) or the plain brute-force scan ("naive",
Lloyd 1982). For the same initial centers both produce identical labels,
with centers equal up to floating-point summation order.
"""

from typing import Optional, Union, Dict, Any
import torch
from torch import Tensor
import numpy as np

from ..base.clustering_base import BaseClusteringAlgorithm
from ..assignments.centers import Centers
from ..assignments.pruned import TreeUpdate
from ..assignments.naive import NaiveUpdate, nearest_centers
from ..initialization.random import RandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import ExactCenterEquality, CenterShift
from ..utils.validation import validate_init_params


ALGORITHMS = ('simple', 'naive')
CONVERGENCE = ('exact', 'shift')


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    algorithm : str, default='simple'
        Update step:
        - 'simple' : tree-pruned assignment over an mrkd-tree
        - 'naive' : compare every point with every center
    init : str or array-like, default='random'
        Initialization method:
        - 'random' : distinct random data points
        - array of shape (n_clusters, n_features) : Use as initial centers
    max_iter : int, default=300
        Maximum number of iterations
    convergence : str, default='exact'
        - 'exact' : stop when the centers are bit-identical to the previous ones
        - 'shift' : stop when no center moved more than `tol`
    tol : float, default=1e-8
        Tolerance for convergence='shift'
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random seed for reproducibility

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centers
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    counts_ : Tensor of shape (n_clusters,)
        Number of training points per cluster
    inertia_ : float
        Sum of squared distances to nearest cluster center
    n_iter_ : int
        Number of iterations run
    converged_ : bool
        Whether the convergence criterion was met within max_iter
    """

    def __init__(self,
                 n_clusters: int,
                 algorithm: str = 'simple',
                 init: Union[str, Tensor, np.ndarray] = 'random',
                 max_iter: int = 300,
                 convergence: str = 'exact',
                 tol: float = 1e-8,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state
        )
        self.algorithm = algorithm
        self.init = init
        self.convergence = convergence
        self.tol = tol

        self.labels_ = None
        self.inertia_ = None

    def _create_components(self, data: Tensor) -> None:
        """Create K-means specific components."""
        # Update strategy
        if self.algorithm == 'simple':
            self.update_strategy = TreeUpdate()
        elif self.algorithm == 'naive':
            self.update_strategy = NaiveUpdate()
        else:
            raise ValueError(f"Unknown algorithm: {self.algorithm}, "
                             f"expected one of {ALGORITHMS}")

        # Initialization
        init = validate_init_params(self.init, self.n_clusters, data.shape[1])
        if isinstance(init, str):
            self.initialization_strategy = RandomInit()
        else:
            self.initialization_strategy = FromPreviousInit(init)

        # Convergence criterion
        if self.convergence == 'exact':
            self.convergence_criterion = ExactCenterEquality()
        elif self.convergence == 'shift':
            self.convergence_criterion = CenterShift(tol=self.tol)
        else:
            raise ValueError(f"Unknown convergence: {self.convergence}, "
                             f"expected one of {CONVERGENCE}")

    def _labels(self, X: Tensor, centers: Tensor) -> Tensor:
        """Label every point with its nearest center."""
        if self.algorithm == 'naive':
            return nearest_centers(X, centers)

        owners = Centers(centers)
        return torch.tensor([owners.closest(point) for point in X], dtype=torch.long)

    def fit(self, X: Union[Tensor, np.ndarray], y=None) -> 'KMeans':
        """Fit K-means clustering.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            Training data
        y : Ignored
            Not used, present for API consistency

        Returns
        -------
        self : KMeans
            Fitted estimator
        """
        X = self._validate_data(X)
        super().fit(X, y)
        self.inertia_ = self._inertia(X, self.labels_)
        return self

    def _inertia(self, X: Tensor, labels: Tensor) -> float:
        diff = X - self._state.centers[labels]
        return float((diff * diff).sum().item())

    def score(self, X: Union[Tensor, np.ndarray], y=None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Negative of sum of squared distances to centers
        """
        labels = self.predict(X)
        return -self._inertia(self._validate_data(X), labels)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        params = super().get_params(deep)
        params.update({
            'algorithm': self.algorithm,
            'init': self.init,
            'convergence': self.convergence,
            'tol': self.tol
        })
        return params
