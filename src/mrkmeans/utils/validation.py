"""
Input validation utilities.

Every public entry point funnels its arguments through these helpers so that
caller contract violations (empty point sets, wrong shapes, mismatched
dimensionality) surface as exceptions before any tree is built.
"""

from typing import Optional, Union, List
import torch
from torch import Tensor
import numpy as np


ArrayLike = Union[Tensor, np.ndarray, list, tuple]


def validate_data(X: ArrayLike,
                  dtype: torch.dtype = torch.float64,
                  ensure_2d: bool = True,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert input data to a CPU tensor.

    Args:
        X: Input data (tensor, numpy array, or nested sequence)
        dtype: Target data type
        ensure_2d: Whether to ensure 2D shape
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        Validated tensor

    Raises:
        ValueError: If validation fails
        TypeError: If X cannot be converted
    """
    if isinstance(X, Tensor):
        X = X.detach().to(dtype=dtype, device='cpu')
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype)
    elif isinstance(X, (list, tuple)):
        X = torch.tensor(X, dtype=dtype)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if ensure_2d:
        if X.dim() == 1:
            X = X.unsqueeze(1)
        elif X.dim() != 2:
            raise ValueError(f"Expected 2D array, got {X.dim()}D")

        n_samples, n_features = X.shape

        if n_samples < ensure_min_samples:
            raise ValueError(f"Found {n_samples} samples, but need at least "
                             f"{ensure_min_samples}")

        if n_features < ensure_min_features:
            raise ValueError(f"Found {n_features} features, but need at least "
                             f"{ensure_min_features}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Raises:
        TypeError: If n_clusters is not an int
        ValueError: If n_clusters is not in [1, n_samples]
    """
    if not isinstance(n_clusters, (int, np.integer)) or isinstance(n_clusters, bool):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a generator from a random state.

    None seeds a fresh generator from system entropy.
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, (int, np.integer)):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def check_dimension(centers: Tensor, dimension: int) -> None:
    """Ensure a (K, M) center tensor matches M-dimensional data."""
    if centers.dim() != 2 or centers.shape[0] == 0:
        raise ValueError(f"Centers must be a non-empty 2D tensor, got shape "
                         f"{tuple(centers.shape)}")
    if centers.shape[1] != dimension:
        raise ValueError(f"Centers have dimension {centers.shape[1]}, "
                         f"but data has dimension {dimension}")


def validate_init_params(init: Union[str, ArrayLike],
                         n_clusters: int,
                         n_features: int) -> Union[str, Tensor]:
    """Validate initialization parameters.

    Args:
        init: Initialization method or initial centers
        n_clusters: Number of clusters
        n_features: Number of features

    Returns:
        The method name or a (n_clusters, n_features) tensor
    """
    if isinstance(init, str):
        valid_methods = ['random']
        if init not in valid_methods:
            raise ValueError(f"init must be one of {valid_methods}, got '{init}'")
        return init

    elif isinstance(init, (Tensor, np.ndarray, list, tuple)):
        init_tensor = validate_data(init, ensure_2d=True)

        if tuple(init_tensor.shape) != (n_clusters, n_features):
            raise ValueError(f"init array must have shape ({n_clusters}, {n_features}), "
                             f"got {tuple(init_tensor.shape)}")
        return init_tensor

    else:
        raise TypeError(f"init must be str or array, got {type(init)}")
