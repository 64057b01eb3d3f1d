"""Utility functions for the mrkd k-means."""

from .validation import (
    validate_data,
    check_n_clusters,
    check_random_state,
    check_dimension,
    validate_init_params
)

from .convergence import (
    ExactCenterEquality,
    CenterShift
)

__all__ = [
    # Validation
    'validate_data',
    'check_n_clusters',
    'check_random_state',
    'check_dimension',
    'validate_init_params',

    # Convergence criteria
    'ExactCenterEquality',
    'CenterShift'
]
