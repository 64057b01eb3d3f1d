"""
Exact median selection for building balanced kd-splits.

Quickselect with a uniformly random pivot and Lomuto partitioning, see
https://en.wikipedia.org/wiki/Quickselect
"""

from typing import List, Optional
import torch
from torch import Tensor


def _random_index(left: int, right: int, generator: Optional[torch.Generator]) -> int:
    """Uniform integer in [left, right]."""
    return int(torch.randint(left, right + 1, (1,), generator=generator).item())


def partition(values: List[float], left: int, right: int, pivot_index: int) -> int:
    """Lomuto partition of values[left..right] around values[pivot_index].

    Elements strictly less than the pivot value end up before the returned
    index, the pivot itself lands on it.
    """
    pivot_value = values[pivot_index]
    values[pivot_index], values[right] = values[right], values[pivot_index]
    store_index = left
    for i in range(left, right):
        if values[i] < pivot_value:
            values[store_index], values[i] = values[i], values[store_index]
            store_index += 1
    values[right], values[store_index] = values[store_index], values[right]
    return store_index


def select(values: List[float], k: int, generator: Optional[torch.Generator] = None) -> float:
    """k-th smallest element of `values` (0-based). Reorders `values` in place."""
    left = 0
    right = len(values) - 1

    while True:
        if left == right:
            return values[left]
        pivot_index = _random_index(left, right, generator)
        sorted_pivot_index = partition(values, left, right, pivot_index)
        if k == sorted_pivot_index:
            return values[k]
        elif k < sorted_pivot_index:
            right = sorted_pivot_index - 1
        else:
            left = sorted_pivot_index + 1


def median(points: Tensor, dimension: int,
           generator: Optional[torch.Generator] = None) -> float:
    """Exact lower median of one coordinate of a point set.

    Args:
        points: (n, M) point set, left untouched
        dimension: Coordinate to take the median of
        generator: Source of pivot indices

    Returns:
        Element of rank (n - 1) // 2 of the sorted coordinates
    """
    if points.dim() != 2 or points.shape[0] == 0:
        raise ValueError("median requires a non-empty 2D point set")
    if not 0 <= dimension < points.shape[1]:
        raise ValueError(f"dimension {dimension} out of range for "
                         f"{points.shape[1]}-dimensional points")

    values = points[:, dimension].tolist()
    if len(values) == 1:
        return values[0]
    return select(values, (len(values) - 1) // 2, generator)
