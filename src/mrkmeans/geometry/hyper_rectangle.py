"""
Axis-aligned hyper-rectangles.

The bounding boxes stored at every node of the mrkd-tree. All operations
follow the definitions of Section 2 in (Pelleg & Moore, 1999).
"""

from typing import Tuple
import torch
from torch import Tensor


class HyperRectangle:
    """Axis-aligned box in M-dimensional space.

    Defined by a minimum and a maximum corner with minimum[d] <= maximum[d]
    for every dimension d. Instances are never mutated; splitting creates
    new boxes.
    """

    __slots__ = ('_minimum', '_maximum')

    def __init__(self, minimum: Tensor, maximum: Tensor):
        """
        Args:
            minimum: (M,) lower corner
            maximum: (M,) upper corner
        """
        minimum = torch.as_tensor(minimum, dtype=torch.float64)
        maximum = torch.as_tensor(maximum, dtype=torch.float64)

        if minimum.dim() != 1 or minimum.shape != maximum.shape:
            raise ValueError(f"Corners must be 1D with equal shape, got "
                             f"{tuple(minimum.shape)} and {tuple(maximum.shape)}")
        if (minimum > maximum).any():
            raise ValueError("Minimum corner exceeds maximum corner")

        self._minimum = minimum.clone()
        self._maximum = maximum.clone()

    @classmethod
    def from_points(cls, points: Tensor) -> 'HyperRectangle':
        """Tightest box containing every row of a non-empty (n, M) point set."""
        if points.dim() != 2 or points.shape[0] == 0:
            raise ValueError("Expected a non-empty 2D point set")
        return cls(points.min(dim=0).values, points.max(dim=0).values)

    @property
    def minimum(self) -> Tensor:
        return self._minimum.clone()

    @property
    def maximum(self) -> Tensor:
        return self._maximum.clone()

    @property
    def dimension(self) -> int:
        return self._minimum.shape[0]

    def closest(self, point: Tensor) -> Tensor:
        """Point of the box nearest to `point`.

        Time complexity: O(M)
        """
        if point.shape[-1] != self.dimension:
            raise ValueError(f"Point has dimension {point.shape[-1]}, "
                             f"but the box has dimension {self.dimension}")
        return torch.clamp(point, self._minimum, self._maximum)

    def distance(self, point: Tensor) -> float:
        """Euclidean distance from `point` to the box, zero when inside.

        Time complexity: O(M)
        """
        return torch.linalg.vector_norm(self.closest(point) - point).item()

    def split(self, dimension: int, value: float) -> Tuple['HyperRectangle', 'HyperRectangle']:
        """Cut the box at `value` along `dimension`.

        Returns:
            (lower, upper) where lower keeps coordinates <= value and
            upper keeps the rest
        """
        lower_max = self._maximum.clone()
        lower_max[dimension] = value
        upper_min = self._minimum.clone()
        upper_min[dimension] = value

        return (
            HyperRectangle(self._minimum, lower_max),
            HyperRectangle(upper_min, self._maximum),
        )

    def width(self) -> Tensor:
        """Per-dimension extent (maximum - minimum)."""
        return self._maximum - self._minimum

    def corner(self, toward: Tensor) -> Tensor:
        """Vertex selected per dimension: maximum where `toward` is True, else minimum."""
        return torch.where(toward, self._maximum, self._minimum)

    def contains(self, point: Tensor) -> bool:
        """Inclusive containment test for a single point."""
        return bool(((point >= self._minimum) & (point <= self._maximum)).all())

    def contains_box(self, other: 'HyperRectangle') -> bool:
        """Whether `other` lies entirely inside this box."""
        return bool((other._minimum >= self._minimum).all()
                    and (other._maximum <= self._maximum).all())

    def __eq__(self, other) -> bool:
        if not isinstance(other, HyperRectangle):
            return NotImplemented
        return (torch.equal(self._minimum, other._minimum)
                and torch.equal(self._maximum, other._maximum))

    def __hash__(self):
        return hash((tuple(self._minimum.tolist()), tuple(self._maximum.tolist())))

    def __repr__(self) -> str:
        return f"HyperRectangle({self._minimum.tolist()}, {self._maximum.tolist()})"
