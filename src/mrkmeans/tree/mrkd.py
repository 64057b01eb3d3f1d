"""
Multi-resolution kd-tree (mrkd-tree).

A kd-tree over a fixed point set whose nodes additionally cache the number
of points, the center of mass and the sum of Euclidean norms of their
subtree, as described in Section 3 of (Pelleg & Moore, 1999). The tree is
built once per clustering run and never modified afterwards.

References:
    Pelleg, D., & Moore, A. (1999). Accelerating exact k-means algorithms
    with geometric reasoning. Proceedings of the Fifth ACM SIGKDD
    International Conference on Knowledge Discovery and Data Mining, 277-281.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union
import torch
from torch import Tensor

from ..geometry.hyper_rectangle import HyperRectangle
from ..geometry.quickselect import median
from ..utils.validation import validate_data


@dataclass(frozen=True, eq=False)
class Leaf:
    """Terminal node holding exactly one input point."""
    point: Tensor  # (M,)


@dataclass(frozen=True, eq=False)
class NonLeaf:
    """Internal node: points with coordinate <= value on dimension go left."""
    dimension: int
    value: float
    left: 'Tree'
    right: 'Tree'


Node = Union[Leaf, NonLeaf]


@dataclass(frozen=True, eq=False)
class Tree:
    """Node of the mrkd-tree together with its cached statistics.

    Attributes:
        rectangle: Bounding box of every point below this node
        number_of_points: Number of points below this node
        center_of_mass: (M,) mean of those points
        euclidean_norm_sum: Sum of the points' distances to the origin
        node: Either a Leaf or a NonLeaf
    """
    rectangle: HyperRectangle
    number_of_points: int
    center_of_mass: Tensor
    euclidean_norm_sum: float
    node: Node

    @classmethod
    def initialize(cls, points: Tensor,
                   generator: Optional[torch.Generator] = None) -> 'Tree':
        """Build the tree over a non-empty (n, M) point set.

        Args:
            points: Input points
            generator: Random source for median pivots; the tree shape is a
                deterministic function of the generator state

        Returns:
            Root of the tree
        """
        points = validate_data(points)
        rectangle = HyperRectangle.from_points(points)
        return cls.make_node(points, rectangle, 0, generator)

    @classmethod
    def make_node(cls, points: Tensor, rectangle: HyperRectangle,
                  dimension: int, generator: Optional[torch.Generator]) -> 'Tree':
        """Recursively build the subtree over `points`, splitting on `dimension` first."""
        n_points, n_dims = points.shape
        center_of_mass = points.mean(dim=0)
        norm_sum = torch.linalg.vector_norm(points, dim=1).sum().item()

        if n_points == 1:
            node = Leaf(points[0].clone())
        else:
            d, value, left_mask = cls._split_points(points, dimension, generator)
            left_rect, right_rect = rectangle.split(d, value)
            next_d = (d + 1) % n_dims
            node = NonLeaf(
                dimension=d,
                value=value,
                left=cls.make_node(points[left_mask], left_rect, next_d, generator),
                right=cls.make_node(points[~left_mask], right_rect, next_d, generator),
            )

        return cls(
            rectangle=rectangle,
            number_of_points=n_points,
            center_of_mass=center_of_mass,
            euclidean_norm_sum=norm_sum,
            node=node,
        )

    @staticmethod
    def _split_points(points: Tensor, dimension: int,
                      generator: Optional[torch.Generator]) -> Tuple[int, float, Tensor]:
        """Choose the split for a node with at least two points.

        Returns:
            (dimension, value, left_mask) with both sides non-empty
        """
        n_points, n_dims = points.shape

        for offset in range(n_dims):
            d = (dimension + offset) % n_dims
            coords = points[:, d]
            value = median(points, d, generator)

            # Ties go left, so a median equal to the maximum empties the right side.
            # Fall back to the next smaller coordinate which keeps ties left.
            if not (coords > value).any():
                below = coords[coords < value]
                if below.numel() == 0:
                    continue
                value = below.max().item()

            return d, value, coords <= value

        # Coincident points: split by position
        left_mask = torch.zeros(n_points, dtype=torch.bool)
        left_mask[:(n_points + 1) // 2] = True
        return dimension, points[0, dimension].item(), left_mask

    @property
    def dimension(self) -> int:
        return self.center_of_mass.shape[0]

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.node, Leaf)

    def points(self) -> Iterator[Tensor]:
        """Depth-first iterator over every point below this node, left first."""
        if isinstance(self.node, Leaf):
            yield self.node.point
        else:
            yield from self.node.left.points()
            yield from self.node.right.points()

    def leaves(self) -> Iterator['Tree']:
        """Depth-first iterator over the leaf nodes."""
        if isinstance(self.node, Leaf):
            yield self
        else:
            yield from self.node.left.leaves()
            yield from self.node.right.leaves()

    def depth(self) -> int:
        """Length of the longest root-to-leaf path (a single leaf has depth 0)."""
        if isinstance(self.node, Leaf):
            return 0
        return 1 + max(self.node.left.depth(), self.node.right.depth())

    def __len__(self) -> int:
        return self.number_of_points

    def __repr__(self) -> str:
        kind = 'Leaf' if self.is_leaf else 'NonLeaf'
        return (f"Tree({kind}, number_of_points={self.number_of_points}, "
                f"rectangle={self.rectangle})")
