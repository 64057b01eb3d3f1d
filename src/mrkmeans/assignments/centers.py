"""
Tree-pruned assignment of points to centers.

Implements the "simple" algorithm of Section 3 in (Pelleg & Moore, 1999):
whole hyper-rectangles of the mrkd-tree are assigned to a center at once
whenever that center provably owns the rectangle, so that their cached
statistics can be used without visiting the points inside.

References:
    Pelleg, D., & Moore, A. (1999). Accelerating exact k-means algorithms
    with geometric reasoning. Proceedings of the Fifth ACM SIGKDD
    International Conference on Knowledge Discovery and Data Mining, 277-281.
"""

from typing import Optional, Tuple, Dict, Any
import torch
from torch import Tensor

from ..geometry.hyper_rectangle import HyperRectangle
from ..tree.mrkd import Tree, Leaf
from ..utils.validation import validate_data, check_dimension


class Centers:
    """The set of K current centers C.

    The centers are copied on construction; later changes to the caller's
    tensor do not affect this object, and no method modifies it.
    """

    def __init__(self, centers: Tensor):
        """
        Args:
            centers: (K, M) current center positions
        """
        self._centers = validate_data(centers).clone()

    @property
    def n_clusters(self) -> int:
        return self._centers.shape[0]

    @property
    def dimension(self) -> int:
        return self._centers.shape[1]

    @property
    def positions(self) -> Tensor:
        return self._centers.clone()

    def closest(self, point: Tensor) -> int:
        """Index of the center nearest to `point`; the lowest index wins ties.

        Time complexity: O(K * M)
        """
        if point.dim() != 1:
            raise ValueError(f"Expected a single (M,) point, got shape {tuple(point.shape)}")
        check_dimension(self._centers, point.shape[0])
        distances = torch.linalg.vector_norm(self._centers - point, dim=1)
        return int(torch.argmin(distances).item())

    def owner(self, rectangle: HyperRectangle) -> Optional[int]:
        """owner_C(h) as defined in Section 3, Definition 1.

        Returns the index of the center that is nearest to every point of
        `rectangle`, or None if no single center can be proven to be.

        Time complexity: O(K * M)
        """
        check_dimension(self._centers, rectangle.dimension)
        c1 = self._min_distance(rectangle)
        if c1 is None:
            return None

        others = torch.ones(self.n_clusters, dtype=torch.bool)
        others[c1] = False
        if not bool(self._dominates(c1, rectangle)[others].all()):
            return None

        return c1

    def _min_distance(self, rectangle: HyperRectangle) -> Optional[int]:
        """Center with the smallest distance to the rectangle, None on a tie."""
        nearest = rectangle.closest(self._centers)
        distances = torch.linalg.vector_norm(nearest - self._centers, dim=1)
        min_distance = distances.min()
        if int((distances == min_distance).sum().item()) > 1:
            return None
        return int(torch.argmin(distances).item())

    def _dominates(self, c1: int, rectangle: HyperRectangle) -> Tensor:
        """Domination of every center by c1 over the rectangle (Section 3, Definition 3).

        For each center c2 the vertex of the rectangle furthest in the
        direction c2 - c1 is the point most favourable to c2; c1 dominates c2
        iff that vertex is still strictly closer to c1.

        Returns:
            (K,) boolean tensor, the entry for c1 itself is always False
        """
        center = self._centers[c1]
        vertices = rectangle.corner(center.unsqueeze(0) < self._centers)
        to_c1 = torch.linalg.vector_norm(vertices - center, dim=1)
        to_c2 = torch.linalg.vector_norm(vertices - self._centers, dim=1)
        return to_c1 < to_c2

    def update(self, tree: Tree) -> Tuple[Tensor, Tensor]:
        """Update(h, C) as defined in Section 3.1.

        Args:
            tree: Root of the subtree to assign

        Returns:
            sums: (K, M) summed positions of the points nearest to each center
            counts: (K,) number of points nearest to each center

        Time complexity: worst case O(R * K * M)
        """
        sums, counts, _ = self.update_with_info(tree)
        return sums, counts

    def update_with_info(self, tree: Tree) -> Tuple[Tensor, Tensor, Dict[str, Any]]:
        """Same as `update` and additionally reports how much work was pruned.

        Returns:
            sums, counts: As for `update`
            info: Dictionary with
                nodes_visited: nodes inspected
                nodes_pruned: non-leaf nodes resolved through their owner
                leaves_visited: leaves assigned point by point
                points_pruned: points covered by pruned nodes
        """
        check_dimension(self._centers, tree.dimension)

        sums = torch.zeros_like(self._centers)
        counts = torch.zeros(self.n_clusters, dtype=torch.long)
        info = {
            'nodes_visited': 0,
            'nodes_pruned': 0,
            'leaves_visited': 0,
            'points_pruned': 0
        }
        self._accumulate(tree, sums, counts, info)
        return sums, counts, info

    def _accumulate(self, tree: Tree, sums: Tensor, counts: Tensor,
                    info: Dict[str, Any]) -> None:
        info['nodes_visited'] += 1
        node = tree.node

        if isinstance(node, Leaf):
            k = self.closest(node.point)
            sums[k] += node.point
            counts[k] += 1
            info['leaves_visited'] += 1
            return

        k = self.owner(tree.rectangle)
        if k is not None:
            # Whole subtree resolved from the cached statistics
            sums[k] += tree.center_of_mass * tree.number_of_points
            counts[k] += tree.number_of_points
            info['nodes_pruned'] += 1
            info['points_pruned'] += tree.number_of_points
        else:
            self._accumulate(node.left, sums, counts, info)
            self._accumulate(node.right, sums, counts, info)

    def __repr__(self) -> str:
        return f"Centers(n_clusters={self.n_clusters}, dimension={self.dimension})"
