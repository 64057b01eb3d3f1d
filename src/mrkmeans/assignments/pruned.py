"""
Update step backed by an mrkd-tree ("simple" algorithm of Pelleg & Moore).
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import UpdateStrategy
from ..base.data_structures import UpdateResult
from ..tree.mrkd import Tree
from .centers import Centers


class TreeUpdate(UpdateStrategy):
    """Builds the tree once in `prepare` and traverses it in every `compute`."""

    def __init__(self):
        self.tree: Optional[Tree] = None

    def prepare(self, points: Tensor,
                generator: Optional[torch.Generator] = None) -> None:
        """Build the mrkd-tree over the points."""
        self.tree = Tree.initialize(points, generator)

    def compute(self, centers: Tensor) -> UpdateResult:
        if self.tree is None:
            raise RuntimeError("prepare must be called before compute")

        sums, counts, info = Centers(centers).update_with_info(self.tree)
        return UpdateResult(sums=sums, counts=counts, info=info)
