"""
Convergence criteria for the k-means fixed-point loop.

- Exact equality of consecutive centers (reference behavior)
- Largest center displacement below a tolerance
"""

from typing import Dict, Any
import torch

from ..base.interfaces import ConvergenceCriterion


class ExactCenterEquality(ConvergenceCriterion):
    """Converged when no center coordinate changed at all between iterations.

    Floating-point equality is fragile in general, but Lloyd iterations reach
    a fixed point in finitely many steps, after which the recomputed centers
    are bit-identical. The driving loop's max_iter bounds the rest.
    """

    def check(self, current_state: Dict[str, Any]) -> bool:
        previous = current_state['previous_centers']
        current = current_state['centers']

        n_moved = int((previous != current).any(dim=1).sum().item())
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_moved': n_moved
        })

        return n_moved == 0


class CenterShift(ConvergenceCriterion):
    """Converged when every center moved by at most `tol`."""

    def __init__(self, tol: float = 1e-8):
        """
        Args:
            tol: Largest Euclidean displacement still considered converged
        """
        super().__init__()
        if tol < 0:
            raise ValueError(f"tol must be non-negative, got {tol}")
        self.tol = tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        previous = current_state['previous_centers']
        current = current_state['centers']

        shift = torch.linalg.vector_norm(current - previous, dim=1).max().item()
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': shift
        })

        return shift <= self.tol
