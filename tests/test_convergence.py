# tests/test_convergence.py
"""
Convergence criteria and the center recomputation they are fed with.

Covers:
- ExactCenterEquality: any bit of movement keeps iterating
- CenterShift: displacement threshold
- ClusterState.from_update: means, and empty clusters staying put
"""

from __future__ import annotations

import pytest
import torch

from mrkmeans.utils.convergence import ExactCenterEquality, CenterShift
from mrkmeans.base.data_structures import ClusterState, UpdateResult


def _state(previous, current, iteration=0):
    return {
        "iteration": iteration,
        "previous_centers": torch.tensor(previous, dtype=torch.float64),
        "centers": torch.tensor(current, dtype=torch.float64),
    }


def test_exact_equality_requires_identical_centers():
    crit = ExactCenterEquality()
    same = [[0.5, 0.5], [1.5, 1.5]]
    nudged = [[0.5, 0.5], [1.5, 1.5 + 1e-15]]

    assert crit.check(_state(same, nudged, 0)) is False
    assert crit.check(_state(nudged, nudged, 1)) is True
    assert [h["n_moved"] for h in crit.history] == [1, 0]

    crit.reset()
    assert crit.history == []


def test_center_shift_threshold():
    crit = CenterShift(tol=1e-3)
    assert crit.check(_state([[0.0, 0.0]], [[0.0, 0.01]])) is False
    assert crit.check(_state([[0.0, 0.01]], [[0.0, 0.0105]])) is True
    assert crit.history[-1]["max_shift"] == pytest.approx(5e-4)


def test_center_shift_rejects_negative_tol():
    with pytest.raises(ValueError):
        CenterShift(tol=-1.0)


def test_from_update_means_and_empty_clusters():
    previous = torch.tensor([[0.0, 0.0], [9.0, 9.0], [1.0, 1.0]], dtype=torch.float64)
    result = UpdateResult(
        sums=torch.tensor([[2.0, 4.0], [0.0, 0.0], [3.0, 3.0]], dtype=torch.float64),
        counts=torch.tensor([2, 0, 3]),
    )
    state = ClusterState.from_update(previous, result)

    assert torch.equal(state.centers, torch.tensor([[1.0, 2.0], [9.0, 9.0], [1.0, 1.0]],
                                                   dtype=torch.float64))
    assert state.empty_clusters.tolist() == [1]
    # previous centers untouched
    assert torch.equal(previous[0], torch.tensor([0.0, 0.0], dtype=torch.float64))
    assert result.n_points == 5


def test_from_update_rejects_cluster_count_mismatch():
    previous = torch.zeros(3, 2, dtype=torch.float64)
    result = UpdateResult(
        sums=torch.ones(2, 2, dtype=torch.float64),
        counts=torch.tensor([1, 1]),
    )
    assert result.n_clusters == 2
    with pytest.raises(ValueError):
        ClusterState.from_update(previous, result)
