# tests/test_centers.py
"""
Pruning/assignment traversal: closest, owner and update.
"""

from __future__ import annotations

import pytest
import torch

from mrkmeans.assignments import Centers
from mrkmeans.geometry import HyperRectangle
from mrkmeans.tree import Tree

from data_gen import make_blobs


def _t(*values: float) -> torch.Tensor:
    return torch.tensor(values, dtype=torch.float64)


def _centers(*rows) -> Centers:
    return Centers(torch.tensor(rows, dtype=torch.float64))


@pytest.fixture
def square() -> HyperRectangle:
    return HyperRectangle(_t(0.0, 0.0), _t(2.0, 2.0))


def test_owner_dominating_center(square):
    centers = _centers([-2.5, -2.5], [3.0, 1.0])
    assert centers.owner(square) == 1


def test_owner_none_on_distance_tie(square):
    centers = _centers([-1.0, 1.0], [3.0, 1.0])
    assert centers.owner(square) is None


def test_owner_none_when_domination_fails(square):
    # Nearest center is inside the box, but the vertex (2, 0) is equidistant
    centers = _centers([1.0, 1.0], [3.0, 1.0])
    assert centers.owner(square) is None


def test_owner_single_center(square):
    assert _centers([10.0, -4.0]).owner(square) == 0


def test_owner_point_box():
    box = HyperRectangle(_t(1.0, 1.0), _t(1.0, 1.0))
    centers = _centers([0.0, 0.0], [3.0, 3.0], [1.5, 1.0])
    assert centers.owner(box) == 2


def test_closest_first_minimum_wins():
    centers = _centers([0.0, 0.0], [2.0, 0.0], [0.0, 2.0])
    assert centers.closest(_t(1.0, 0.0)) == 0
    assert centers.closest(_t(1.0, 1.0)) == 0
    assert centers.closest(_t(1.9, 0.1)) == 1


@pytest.mark.parametrize("seed", range(5))
def test_owner_soundness(seed):
    """Whenever an owner is reported, it is the closest center of every point in the box."""
    g = torch.Generator().manual_seed(seed)
    n_owned = 0
    for _ in range(200):
        lo = torch.rand(2, generator=g, dtype=torch.float64) * 4.0
        hi = lo + torch.rand(2, generator=g, dtype=torch.float64) * 2.0
        box = HyperRectangle(lo, hi)
        centers = Centers(torch.rand(4, 2, generator=g, dtype=torch.float64) * 10.0 - 2.0)

        owner = centers.owner(box)
        if owner is None:
            continue
        n_owned += 1

        inside = lo + torch.rand(50, 2, generator=g, dtype=torch.float64) * (hi - lo)
        corners = torch.stack([box.corner(torch.tensor(t)) for t in
                               ([False, False], [False, True], [True, False], [True, True])])
        for point in torch.cat([inside, corners]):
            assert centers.closest(point) == owner
    assert n_owned > 0


def test_update_on_grid_assigns_each_point_to_itself(grid_points, torch_generator):
    tree = Tree.initialize(grid_points, torch_generator)
    sums, counts = Centers(grid_points).update(tree)
    assert torch.equal(sums, grid_points)
    assert torch.equal(counts, torch.ones(4, dtype=torch.long))


def test_update_single_center_takes_everything(grid_points, torch_generator):
    tree = Tree.initialize(grid_points, torch_generator)
    sums, counts, info = _centers([7.0, 7.0]).update_with_info(tree)
    assert torch.allclose(sums, grid_points.sum(dim=0, keepdim=True))
    assert counts.tolist() == [4]
    # The root is owned straight away
    assert info['nodes_visited'] == 1
    assert info['nodes_pruned'] == 1


def test_update_prunes_separated_blobs(torch_generator):
    X, y, C = make_blobs(n_per=200, scale=0.3, seed=1)
    X = torch.from_numpy(X)
    tree = Tree.initialize(X, torch_generator)

    sums, counts, info = Centers(torch.from_numpy(C)).update_with_info(tree)
    assert counts.tolist() == [200, 200, 200, 200]
    assert info['nodes_pruned'] > 0
    assert info['points_pruned'] + info['leaves_visited'] == len(X)
    assert info['leaves_visited'] < len(X)


def test_update_does_not_touch_inputs(grid_points, torch_generator):
    tree = Tree.initialize(grid_points, torch_generator)
    positions = torch.tensor([[0.0, 0.0], [2.0, 2.0]], dtype=torch.float64)
    centers = Centers(positions)
    before_com = tree.center_of_mass.clone()

    first = centers.update(tree)
    second = centers.update(tree)

    assert torch.equal(first[0], second[0]) and torch.equal(first[1], second[1])
    assert torch.equal(positions, torch.tensor([[0.0, 0.0], [2.0, 2.0]], dtype=torch.float64))
    assert torch.equal(tree.center_of_mass, before_com)


def test_centers_are_copied():
    positions = torch.tensor([[0.0, 0.0], [2.0, 2.0]], dtype=torch.float64)
    centers = Centers(positions)
    positions[0] = torch.tensor([5.0, 5.0])
    assert torch.equal(centers.positions[0], _t(0.0, 0.0))


def test_dimension_mismatch_rejected(grid_points, torch_generator):
    tree = Tree.initialize(grid_points, torch_generator)
    with pytest.raises(ValueError):
        _centers([0.0, 0.0, 0.0]).update(tree)


def test_closest_rejects_wrong_dimension():
    centers = _centers([0.0, 0.0, 0.0], [5.0, 5.0, 5.0])
    with pytest.raises(ValueError):
        centers.closest(_t(4.0))
    with pytest.raises(ValueError):
        centers.closest(_t(4.0, 4.0))
    with pytest.raises(ValueError):
        centers.closest(torch.zeros(2, 3, dtype=torch.float64))


def test_owner_rejects_wrong_dimension():
    centers = _centers([0.0, 0.0], [5.0, 5.0])
    with pytest.raises(ValueError):
        centers.owner(HyperRectangle(_t(4.0), _t(6.0)))
    with pytest.raises(ValueError):
        centers.owner(HyperRectangle(_t(4.0, 4.0, 4.0), _t(6.0, 6.0, 6.0)))
