# tests/utils.py
"""
Small, reusable helpers used across the mrkmeans test suite.

Functions:
- brute_force_update(X, centers): per-center sums and counts by scanning every point.
- sorted_rows(X): rows sorted lexicographically, for multiset comparisons.
- walk(tree): every node of a tree, depth first.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Tuple

import numpy as np
import torch

from mrkmeans.tree.mrkd import Tree, NonLeaf


def brute_force_update(X: torch.Tensor, centers: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Reference aggregation: assign each point with an explicit first-minimum scan.
    """
    K, d = centers.shape
    sums = torch.zeros(K, d, dtype=torch.float64)
    counts = torch.zeros(K, dtype=torch.long)
    for point in X:
        best, best_k = float("inf"), 0
        for k in range(K):
            dist = float(torch.linalg.vector_norm(point - centers[k]))
            if dist < best:
                best, best_k = dist, k
        sums[best_k] += point
        counts[best_k] += 1
    return sums, counts


def sorted_rows(X: Any) -> np.ndarray:
    """Rows of X in lexicographic order (multiset fingerprint)."""
    if isinstance(X, torch.Tensor):
        X = X.detach().cpu().numpy()
    X = np.asarray(X)
    order = np.lexsort(X.T[::-1])
    return X[order]


def walk(tree: Tree) -> Iterator[Tree]:
    """Every node of the tree, parents before children."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node.node, NonLeaf):
            stack.append(node.node.right)
            stack.append(node.node.left)


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] fit {"n":400,"K":4} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"))
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
