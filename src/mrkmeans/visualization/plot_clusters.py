"""
Cluster and tree visualization utilities.

Provides functions for plotting 2D clustering results and the rectangles
of an mrkd-tree.
"""

from typing import Optional, List
import torch
from torch import Tensor
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
import numpy as np

from ..tree.mrkd import Tree, NonLeaf


def plot_clusters_2d(X: Tensor,
                     labels: Tensor,
                     centers: Optional[Tensor] = None,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.

    Args:
        X: (n, 2) data points
        labels: (n,) cluster labels
        centers: Optional (k, 2) cluster centers
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centers
        center_size: Size of center markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    X_np = torch.as_tensor(X).cpu().numpy()
    labels_np = torch.as_tensor(labels).cpu().numpy()

    if X_np.ndim != 2 or X_np.shape[1] != 2:
        raise ValueError(f"plot_clusters_2d needs (n, 2) data, got {X_np.shape}")

    unique_labels = np.unique(labels_np)
    n_clusters = len(unique_labels)

    if colors is None:
        cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
        colors = [cmap(i % cmap.N) for i in range(n_clusters)]

    for i, label in enumerate(unique_labels):
        mask = labels_np == label
        ax.scatter(X_np[mask, 0], X_np[mask, 1],
                   color=colors[i % len(colors)],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {label}')

    if centers is not None:
        centers_np = torch.as_tensor(centers).cpu().numpy()
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   label='Centers',
                   zorder=10)

    ax.set_xlabel('Feature 1')
    ax.set_ylabel('Feature 2')

    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax


def plot_tree_partition(tree: Tree,
                        ax: Optional[plt.Axes] = None,
                        max_depth: Optional[int] = None,
                        color: str = 'gray',
                        linewidth: float = 0.8,
                        show_points: bool = True,
                        title: Optional[str] = None) -> plt.Axes:
    """Draw the split lines of a 2D mrkd-tree inside their rectangles.

    Args:
        tree: Root of a tree over 2D points
        ax: Matplotlib axes (created if None)
        max_depth: Deepest level whose splits are drawn (None for all)
        color: Line color
        linewidth: Line width
        show_points: Whether to scatter the points stored in the leaves
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if tree.dimension != 2:
        raise ValueError(f"plot_tree_partition needs a 2D tree, got {tree.dimension}D")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    lo = tree.rectangle.minimum.numpy()
    width = tree.rectangle.width().numpy()
    ax.add_patch(Rectangle((lo[0], lo[1]), width[0], width[1], fill=False,
                           edgecolor=color, linewidth=linewidth * 1.5))

    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        if not isinstance(node.node, NonLeaf):
            continue
        if max_depth is not None and depth > max_depth:
            continue

        split = node.node
        lo = node.rectangle.minimum.numpy()
        hi = node.rectangle.maximum.numpy()
        if split.dimension == 0:
            ax.plot([split.value, split.value], [lo[1], hi[1]],
                    color=color, linewidth=linewidth)
        else:
            ax.plot([lo[0], hi[0]], [split.value, split.value],
                    color=color, linewidth=linewidth)

        stack.append((split.left, depth + 1))
        stack.append((split.right, depth + 1))

    if show_points:
        points = torch.stack(list(tree.points())).numpy()
        ax.scatter(points[:, 0], points[:, 1], s=10, c='black', zorder=5)

    ax.set_xlabel('Feature 1')
    ax.set_ylabel('Feature 2')
    if title:
        ax.set_title(title)

    return ax
