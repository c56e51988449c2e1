"""
Link lengths and node displacements.

Links are implicit in the grid: horizontal links join (i, j) to (i+1, j),
vertical links join (i, j) to (i, j+1). In a settled lattice every link has
length 1; strain measures how far a grid is from that.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from rigidgrid.core.grid import Grid, Node


@dataclass
class LinkStrain:
    """Deviation of link lengths from unit length."""

    max_abs: float
    rms: float
    horizontal: np.ndarray  # [width-1, height]
    vertical: np.ndarray    # [width, height-1]


def link_lengths(grid: "Grid") -> tuple[np.ndarray, np.ndarray]:
    """
    Lengths of all horizontal and vertical links.

    Returns:
        (horizontal, vertical) with shapes [width-1, height] and [width, height-1]
    """
    p = grid.positions
    horizontal = np.linalg.norm(p[1:, :, :] - p[:-1, :, :], axis=-1)
    vertical = np.linalg.norm(p[:, 1:, :] - p[:, :-1, :], axis=-1)
    return horizontal, vertical


def link_strain(grid: "Grid") -> LinkStrain:
    """Compute signed strain (length - 1) of every link plus summary stats."""
    horizontal, vertical = link_lengths(grid)
    h_strain = horizontal - 1.0
    v_strain = vertical - 1.0

    all_strain = np.concatenate([h_strain.ravel(), v_strain.ravel()])
    if all_strain.size == 0:
        # 1x1 grid: no links at all
        max_abs, rms = 0.0, 0.0
    else:
        max_abs = float(np.max(np.abs(all_strain)))
        rms = float(np.sqrt(np.mean(all_strain ** 2)))

    return LinkStrain(
        max_abs=max_abs,
        rms=rms,
        horizontal=h_strain,
        vertical=v_strain,
    )


def _check_same_shape(before: "Grid", after: "Grid"):
    if before.shape != after.shape:
        raise ValueError(
            f"Grids must have same dimensions, got {before.shape} and {after.shape}"
        )


def displacement_field(before: "Grid", after: "Grid") -> np.ndarray:
    """
    Per-node displacement magnitude between two snapshots.

    Returns:
        [width, height] array of distances moved
    """
    _check_same_shape(before, after)
    return np.linalg.norm(after.positions - before.positions, axis=-1)


def displaced_nodes(
    before: "Grid",
    after: "Grid",
    atol: float = 0.0,
) -> list["Node"]:
    """
    Nodes that moved by more than atol between two snapshots.

    Returns:
        (i, j) indices in column-major order
    """
    moved = displacement_field(before, after) > atol
    return [(int(i), int(j)) for i, j in np.argwhere(moved)]
