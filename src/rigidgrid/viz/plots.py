"""
Static rendering of lattices.

Grids are drawn in screen coordinates (grid units times scale) with the y
axis pointing down, nodes as dots and links as line segments.

All plots use matplotlib and return (fig, ax) like the rest of the layer.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from rigidgrid.core.grid import Grid
    from rigidgrid.analysis.attenuation import AttenuationProfile, DecayFit


NODE_COLOR = "#1f2a44"
LINK_COLOR = "#8a94a6"
HIGHLIGHT_COLOR = "#d1495b"


def link_segments(grid: "Grid", scale: float = 1.0) -> np.ndarray:
    """
    All link segments of a grid as an [n_links, 2, 2] array.

    Horizontal links first, then vertical, both in column-major order.
    """
    p = grid.positions * scale
    horizontal = np.stack([p[:-1, :, :], p[1:, :, :]], axis=-2).reshape(-1, 2, 2)
    vertical = np.stack([p[:, :-1, :], p[:, 1:, :]], axis=-2).reshape(-1, 2, 2)
    return np.concatenate([horizontal, vertical], axis=0)


def node_marker_size(node_radius: float) -> float:
    """Scatter marker area (points^2) for a node radius in screen units."""
    return (2.0 * node_radius) ** 2


def plot_grid(
    grid: "Grid",
    ax: Axes | None = None,
    scale: float = 1.0,
    node_radius: float = 5.0,
    title: str = "",
    show_links: bool = True,
    highlight: tuple[int, int] | None = None,
    figsize: tuple[float, float] = (8, 8),
) -> tuple[Figure, Axes]:
    """
    Draw a lattice.

    Args:
        grid: Grid to draw
        ax: Existing axes to plot on (creates new figure if None)
        scale: Screen units per grid unit
        node_radius: Node radius in screen units
        title: Plot title
        show_links: Whether to draw the links
        highlight: Optional node index to mark (e.g. the dragged node)
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if show_links and grid.n_nodes > 1:
        links = LineCollection(
            link_segments(grid, scale),
            colors=LINK_COLOR,
            linewidths=1.0,
            zorder=1,
        )
        ax.add_collection(links)

    xy = grid.positions.reshape(-1, 2) * scale
    ax.scatter(
        xy[:, 0], xy[:, 1],
        s=node_marker_size(node_radius),
        color=NODE_COLOR,
        zorder=2,
    )

    if highlight is not None:
        hx, hy = grid.position(highlight)
        ax.scatter(
            [hx * scale], [hy * scale],
            s=node_marker_size(node_radius) * 1.8,
            facecolors="none",
            edgecolors=HIGHLIGHT_COLOR,
            linewidths=2.0,
            zorder=3,
        )

    # Screen layout: one unit of margin on each side, y pointing down
    ax.set_xlim(0, (grid.width + 1) * scale)
    ax.set_ylim((grid.height + 1) * scale, 0)
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    return fig, ax


def plot_displacement(
    before: "Grid",
    after: "Grid",
    ax: Axes | None = None,
    scale: float = 1.0,
    node_radius: float = 5.0,
    title: str = "Displacement",
    arrow_color: str = HIGHLIGHT_COLOR,
    figsize: tuple[float, float] = (8, 8),
) -> tuple[Figure, Axes]:
    """
    Draw the displaced grid with arrows from old to new node positions.

    Only nodes that actually moved get an arrow.
    """
    fig, ax = plot_grid(after, ax=ax, scale=scale, node_radius=node_radius, title=title, figsize=figsize)

    old = before.positions.reshape(-1, 2) * scale
    new = after.positions.reshape(-1, 2) * scale
    moved = np.any(old != new, axis=-1)
    if np.any(moved):
        d = new[moved] - old[moved]
        ax.quiver(
            old[moved, 0], old[moved, 1], d[:, 0], d[:, 1],
            angles="xy", scale_units="xy", scale=1.0,
            color=arrow_color, width=0.004, zorder=4,
        )

    return fig, ax


def plot_attenuation(
    profile: "AttenuationProfile",
    fit: "DecayFit | None" = None,
    ax: Axes | None = None,
    title: str = "Wave Attenuation",
    figsize: tuple[float, float] = (8, 5),
) -> tuple[Figure, Axes]:
    """Plot mean and max |delta| against hop distance (log scale)."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.semilogy(profile.hops, profile.mean_delta, "o-", label="mean |Δ|")
    ax.semilogy(profile.hops, profile.max_delta, "s--", alpha=0.6, label="max |Δ|")

    if fit is not None:
        h = np.linspace(0, profile.hops.max(), 100)
        ax.semilogy(
            h, fit.amplitude * np.exp(-h / fit.decay_length),
            "k:", label=f"fit ξ={fit.decay_length:.2f}",
        )

    ax.set_title(title)
    ax.set_xlabel("Hop distance from dragged node")
    ax.set_ylabel("|Δ| (grid units)")
    ax.legend()
    ax.grid(True, alpha=0.3)

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
