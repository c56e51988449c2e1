"""
Visualization utilities.

- Lattice drawings (nodes and links in screen coordinates)
- Displacement arrows between two snapshots
- Attenuation profiles
- Interactive mouse dragging on a matplotlib figure
"""

from rigidgrid.viz.plots import (
    link_segments,
    plot_grid,
    plot_displacement,
    plot_attenuation,
    save_figure,
)
from rigidgrid.viz.interactive import InteractiveGrid

__all__ = [
    "link_segments",
    "plot_grid",
    "plot_displacement",
    "plot_attenuation",
    "save_figure",
    "InteractiveGrid",
]
