"""
Mouse-driven lattice on a matplotlib figure.

This is the event layer: it translates pointer events into DragSession
calls and redraws the working grid. Data coordinates of the axes are
screen units (grid units times the session scale), so pointer deltas are
divided by the scale before they reach the engine.

Pointer positions are converted from pixels with the lattice axes' own
transform, so a drag keeps tracking the pointer anywhere on the canvas.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection

from rigidgrid.viz.plots import (
    link_segments,
    node_marker_size,
    NODE_COLOR,
    LINK_COLOR,
)

if TYPE_CHECKING:
    from matplotlib.backend_bases import MouseEvent
    from rigidgrid.session import DragSession


class InteractiveGrid:
    """
    Connects a figure's mouse events to a DragSession.

    Usage:
        session = DragSession(SimulatorConfig(width=20, height=20))
        view = InteractiveGrid(session)
        plt.show()
    """

    def __init__(
        self,
        session: "DragSession",
        ax: Axes | None = None,
        figsize: tuple[float, float] = (8, 8),
    ):
        self.session = session
        if ax is None:
            self.fig, self.ax = plt.subplots(figsize=figsize)
        else:
            self.fig, self.ax = ax.figure, ax

        self.links = LineCollection([], colors=LINK_COLOR, linewidths=1.0, zorder=1)
        self.ax.add_collection(self.links)
        self.nodes = self.ax.scatter([], [], color=NODE_COLOR, zorder=2)
        self.redraw()

        self.cids = [
            self.fig.canvas.mpl_connect("button_press_event", self.on_press),
            self.fig.canvas.mpl_connect("motion_notify_event", self.on_motion),
            self.fig.canvas.mpl_connect("button_release_event", self.on_release),
        ]

    def disconnect(self) -> None:
        """Stop listening to the figure's events."""
        for cid in self.cids:
            self.fig.canvas.mpl_disconnect(cid)
        self.cids = []

    def redraw(self) -> None:
        """Draw the working grid of the session."""
        grid = self.session.flux_grid
        scale = self.session.scale

        self.links.set_segments(link_segments(grid, scale))
        self.nodes.set_offsets(grid.positions.reshape(-1, 2) * scale)
        self.nodes.set_sizes([node_marker_size(self.session.node_radius)])

        self.ax.set_xlim(0, (grid.width + 1) * scale)
        self.ax.set_ylim((grid.height + 1) * scale, 0)
        self.ax.set_aspect("equal")
        self.fig.canvas.draw_idle()

    def pointer_xy(self, event: "MouseEvent") -> tuple[float, float] | None:
        """
        Pointer position in this view's data coordinates.

        Computed from the pixel position so it stays valid when the pointer
        is over another axes of the figure or outside every axes.
        """
        if event.x is None or event.y is None:
            return None
        x, y = self.ax.transData.inverted().transform((event.x, event.y))
        return float(x), float(y)

    def on_press(self, event: "MouseEvent") -> None:
        if event.button != 1 or event.inaxes is not self.ax:
            return
        if self.session.is_dragging:
            return
        screen_xy = self.pointer_xy(event)
        if screen_xy is None:
            return
        node = self.session.node_at(screen_xy)
        if node is None:
            return
        self.session.begin(node, screen_xy)

    def on_motion(self, event: "MouseEvent") -> None:
        if not self.session.is_dragging:
            return
        screen_xy = self.pointer_xy(event)
        if screen_xy is None:
            return
        self.session.move(screen_xy)
        self.redraw()

    def on_release(self, event: "MouseEvent") -> None:
        if event.button != 1 or not self.session.is_dragging:
            return
        self.session.end()
        self.redraw()
