"""
DragSession: the application state driving an interactive lattice.

Two grid snapshots coexist while dragging:
- grid: the committed grid, as it was when the drag started
- flux_grid: the working grid, recomputed on every pointer move

Every move re-propagates the TOTAL delta since drag start from the
committed grid, rather than applying each small step to a grid that keeps
changing. Rounding errors from many tiny updates therefore never pile up.
When the drag ends the working grid replaces the committed one.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from rigidgrid.config import SimulatorConfig, SCALE_RANGE, NODE_RADIUS_RANGE, clamp
from rigidgrid.core.grid import Grid, Node, init_grid
from rigidgrid.core.propagation import propagate
from rigidgrid.core.vector import Vec2, subtract, scale_divide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Drag:
    """An active drag: which node, and where the pointer went down."""

    node: Node
    anchor: Vec2  # Screen coordinates at drag start


class DragSession:
    """
    Explicit, mutable application state for one lattice.

    Snapshots are swapped, never edited in place: any observer holding a
    reference to a grid keeps seeing a consistent lattice.
    """

    def __init__(self, config: SimulatorConfig | None = None):
        self.config = config if config is not None else SimulatorConfig()
        self.grid = init_grid(self.config.width, self.config.height)
        self.flux_grid = self.grid
        self.drag: Drag | None = None

    @property
    def scale(self) -> float:
        """Screen units per grid unit."""
        return self.config.scale

    @property
    def node_radius(self) -> float:
        """Node radius in screen units."""
        return self.config.node_radius

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    def begin(self, node: Node, screen_xy: tuple[float, float]) -> None:
        """
        Start dragging a node.

        Args:
            node: (i, j) index of the node under the pointer
            screen_xy: Pointer position in screen units
        """
        node = (int(node[0]), int(node[1]))
        if not self.grid.contains(node):
            raise ValueError(f"Node {node} is outside the {self.grid.width}x{self.grid.height} grid")
        if self.drag is not None:
            raise RuntimeError(f"Already dragging node {self.drag.node}")

        self.flux_grid = self.grid
        self.drag = Drag(node=node, anchor=Vec2(float(screen_xy[0]), float(screen_xy[1])))
        logger.debug("Drag started at node %s, screen %s", node, self.drag.anchor)

    def delta_for(self, screen_xy: tuple[float, float]) -> Vec2:
        """Total drag delta in grid units for a pointer position."""
        if self.drag is None:
            raise RuntimeError("No drag in progress")
        return scale_divide(subtract(screen_xy, self.drag.anchor), self.scale)

    def move(self, screen_xy: tuple[float, float]) -> Grid:
        """
        Recompute the working grid for a new pointer position.

        Returns:
            The new working grid
        """
        delta = self.delta_for(screen_xy)
        self.flux_grid = propagate(self.grid, self.drag.node, delta)
        return self.flux_grid

    def end(self) -> Grid:
        """
        Finish the drag and commit the working grid.

        A release without an active drag is ignored.
        """
        if self.drag is None:
            return self.grid
        logger.debug("Drag ended at node %s", self.drag.node)
        self.grid = self.flux_grid
        self.drag = None
        return self.grid

    def cancel(self) -> Grid:
        """Abandon the drag; the committed grid was never touched."""
        if self.drag is not None:
            logger.debug("Drag cancelled at node %s", self.drag.node)
        self.flux_grid = self.grid
        self.drag = None
        return self.grid

    def reset(self, width: int | None = None, height: int | None = None) -> Grid:
        """Rebuild an undisturbed lattice, optionally with new dimensions."""
        width = self.config.width if width is None else width
        height = self.config.height if height is None else height
        self.config = SimulatorConfig(
            width=width,
            height=height,
            scale=self.scale,
            node_radius=self.node_radius,
        )
        self.grid = init_grid(width, height)
        self.flux_grid = self.grid
        self.drag = None
        logger.debug("Grid reset to %dx%d", width, height)
        return self.grid

    def set_scale(self, value: float) -> float:
        """Set screen units per grid unit, clamped to the control range."""
        self.config.scale = float(clamp(value, SCALE_RANGE))
        return self.config.scale

    def set_node_radius(self, value: float) -> float:
        """Set the node radius in screen units, clamped to the control range."""
        self.config.node_radius = float(clamp(value, NODE_RADIUS_RANGE))
        return self.config.node_radius

    def screen_position(self, node: Node) -> Vec2:
        """Where a node of the working grid is drawn, in screen units."""
        x, y = self.flux_grid.position(node)
        return Vec2(x * self.scale, y * self.scale)

    def node_at(self, screen_xy: tuple[float, float]) -> Node | None:
        """
        Hit-test the working grid.

        Returns:
            The nearest node whose drawn circle contains screen_xy, or None
        """
        screen = self.flux_grid.positions * self.scale
        distance = np.hypot(screen[..., 0] - screen_xy[0], screen[..., 1] - screen_xy[1])
        i, j = np.unravel_index(np.argmin(distance), distance.shape)
        if distance[i, j] > self.node_radius:
            return None
        return int(i), int(j)
