"""
Grid: the 2D lattice of nodes joined by rigid unit links.

The grid is column-major: positions[i, j] is the position of the node in
column i, row j. Stepping horizontally or vertically is then a plain index
offset in either axis, with no index conversion.

Each node stores ONLY its position. Links are implicit: every node is
rigidly connected to its orthogonal neighbors and the link length is one
grid unit. Rendering scales grid units to screen units.
"""

from __future__ import annotations
from typing import Iterator

import numpy as np

from rigidgrid.core.vector import Vec2


Node = tuple[int, int]

# Direction vectors for neighbor lookup, in traversal order.
# Offsets are in (column, row) terms; rows grow downward as on screen.
DIRECTIONS = {
    "W": (-1, 0),   # West: column decreases
    "S": (0, 1),    # South: row increases
    "E": (1, 0),    # East: column increases
    "N": (0, -1),   # North: row decreases
}


class Grid:
    """
    Immutable-by-convention snapshot of node positions.

    Nothing in the package mutates a Grid after construction; operations
    that move nodes build a new one. The positions passed in are copied,
    so the caller's array never aliases a grid.
    """

    def __init__(self, positions: np.ndarray):
        positions = np.array(positions, dtype=np.float64)
        if positions.ndim != 3 or positions.shape[2] != 2:
            raise ValueError(
                f"positions must have shape (width, height, 2), got {positions.shape}"
            )
        self.positions = positions

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.positions.shape[0]

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.positions.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """Return (width, height) grid dimensions."""
        return self.width, self.height

    @property
    def n_nodes(self) -> int:
        return self.width * self.height

    def position(self, node: Node) -> Vec2:
        """Position of node (i, j)."""
        x, y = self.positions[node[0], node[1]]
        return Vec2(float(x), float(y))

    def contains(self, node: Node) -> bool:
        """Whether (i, j) indexes a node of this grid."""
        i, j = node
        return 0 <= i < self.width and 0 <= j < self.height

    def neighbors(self, node: Node) -> Iterator[tuple[str, Node]]:
        """
        Yield (direction, neighbor) for each in-bounds orthogonal neighbor.

        Directions come in traversal order: W, S, E, N.
        """
        i, j = node
        for direction, (di, dj) in DIRECTIONS.items():
            neighbor = (i + di, j + dj)
            if self.contains(neighbor):
                yield direction, neighbor

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over all (i, j) node indices, column by column."""
        for i in range(self.width):
            for j in range(self.height):
                yield i, j

    def copy(self) -> Grid:
        return Grid(self.positions)

    def to_nested(self) -> list[list[tuple[float, float]]]:
        """Columns of (x, y) tuples, the plain-Python form of the grid."""
        return [
            [(float(x), float(y)) for x, y in column]
            for column in self.positions
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.positions, other.positions)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"


def init_grid(width: int, height: int) -> Grid:
    """
    Build an undisturbed unit lattice.

    Node (i, j) sits at (i + 1, j + 1), so the grid starts one unit away
    from the screen origin and every link has length 1.

    Args:
        width: Number of columns (>= 1)
        height: Number of rows (>= 1)
    """
    cols, rows = np.meshgrid(
        np.arange(1, width + 1, dtype=np.float64),
        np.arange(1, height + 1, dtype=np.float64),
        indexing="ij",
    )
    return Grid(np.stack([cols, rows], axis=-1))
