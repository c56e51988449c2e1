"""
Constraint propagation: moving one node drags the rest of the lattice.

Links are rigid and of constant (unit) length, but rotate freely, and nodes
are freely movable. Moving a node therefore pulls or pushes its neighbors
so that each keeps a unit distance to it. Those neighbors in turn move
their own neighbors, and so on: a breadth-first wave that starts at the
dragged node and dies out as the induced displacements shrink to zero.

All rigidity corrections read the ORIGINAL positions of the grid passed
in. Reading back partially updated positions would compound corrections
along chains of links.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Iterator

from rigidgrid.core.grid import Grid, Node
from rigidgrid.core.vector import Vec2, add, subtract, magnitude, normalize


@dataclass(frozen=True)
class WaveStep:
    """One node displaced by the propagation wave."""

    node: Node
    parent: Node | None  # Node whose move reached this one (None at the origin)
    delta: Vec2
    hops: int  # Links between the origin and this node along the wave


def neighbor_delta(
    delta: tuple[float, float],
    node_position: tuple[float, float],
    neighbor_position: tuple[float, float],
) -> Vec2:
    """
    How much to move a neighbor to keep it at unit distance from a node.

    Args:
        delta: Displacement applied to the node
        node_position: Original position of the node
        neighbor_position: Original position of the neighbor

    Returns:
        Displacement for the neighbor. After applying both displacements
        the link between the two has length exactly 1.
    """
    connection = subtract(node_position, neighbor_position)
    reach = add(delta, connection)
    return subtract(reach, normalize(reach))


def iter_wave(
    grid: Grid,
    origin: Node,
    total_delta: tuple[float, float],
) -> Iterator[WaveStep]:
    """
    Walk the propagation wave in breadth-first order.

    Each node is reached at most once, by whichever neighbor gets to it
    first (ties resolved by the W, S, E, N direction order). A node whose
    delta has decayed to zero is not expanded, which ends that branch of
    the wave; other branches keep going.

    Args:
        grid: Grid holding the positions at drag start
        origin: (i, j) index of the dragged node
        total_delta: Displacement of the origin relative to grid

    Yields:
        One WaveStep per displaced node, in the order displacements apply
    """
    origin = (origin[0], origin[1])
    pending = deque([(origin, None, Vec2(*total_delta), 0)])
    visited = {origin}

    while pending:
        node, parent, delta, hops = pending.popleft()
        if not magnitude(delta) > 0:
            continue

        yield WaveStep(node=node, parent=parent, delta=delta, hops=hops)

        node_position = grid.position(node)
        for _, neighbor in grid.neighbors(node):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            pending.append((
                neighbor,
                node,
                neighbor_delta(delta, node_position, grid.position(neighbor)),
                hops + 1,
            ))


def propagate(
    grid: Grid,
    origin: Node,
    total_delta: tuple[float, float],
) -> Grid:
    """
    Displace the origin node and propagate the motion through rigid links.

    The input grid is left untouched. Nodes the wave never reaches keep
    their original positions.

    Args:
        grid: Committed grid (positions at drag start)
        origin: (i, j) index of the dragged node
        total_delta: Displacement of the origin in grid units, measured
                     from the committed grid rather than the previous step

    Returns:
        New grid with the displaced positions
    """
    positions = grid.positions.copy()
    for step in iter_wave(grid, origin, total_delta):
        i, j = step.node
        positions[i, j, 0] += step.delta.x
        positions[i, j, 1] += step.delta.y
    return Grid(positions)
