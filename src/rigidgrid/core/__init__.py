"""
Core engine primitives.

This layer knows NOTHING about screens, pointers, or rendering.
It only knows:
- 2D vectors and their arithmetic
- The grid of node positions
- How a displacement at one node propagates through rigid links

Everything here is a pure function over explicit grid values.
"""

from rigidgrid.core.vector import (
    Vec2,
    add,
    subtract,
    scale_divide,
    magnitude,
    normalize,
)
from rigidgrid.core.grid import Grid, Node, DIRECTIONS, init_grid
from rigidgrid.core.propagation import WaveStep, neighbor_delta, iter_wave, propagate

__all__ = [
    "Vec2",
    "add",
    "subtract",
    "scale_divide",
    "magnitude",
    "normalize",
    "Grid",
    "Node",
    "DIRECTIONS",
    "init_grid",
    "WaveStep",
    "neighbor_delta",
    "iter_wave",
    "propagate",
]
