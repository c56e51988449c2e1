"""
Simulator configuration.

Grid dimensions are fixed for the lifetime of a session (until reset).
Scale and node radius are display settings the user adjusts with controls
bounded to the ranges below.
"""

from __future__ import annotations
from dataclasses import dataclass


SCALE_RANGE = (1, 100)        # Screen pixels per grid unit
NODE_RADIUS_RANGE = (1, 10)   # Node radius in screen pixels


def clamp(value: float, bounds: tuple[float, float]) -> float:
    """Clamp value into the closed interval bounds."""
    low, high = bounds
    return max(low, min(high, value))


@dataclass
class SimulatorConfig:
    """Configuration for a rigid lattice session."""

    width: int = 20  # Columns
    height: int = 20  # Rows
    scale: float = 50.0  # Screen units per grid unit
    node_radius: float = 5.0  # Screen units

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        self.scale = float(clamp(self.scale, SCALE_RANGE))
        self.node_radius = float(clamp(self.node_radius, NODE_RADIUS_RANGE))
