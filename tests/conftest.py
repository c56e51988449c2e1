"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
import numpy as np


@pytest.fixture
def small_grid():
    """Undisturbed 3x3 lattice."""
    from rigidgrid.core import init_grid
    return init_grid(3, 3)


@pytest.fixture
def medium_grid():
    """Undisturbed 20x20 lattice, the interactive default."""
    from rigidgrid.core import init_grid
    return init_grid(20, 20)


@pytest.fixture
def session():
    """Drag session on a 5x5 lattice at 50 screen units per grid unit."""
    from rigidgrid.config import SimulatorConfig
    from rigidgrid.session import DragSession
    return DragSession(SimulatorConfig(width=5, height=5, scale=50.0, node_radius=5.0))


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
