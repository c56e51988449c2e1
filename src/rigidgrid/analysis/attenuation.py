"""
Attenuation of the propagation wave with distance from the dragged node.

The rigidity correction shrinks displacements as the wave moves outward
(unless the motion is along the link). Grouping wave steps by hop distance
gives a radial-style profile; fitting an exponential to it gives a decay
length, the number of links over which a drag is felt.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import curve_fit

from rigidgrid.core.propagation import iter_wave
from rigidgrid.core.vector import magnitude

if TYPE_CHECKING:
    from rigidgrid.core.grid import Grid, Node


@dataclass
class AttenuationProfile:
    """Delta magnitude statistics per hop distance from the origin."""

    hops: np.ndarray        # 0, 1, 2, ...
    mean_delta: np.ndarray  # Mean |delta| of nodes at each hop distance
    max_delta: np.ndarray   # Max |delta| of nodes at each hop distance
    counts: np.ndarray      # Displaced nodes at each hop distance


@dataclass
class DecayFit:
    """Exponential fit mean_delta(h) ~ amplitude * exp(-h / decay_length)."""

    amplitude: float
    decay_length: float


def attenuation_profile(
    grid: "Grid",
    origin: "Node",
    delta: tuple[float, float],
) -> AttenuationProfile:
    """
    Run the propagation wave and bin displacements by hop distance.

    Args:
        grid: Committed grid
        origin: Dragged node
        delta: Displacement of the dragged node

    Returns:
        AttenuationProfile (empty arrays if delta is zero)
    """
    by_hop: dict[int, list[float]] = {}
    for step in iter_wave(grid, origin, delta):
        by_hop.setdefault(step.hops, []).append(magnitude(step.delta))

    hops = np.array(sorted(by_hop), dtype=np.int64)
    return AttenuationProfile(
        hops=hops,
        mean_delta=np.array([np.mean(by_hop[h]) for h in hops], dtype=np.float64),
        max_delta=np.array([np.max(by_hop[h]) for h in hops], dtype=np.float64),
        counts=np.array([len(by_hop[h]) for h in hops], dtype=np.int64),
    )


def _exp_decay(h, a, xi):
    return a * np.exp(-h / xi)


def fit_decay_length(profile: AttenuationProfile) -> DecayFit:
    """
    Fit an exponential decay to the mean delta profile.

    Args:
        profile: Output of attenuation_profile

    Returns:
        DecayFit with amplitude and decay length (in links)
    """
    mask = profile.mean_delta > 0
    h = profile.hops[mask].astype(np.float64)
    y = profile.mean_delta[mask]
    if h.size < 3:
        raise ValueError(f"Need at least 3 non-zero hop distances to fit, got {h.size}")

    popt, _ = curve_fit(
        _exp_decay, h, y,
        p0=[y[0], 1.0],
        bounds=([0, 1e-3], [np.inf, 1e3]),
        maxfev=5000,
    )
    return DecayFit(amplitude=float(popt[0]), decay_length=float(popt[1]))
