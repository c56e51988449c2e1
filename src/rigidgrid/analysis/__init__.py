"""
Analysis layer: derived quantities for diagnostics and plots.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- link_lengths / link_strain: how far a grid is from unit links
- displacement_field / displaced_nodes: what a drag changed
- attenuation_profile / fit_decay_length: how fast the wave dies out
"""

from rigidgrid.analysis.links import (
    LinkStrain,
    link_lengths,
    link_strain,
    displacement_field,
    displaced_nodes,
)
from rigidgrid.analysis.attenuation import (
    AttenuationProfile,
    DecayFit,
    attenuation_profile,
    fit_decay_length,
)

__all__ = [
    "LinkStrain",
    "link_lengths",
    "link_strain",
    "displacement_field",
    "displaced_nodes",
    "AttenuationProfile",
    "DecayFit",
    "attenuation_profile",
    "fit_decay_length",
]
