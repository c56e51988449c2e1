"""
rigidgrid: 2D Rigid Lattice Simulator

An interactive simulator of a square grid of nodes joined to their four
orthogonal neighbors by rigid unit-length links. Links rotate but never
stretch, so dragging one node drags the lattice along with it.

Core concepts:
- Nodes carry a position; links are implicit and have length 1
- A drag displaces one node by a delta
- The delta propagates breadth-first, each neighbor snapped back to
  unit distance from the node that pulled it
- The wave dies out where induced displacements decay to zero

See README.md and DESIGN.md for full details.
"""

__version__ = "0.1.0"
