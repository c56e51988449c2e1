#!/usr/bin/env python3
"""
Demo: Interactive Rigid Lattice

Opens a matplotlib window with a lattice. Press on a node and drag it:
the rest of the lattice follows through its rigid links. Releasing the
button commits the new shape; the next drag starts from there.

Usage:
    python demo/demo_interactive.py [width] [height]
"""

import logging
import sys

import matplotlib.pyplot as plt

from rigidgrid.config import SimulatorConfig
from rigidgrid.session import DragSession
from rigidgrid.viz import InteractiveGrid


def main():
    width = int(sys.argv[1]) if len(sys.argv) > 1 else 20
    height = int(sys.argv[2]) if len(sys.argv) > 2 else 20

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    logging.getLogger("rigidgrid").setLevel(logging.DEBUG)

    session = DragSession(SimulatorConfig(width=width, height=height, scale=30.0, node_radius=4.0))
    view = InteractiveGrid(session)
    view.ax.set_title("Drag a node")
    plt.show()


if __name__ == "__main__":
    main()
