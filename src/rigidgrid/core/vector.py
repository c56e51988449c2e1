"""
2D vector primitives used throughout the engine.

Vectors are plain two-field value types. The functions are manually
specialized for two components; they are called once per link on every
drag step, so they avoid the overhead of building numpy arrays.
"""

from __future__ import annotations
import math
from typing import NamedTuple


class Vec2(NamedTuple):
    """A 2D vector (or position) of real numbers."""

    x: float
    y: float


def add(v1: tuple[float, float], v2: tuple[float, float]) -> Vec2:
    """Componentwise sum."""
    return Vec2(v1[0] + v2[0], v1[1] + v2[1])


def subtract(v1: tuple[float, float], v2: tuple[float, float]) -> Vec2:
    """Componentwise difference v1 - v2."""
    return Vec2(v1[0] - v2[0], v1[1] - v2[1])


def scale_divide(v: tuple[float, float], m: float) -> Vec2:
    """
    Divide both components by a scalar.

    Used to convert screen-space deltas to grid units. m must be non-zero.
    """
    return Vec2(v[0] / m, v[1] / m)


def magnitude(v: tuple[float, float]) -> float:
    """Euclidean length of v."""
    x, y = v
    return math.sqrt(x * x + y * y)


def normalize(v: tuple[float, float]) -> Vec2:
    """
    Rescale v to unit length.

    The zero vector has no direction and is returned unchanged.
    """
    m = magnitude(v)
    if m > 0:
        return Vec2(v[0] / m, v[1] / m)
    return Vec2(v[0], v[1])
