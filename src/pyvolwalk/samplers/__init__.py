"""Random walks and sample drivers for pyVolWalk.

This module provides the walks that sample convex bodies and the drivers
that chain them into sequences of points:

- Hit-and-run: random directions, optionally biased by a covariance
- Coordinate hit-and-run: axis directions with cached hyperplane slacks
- Ball walk: symmetric proposals in a small ball
- Boltzmann hit-and-run: a log-linear target density along each chord
- Billiard walk: straight paths with specular reflections at the boundary

Each walk only queries the body through its oracle methods, so any body
implementing the protocols in ``pyvolwalk.utils.types`` can be sampled.
"""

from .config import WalkConfig, WalkType
from .generator import (
    boltzmann_walk,
    run_boltzmann_sampler,
    run_nested_body_sampler,
    run_polytope_sampler,
    run_spectrahedron_sampler,
)

__all__ = [
    "WalkConfig",
    "WalkType",
    "boltzmann_walk",
    "run_boltzmann_sampler",
    "run_nested_body_sampler",
    "run_polytope_sampler",
    "run_spectrahedron_sampler",
]
