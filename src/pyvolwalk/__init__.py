"""pyVolWalk: Markov-chain sampling of convex bodies.

pyVolWalk implements the random walks used by randomized volume and
integration algorithms over convex bodies. The package provides:

- Random-direction and coordinate-direction hit-and-run
- Ball walk and billiard walk
- Hit-and-run towards a Boltzmann (log-linear) density
- Drivers for polytopes, spectrahedra and nested body pairs
- Reference bodies and chain diagnostics

Examples
--------
Uniform points in a cube with coordinate hit-and-run:

    >>> import numpy as np
    >>> from pyvolwalk.bodies import HPolytope
    >>> from pyvolwalk.samplers import WalkConfig, run_polytope_sampler
    >>> cube = HPolytope.cube(3)
    >>> samples = run_polytope_sampler(
    ...     cube, np.zeros(3), n_samples=1000, walk_length=10,
    ...     config=WalkConfig(walk_type="coordinate", seed=42),
    ... )
"""
