"""Random directions and uniform points on spheres and in balls."""

import numpy as np

from ..utils.types import CholeskyFactor, Point


def get_direction(dim: int, rng: np.random.Generator) -> Point:
    """Draw a direction uniformly from the unit sphere in ``dim`` dimensions.

    A standard normal vector is rotationally invariant, so normalising it
    gives a uniform point on the sphere.

    Parameters
    ----------
    dim : int
        Dimension of the ambient space.
    rng : numpy.random.Generator
        Generator owned by the caller. Its state advances by ``dim`` draws.

    Returns
    -------
    Point
        Unit vector of shape ``(dim,)``.
    """
    direction = rng.standard_normal(dim)
    return direction / np.linalg.norm(direction)


def get_anisotropic_direction(
    dim: int, cholesky: CholeskyFactor, rng: np.random.Generator
) -> Point:
    """Draw a direction from N(0, L L^T), L being the given Cholesky factor.

    The isotropic direction is mapped through ``cholesky`` and is therefore
    not of unit length.
    """
    return np.asarray(cholesky) @ get_direction(dim, rng)


def get_point_on_sphere(dim: int, radius: float, rng: np.random.Generator) -> Point:
    """Uniform point on the sphere of the given radius centred at the origin.

    A radius of 0 gives the zero vector, not a unit direction.
    """
    return radius * get_direction(dim, rng)


def get_point_in_ball(dim: int, radius: float, rng: np.random.Generator) -> Point:
    """Uniform point in the ball of the given radius centred at the origin.

    The radius of the point is ``radius * U**(1/dim)``: the volume of a ball
    grows as ``r**dim``, so this is what makes the density uniform in the
    ball rather than on its shells.
    """
    direction = get_direction(dim, rng)
    scale = radius * rng.uniform() ** (1.0 / dim)
    return scale * direction
