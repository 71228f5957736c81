"""Hit-and-run with random directions.

A hit-and-run step draws a random line through the current point and moves
to a uniform point of the chord that the body cuts from it. The walks here
differ only in how the direction is drawn and in which oracle computes the
chord:

- ``hit_and_run`` queries ``line_intersect`` of a convex body
- ``spectrahedron_hit_and_run`` queries ``boundary_oracle`` of a
  spectrahedron, optionally cut by one extra halfspace

Both accept a Cholesky factor to draw the direction from a covariance other
than the identity.
"""

from dataclasses import dataclass

import numpy as np

from ..utils.types import (
    CholeskyFactor,
    ConvexBody,
    FloatArray,
    Point,
    SpectrahedralBody,
)
from .directions import get_anisotropic_direction, get_direction


@dataclass
class Chord:
    """End points of the chord a hit-and-run step sampled from.

    ``upper`` lies at ``min_plus`` along the direction of the step and
    ``lower`` at ``max_minus``.
    """

    upper: Point
    lower: Point

    @property
    def length(self) -> float:
        """Euclidean length of the chord."""
        return float(np.linalg.norm(self.upper - self.lower))


def draw_direction(
    dim: int, rng: np.random.Generator, cholesky: CholeskyFactor | None = None
) -> Point:
    """Isotropic direction, or anisotropic if a Cholesky factor is given."""
    if cholesky is None:
        return get_direction(dim, rng)
    return get_anisotropic_direction(dim, cholesky, rng)


def chord_end_points(
    point: Point, direction: Point, min_plus: float, max_minus: float
) -> Chord:
    """End points of the chord given the oracle's signed distances."""
    return Chord(
        upper=min_plus * direction + point,
        lower=max_minus * direction + point,
    )


def uniform_on_chord(chord: Chord, rng: np.random.Generator) -> Point:
    """Uniform point of the chord, ``lambda * upper + (1 - lambda) * lower``."""
    fraction = rng.uniform()
    return fraction * chord.upper + (1.0 - fraction) * chord.lower


def hit_and_run_with_chord(
    point: Point,
    body: ConvexBody,
    rng: np.random.Generator,
    cholesky: CholeskyFactor | None = None,
) -> tuple[Point, Chord]:
    """Perform one hit-and-run step and also return the sampled chord.

    Parameters
    ----------
    point : Point
        Current point of the chain, assumed to be interior.
    body : ConvexBody
        Body to sample.
    rng : numpy.random.Generator
        Generator owned by the caller.
    cholesky : CholeskyFactor, optional
        Cholesky factor of the covariance used for the direction. If None,
        directions are isotropic.

    Returns
    -------
    Point
        The next point of the chain.
    Chord
        The chord the point was drawn from.
    """
    direction = draw_direction(len(point), rng, cholesky)
    min_plus, max_minus = body.line_intersect(point, direction)
    chord = chord_end_points(point, direction, min_plus, max_minus)
    return uniform_on_chord(chord, rng), chord


def hit_and_run(
    point: Point,
    body: ConvexBody,
    rng: np.random.Generator,
    cholesky: CholeskyFactor | None = None,
) -> Point:
    """Perform one random-direction hit-and-run step.

    The stationary distribution is uniform on the body, provided the oracle
    returns exact boundary distances.
    """
    next_, _ = hit_and_run_with_chord(point, body, rng, cholesky=cholesky)
    return next_


def spectrahedron_hit_and_run(
    point: Point,
    body: SpectrahedralBody,
    rng: np.random.Generator,
    halfspace: tuple[FloatArray, float] | None = None,
    cholesky: CholeskyFactor | None = None,
    return_chord: bool = False,
) -> Point | tuple[Point, Chord]:
    """Perform one hit-and-run step inside a spectrahedron.

    Parameters
    ----------
    point : Point
        Current point of the chain, assumed to be interior.
    body : SpectrahedralBody
        Spectrahedron to sample.
    rng : numpy.random.Generator
        Generator owned by the caller.
    halfspace : tuple of (FloatArray, float), optional
        Extra constraint ``(a, b)`` meaning ``a @ x <= b``. The chain then
        samples the intersection of the spectrahedron with the halfspace.
    cholesky : CholeskyFactor, optional
        Cholesky factor of the covariance used for the direction.
    return_chord : bool, optional
        Also return the sampled chord. Default is False.
    """
    direction = draw_direction(len(point), rng, cholesky)
    if halfspace is None:
        min_plus, max_minus = body.boundary_oracle(point, direction)
    else:
        a, b = halfspace
        min_plus, max_minus = body.boundary_oracle(point, direction, a, b)

    chord = chord_end_points(point, direction, min_plus, max_minus)
    next_ = uniform_on_chord(chord, rng)
    if return_chord:
        return next_, chord
    return next_
