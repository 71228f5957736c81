"""Hit-and-run biased by a Boltzmann (log-linear) density."""

import numpy as np

from ..utils.types import CholeskyFactor, ConvexBody, Point
from .directions import get_anisotropic_direction
from .hit_and_run import chord_end_points


def truncated_exponential(
    rate: float, low: float, high: float, rng: np.random.Generator
) -> float:
    """Draw from the density proportional to ``exp(-rate * t)`` on ``[low, high]``.

    Uses inversion of the truncated CDF. When ``rate * (high - low)`` is too
    small to be resolved the density is flat and a uniform draw is returned.

    Parameters
    ----------
    rate : float
        Non-negative decay rate.
    low, high : float
        Bounds of the support, ``low <= high``.
    rng : numpy.random.Generator
        Generator owned by the caller. Exactly one uniform is drawn.
    """
    u = rng.uniform()
    width = high - low
    mass = -np.expm1(-rate * width)  # 1 - exp(-rate * width)
    if mass == 0.0:
        return low + u * width
    return low - np.log1p(-u * mass) / rate


def boltzmann_hit_and_run(
    point: Point,
    body: ConvexBody,
    objective: Point,
    temperature: float,
    cholesky: CholeskyFactor,
    rng: np.random.Generator,
) -> Point:
    """Perform one hit-and-run step targeting ``exp(-<c, x> / T)`` on the body.

    The direction is drawn from the covariance given by ``cholesky``. Along
    the chord, ``<c, x>`` is linear, so the target restricted to the chord is
    a truncated exponential. It is sampled exactly, measured from the end
    point with the larger density so that the exponent stays non-positive.

    Parameters
    ----------
    point : Point
        Current point of the chain, assumed to be interior.
    body : ConvexBody
        Body to sample.
    objective : Point
        The vector ``c`` of the linear functional.
    temperature : float
        Temperature ``T > 0``. As ``T`` grows the step approaches uniform
        hit-and-run.
    cholesky : CholeskyFactor
        Cholesky factor of the direction covariance.
    rng : numpy.random.Generator
        Generator owned by the caller.

    Returns
    -------
    Point
        The next point of the chain.
    """
    direction = get_anisotropic_direction(len(point), cholesky, rng)
    min_plus, max_minus = body.line_intersect(point, direction)
    chord = chord_end_points(point, direction, min_plus, max_minus)

    # The potential changes by |<c, l>| per unit of the chord parameter.
    rate = abs(float(np.dot(objective, direction))) / temperature
    offset = truncated_exponential(rate, 0.0, min_plus - max_minus, rng)

    if np.dot(objective, chord.upper) > np.dot(objective, chord.lower):
        return chord.lower + offset * direction
    return chord.upper - offset * direction
