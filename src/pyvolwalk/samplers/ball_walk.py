"""Ball walk with a uniform target distribution."""

import logging

import numpy as np

from ..utils.types import ConvexBody, Membership, Point
from .directions import get_point_in_ball

logger = logging.getLogger(__name__)


def ball_walk(
    point: Point,
    body: ConvexBody,
    delta: float,
    rng: np.random.Generator,
) -> tuple[Point, bool]:
    """Perform a single ball walk step.

    A point ``y`` is proposed uniformly in the ball of radius ``delta``
    around ``point`` and accepted only if it is strictly inside the body.
    The proposal is symmetric, so the chain is stationary on the uniform
    distribution over the body.

    Parameters
    ----------
    point : Point
        Current point of the chain, assumed to be interior.
    body : ConvexBody
        Body to sample; only ``is_in`` is queried.
    delta : float
        Radius of the proposal ball. ``delta = 0`` gives a chain that never
        moves.
    rng : numpy.random.Generator
        Generator owned by the caller.

    Returns
    -------
    Point
        The next point of the chain. A copy of ``point`` if the proposal was
        rejected.
    bool
        Whether the proposal was accepted.
    """
    proposed = point + get_point_in_ball(len(point), delta, rng)
    accept = body.is_in(proposed) == Membership.INTERIOR

    logger.debug("%s ball walk proposal", "Accepting" if accept else "Rejecting")

    next_ = proposed if accept else np.array(point, dtype=float)
    return next_, accept
