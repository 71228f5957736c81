"""Billiard walk with specular reflections."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum, auto

import numpy as np

from ..utils.types import FloatArray, Point, ReflectiveConvexBody
from .directions import get_direction

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 0.995
DEFAULT_REFLECTION_FACTOR = 3


class WalkMode(StrEnum):
    """Whether the cached facet arrays of a billiard chain can be reused."""

    BOOTSTRAP = auto()
    STEADY = auto()


@dataclass
class BilliardWalkState:
    """Mutable context of one billiard chain.

    ``ar`` and ``av`` are the body's per-hyperplane caches: ``A @ x`` for the
    point at the last intersection query and ``A @ v`` for the direction of
    that query. In ``STEADY`` mode the point has moved ``lambda_prev`` along
    that direction since the query, which is all the body needs to update
    ``ar`` instead of recomputing it.

    ``path_length``, ``remaining`` and ``n_reflections`` describe the last
    call to ``billiard_walk``.
    """

    point: Point
    ar: FloatArray
    av: FloatArray
    mode: WalkMode = WalkMode.BOOTSTRAP
    direction: Point | None = field(default=None)
    lambda_prev: float = 0.0
    path_length: float = 0.0
    remaining: float = 0.0
    n_reflections: int = 0

    def __post_init__(self):
        """Post-initialization checks."""
        self.point = np.array(self.point, dtype=float)
        if self.point.ndim != 1:
            raise ValueError("point must be a one-dimensional array.")
        if len(self.ar) != len(self.av):
            raise ValueError("ar and av must have the same length.")

    @classmethod
    def start(cls, point: Point, n_hyperplanes: int) -> "BilliardWalkState":
        """Fresh state for a chain starting at ``point``."""
        return cls(
            point=point, ar=np.zeros(n_hyperplanes), av=np.zeros(n_hyperplanes)
        )

    @property
    def travelled(self) -> float:
        """Path length actually travelled during the last call."""
        return self.path_length - self.remaining


def billiard_walk(
    state: BilliardWalkState,
    body: ReflectiveConvexBody,
    diameter: float,
    rng: np.random.Generator,
    margin: float = DEFAULT_MARGIN,
    reflection_factor: int = DEFAULT_REFLECTION_FACTOR,
) -> BilliardWalkState:
    """Perform one billiard walk step, updating ``state`` in place.

    A direction ``v`` and a path length ``T = U(0, 1) * diameter`` are drawn.
    The point travels along ``v``; whenever the next facet is closer than the
    remaining length it stops at ``margin`` of the way to the facet, and ``v``
    is reflected there. The step ends once the whole length is travelled or
    after ``reflection_factor * dim`` reflections, whichever comes first. In
    the latter case the point reached so far is returned as an approximation.

    Parameters
    ----------
    state : BilliardWalkState
        State of the chain. Mutated and returned.
    body : ReflectiveConvexBody
        Body to sample.
    diameter : float
        Scale of the path length, typically the diameter of the body.
    rng : numpy.random.Generator
        Generator owned by the caller.
    margin : float, optional
        Fraction of the distance to a facet travelled before reflecting. Keeps
        the point strictly inside the body despite round-off. Default 0.995.
    reflection_factor : int, optional
        Reflections allowed per step, per dimension. Default 3.

    Returns
    -------
    BilliardWalkState
        The same state object, now at the next point of the chain.
    """
    dim = len(state.point)
    max_reflections = reflection_factor * dim
    path_length = rng.uniform() * diameter
    direction = get_direction(dim, rng)

    point = state.point
    remaining = path_length
    n_reflections = 0
    lambda_prev = state.lambda_prev if state.mode == WalkMode.STEADY else None
    finished = False

    while n_reflections < max_reflections:
        distance, facet = body.line_positive_intersect(
            point, direction, state.ar, state.av, lambda_prev
        )
        if remaining <= distance:
            point = remaining * direction + point
            lambda_prev = remaining
            remaining = 0.0
            finished = True
            break

        lambda_prev = margin * distance
        point = lambda_prev * direction + point
        remaining -= lambda_prev
        direction = body.compute_reflection(direction, point, facet)
        n_reflections += 1

    if not finished:
        logger.debug(
            "Billiard walk stopped after %d reflections with %g of %g left",
            n_reflections,
            remaining,
            path_length,
        )

    state.point = point
    state.direction = direction
    state.lambda_prev = lambda_prev
    state.path_length = path_length
    state.remaining = remaining
    state.n_reflections = n_reflections
    state.mode = WalkMode.STEADY
    return state
