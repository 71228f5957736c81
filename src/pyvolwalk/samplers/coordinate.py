"""Coordinate-direction hit-and-run (CDHR)."""

import logging
from dataclasses import dataclass, field

import numpy as np

from ..utils.types import ConvexBody, CoordinateConvexBody, FloatArray, Point

logger = logging.getLogger(__name__)


@dataclass
class CoordinateWalkState:
    """Mutable context of one CDHR chain.

    The slack cache is only meaningful together with ``prev_point``: the body
    brings it up to date with ``point`` on the next step by correcting for the
    single coordinate ``prev_coord`` that changed. A state with no previous
    coordinate has an empty cache and its next step recomputes it from
    scratch.
    """

    point: Point
    slacks: FloatArray
    prev_point: Point | None = field(default=None)
    coord: int | None = field(default=None)
    prev_coord: int | None = field(default=None)

    def __post_init__(self):
        """Post-initialization checks."""
        self.point = np.array(self.point, dtype=float)
        if self.point.ndim != 1:
            raise ValueError("point must be a one-dimensional array.")
        if (self.prev_point is None) != (self.prev_coord is None):
            raise ValueError("prev_point and prev_coord must be set together.")

    @classmethod
    def start(cls, point: Point, n_hyperplanes: int) -> "CoordinateWalkState":
        """Fresh state for a chain starting at ``point``."""
        return cls(point=point, slacks=np.zeros(n_hyperplanes))

    @property
    def is_bootstrap(self) -> bool:
        """True until the first step has filled the slack cache."""
        return self.prev_coord is None

    @property
    def dim(self) -> int:
        """Dimension of the chain."""
        return len(self.point)


def coordinate_hit_and_run(
    state: CoordinateWalkState,
    body: CoordinateConvexBody,
    rng: np.random.Generator,
) -> CoordinateWalkState:
    """Perform one CDHR step, updating ``state`` in place.

    A coordinate ``k`` and a fraction ``kappa`` are drawn, the chord through
    the current point along ``e_k`` is computed and coordinate ``k`` is moved
    to the point at ``kappa`` along it.

    General hit-and-run pays for all hyperplanes on every step. Here the body
    keeps per-hyperplane slacks in ``state.slacks`` and only corrects them for
    the coordinate that moved on the previous step. The first step of a chain
    has nothing to correct from and fills the cache from scratch.

    Parameters
    ----------
    state : CoordinateWalkState
        State of the chain. Mutated and returned.
    body : CoordinateConvexBody
        Body to sample.
    rng : numpy.random.Generator
        Generator owned by the caller.

    Returns
    -------
    CoordinateWalkState
        The same state object, now at the next point of the chain.
    """
    coord = int(rng.integers(state.dim))
    kappa = rng.uniform()

    if state.is_bootstrap:
        min_plus, max_minus = body.line_intersect_coord(
            state.point, coord, state.slacks
        )
    else:
        min_plus, max_minus = body.line_intersect_coord(
            state.point,
            coord,
            state.slacks,
            prev_point=state.prev_point,
            prev_coord=state.prev_coord,
        )

    next_ = state.point.copy()
    next_[coord] += max_minus + kappa * (min_plus - max_minus)

    logger.debug(
        "CDHR along coordinate %d: chord (%g, %g)", coord, max_minus, min_plus
    )

    state.prev_point = state.point
    state.prev_coord = coord
    state.point = next_
    state.coord = coord
    return state


def coordinate_hit_and_run_isotropic(
    state: CoordinateWalkState,
    body: ConvexBody,
    direction: Point,
    rng: np.random.Generator,
) -> tuple[CoordinateWalkState, tuple[Point, Point]]:
    """Perform a hit-and-run step along a fixed direction.

    This is the CDHR bookkeeping with the axis replaced by a caller-supplied
    direction, e.g. an axis of a rounding transformation. The chord is
    computed from scratch with ``line_intersect``, so the slack cache is left
    untouched, and the state falls back to bootstrap for the next coordinate
    step.

    Returns
    -------
    CoordinateWalkState
        The same state object, now at the next point of the chain.
    tuple of Point
        End points of the chord at ``min_plus`` and ``max_minus``.
    """
    direction = np.asarray(direction, dtype=float)
    kappa = rng.uniform()
    min_plus, max_minus = body.line_intersect(state.point, direction)
    upper = min_plus * direction + state.point
    lower = max_minus * direction + state.point

    state.prev_point = None
    state.prev_coord = None
    state.coord = None
    state.point = kappa * upper + (1.0 - kappa) * lower
    return state, (upper, lower)
