"""Configuration shared by the sample drivers."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

import numpy as np

from ..utils.exceptions import InputError
from .billiard import DEFAULT_MARGIN, DEFAULT_REFLECTION_FACTOR


class WalkType(StrEnum):
    """Walk used by the polytope and nested-body drivers."""

    HIT_AND_RUN = auto()
    COORDINATE = auto()
    BALL = auto()
    BILLIARD = auto()


@dataclass
class WalkConfig:
    """Walk selection, walk constants and the random generator of a chain.

    The generator is created once from ``seed`` unless one is passed in, and
    every draw of every walk step goes through it. Independent chains must
    not share a config.

    Parameters
    ----------
    walk_type : WalkType or str, optional
        Walk used by the polytope drivers. Default is hit-and-run.
    delta : float, optional
        Radius of the ball walk proposal. Default is 0.
    diameter : float, optional
        Path length scale of the billiard walk. Required for the billiard
        walk.
    margin : float, optional
        Fraction of the distance to a facet travelled before a billiard
        reflection. Default is 0.995.
    reflection_factor : int, optional
        Billiard reflections allowed per step, per dimension. Default is 3.
    seed : int, optional
        Seed of the generator. Default is 61254557.
    rng : numpy.random.Generator, optional
        Generator to use instead of seeding a new one.
    progress : bool, optional
        Whether to display a progress bar. Default is False.
    """

    walk_type: WalkType = WalkType.HIT_AND_RUN
    delta: float = 0.0
    diameter: float | None = None
    margin: float = DEFAULT_MARGIN
    reflection_factor: int = DEFAULT_REFLECTION_FACTOR
    seed: int | None = 61254557
    rng: np.random.Generator | None = field(default=None, repr=False)
    progress: bool = False

    def __post_init__(self):
        """Validate the constants and create the generator."""
        try:
            self.walk_type = WalkType(self.walk_type)
        except ValueError:
            raise InputError(
                msg=f"Unknown walk type {self.walk_type!r}, expected one of "
                + ", ".join(WalkType)
            ) from None
        if self.delta < 0:
            raise InputError(msg="delta must be non-negative.")
        if self.walk_type == WalkType.BILLIARD:
            if self.diameter is None or self.diameter <= 0:
                raise InputError(
                    msg="The billiard walk needs a positive diameter."
                )
        if not 0.0 < self.margin <= 1.0:
            raise InputError(msg="margin must lie in (0, 1].")
        if self.reflection_factor < 1:
            raise InputError(msg="reflection_factor must be a positive integer.")
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)
