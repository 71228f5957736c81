"""Sample drivers: chain walk steps into sequences of points."""

import logging
from dataclasses import dataclass, field
from numbers import Integral

import numpy as np
from tqdm import tqdm

from ..utils.exceptions import InputError
from ..utils.types import (
    CholeskyFactor,
    ConvexBody,
    FloatArray,
    Membership,
    Point,
    PointArray,
    SpectrahedralBody,
)
from .ball_walk import ball_walk
from .billiard import BilliardWalkState, billiard_walk
from .boltzmann import boltzmann_hit_and_run
from .config import WalkConfig, WalkType
from .coordinate import CoordinateWalkState, coordinate_hit_and_run
from .hit_and_run import hit_and_run, spectrahedron_hit_and_run

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

_REQUIRED_METHODS = {
    WalkType.HIT_AND_RUN: ("line_intersect",),
    WalkType.BALL: ("is_in",),
    WalkType.COORDINATE: ("num_of_hyperplanes", "line_intersect_coord"),
    WalkType.BILLIARD: (
        "num_of_hyperplanes",
        "line_positive_intersect",
        "compute_reflection",
    ),
}


@dataclass
class SampleSequence:
    """Points emitted by a sample driver, in generation order.

    Consumers may rely on the order, e.g. for autocorrelation diagnostics.
    ``n_steps`` counts every walk step taken, including the ones between
    emitted points, and ``n_moves`` the steps that changed the point.
    """

    dim: int
    point_chain: list[Point] = field(default_factory=list, init=False)
    n_steps: int = field(default=0, init=False)
    n_moves: int = field(default=0, init=False)

    def __repr__(self):
        """String representation of the sample sequence."""
        return f"{type(self).__name__}(dim={self.dim}, n_samples={self.n_samples})"

    def __post_init__(self):
        """Post-initialization checks."""
        if not isinstance(self.dim, Integral) or self.dim <= 0:
            raise ValueError("dim must be a positive integer.")
        self.dim = int(self.dim)

    def __len__(self) -> int:
        """Number of emitted points."""
        return self.n_samples

    @property
    def n_samples(self) -> int:
        """Number of emitted points."""
        return len(self.point_chain)

    @property
    def points(self) -> PointArray:
        """Emitted points as an array of shape (n_samples, dim)."""
        if not self.point_chain:
            return np.empty((0, self.dim))
        return np.array(self.point_chain)

    @property
    def move_rate(self) -> float:
        """Fraction of walk steps that moved the point."""
        if self.n_steps == 0:
            return 0.0
        return self.n_moves / self.n_steps


@dataclass(repr=False)
class NestedSampleSequence(SampleSequence):
    """Points of a chain on a large body that fell inside a nested small body.

    ``n_generated`` counts the points the chain produced; only ``n_inside``
    of them were kept.
    """

    n_generated: int = field(default=0, init=False)

    @property
    def n_inside(self) -> int:
        """Number of generated points inside the small body."""
        return self.n_samples

    @property
    def inside_ratio(self) -> float:
        """Fraction of generated points inside the small body."""
        if self.n_generated == 0:
            return 0.0
        return self.n_inside / self.n_generated


def update_sequence(sequence: SampleSequence, point: Point) -> None:
    """Append a copy of ``point`` to the sequence."""
    sequence.point_chain.append(np.array(point, dtype=float))


class _PolytopeWalker:
    """One chain on a convex body, using the walk selected by a config."""

    def __init__(self, body: ConvexBody, start: Point, config: WalkConfig):
        self.body = body
        self.config = config
        self.walk_type = config.walk_type
        if self.walk_type == WalkType.COORDINATE:
            self._state = CoordinateWalkState.start(start, body.num_of_hyperplanes())
        elif self.walk_type == WalkType.BILLIARD:
            self._state = BilliardWalkState.start(start, body.num_of_hyperplanes())
        else:
            self._point = np.array(start, dtype=float)

    @property
    def point(self) -> Point:
        if self.walk_type in (WalkType.COORDINATE, WalkType.BILLIARD):
            return self._state.point
        return self._point

    def step(self) -> bool:
        """Take one walk step. Returns whether the point moved."""
        rng = self.config.rng
        if self.walk_type == WalkType.BALL:
            self._point, accepted = ball_walk(
                self._point, self.body, self.config.delta, rng
            )
            return accepted
        if self.walk_type == WalkType.COORDINATE:
            coordinate_hit_and_run(self._state, self.body, rng)
        elif self.walk_type == WalkType.BILLIARD:
            billiard_walk(
                self._state,
                self.body,
                self.config.diameter,
                rng,
                margin=self.config.margin,
                reflection_factor=self.config.reflection_factor,
            )
        else:
            self._point = hit_and_run(self._point, self.body, rng)
        return True


class _SpectrahedronWalker:
    """One hit-and-run chain on a spectrahedron."""

    def __init__(
        self,
        body: SpectrahedralBody,
        start: Point,
        config: WalkConfig,
        halfspace: tuple[FloatArray, float] | None = None,
    ):
        self.body = body
        self.config = config
        self.halfspace = halfspace
        self.point = np.array(start, dtype=float)

    def step(self) -> bool:
        """Take one hit-and-run step."""
        self.point = spectrahedron_hit_and_run(
            self.point, self.body, self.config.rng, halfspace=self.halfspace
        )
        return True


def run_polytope_sampler(
    body: ConvexBody,
    start: Point,
    n_samples: int,
    walk_length: int,
    config: WalkConfig | None = None,
) -> SampleSequence:
    """Sample a convex body with the walk selected in the configuration.

    After one bootstrap step (for CDHR, the step that fills the slack cache
    from scratch), ``walk_length`` walk steps are taken between consecutive
    emitted points.

    Parameters
    ----------
    body : ConvexBody
        Body to sample. Must offer the oracle methods of the selected walk:
        ``line_intersect`` for hit-and-run, ``line_intersect_coord`` for
        CDHR, ``line_positive_intersect`` and ``compute_reflection`` for the
        billiard walk.
    start : Point
        Interior point the chain starts from. Not modified.
    n_samples : int
        Number of points to emit.
    walk_length : int
        Number of walk steps between emitted points.
    config : WalkConfig, optional
        Walk selection, constants and generator. A default configuration
        (hit-and-run, default seed) is used if None.

    Returns
    -------
    SampleSequence
        The emitted points in generation order.

    Raises
    ------
    InputError
        If the start point does not match the body, the counts are negative,
        or the body lacks a method the selected walk needs.

    Examples
    --------
    >>> from pyvolwalk.bodies import HPolytope
    >>> cube = HPolytope.cube(3)
    >>> config = WalkConfig(walk_type="coordinate", seed=1)
    >>> samples = run_polytope_sampler(cube, np.zeros(3), 100, 10, config)
    >>> samples.points.shape
    (100, 3)
    """
    config = WalkConfig() if config is None else config
    start = _check_inputs(body, start, n_samples, walk_length)
    _check_capabilities(body, config.walk_type)

    logger.info("Running %s sampler on a convex body", config.walk_type)
    logger.info("Dimension                       : %d", len(start))
    logger.info("Number of samples, walk length  : %d, %d", n_samples, walk_length)

    walker = _PolytopeWalker(body, start, config)
    sequence = SampleSequence(len(start))
    _bootstrap(walker, sequence)
    _run_chain(walker, sequence, n_samples, walk_length, config.progress)
    return sequence


def run_spectrahedron_sampler(
    body: SpectrahedralBody,
    start: Point,
    n_samples: int,
    walk_length: int,
    config: WalkConfig | None = None,
    halfspace: tuple[FloatArray, float] | None = None,
) -> SampleSequence:
    """Sample a spectrahedron with hit-and-run.

    The walk type of the configuration is ignored: the spectrahedron oracle
    offers neither axis-aligned caching nor the facet structure the other
    walks rely on.

    Parameters
    ----------
    body : SpectrahedralBody
        Spectrahedron to sample.
    start : Point
        Interior point the chain starts from. Not modified.
    n_samples : int
        Number of points to emit.
    walk_length : int
        Number of walk steps between emitted points.
    config : WalkConfig, optional
        Generator and progress settings.
    halfspace : tuple of (FloatArray, float), optional
        Extra constraint ``(a, b)`` meaning ``a @ x <= b``.

    Returns
    -------
    SampleSequence
        The emitted points in generation order.
    """
    config = WalkConfig() if config is None else config
    start = _check_inputs(body, start, n_samples, walk_length)
    if not hasattr(body, "boundary_oracle"):
        raise InputError(msg="The body has no boundary_oracle method.")

    logger.info("Running hit-and-run sampler on a spectrahedron")
    logger.info("Dimension                       : %d", len(start))
    logger.info("Number of samples, walk length  : %d, %d", n_samples, walk_length)

    walker = _SpectrahedronWalker(body, start, config, halfspace=halfspace)
    sequence = SampleSequence(len(start))
    _run_chain(walker, sequence, n_samples, walk_length, config.progress)
    return sequence


def run_nested_body_sampler(
    large_body: ConvexBody,
    small_body: ConvexBody,
    start: Point,
    n_samples: int,
    walk_length: int,
    config: WalkConfig | None = None,
) -> NestedSampleSequence:
    """Sample a large body and keep the points that fall in a nested one.

    The chain runs on ``large_body`` exactly as in ``run_polytope_sampler``.
    Each of the ``n_samples`` generated points is kept only if it is interior
    to ``small_body``. The ratio ``n_inside / n_generated`` estimates the
    volume ratio of the two bodies, as used by telescoping-product volume
    estimators.

    Returns
    -------
    NestedSampleSequence
        The kept points in generation order, with ``n_generated`` and
        ``n_inside`` counters.
    """
    config = WalkConfig() if config is None else config
    start = _check_inputs(large_body, start, n_samples, walk_length)
    _check_capabilities(large_body, config.walk_type)

    logger.info("Running %s sampler on a nested body pair", config.walk_type)
    logger.info("Dimension                       : %d", len(start))
    logger.info("Number of samples, walk length  : %d, %d", n_samples, walk_length)

    walker = _PolytopeWalker(large_body, start, config)
    sequence = NestedSampleSequence(len(start))
    _bootstrap(walker, sequence)
    _run_chain(
        walker,
        sequence,
        n_samples,
        walk_length,
        config.progress,
        keep=lambda point: small_body.is_in(point) == Membership.INTERIOR,
    )

    logger.info(
        "%d of %d points inside the small body", sequence.n_inside, sequence.n_generated
    )
    return sequence


def boltzmann_walk(
    body: ConvexBody,
    objective: Point,
    start: Point,
    walk_length: int,
    temperature: float,
    cholesky: CholeskyFactor | None = None,
    config: WalkConfig | None = None,
) -> Point:
    """Run ``walk_length`` Boltzmann hit-and-run steps from ``start``.

    Parameters
    ----------
    body : ConvexBody
        Body to sample.
    objective : Point
        The vector ``c`` of the target ``exp(-<c, x> / temperature)``.
    start : Point
        Interior point the chain starts from. Not modified.
    walk_length : int
        Number of steps.
    temperature : float
        Positive temperature.
    cholesky : CholeskyFactor, optional
        Cholesky factor of the direction covariance. Identity if None.
    config : WalkConfig, optional
        Generator settings; the walk type is ignored.

    Returns
    -------
    Point
        The end point of the chain.
    """
    config = WalkConfig() if config is None else config
    start = _check_inputs(body, start, 0, walk_length)
    cholesky = _check_boltzmann_inputs(start, objective, temperature, cholesky)
    return _boltzmann_chain(
        body, objective, start, walk_length, temperature, cholesky, config.rng
    )


def run_boltzmann_sampler(
    body: ConvexBody,
    objective: Point,
    start: Point,
    n_samples: int,
    walk_length: int,
    temperature: float,
    cholesky: CholeskyFactor | None = None,
    config: WalkConfig | None = None,
) -> SampleSequence:
    """Draw points from independent Boltzmann hit-and-run chains.

    Every chain restarts from ``start`` and runs ``walk_length`` steps, so the
    returned points are not correlated through a shared chain. They still
    share the generator of ``config``, drawn from in sequence.

    Returns
    -------
    SampleSequence
        One end point per chain, in the order the chains were run.
    """
    config = WalkConfig() if config is None else config
    start = _check_inputs(body, start, n_samples, walk_length)
    cholesky = _check_boltzmann_inputs(start, objective, temperature, cholesky)

    logger.info("Running Boltzmann hit-and-run at temperature %g", temperature)
    logger.info("Number of chains, walk length   : %d, %d", n_samples, walk_length)

    sequence = SampleSequence(len(start))
    for _ in tqdm(range(n_samples), disable=not config.progress):
        point = _boltzmann_chain(
            body, objective, start, walk_length, temperature, cholesky, config.rng
        )
        sequence.n_steps += walk_length
        sequence.n_moves += walk_length
        update_sequence(sequence, point)
    return sequence


def _boltzmann_chain(
    body: ConvexBody,
    objective: Point,
    start: Point,
    walk_length: int,
    temperature: float,
    cholesky: CholeskyFactor,
    rng: np.random.Generator,
) -> Point:
    point = np.array(start, dtype=float)
    for _ in range(walk_length):
        point = boltzmann_hit_and_run(
            point, body, objective, temperature, cholesky, rng
        )
    return point


def _bootstrap(walker: _PolytopeWalker, sequence: SampleSequence) -> None:
    """Take the step that starts a chain before its regular loop."""
    moved = walker.step()
    sequence.n_steps += 1
    sequence.n_moves += int(moved)


def _run_chain(
    walker: _PolytopeWalker | _SpectrahedronWalker,
    sequence: SampleSequence,
    n_samples: int,
    walk_length: int,
    progress: bool = False,
    keep=None,
) -> None:
    """Run the outer sample loop and the inner walk loop of a driver."""
    for _ in tqdm(range(n_samples), disable=not progress):
        for _ in range(walk_length):
            moved = walker.step()
            sequence.n_steps += 1
            sequence.n_moves += int(moved)

        if isinstance(sequence, NestedSampleSequence):
            sequence.n_generated += 1
        if keep is None or keep(walker.point):
            update_sequence(sequence, walker.point)
        else:
            logger.debug("Discarding point outside the small body")


def _check_inputs(body, start: Point, n_samples: int, walk_length: int) -> Point:
    start = np.asarray(start, dtype=float)
    if start.ndim != 1:
        raise InputError(msg="The start point must be a one-dimensional array.")
    if len(start) != body.dimension():
        raise InputError(
            msg=f"The start point has dimension {len(start)} "
            + f"but the body has dimension {body.dimension()}."
        )
    if n_samples < 0 or walk_length < 0:
        raise InputError(msg="n_samples and walk_length must be non-negative.")
    return start


def _check_capabilities(body, walk_type: WalkType) -> None:
    missing = [name for name in _REQUIRED_METHODS[walk_type] if not hasattr(body, name)]
    if missing:
        raise InputError(
            msg=f"The {walk_type} walk needs the body methods: " + ", ".join(missing)
        )


def _check_boltzmann_inputs(
    start: Point,
    objective: Point,
    temperature: float,
    cholesky: CholeskyFactor | None,
) -> CholeskyFactor:
    if temperature <= 0:
        raise InputError(msg="temperature must be positive.")
    if np.shape(objective) != start.shape:
        raise InputError(msg="objective and start point must have the same shape.")
    if cholesky is None:
        return np.eye(len(start))
    cholesky = np.asarray(cholesky, dtype=float)
    if cholesky.shape != (len(start), len(start)):
        raise InputError(msg="cholesky must be a square matrix of the body dimension.")
    return cholesky
