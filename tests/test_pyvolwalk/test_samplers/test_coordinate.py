"""Tests for coordinate-direction hit-and-run."""

import numpy as np
import pytest

from pyvolwalk.bodies import HPolytope
from pyvolwalk.samplers.coordinate import (
    CoordinateWalkState,
    coordinate_hit_and_run,
    coordinate_hit_and_run_isotropic,
)


class RecordingPolytope(HPolytope):
    """A polytope that records whether each coordinate query was incremental."""

    def __init__(self, A, b):
        super().__init__(A, b)
        self.incremental_calls = []

    def line_intersect_coord(self, point, coord, slacks, prev_point=None, prev_coord=None):
        self.incremental_calls.append(prev_point is not None)
        return super().line_intersect_coord(
            point, coord, slacks, prev_point=prev_point, prev_coord=prev_coord
        )


@pytest.fixture
def polytope() -> HPolytope:
    """A random polytope inside a box, with the origin well inside."""
    rng = np.random.default_rng(30)
    box = HPolytope.cube(4, radius=5.0)
    A = np.vstack([rng.standard_normal((25, 4)), box.A])
    b = np.concatenate([1.0 + rng.random(25), box.b])
    return HPolytope(A, b)


def test_state_start() -> None:
    """A fresh state is in bootstrap with an empty cache of the right size."""
    state = CoordinateWalkState.start([0.0, 0.0], n_hyperplanes=4)

    assert state.is_bootstrap
    assert state.dim == 2
    assert state.slacks.shape == (4,)
    assert state.prev_point is None


def test_state_requires_matching_previous_fields() -> None:
    """prev_point and prev_coord come together."""
    with pytest.raises(ValueError, match="must be set together"):
        CoordinateWalkState(
            point=np.zeros(2), slacks=np.zeros(4), prev_point=np.zeros(2)
        )


def test_first_step_is_not_incremental() -> None:
    """Only the first step of a chain recomputes the slacks from scratch."""
    cube = HPolytope.cube(3)
    body = RecordingPolytope(cube.A, cube.b)
    state = CoordinateWalkState.start(np.zeros(3), body.num_of_hyperplanes())
    rng = np.random.default_rng(31)

    for _ in range(5):
        coordinate_hit_and_run(state, body, rng)

    assert body.incremental_calls == [False, True, True, True, True]


def test_step_moves_single_coordinate(polytope: HPolytope) -> None:
    """A step changes only the drawn coordinate and shifts the history."""
    state = CoordinateWalkState.start(np.zeros(4), polytope.num_of_hyperplanes())
    rng = np.random.default_rng(32)

    for _ in range(20):
        before = state.point.copy()
        coordinate_hit_and_run(state, polytope, rng)

        assert np.array_equal(state.prev_point, before)
        assert state.prev_coord == state.coord
        unchanged = np.arange(4) != state.coord
        assert np.array_equal(state.point[unchanged], before[unchanged])


def test_incremental_matches_from_scratch(polytope: HPolytope) -> None:
    """Cached slacks give the same chord as a from-scratch computation."""
    state = CoordinateWalkState.start(np.zeros(4), polytope.num_of_hyperplanes())
    rng = np.random.default_rng(33)
    coordinate_hit_and_run(state, polytope, rng)

    for _ in range(200):
        coord = int(rng.integers(4))
        cached = state.slacks.copy()
        incremental = polytope.line_intersect_coord(
            state.point,
            coord,
            cached,
            prev_point=state.prev_point,
            prev_coord=state.prev_coord,
        )
        from_scratch = polytope.line_intersect_coord(
            state.point, coord, np.zeros(polytope.num_of_hyperplanes())
        )

        assert incremental == pytest.approx(from_scratch, abs=1e-9)
        assert np.allclose(cached, polytope.slacks(state.point), atol=1e-9)

        coordinate_hit_and_run(state, polytope, rng)


def test_chain_stays_inside(polytope: HPolytope) -> None:
    """Every point of a long CDHR chain is interior up to round-off."""
    state = CoordinateWalkState.start(np.zeros(4), polytope.num_of_hyperplanes())
    rng = np.random.default_rng(34)

    for _ in range(10_000):
        coordinate_hit_and_run(state, polytope, rng)
        assert np.min(polytope.slacks(state.point)) >= -1e-9


def test_isotropic_variant_resets_history(polytope: HPolytope) -> None:
    """Moving along a free direction invalidates the slack cache."""
    state = CoordinateWalkState.start(np.zeros(4), polytope.num_of_hyperplanes())
    rng = np.random.default_rng(35)
    coordinate_hit_and_run(state, polytope, rng)
    direction = np.array([1.0, 1.0, 0.0, 0.0]) / np.sqrt(2.0)

    state, (upper, lower) = coordinate_hit_and_run_isotropic(
        state, polytope, direction, rng
    )

    assert state.is_bootstrap
    assert np.isclose(np.min(polytope.slacks(upper)), 0.0, atol=1e-12)
    assert np.isclose(np.min(polytope.slacks(lower)), 0.0, atol=1e-12)
    assert np.min(polytope.slacks(state.point)) >= -1e-9

    body = RecordingPolytope(polytope.A, polytope.b)
    coordinate_hit_and_run(state, body, rng)
    assert body.incremental_calls == [False]
