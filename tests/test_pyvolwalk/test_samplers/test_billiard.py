"""Tests for the billiard walk."""

import numpy as np
import pytest

from pyvolwalk.bodies import Ball, HPolytope
from pyvolwalk.samplers.billiard import BilliardWalkState, WalkMode, billiard_walk


class RecordingPolytope(HPolytope):
    """A polytope that records the points of its forward intersection queries."""

    def __init__(self, A, b):
        super().__init__(A, b)
        self.query_points = []

    def line_positive_intersect(self, point, direction, ar, av, lambda_prev=None):
        self.query_points.append(np.array(point))
        return super().line_positive_intersect(point, direction, ar, av, lambda_prev)


@pytest.fixture
def cube() -> HPolytope:
    """The cube [-1, 1]^3."""
    return HPolytope.cube(3)


def _start(body, point) -> BilliardWalkState:
    return BilliardWalkState.start(np.asarray(point, dtype=float), body.num_of_hyperplanes())


def test_state_modes(cube: HPolytope) -> None:
    """A chain starts in bootstrap and stays steady after its first call."""
    state = _start(cube, np.zeros(3))
    assert state.mode == WalkMode.BOOTSTRAP

    rng = np.random.default_rng(50)
    billiard_walk(state, cube, 4.0, rng)
    assert state.mode == WalkMode.STEADY

    billiard_walk(state, cube, 4.0, rng)
    assert state.mode == WalkMode.STEADY


def test_chain_stays_inside(cube: HPolytope) -> None:
    """Every point of a billiard chain is strictly inside the cube."""
    state = _start(cube, np.zeros(3))
    rng = np.random.default_rng(51)

    for _ in range(2_000):
        billiard_walk(state, cube, 2.0 * np.sqrt(3.0), rng)
        assert np.min(cube.slacks(state.point)) > 0.0


def test_cached_arrays_follow_the_point(cube: HPolytope) -> None:
    """Between calls, advancing ``ar`` by ``lambda_prev * av`` gives ``A @ point``."""
    state = _start(cube, np.array([0.2, -0.1, 0.4]))
    rng = np.random.default_rng(52)

    for _ in range(200):
        billiard_walk(state, cube, 5.0, rng)
        assert np.allclose(state.ar + state.lambda_prev * state.av, cube.A @ state.point)


def test_path_length_conservation(cube: HPolytope) -> None:
    """The segments of one call add up to the travelled length."""
    body = RecordingPolytope(cube.A, cube.b)
    state = _start(body, np.zeros(3))
    rng = np.random.default_rng(53)

    for _ in range(200):
        body.query_points.clear()
        start = state.point.copy()
        billiard_walk(state, body, 6.0, rng)

        path = [start] + body.query_points[1:] + [state.point]
        segments = [np.linalg.norm(b - a) for a, b in zip(path[:-1], path[1:])]
        assert sum(segments) == pytest.approx(state.travelled, rel=1e-9, abs=1e-12)
        assert state.n_reflections <= 3 * 3
        if state.n_reflections < 3 * 3:
            assert state.remaining == 0.0
            assert state.travelled == pytest.approx(state.path_length)


def test_reflection_cap(cube: HPolytope) -> None:
    """A long path in a thin box is cut off after reflection_factor * dim reflections."""
    box = HPolytope.from_box([0.0, 0.0], [1.0, 0.01])
    state = _start(box, np.array([0.5, 0.005]))
    rng = np.random.default_rng(54)
    capped = 0

    for _ in range(200):
        billiard_walk(state, box, 100.0, rng, reflection_factor=1)
        assert state.n_reflections <= 2
        assert np.min(box.slacks(state.point)) > 0.0
        if state.remaining > 0.0:
            capped += 1
            assert state.n_reflections == 2

    assert capped > 0


def test_margin_is_configurable(cube: HPolytope) -> None:
    """With margin 0.5 the first reflection happens half way to the facet."""
    body = RecordingPolytope(cube.A, cube.b)
    rng = np.random.default_rng(55)
    n_checked = 0

    for _ in range(50):
        state = _start(body, np.zeros(3))
        body.query_points.clear()
        billiard_walk(state, body, 100.0, rng, margin=0.5)
        if state.n_reflections > 0:
            first_reflection = body.query_points[1]
            assert np.min(cube.slacks(first_reflection)) == pytest.approx(0.5)
            n_checked += 1

    assert n_checked > 0


def test_billiard_in_ball() -> None:
    """The walk also runs on a smooth body."""
    ball = Ball(np.zeros(2), 1.0)
    state = _start(ball, np.zeros(2))
    rng = np.random.default_rng(56)

    for _ in range(1_000):
        billiard_walk(state, ball, 2.0, rng)
        assert np.linalg.norm(state.point) < 1.0
