"""Tests for H-polytopes and their intersection oracles."""

import numpy as np
import pytest

from pyvolwalk.bodies import HPolytope
from pyvolwalk.bodies.hpolytope import chord_limits
from pyvolwalk.utils.exceptions import InputError
from pyvolwalk.utils.types import Membership


@pytest.fixture
def cube() -> HPolytope:
    """The cube [-1, 1]^3."""
    return HPolytope.cube(3)


def test_chord_limits() -> None:
    slacks = np.array([1.0, 2.0, 3.0])
    rates = np.array([2.0, -1.0, 0.0])
    assert chord_limits(slacks, rates) == (0.5, -2.0)


def test_chord_limits_unbounded() -> None:
    """Without constraints on one side the chord is unbounded there."""
    assert chord_limits(np.array([1.0]), np.array([1.0])) == (1.0, -np.inf)
    assert chord_limits(np.array([1.0]), np.array([0.0])) == (np.inf, -np.inf)


def test_cube_shape(cube: HPolytope) -> None:
    assert cube.dimension() == 3
    assert cube.num_of_hyperplanes() == 6
    assert repr(cube) == "HPolytope(n_dims=3, n_hyperplanes=6)"


@pytest.mark.parametrize(
    "point, expected",
    [
        ([0.0, 0.0, 0.0], Membership.INTERIOR),
        ([1.0, 0.5, 0.0], Membership.BOUNDARY),
        ([1.0 + 1e-12, 0.0, 0.0], Membership.BOUNDARY),
        ([1.5, 0.0, 0.0], Membership.EXTERIOR),
    ],
)
def test_is_in(cube: HPolytope, point, expected: Membership) -> None:
    assert cube.is_in(np.array(point)) == expected


def test_line_intersect(cube: HPolytope) -> None:
    """From (0.5, 0, 0) along the first axis the chord is [-1.5, 0.5]."""
    min_plus, max_minus = cube.line_intersect(
        np.array([0.5, 0.0, 0.0]), np.array([1.0, 0.0, 0.0])
    )
    assert min_plus == pytest.approx(0.5)
    assert max_minus == pytest.approx(-1.5)


def test_line_intersect_diagonal(cube: HPolytope) -> None:
    direction = np.ones(3) / np.sqrt(3.0)
    min_plus, max_minus = cube.line_intersect(np.zeros(3), direction)
    assert min_plus == pytest.approx(np.sqrt(3.0))
    assert max_minus == pytest.approx(-np.sqrt(3.0))


def test_line_intersect_coord_fills_slacks(cube: HPolytope) -> None:
    point = np.array([0.2, -0.4, 0.6])
    slacks = np.zeros(6)

    min_plus, max_minus = cube.line_intersect_coord(point, 2, slacks)

    assert np.allclose(slacks, cube.slacks(point))
    assert min_plus == pytest.approx(0.4)
    assert max_minus == pytest.approx(-1.6)


def test_line_intersect_coord_incremental(cube: HPolytope) -> None:
    """After a move along one axis only that column updates the slacks."""
    prev_point = np.array([0.2, -0.4, 0.6])
    slacks = cube.slacks(prev_point)
    point = prev_point.copy()
    point[1] = 0.3

    result = cube.line_intersect_coord(
        point, 0, slacks, prev_point=prev_point, prev_coord=1
    )

    assert np.allclose(slacks, cube.slacks(point))
    assert result == pytest.approx(cube.line_intersect_coord(point, 0, np.zeros(6)))


def test_line_positive_intersect(cube: HPolytope) -> None:
    """The facet x[0] <= 1 is hit first along (1, 0.5, 0)."""
    point = np.array([0.0, 0.0, 0.0])
    direction = np.array([1.0, 0.5, 0.0])
    ar = np.zeros(6)
    av = np.zeros(6)

    distance, facet = cube.line_positive_intersect(point, direction, ar, av)

    assert distance == pytest.approx(1.0)
    assert facet == 0
    assert np.allclose(ar, cube.A @ point)
    assert np.allclose(av, cube.A @ direction)


def test_line_positive_intersect_cached(cube: HPolytope) -> None:
    """Advancing the cache by lambda_prev matches a fresh computation."""
    point = np.array([0.1, 0.2, -0.3])
    direction = np.array([0.6, 0.0, 0.8])
    ar = np.zeros(6)
    av = np.zeros(6)
    cube.line_positive_intersect(point, direction, ar, av)

    step = 0.4
    moved = point + step * direction
    new_direction = np.array([0.0, -1.0, 0.0])
    distance, facet = cube.line_positive_intersect(
        moved, new_direction, ar, av, lambda_prev=step
    )

    assert np.allclose(ar, cube.A @ moved)
    assert distance == pytest.approx(1.0 + moved[1])
    assert facet == 4


def test_line_positive_intersect_unbounded() -> None:
    """A direction approaching no facet reports an infinite distance."""
    halfspace = HPolytope([[1.0, 0.0]], [1.0])
    distance, facet = halfspace.line_positive_intersect(
        np.zeros(2), np.array([-1.0, 0.0]), np.zeros(1), np.zeros(1)
    )
    assert distance == np.inf
    assert facet == -1


def test_compute_reflection(cube: HPolytope) -> None:
    """Reflection flips the normal component and keeps the norm."""
    direction = np.array([0.6, 0.8, 0.0])
    reflected = cube.compute_reflection(direction, np.array([1.0, 0.0, 0.0]), 0)

    assert np.allclose(reflected, [-0.6, 0.8, 0.0])
    assert np.linalg.norm(reflected) == pytest.approx(1.0)
    assert np.array_equal(direction, [0.6, 0.8, 0.0])


def test_compute_reflection_oblique() -> None:
    polytope = HPolytope([[1.0, 1.0]], [1.0])
    reflected = polytope.compute_reflection(
        np.array([1.0, 0.0]), np.array([0.5, 0.5]), 0
    )
    assert np.allclose(reflected, [0.0, -1.0])


def test_invalid_shapes() -> None:
    with pytest.raises(InputError, match="Inconsistent shapes"):
        HPolytope(np.eye(2), [1.0, 1.0, 1.0])


def test_invalid_box() -> None:
    with pytest.raises(InputError, match="ordered bounds"):
        HPolytope.from_box([0.0, 1.0], [1.0, 0.0])
