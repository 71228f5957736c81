"""Euclidean balls and their intersections with polytopes."""

import numpy as np
import numpy.typing as npt

from ..utils.exceptions import InputError
from ..utils.types import FloatArray, Membership, Point
from .hpolytope import HPolytope


class Ball:
    """The ball of the given radius around ``center``.

    A ball has a single smooth facet, reported with index 0. It keeps no
    per-hyperplane caches: the ``slacks``, ``ar`` and ``av`` arguments of the
    oracle methods are accepted and ignored.
    """

    def __init__(self, center: npt.ArrayLike, radius: float, tol: float = 1e-10):
        self.center = np.atleast_1d(np.asarray(center, dtype=float))
        self.radius = float(radius)
        self.tol = tol
        if self.radius <= 0:
            raise InputError(msg="The radius of a ball must be positive.")

    def __repr__(self):
        """String representation of the ball."""
        return f"Ball(n_dims={self.dimension()}, radius={self.radius})"

    def dimension(self) -> int:
        return len(self.center)

    def num_of_hyperplanes(self) -> int:
        return 0

    def is_in(self, point: Point) -> Membership:
        gap = self.radius - np.linalg.norm(point - self.center)
        if gap > self.tol:
            return Membership.INTERIOR
        if gap >= -self.tol:
            return Membership.BOUNDARY
        return Membership.EXTERIOR

    def line_intersect(self, point: Point, direction: Point) -> tuple[float, float]:
        """Roots of ``|point + t * direction - center| = radius``."""
        offset = point - self.center
        a = direction @ direction
        half_b = direction @ offset
        c = offset @ offset - self.radius**2
        root = np.sqrt(max(half_b**2 - a * c, 0.0))
        return float((-half_b + root) / a), float((-half_b - root) / a)

    def line_intersect_coord(
        self,
        point: Point,
        coord: int,
        slacks: FloatArray,
        prev_point: Point | None = None,
        prev_coord: int | None = None,
    ) -> tuple[float, float]:
        """Chord along axis ``coord``; the slack cache is not used."""
        offset = point - self.center
        c = offset @ offset - self.radius**2
        half_b = offset[coord]
        root = np.sqrt(max(half_b**2 - c, 0.0))
        return float(-half_b + root), float(-half_b - root)

    def line_positive_intersect(
        self,
        point: Point,
        direction: Point,
        ar: FloatArray,
        av: FloatArray,
        lambda_prev: float | None = None,
    ) -> tuple[float, int]:
        min_plus, _ = self.line_intersect(point, direction)
        return min_plus, 0

    def compute_reflection(self, direction: Point, point: Point, facet: int) -> Point:
        """Reflect ``direction`` at the tangent plane through ``point``."""
        normal = point - self.center
        return direction - (2.0 * (direction @ normal) / (normal @ normal)) * normal


class BallPolytope:
    """Intersection of a polytope and a ball.

    Facets ``0, ..., m - 1`` are the polytope's hyperplanes; index ``m``
    stands for the sphere.
    """

    def __init__(self, polytope: HPolytope, ball: Ball):
        if polytope.dimension() != ball.dimension():
            raise InputError(msg="The polytope and the ball must share a dimension.")
        self.polytope = polytope
        self.ball = ball

    def __repr__(self):
        """String representation of the intersection."""
        return f"BallPolytope({self.polytope!r}, {self.ball!r})"

    def first(self) -> HPolytope:
        """The polytope."""
        return self.polytope

    def second(self) -> Ball:
        """The ball."""
        return self.ball

    def dimension(self) -> int:
        return self.polytope.dimension()

    def num_of_hyperplanes(self) -> int:
        return self.polytope.num_of_hyperplanes()

    def is_in(self, point: Point) -> Membership:
        memberships = {self.polytope.is_in(point), self.ball.is_in(point)}
        if Membership.EXTERIOR in memberships:
            return Membership.EXTERIOR
        if Membership.BOUNDARY in memberships:
            return Membership.BOUNDARY
        return Membership.INTERIOR

    def line_intersect(self, point: Point, direction: Point) -> tuple[float, float]:
        return _intersect_chords(
            self.polytope.line_intersect(point, direction),
            self.ball.line_intersect(point, direction),
        )

    def line_intersect_coord(
        self,
        point: Point,
        coord: int,
        slacks: FloatArray,
        prev_point: Point | None = None,
        prev_coord: int | None = None,
    ) -> tuple[float, float]:
        return _intersect_chords(
            self.polytope.line_intersect_coord(
                point, coord, slacks, prev_point=prev_point, prev_coord=prev_coord
            ),
            self.ball.line_intersect_coord(point, coord, slacks),
        )

    def line_positive_intersect(
        self,
        point: Point,
        direction: Point,
        ar: FloatArray,
        av: FloatArray,
        lambda_prev: float | None = None,
    ) -> tuple[float, int]:
        distance, facet = self.polytope.line_positive_intersect(
            point, direction, ar, av, lambda_prev
        )
        ball_distance, _ = self.ball.line_positive_intersect(point, direction, ar, av)
        if ball_distance < distance:
            return ball_distance, self.num_of_hyperplanes()
        return distance, facet

    def compute_reflection(self, direction: Point, point: Point, facet: int) -> Point:
        if facet == self.num_of_hyperplanes():
            return self.ball.compute_reflection(direction, point, 0)
        return self.polytope.compute_reflection(direction, point, facet)


def _intersect_chords(
    first: tuple[float, float], second: tuple[float, float]
) -> tuple[float, float]:
    return min(first[0], second[0]), max(first[1], second[1])
