"""Polytopes given by linear inequalities."""

import numpy as np
import numpy.typing as npt

from ..utils.exceptions import InputError
from ..utils.types import FloatArray, Membership, Point


def chord_limits(slacks: FloatArray, rates: FloatArray) -> tuple[float, float]:
    """Range of ``t`` with ``rates * t <= slacks`` for every constraint.

    Returns ``(min_plus, max_minus)``, the upper and lower ends of the range.
    Unbounded ends are reported as ``inf`` and ``-inf``.
    """
    positive = rates > 0
    negative = rates < 0
    min_plus = np.min(slacks[positive] / rates[positive]) if positive.any() else np.inf
    max_minus = (
        np.max(slacks[negative] / rates[negative]) if negative.any() else -np.inf
    )
    return float(min_plus), float(max_minus)


class HPolytope:
    """The polytope ``{x : A @ x <= b}``.

    The slack of constraint ``i`` at ``x`` is ``b[i] - A[i] @ x``; it is
    positive for interior points.

    Parameters
    ----------
    A : array_like
        Constraint matrix of shape (n_hyperplanes, n_dims).
    b : array_like
        Right-hand side of shape (n_hyperplanes,).
    tol : float, optional
        Slack below which a point counts as on the boundary. Default 1e-10.
    """

    def __init__(self, A: npt.ArrayLike, b: npt.ArrayLike, tol: float = 1e-10):
        self.A = np.atleast_2d(np.asarray(A, dtype=float))
        self.b = np.atleast_1d(np.asarray(b, dtype=float))
        self.tol = tol
        if self.A.ndim != 2 or self.b.ndim != 1 or len(self.b) != len(self.A):
            raise InputError(
                msg=f"Inconsistent shapes {self.A.shape} and {self.b.shape} for A and b."
            )

    def __repr__(self):
        """String representation of the polytope."""
        return (
            f"HPolytope(n_dims={self.dimension()}, "
            f"n_hyperplanes={self.num_of_hyperplanes()})"
        )

    @classmethod
    def from_box(cls, lower: npt.ArrayLike, upper: npt.ArrayLike) -> "HPolytope":
        """Axis-aligned box ``lower <= x <= upper``."""
        lower = np.atleast_1d(np.asarray(lower, dtype=float))
        upper = np.atleast_1d(np.asarray(upper, dtype=float))
        if lower.shape != upper.shape or np.any(lower >= upper):
            raise InputError(msg="lower and upper must be ordered bounds of equal shape.")
        eye = np.eye(len(lower))
        return cls(np.vstack([eye, -eye]), np.concatenate([upper, -lower]))

    @classmethod
    def cube(cls, dim: int, radius: float = 1.0) -> "HPolytope":
        """The cube ``[-radius, radius]^dim``."""
        return cls.from_box(np.full(dim, -radius), np.full(dim, radius))

    def dimension(self) -> int:
        return self.A.shape[1]

    def num_of_hyperplanes(self) -> int:
        return self.A.shape[0]

    def slacks(self, point: Point) -> FloatArray:
        """Slack of every constraint at ``point``."""
        return self.b - self.A @ point

    def is_in(self, point: Point) -> Membership:
        smallest = np.min(self.slacks(point))
        if smallest > self.tol:
            return Membership.INTERIOR
        if smallest >= -self.tol:
            return Membership.BOUNDARY
        return Membership.EXTERIOR

    def line_intersect(self, point: Point, direction: Point) -> tuple[float, float]:
        return chord_limits(self.slacks(point), self.A @ direction)

    def line_intersect_coord(
        self,
        point: Point,
        coord: int,
        slacks: FloatArray,
        prev_point: Point | None = None,
        prev_coord: int | None = None,
    ) -> tuple[float, float]:
        """Intersect the line through ``point`` along axis ``coord``.

        ``slacks`` is updated in place to the slacks at ``point``. With a
        previous point only column ``prev_coord`` of ``A`` is touched,
        otherwise the slacks are recomputed.
        """
        if prev_point is None:
            slacks[:] = self.slacks(point)
        else:
            shift = point[prev_coord] - prev_point[prev_coord]
            slacks -= shift * self.A[:, prev_coord]
        return chord_limits(slacks, self.A[:, coord])

    def line_positive_intersect(
        self,
        point: Point,
        direction: Point,
        ar: FloatArray,
        av: FloatArray,
        lambda_prev: float | None = None,
    ) -> tuple[float, int]:
        """Distance to the first facet hit along ``direction`` and its index.

        ``ar`` is updated in place to ``A @ point`` and ``av`` to
        ``A @ direction``. With ``lambda_prev``, ``ar`` is advanced along the
        previous ``av`` instead of being recomputed.
        """
        if lambda_prev is None:
            ar[:] = self.A @ point
        else:
            ar += lambda_prev * av
        av[:] = self.A @ direction

        approaching = np.flatnonzero(av > 0)
        if len(approaching) == 0:
            return np.inf, -1
        distances = (self.b[approaching] - ar[approaching]) / av[approaching]
        nearest = int(np.argmin(distances))
        return float(distances[nearest]), int(approaching[nearest])

    def compute_reflection(self, direction: Point, point: Point, facet: int) -> Point:
        """Reflect ``direction`` at the hyperplane of constraint ``facet``."""
        normal = self.A[facet]
        return direction - (2.0 * (direction @ normal) / (normal @ normal)) * normal
