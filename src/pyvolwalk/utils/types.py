"""Custom types for pyvolwalk."""

from enum import StrEnum, auto
from typing import Annotated, Protocol, TypeAlias

import numpy as np
import numpy.typing as npt

# Shapes in the Annotated aliases are for documentation only; type checkers
# do not enforce them.
FloatArray: TypeAlias = npt.NDArray[np.floating]
Point: TypeAlias = Annotated[FloatArray, "(n_dims,)"]
PointArray: TypeAlias = Annotated[FloatArray, "(n_samples, n_dims)"]
CholeskyFactor: TypeAlias = Annotated[FloatArray, "(n_dims, n_dims)"]


class Membership(StrEnum):
    """Result of a membership query against a convex body."""

    INTERIOR = auto()
    BOUNDARY = auto()
    EXTERIOR = auto()


class ConvexBody(Protocol):
    """Protocol for the oracle every walk relies on.

    A convex body answers membership queries and reports where a line through
    an interior point leaves the body. Implementations must be deterministic
    for a fixed point and direction.
    """

    def dimension(self) -> int:
        """Dimension of the ambient space."""
        ...

    def is_in(self, point: Point) -> Membership:
        """Classify a point as interior, boundary or exterior."""
        ...

    def line_intersect(self, point: Point, direction: Point) -> tuple[float, float]:
        """Intersect the line ``point + t * direction`` with the boundary.

        Parameters
        ----------
        point : Point
            An interior point.
        direction : Point
            Direction of the line, not necessarily of unit length.

        Returns
        -------
        tuple of float
            ``(min_plus, max_minus)``: the smallest positive and the largest
            negative value of ``t`` at which the line meets the boundary.
        """
        ...


class CoordinateConvexBody(ConvexBody, Protocol):
    """Protocol for bodies that support coordinate-direction hit-and-run.

    The slack cache holds one value per hyperplane and is owned by the walk
    state. Calling without ``prev_point`` fills the cache from scratch;
    calling with ``prev_point`` and ``prev_coord`` first brings the cache up
    to date with ``point``, assuming the two points differ only in
    ``prev_coord``.
    """

    def num_of_hyperplanes(self) -> int:
        """Number of entries in the slack cache."""
        ...

    def line_intersect_coord(
        self,
        point: Point,
        coord: int,
        slacks: FloatArray,
        prev_point: Point | None = None,
        prev_coord: int | None = None,
    ) -> tuple[float, float]:
        """Intersect the line through ``point`` along axis ``coord``."""
        ...


class ReflectiveConvexBody(ConvexBody, Protocol):
    """Protocol for bodies that support the billiard walk.

    ``ar`` and ``av`` are per-hyperplane caches owned by the walk state. When
    ``lambda_prev`` is given the body may assume that ``point`` was reached by
    travelling ``lambda_prev`` along the direction whose products are stored
    in ``av``.
    """

    def num_of_hyperplanes(self) -> int:
        """Number of entries in the ``ar``/``av`` caches."""
        ...

    def line_positive_intersect(
        self,
        point: Point,
        direction: Point,
        ar: FloatArray,
        av: FloatArray,
        lambda_prev: float | None = None,
    ) -> tuple[float, int]:
        """Distance to the boundary along ``direction`` and the facet hit."""
        ...

    def compute_reflection(
        self, direction: Point, point: Point, facet: int
    ) -> Point:
        """Specular reflection of ``direction`` at ``facet``."""
        ...


class SpectrahedralBody(Protocol):
    """Protocol for bodies described by a linear matrix inequality."""

    def dimension(self) -> int:
        """Dimension of the ambient space."""
        ...

    def is_in(self, point: Point) -> Membership:
        """Classify a point as interior, boundary or exterior."""
        ...

    def boundary_oracle(
        self,
        point: Point,
        direction: Point,
        a: Point | None = None,
        b: float | None = None,
    ) -> tuple[float, float]:
        """Semidefinite analogue of ``line_intersect``.

        When ``a`` and ``b`` are given the body is first intersected with the
        halfspace ``a @ x <= b``.
        """
        ...
