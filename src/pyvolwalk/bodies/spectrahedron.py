"""Spectrahedra: feasible regions of linear matrix inequalities."""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import scipy.linalg

from ..utils.exceptions import InputError
from ..utils.types import FloatArray, Membership, Point


class Spectrahedron:
    """The spectrahedron ``{x : A0 + x[0] A1 + ... + x[n-1] An  is positive definite}``.

    Parameters
    ----------
    matrices : sequence of array_like
        Symmetric matrices ``[A0, A1, ..., An]`` of equal shape. The body has
        dimension ``n``.
    tol : float, optional
        Smallest eigenvalue below which a point counts as on the boundary.
        Default 1e-10.
    """

    def __init__(self, matrices: Sequence[npt.ArrayLike], tol: float = 1e-10):
        arrays = [np.asarray(m, dtype=float) for m in matrices]
        if len(arrays) < 2:
            raise InputError(msg="At least A0 and one coefficient matrix are needed.")
        shape = arrays[0].shape
        if len(shape) != 2 or shape[0] != shape[1] or any(a.shape != shape for a in arrays):
            raise InputError(msg="The LMI matrices must be square and of equal shape.")
        stacked = np.stack(arrays)
        if not np.allclose(stacked, np.transpose(stacked, (0, 2, 1))):
            raise InputError(msg="The LMI matrices must be symmetric.")
        self.matrices = stacked
        self.tol = tol

    def __repr__(self):
        """String representation of the spectrahedron."""
        return (
            f"Spectrahedron(n_dims={self.dimension()}, "
            f"matrix_size={self.matrices.shape[1]})"
        )

    def dimension(self) -> int:
        return len(self.matrices) - 1

    def lmi(self, point: Point) -> FloatArray:
        """The matrix ``A0 + sum_i point[i] A_i``."""
        return self.matrices[0] + self.linear_part(point)

    def linear_part(self, direction: Point) -> FloatArray:
        """The matrix ``sum_i direction[i] A_i``."""
        return np.tensordot(direction, self.matrices[1:], axes=1)

    def is_in(self, point: Point) -> Membership:
        smallest = np.linalg.eigvalsh(self.lmi(point))[0]
        if smallest > self.tol:
            return Membership.INTERIOR
        if smallest >= -self.tol:
            return Membership.BOUNDARY
        return Membership.EXTERIOR

    def boundary_oracle(
        self,
        point: Point,
        direction: Point,
        a: Point | None = None,
        b: float | None = None,
    ) -> tuple[float, float]:
        """Where the line ``point + t * direction`` leaves the spectrahedron.

        With ``F = lmi(point)`` positive definite and ``D = linear_part(direction)``,
        ``F + t D`` becomes singular exactly at ``t = -1 / mu`` for the
        generalized eigenvalues ``mu`` of ``D v = mu F v``.

        Parameters
        ----------
        point : Point
            An interior point.
        direction : Point
            Direction of the line.
        a, b : optional
            Extra halfspace ``a @ x <= b`` intersected with the body.

        Returns
        -------
        tuple of float
            ``(min_plus, max_minus)`` as in ``line_intersect``.
        """
        mu = scipy.linalg.eigh(
            self.linear_part(direction), self.lmi(point), eigvals_only=True
        )
        min_plus = np.min(-1.0 / mu[mu < 0]) if np.any(mu < 0) else np.inf
        max_minus = np.max(-1.0 / mu[mu > 0]) if np.any(mu > 0) else -np.inf

        if a is not None and b is not None:
            rate = float(np.dot(a, direction))
            slack = b - float(np.dot(a, point))
            if rate > 0:
                min_plus = min(min_plus, slack / rate)
            elif rate < 0:
                max_minus = max(max_minus, slack / rate)
        return float(min_plus), float(max_minus)

    def line_intersect(self, point: Point, direction: Point) -> tuple[float, float]:
        return self.boundary_oracle(point, direction)
