"""Reference convex bodies for pyVolWalk.

Each class implements the oracle protocols of ``pyvolwalk.utils.types``
directly with numpy and scipy:

- ``HPolytope``: linear inequalities, with slack and facet caches for the
  coordinate and billiard walks
- ``Ball`` and ``BallPolytope``: a ball and its intersection with a polytope
- ``Spectrahedron``: a linear matrix inequality, with a boundary oracle based
  on a generalized eigenvalue problem
"""

from .ball import Ball, BallPolytope
from .hpolytope import HPolytope
from .spectrahedron import Spectrahedron

__all__ = ["Ball", "BallPolytope", "HPolytope", "Spectrahedron"]
