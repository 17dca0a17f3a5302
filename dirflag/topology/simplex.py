"""
dirflag/topology/simplex.py

Ordered simplices of a directed clique complex.

A k-simplex is a tuple of k+1 distinct vertex ids. Order matters: (0, 1) and
(1, 0) are different 1-simplices. Facets are obtained by deleting a single
vertex and keeping the relative order of the rest.
"""

from __future__ import annotations

import operator
from typing import Iterable, List, Tuple

VertexID = int
Simplex = Tuple[VertexID, ...]


def _vertex_id(v) -> VertexID:
    try:
        return operator.index(v)
    except TypeError:
        raise ValueError(f"Vertex id must be an integer, got {v!r}") from None


def as_simplex(vertices: Iterable[VertexID]) -> Simplex:
    """
    Canonicalize an iterable of vertex ids into a Simplex tuple.

    numpy integers are accepted; floats and other non-integral ids are not.

    Raises:
        ValueError: if the sequence is empty, repeats a vertex or holds a
            negative or non-integral id
    """
    s = tuple(_vertex_id(v) for v in vertices)
    if not s:
        raise ValueError("A simplex needs at least one vertex")
    if len(set(s)) != len(s):
        raise ValueError(f"Simplex has repeated vertices: {s}")
    if min(s) < 0:
        raise ValueError(f"Vertex ids must be non-negative: {s}")
    return s


def dimension(simplex: Simplex) -> int:
    """Dimension of a simplex (number of vertices minus one)."""
    return len(simplex) - 1


def faces(simplex: Simplex) -> List[Simplex]:
    """
    Facets of a simplex, in deletion order.

    faces(S)[i] is S with S[i] removed. A 0-simplex has no facets.
    """
    if len(simplex) < 2:
        return []
    return [simplex[:i] + simplex[i + 1:] for i in range(len(simplex))]

