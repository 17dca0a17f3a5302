"""
dirflag/topology/cofacets.py

Cofacet table for one dimension.

For every stored d-simplex F, records the vertices w such that F together with
w spans a stored (d+1)-simplex. Intersecting these sets over the facets of a
simplex gives the vertices it can be extended by.
"""

from __future__ import annotations

from typing import Dict, Iterable, Set

from dirflag.topology.simplex import Simplex, VertexID


class CofacetTable:
    """Map from a stored simplex to its set of extension vertices."""

    def __init__(self):
        self.table: Dict[Simplex, Set[VertexID]] = {}

    def add_simplex(self, simplex: Simplex) -> None:
        """Start tracking a simplex with no cofaces yet."""
        self.table.setdefault(simplex, set())

    def drop_simplex(self, simplex: Simplex) -> None:
        """Stop tracking a simplex; it must have no cofaces left."""
        rest = self.table.pop(simplex, None)
        if rest:
            raise RuntimeError(f"Dropping {simplex} with live cofaces via {sorted(rest)}")

    def link(self, facet: Simplex, vertex: VertexID) -> None:
        """Record that facet + vertex is a stored simplex."""
        try:
            self.table[facet].add(vertex)
        except KeyError:
            raise RuntimeError(f"Facet {facet} is not tracked") from None

    def unlink(self, facet: Simplex, vertex: VertexID) -> None:
        """Forget that facet + vertex is a stored simplex."""
        try:
            self.table[facet].remove(vertex)
        except KeyError:
            raise RuntimeError(f"Facet {facet} has no coface through vertex {vertex}") from None

    def get(self, simplex: Simplex) -> Set[VertexID]:
        """Extension vertices of a simplex (empty if untracked)."""
        return self.table.get(simplex, set())

    def common(self, simplices: Iterable[Simplex]) -> Set[VertexID]:
        """Vertices extending every one of the given simplices."""
        out = None
        for s in simplices:
            ext = self.get(s)
            out = set(ext) if out is None else out & ext
            if not out:
                return set()
        return out or set()

    def __contains__(self, simplex: Simplex) -> bool:
        return simplex in self.table

    def __len__(self) -> int:
        return len(self.table)
