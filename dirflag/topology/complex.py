"""
dirflag/topology/complex.py

Incremental directed clique complex.

The complex follows a directed graph edge by edge. Every insertion runs flag
closure to a fixed point: a simplex is added as soon as all of its facets are
present. Every removal cascades upward: cofaces are removed before the
simplex they depend on. Three per-dimension stores are kept in sync:

  - slots[d]: dense slot <-> d-simplex bijection (SlotTable)
  - cofacets[d]: d-simplex -> extension vertices (CofacetTable)
  - boundary[d]: GF(2) matrix, rows = slots[d], columns = slots[d+1]

Vertex order inside a simplex comes from the directed edges. Transitive
vertex sets have a unique order, rebuilt by the combiner from two facets.
Vertex sets carrying a directed cycle are either filled with a canonical
order (fill_cycles=True) or rejected, which yields the strict directed flag
complex.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Dict, Iterable, List, Optional, Set

import networkx as nx
import numpy as np
import scipy.sparse as sp

from dirflag.core.registry import SlotTable
from dirflag.topology.boundary import BoundaryMatrix
from dirflag.topology.cofacets import CofacetTable
from dirflag.topology.combiner import canonical_order, combine, is_transitive
from dirflag.topology.homology import betti_numbers_from_boundaries, euler_characteristic
from dirflag.topology.simplex import Simplex, VertexID, as_simplex, faces
from dirflag.topology.simplex import dimension as simplex_dim

logger = logging.getLogger("dirflag.complex")


class SimplicialComplex:
    """
    Directed clique complex maintained under edge insertion and removal.

    Args:
        vertices: Initial vertex ids, added as 0-simplices
        fill_cycles: Whether vertex sets whose edges form a directed cycle
            are filled (True) or left hollow (False)

    Example:
        >>> cx = SimplicialComplex([0, 1, 2])
        >>> for u, v in [(0, 1), (1, 2), (0, 2)]:
        ...     _ = cx.insert_edge(u, v)
        >>> dict(cx.simplex_counts())
        {0: 3, 1: 3, 2: 1}
        >>> cx.betti_numbers()
        [1, 0, 0]
    """

    def __init__(self, vertices: Iterable[VertexID] = (), *, fill_cycles: bool = True):
        self.fill_cycles = fill_cycles
        self.slots: List[SlotTable] = []
        self.cofacets: List[CofacetTable] = []
        self.boundary: List[BoundaryMatrix] = []
        for v in vertices:
            self.add_vertex(v)

    @classmethod
    def from_digraph(cls, graph: nx.DiGraph, *, fill_cycles: bool = True) -> "SimplicialComplex":
        """Build the complex of a networkx DiGraph, inserting edges in graph order."""
        cx = cls(graph.nodes(), fill_cycles=fill_cycles)
        for u, v in graph.edges():
            cx.insert_edge(u, v)
        return cx

    # ------------------------------------------------------------------
    # Store bookkeeping
    # ------------------------------------------------------------------

    def _ensure_dim(self, d: int) -> None:
        while len(self.slots) <= d:
            k = len(self.slots)
            self.slots.append(SlotTable())
            self.cofacets.append(CofacetTable())
            if k > 0:
                self.boundary.append(BoundaryMatrix(len(self.slots[k - 1]), 0))

    def _resolve(self, vertices: Iterable[VertexID], d: int) -> Optional[Simplex]:
        if d < 0 or d >= len(self.slots):
            return None
        return self.slots[d].lookup(vertices)

    def _find(self, simplex: Simplex) -> Optional[Simplex]:
        """
        Stored simplex named by a caller-supplied vertex sequence.

        Transitive simplices have one valid order and must be named by it.
        A filled cycle has no order of its own, so any ordering of its vertex
        set names it.
        """
        stored = self._resolve(simplex, simplex_dim(simplex))
        if stored is None or stored == simplex:
            return stored
        if len(stored) > 2 and not is_transitive(stored, self.has_edge):
            return stored
        return None

    def _present(self, vertices: Iterable[VertexID]) -> Simplex:
        s = as_simplex(vertices)
        stored = self._find(s)
        if stored is None:
            raise KeyError(f"Simplex {s} is not in the complex")
        return stored

    def _stored_facets(self, simplex: Simplex) -> List[Simplex]:
        d = simplex_dim(simplex)
        out = []
        for f in faces(simplex):
            stored = self._resolve(f, d - 1)
            if stored is None:
                raise RuntimeError(f"Facet {f} of {simplex} is missing")
            out.append(stored)
        return out

    def _register(self, simplex: Simplex) -> None:
        d = simplex_dim(simplex)
        self._ensure_dim(d)
        facets = self._stored_facets(simplex)

        slot = self.slots[d].alloc(simplex)
        self.cofacets[d].add_simplex(simplex)
        if d < len(self.boundary):
            row = self.boundary[d].add_row()
            if row != slot:
                raise RuntimeError(f"Row {row} out of step with slot {slot} at dimension {d}")
        if d > 0:
            rows = [self.slots[d - 1].slot(f) for f in facets]
            col = self.boundary[d - 1].add_column(rows)
            if col != slot:
                raise RuntimeError(f"Column {col} out of step with slot {slot} at dimension {d}")
            for f, v in zip(facets, simplex):
                self.cofacets[d - 1].link(f, v)

    def _unregister(self, simplex: Simplex) -> None:
        d = simplex_dim(simplex)
        slot = self.slots[d].slot(simplex)
        if d < len(self.boundary) and self.boundary[d].row_support(slot).size:
            raise RuntimeError(f"Removing {simplex} while cofaces remain")

        if d > 0:
            for f, v in zip(self._stored_facets(simplex), simplex):
                self.cofacets[d - 1].unlink(f, v)
            self.boundary[d - 1].remove_column(slot)
        if d < len(self.boundary):
            self.boundary[d].remove_row(slot)
        self.cofacets[d].drop_simplex(simplex)

        freed, _ = self.slots[d].free(simplex)
        if freed != slot:
            raise RuntimeError(f"Slot {freed} freed for {simplex}, expected {slot}")

    def _trim(self) -> None:
        """Drop empty top dimensions together with their stores."""
        while self.slots and not len(self.slots[-1]):
            self.slots.pop()
            self.cofacets.pop()
            if self.boundary:
                self.boundary.pop()

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def _extensions(self, simplex: Simplex) -> Set[VertexID]:
        d = simplex_dim(simplex)
        if d == 0:
            return set()
        return self.cofacets[d - 1].common(self._stored_facets(simplex)) - set(simplex)

    def _coface(self, simplex: Simplex, w: VertexID) -> Optional[Simplex]:
        """Ordered coface spanned by simplex and w, or None when rejected."""
        verts = simplex + (w,)
        if is_transitive(verts, self.has_edge):
            partner = self._resolve(simplex[1:] + (w,), len(simplex) - 1)
            return combine(simplex, partner, self.has_edge)
        if not self.fill_cycles:
            return None
        return canonical_order(verts, self.has_edge)

    def _closure(self, seed: Simplex) -> int:
        queue = deque([seed])
        added = 0
        while queue:
            s = queue.popleft()
            if self._resolve(s, simplex_dim(s)) is not None:
                continue
            self._register(s)
            added += 1
            for w in sorted(self._extensions(s)):
                coface = self._coface(s, w)
                if coface is None:
                    logger.debug("Rejected cyclic coface of %s through %d", s, w)
                    continue
                queue.append(coface)
        logger.debug("Closure of %s added %d simplices", seed, added)
        return added

    def add_vertex(self, v: VertexID) -> bool:
        """
        Add an isolated vertex.

        Returns:
            True if the vertex was new
        """
        s = as_simplex((v,))
        if self._resolve(s, 0) is not None:
            return False
        self._ensure_dim(0)
        self._register(s)
        return True

    def insert_edge(self, u: VertexID, v: VertexID) -> bool:
        """
        Insert the directed edge u -> v and every simplex it completes.

        Unseen endpoints are added as vertices. An edge already present between
        u and v, in either direction, makes this a no-op.

        Returns:
            True if the edge was inserted
        """
        if u == v:
            raise ValueError(f"Self loop on vertex {u} is not a simplex")
        edge = as_simplex((u, v))
        self.add_vertex(u)
        self.add_vertex(v)
        if self._resolve(edge, 1) is not None:
            logger.debug("Edge %s already present, skipping", edge)
            return False
        self._closure(edge)
        return True

    def insert_simplex(self, vertices: Iterable[VertexID]) -> bool:
        """
        Insert a vertex or a directed edge given in simplex form.

        Higher simplices cannot be inserted directly: closure adds each one
        as soon as the edges among its vertices are present.

        Raises:
            KeyError: if an endpoint of the edge is missing
            ValueError: for simplices of dimension 2 and up
        """
        s = as_simplex(vertices)
        d = simplex_dim(s)
        if d == 0:
            return self.add_vertex(s[0])
        if d > 1:
            raise ValueError(f"Cannot insert {s} directly, insert the edges among its vertices")
        for f in faces(s):
            if self._resolve(f, 0) is None:
                raise KeyError(f"Cannot insert {s}: vertex {f[0]} is missing")
        return self.insert_edge(*s)

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def _upward_closure(self, simplex: Simplex) -> Dict[int, Set[Simplex]]:
        d = simplex_dim(simplex)
        doomed = {d: {simplex}}
        while d < len(self.boundary) and doomed[d]:
            up = set()
            for t in doomed[d]:
                for j in self.boundary[d].row_support(self.slots[d].slot(t)):
                    up.add(self.slots[d + 1].simplex(int(j)))
            if not up:
                break
            doomed[d + 1] = up
            d += 1
        return doomed

    def remove_simplex(self, vertices: Iterable[VertexID]) -> int:
        """
        Remove a simplex and, first, every simplex having it as a face.

        Returns:
            Number of simplices removed

        Raises:
            KeyError: if the simplex is not present
        """
        s = self._present(vertices)
        doomed = self._upward_closure(s)
        removed = 0
        for d in sorted(doomed, reverse=True):
            for t in sorted(doomed[d]):
                self._unregister(t)
                removed += 1
        self._trim()
        logger.debug("Removed %s with %d dependent simplices", s, removed - 1)
        return removed

    def remove_edge(self, u: VertexID, v: VertexID) -> int:
        """
        Remove the directed edge u -> v and every simplex built on it.

        Raises:
            KeyError: if the edge u -> v is not present
        """
        if not self.has_edge(u, v):
            raise KeyError(f"Edge {(u, v)} is not in the complex")
        return self.remove_simplex((u, v))

    def remove_vertex(self, v: VertexID) -> int:
        """Remove a vertex with all incident simplices."""
        return self.remove_simplex((v,))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        """Highest dimension holding a simplex, -1 when empty."""
        for d in range(len(self.slots) - 1, -1, -1):
            if len(self.slots[d]):
                return d
        return -1

    def has_edge(self, u: VertexID, v: VertexID) -> bool:
        """True iff the directed edge u -> v is present."""
        return len(self.slots) > 1 and (u, v) in self.slots[1]

    def simplices(self, d: int) -> List[Simplex]:
        """All d-simplices in slot order."""
        if d < 0 or d >= len(self.slots):
            return []
        return list(self.slots[d])

    def vertices(self) -> List[VertexID]:
        return [s[0] for s in self.simplices(0)]

    def edges(self) -> List[Simplex]:
        return self.simplices(1)

    def facets(self, simplex: Iterable[VertexID]) -> List[Simplex]:
        """Stored facets of a present simplex."""
        s = self._present(simplex)
        return self._stored_facets(s)

    def cofaces(self, simplex: Iterable[VertexID]) -> List[Simplex]:
        """Stored simplices one dimension up having simplex as a facet."""
        s = self._present(simplex)
        d = simplex_dim(s)
        if d >= len(self.boundary):
            return []
        cols = self.boundary[d].row_support(self.slots[d].slot(s))
        return [self.slots[d + 1].simplex(int(j)) for j in cols]

    def simplex_counts(self) -> Counter:
        """
        Number of simplices per dimension.

        Dimensions without simplices are left out; being a Counter, they read
        as 0.
        """
        return Counter({d: len(t) for d, t in enumerate(self.slots) if len(t)})

    def boundary_matrix(self, d: int, *, sparse: bool = False):
        """
        Copy of boundary[d] (rows: d-simplices, columns: (d+1)-simplices).

        Dimensions beyond the stored range give correctly shaped empty matrices.
        """
        if 0 <= d < len(self.boundary):
            bm = self.boundary[d]
            return bm.to_sparse() if sparse else bm.to_dense()
        n_rows = len(self.slots[d]) if 0 <= d < len(self.slots) else 0
        if sparse:
            return sp.csr_matrix((n_rows, 0), dtype=np.uint8)
        return np.zeros((n_rows, 0), dtype=np.uint8)

    def betti_numbers(self) -> List[int]:
        """Betti numbers over GF(2) for dimensions 0..self.dimension."""
        top = self.dimension
        counts = [len(self.slots[d]) for d in range(top + 1)]
        ranks = [self.boundary[d].rank() for d in range(top)]
        return betti_numbers_from_boundaries(counts, ranks)

    def euler_characteristic(self) -> int:
        return euler_characteristic([len(self.slots[d]) for d in range(self.dimension + 1)])

    def to_digraph(self) -> nx.DiGraph:
        """The 1-skeleton as a networkx DiGraph."""
        g = nx.DiGraph()
        g.add_nodes_from(self.vertices())
        g.add_edges_from(self.edges())
        return g

    def check_invariants(self) -> None:
        """
        Verify closure, store shapes, facet incidence and cofacet sets.

        Raises:
            RuntimeError: describing the first violation found
        """
        for d, bm in enumerate(self.boundary):
            expected = (len(self.slots[d]), len(self.slots[d + 1]))
            if bm.shape != expected:
                raise RuntimeError(f"boundary[{d}] has shape {bm.shape}, expected {expected}")

        for d, table in enumerate(self.slots):
            for s in table:
                if len(self.cofacets[d].get(s) & set(s)):
                    raise RuntimeError(f"Cofacets of {s} contain its own vertices")
                for w in self.cofacets[d].get(s):
                    if self._resolve(s + (w,), d + 1) is None:
                        raise RuntimeError(f"Cofacet {w} of {s} has no stored coface")
                if d == 0:
                    continue
                facets = self._stored_facets(s)
                rows = sorted(self.slots[d - 1].slot(f) for f in facets)
                col = self.boundary[d - 1].column_support(table.slot(s)).tolist()
                if rows != col:
                    raise RuntimeError(f"Column of {s} marks rows {col}, facets are {rows}")
                for f, v in zip(facets, s):
                    if v not in self.cofacets[d - 1].get(f):
                        raise RuntimeError(f"{s} missing from cofacets of {f}")

        for d in range(len(self.boundary) - 1):
            prod = (self.boundary[d].to_dense().astype(np.int64)
                    @ self.boundary[d + 1].to_dense().astype(np.int64)) % 2
            if prod.any():
                raise RuntimeError(f"boundary[{d}] @ boundary[{d + 1}] is nonzero mod 2")

    def __contains__(self, simplex) -> bool:
        return self._find(tuple(simplex)) is not None

    def __len__(self) -> int:
        return sum(len(t) for t in self.slots)

    def __repr__(self) -> str:
        counts = dict(sorted(self.simplex_counts().items()))
        return f"SimplicialComplex(counts={counts}, fill_cycles={self.fill_cycles})"
