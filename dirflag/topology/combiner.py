"""
dirflag/topology/combiner.py

Vertex ordering of simplices from directed-edge precedence.

Two facets of the same (k+1)-simplex share k-1 vertices and together span all
k+2 of them. Each facet fixes the relative order of its own vertices, which
orders every pair of the union except the two vertices that were deleted.
That last pair comes from the directed edge between them. A topological sort
of the resulting precedence graph recovers the coface sequence.
"""

from __future__ import annotations

from itertools import combinations
from typing import Callable, Iterable, List, Optional

import networkx as nx

from dirflag.topology.simplex import Simplex, VertexID

Precedes = Callable[[VertexID, VertexID], bool]


class CyclicOrderError(ValueError):
    """Raised when the precedence relation on a vertex set contains a directed cycle."""


def precedence_graph(vertices: Iterable[VertexID], precedes: Precedes) -> nx.DiGraph:
    """
    Directed graph of the precedence relation restricted to a vertex set.

    Args:
        vertices: Vertex ids
        precedes: precedes(a, b) is True iff the directed edge a -> b exists

    Returns:
        DiGraph with an edge a -> b for every ordered pair with precedes(a, b)
    """
    g = nx.DiGraph()
    vs = list(vertices)
    g.add_nodes_from(vs)
    for a, b in combinations(vs, 2):
        if precedes(a, b):
            g.add_edge(a, b)
        if precedes(b, a):
            g.add_edge(b, a)
    return g


def is_transitive(vertices: Iterable[VertexID], precedes: Precedes) -> bool:
    """True iff the precedence relation on the vertices has no directed cycle."""
    return nx.is_directed_acyclic_graph(precedence_graph(vertices, precedes))


def _unique_order(g: nx.DiGraph) -> List[VertexID]:
    if not nx.is_directed_acyclic_graph(g):
        cycle = nx.find_cycle(g)
        raise CyclicOrderError(f"Precedence contains a directed cycle: {cycle}")
    order = list(nx.lexicographical_topological_sort(g))
    for a, b in zip(order, order[1:]):
        if not g.has_edge(a, b):
            raise ValueError(f"Order between {a} and {b} is undetermined")
    return order


def combine(a: Simplex, b: Simplex, precedes: Optional[Precedes] = None) -> Simplex:
    """
    Reconstruct the simplex having a and b as two of its facets.

    Args:
        a: Facet of the target simplex
        b: A different facet of the same dimension
        precedes: Optional edge oracle used for the pair of vertices that
            appear in only one facet each

    Returns:
        The unique ordered coface

    Raises:
        ValueError: if a and b are not two facets of one simplex, or the
            order of the two deleted vertices cannot be determined
        CyclicOrderError: if the facet orders and the oracle disagree
    """
    if len(a) != len(b):
        raise ValueError(f"Facets {a} and {b} differ in dimension")
    only_a = set(a) - set(b)
    only_b = set(b) - set(a)
    if len(only_a) != 1 or len(only_b) != 1:
        raise ValueError(f"{a} and {b} are not facets of a common simplex")

    g = nx.DiGraph()
    g.add_nodes_from(a)
    g.add_nodes_from(b)
    for facet in (a, b):
        for i, j in combinations(range(len(facet)), 2):
            g.add_edge(facet[i], facet[j])

    (p,) = only_b
    (q,) = only_a
    if precedes is not None:
        if precedes(p, q):
            g.add_edge(p, q)
        elif precedes(q, p):
            g.add_edge(q, p)

    return tuple(_unique_order(g))


def canonical_order(vertices: Iterable[VertexID], precedes: Precedes) -> Simplex:
    """
    Deterministic order for a vertex set whose precedence may be cyclic.

    Vertices are sorted by in-degree inside the set, ties broken by id. On a
    transitive tournament this is its unique topological order; a directed
    3-cycle 0 -> 1 -> 2 -> 0 comes out as (0, 1, 2).
    """
    g = precedence_graph(vertices, precedes)
    return tuple(sorted(g.nodes, key=lambda v: (g.in_degree(v), v)))
