"""
dirflag/runtime/driver.py

Random directed-edge stream feeding a SimplicialComplex.

Each step samples an ordered pair of distinct vertices and inserts the edge
unless the pair is already connected in either direction. An optional decay
rate retracts a uniformly chosen existing edge per step. The random source is
injected so that independent runs never share state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import networkx as nx
import numpy as np

from dirflag.topology.complex import SimplicialComplex

Edge = Tuple[int, int]


@dataclass
class StepResult:
    """Edges changed by a single step."""
    added_edges: List[Edge] = field(default_factory=list)
    removed_edges: List[Edge] = field(default_factory=list)


class RandomEdgeDriver:
    """
    Uniform random edge growth with optional decay.

    The driver mirrors its edges in a networkx DiGraph, which plays the role
    of the simulated graph; the complex only ever sees insert/remove calls.
    """

    def __init__(
        self,
        complex_: SimplicialComplex,
        rng: np.random.Generator,
        *,
        removal_rate: float = 0.0,
    ):
        if not 0.0 <= removal_rate <= 1.0:
            raise ValueError(f"removal_rate must lie in [0, 1], got {removal_rate}")
        self.complex = complex_
        self.rng = rng
        self.removal_rate = removal_rate
        self.graph = nx.DiGraph()
        self.graph.add_nodes_from(complex_.vertices())
        self.graph.add_edges_from(complex_.edges())
        self.timestep = 0

    def _sample_pair(self) -> Edge:
        nodes = list(self.graph.nodes)
        if len(nodes) < 2:
            raise ValueError("Need at least two vertices to sample an edge")
        i, j = self.rng.choice(len(nodes), size=2, replace=False)
        return nodes[int(i)], nodes[int(j)]

    def step(self) -> StepResult:
        """Advance by one timestep."""
        result = StepResult()

        u, v = self._sample_pair()
        if not (self.graph.has_edge(u, v) or self.graph.has_edge(v, u)):
            self.complex.insert_edge(u, v)
            self.graph.add_edge(u, v)
            result.added_edges.append((u, v))

        if self.removal_rate > 0.0 and self.graph.number_of_edges() > 0:
            if self.rng.random() < self.removal_rate:
                edges = list(self.graph.edges)
                a, b = edges[int(self.rng.integers(len(edges)))]
                self.complex.remove_edge(a, b)
                self.graph.remove_edge(a, b)
                result.removed_edges.append((a, b))

        self.timestep += 1
        return result
