"""
Tests for Betti number computation.
"""

import numpy as np
import pytest

from dirflag.topology.complex import SimplicialComplex
from dirflag.topology.homology import (
    betti_numbers_from_boundaries,
    boundary_ranks,
    euler_characteristic,
)


def build(edges, vertices=(), **kwargs):
    cx = SimplicialComplex(vertices, **kwargs)
    for u, v in edges:
        cx.insert_edge(u, v)
    return cx


class TestFormula:
    def test_hollow_triangle(self):
        b0 = np.array([[1, 0, 1], [1, 1, 0], [0, 1, 1]])
        ranks = boundary_ranks([b0])
        assert ranks == [2]
        assert betti_numbers_from_boundaries([3, 3], ranks) == [1, 1]

    def test_filled_triangle(self):
        assert betti_numbers_from_boundaries([3, 3, 1], [2, 1]) == [1, 0, 0]

    def test_missing_top_rank(self):
        assert betti_numbers_from_boundaries([4], []) == [4]

    def test_inconsistent_ranks(self):
        with pytest.raises(ValueError):
            betti_numbers_from_boundaries([2, 1], [3])
        with pytest.raises(ValueError):
            betti_numbers_from_boundaries([2], [1, 1])

    def test_euler_characteristic(self):
        assert euler_characteristic([3, 3, 1]) == 1
        assert euler_characteristic([4, 4]) == 0
        assert euler_characteristic([]) == 0


class TestComplexBetti:
    def test_directed_path(self):
        cx = build([(i, i + 1) for i in range(6)], range(7))
        betti = cx.betti_numbers()
        assert betti[0] == 1
        assert all(b == 0 for b in betti[1:])

    def test_square_has_a_hole(self):
        cx = build([(0, 1), (1, 2), (2, 3), (0, 3)], range(4))
        assert cx.betti_numbers() == [1, 1]

    def test_diagonal_fills_square(self):
        cx = build([(0, 1), (1, 2), (2, 3), (0, 3), (0, 2)], range(4))
        assert cx.betti_numbers() == [1, 0, 0]

    def test_components(self):
        cx = build([(0, 1), (2, 3)], range(6))
        assert cx.betti_numbers() == [4, 0]

    def test_two_holes(self):
        # Two squares sharing the edge (1, 4)
        edges = [(0, 1), (1, 4), (3, 4), (0, 3), (1, 2), (2, 5), (4, 5)]
        cx = build(edges, range(6))
        assert cx.betti_numbers() == [1, 2]

    def test_hollow_octahedron(self):
        # Octahedron boundary: every pair adjacent except the antipodes
        # (0, 1), (2, 3), (4, 5); edges oriented from smaller to larger id.
        antipodes = {(0, 1), (2, 3), (4, 5)}
        edges = [(u, v) for u in range(6) for v in range(u + 1, 6) if (u, v) not in antipodes]
        cx = build(edges, range(6))
        assert dict(cx.simplex_counts()) == {0: 6, 1: 12, 2: 8}
        assert cx.betti_numbers() == [1, 0, 1]

    def test_strict_mode_cycle_then_filled_by_chord(self):
        # 0 -> 1 -> 2 -> 0 stays hollow; vertex 3 above all of them cones it off.
        edges = [(0, 1), (1, 2), (2, 0), (3, 0), (3, 1), (3, 2)]
        cx = build(edges, range(4), fill_cycles=False)
        assert cx.simplex_counts()[2] == 3
        assert cx.betti_numbers() == [1, 0, 0]

    def test_betti_recomputed_after_removal(self):
        cx = build([(0, 1), (1, 2), (0, 2)], range(3))
        assert cx.betti_numbers() == [1, 0, 0]
        cx.remove_edge(0, 2)
        assert cx.betti_numbers() == [1, 0]
        cx.remove_edge(0, 1)
        assert cx.betti_numbers() == [2, 0]
