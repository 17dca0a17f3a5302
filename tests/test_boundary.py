"""
Tests for the boundary matrix store.
"""

import numpy as np
import pytest

from dirflag.topology.boundary import BoundaryMatrix


class TestBoundaryMatrix:
    def test_empty(self):
        bm = BoundaryMatrix()
        assert bm.shape == (0, 0)
        assert bm.rank() == 0
        assert bm.to_dense().shape == (0, 0)

    def test_rows_without_columns(self):
        bm = BoundaryMatrix(3, 0)
        assert bm.shape == (3, 0)
        assert bm.rank() == 0

    def test_add_column(self):
        bm = BoundaryMatrix(3, 0)
        assert bm.add_column([0, 1]) == 0
        assert bm.add_column([1, 2]) == 1
        assert bm.to_dense().tolist() == [[1, 0], [1, 1], [0, 1]]
        assert bm.row_support(1).tolist() == [0, 1]
        assert bm.column_support(1).tolist() == [1, 2]

    def test_add_column_bad_row(self):
        bm = BoundaryMatrix(2, 0)
        with pytest.raises(RuntimeError):
            bm.add_column([2])

    def test_growth_keeps_entries(self):
        bm = BoundaryMatrix()
        for i in range(20):
            bm.add_row()
        for j in range(19):
            bm.add_column([j, j + 1])
        dense = bm.to_dense()
        assert dense.shape == (20, 19)
        assert dense.sum() == 38
        assert bm.rank() == 19

    def test_remove_column_swaps_last(self):
        bm = BoundaryMatrix(3, 0)
        bm.add_column([0, 1])
        bm.add_column([1, 2])
        bm.add_column([0, 2])
        bm.remove_column(0)
        assert bm.to_dense().tolist() == [[1, 0], [0, 1], [1, 1]]

    def test_remove_row_swaps_last(self):
        bm = BoundaryMatrix(3, 0)
        bm.add_column([2])
        bm.remove_row(0)
        assert bm.shape == (2, 1)
        assert bm.to_dense().tolist() == [[1], [0]]

    def test_removed_region_is_cleared(self):
        bm = BoundaryMatrix(2, 0)
        bm.add_column([0, 1])
        bm.remove_column(0)
        bm.add_column([])
        assert bm.to_dense().tolist() == [[0], [0]]

    def test_sparse_view(self):
        bm = BoundaryMatrix(3, 0)
        bm.add_column([0, 2])
        sparse = bm.to_sparse()
        assert sparse.shape == (3, 1)
        assert np.array_equal(sparse.toarray(), bm.to_dense())

    def test_rank_does_not_mutate(self):
        bm = BoundaryMatrix(3, 0)
        bm.add_column([0, 1])
        bm.add_column([1, 2])
        bm.add_column([0, 2])
        before = bm.to_dense()
        assert bm.rank() == 2
        assert np.array_equal(bm.to_dense(), before)

    def test_capacity_shrinks_after_removals(self):
        bm = BoundaryMatrix()
        for _ in range(64):
            bm.add_row()
        for j in range(63):
            bm.add_column([j, j + 1])
        assert bm.capacity == (64, 64)
        while bm.n_cols > 2:
            bm.remove_column(bm.n_cols - 1)
        while bm.n_rows > 3:
            bm.remove_row(bm.n_rows - 1)
        assert bm.capacity == (8, 4)
        assert bm.to_dense().tolist() == [[1, 0], [1, 1], [0, 1]]
