"""
Tests for GF(2) linear algebra.
"""

import numpy as np
import pytest
import scipy.sparse as sp

from dirflag.algebra.gf2 import binarize, binarize_csr, gf2_rank


class TestBinarize:
    def test_reduces_mod_two(self):
        M = np.array([[2, 3], [1, 0]])
        assert binarize(M).tolist() == [[0, 1], [1, 0]]
        assert binarize(M).dtype == np.uint8

    def test_bool_input(self):
        M = np.array([[True, False]])
        assert binarize(M).tolist() == [[1, 0]]

    def test_rejects_vectors(self):
        with pytest.raises(ValueError):
            binarize(np.array([1, 0, 1]))

    def test_csr_is_pruned(self):
        M = sp.csr_matrix(np.array([[2, 1], [0, 3]]))
        out = binarize_csr(M)
        assert out.nnz == 2
        assert out.toarray().tolist() == [[0, 1], [0, 1]]


class TestRank:
    def test_identity(self):
        assert gf2_rank(np.eye(4, dtype=np.uint8)) == 4

    def test_zero_and_empty(self):
        assert gf2_rank(np.zeros((3, 5), dtype=np.uint8)) == 0
        assert gf2_rank(np.zeros((0, 0), dtype=np.uint8)) == 0
        assert gf2_rank(np.zeros((4, 0), dtype=np.uint8)) == 0
        assert gf2_rank(np.zeros((0, 4), dtype=np.uint8)) == 0

    def test_mod_two_dependence(self):
        # Over the reals this has rank 3; over GF(2) the columns sum to zero.
        triangle = np.array([
            [1, 0, 1],
            [1, 1, 0],
            [0, 1, 1],
        ])
        assert np.linalg.matrix_rank(triangle) == 3
        assert gf2_rank(triangle) == 2

    def test_needs_column_pivoting(self):
        M = np.array([
            [0, 0, 1],
            [0, 0, 1],
            [0, 1, 0],
        ])
        assert gf2_rank(M) == 2

    def test_input_not_mutated(self):
        M = np.array([[0, 1, 1], [1, 1, 0]], dtype=np.uint8)
        before = M.copy()
        gf2_rank(M)
        assert np.array_equal(M, before)

    def test_sparse_input(self):
        M = sp.csr_matrix(np.array([[1, 1, 0], [0, 1, 1], [1, 0, 1]]))
        assert gf2_rank(M) == 2

    def test_bounds_and_permutation_invariance(self):
        rng = np.random.default_rng(3)
        for _ in range(20):
            rows, cols = rng.integers(1, 9, size=2)
            M = rng.integers(0, 2, size=(rows, cols))
            r = gf2_rank(M)
            assert 0 <= r <= min(rows, cols)
            P = M[rng.permutation(rows)][:, rng.permutation(cols)]
            assert gf2_rank(P) == r
            assert gf2_rank(M.T) == r
