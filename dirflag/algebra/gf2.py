"""
dirflag/algebra/gf2.py

Linear algebra over GF(2), the field with two elements.

Boundary matrices of the clique complex are stored as 0/1 arrays. This module
provides:
  - binarize: coerce dense or sparse input to a strict 0/1 uint8 array
  - binarize_csr: the same for CSR matrices, pruned of explicit zeros
  - gf2_rank: rank by Gaussian elimination with full pivoting, mod 2
"""

from __future__ import annotations

from typing import Union

import numpy as np
import scipy.sparse as sp

MatrixLike = Union[np.ndarray, sp.spmatrix]


def binarize(M: MatrixLike) -> np.ndarray:
    """
    Return a fresh dense uint8 copy of M reduced mod 2.

    Args:
        M: 2D numpy array or scipy sparse matrix with integer entries

    Returns:
        uint8 array with entries in {0, 1}; never shares memory with M
    """
    if sp.issparse(M):
        arr = M.toarray()
    else:
        arr = np.asarray(M)
    if arr.ndim != 2:
        raise ValueError(f"GF(2) matrix must be 2D, got shape {arr.shape}")
    if arr.dtype == bool:
        return arr.astype(np.uint8)
    return (arr.astype(np.int64) & 1).astype(np.uint8)


def binarize_csr(M: MatrixLike) -> sp.csr_matrix:
    """
    Ensure a CSR matrix is strictly 0/1 mod 2, pruned.
    """
    if not sp.issparse(M):
        M = sp.csr_matrix(np.asarray(M))
    M = sp.csr_matrix(M, copy=True)
    if M.nnz == 0:
        return M.astype(np.uint8)
    M.data = (M.data.astype(np.int64) & 1).astype(np.uint8)
    M.eliminate_zeros()
    return M.astype(np.uint8)


def gf2_rank(M: MatrixLike) -> int:
    """
    Rank of a matrix over GF(2).

    Gaussian elimination with full pivoting on a scratch copy: at step x, find a
    1 in the trailing submatrix, move it to (x, x) with one row swap and one
    column swap, XOR the pivot row into every other row holding a 1 in column x,
    then clear the rest of the pivot row (equivalent to the column operations,
    since column x is zero outside the pivot). Elimination stops as soon as the
    trailing submatrix is zero.

    Args:
        M: 2D 0/1 matrix, dense or sparse; not mutated

    Returns:
        Number of pivots found
    """
    A = binarize(M)
    n_rows, n_cols = A.shape
    if n_rows == 0 or n_cols == 0:
        return 0

    rank = 0
    for x in range(min(n_rows, n_cols)):
        rows, cols = np.nonzero(A[x:, x:])
        if rows.size == 0:
            break
        i = int(rows[0]) + x
        j = int(cols[0]) + x

        if i != x:
            A[[x, i], :] = A[[i, x], :]
        if j != x:
            A[:, [x, j]] = A[:, [j, x]]

        hits = np.flatnonzero(A[:, x])
        hits = hits[hits != x]
        if hits.size:
            A[hits, :] ^= A[x, :]
        A[x, x + 1:] = 0

        rank += 1
    return rank
