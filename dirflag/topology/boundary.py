"""
dirflag/topology/boundary.py

Growable GF(2) boundary matrix between two adjacent dimensions.

boundary[d] has one row per d-simplex slot and one column per (d+1)-simplex
slot; entry (i, j) is 1 iff row simplex i is a facet of column simplex j.
Storage is a uint8 buffer with spare capacity so that appending rows and
columns is amortized O(1) per entry; deletions swap the last row/column into
the freed position and shrink, mirroring SlotTable.free, and the buffer is
halved whenever the live region drops to a quarter of it.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np
import scipy.sparse as sp

from dirflag.algebra.gf2 import gf2_rank


class BoundaryMatrix:
    """
    Boundary matrix with dense slot-addressed rows and columns.

    An empty matrix is a valid state (shape (0, 0), (n, 0) or (0, m)); no
    placeholder row or column is ever stored.
    """

    def __init__(self, n_rows: int = 0, n_cols: int = 0):
        self._buf = np.zeros((max(n_rows, 4), max(n_cols, 4)), dtype=np.uint8)
        self.n_rows = n_rows
        self.n_cols = n_cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self.n_rows, self.n_cols

    @property
    def capacity(self) -> Tuple[int, int]:
        """Allocated buffer shape; shrinks once the live region falls to a quarter."""
        return self._buf.shape

    def _reserve(self, rows: int, cols: int) -> None:
        cap_r, cap_c = self._buf.shape
        if rows <= cap_r and cols <= cap_c:
            return
        new_r = max(cap_r, 4)
        while new_r < rows:
            new_r *= 2
        new_c = max(cap_c, 4)
        while new_c < cols:
            new_c *= 2
        buf = np.zeros((new_r, new_c), dtype=np.uint8)
        buf[:self.n_rows, :self.n_cols] = self._buf[:self.n_rows, :self.n_cols]
        self._buf = buf

    def _shrink(self) -> None:
        cap_r, cap_c = self._buf.shape
        new_r, new_c = cap_r, cap_c
        while new_r > 4 and self.n_rows * 4 <= new_r:
            new_r //= 2
        while new_c > 4 and self.n_cols * 4 <= new_c:
            new_c //= 2
        if (new_r, new_c) != (cap_r, cap_c):
            self._buf = self._buf[:new_r, :new_c].copy()

    def add_row(self) -> int:
        """Append a zero row; returns its index."""
        self._reserve(self.n_rows + 1, self.n_cols)
        self.n_rows += 1
        return self.n_rows - 1

    def add_column(self, rows: Iterable[int]) -> int:
        """
        Append a column with ones at the given rows.

        Returns:
            Index of the new column
        """
        self._reserve(self.n_rows, self.n_cols + 1)
        j = self.n_cols
        self.n_cols += 1
        for i in rows:
            if not 0 <= i < self.n_rows:
                raise RuntimeError(f"Row {i} out of range for boundary of shape {self.shape}")
            self._buf[i, j] = 1
        return j

    def remove_row(self, i: int) -> None:
        """Delete row i by moving the last row into its place."""
        if not 0 <= i < self.n_rows:
            raise RuntimeError(f"Row {i} out of range for boundary of shape {self.shape}")
        last = self.n_rows - 1
        if i != last:
            self._buf[i, :self.n_cols] = self._buf[last, :self.n_cols]
        self._buf[last, :self.n_cols] = 0
        self.n_rows = last
        self._shrink()

    def remove_column(self, j: int) -> None:
        """Delete column j by moving the last column into its place."""
        if not 0 <= j < self.n_cols:
            raise RuntimeError(f"Column {j} out of range for boundary of shape {self.shape}")
        last = self.n_cols - 1
        if j != last:
            self._buf[:self.n_rows, j] = self._buf[:self.n_rows, last]
        self._buf[:self.n_rows, last] = 0
        self.n_cols = last
        self._shrink()

    def row_support(self, i: int) -> np.ndarray:
        """Columns holding a 1 in row i (the cofaces of row simplex i)."""
        return np.flatnonzero(self._buf[i, :self.n_cols])

    def column_support(self, j: int) -> np.ndarray:
        """Rows holding a 1 in column j (the facets of column simplex j)."""
        return np.flatnonzero(self._buf[:self.n_rows, j])

    def get(self, i: int, j: int) -> int:
        return int(self._buf[i, j])

    def to_dense(self) -> np.ndarray:
        """Copy of the live region as a uint8 array."""
        return self._buf[:self.n_rows, :self.n_cols].copy()

    def to_sparse(self) -> sp.csr_matrix:
        """Live region as a CSR matrix."""
        return sp.csr_matrix(self._buf[:self.n_rows, :self.n_cols])

    def rank(self) -> int:
        """Rank over GF(2); the stored matrix is left untouched."""
        return gf2_rank(self._buf[:self.n_rows, :self.n_cols])

    def __repr__(self) -> str:
        return f"BoundaryMatrix(shape={self.shape}, nnz={int(self._buf.sum())})"
