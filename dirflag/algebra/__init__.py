"""
Algebra module: linear algebra over GF(2).
"""

from dirflag.algebra.gf2 import binarize, binarize_csr, gf2_rank

__all__ = [
    "binarize",
    "binarize_csr",
    "gf2_rank",
]
