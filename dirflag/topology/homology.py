"""
dirflag/topology/homology.py

Betti numbers over GF(2) from simplex counts and boundary ranks.

With n_d simplices in dimension d and r_d the rank of the boundary map from
dimension d+1 to dimension d:

    betti[d] = dim ker(∂_d) - dim im(∂_{d+1}) = (n_d - r_{d-1}) - r_d

where r_{-1} = 0 (vertices have no boundary) and r_top = 0 (nothing above the
top dimension).
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from dirflag.algebra.gf2 import MatrixLike, gf2_rank


def boundary_ranks(boundaries: Iterable[MatrixLike]) -> List[int]:
    """GF(2) rank of each boundary matrix, in order."""
    return [gf2_rank(M) for M in boundaries]


def betti_numbers_from_boundaries(counts: Sequence[int], ranks: Sequence[int]) -> List[int]:
    """
    Betti numbers for dimensions 0..len(counts)-1.

    Args:
        counts: counts[d] = number of d-simplices
        ranks: ranks[d] = rank of the boundary from dimension d+1 to d; any
            missing trailing entry is taken as 0

    Returns:
        List of Betti numbers, one per entry of counts
    """
    if len(ranks) > len(counts):
        raise ValueError(f"{len(ranks)} boundary ranks for {len(counts)} dimensions")
    betti: List[int] = []
    for d, n in enumerate(counts):
        r_in = ranks[d - 1] if d > 0 else 0
        r_out = ranks[d] if d < len(ranks) else 0
        b = n - r_in - r_out
        if b < 0:
            raise ValueError(f"Negative Betti number at dimension {d}: inconsistent ranks")
        betti.append(b)
    return betti


def euler_characteristic(counts: Sequence[int]) -> int:
    """Alternating sum of simplex counts; equals the alternating sum of Betti numbers."""
    return sum((-1) ** d * n for d, n in enumerate(counts))
