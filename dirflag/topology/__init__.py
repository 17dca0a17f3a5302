"""
Topology module: simplices, per-dimension stores, the complex and its homology.
"""

from dirflag.topology.simplex import Simplex, as_simplex, dimension, faces
from dirflag.topology.cofacets import CofacetTable
from dirflag.topology.boundary import BoundaryMatrix
from dirflag.topology.combiner import CyclicOrderError, canonical_order, combine, precedence_graph
from dirflag.topology.homology import betti_numbers_from_boundaries, boundary_ranks, euler_characteristic
from dirflag.topology.complex import SimplicialComplex

__all__ = [
    "Simplex",
    "as_simplex",
    "dimension",
    "faces",
    "CofacetTable",
    "BoundaryMatrix",
    "CyclicOrderError",
    "canonical_order",
    "combine",
    "precedence_graph",
    "betti_numbers_from_boundaries",
    "boundary_ranks",
    "euler_characteristic",
    "SimplicialComplex",
]
