"""
dirflag: incremental directed clique complexes

Tracks the directed clique complex of a directed graph while edges are added
and removed, keeping GF(2) boundary matrices in sync so that Betti numbers
can be read at any time.

Key components:
- algebra: GF(2) rank engine
- core: dense slot registry
- topology: simplices, cofacet tables, boundary matrices, combiner, complex, homology
- runtime: random edge-stream driver
"""

__version__ = "1.0.0"
__author__ = "dirflag Team"

from dirflag.algebra.gf2 import gf2_rank
from dirflag.topology.simplex import Simplex, faces
from dirflag.topology.combiner import CyclicOrderError, combine
from dirflag.topology.complex import SimplicialComplex
from dirflag.simulation import SimulationConfig, SimulationResult, Report, run_simulation

__all__ = [
    # GF(2)
    "gf2_rank",
    # Topology
    "Simplex",
    "faces",
    "CyclicOrderError",
    "combine",
    "SimplicialComplex",
    # Simulation
    "SimulationConfig",
    "SimulationResult",
    "Report",
    "run_simulation",
]
