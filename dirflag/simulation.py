"""
dirflag/simulation.py

High-level interface for running a random growth experiment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import networkx as nx
import numpy as np

from dirflag.runtime.driver import RandomEdgeDriver
from dirflag.topology.complex import SimplicialComplex

logger = logging.getLogger("dirflag.simulation")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters of a random growth run.

    Attributes:
        num_vertices: Vertices seeded into the complex
        num_steps: Edge samples to draw
        report_every: Steps between topology reports
        removal_rate: Per-step probability of retracting a random edge
        fill_cycles: Whether directed cycles are filled (see SimplicialComplex)
        seed: Seed for the run's random generator
    """
    num_vertices: int = 30
    num_steps: int = 1000
    report_every: int = 100
    removal_rate: float = 0.0
    fill_cycles: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_vertices < 2:
            raise ValueError(f"num_vertices must be at least 2, got {self.num_vertices}")
        if self.num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {self.num_steps}")
        if self.report_every < 1:
            raise ValueError(f"report_every must be positive, got {self.report_every}")
        if not 0.0 <= self.removal_rate <= 1.0:
            raise ValueError(f"removal_rate must lie in [0, 1], got {self.removal_rate}")


@dataclass
class Report:
    """Topology snapshot taken during a run."""
    step: int
    num_edges: int
    counts: Dict[int, int]
    betti: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "num_edges": self.num_edges,
            "counts": {str(d): n for d, n in sorted(self.counts.items())},
            "betti": list(self.betti),
        }


@dataclass
class SimulationResult:
    """Result from running a simulation."""
    config: SimulationConfig
    reports: List[Report]
    complex: SimplicialComplex
    graph: nx.DiGraph = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": {
                "num_vertices": self.config.num_vertices,
                "num_steps": self.config.num_steps,
                "report_every": self.config.report_every,
                "removal_rate": self.config.removal_rate,
                "fill_cycles": self.config.fill_cycles,
                "seed": self.config.seed,
            },
            "reports": [r.to_dict() for r in self.reports],
        }


def snapshot(step: int, complex_: SimplicialComplex) -> Report:
    """Take a topology report of the current complex."""
    counts = dict(complex_.simplex_counts())
    return Report(
        step=step,
        num_edges=counts.get(1, 0),
        counts=counts,
        betti=complex_.betti_numbers(),
    )


def run_simulation(
    config: SimulationConfig,
    rng: Optional[np.random.Generator] = None,
) -> SimulationResult:
    """
    Grow a random directed graph and track its clique complex.

    Args:
        config: Run parameters
        rng: Optional random generator; defaults to one seeded from config.seed

    Returns:
        SimulationResult with the reports, final complex and final graph
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)

    cx = SimplicialComplex(range(config.num_vertices), fill_cycles=config.fill_cycles)
    driver = RandomEdgeDriver(cx, rng, removal_rate=config.removal_rate)

    reports: List[Report] = []
    for step in range(config.num_steps):
        driver.step()
        if step % config.report_every == 0 or step == config.num_steps - 1:
            report = snapshot(step, cx)
            logger.info("step %d: counts=%s betti=%s", step, report.counts, report.betti)
            reports.append(report)

    return SimulationResult(config=config, reports=reports, complex=cx, graph=driver.graph)
