"""
Example: Growth with edge decay.

Each step may retract a random edge. Removals cascade through every simplex
built on the removed edge, so the complex always matches a fresh rebuild
from the surviving edges.
"""

from dirflag import SimplicialComplex, SimulationConfig, run_simulation


def main():
    config = SimulationConfig(num_vertices=15, num_steps=400, report_every=50,
                              removal_rate=0.4, seed=7)
    result = run_simulation(config)

    for report in result.reports:
        print(f"step {report.step:>4}  edges {report.num_edges:>3}  betti {report.betti}")

    rebuilt = SimplicialComplex.from_digraph(result.graph)
    print(f"\nIncremental: {dict(result.complex.simplex_counts())}")
    print(f"Rebuilt:     {dict(rebuilt.simplex_counts())}")
    print(f"Match: {result.complex.betti_numbers() == rebuilt.betti_numbers()}")


if __name__ == "__main__":
    main()
