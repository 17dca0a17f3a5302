"""
Example: Random directed graph growth.

30 vertices, 1000 sampled edges, reporting simplex counts and Betti numbers
every 100 steps. Independent runs each get their own seeded generator.
"""

import numpy as np

from dirflag import SimulationConfig, run_simulation


def main():
    config = SimulationConfig(num_vertices=30, num_steps=1000, report_every=100)

    for seed in (0, 1):
        print(f"--- run with seed {seed} ---")
        result = run_simulation(config, rng=np.random.default_rng(seed))
        for report in result.reports:
            counts = [report.counts[d] for d in sorted(report.counts)]
            print(f"  step {report.step:>4}  counts {counts}  betti {report.betti}")
        print(f"  Euler characteristic: {result.complex.euler_characteristic()}")


if __name__ == "__main__":
    main()
