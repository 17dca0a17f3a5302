#!/usr/bin/env python3
"""
dirflag: incremental directed clique complexes

Tracks the directed clique complex of a growing directed graph and reports
its Betti numbers over GF(2).

Usage:
    # Random growth run
    python main.py run --vertices 30 --steps 1000 --seed 7 --output run.json

    # Run demos
    python main.py demo --example triangle

    # Run tests
    python main.py test
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

# Handle imports whether running as package or directly
try:
    from dirflag import (
        SimplicialComplex,
        SimulationConfig,
        run_simulation,
        __version__,
    )
except ImportError:
    sys.path.insert(0, str(Path(__file__).parent))
    from dirflag import (
        SimplicialComplex,
        SimulationConfig,
        run_simulation,
        __version__,
    )


def save_result_to_json(filepath: str, result) -> None:
    """Save simulation reports to JSON file."""
    with open(filepath, 'w') as f:
        json.dump(result.to_dict(), f, indent=2)


def format_counts(counts) -> str:
    return ", ".join(f"{d}: {n}" for d, n in sorted(counts.items()))


def cmd_run(args):
    """Execute the run command."""
    try:
        config = SimulationConfig(
            num_vertices=args.vertices,
            num_steps=args.steps,
            report_every=args.report_every,
            removal_rate=args.removal_rate,
            fill_cycles=not args.strict,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Vertices: {config.num_vertices}, steps: {config.num_steps}, "
          f"removal rate: {config.removal_rate}, seed: {config.seed}")
    print(f"Directed cycles: {'filled' if config.fill_cycles else 'hollow'}")
    print()

    result = run_simulation(config)
    for report in result.reports:
        print(f"step {report.step:>6}  edges {report.num_edges:>5}  "
              f"counts {{{format_counts(report.counts)}}}  betti {report.betti}")

    if args.output:
        save_result_to_json(args.output, result)
        print(f"\nResults saved to: {args.output}")

    return 0


def _build(edges, vertices, fill_cycles=True):
    cx = SimplicialComplex(vertices, fill_cycles=fill_cycles)
    for u, v in edges:
        cx.insert_edge(u, v)
    return cx


def _show(cx):
    print(f"  Counts: {{{format_counts(cx.simplex_counts())}}}")
    for d in range(cx.dimension + 1):
        print(f"  {d}-simplices: {sorted(cx.simplices(d))}")
    print(f"  Betti numbers: {cx.betti_numbers()}")


def demo_triangle():
    """Demo: transitive triangle 0 -> 1 -> 2, 0 -> 2 (filled)"""
    print("=" * 60)
    print("Demo: Transitive Triangle")
    print("=" * 60)

    cx = _build([(0, 1), (1, 2), (0, 2)], [0, 1, 2])
    _show(cx)

    cx.remove_edge(0, 1)
    print("\nAfter removing edge (0, 1):")
    _show(cx)
    cx.check_invariants()

    return cx.betti_numbers() == [1, 0] and cx.simplex_counts()[2] == 0


def demo_hollow():
    """Demo: directed 3-cycle with and without cycle filling"""
    print("=" * 60)
    print("Demo: Directed 3-Cycle")
    print("=" * 60)

    edges = [(0, 1), (1, 2), (2, 0)]

    print("\nfill_cycles=True:")
    filled = _build(edges, [0, 1, 2], fill_cycles=True)
    _show(filled)

    print("\nfill_cycles=False:")
    hollow = _build(edges, [0, 1, 2], fill_cycles=False)
    _show(hollow)

    return filled.betti_numbers() == [1, 0, 0] and hollow.betti_numbers() == [1, 1]


def demo_tetrahedron():
    """Demo: a single edge completing a solid tetrahedron"""
    print("=" * 60)
    print("Demo: Tetrahedron Closure")
    print("=" * 60)

    edges = [(0, 1), (0, 2), (1, 2), (1, 3), (2, 3)]
    cx = _build(edges, range(4))
    print("\nBefore inserting (0, 3):")
    _show(cx)

    cx.insert_edge(0, 3)
    print("\nAfter inserting (0, 3):")
    _show(cx)
    cx.check_invariants()

    return (0, 1, 2, 3) in cx and cx.betti_numbers() == [1, 0, 0, 0]


def demo_growth():
    """Demo: random growth with decay"""
    print("=" * 60)
    print("Demo: Random Growth")
    print("=" * 60)

    config = SimulationConfig(num_vertices=12, num_steps=200, report_every=50,
                              removal_rate=0.2, seed=0)
    result = run_simulation(config)
    for report in result.reports:
        print(f"  step {report.step:>4}  counts {{{format_counts(report.counts)}}}  "
              f"betti {report.betti}")
    result.complex.check_invariants()

    final = result.reports[-1]
    chi = sum((-1) ** d * b for d, b in enumerate(final.betti))
    print(f"\nEuler characteristic: {result.complex.euler_characteristic()} "
          f"(from Betti numbers: {chi})")
    return chi == result.complex.euler_characteristic()


def cmd_demo(args):
    """Execute the demo command."""
    demos = {
        "triangle": demo_triangle,
        "hollow": demo_hollow,
        "tetrahedron": demo_tetrahedron,
        "growth": demo_growth,
    }

    if args.example == "all":
        results = []
        for name, func in demos.items():
            try:
                passed = func()
                results.append((name, passed))
            except Exception as e:
                print(f"Error in {name}: {e}")
                import traceback
                traceback.print_exc()
                results.append((name, False))
            print()

        print("=" * 60)
        print("Summary")
        print("=" * 60)
        all_passed = True
        for name, passed in results:
            status = "PASS" if passed else "FAIL"
            print(f"  {name}: {status}")
            if not passed:
                all_passed = False

        return 0 if all_passed else 1

    elif args.example in demos:
        try:
            passed = demos[args.example]()
            return 0 if passed else 1
        except Exception as e:
            print(f"Error: {e}")
            import traceback
            traceback.print_exc()
            return 1
    else:
        print(f"Unknown example: {args.example}")
        print(f"Available: {', '.join(demos.keys())}, all")
        return 1


def cmd_test(args):
    """Execute the test command."""
    import subprocess

    test_dir = Path(__file__).parent / "tests"
    if not test_dir.exists():
        print(f"Test directory not found: {test_dir}")
        return 1

    cmd = [sys.executable, "-m", "pytest", str(test_dir)]
    if args.verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=dirflag", "--cov-report=term-missing"])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def cmd_info(args):
    """Display system information."""
    print(f"dirflag v{__version__}")
    print("Incremental directed clique complexes with GF(2) homology")
    print()
    print("Python:", sys.version.split()[0])
    print("NumPy:", np.__version__)

    try:
        import scipy
        print("SciPy:", scipy.__version__)
    except ImportError:
        print("SciPy: not installed")

    try:
        import networkx
        print("NetworkX:", networkx.__version__)
    except ImportError:
        print("NetworkX: not installed")

    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="dirflag",
        description="dirflag: incremental directed clique complexes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random growth, reporting every 100 steps
  dirflag run --vertices 30 --steps 1000 --seed 7

  # With edge decay and hollow directed cycles
  dirflag run --removal-rate 0.3 --strict --output run.json

  # Run demos
  dirflag demo --example hollow
  dirflag demo --example all

  # Run tests
  dirflag test -v
"""
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"dirflag {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a random growth simulation")
    run_parser.add_argument("--vertices", "-n", type=int, default=30, help="Number of vertices (default: 30)")
    run_parser.add_argument("--steps", "-s", type=int, default=1000, help="Number of steps (default: 1000)")
    run_parser.add_argument("--report-every", "-r", type=int, default=100, help="Steps between reports (default: 100)")
    run_parser.add_argument("--removal-rate", type=float, default=0.0, help="Per-step edge decay probability")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    run_parser.add_argument("--strict", action="store_true", help="Leave directed cycles hollow")
    run_parser.add_argument("--output", "-o", type=str, help="Output JSON file")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demonstration examples")
    demo_parser.add_argument(
        "--example", "-e",
        choices=["triangle", "hollow", "tetrahedron", "growth", "all"],
        default="all",
        help="Which example to run (default: all)"
    )

    # Test command
    test_parser = subparsers.add_parser("test", help="Run test suite")
    test_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    test_parser.add_argument("--coverage", "-c", action="store_true", help="With coverage")

    # Info command
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args()

    if args.verbose and args.command != "test":
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "demo":
        return cmd_demo(args)
    elif args.command == "test":
        return cmd_test(args)
    elif args.command == "info":
        return cmd_info(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
