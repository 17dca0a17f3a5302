"""
Example: Filled vs hollow triangles.

A transitive triangle 0 -> 1 -> 2, 0 -> 2 is always a 2-simplex. A directed
3-cycle 0 -> 1 -> 2 -> 0 is filled by default and hollow when
fill_cycles=False.
"""

from dirflag import SimplicialComplex


def build(edges, fill_cycles):
    cx = SimplicialComplex([0, 1, 2], fill_cycles=fill_cycles)
    for u, v in edges:
        cx.insert_edge(u, v)
    return cx


def main():
    transitive = [(0, 1), (1, 2), (0, 2)]
    cycle = [(0, 1), (1, 2), (2, 0)]

    for name, edges in [("transitive", transitive), ("3-cycle", cycle)]:
        for fill in (True, False):
            cx = build(edges, fill)
            print(f"{name:<10} fill_cycles={fill!s:<5}  "
                  f"triangles={cx.simplices(2)}  betti={cx.betti_numbers()}")

    # Removing an edge takes the triangle with it
    cx = build(transitive, True)
    cx.remove_edge(0, 1)
    print(f"\nAfter removing (0, 1): edges={sorted(cx.edges())}, "
          f"triangles={cx.simplices(2)}, betti={cx.betti_numbers()}")


if __name__ == "__main__":
    main()
