"""
dirflag/core/registry.py

Slot registry for the simplices of one dimension.

Maintains a dense bijection between integer slots 0..n-1 and simplices, so
that slots can address rows and columns of boundary matrices directly.
Removal swaps the last simplex into the freed slot and truncates, keeping
numbering dense without a rescan.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

Simplex = Tuple[int, ...]

SlotID = int


class SlotTable:
    """
    Dense slot <-> simplex bijection for a single dimension.

    Attributes:
        simplices: slot -> simplex
        slot_of: simplex -> slot
        by_vertices: vertex set -> stored simplex (at most one ordering per set)
    """

    def __init__(self):
        self.simplices: List[Simplex] = []
        self.slot_of: Dict[Simplex, SlotID] = {}
        self.by_vertices: Dict[FrozenSet[int], Simplex] = {}

    def alloc(self, simplex: Simplex) -> SlotID:
        """
        Allocate the next slot for a simplex.

        Returns:
            The allocated slot, always equal to the previous table size
        """
        key = frozenset(simplex)
        if key in self.by_vertices:
            raise ValueError(
                f"Vertex set of {simplex} already stored as {self.by_vertices[key]}"
            )
        sid = len(self.simplices)
        self.simplices.append(simplex)
        self.slot_of[simplex] = sid
        self.by_vertices[key] = simplex
        return sid

    def free(self, simplex: Simplex) -> Tuple[SlotID, Optional[Simplex]]:
        """
        Release the slot of a simplex by swap-with-last.

        Returns:
            (freed_slot, moved) where moved is the simplex that now occupies
            freed_slot, or None when the freed slot was the last one
        """
        sid = self.slot_of.pop(simplex)
        del self.by_vertices[frozenset(simplex)]
        last = self.simplices.pop()
        if sid == len(self.simplices):
            return sid, None
        self.simplices[sid] = last
        self.slot_of[last] = sid
        return sid, last

    def slot(self, simplex: Simplex) -> SlotID:
        """Get the slot of a simplex."""
        return self.slot_of[simplex]

    def simplex(self, sid: SlotID) -> Simplex:
        """Get the simplex stored at a slot."""
        return self.simplices[sid]

    def lookup(self, vertices) -> Optional[Simplex]:
        """Stored simplex spanning exactly the given vertices, if any."""
        return self.by_vertices.get(frozenset(vertices))

    def __contains__(self, simplex: Simplex) -> bool:
        return simplex in self.slot_of

    def __iter__(self) -> Iterator[Simplex]:
        return iter(list(self.simplices))

    def __len__(self) -> int:
        return len(self.simplices)

    def __repr__(self) -> str:
        return f"SlotTable(size={len(self.simplices)})"
