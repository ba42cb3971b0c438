"""
Core type definitions for finite actions.

An acting structure M (monoid or group) and a carrier α are both finite sets
of hashable labels. Subsets of α are frozensets; substructures of M are
Substructure values carrying their members and whether they are a submonoid
or a subgroup.
"""

from dataclasses import dataclass
from typing import FrozenSet, Hashable, Iterator, NewType

# Labels of acting-structure elements and carrier points
Element = Hashable
Point = Hashable

# A subset s ⊆ α
PointSet = FrozenSet[Point]

# Hash type (64-bit from SHA-256)
Hash64 = NewType("Hash64", int)

SUBMONOID = "submonoid"
SUBGROUP = "subgroup"
KINDS = (SUBMONOID, SUBGROUP)


@dataclass(frozen=True)
class Substructure:
    """
    A submonoid or subgroup of a finite acting structure.

    Only the member set and the kind are stored; closure under the monoid
    (or group) operations is established by whoever builds the value
    (see FiniteAction.is_submonoid / is_subgroup).

    Ordering is inclusion of members:
    - P <= Q  iff  every member of P is a member of Q
    - P & Q   is the intersection (the inf in the lattice of substructures)
    """

    members: FrozenSet[Element]
    kind: str = SUBGROUP

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unknown substructure kind '{self.kind}'. Must be one of {KINDS}")
        if not isinstance(self.members, frozenset):
            object.__setattr__(self, "members", frozenset(self.members))

    def __contains__(self, element: Element) -> bool:
        return element in self.members

    def __iter__(self) -> Iterator[Element]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __le__(self, other: "Substructure") -> bool:
        return self.members <= other.members

    def __ge__(self, other: "Substructure") -> bool:
        return self.members >= other.members

    def __and__(self, other: "Substructure") -> "Substructure":
        # Intersection of two subgroups is a subgroup; of a subgroup and a
        # submonoid only a submonoid.
        kind = SUBGROUP if self.kind == other.kind == SUBGROUP else SUBMONOID
        return Substructure(self.members & other.members, kind)

    def as_kind(self, kind: str) -> "Substructure":
        """Same members, relabelled kind (e.g. a fixing submonoid viewed as a subgroup)."""
        return Substructure(self.members, kind)
