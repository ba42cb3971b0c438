"""
Antitone Galois connection between point sets and substructures.

Two order-reversing maps
    lower: A → B    (point sets ↦ substructures, lower = fixing)
    upper: B → A    (substructures ↦ point sets, upper = fixed_points)
form an antitone Galois connection when, for all a, b:

    a ≤_A upper(b)  ⇔  b ≤_B lower(a)

Everything else follows from that single law and is derived once here:
- lower and upper are antitone
- lower(a1 ⊔ a2)  = lower(a1) ⊓ lower(a2),   lower(⨆ aᵢ) = ⨅ lower(aᵢ)
- upper(b1 ⊔ b2)  = upper(b1) ⊓ upper(b2),   upper(⨆ bᵢ) = ⨅ upper(bᵢ)
- upper ∘ lower and lower ∘ upper are closure operators (extensive, idempotent)

The connection is instantiated twice: monoid_connection (subsets ↔
submonoids) and group_connection (subsets ↔ subgroups).
"""

from dataclasses import dataclass
from functools import reduce
from typing import Callable, Generic, Iterable, TypeVar

from action_universe.act_core.action import FiniteAction
from action_universe.act_core.types import SUBGROUP, SUBMONOID, PointSet, Substructure

from .fixing import fixed_points, fixing

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class AntitoneGaloisConnection(Generic[A, B]):
    """
    A pair of antitone maps between two lattices.

    Args:
        lower: A → B
        upper: B → A
        le_a, le_b: partial orders
        sup_a, inf_a, sup_b, inf_b: binary joins and meets
        bot_a: least element of A (join of the empty family)
        bot_b: least element of B (join of the empty family)
    """

    lower: Callable[[A], B]
    upper: Callable[[B], A]
    le_a: Callable[[A, A], bool]
    le_b: Callable[[B, B], bool]
    sup_a: Callable[[A, A], A]
    inf_a: Callable[[A, A], A]
    sup_b: Callable[[B, B], B]
    inf_b: Callable[[B, B], B]
    bot_a: A
    bot_b: B

    # -------------------------------------------------------------------------
    # The law
    # -------------------------------------------------------------------------

    def is_adjoint(self, a: A, b: B) -> bool:
        """a ≤ upper(b)  ⇔  b ≤ lower(a)"""
        return self.le_a(a, self.upper(b)) == self.le_b(b, self.lower(a))

    # -------------------------------------------------------------------------
    # Derived computations
    # -------------------------------------------------------------------------

    def lower_sup(self, a1: A, a2: A) -> B:
        """lower(a1 ⊔ a2), computed as lower(a1) ⊓ lower(a2)."""
        return self.inf_b(self.lower(a1), self.lower(a2))

    def lower_iSup(self, family: Iterable[A]) -> B:
        """lower(⨆ aᵢ) = ⨅ lower(aᵢ); the empty family gives lower(⊥)."""
        return reduce(self.inf_b, (self.lower(a) for a in family), self.lower(self.bot_a))

    def upper_sup(self, b1: B, b2: B) -> A:
        """upper(b1 ⊔ b2), computed as upper(b1) ⊓ upper(b2)."""
        return self.inf_a(self.upper(b1), self.upper(b2))

    def upper_iSup(self, family: Iterable[B]) -> A:
        """upper(⨆ bᵢ) = ⨅ upper(bᵢ); the empty family gives upper(⊥)."""
        return reduce(self.inf_a, (self.upper(b) for b in family), self.upper(self.bot_b))

    def closure_a(self, a: A) -> A:
        """upper(lower(a)): the points fixed by everything fixing a."""
        return self.upper(self.lower(a))

    def closure_b(self, b: B) -> B:
        """lower(upper(b)): everything fixing the fixed points of b."""
        return self.lower(self.upper(b))

    # -------------------------------------------------------------------------
    # Law checks (each compares a derived statement with direct computation)
    # -------------------------------------------------------------------------

    def check_lower_antitone(self, a1: A, a2: A) -> bool:
        return not self.le_a(a1, a2) or self.le_b(self.lower(a2), self.lower(a1))

    def check_upper_antitone(self, b1: B, b2: B) -> bool:
        return not self.le_b(b1, b2) or self.le_a(self.upper(b2), self.upper(b1))

    def check_lower_sup(self, a1: A, a2: A) -> bool:
        return self.lower(self.sup_a(a1, a2)) == self.lower_sup(a1, a2)

    def check_lower_iSup(self, family: Iterable[A]) -> bool:
        family = list(family)
        direct = self.lower(reduce(self.sup_a, family, self.bot_a))
        return direct == self.lower_iSup(family)

    def check_upper_sup(self, b1: B, b2: B) -> bool:
        return self.upper(self.sup_b(b1, b2)) == self.upper_sup(b1, b2)

    def check_upper_iSup(self, family: Iterable[B]) -> bool:
        family = list(family)
        direct = self.upper(reduce(self.sup_b, family, self.bot_b))
        return direct == self.upper_iSup(family)

    def check_closure_a(self, a: A) -> bool:
        closed = self.closure_a(a)
        return self.le_a(a, closed) and self.closure_a(closed) == closed

    def check_closure_b(self, b: B) -> bool:
        closed = self.closure_b(b)
        return self.le_b(b, closed) and self.closure_b(closed) == closed


# =============================================================================
# Instantiations
# =============================================================================


def _connection(action: FiniteAction, kind: str) -> AntitoneGaloisConnection[PointSet, Substructure]:
    return AntitoneGaloisConnection(
        lower=lambda s: fixing(action, s, kind),
        upper=lambda p: fixed_points(action, p),
        le_a=lambda s, t: s <= t,
        le_b=lambda p, q: p <= q,
        sup_a=lambda s, t: s | t,
        inf_a=lambda s, t: s & t,
        sup_b=action.sup,
        inf_b=lambda p, q: p & q,
        bot_a=frozenset(),
        bot_b=action.trivial(kind),
    )


def monoid_connection(action: FiniteAction) -> AntitoneGaloisConnection[PointSet, Substructure]:
    """Subsets of α ↔ submonoids of M via (fixing_submonoid, fixed_points)."""
    return _connection(action, SUBMONOID)


def group_connection(action: FiniteAction) -> AntitoneGaloisConnection[PointSet, Substructure]:
    """
    Subsets of α ↔ subgroups of M via (fixing_subgroup, fixed_points).

    Raises:
        NotAGroupError: If M is only a monoid
    """
    action.require_group("group_connection")
    return _connection(action, SUBGROUP)


# =============================================================================
# Corollaries
# =============================================================================


def fixing_submonoid_union(action: FiniteAction, s: PointSet, t: PointSet) -> Substructure:
    """fixing(s ∪ t) = fixing(s) ⊓ fixing(t)"""
    return monoid_connection(action).lower_sup(frozenset(s), frozenset(t))


def fixing_submonoid_iUnion(action: FiniteAction, family: Iterable[PointSet]) -> Substructure:
    """fixing(⋃ sᵢ) = ⨅ fixing(sᵢ)"""
    return monoid_connection(action).lower_iSup(frozenset(s) for s in family)


def fixing_subgroup_union(action: FiniteAction, s: PointSet, t: PointSet) -> Substructure:
    """fixing(s ∪ t) = fixing(s) ⊓ fixing(t)"""
    return group_connection(action).lower_sup(frozenset(s), frozenset(t))


def fixing_subgroup_iUnion(action: FiniteAction, family: Iterable[PointSet]) -> Substructure:
    """fixing(⋃ sᵢ) = ⨅ fixing(sᵢ)"""
    return group_connection(action).lower_iSup(frozenset(s) for s in family)


def fixed_points_submonoid_sup(action: FiniteAction, p: Substructure, q: Substructure) -> PointSet:
    """fixed_points(P ⊔ Q) = fixed_points(P) ∩ fixed_points(Q)"""
    return monoid_connection(action).upper_sup(p, q)


def fixed_points_submonoid_iSup(action: FiniteAction, family: Iterable[Substructure]) -> PointSet:
    """fixed_points(⨆ Pᵢ) = ⋂ fixed_points(Pᵢ)"""
    return monoid_connection(action).upper_iSup(family)


def fixed_points_subgroup_sup(action: FiniteAction, p: Substructure, q: Substructure) -> PointSet:
    """fixed_points(P ⊔ Q) = fixed_points(P) ∩ fixed_points(Q)"""
    return group_connection(action).upper_sup(p, q)


def fixed_points_subgroup_iSup(action: FiniteAction, family: Iterable[Substructure]) -> PointSet:
    """fixed_points(⨆ Pᵢ) = ⋂ fixed_points(Pᵢ)"""
    return group_connection(action).upper_iSup(family)


def fixing_submonoid_antitone(action: FiniteAction, s: PointSet, t: PointSet) -> bool:
    """s ⊆ t ⇒ fixing(t) ≤ fixing(s)"""
    return monoid_connection(action).check_lower_antitone(frozenset(s), frozenset(t))


def fixing_subgroup_antitone(action: FiniteAction, s: PointSet, t: PointSet) -> bool:
    """s ⊆ t ⇒ fixing(t) ≤ fixing(s)"""
    return group_connection(action).check_lower_antitone(frozenset(s), frozenset(t))


def fixed_points_submonoid_antitone(action: FiniteAction, p: Substructure, q: Substructure) -> bool:
    """P ≤ Q ⇒ fixed_points(Q) ⊆ fixed_points(P)"""
    return monoid_connection(action).check_upper_antitone(p, q)


def fixed_points_subgroup_antitone(action: FiniteAction, p: Substructure, q: Substructure) -> bool:
    """P ≤ Q ⇒ fixed_points(Q) ⊆ fixed_points(P)"""
    return group_connection(action).check_upper_antitone(p, q)


# =============================================================================
# Exports
# =============================================================================


__all__ = [
    "AntitoneGaloisConnection",
    "monoid_connection",
    "group_connection",
    "fixing_submonoid_union",
    "fixing_submonoid_iUnion",
    "fixing_subgroup_union",
    "fixing_subgroup_iUnion",
    "fixed_points_submonoid_sup",
    "fixed_points_submonoid_iSup",
    "fixed_points_subgroup_sup",
    "fixed_points_subgroup_iSup",
    "fixing_submonoid_antitone",
    "fixing_subgroup_antitone",
    "fixed_points_submonoid_antitone",
    "fixed_points_subgroup_antitone",
]
