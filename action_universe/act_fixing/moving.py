"""
Moving subgroups: elements whose moved points stay inside a set.

    moving(s) := fixing_subgroup(sᶜ)
    m ∈ moving(s)  ⇔  moved_by(m) ⊆ s

Lattice behaviour is inherited from the group Galois connection through
complementation (which reverses inclusion), so moving is monotone and turns
intersections of sets into intersections of subgroups.

Group-level facts:
- moving(g • s) = g · moving(s) · g⁻¹
- a ∈ s ⇒ orbit(a, moving(s)) ⊆ s

Facts that need a faithful action (distinct elements act differently):
- moving(∅) = ⊥
- moving(s) ⊓ moving(sᶜ) = ⊥
- g ≠ 1, g ∈ moving(sᶜ) ⇒ g ∉ moving(s)
- g ∈ moving(s), moved_by(h) ∩ s = ∅ ⇒ g * h = h * g
"""

import logging
from typing import Iterable

from action_universe.act_core.action import FiniteAction
from action_universe.act_core.types import SUBGROUP, Element, Point, PointSet, Substructure

from .fixing import fixed_by, fixing_subgroup, moved_by
from .galois import group_connection

logger = logging.getLogger(__name__)


# =============================================================================
# Definition and characterisation
# =============================================================================


def moving_subgroup(action: FiniteAction, s: Iterable[Point]) -> Substructure:
    """
    Subgroup of elements that fix every point outside s.

    Raises:
        NotAGroupError: If M is only a monoid
    """
    return fixing_subgroup(action, action.complement(s))


def mem_moving_subgroup(action: FiniteAction, m: Element, s: Iterable[Point]) -> bool:
    """moved_by(m) ⊆ s"""
    return moved_by(action, m) <= action.subset(s)


def mem_moving_subgroup_iff(action: FiniteAction, m: Element, s: Iterable[Point]) -> bool:
    """m ∈ moving(s) ⇔ moved_by(m) ⊆ s"""
    return (m in moving_subgroup(action, s)) == mem_moving_subgroup(action, m, s)


def moving_subgroup_compl(action: FiniteAction, s: Iterable[Point]) -> Substructure:
    """moving(sᶜ) = fixing(s), read through the double complement."""
    return moving_subgroup(action, action.complement(s))


def moving_subgroup_inf(action: FiniteAction, s: Iterable[Point], t: Iterable[Point]) -> Substructure:
    """
    moving(s) ⊓ moving(t) = moving(s ∩ t).

    (s ∩ t)ᶜ = sᶜ ∪ tᶜ, and fixing turns that union into an intersection.
    """
    return group_connection(action).lower_sup(action.complement(s), action.complement(t))


def moving_subgroup_sInter(action: FiniteAction, family: Iterable[Iterable[Point]]) -> Substructure:
    """
    moving(⋂ family) = ⨅ moving(sᵢ).

    The empty family intersects to the whole carrier, so its moving
    subgroup is ⊤.
    """
    return group_connection(action).lower_iSup(action.complement(s) for s in family)


def moving_subgroup_univ(action: FiniteAction) -> Substructure:
    """moving(α) = ⊤"""
    return moving_subgroup(action, action.universe())


def moving_subgroup_mono(action: FiniteAction, s: Iterable[Point], t: Iterable[Point]) -> bool:
    """s ⊆ t ⇒ moving(s) ≤ moving(t)"""
    s, t = action.subset(s), action.subset(t)
    if not s <= t:
        return True
    return group_connection(action).check_lower_antitone(action.complement(t), action.complement(s))


# =============================================================================
# Translation and conjugation
# =============================================================================


def smul_set(action: FiniteAction, g: Element, s: Iterable[Point]) -> PointSet:
    """Pointwise translate g • s = {g • x | x ∈ s}."""
    return frozenset(action.act(g, x) for x in s)


def conjugate_substructure(action: FiniteAction, g: Element, h: Substructure) -> Substructure:
    """g · H · g⁻¹"""
    return Substructure(frozenset(action.conjugate(g, m) for m in h), h.kind)


def moving_subgroup_smul(action: FiniteAction, g: Element, s: Iterable[Point]) -> Substructure:
    """
    moving(g • s), computed as the conjugate g · moving(s) · g⁻¹.

    m fixes sᶜ pointwise iff g m g⁻¹ fixes g • sᶜ = (g • s)ᶜ pointwise.
    """
    return conjugate_substructure(action, g, moving_subgroup(action, s))


# =============================================================================
# Orbits
# =============================================================================


def orbit(action: FiniteAction, a: Point, h: Iterable[Element]) -> PointSet:
    """{m • a | m ∈ H}"""
    return frozenset(action.act(m, a) for m in h)


def orbit_moving_subgroup_subset(action: FiniteAction, a: Point, s: Iterable[Point]) -> bool:
    """
    For a ∈ s, the orbit of a under moving(s) stays inside s.

    If g • a ∉ s then g fixes g • a, hence so does g⁻¹, and
    a = g⁻¹ • (g • a) = g • a ∉ s. Points outside s give no condition.
    """
    s = action.subset(s)
    if a not in s:
        return True
    return orbit(action, a, moving_subgroup(action, s)) <= s


# =============================================================================
# Faithful actions
# =============================================================================


def moving_subgroup_empty(action: FiniteAction) -> Substructure:
    """
    moving(∅) = ⊥ for a faithful action.

    Raises:
        NotFaithfulError: If two elements act identically
    """
    action.require_faithful("moving_subgroup_empty")
    return moving_subgroup(action, frozenset())


def moving_subgroup_disjoint_compl(action: FiniteAction, s: Iterable[Point]) -> bool:
    """
    moving(s) ⊓ moving(sᶜ) = ⊥ for a faithful action.

    An element in both fixes sᶜ and s, so it acts as the identity map and
    faithfulness forces it to be 1.
    """
    action.require_faithful("moving_subgroup_disjoint_compl")
    s = action.subset(s)
    both = moving_subgroup(action, s) & moving_subgroup(action, action.complement(s))
    return both == action.trivial(SUBGROUP)


def not_mem_moving_of_mem_moving_compl(action: FiniteAction, g: Element, s: Iterable[Point]) -> bool:
    """
    g ≠ 1 and g ∈ moving(sᶜ) ⇒ g ∉ moving(s), for a faithful action.

    Returns True when the hypotheses do not hold.
    """
    action.require_faithful("not_mem_moving_of_mem_moving_compl")
    s = action.subset(s)
    if g == action.identity or not mem_moving_subgroup(action, g, action.complement(s)):
        return True
    return not mem_moving_subgroup(action, g, s)


def commute_of_disjoint_moved_by(
    action: FiniteAction, g: Element, h: Element, s: Iterable[Point]
) -> bool:
    """
    g ∈ moving(s) and moved_by(h) ∩ s = ∅ ⇒ g * h = h * g, for a faithful action.

    Checked pointwise: g * h and h * g agree on every x, and faithfulness
    turns agreement as maps into equality of elements.
    - x ∈ s: h fixes x (s ⊆ fixed_by(h)); g • x stays in s (g only moves
      points of s, and a point of sᶜ is its own g-image), so h fixes it too.
    - x ∉ s, h • x = x: g fixes x, so both sides are x.
    - x ∉ s, h • x ≠ x: g fixes x, and h • x lies in moved_by(h) ⊆ sᶜ
      (h moves h • x whenever it moves x), so g fixes h • x as well.

    Raises:
        NotFaithfulError: If the action is not faithful
        ValueError: If the hypotheses on g and h do not hold
    """
    action.require_faithful("commute_of_disjoint_moved_by")
    s = action.subset(s)
    if not mem_moving_subgroup(action, g, s):
        raise ValueError(f"{g!r} is not in the moving subgroup of {sorted(s, key=repr)}")
    h_moved = moved_by(action, h)
    if h_moved & s:
        raise ValueError(f"moved_by({h!r}) meets {sorted(s, key=repr)}")

    s_compl = action.complement(s)
    h_fixed = fixed_by(action, h)
    assert s <= h_fixed and h_moved <= s_compl

    for x in action.points:
        gh_x = action.act(g, action.act(h, x))
        hg_x = action.act(h, action.act(g, x))
        if x in s:
            agrees = gh_x == action.act(g, x) and hg_x == action.act(g, x)
        elif x in h_fixed:
            agrees = gh_x == x and hg_x == x
        else:
            agrees = gh_x == action.act(h, x) and hg_x == action.act(h, x)
        if not agrees:
            logger.debug("%s: commute case split fails at %r for g=%r h=%r", action.name, x, g, h)
            return False

    return action.commute(g, h)


# =============================================================================
# Exports
# =============================================================================


__all__ = [
    "moving_subgroup",
    "mem_moving_subgroup",
    "mem_moving_subgroup_iff",
    "moving_subgroup_compl",
    "moving_subgroup_inf",
    "moving_subgroup_sInter",
    "moving_subgroup_univ",
    "moving_subgroup_mono",
    "smul_set",
    "conjugate_substructure",
    "moving_subgroup_smul",
    "orbit",
    "orbit_moving_subgroup_subset",
    "moving_subgroup_empty",
    "moving_subgroup_disjoint_compl",
    "not_mem_moving_of_mem_moving_compl",
    "commute_of_disjoint_moved_by",
]
