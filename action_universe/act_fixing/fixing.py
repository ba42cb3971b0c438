"""
Fixed points and fixing substructures of a finite action.

For an action of M on α:
- fixed_by(m)       = {x ∈ α | m • x = x}
- moved_by(m)       = {x ∈ α | m • x ≠ x}          (complement of fixed_by)
- fixed_points(P)   = {x ∈ α | ∀ p ∈ P, p • x = x}
- fixing(s)         = {m ∈ M | ∀ x ∈ s, m • x = x}

fixing(s) always contains the identity and is closed under composition
(1 • x = x, and m • (n • x) = m • x = x); when M is a group it is also
closed under inversion (m • x = x ⇒ x = m⁻¹ • x). All membership tests are
vectorised over the action table.
"""

from typing import Iterable, Optional, Union

import numpy as np

from action_universe.act_core.action import FiniteAction
from action_universe.act_core.types import (
    SUBGROUP,
    SUBMONOID,
    Element,
    Point,
    PointSet,
    Substructure,
)


# =============================================================================
# Points fixed or moved by elements
# =============================================================================


def _fixed_mask(action: FiniteAction, rows: np.ndarray) -> np.ndarray:
    """Mask over α of points fixed by every element index in rows."""
    fixed = action.act_table[rows] == np.arange(action.degree)
    return fixed.all(axis=0)


def fixed_by(action: FiniteAction, m: Element) -> PointSet:
    """{x | m • x = x}"""
    row = np.array([action.element_index(m)])
    return action.points_from_mask(_fixed_mask(action, row))


def moved_by(action: FiniteAction, m: Element) -> PointSet:
    """{x | m • x ≠ x}"""
    row = np.array([action.element_index(m)])
    return action.points_from_mask(~_fixed_mask(action, row))


def fixed_points(action: FiniteAction, substructure: Union[Substructure, Iterable[Element]]) -> PointSet:
    """
    Points fixed by every element of a substructure.

    The empty family fixes everything, so fixed_points(⊥) is the whole
    carrier (⊥ = {1} and 1 fixes every point).
    """
    rows = np.flatnonzero(action.element_mask(substructure))
    return action.points_from_mask(_fixed_mask(action, rows))


# =============================================================================
# Fixing submonoid / subgroup
# =============================================================================


def fixing_mask(action: FiniteAction, s: Iterable[Point]) -> np.ndarray:
    """Mask over M of elements fixing s pointwise."""
    cols = np.flatnonzero(action.point_mask(s))
    return (action.act_table[:, cols] == cols).all(axis=1)


def fixing_submonoid(action: FiniteAction, s: Iterable[Point]) -> Substructure:
    """
    Submonoid of elements fixing every point of s.

    Examples:
        >>> from action_universe.act_core.catalog import symmetric_group
        >>> fixing_submonoid(symmetric_group(3), {1}).members == frozenset({(1, 2, 3), (1, 3, 2)})
        True
    """
    return Substructure(action.elements_from_mask(fixing_mask(action, s)), SUBMONOID)


def fixing_subgroup(action: FiniteAction, s: Iterable[Point]) -> Substructure:
    """
    Subgroup of elements fixing every point of s.

    Raises:
        NotAGroupError: If M is only a monoid
    """
    action.require_group("fixing_subgroup")
    return Substructure(action.elements_from_mask(fixing_mask(action, s)), SUBGROUP)


def fixing(action: FiniteAction, s: Iterable[Point], kind: Optional[str] = None) -> Substructure:
    """fixing_subgroup for groups, fixing_submonoid otherwise (or as requested)."""
    kind = kind or (SUBGROUP if action.is_group else SUBMONOID)
    if kind == SUBGROUP:
        return fixing_subgroup(action, s)
    return fixing_submonoid(action, s)


def mem_fixing(action: FiniteAction, m: Element, s: Iterable[Point]) -> bool:
    """Pointwise membership: ∀ x ∈ s, m • x = x."""
    return all(action.act(m, x) == x for x in s)


def mem_fixing_iff_subset_fixed_by(action: FiniteAction, m: Element, s: Iterable[Point]) -> bool:
    """m ∈ fixing(s) ⇔ s ⊆ fixed_by(m)"""
    s = action.subset(s)
    return (m in fixing(action, s)) == (s <= fixed_by(action, m))


def stabilizer(action: FiniteAction, x: Point) -> Substructure:
    """Elements fixing the single point x."""
    return fixing(action, [x])


# =============================================================================
# Exports
# =============================================================================


__all__ = [
    "fixed_by",
    "moved_by",
    "fixed_points",
    "fixing_mask",
    "fixing_submonoid",
    "fixing_subgroup",
    "fixing",
    "mem_fixing",
    "mem_fixing_iff_subset_fixed_by",
    "stabilizer",
]
