"""
act_core: Core primitives for finite actions.

Provides:
- types: Element, Point, PointSet, Substructure
- order_hash: Canonical label order and deterministic hashing (SHA-256)
- action: FiniteAction (tabulated monoid/group action with law validation)
- catalog: S_n, C_n, D4 on grid cells, T_n, regular and non-faithful actions
"""

from .action import ActionLawError, FiniteAction, NotAGroupError, NotFaithfulError
from .types import SUBGROUP, SUBMONOID, Substructure

__all__ = [
    "ActionLawError",
    "FiniteAction",
    "NotAGroupError",
    "NotFaithfulError",
    "SUBGROUP",
    "SUBMONOID",
    "Substructure",
]
