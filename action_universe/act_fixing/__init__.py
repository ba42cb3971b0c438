"""
Fixing and moving substructures of finite actions.

Modules:
- fixing.py: fixed_by, moved_by, fixed_points, fixing_submonoid, fixing_subgroup
- galois.py: AntitoneGaloisConnection and its monoid/group instantiations
- moving.py: moving_subgroup, conjugation, orbits, faithful-action lemmas
- laws.py: exhaustive law checks and LawReceipt
"""

from .fixing import (
    fixed_by,
    fixed_points,
    fixing,
    fixing_submonoid,
    fixing_subgroup,
    moved_by,
    stabilizer,
)
from .galois import AntitoneGaloisConnection, group_connection, monoid_connection
from .moving import moving_subgroup, orbit, smul_set
from .laws import LawReceipt, verify_laws

__all__ = [
    "fixed_by",
    "fixed_points",
    "fixing",
    "fixing_submonoid",
    "fixing_subgroup",
    "moved_by",
    "stabilizer",
    "AntitoneGaloisConnection",
    "group_connection",
    "monoid_connection",
    "moving_subgroup",
    "orbit",
    "smul_set",
    "LawReceipt",
    "verify_laws",
]
