"""
Exhaustive law checking for finite actions.

Every statement about fixing / moving substructures is restated as a boolean
checker over a concrete action. verify_laws() runs all of them over every
subset of the carrier (and over pairs of subsets, sampled when there are
too many) and returns a LawReceipt.

Laws that need a group or a faithful action are skipped, and recorded as
skipped, when the action does not provide that structure. A failing law is
recorded with a witness; checkers never raise for a law that does not hold.
"""

import logging
from dataclasses import asdict, dataclass, field
from itertools import chain, combinations
from typing import Dict, Final, Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from action_universe.act_core.action import FiniteAction
from action_universe.act_core.order_hash import canonical_order, hash64
from action_universe.act_core.types import SUBGROUP, SUBMONOID, Element, Point, PointSet, Substructure

from .fixing import fixed_points, fixing, mem_fixing, mem_fixing_iff_subset_fixed_by, moved_by
from .galois import AntitoneGaloisConnection, group_connection, monoid_connection
from .moving import (
    commute_of_disjoint_moved_by,
    mem_moving_subgroup,
    mem_moving_subgroup_iff,
    moving_subgroup,
    moving_subgroup_compl,
    moving_subgroup_disjoint_compl,
    moving_subgroup_empty,
    moving_subgroup_inf,
    moving_subgroup_mono,
    moving_subgroup_sInter,
    moving_subgroup_smul,
    moving_subgroup_univ,
    not_mem_moving_of_mem_moving_compl,
    orbit_moving_subgroup_subset,
    smul_set,
)

logger = logging.getLogger(__name__)

# Carriers larger than this are not enumerated (2^n subsets)
MAX_EXHAUSTIVE_POINTS: Final[int] = 10

# Pairs of subsets beyond this count are sampled
MAX_PAIR_CHECKS: Final[int] = 16384

# Witnesses kept per receipt
MAX_RECORDED_FAILURES: Final[int] = 50

DEFAULT_SEED: Final[int] = 0


# =============================================================================
# Receipt
# =============================================================================


@dataclass
class LawReceipt:
    """
    Result of verify_laws for one action.

    {
        "action": "S3",
        "checks": {"fixing_union": 64, ...},
        "failures": [],
        "skipped": ["moving_empty"],
        "passed": true
    }
    """
    action: str
    n_elements: int
    n_points: int
    is_group: bool
    is_faithful: bool
    checks: Dict[str, int] = field(default_factory=dict)
    failure_counts: Dict[str, int] = field(default_factory=dict)
    failures: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failure_counts

    @property
    def total_checks(self) -> int:
        return sum(self.checks.values())

    def record(self, law: str, ok: bool, witness: object = None) -> None:
        self.checks[law] = self.checks.get(law, 0) + 1
        if not ok:
            self.failure_counts[law] = self.failure_counts.get(law, 0) + 1
            if len(self.failures) < MAX_RECORDED_FAILURES:
                self.failures.append(f"{law}: {witness!r}")

    def skip(self, law: str) -> None:
        if law not in self.skipped:
            self.skipped.append(law)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["passed"] = self.passed
        data["total_checks"] = self.total_checks
        data["fingerprint"] = hash64({k: v for k, v in data.items() if k != "fingerprint"})
        return data


# =============================================================================
# Enumeration helpers
# =============================================================================


def all_subsets(points: Sequence[Point]) -> List[PointSet]:
    """Every subset of points, smallest first, in canonical order."""
    ordered = canonical_order(points)
    return [
        frozenset(c)
        for c in chain.from_iterable(combinations(ordered, r) for r in range(len(ordered) + 1))
    ]


def subset_pairs(
    subsets: Sequence[PointSet], limit: int = MAX_PAIR_CHECKS, seed: int = DEFAULT_SEED
) -> Iterator[Tuple[PointSet, PointSet]]:
    """All ordered pairs, or a seeded sample of `limit` pairs when there are more."""
    n = len(subsets)
    if n * n <= limit:
        for s in subsets:
            for t in subsets:
                yield s, t
        return
    rng = np.random.default_rng(seed)
    for i, j in rng.integers(0, n, size=(limit, 2)):
        yield subsets[i], subsets[j]


def candidate_substructures(action: FiniteAction, kind: str, subsets: Iterable[PointSet]) -> List[Substructure]:
    """
    Substructures used to exercise the Galois law: cyclic ones, joins of
    two cyclic ones, and every fixing substructure.
    """
    seen: Dict[frozenset, Substructure] = {}
    cyclic = action.cyclic_substructures(kind)
    for p in cyclic:
        seen.setdefault(p.members, p)
    for p, q in combinations(cyclic, 2):
        joined = action.sup(p, q)
        seen.setdefault(joined.members, joined)
    for s in subsets:
        p = fixing(action, s, kind)
        seen.setdefault(p.members, p)
    return list(seen.values())


# =============================================================================
# Single-statement checkers
# =============================================================================


def check_identity_in_fixing(action: FiniteAction, s: PointSet) -> bool:
    return action.identity in fixing(action, s)


def check_fixing_closed(action: FiniteAction, s: PointSet) -> bool:
    """fixing(s) is a submonoid, and a subgroup when M is a group."""
    members = fixing(action, s).members
    if action.is_group:
        return action.is_subgroup(members)
    return action.is_submonoid(members)


def check_mem_fixing_iff(action: FiniteAction, s: PointSet) -> bool:
    """m ∈ fixing(s) ⇔ s ⊆ fixed_by(m) ⇔ ∀ x ∈ s, m • x = x"""
    p = fixing(action, s)
    return all(
        mem_fixing_iff_subset_fixed_by(action, m, s) and (m in p) == mem_fixing(action, m, s)
        for m in action.elements
    )


def check_fixing_union(action: FiniteAction, s: PointSet, t: PointSet) -> bool:
    """fixing(s ∪ t) == fixing(s) ∩ fixing(t)"""
    return fixing(action, s | t) == fixing(action, s) & fixing(action, t)


def check_moving_compl(action: FiniteAction, s: PointSet) -> bool:
    """moving(sᶜ) == fixing(s)"""
    return moving_subgroup_compl(action, s) == fixing(action, s, SUBGROUP)


def check_mem_moving_iff(action: FiniteAction, s: PointSet) -> bool:
    """m ∈ moving(s) ⇔ moved_by(m) ⊆ s"""
    return all(mem_moving_subgroup_iff(action, m, s) for m in action.elements)


def check_moving_inf(action: FiniteAction, s: PointSet, t: PointSet) -> bool:
    """moving(s) ∩ moving(t) == moving(s ∩ t)"""
    direct = moving_subgroup(action, s) & moving_subgroup(action, t)
    return direct == moving_subgroup(action, s & t) == moving_subgroup_inf(action, s, t)


def check_moving_sInter(action: FiniteAction, family: Sequence[PointSet]) -> bool:
    """moving(⋂ family) == ⋂ moving(sᵢ)"""
    inter = action.universe()
    for s in family:
        inter = inter & s
    return moving_subgroup(action, inter) == moving_subgroup_sInter(action, family)


def check_moving_univ(action: FiniteAction) -> bool:
    return moving_subgroup_univ(action) == action.whole(SUBGROUP)


def check_moving_empty(action: FiniteAction) -> bool:
    return moving_subgroup_empty(action) == action.trivial(SUBGROUP)


def check_fixing_disjoint_compl(action: FiniteAction, s: PointSet) -> bool:
    """fixing(s) ∩ fixing(sᶜ) == {1}, and the moving-subgroup form of the same fact."""
    direct = fixing(action, s) & fixing(action, action.complement(s))
    return direct == action.trivial(SUBGROUP) and moving_subgroup_disjoint_compl(action, s)


def check_moving_smul(action: FiniteAction, g: Element, s: PointSet) -> bool:
    """moving(g • s) == g · moving(s) · g⁻¹"""
    return moving_subgroup(action, smul_set(action, g, s)) == moving_subgroup_smul(action, g, s)


def check_orbit(action: FiniteAction, a: Point, s: PointSet) -> bool:
    """For a ∈ s: every g with moved_by(g) ⊆ s has g • a ∈ s."""
    if a not in s:
        return True
    by_support = all(
        action.act(g, a) in s
        for g in action.elements
        if moved_by(action, g) <= s
    )
    return by_support and orbit_moving_subgroup_subset(action, a, s)


def check_commute(action: FiniteAction, g: Element, h: Element, s: PointSet) -> bool:
    """g ∈ moving(s), moved_by(h) ∩ s = ∅ ⇒ g * h == h * g; vacuous otherwise."""
    if not mem_moving_subgroup(action, g, s) or moved_by(action, h) & s:
        return True
    return commute_of_disjoint_moved_by(action, g, h, s)


def check_connection(
    connection: AntitoneGaloisConnection, receipt: LawReceipt, prefix: str,
    subsets: Sequence[PointSet], candidates: Sequence[Substructure], seed: int,
) -> None:
    """Run every law of an antitone Galois connection and record the outcomes."""
    for s in subsets:
        for p in candidates:
            receipt.record(f"{prefix}.adjoint", connection.is_adjoint(s, p), (s, p))
        receipt.record(f"{prefix}.closure_points", connection.check_closure_a(s), s)

    for s, t in subset_pairs(subsets, seed=seed):
        receipt.record(f"{prefix}.lower_antitone", connection.check_lower_antitone(s, t), (s, t))
        receipt.record(f"{prefix}.lower_sup", connection.check_lower_sup(s, t), (s, t))

    singletons = [s for s in subsets if len(s) == 1]
    receipt.record(f"{prefix}.lower_iSup", connection.check_lower_iSup(singletons), "singletons")
    receipt.record(f"{prefix}.lower_iSup", connection.check_lower_iSup([]), "empty family")

    for p in candidates:
        receipt.record(f"{prefix}.closure_substructure", connection.check_closure_b(p), p)
        for q in candidates:
            receipt.record(f"{prefix}.upper_antitone", connection.check_upper_antitone(p, q), (p, q))
            receipt.record(f"{prefix}.upper_sup", connection.check_upper_sup(p, q), (p, q))

    receipt.record(f"{prefix}.upper_iSup", connection.check_upper_iSup(candidates), "candidates")
    receipt.record(f"{prefix}.upper_iSup", connection.check_upper_iSup([]), "empty family")
    receipt.record(
        f"{prefix}.fixed_points_bot",
        connection.upper(connection.bot_b) == frozenset(subsets[-1]) if subsets else True,
        connection.bot_b,
    )


# =============================================================================
# Entry point
# =============================================================================


def verify_laws(
    action: FiniteAction,
    max_points: int = MAX_EXHAUSTIVE_POINTS,
    seed: int = DEFAULT_SEED,
) -> LawReceipt:
    """
    Check every fixing / moving law on an action.

    Args:
        action: The action to check
        max_points: Refuse carriers with more points than this
        seed: Seed for sampling subset pairs on larger carriers

    Returns:
        LawReceipt with per-law check counts, failures and skipped laws

    Raises:
        ValueError: If the carrier is too large to enumerate
    """
    if action.degree > max_points:
        raise ValueError(
            f"{action.name}: {action.degree} points exceeds max_points={max_points}"
        )

    faithful = action.is_faithful()
    receipt = LawReceipt(
        action=action.name,
        n_elements=action.order,
        n_points=action.degree,
        is_group=action.is_group,
        is_faithful=faithful,
    )
    subsets = all_subsets(action.points)
    logger.info(
        "%s: checking laws over %d subsets (group=%s, faithful=%s)",
        action.name, len(subsets), action.is_group, faithful,
    )

    # Fixing submonoid / subgroup
    receipt.record("fixing_empty_top", fixing(action, frozenset()) == action.whole(), action.name)
    receipt.record(
        "fixed_points_bot", fixed_points(action, action.trivial()) == action.universe(), action.name
    )
    for s in subsets:
        receipt.record("identity_in_fixing", check_identity_in_fixing(action, s), s)
        receipt.record("fixing_closed", check_fixing_closed(action, s), s)
        receipt.record("mem_fixing_iff", check_mem_fixing_iff(action, s), s)
    for s, t in subset_pairs(subsets, seed=seed):
        receipt.record("fixing_union", check_fixing_union(action, s, t), (s, t))

    # Galois connections, once per kind of substructure
    kinds = [SUBMONOID, SUBGROUP] if action.is_group else [SUBMONOID]
    for kind in kinds:
        connection = group_connection(action) if kind == SUBGROUP else monoid_connection(action)
        candidates = candidate_substructures(action, kind, subsets)
        logger.debug("%s: %d candidate %ss", action.name, len(candidates), kind)
        check_connection(connection, receipt, f"galois_{kind}", subsets, candidates, seed)

    group_laws = [
        "moving_compl", "mem_moving_iff", "moving_univ", "moving_inf", "moving_mono",
        "moving_sInter", "moving_smul", "orbit",
    ]
    faithful_laws = ["moving_empty", "fixing_disjoint_compl", "not_mem_moving", "commute"]

    if not action.is_group:
        for law in group_laws + faithful_laws:
            receipt.skip(law)
        _log_receipt(receipt)
        return receipt

    # Moving subgroup
    receipt.record("moving_univ", check_moving_univ(action), action.name)
    receipt.record("moving_sInter", check_moving_sInter(action, []), "empty family")
    for s in subsets:
        receipt.record("moving_compl", check_moving_compl(action, s), s)
        receipt.record("mem_moving_iff", check_mem_moving_iff(action, s), s)
        for g in action.elements:
            receipt.record("moving_smul", check_moving_smul(action, g, s), (g, s))
        for a in s:
            receipt.record("orbit", check_orbit(action, a, s), (a, s))
    for s, t in subset_pairs(subsets, seed=seed):
        receipt.record("moving_inf", check_moving_inf(action, s, t), (s, t))
        receipt.record("moving_mono", moving_subgroup_mono(action, s, t), (s, t))
        receipt.record("moving_sInter", check_moving_sInter(action, [s, t]), (s, t))

    if not faithful:
        for law in faithful_laws:
            receipt.skip(law)
        _log_receipt(receipt)
        return receipt

    # Faithful action
    receipt.record("moving_empty", check_moving_empty(action), action.name)
    for s in subsets:
        receipt.record("fixing_disjoint_compl", check_fixing_disjoint_compl(action, s), s)
        moving_s = moving_subgroup(action, s)
        for g in action.elements:
            receipt.record("not_mem_moving", not_mem_moving_of_mem_moving_compl(action, g, s), (g, s))
        for g in moving_s:
            for h in action.elements:
                if moved_by(action, h) & s:
                    continue
                receipt.record("commute", commute_of_disjoint_moved_by(action, g, h, s), (g, h, s))

    _log_receipt(receipt)
    return receipt


def _log_receipt(receipt: LawReceipt) -> None:
    if receipt.passed:
        logger.info("%s: PASS (%d checks)", receipt.action, receipt.total_checks)
    else:
        logger.error(
            "%s: FAIL %s", receipt.action,
            ", ".join(f"{law}×{n}" for law, n in sorted(receipt.failure_counts.items())),
        )


# =============================================================================
# Exports
# =============================================================================


__all__ = [
    "LawReceipt",
    "all_subsets",
    "subset_pairs",
    "candidate_substructures",
    "check_identity_in_fixing",
    "check_fixing_closed",
    "check_mem_fixing_iff",
    "check_fixing_union",
    "check_moving_compl",
    "check_mem_moving_iff",
    "check_moving_inf",
    "check_moving_sInter",
    "check_moving_univ",
    "check_moving_empty",
    "check_fixing_disjoint_compl",
    "check_moving_smul",
    "check_orbit",
    "check_commute",
    "check_connection",
    "verify_laws",
]
