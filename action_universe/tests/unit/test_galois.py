"""
Unit tests for act_fixing/galois.py.

Tests the antitone Galois connection between subsets of the carrier and
substructures of the acting structure:
- The adjunction law s ⊆ fixed_points(P) ⇔ P ≤ fixing(s), exhaustively
- Derived union / sup laws, binary and indexed
- Antitonicity of both maps
- Closure operators (extensive, idempotent)
- The abstraction on a plain toy connection (divisibility), independent of actions
"""

from functools import reduce
from itertools import chain, combinations
from math import gcd

import pytest

from action_universe.act_core.action import NotAGroupError
from action_universe.act_core.catalog import (
    cyclic_group,
    d4_on_grid,
    perm_from_cycles,
    symmetric_group,
    transformation_monoid,
)
from action_universe.act_core.types import SUBGROUP, SUBMONOID
from action_universe.act_fixing.fixing import fixed_points, fixing_submonoid, fixing_subgroup
from action_universe.act_fixing.galois import (
    AntitoneGaloisConnection,
    fixed_points_submonoid_antitone,
    fixed_points_submonoid_iSup,
    fixed_points_submonoid_sup,
    fixed_points_subgroup_antitone,
    fixed_points_subgroup_iSup,
    fixed_points_subgroup_sup,
    fixing_submonoid_antitone,
    fixing_submonoid_iUnion,
    fixing_submonoid_union,
    fixing_subgroup_antitone,
    fixing_subgroup_iUnion,
    fixing_subgroup_union,
    group_connection,
    monoid_connection,
)

SWAP_23 = perm_from_cycles(3, (2, 3))
SWAP_13 = perm_from_cycles(3, (1, 3))


def subsets(points):
    points = sorted(points)
    return [frozenset(c) for c in chain.from_iterable(combinations(points, r) for r in range(len(points) + 1))]


def all_subgroups(action):
    """Every subgroup, found as closures of subsets of at most two generators."""
    found = {}
    for gens in chain.from_iterable(combinations(action.elements, r) for r in range(3)):
        p = action.subgroup_closure(gens)
        found.setdefault(p.members, p)
    return list(found.values())


@pytest.fixture
def s3():
    return symmetric_group(3)


@pytest.fixture
def t2():
    return transformation_monoid(2)


# ============================================================================
# The adjunction
# ============================================================================

class TestAdjunction:

    def test_s3_has_six_subgroups(self, s3):
        assert len(all_subgroups(s3)) == 6

    def test_adjoint_exhaustive_s3(self, s3):
        gc = group_connection(s3)
        for s in subsets(s3.points):
            for p in all_subgroups(s3):
                assert gc.is_adjoint(s, p)
                assert (s <= fixed_points(s3, p)) == (p <= fixing_subgroup(s3, s))

    def test_adjoint_exhaustive_d4(self):
        d4 = d4_on_grid(2)
        gc = group_connection(d4)
        for s in subsets(d4.points):
            for p in all_subgroups(d4):
                assert gc.is_adjoint(s, p)

    def test_adjoint_monoid(self, t2):
        mc = monoid_connection(t2)
        submonoids = [t2.submonoid_closure(g) for g in chain.from_iterable(
            combinations(t2.elements, r) for r in range(3))]
        for s in subsets(t2.points):
            for p in submonoids:
                assert mc.is_adjoint(s, p)

    def test_group_connection_refused_on_monoid(self, t2):
        with pytest.raises(NotAGroupError):
            group_connection(t2)


# ============================================================================
# Derived laws
# ============================================================================

class TestDerivedLaws:

    def test_fixing_subgroup_union(self, s3):
        for s in subsets(s3.points):
            for t in subsets(s3.points):
                derived = fixing_subgroup_union(s3, s, t)
                assert derived == fixing_subgroup(s3, s | t)
                assert derived == fixing_subgroup(s3, s) & fixing_subgroup(s3, t)

    def test_fixing_subgroup_iUnion(self, s3):
        family = [frozenset({1}), frozenset({2})]
        assert fixing_subgroup_iUnion(s3, family) == fixing_subgroup(s3, {1, 2})
        assert fixing_subgroup_iUnion(s3, []) == s3.whole()

    def test_fixing_submonoid_union(self, t2):
        for s in subsets(t2.points):
            for t in subsets(t2.points):
                assert fixing_submonoid_union(t2, s, t) == fixing_submonoid(t2, s | t)

    def test_fixing_submonoid_iUnion(self, t2):
        family = [frozenset({0}), frozenset({1})]
        assert fixing_submonoid_iUnion(t2, family) == fixing_submonoid(t2, t2.universe())
        assert fixing_submonoid_iUnion(t2, []) == t2.whole()

    def test_fixed_points_subgroup_sup(self, s3):
        p = s3.subgroup_closure([SWAP_23])
        q = s3.subgroup_closure([SWAP_13])
        assert fixed_points(s3, p) == frozenset({1})
        assert fixed_points(s3, q) == frozenset({2})
        assert s3.sup(p, q) == s3.whole()
        assert fixed_points_subgroup_sup(s3, p, q) == frozenset()
        assert fixed_points(s3, s3.sup(p, q)) == frozenset()

    def test_fixed_points_subgroup_iSup(self, s3):
        groups = all_subgroups(s3)
        assert fixed_points_subgroup_iSup(s3, groups) == fixed_points(s3, s3.iSup(groups))
        assert fixed_points_subgroup_iSup(s3, []) == s3.universe()

    def test_fixed_points_submonoid_sup(self, t2):
        p = t2.submonoid_closure([(0, 0)])
        q = t2.submonoid_closure([(1, 1)])
        assert fixed_points_submonoid_sup(t2, p, q) == fixed_points(t2, t2.sup(p, q)) == frozenset()
        assert fixed_points_submonoid_iSup(t2, [p]) == frozenset({0})

    def test_antitone(self, s3, t2):
        for s in subsets(s3.points):
            for t in subsets(s3.points):
                assert fixing_subgroup_antitone(s3, s, t)
        for s in subsets(t2.points):
            for t in subsets(t2.points):
                assert fixing_submonoid_antitone(t2, s, t)
        groups = all_subgroups(s3)
        for p in groups:
            for q in groups:
                assert fixed_points_subgroup_antitone(s3, p, q)
        submonoids = [t2.submonoid_closure([f]) for f in t2.elements]
        for p in submonoids:
            for q in submonoids:
                assert fixed_points_submonoid_antitone(t2, p, q)

    def test_closure_operators(self, s3):
        gc = group_connection(s3)
        assert gc.closure_a(frozenset({1})) == frozenset({1})
        # Only the identity fixes both 1 and 2, and it fixes 3 as well
        assert gc.closure_a(frozenset({1, 2})) == s3.universe()
        for s in subsets(s3.points):
            assert gc.check_closure_a(s)
        for p in all_subgroups(s3):
            assert gc.check_closure_b(p)

    def test_a3_is_not_closed(self, s3):
        """A3 fixes no point, so its closure is the whole group."""
        a3 = s3.subgroup_closure([perm_from_cycles(3, (1, 2, 3))])
        gc = group_connection(s3)
        assert gc.closure_b(a3) == s3.whole()

    def test_monoid_connection_on_group_uses_submonoids(self):
        c4 = cyclic_group(4)
        mc = monoid_connection(c4)
        assert mc.lower(frozenset({0})).kind == SUBMONOID
        assert group_connection(c4).lower(frozenset({0})).kind == SUBGROUP


# ============================================================================
# The abstraction on its own
# ============================================================================

class TestGenericConnection:
    """
    Subsets of {1..12} ↔ non-negative integers ordered by divisibility:
    lower(s) = gcd(s) (0 for ∅), upper(d) = {k ∈ 1..12 | d divides k}.
    d divides every element of s iff d divides gcd(s), which is the law.
    """

    UNIVERSE = frozenset(range(1, 13))

    @staticmethod
    def divides(b1, b2):
        if b1 == 0:
            return b2 == 0
        return b2 % b1 == 0

    @pytest.fixture
    def conn(self):
        return AntitoneGaloisConnection(
            lower=lambda s: reduce(gcd, s, 0),
            upper=lambda d: frozenset(k for k in self.UNIVERSE if self.divides(d, k)),
            le_a=lambda s, t: s <= t,
            le_b=self.divides,
            sup_a=lambda s, t: s | t,
            inf_a=lambda s, t: s & t,
            sup_b=lambda b1, b2: b1 * b2 // gcd(b1, b2) if b1 and b2 else 0,
            inf_b=gcd,
            bot_a=frozenset(),
            bot_b=1,
        )

    SETS = [frozenset(), frozenset({4, 8}), frozenset({6, 9}), frozenset({12}), frozenset({5, 7})]
    DIVISORS = [0, 1, 2, 3, 4, 6, 12]

    def test_adjoint(self, conn):
        for s in self.SETS:
            for d in self.DIVISORS:
                assert conn.is_adjoint(s, d)

    def test_lower_sup(self, conn):
        assert conn.lower_sup(frozenset({4, 8}), frozenset({6})) == 2
        for s in self.SETS:
            for t in self.SETS:
                assert conn.check_lower_sup(s, t)
                assert conn.check_lower_antitone(s, t)

    def test_upper_sup(self, conn):
        # multiples of lcm(4, 6) = 12
        assert conn.upper_sup(4, 6) == frozenset({12})
        for b1 in self.DIVISORS:
            for b2 in self.DIVISORS:
                assert conn.check_upper_sup(b1, b2)
                assert conn.check_upper_antitone(b1, b2)

    def test_empty_families(self, conn):
        assert conn.lower_iSup([]) == 0
        assert conn.upper_iSup([]) == self.UNIVERSE
        assert conn.check_lower_iSup(self.SETS)
        assert conn.check_upper_iSup(self.DIVISORS)

    def test_closures(self, conn):
        assert conn.closure_a(frozenset({4, 8})) == frozenset({4, 8, 12})
        # 13 has no multiple in 1..12, and gcd of the empty set is the top (0)
        assert conn.closure_b(13) == 0
        for s in self.SETS:
            assert conn.check_closure_a(s)
