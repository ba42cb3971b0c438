"""
Unit tests for act_fixing/fixing.py.

Covers:
- fixed_by / moved_by are complementary
- fixed_points of ⊥ is the whole carrier
- fixing_submonoid / fixing_subgroup membership, identity, closure
- Known answers for S3 on {1, 2, 3} and D4 on a 2×2 grid
- Monoid-only actions: fixing_subgroup refuses, fixing_submonoid works
"""

import doctest
import importlib
from itertools import chain, combinations

import pytest

from action_universe.act_core.action import NotAGroupError
from action_universe.act_core.catalog import (
    d4_on_grid,
    perm_from_cycles,
    symmetric_group,
    transformation_monoid,
)
from action_universe.act_core.types import SUBGROUP, SUBMONOID
from action_universe.act_fixing.fixing import (
    fixed_by,
    fixed_points,
    fixing,
    fixing_submonoid,
    fixing_subgroup,
    mem_fixing,
    mem_fixing_iff_subset_fixed_by,
    moved_by,
    stabilizer,
)

ID3 = (1, 2, 3)
SWAP_23 = perm_from_cycles(3, (2, 3))
SWAP_13 = perm_from_cycles(3, (1, 3))
CYCLE_123 = perm_from_cycles(3, (1, 2, 3))


def subsets(points):
    points = sorted(points)
    return [frozenset(c) for c in chain.from_iterable(combinations(points, r) for r in range(len(points) + 1))]


@pytest.fixture
def s3():
    return symmetric_group(3)


@pytest.fixture
def t3():
    return transformation_monoid(3)


class TestFixedAndMoved:

    def test_fixed_by_transposition(self, s3):
        assert fixed_by(s3, SWAP_23) == frozenset({1})
        assert moved_by(s3, SWAP_23) == frozenset({2, 3})

    def test_identity_moves_nothing(self, s3):
        assert fixed_by(s3, ID3) == s3.universe()
        assert moved_by(s3, ID3) == frozenset()

    def test_complementary(self, s3):
        for m in s3.elements:
            assert fixed_by(s3, m) | moved_by(s3, m) == s3.universe()
            assert not fixed_by(s3, m) & moved_by(s3, m)

    def test_three_cycle_fixes_nothing(self, s3):
        assert fixed_by(s3, CYCLE_123) == frozenset()

    def test_fixed_points_of_trivial_is_everything(self, s3):
        assert fixed_points(s3, s3.trivial()) == s3.universe()

    def test_fixed_points_of_whole_group(self, s3):
        assert fixed_points(s3, s3.whole()) == frozenset()

    def test_fixed_points_of_plain_iterable(self, s3):
        assert fixed_points(s3, [ID3, SWAP_23]) == frozenset({1})


class TestFixingSubgroup:

    def test_stabilizer_of_1(self, s3):
        """Stabilizer of 1 in S3 is {id, (2 3)}."""
        assert fixing_subgroup(s3, {1}).members == frozenset({ID3, SWAP_23})

    def test_fixing_two_points(self, s3):
        assert fixing_subgroup(s3, {2, 3}).members == frozenset({ID3})

    def test_fixing_empty_is_whole(self, s3):
        assert fixing_subgroup(s3, set()) == s3.whole()

    def test_kind(self, s3):
        assert fixing_subgroup(s3, {1}).kind == SUBGROUP
        assert fixing_submonoid(s3, {1}).kind == SUBMONOID
        assert fixing(s3, {1}).kind == SUBGROUP

    def test_identity_always_member(self, s3):
        for s in subsets(s3.points):
            assert ID3 in fixing_subgroup(s3, s)

    def test_closed_under_group_operations(self, s3):
        for s in subsets(s3.points):
            assert s3.is_subgroup(fixing_subgroup(s3, s).members)

    def test_membership_matches_pointwise_definition(self, s3):
        for s in subsets(s3.points):
            p = fixing_subgroup(s3, s)
            for m in s3.elements:
                assert (m in p) == mem_fixing(s3, m, s)
                assert (m in p) == (s <= fixed_by(s3, m))

    def test_membership_iff_subset_of_fixed_by(self, s3):
        assert mem_fixing_iff_subset_fixed_by(s3, SWAP_23, {1})
        assert mem_fixing_iff_subset_fixed_by(s3, SWAP_23, {1, 2})
        for s in subsets(s3.points):
            for m in s3.elements:
                assert mem_fixing_iff_subset_fixed_by(s3, m, s)

    def test_membership_iff_on_monoid(self, t3):
        for s in subsets(t3.points):
            for f in t3.elements:
                assert mem_fixing_iff_subset_fixed_by(t3, f, s)

    def test_stabilizer(self, s3):
        assert stabilizer(s3, 1) == fixing_subgroup(s3, {1})

    def test_unknown_point(self, s3):
        with pytest.raises(KeyError):
            fixing_subgroup(s3, {4})

    def test_d4_corner_stabilizer(self):
        d4 = d4_on_grid(2)
        assert fixing_subgroup(d4, {(0, 0)}).members == frozenset({"identity", "flip_diag_main"})
        assert fixing_subgroup(d4, {(0, 1)}).members == frozenset({"identity", "flip_diag_anti"})
        assert fixing_subgroup(d4, {(0, 0), (0, 1)}) == d4.trivial()


class TestFixingSubmonoid:

    def test_subgroup_refused_on_monoid(self, t3):
        with pytest.raises(NotAGroupError):
            fixing_subgroup(t3, {0})

    def test_fixing_submonoid_of_point(self, t3):
        p = fixing_submonoid(t3, {0})
        assert len(p) == 9
        assert all(f[0] == 0 for f in p)
        assert t3.is_submonoid(p.members)

    def test_fixing_defaults_to_submonoid(self, t3):
        assert fixing(t3, {0}).kind == SUBMONOID

    def test_closed_under_composition(self, t3):
        for s in subsets(t3.points):
            p = fixing_submonoid(t3, s)
            assert t3.identity in p
            assert t3.is_submonoid(p.members)

    def test_fixing_everything(self, t3):
        assert fixing_submonoid(t3, t3.universe()).members == frozenset({t3.identity})

    def test_constant_maps_fix_only_their_value(self, t3):
        assert fixed_by(t3, (1, 1, 1)) == frozenset({1})
        assert moved_by(t3, (1, 1, 1)) == frozenset({0, 2})


class TestDocExamples:

    def test_fixing_module_examples(self):
        # The package re-exports a function named `fixing`, so load the module itself
        module = importlib.import_module("action_universe.act_fixing.fixing")
        results = doctest.testmod(module)
        assert results.attempted > 0
        assert results.failed == 0
