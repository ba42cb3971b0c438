"""
Finite monoid / group actions on finite sets.

A FiniteAction bundles an acting structure M (identity, associative
composition, optional inverses) with a carrier α and an action m • x,
all tabulated as integer numpy arrays:

- mul_table[i, j] = index(e_i * e_j)
- act_table[i, k] = index(e_i • p_k)

Laws checked at construction:
1. Closure: every product / image is a declared label
2. Identity: 1 * m = m * 1 = m
3. Associativity: (a * b) * c = a * (b * c)
4. Action identity: 1 • x = x
5. Compatibility: (m * n) • x = m • (n • x)

A violation raises ActionLawError with the first counterexample. Once
built, every membership question about the action is a table lookup.
"""

import logging
from collections import deque
from typing import Callable, Dict, Final, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .order_hash import canonical_order
from .types import SUBGROUP, SUBMONOID, Element, Point, PointSet, Substructure

logger = logging.getLogger(__name__)

# Above this many elements the O(n^3) associativity scan is skipped
MAX_ASSOCIATIVITY_CHECK: Final[int] = 256


class ActionLawError(ValueError):
    """The supplied tables do not define a monoid action."""


class NotAGroupError(ValueError):
    """A group-only operation was requested on a monoid without inverses."""


class NotFaithfulError(ValueError):
    """A lemma that needs a faithful action was applied to a non-faithful one."""


class FiniteAction:
    """
    A finite monoid (or group) acting on a finite set.

    Table rows and columns follow the order of `elements` and `points` as
    given. from_callables sorts labels by order_hash.canonical_order first,
    so actions built from it have run-independent tables and receipts.

    Args:
        elements: Labels of M
        points: Labels of α
        mul_table: n×n integer table of the composition
        act_table: n×k integer table of the action
        identity: Label of the identity element
        name: Human-readable name used in logs and receipts
        validate: Check the monoid and action laws (default True)

    Raises:
        ActionLawError: If any law fails
        ValueError: If labels repeat or table shapes mismatch
    """

    def __init__(
        self,
        elements: Sequence[Element],
        points: Sequence[Point],
        mul_table,
        act_table,
        identity: Element,
        name: str = "action",
        validate: bool = True,
    ):
        self.name = name
        self.elements: Tuple[Element, ...] = tuple(elements)
        self.points: Tuple[Point, ...] = tuple(points)

        self._element_index: Dict[Element, int] = {e: i for i, e in enumerate(self.elements)}
        self._point_index: Dict[Point, int] = {p: i for i, p in enumerate(self.points)}
        if len(self._element_index) != len(self.elements):
            raise ValueError(f"Duplicate element labels in action '{name}'")
        if len(self._point_index) != len(self.points):
            raise ValueError(f"Duplicate point labels in action '{name}'")
        if not self.elements:
            raise ValueError(f"Action '{name}' needs at least the identity element")

        n, k = len(self.elements), len(self.points)
        self.mul_table = np.asarray(mul_table, dtype=np.intp)
        self.act_table = np.asarray(act_table, dtype=np.intp).reshape(n, k)
        if self.mul_table.shape != (n, n):
            raise ValueError(f"mul_table must be {n}×{n}, got {self.mul_table.shape}")

        self.identity = identity
        self._identity_index = self.element_index(identity)

        if validate:
            self.validate()

        self.inverse_table: Optional[np.ndarray] = self._compute_inverses()
        logger.debug(
            "Built action %s: |M|=%d |α|=%d group=%s",
            name, n, k, self.inverse_table is not None,
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_callables(
        cls,
        elements: Iterable[Element],
        points: Iterable[Point],
        mul: Callable[[Element, Element], Element],
        act: Callable[[Element, Point], Point],
        identity: Element,
        name: str = "action",
        validate: bool = True,
    ) -> "FiniteAction":
        """
        Tabulate Python callables into a FiniteAction.

        Raises:
            ActionLawError: If a product or image falls outside the labels
        """
        element_list = canonical_order(set(elements))
        point_list = canonical_order(set(points))
        e_index = {e: i for i, e in enumerate(element_list)}
        p_index = {p: i for i, p in enumerate(point_list)}

        n, k = len(element_list), len(point_list)
        mul_table = np.empty((n, n), dtype=np.intp)
        act_table = np.empty((n, k), dtype=np.intp)

        for i, a in enumerate(element_list):
            for j, b in enumerate(element_list):
                product = mul(a, b)
                if product not in e_index:
                    raise ActionLawError(
                        f"{name}: product {a!r} * {b!r} = {product!r} is not an element"
                    )
                mul_table[i, j] = e_index[product]
            for j, x in enumerate(point_list):
                image = act(a, x)
                if image not in p_index:
                    raise ActionLawError(
                        f"{name}: image {a!r} • {x!r} = {image!r} is not a point"
                    )
                act_table[i, j] = p_index[image]

        return cls(element_list, point_list, mul_table, act_table, identity, name, validate)

    def validate(self) -> None:
        """
        Check closure, identity, associativity and action laws.

        Raises:
            ActionLawError: Naming the first counterexample found
        """
        n, k = self.order, self.degree
        e = self._identity_index

        if self.mul_table.size and (self.mul_table.min() < 0 or self.mul_table.max() >= n):
            raise ActionLawError(f"{self.name}: mul_table entries must lie in [0, {n})")
        if self.act_table.size and (self.act_table.min() < 0 or self.act_table.max() >= k):
            raise ActionLawError(f"{self.name}: act_table entries must lie in [0, {k})")

        arange_n = np.arange(n)
        bad = np.flatnonzero((self.mul_table[e, :] != arange_n) | (self.mul_table[:, e] != arange_n))
        if bad.size:
            m = self.elements[bad[0]]
            raise ActionLawError(f"{self.name}: identity law fails for {m!r}")

        if n <= MAX_ASSOCIATIVITY_CHECK:
            # left[a, b, c] = (a*b)*c ; right[a, b, c] = a*(b*c)
            left = self.mul_table[self.mul_table]
            right = self.mul_table[arange_n[:, None, None], self.mul_table[None, :, :]]
            bad3 = np.argwhere(left != right)
            if bad3.size:
                a, b, c = (self.elements[i] for i in bad3[0])
                raise ActionLawError(
                    f"{self.name}: associativity fails for ({a!r}, {b!r}, {c!r})"
                )
        else:
            logger.warning(
                "%s: skipping associativity check (|M|=%d > %d)",
                self.name, n, MAX_ASSOCIATIVITY_CHECK,
            )

        bad = np.flatnonzero(self.act_table[e, :] != np.arange(k))
        if bad.size:
            x = self.points[bad[0]]
            raise ActionLawError(f"{self.name}: 1 • {x!r} != {x!r}")

        # left[a, b, x] = (a*b)•x ; right[a, b, x] = a•(b•x)
        left = self.act_table[self.mul_table]
        right = self.act_table[arange_n[:, None, None], self.act_table[None, :, :]]
        bad3 = np.argwhere(left != right)
        if bad3.size:
            i, j, x = bad3[0]
            raise ActionLawError(
                f"{self.name}: compatibility fails for "
                f"({self.elements[i]!r} * {self.elements[j]!r}) • {self.points[x]!r}"
            )

    def _compute_inverses(self) -> Optional[np.ndarray]:
        is_identity = self.mul_table == self._identity_index
        two_sided = is_identity & is_identity.T
        if not two_sided.any(axis=1).all():
            return None
        return np.argmax(two_sided, axis=1)

    # -------------------------------------------------------------------------
    # Labels and masks
    # -------------------------------------------------------------------------

    @property
    def order(self) -> int:
        """|M|"""
        return len(self.elements)

    @property
    def degree(self) -> int:
        """|α|"""
        return len(self.points)

    @property
    def is_group(self) -> bool:
        return self.inverse_table is not None

    def element_index(self, m: Element) -> int:
        try:
            return self._element_index[m]
        except KeyError:
            raise KeyError(f"Unknown element {m!r} in action '{self.name}'") from None

    def point_index(self, x: Point) -> int:
        try:
            return self._point_index[x]
        except KeyError:
            raise KeyError(f"Unknown point {x!r} in action '{self.name}'") from None

    def point_mask(self, s: Iterable[Point]) -> np.ndarray:
        """Boolean mask over α with True exactly on s."""
        mask = np.zeros(self.degree, dtype=bool)
        for x in s:
            mask[self.point_index(x)] = True
        return mask

    def points_from_mask(self, mask: np.ndarray) -> PointSet:
        return frozenset(self.points[i] for i in np.flatnonzero(mask))

    def element_mask(self, members: Iterable[Element]) -> np.ndarray:
        """Boolean mask over M with True exactly on members."""
        mask = np.zeros(self.order, dtype=bool)
        for m in members:
            mask[self.element_index(m)] = True
        return mask

    def elements_from_mask(self, mask: np.ndarray) -> frozenset:
        return frozenset(self.elements[i] for i in np.flatnonzero(mask))

    # -------------------------------------------------------------------------
    # Structure operations
    # -------------------------------------------------------------------------

    def mul(self, m: Element, n: Element) -> Element:
        return self.elements[self.mul_table[self.element_index(m), self.element_index(n)]]

    def act(self, m: Element, x: Point) -> Point:
        return self.points[self.act_table[self.element_index(m), self.point_index(x)]]

    def inv(self, m: Element) -> Element:
        """
        Group inverse.

        Raises:
            NotAGroupError: If M has an element without a two-sided inverse
        """
        self.require_group("inv")
        return self.elements[self.inverse_table[self.element_index(m)]]

    def power(self, m: Element, k: int) -> Element:
        """m^k; negative k needs a group."""
        if k < 0:
            return self.power(self.inv(m), -k)
        result = self.identity
        for _ in range(k):
            result = self.mul(result, m)
        return result

    def conjugate(self, g: Element, m: Element) -> Element:
        """g * m * g⁻¹"""
        return self.mul(self.mul(g, m), self.inv(g))

    def commute(self, g: Element, h: Element) -> bool:
        return self.mul(g, h) == self.mul(h, g)

    def require_group(self, operation: str) -> None:
        if not self.is_group:
            raise NotAGroupError(f"{operation} needs a group, but '{self.name}' is only a monoid")

    def is_faithful(self) -> bool:
        """Distinct elements act as distinct maps on α."""
        if self.degree == 0:
            return self.order == 1
        return len(np.unique(self.act_table, axis=0)) == self.order

    def require_faithful(self, operation: str) -> None:
        if not self.is_faithful():
            raise NotFaithfulError(f"{operation} needs a faithful action, but '{self.name}' is not")

    # -------------------------------------------------------------------------
    # Subsets of α
    # -------------------------------------------------------------------------

    def universe(self) -> PointSet:
        return frozenset(self.points)

    def subset(self, s: Iterable[Point]) -> PointSet:
        """Validate labels and freeze."""
        s = frozenset(s)
        for x in s:
            self.point_index(x)
        return s

    def complement(self, s: Iterable[Point]) -> PointSet:
        return self.universe() - self.subset(s)

    # -------------------------------------------------------------------------
    # Substructures of M
    # -------------------------------------------------------------------------

    def _default_kind(self) -> str:
        return SUBGROUP if self.is_group else SUBMONOID

    def whole(self, kind: Optional[str] = None) -> Substructure:
        """⊤: the whole acting structure."""
        return Substructure(frozenset(self.elements), kind or self._default_kind())

    def trivial(self, kind: Optional[str] = None) -> Substructure:
        """⊥: the identity alone."""
        return Substructure(frozenset([self.identity]), kind or self._default_kind())

    def is_submonoid(self, members: Iterable[Element]) -> bool:
        """Contains the identity and is closed under composition."""
        mask = self.element_mask(members)
        if not mask[self._identity_index]:
            return False
        idx = np.flatnonzero(mask)
        products = self.mul_table[np.ix_(idx, idx)]
        return bool(mask[products].all())

    def is_subgroup(self, members: Iterable[Element]) -> bool:
        """A submonoid that is also closed under inversion."""
        members = frozenset(members)
        if not self.is_group or not self.is_submonoid(members):
            return False
        mask = self.element_mask(members)
        return bool(mask[self.inverse_table[np.flatnonzero(mask)]].all())

    def submonoid_closure(self, generators: Iterable[Element]) -> Substructure:
        """Smallest submonoid containing the generators (BFS on right multiplication)."""
        gen_idx = sorted({self.element_index(g) for g in generators})
        seen = np.zeros(self.order, dtype=bool)
        seen[self._identity_index] = True
        queue = deque([self._identity_index])
        while queue:
            i = queue.popleft()
            for j in gen_idx:
                product = self.mul_table[i, j]
                if not seen[product]:
                    seen[product] = True
                    queue.append(product)
        return Substructure(self.elements_from_mask(seen), SUBMONOID)

    def subgroup_closure(self, generators: Iterable[Element]) -> Substructure:
        """
        Smallest subgroup containing the generators.

        In a finite group the submonoid generated by a set and its inverses
        is already a subgroup.

        Raises:
            NotAGroupError: If M is not a group
        """
        self.require_group("subgroup_closure")
        gens = list(generators)
        gens += [self.inv(g) for g in gens]
        return self.submonoid_closure(gens).as_kind(SUBGROUP)

    def closure(self, generators: Iterable[Element], kind: str) -> Substructure:
        if kind == SUBGROUP:
            return self.subgroup_closure(generators)
        return self.submonoid_closure(generators)

    def sup(self, p: Substructure, q: Substructure) -> Substructure:
        """P ⊔ Q: substructure generated by P ∪ Q."""
        kind = SUBGROUP if p.kind == q.kind == SUBGROUP else SUBMONOID
        return self.closure(p.members | q.members, kind)

    def iSup(self, family: Iterable[Substructure], kind: Optional[str] = None) -> Substructure:
        """⨆ family; the empty family gives ⊥."""
        kind = kind or self._default_kind()
        generators: set = set()
        for p in family:
            generators |= p.members
        return self.closure(generators, kind)

    def iInf(self, family: Iterable[Substructure], kind: Optional[str] = None) -> Substructure:
        """⨅ family; the empty family gives ⊤."""
        result = self.whole(kind)
        for p in family:
            result = Substructure(result.members & p.members, result.kind)
        return result

    def cyclic_substructures(self, kind: Optional[str] = None) -> List[Substructure]:
        """Substructures generated by a single element, deduplicated, in canonical order."""
        kind = kind or self._default_kind()
        seen = {}
        for m in self.elements:
            p = self.closure([m], kind)
            seen.setdefault(p.members, p)
        return list(seen.values())

    def __repr__(self) -> str:
        kind = "group" if self.is_group else "monoid"
        return f"FiniteAction({self.name!r}, {kind} of order {self.order} on {self.degree} points)"
