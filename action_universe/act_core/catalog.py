"""
Concrete finite actions used by the law suite and the tests.

Provides:
- symmetric_group(n): S_n acting naturally on {1..n}
- cyclic_group(n): Z/n acting on itself by rotation
- d4_on_grid(size): the 8 D4 grid symmetries acting on the cells of a square grid
- transformation_monoid(n): all maps {0..n-1} → {0..n-1} (a monoid, not a group)
- regular_action(action): M acting on itself by left multiplication
- kernel_action(n): Z/2 × Z/n acting on Z/n, first factor acting trivially
  (the standard non-faithful example)

Permutations are tuples p with p[i - 1] = image of i; composition applies the
right factor first, so (p * q) • x = p • (q • x).
"""

from itertools import permutations, product
from typing import Callable, Dict, List, Tuple

from .action import FiniteAction

Perm = Tuple[int, ...]
Cell = Tuple[int, int]
Grid = List[List[int]]


# ==============================================================================
# Symmetric and cyclic groups
# ==============================================================================

def perm_from_cycles(n: int, *cycles: Tuple[int, ...]) -> Perm:
    """
    Permutation of {1..n} from disjoint cycle notation.

    Examples:
        >>> perm_from_cycles(3, (2, 3))
        (1, 3, 2)
        >>> perm_from_cycles(3)
        (1, 2, 3)
    """
    image = list(range(1, n + 1))
    for cycle in cycles:
        for i, x in enumerate(cycle):
            image[x - 1] = cycle[(i + 1) % len(cycle)]
    return tuple(image)


def compose_perms(p: Perm, q: Perm) -> Perm:
    """p ∘ q (apply q first)."""
    return tuple(p[q[i] - 1] for i in range(len(q)))


def symmetric_group(n: int) -> FiniteAction:
    """S_n acting naturally on {1..n}."""
    if n < 1:
        raise ValueError(f"symmetric_group needs n >= 1, got {n}")
    points = range(1, n + 1)
    return FiniteAction.from_callables(
        elements=permutations(points),
        points=points,
        mul=compose_perms,
        act=lambda p, x: p[x - 1],
        identity=tuple(points),
        name=f"S{n}",
    )


def cyclic_group(n: int) -> FiniteAction:
    """Z/n acting on itself: k • x = (k + x) mod n."""
    if n < 1:
        raise ValueError(f"cyclic_group needs n >= 1, got {n}")
    return FiniteAction.from_callables(
        elements=range(n),
        points=range(n),
        mul=lambda a, b: (a + b) % n,
        act=lambda a, x: (a + x) % n,
        identity=0,
        name=f"C{n}",
    )


# ==============================================================================
# D4 on grid cells
# ==============================================================================

def rot90(grid: Grid) -> Grid:
    """Rotate 90° clockwise: result[r'][c'] = grid[rows-1-c'][r']."""
    rows, cols = len(grid), len(grid[0])
    return [[grid[rows - 1 - c][r] for c in range(rows)] for r in range(cols)]


def rot180(grid: Grid) -> Grid:
    return [row[::-1] for row in grid[::-1]]


def rot270(grid: Grid) -> Grid:
    """Rotate 270° clockwise: result[r'][c'] = grid[c'][cols-1-r']."""
    rows, cols = len(grid), len(grid[0])
    return [[grid[c][cols - 1 - r] for c in range(rows)] for r in range(cols)]


def flip_h(grid: Grid) -> Grid:
    """Flip horizontal (left-right)."""
    return [row[::-1] for row in grid]


def flip_v(grid: Grid) -> Grid:
    """Flip vertical (top-bottom)."""
    return grid[::-1]


def flip_diag_main(grid: Grid) -> Grid:
    """Transpose."""
    rows, cols = len(grid), len(grid[0])
    return [[grid[r][c] for r in range(rows)] for c in range(cols)]


def flip_diag_anti(grid: Grid) -> Grid:
    rows, cols = len(grid), len(grid[0])
    return [[grid[rows - 1 - c][cols - 1 - r] for c in range(rows)] for r in range(cols)]


D4_TRANSFORMATIONS: Dict[str, Callable[[Grid], Grid]] = {
    "identity": lambda g: g,
    "rot90": rot90,
    "rot180": rot180,
    "rot270": rot270,
    "flip_h": flip_h,
    "flip_v": flip_v,
    "flip_diag_main": flip_diag_main,
    "flip_diag_anti": flip_diag_anti,
}


def cell_map(transform: str, size: int) -> Dict[Cell, Cell]:
    """
    Where each cell's content lands under a grid transformation.

    Transforms a grid whose cells hold their own index, then reads the
    indices back from their new positions.
    """
    labels = [[r * size + c for c in range(size)] for r in range(size)]
    moved = D4_TRANSFORMATIONS[transform](labels)
    mapping: Dict[Cell, Cell] = {}
    for r, row in enumerate(moved):
        for c, label in enumerate(row):
            mapping[divmod(label, size)] = (r, c)
    return mapping


def d4_on_grid(size: int = 2) -> FiniteAction:
    """
    D4 acting on the cells of a size×size grid.

    Composition is read off the cell maps: a * b is the transformation
    whose cell map is map_a ∘ map_b. Needs size >= 2, where the eight
    transformations are pairwise distinct.
    """
    if size < 2:
        raise ValueError(f"d4_on_grid needs size >= 2, got {size}")

    maps = {name: cell_map(name, size) for name in D4_TRANSFORMATIONS}
    by_signature = {tuple(sorted(m.items())): name for name, m in maps.items()}

    def mul(a: str, b: str) -> str:
        composed = {cell: maps[a][maps[b][cell]] for cell in maps[b]}
        return by_signature[tuple(sorted(composed.items()))]

    return FiniteAction.from_callables(
        elements=D4_TRANSFORMATIONS,
        points=product(range(size), repeat=2),
        mul=mul,
        act=lambda name, cell: maps[name][cell],
        identity="identity",
        name=f"D4_grid{size}",
    )


# ==============================================================================
# Monoids, regular and non-faithful actions
# ==============================================================================

def transformation_monoid(n: int) -> FiniteAction:
    """
    Full transformation monoid T_n: every map f: {0..n-1} → {0..n-1},
    stored as the tuple (f(0), ..., f(n-1)), acting by evaluation.

    Not a group for n >= 2 (constant maps have no inverse).
    """
    if n < 1:
        raise ValueError(f"transformation_monoid needs n >= 1, got {n}")
    points = range(n)
    return FiniteAction.from_callables(
        elements=product(points, repeat=n),
        points=points,
        mul=lambda f, g: tuple(f[g[i]] for i in range(n)),
        act=lambda f, x: f[x],
        identity=tuple(points),
        name=f"T{n}",
    )


def regular_action(action: FiniteAction) -> FiniteAction:
    """M acting on its own elements by left multiplication (always faithful)."""
    return FiniteAction(
        elements=action.elements,
        points=action.elements,
        mul_table=action.mul_table,
        act_table=action.mul_table,
        identity=action.identity,
        name=f"regular({action.name})",
    )


def kernel_action(n: int) -> FiniteAction:
    """
    Z/2 × Z/n acting on Z/n by (a, b) • x = (b + x) mod n.

    The element (1, 0) acts as the identity map, so the action is not faithful.
    """
    if n < 1:
        raise ValueError(f"kernel_action needs n >= 1, got {n}")
    return FiniteAction.from_callables(
        elements=product(range(2), range(n)),
        points=range(n),
        mul=lambda p, q: ((p[0] + q[0]) % 2, (p[1] + q[1]) % n),
        act=lambda p, x: (p[1] + x) % n,
        identity=(0, 0),
        name=f"Z2xC{n}_on_C{n}",
    )


CATALOG: Dict[str, Callable[[], FiniteAction]] = {
    "S3": lambda: symmetric_group(3),
    "S4": lambda: symmetric_group(4),
    "C6": lambda: cyclic_group(6),
    "D4_grid2": lambda: d4_on_grid(2),
    "D4_grid3": lambda: d4_on_grid(3),
    "T3": lambda: transformation_monoid(3),
    "regular_S3": lambda: regular_action(symmetric_group(3)),
    "Z2xC3": lambda: kernel_action(3),
}
