"""
Canonical ordering and deterministic hashing of labels.

Provides:
- hash64: 64-bit fingerprint of JSON-like values (receipts)
- canonical_key: total-order key for mixed hashable labels
- canonical_order: labels sorted by canonical_key

Nothing here depends on process state.
No use of Python's built-in hash() (randomised per process for str).
"""

import hashlib
import json
from typing import Any, Hashable, Iterable, List, Tuple, TypeVar

from .types import Hash64

T = TypeVar("T")


def hash64(obj: Any) -> Hash64:
    """
    Fingerprint of a receipt-like value: the first 8 bytes of SHA-256 over
    compact, key-sorted JSON, read as an unsigned big-endian int.

    Sets are written in canonical_order and unknown labels by repr, so
    equal values give equal fingerprints in every process.

    Examples:
        >>> hash64(frozenset({1, 2})) == hash64(frozenset({2, 1}))
        True
    """
    payload = json.dumps(_to_jsonable(obj), sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(payload.encode("utf-8")).digest()
    return Hash64(int.from_bytes(digest[:8], "big"))


def _to_jsonable(obj: Any) -> Any:
    if isinstance(obj, (frozenset, set)):
        return [_to_jsonable(x) for x in canonical_order(obj)]
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    return repr(obj)


def canonical_key(label: Hashable) -> Tuple:
    """
    Total-order key for a label.

    Labels of the same type compare natively (ints numerically, tuples
    lexicographically); labels of different types are grouped by type name.
    Sets have no total order, so they compare by their sorted contents.
    """
    if isinstance(label, (frozenset, set)):
        return (type(label).__name__, tuple(canonical_key(x) for x in canonical_order(label)))
    if isinstance(label, tuple):
        return ("tuple", tuple(canonical_key(x) for x in label))
    if isinstance(label, bool):
        return ("bool", int(label))
    if isinstance(label, (int, float)):
        return ("number", label)
    if isinstance(label, str):
        return ("str", label)
    return (type(label).__name__, repr(label))


def canonical_order(labels: Iterable[T]) -> List[T]:
    """Labels sorted by canonical_key (stable, run-independent)."""
    return sorted(labels, key=canonical_key)
