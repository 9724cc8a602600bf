"""Generic helpers for lists, sets and dicts."""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from functools import cmp_to_key
from typing import Any, TypeVar

E = TypeVar("E")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")


def slice_sub(a: list[E], b: Sequence[E]) -> list[E]:
    """Distinct elements of a that are not in b, in order of a.

    When b is empty, a itself is returned unchanged.
    """
    if not b:
        return a
    excluded = set(b)
    seen: set[E] = set()
    result: list[E] = []
    for e in a:
        if e in seen or e in excluded:
            continue
        result.append(e)
        seen.add(e)
    return result


def slice_sub_any(a: list[E], b: Sequence[T], fn: Callable[[T], E]) -> list[E]:
    """Like slice_sub, with b's elements first mapped through fn."""
    return slice_sub(a, map_slice(b, fn))


def slice_any_sub(a: Sequence[E], b: Sequence[E], fn: Callable[[E], K]) -> list[E]:
    """Elements of a whose key (by fn) is not the key of any element of b."""
    excluded = {fn(v) for v in b}
    return [v for v in a if fn(v) not in excluded]


def distinct_any(es: Iterable[E], fn: Callable[[E], K]) -> list[E]:
    """First element for each distinct key, in order."""
    seen: set[K] = set()
    result: list[E] = []
    for e in es:
        k = fn(e)
        if k not in seen:
            seen.add(k)
            result.append(e)
    return result


def distinct_any_get_comparable(es: Iterable[E], fn: Callable[[E], K]) -> list[K]:
    """The distinct keys of es, in order of first appearance."""
    seen: set[K] = set()
    result: list[K] = []
    for e in es:
        k = fn(e)
        if k not in seen:
            seen.add(k)
            result.append(k)
    return result


def distinct(ts: Sequence[E]) -> list[E]:
    """Remove duplicates, keeping the first occurrence of each value."""
    if len(ts) < 2:
        return list(ts)
    if len(ts) == 2:
        return list(ts[:1]) if ts[0] == ts[1] else list(ts)
    return distinct_any(ts, lambda t: t)


def delete(es: Sequence[E], *args: int) -> list[E]:
    """Return es without the elements at the given indexes.

    Negative indexes count from the end. With a single index that is past
    the end, es is returned unchanged; one that is still negative after
    adjustment raises IndexError.
    """
    if not args:
        return list(es)
    if len(args) == 1:
        i = args[0]
        if i < 0:
            i += len(es)
        if len(es) <= i:
            return list(es)
        if i < 0:
            raise IndexError(f"index {args[0]} out of range for length {len(es)}")
        return [*es[:i], *es[i + 1:]]
    drop = {i + len(es) if i < 0 else i for i in args}
    return [e for i, e in enumerate(es) if i not in drop]


def delete_at(es: list[E], *args: int) -> list[E]:
    """Delete the elements at the given indexes from es in place and return it."""
    es[:] = delete(es, *args)
    return es


def index_any(e: E, es: Sequence[E], fn: Callable[[E], K]) -> int:
    """Index of the first element with the same key as e, or -1."""
    k = fn(e)
    return next((i for i, x in enumerate(es) if fn(x) == k), -1)


def index_of(e: E, *args: E) -> int:
    """Index of e among args, or -1."""
    return index_any(e, args, lambda t: t)


def contain(e: E, *args: E) -> bool:
    """Whether e is among args."""
    return index_of(e, *args) >= 0


def duplicate_any(es: Iterable[E], fn: Callable[[E], K]) -> bool:
    """Whether two elements share a key."""
    seen: set[K] = set()
    for e in es:
        k = fn(e)
        if k in seen:
            return True
        seen.add(k)
    return False


def duplicate(es: Iterable[E]) -> bool:
    """Whether es holds a repeated value."""
    return duplicate_any(es, lambda e: e)


def slice_to_map_ok_any(es: Iterable[E], fn: Callable[[E], tuple[K, V, bool]]) -> dict[K, V]:
    """Build a dict from the (key, value) pairs for which fn reports ok."""
    result: dict[K, V] = {}
    for e in es:
        k, v, ok = fn(e)
        if ok:
            result[k] = v
    return result


def slice_to_map_any(es: Iterable[E], fn: Callable[[E], tuple[K, V]]) -> dict[K, V]:
    """Build a dict from the (key, value) pair fn returns for each element."""
    return slice_to_map_ok_any(es, lambda e: (*fn(e), True))


def slice_to_map(es: Iterable[E], fn: Callable[[E], K]) -> dict[K, E]:
    """Map each element's key to the element; later elements win."""
    return slice_to_map_ok_any(es, lambda e: (fn(e), e, True))


def slice_set_any(es: Iterable[E], fn: Callable[[E], K]) -> set[K]:
    """The set of keys of es."""
    return {fn(e) for e in es}


def filter_map(es: Iterable[E], fn: Callable[[E], tuple[T, bool]]) -> list[T]:
    """Mapped values of the elements for which fn reports ok."""
    result: list[T] = []
    for e in es:
        t, ok = fn(e)
        if ok:
            result.append(t)
    return result


def map_slice(es: Iterable[E], fn: Callable[[E], T]) -> list[T]:
    """Apply fn to every element."""
    return [fn(e) for e in es]


def slice_set(es: Iterable[E]) -> set[E]:
    """The set of values in es."""
    return set(es)


def has_key(m: Mapping[K, Any] | None, k: K) -> bool:
    """Whether m holds k; a missing mapping holds nothing."""
    return m is not None and k in m


def min_of(*args: E) -> E:
    """The smallest argument; at least one is required."""
    if not args:
        raise ValueError("min_of needs at least one value")
    return min(args)  # type: ignore[type-var]


def max_of(*args: E) -> E:
    """The largest argument; at least one is required."""
    if not args:
        raise ValueError("max_of needs at least one value")
    return max(args)  # type: ignore[type-var]


def paginate(es: Sequence[E], page_number: int, show_number: int) -> list[E]:
    """The page_number-th page (from 1) of show_number elements."""
    if page_number <= 0 or show_number <= 0:
        return []
    start = (page_number - 1) * show_number
    if start >= len(es):
        return []
    return list(es[start:start + show_number])


def both_exist_any(es: Sequence[Sequence[E]], fn: Callable[[E], K]) -> list[E]:
    """Elements whose key appears in every one of the given lists."""
    if not es:
        return []
    indexed: list[dict[K, E]] = []
    smallest = 0
    for i, group in enumerate(es):
        if not group:
            return []
        kv = {fn(t): t for t in group}
        indexed.append(kv)
        if len(kv) < len(indexed[smallest]):
            smallest = i
    others = [kv for i, kv in enumerate(indexed) if i != smallest]
    return [v for k, v in indexed[smallest].items() if all(k in kv for kv in others)]


def both_exist(*args: Sequence[E]) -> list[E]:
    """Values that appear in every one of the given lists."""
    return both_exist_any(args, lambda e: e)


def complete(a: Sequence[E], b: Sequence[E]) -> bool:
    """Whether a and b hold the same distinct values, ignoring order."""
    return not single(a, b)


def keys(kv: Mapping[K, V]) -> list[K]:
    """The keys of kv."""
    return list(kv)


def values(kv: Mapping[K, V]) -> list[V]:
    """The values of kv."""
    return list(kv.values())


def sort_values(es: list[E], asc: bool) -> list[E]:
    """Sort es in place, ascending or descending, and return it."""
    sort_any(es, (lambda a, b: a < b) if asc else (lambda a, b: a > b))
    return es


def sort_any(es: list[E], fn: Callable[[E, E], bool]) -> None:
    """Sort es in place with fn(a, b) telling whether a goes before b."""

    def compare(a: E, b: E) -> int:
        if fn(a, b):
            return -1
        if fn(b, a):
            return 1
        return 0

    es.sort(key=cmp_to_key(compare))


def choose(isa: bool, a: T, b: T) -> T:
    """a when isa is true, otherwise b."""
    return a if isa else b


def equal(a: Sequence[E], b: Sequence[E]) -> bool:
    """Whether a and b hold equal elements in the same order."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def single(a: Sequence[E], b: Sequence[E]) -> list[E]:
    """Values found in exactly one of a and b."""
    counts: dict[E, int] = {}
    for e in distinct(a):
        counts[e] = counts.get(e, 0) + 1
    for e in distinct(b):
        counts[e] = counts.get(e, 0) + 1
    return [k for k, n in counts.items() if n == 1]


def order(es: Sequence[K], ts: list[T], fn: Callable[[T], K]) -> list[T]:
    """Reorder ts so that their keys follow the order given by es.

    Elements whose key is not in es come last.
    """
    if not es or not ts:
        return ts
    groups: dict[K, list[T]] = {}
    for t in ts:
        groups.setdefault(fn(t), []).append(t)
    result: list[T] = []
    for e in es:
        result.extend(groups.pop(e, ()))
    for rest in groups.values():
        result.extend(rest)
    return result


_HEX = "0123456789abcdef"


def _json_quote(s: str) -> str:
    out = ['"']
    for ch in s:
        code = ord(ch)
        if ch == '"':
            out.append('\\"')
        elif ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif code < 0x20 or ch in "<>&\u2028\u2029":
            out.append("\\u" + "".join(_HEX[(code >> shift) & 0xF] for shift in (12, 8, 4, 0)))
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def unique_join(*args: str) -> str:
    """Join strings unambiguously as a JSON array; no strings give "null"."""
    if not args:
        return "null"
    return "[" + ",".join(_json_quote(s) for s in args) + "]"


def _field_names(obj: Any) -> list[str]:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        names = [f.name for f in dataclasses.fields(obj)]
    elif hasattr(obj, "__dict__"):
        names = list(vars(obj))
    else:
        raise TypeError(f"{type(obj).__name__} has no fields")
    return [name for name in names if not name.startswith("_")]


def _is_struct(value: Any) -> bool:
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value)


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float, complex, str, bytes)):
        return not value
    if _is_struct(value):
        return all(_is_zero(getattr(value, name)) for name in _field_names(value))
    return False


def _merge_struct_list(dest_list: list[Any] | None, src_list: list[Any]) -> list[Any]:
    merged = []
    for j, src_elem in enumerate(src_list):
        new_elem = copy.copy(src_elem)
        for name in _field_names(new_elem):
            if _is_zero(getattr(new_elem, name)):
                if dest_list is None or j >= len(dest_list):
                    raise IndexError(f"destination list has no element {j}")
                setattr(new_elem, name, getattr(dest_list[j], name))
        merged.append(new_elem)
    return merged


def struct_field_not_nil_replace(dest: Any, src: Any) -> None:
    """Copy every non-zero field of src onto dest, in place.

    List fields are taken from src as they are, except lists of dataclass
    instances: each element is copied from src, and its zero fields are
    filled from the element at the same position in dest.
    """
    for name in _field_names(dest):
        if not hasattr(src, name):
            continue
        dest_val = getattr(dest, name)
        src_val = getattr(src, name)
        if isinstance(dest_val, list) or isinstance(src_val, list):
            if isinstance(src_val, list) and any(_is_struct(x) for x in src_val):
                setattr(dest, name, _merge_struct_list(dest_val, src_val))
            else:
                setattr(dest, name, src_val)
        elif not _is_zero(src_val):
            setattr(dest, name, src_val)


def batch(fn: Callable[[T], V], ts: Iterable[T] | None) -> list[V] | None:
    """Apply fn to every element; None stays None."""
    if ts is None:
        return None
    return [fn(t) for t in ts]