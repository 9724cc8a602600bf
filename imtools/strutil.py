"""String, id and conversation helpers."""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
import random
import re
import sys
import time
import zlib
from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from imtools.encryption import md5

T = TypeVar("T", bound=Hashable)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def string_to_int64(s: str) -> int:
    """Parse a base-10 integer; invalid text gives 0, overflow is clamped."""
    if not _INT_RE.fullmatch(s):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(s)))


def string_to_int(s: str) -> int:
    """Parse a base-10 integer; invalid text gives 0."""
    return string_to_int64(s)


def string_to_int32(s: str) -> int:
    """Parse as a 64-bit integer, then truncate to 32 bits."""
    value = string_to_int64(s)
    return ((value + (1 << 31)) % (1 << 32)) - (1 << 31)


def is_contain(target: Any, items: Iterable[Any]) -> bool:
    """Whether target is among items."""
    return any(target == item for item in items)


def _to_jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if not f.name.startswith("_")
        }
    if isinstance(value, Mapping):
        items = []
        for key, item in value.items():
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                raise TypeError(f"unsupported map key type {type(key).__name__}")
            items.append((str(key), _to_jsonable(item)))
        return dict(sorted(items))
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    raise TypeError(f"unsupported type {type(value).__name__}")


_HTML_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026", "\u2028": "\\u2028", "\u2029": "\\u2029"}


def struct_to_json_string(param: Any) -> str:
    """Compact JSON for param; an empty string if it cannot be encoded."""
    try:
        text = json.dumps(
            _to_jsonable(param), ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
    except (TypeError, ValueError):
        return ""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


def json_string_to_struct(s: str) -> Any:
    """Parse JSON text; raises ValueError if it is invalid."""
    return json.loads(s)


def get_msg_id(send_id: str) -> str:
    """A random message id derived from the time and the sender."""
    now = time.time_ns()
    return md5(str(now) + send_id + str(random.randrange(max(now, 1))))


def remove_duplicate_element(id_list: Iterable[str]) -> list[str]:
    """Remove repeated strings, keeping first occurrences."""
    return remove_duplicate(id_list)


def remove_duplicate(arr: Iterable[T]) -> list[T]:
    """Remove repeated values, keeping first occurrences."""
    return list(dict.fromkeys(arr))


def is_duplicate_string_slice(arr: Iterable[str]) -> bool:
    """Whether a string occurs more than once."""
    seen: set[str] = set()
    for s in arr:
        if s in seen:
            return True
        seen.add(s)
    return False


def base64_encode(data: str) -> str:
    """Standard base64 of the UTF-8 bytes of data."""
    return base64.b64encode(data.encode("utf-8")).decode("ascii")


def base64_decode(data: str) -> str:
    """Decode standard base64; decoding stops at the first corrupt group."""
    cleaned = data.replace("\r", "").replace("\n", "")
    out = bytearray()
    for start in range(0, len(cleaned), 4):
        chunk = cleaned[start:start + 4]
        if len(chunk) < 4:
            break
        try:
            out += base64.b64decode(chunk, validate=True)
        except (binascii.Error, ValueError):
            break
        if "=" in chunk:
            break
    return out.decode("utf-8", errors="replace")


def intersect(slice1: Iterable[T], slice2: Iterable[T]) -> list[T]:
    """Elements of slice2 that also occur in slice1, in order of slice2."""
    present = set(slice1)
    return [v for v in slice2 if v in present]


def difference(slice1: Sequence[T], slice2: Sequence[T]) -> list[T]:
    """Elements of either list that are not in both, slice1's first."""
    common = set(intersect(slice1, slice2))
    return [v for v in slice1 if v not in common] + [v for v in slice2 if v not in common]


def operation_id_generator() -> str:
    """A numeric operation id from the current time plus a random offset."""
    return str(time.time_ns() + random.getrandbits(32))


def get_hash_code(s: str) -> int:
    """CRC-32 (IEEE) of the UTF-8 bytes of s."""
    return zlib.crc32(s.encode("utf-8"))


def gen_conversation_id_for_single(send_id: str, recv_id: str) -> str:
    return "si_" + "_".join(sorted((send_id, recv_id)))


def gen_conversation_unique_key_for_group(group_id: str) -> str:
    """The unique key of a group conversation: the group id as text."""
    return str(group_id)


def gen_group_conversation_id(group_id: str) -> str:
    return "sg_" + group_id


def gen_conversation_unique_key_for_single(send_id: str, recv_id: str) -> str:
    return "_".join(sorted((send_id, recv_id)))


def get_notification_conversation_id_by_conversation_id(conversation_id: str) -> str:
    """Replace the conversation id's prefix with "n"; "" if it has none."""
    parts = conversation_id.split("_")
    if len(parts) > 1:
        return "_".join(["n", *parts[1:]])
    return ""


def get_self_notification_conversation_id(user_id: str) -> str:
    return "n_" + user_id + "_" + user_id


def get_seqs_begin_end(seqs: Sequence[int]) -> tuple[int, int]:
    """The first and last sequence numbers, or (0, 0) for none."""
    if not seqs:
        return 0, 0
    return seqs[0], seqs[-1]


def get_self_func_name() -> str:
    """Name of the function that calls this one."""
    return sys._getframe(1).f_code.co_name


def get_func_name(skip: int = 0) -> str:
    """Name of the caller, or of a function skip frames further up; "" if none."""
    try:
        return sys._getframe(skip + 1).f_code.co_name
    except ValueError:
        return ""