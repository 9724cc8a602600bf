"""A lock-protected dictionary and JSON helpers for option maps."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Hashable, Mapping, MutableMapping
from typing import Any

from imtools.strutil import struct_to_json_string

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


class SyncMap:
    """A dictionary whose operations are safe to use from several threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[Hashable, Any] = {}

    def get(self, key: Hashable) -> Any:
        """Return the value for key, or None."""
        with self._lock:
            return self._data.get(key)

    def set(self, key: Hashable, value: Any) -> None:
        """Store value under key."""
        with self._lock:
            self._data[key] = value

    def test_and_set(self, key: Hashable, value: Any) -> Any:
        """Return the value already under key; if there is none, store value and return None."""
        with self._lock:
            if key in self._data:
                return self._data[key]
            self._data[key] = value
            return None

    def delete(self, key: Hashable) -> None:
        """Remove key if present."""
        with self._lock:
            self._data.pop(key, None)

    def range(self, fn: Callable[[Hashable, Any], None]) -> None:
        """Call fn(key, value) for every entry while holding the lock."""
        with self._lock:
            for key, value in list(self._data.items()):
                fn(key, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data


def map_to_json_string(param: Mapping[str, Any] | None) -> str:
    """Compact JSON with sorted keys; an empty string if it cannot be encoded."""
    return struct_to_json_string(param)


def json_string_to_map(s: str) -> dict[str, int] | None:
    """Parse a JSON object of 32-bit integers.

    Invalid text or "null" gives None; entries that are not 32-bit integers
    are left out.
    """
    try:
        parsed = json.loads(s)
    except (TypeError, ValueError):
        return None
    if not isinstance(parsed, dict):
        return None
    return {
        key: value
        for key, value in parsed.items()
        if isinstance(value, int)
        and not isinstance(value, bool)
        and _INT32_MIN <= value <= _INT32_MAX
    }


def get_switch_from_options(options: Mapping[str, bool] | None, key: str) -> bool:
    """A switch is on unless it is present and explicitly off."""
    if options is None:
        return True
    return options.get(key, True)


def set_switch_from_options(options: MutableMapping[str, bool] | None, key: str, value: bool) -> None:
    """Set a switch in options; a missing mapping is left alone."""
    if options is None:
        return
    options[key] = value