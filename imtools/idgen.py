"""Snowflake id generation."""

from __future__ import annotations

import threading
import time

EPOCH_MS = 1288834974657
NODE_BITS = 10
STEP_BITS = 12
NODE_MAX = (1 << NODE_BITS) - 1
STEP_MASK = (1 << STEP_BITS) - 1
TIME_SHIFT = NODE_BITS + STEP_BITS
NODE_SHIFT = STEP_BITS


class SnowflakeNode:
    """Generates unique, time-ordered 63-bit ids for one node."""

    def __init__(self, node: int, epoch_ms: int = EPOCH_MS) -> None:
        if not 0 <= node <= NODE_MAX:
            raise ValueError(f"Node number must be between 0 and {NODE_MAX}")
        self.node = node
        self._lock = threading.Lock()
        self._base_ms = time.time_ns() // 1_000_000 - epoch_ms
        self._mono_start = time.monotonic_ns()
        self._time = 0
        self._step = 0

    def _now(self) -> int:
        return self._base_ms + (time.monotonic_ns() - self._mono_start) // 1_000_000

    def generate(self) -> int:
        """Return the next id."""
        with self._lock:
            now = self._now()
            if now == self._time:
                self._step = (self._step + 1) & STEP_MASK
                if self._step == 0:
                    while now <= self._time:
                        now = self._now()
            else:
                self._step = 0
            self._time = now
            return (now << TIME_SHIFT) | (self.node << NODE_SHIFT) | self._step


_ID_GENERATOR = SnowflakeNode(1)


def gen_id() -> str:
    """A new unique id as decimal text."""
    return str(_ID_GENERATOR.generate())