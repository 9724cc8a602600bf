"""Splitting a list of strings into fixed-size chunks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SplitResult:
    """One chunk of a split."""

    item: list[str] = field(default_factory=list)


class Splitter:
    """Splits data into chunks of split_count items; the last may be shorter."""

    def __init__(self, split_count: int, data: list[str]) -> None:
        if split_count <= 0:
            raise ValueError("split_count must be positive")
        self.split_count = split_count
        self.data = data

    def get_split_result(self) -> list[SplitResult]:
        """Return the chunks in order."""
        n = self.split_count
        return [SplitResult(self.data[i:i + n]) for i in range(0, len(self.data), n)]