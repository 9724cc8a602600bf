"""File system checks and human-readable byte sizes."""

from __future__ import annotations

import os

BYTE = 1
KILOBYTE = 1 << 10
MEGABYTE = 1 << 20
GIGABYTE = 1 << 30
TERABYTE = 1 << 40
PETABYTE = 1 << 50
EXABYTE = 1 << 60

_UNITS = (
    (EXABYTE, "E"),
    (PETABYTE, "P"),
    (TERABYTE, "T"),
    (GIGABYTE, "G"),
    (MEGABYTE, "M"),
    (KILOBYTE, "K"),
    (BYTE, "B"),
)


def is_dir(path: str | os.PathLike[str]) -> bool:
    """Whether path exists and is a directory."""
    return os.path.isdir(path)


def is_file(path: str | os.PathLike[str]) -> bool:
    """Whether path is not a directory (missing paths count as files)."""
    return not is_dir(path)


def mk_dir(path: str | os.PathLike[str]) -> None:
    """Create a directory and its parents; existing directories are fine."""
    os.makedirs(path, exist_ok=True)


def byte_size(size: int) -> str:
    """Format a byte count with a one-letter unit, such as 1.5K."""
    if size < 0:
        raise ValueError("size must not be negative")
    if size == 0:
        return "0"
    for limit, unit in _UNITS:
        if size >= limit:
            text = format(size / limit, ".1f")
            return text.removesuffix(".0") + unit
    return "0"