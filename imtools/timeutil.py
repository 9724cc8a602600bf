"""Timestamps and date formatting."""

from __future__ import annotations

import re
import time
from datetime import date, datetime, timedelta, timezone

TIME_OFFSET = 8 * 3600
HALF_OFFSET = 12 * 3600

# Unix time of the zero time (January 1, year 1, UTC), given on parse failures.
ZERO_TIME_UNIX = -62135596800

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DAY_FORMAT = "%Y-%m-%d"
_STAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
_DATETIME_RE = re.compile(r"(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})(?:\.\d+)?")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _local(dt: datetime) -> datetime:
    return dt.astimezone()


def get_current_timestamp_by_second() -> int:
    """Current Unix time in seconds."""
    return time.time_ns() // 1_000_000_000


def unix_second_to_time(second: int) -> datetime:
    """Local, timezone-aware time for a Unix second."""
    return _local(_EPOCH + timedelta(seconds=second))


def unix_nano_second_to_time(nano_second: int) -> datetime:
    """Local time for a Unix nanosecond count (microsecond precision)."""
    return _local(_EPOCH + timedelta(microseconds=nano_second // 1000))


def unix_mill_second_to_time(mill_second: int) -> datetime:
    """Local time for a Unix millisecond count."""
    return _local(_EPOCH + timedelta(milliseconds=mill_second))


def get_current_timestamp_by_nano() -> int:
    """Current Unix time in nanoseconds."""
    return time.time_ns()


def get_current_timestamp_by_mill() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def get_cur_day_zero_timestamp() -> int:
    """Midnight of today's local date read as UTC, shifted back eight hours."""
    today = date.today()
    midnight = datetime(today.year, today.month, today.day, tzinfo=timezone.utc)
    return (midnight - _EPOCH) // timedelta(seconds=1) - TIME_OFFSET


def get_cur_day_half_timestamp() -> int:
    """The day-zero timestamp plus twelve hours."""
    return get_cur_day_zero_timestamp() + HALF_OFFSET


def get_cur_day_zero_time_format() -> str:
    """The day-zero timestamp as local time, formatted like 2006-01-02_15-04-05."""
    return unix_second_to_time(get_cur_day_zero_timestamp()).strftime(_STAMP_FORMAT)


def get_cur_day_half_time_format() -> str:
    """The noon timestamp as local time, formatted like 2006-01-02_15-04-05."""
    return unix_second_to_time(get_cur_day_half_timestamp()).strftime(_STAMP_FORMAT)


def get_time_stamp_by_format(datetime_str: str) -> str:
    """Unix seconds, as text, of a local "YYYY-MM-DD HH:MM:SS" time."""
    match = _DATETIME_RE.fullmatch(datetime_str)
    if not match:
        return str(ZERO_TIME_UNIX)
    try:
        naive = datetime.strptime(match.group(1), "%Y-%m-%d %H:%M:%S")
        aware = naive.astimezone()
    except (ValueError, OverflowError, OSError):
        return str(ZERO_TIME_UNIX)
    return str((aware - _EPOCH) // timedelta(seconds=1))


def time_string_format_time_unix(time_format: str, time_src: str) -> int:
    """Unix seconds of time_src parsed with a strptime format.

    Times without a zone are taken as UTC; unparsable text gives the zero time.
    """
    try:
        parsed = datetime.strptime(time_src, time_format)
    except ValueError:
        return ZERO_TIME_UNIX
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return (parsed - _EPOCH) // timedelta(seconds=1)


def time_string_to_time(time_string: str) -> datetime:
    """Parse "YYYY-MM-DD" as midnight UTC; raises ValueError if invalid."""
    if not _DATE_RE.fullmatch(time_string):
        raise ValueError(f"cannot parse {time_string!r} as YYYY-MM-DD")
    return datetime.strptime(time_string, _DAY_FORMAT).replace(tzinfo=timezone.utc)


def time_to_string(t: datetime) -> str:
    """Format a time as "YYYY-MM-DD"."""
    return t.strftime(_DAY_FORMAT)