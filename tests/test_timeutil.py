import time
from datetime import datetime

import pytest

from imtools.timeutil import (
    HALF_OFFSET,
    TIME_OFFSET,
    ZERO_TIME_UNIX,
    get_cur_day_half_time_format,
    get_cur_day_half_timestamp,
    get_cur_day_zero_time_format,
    get_cur_day_zero_timestamp,
    get_current_timestamp_by_mill,
    get_current_timestamp_by_nano,
    get_current_timestamp_by_second,
    get_time_stamp_by_format,
    time_string_format_time_unix,
    time_string_to_time,
    time_to_string,
    unix_mill_second_to_time,
    unix_nano_second_to_time,
    unix_second_to_time,
)

STAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def test_current_timestamps_agree():
    sec = get_current_timestamp_by_second()
    mill = get_current_timestamp_by_mill()
    nano = get_current_timestamp_by_nano()
    assert abs(mill // 1000 - sec) <= 2
    assert abs(nano // 1_000_000 - mill) <= 2000
    assert abs(sec - time.time()) <= 2


def test_unix_second_round_trip():
    assert unix_second_to_time(1_700_000_000).timestamp() == 1_700_000_000


def test_unix_mill_round_trip():
    t = unix_mill_second_to_time(1_700_000_000_123)
    assert round(t.timestamp() * 1000) == 1_700_000_000_123


def test_unix_nano_round_trip_to_microseconds():
    t = unix_nano_second_to_time(1_700_000_000_123_456_789)
    assert round(t.timestamp() * 1_000_000) == 1_700_000_000_123_456


def test_day_zero_invariants():
    zero = get_cur_day_zero_timestamp()
    assert (zero + TIME_OFFSET) % 86400 == 0
    assert get_cur_day_half_timestamp() - zero == HALF_OFFSET


def test_day_formats_shape():
    zero_text = get_cur_day_zero_time_format()
    half_text = get_cur_day_half_time_format()
    zero = get_cur_day_zero_timestamp()
    assert int(datetime.strptime(zero_text, STAMP_FORMAT).timestamp()) == zero
    assert int(datetime.strptime(half_text, STAMP_FORMAT).timestamp()) == zero + HALF_OFFSET


def test_time_stamp_by_format_round_trip():
    text = "2023-06-15 10:20:30"
    stamp = int(get_time_stamp_by_format(text))
    assert unix_second_to_time(stamp).strftime("%Y-%m-%d %H:%M:%S") == text


def test_time_stamp_by_format_invalid():
    assert get_time_stamp_by_format("garbage") == str(ZERO_TIME_UNIX)


def test_time_string_format_time_unix():
    assert time_string_format_time_unix("%Y-%m-%d", "1970-01-02") == 86400
    assert time_string_format_time_unix("%Y-%m-%d", "nope") == ZERO_TIME_UNIX


def test_time_string_round_trip():
    assert time_to_string(time_string_to_time("2023-05-06")) == "2023-05-06"


@pytest.mark.parametrize("bad", ["2023-5-6", "20230506", "2023-13-01", ""])
def test_time_string_to_time_invalid(bad):
    with pytest.raises(ValueError):
        time_string_to_time(bad)