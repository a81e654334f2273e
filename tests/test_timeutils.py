import datetime as dt

import pytest

from app.core.timeutils import average_time, normalize_time, parse_time


@pytest.mark.parametrize("raw, expected", [
    ("08:30:00", "08:30:00"),
    ("8:05", "08:05:00"),
    (" 16:30:15 ", "16:30:15"),
    ("2025-09-19T08:30:00", "08:30:00"),
    ("2025-09-19T08:30:00.987", "08:30:00"),
    ("2025-09-19 17:45:10", "17:45:10"),
])
def test_normalize_time_formats(raw, expected):
    assert normalize_time(raw) == expected


def test_aware_timestamp_is_converted_to_local_zone():
    assert normalize_time("2025-09-19T11:30:00Z", tz="America/Sao_Paulo") == "08:30:00"
    assert normalize_time("2025-09-19T08:30:00-03:00", tz="UTC") == "11:30:00"


def test_time_and_datetime_objects():
    assert normalize_time(dt.time(7, 15, 3, 500)) == "07:15:03"
    assert normalize_time(dt.datetime(2025, 9, 19, 9, 0, 1)) == "09:00:01"
    assert parse_time("09:10") == dt.time(9, 10)


@pytest.mark.parametrize("bad", ["", "   ", "25:00", "tomorrow", "08h30", 830])
def test_invalid_values_raise_value_error(bad):
    with pytest.raises(ValueError):
        normalize_time(bad)


def test_average_time():
    assert average_time([dt.time(8, 0), dt.time(9, 0), None]) == "08:30:00"
    assert average_time([dt.time(7, 59, 59)]) == "07:59:59"
    assert average_time([None, None]) is None
    assert average_time([]) is None
