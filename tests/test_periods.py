from datetime import date, datetime, time

import pytest

import echotrack.periods as periods
from echotrack.models import InvalidTimeError


def test_parse_hhmm_accepts_24h_times():
    assert periods.parse_hhmm("00:00") == time(0, 0)
    assert periods.parse_hhmm("08:05") == time(8, 5)
    assert periods.parse_hhmm("23:59") == time(23, 59)


@pytest.mark.parametrize("bad", ["24:00", "12:60", "8:00", "08:0", "0800", "", "ab:cd", " 08:00", "08:00:00"])
def test_parse_hhmm_rejects_malformed(bad):
    with pytest.raises(InvalidTimeError):
        periods.parse_hhmm(bad)


def test_invalid_time_error_is_a_value_error():
    with pytest.raises(ValueError):
        periods.parse_hhmm("25:00")


def test_to_hhmm_zero_pads():
    assert periods.to_hhmm(datetime(2026, 10, 19, 7, 5, 59)) == "07:05"
    assert periods.to_hhmm(time(23, 0)) == "23:00"


def test_sunday_weekday_starts_on_sunday():
    assert periods.sunday_weekday(date(2026, 10, 18)) == 0  # Sun
    assert periods.sunday_weekday(date(2026, 10, 19)) == 1  # Mon
    assert periods.sunday_weekday(date(2026, 10, 24)) == 6  # Sat


def test_date_key_uses_local_calendar_date():
    assert periods.date_key(datetime(2026, 10, 19, 23, 59)) == "2026-10-19"
    assert periods.date_key(date(2028, 2, 29)) == "2028-02-29"


def test_format_countdown():
    assert periods.format_countdown(0) == "00:00:00"
    assert periods.format_countdown(59) == "00:00:59"
    assert periods.format_countdown(7200) == "02:00:00"
    assert periods.format_countdown(3661) == "01:01:01"
    assert periods.format_countdown(86399) == "23:59:59"


def test_seconds_since_midnight():
    assert periods.seconds_since_midnight(datetime(2026, 10, 19, 8, 0, 0)) == 28800
    assert periods.seconds_since_midnight(time(0, 1, 2)) == 62

