from datetime import date, datetime, time

import pytest

from src.dtr_system.dtr_system.common.datetime_utils import (
    format_clock,
    format_duration,
    parse_hhmm,
    parse_iso_date,
    parse_iso_datetime,
)
from src.dtr_system.dtr_system.core.exceptions import ValidationError


def test_parse_dates_and_times():
    assert parse_iso_date("2023-11-06") == date(2023, 11, 6)
    assert parse_hhmm("17:05") == time(17, 5)
    assert parse_hhmm("") is None
    assert parse_iso_datetime("2023-11-06T07:30:00") == datetime(2023, 11, 6, 7, 30)
    assert parse_iso_datetime(None) is None


def test_utc_stamps_become_naive():
    assert parse_iso_datetime("2023-11-06T07:30:00Z").tzinfo is None


@pytest.mark.parametrize("bad", ["06/11/2023", "", "2023-13-01"])
def test_bad_dates(bad):
    with pytest.raises(ValidationError):
        parse_iso_date(bad)


def test_clock_and_duration_labels():
    assert format_clock(time(6, 0)) == "6:00 AM"
    assert format_clock(time(12, 31)) == "12:31 PM"
    assert format_clock(time(0, 5)) == "12:05 AM"
    assert format_duration(65) == "1h 5m"
    assert format_duration(0) == "0m"
