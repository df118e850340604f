"""
Tests for birth date/time normalization and validation.
"""

import pytest

from saju_fortune.errors import (
    INVALID_DATE_MESSAGE,
    INVALID_TIME_MESSAGE,
    MISSING_NAME_MESSAGE,
    ClientInputError,
)
from saju_fortune.normalization import (
    build_birth_profile,
    is_valid_date_yyyymmdd,
    is_valid_time_hhmm,
    normalize_birth_date,
    normalize_birth_time,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1982. 04. 27.", "1982-04-27"),
        ("1982.4.27", "1982-04-27"),
        ("1982.04.27.", "1982-04-27"),
        ("  1982.  4.  7  ", "1982-04-07"),
        ("1982-04-27", "1982-04-27"),
        (" 1982-04-27 ", "1982-04-27"),
        ("27/04/1982", "27/04/1982"),
        ("", ""),
    ],
)
def test_normalize_birth_date(raw, expected):
    """Dotted dates are rewritten; everything else is only trimmed."""
    assert normalize_birth_date(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("오후 3:05", "15:05"),
        ("오전 12:00", "00:00"),
        ("오후 12:30", "12:30"),
        ("오전 9:35", "09:35"),
        ("오전10:00", "10:00"),
        ("오후 11:59", "23:59"),
        ("09:35", "09:35"),
        (" 21:10 ", "21:10"),
        ("3:05 PM", "3:05 PM"),
    ],
)
def test_normalize_birth_time(raw, expected):
    """Korean 12-hour times become 24-hour; everything else is only trimmed."""
    assert normalize_birth_time(raw) == expected


def test_afternoon_hour_above_twelve_is_not_clamped():
    """'오후 13:00' becomes 25:00 and is left for validation to reject."""
    normalized = normalize_birth_time("오후 13:00")
    assert normalized == "25:00"
    assert not is_valid_time_hhmm(normalized)


@pytest.mark.parametrize("value", ["1997-03-21", "2000-02-29", "2024-12-31", "0100-01-01"])
def test_valid_dates(value):
    assert is_valid_date_yyyymmdd(value)


@pytest.mark.parametrize(
    "value",
    ["2021-02-30", "1900-02-29", "2021-13-01", "2021-00-10", "2021-4-27", "21-04-27", "1982. 04. 27.", ""],
)
def test_invalid_dates(value):
    """Format must match exactly and the date must exist in the calendar."""
    assert not is_valid_date_yyyymmdd(value)


def test_date_rejects_non_ascii_digits():
    assert not is_valid_date_yyyymmdd("١٩٩٧-03-21")


@pytest.mark.parametrize("value", ["00:00", "09:35", "23:59"])
def test_valid_times(value):
    assert is_valid_time_hhmm(value)


@pytest.mark.parametrize("value", ["24:00", "25:00", "12:60", "9:35", "09:5", "0935", ""])
def test_invalid_times(value):
    assert not is_valid_time_hhmm(value)


def test_build_birth_profile_normalizes_all_fields():
    profile = build_birth_profile("  홍길동 ", "1997. 3. 21.", "오전 9:35")

    assert profile.name == "홍길동"
    assert profile.birth_date == "1997-03-21"
    assert profile.birth_time == "09:35"
    assert profile.cache_key == "홍길동|1997-03-21|09:35"


def test_cache_key_lowercases_name():
    profile = build_birth_profile("Alice", "1997-03-21", "09:35")
    assert profile.cache_key == "alice|1997-03-21|09:35"


@pytest.mark.parametrize("name", [None, "", "   "])
def test_missing_name_is_rejected(name):
    with pytest.raises(ClientInputError) as exc_info:
        build_birth_profile(name, "1997-03-21", "09:35")

    assert exc_info.value.message == MISSING_NAME_MESSAGE
    assert exc_info.value.received is None


def test_name_is_checked_before_date():
    with pytest.raises(ClientInputError) as exc_info:
        build_birth_profile("", "not-a-date", "99:99")
    assert exc_info.value.message == MISSING_NAME_MESSAGE


def test_invalid_date_echoes_normalized_value():
    with pytest.raises(ClientInputError) as exc_info:
        build_birth_profile("홍길동", "2021. 2. 30.", "09:35")

    assert exc_info.value.message == INVALID_DATE_MESSAGE
    assert exc_info.value.received == "2021-02-30"


def test_invalid_time_echoes_received_value():
    with pytest.raises(ClientInputError) as exc_info:
        build_birth_profile("홍길동", "1997-03-21", "25:00")

    assert exc_info.value.message == INVALID_TIME_MESSAGE
    assert exc_info.value.received == "25:00"
    assert exc_info.value.status_code == 400


def test_missing_date_is_rejected_with_empty_received():
    with pytest.raises(ClientInputError) as exc_info:
        build_birth_profile("홍길동", None, "09:35")
    assert exc_info.value.received == ""


@pytest.mark.parametrize("value", ["0001-01-01", "0099-12-31"])
def test_dates_before_year_100_are_rejected(value):
    assert not is_valid_date_yyyymmdd(value)
