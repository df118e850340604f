"""Normalize and validate the birth date/time a browser sends.

Date and time pickers in Korean locales often submit their display form
(``1982. 04. 27.``, ``오후 3:05``) instead of the ISO value. Those forms are
rewritten to ``YYYY-MM-DD`` and 24-hour ``HH:MM``; anything else passes
through untouched and is left for validation to accept or reject.
"""

import re
from datetime import date

from saju_fortune.entities import BirthProfileEntity
from saju_fortune.errors import (
    INVALID_DATE_MESSAGE,
    INVALID_TIME_MESSAGE,
    MISSING_NAME_MESSAGE,
    ClientInputError,
)

_DOTTED_DATE = re.compile(r"^(\d{4})\.\s*(\d{1,2})\.\s*(\d{1,2})\.?$", re.ASCII)
_KOREAN_12H_TIME = re.compile(r"^(오전|오후)\s*(\d{1,2}):(\d{2})$", re.ASCII)
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_HH_MM = re.compile(r"^\d{2}:\d{2}$", re.ASCII)


def normalize_birth_date(value: str) -> str:
    """Rewrite ``YYYY. M. D.`` to ``YYYY-MM-DD``; return other input trimmed."""
    value = value.strip()
    match = _DOTTED_DATE.match(value)
    if match is None:
        return value

    year, month, day = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}"


def normalize_birth_time(value: str) -> str:
    """Rewrite ``오전/오후 H:MM`` to 24-hour ``HH:MM``; return other input trimmed."""
    value = value.strip()
    match = _KOREAN_12H_TIME.match(value)
    if match is None:
        return value

    meridiem, hour_text, minute = match.groups()
    hour = int(hour_text)
    if meridiem == "오전":
        if hour == 12:
            hour = 0
    elif hour != 12:
        hour += 12
    return f"{hour:02d}:{minute}"


def is_valid_date_yyyymmdd(value: str) -> bool:
    if not _ISO_DATE.match(value):
        return False

    year, month, day = (int(part) for part in value.split("-"))
    # Two-digit years would be read as 19xx by a calendar round-trip.
    if year < 100:
        return False
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def is_valid_time_hhmm(value: str) -> bool:
    if not _HH_MM.match(value):
        return False

    hour, minute = (int(part) for part in value.split(":"))
    return 0 <= hour <= 23 and 0 <= minute <= 59


def build_birth_profile(
    name: str | None,
    birth_date: str | None,
    birth_time: str | None,
) -> BirthProfileEntity:
    """Normalize and validate raw request fields.

    Checks run in order name, date, time; the first failure is raised.

    Args:
        name: Raw name (None treated as empty)
        birth_date: Raw birth date (None treated as empty)
        birth_time: Raw birth time (None treated as empty)

    Returns:
        The validated BirthProfileEntity

    Raises:
        ClientInputError: With ``received`` set to the normalized value for
            date and time failures
    """
    clean_name = (name or "").strip()
    clean_date = normalize_birth_date(birth_date or "")
    clean_time = normalize_birth_time(birth_time or "")

    if not clean_name:
        raise ClientInputError(MISSING_NAME_MESSAGE)
    if not is_valid_date_yyyymmdd(clean_date):
        raise ClientInputError(INVALID_DATE_MESSAGE, received=clean_date)
    if not is_valid_time_hhmm(clean_time):
        raise ClientInputError(INVALID_TIME_MESSAGE, received=clean_time)

    return BirthProfileEntity(name=clean_name, birth_date=clean_date, birth_time=clean_time)
