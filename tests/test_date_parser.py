"""
Unit tests for single-date parsing.

All tests pin the reference day so year-range checks never depend on the clock.
"""

from datetime import date

import pytest

from resume_dates.core.date_parser import ResumeDateParser
from resume_dates.core.observer import RecordingObserver
from resume_dates.core.schemas import DateFormat

TODAY = date(2026, 10, 16)
parser = ResumeDateParser(today=TODAY)


# ===== ONGOING KEYWORDS =====

@pytest.mark.parametrize("text", ["Present", "CURRENT", "ongoing", "Now", "today", "Till Date", "to date", "Continuing"])
def test_ongoing_keywords_parse_as_present(text):
    """Every ongoing keyword parses to today, case-insensitively, at full confidence."""
    parsed = parser.parse_date(text)
    assert parsed is not None
    assert parsed.is_ongoing is True
    assert parsed.format == DateFormat.PRESENT
    assert parsed.normalized == TODAY
    assert parsed.confidence == 1.0


def test_ongoing_wins_over_year():
    """An ongoing marker anywhere in the text takes precedence over a year."""
    parsed = parser.parse_date("2019 - present")
    assert parsed.is_ongoing is True


# ===== MONTH + YEAR =====

@pytest.mark.parametrize("text,month,year", [
    ("September 2018", 9, 2018),
    ("Sep 2018", 9, 2018),
    ("Sept. 2018", 9, 2018),
    ("may 2022", 5, 2022),
    ("Jan 1950", 1, 1950),
    ("December 2036", 12, 2036),
])
def test_month_year_normalizes_to_first_of_month(text, month, year):
    parsed = parser.parse_date(text)
    assert parsed is not None
    assert parsed.format == DateFormat.MONTH_YEAR
    assert parsed.normalized == date(year, month, 1)
    assert parsed.confidence == 1.0
    assert parsed.is_ongoing is False


def test_month_year_outside_year_range_is_rejected():
    """Years after current + 10 are not dates."""
    assert parser.parse_date("March 2037") is None
    assert parser.parse_date("March 1949") is None


# ===== YEAR ONLY =====

def test_year_only_normalizes_to_january_first():
    parsed = parser.parse_date("2020")
    assert parsed.format == DateFormat.YEAR_ONLY
    assert parsed.normalized == date(2020, 1, 1)
    assert parsed.confidence == 0.8


def test_year_only_bounds():
    """Bare years are accepted in [1950, current + 10]."""
    assert parser.parse_date("1950") is not None
    assert parser.parse_date("2036") is not None
    assert parser.parse_date("1949") is None
    assert parser.parse_date("2037") is None


# ===== FULL NUMERIC DATES =====

def test_full_date_us_order():
    parsed = parser.parse_date("3/15/2021")
    assert parsed.format == DateFormat.FULL_DATE
    assert parsed.normalized == date(2021, 3, 15)
    assert parsed.confidence == 1.0


def test_full_date_year_first_forms():
    assert parser.parse_date("2021/3/15").normalized == date(2021, 3, 15)
    assert parser.parse_date("2021-03-15").normalized == date(2021, 3, 15)


def test_full_date_leap_year_checked():
    """Feb 29 only exists in leap years."""
    assert parser.parse_date("2/29/2020").normalized == date(2020, 2, 29)
    assert parser.parse_date("2/29/2021") is None


@pytest.mark.parametrize("text", ["13/1/2020", "4/31/2020", "0/10/2020", "2025/13/45", "2026/99/99"])
def test_full_date_invalid_month_or_day(text):
    assert parser.parse_date(text) is None


# ===== GARBAGE =====

@pytest.mark.parametrize("text", ["", "   ", "hello world", "12345"])
def test_unparseable_text_returns_none(text):
    assert parser.parse_date(text) is None


def test_non_string_returns_none():
    assert parser.parse_date(None) is None
    assert parser.parse_date(2020) is None


def test_detect_format_and_normalize():
    assert parser.detect_date_format("June 2019") == DateFormat.MONTH_YEAR
    assert parser.detect_date_format("2019") == DateFormat.YEAR_ONLY
    assert parser.detect_date_format("nonsense") is None
    assert parser.normalize_date("1/2/2019") == date(2019, 1, 2)
    assert parser.normalize_date("nonsense") is None


def test_parser_works_with_recording_observer():
    """Observer choice never changes parse results."""
    recorded = ResumeDateParser(today=TODAY, observer=RecordingObserver())
    assert recorded.parse_date("May 2022") == parser.parse_date("May 2022")
