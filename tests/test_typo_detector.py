"""
Tests for year typo detection. Reference year is 2026.
"""

from datetime import date

from resume_dates.core.schemas import EducationPeriod, ValidationConfig, WorkExperience
from resume_dates.core.typo_detector import DateTypoDetector

TODAY = date(2026, 10, 16)
detector = DateTypoDetector(ValidationConfig(), TODAY)


def _pairs(suggestions):
    return [(s.original_date, s.suggested_date) for s in suggestions]


# ===== INDIVIDUAL DETECTORS =====

def test_year_typo_candidates_for_far_future_year():
    suggestions = detector.detect_year_typos(2034, "education")
    assert _pairs(suggestions) == [("2034", "2026"), ("2034", "2025"), ("2034", "2024")]
    assert all(s.confidence == 1.0 for s in suggestions)


def test_year_typo_ignores_near_years():
    assert detector.detect_year_typos(2028, "education") == []
    assert detector.detect_year_typos(2019, "work") == []


def test_future_typo_decade_and_current_year():
    suggestions = detector.detect_future_typos(date(2032, 6, 1), "work")
    assert _pairs(suggestions) == [("2032", "2022"), ("2032", "2026")]
    assert [s.confidence for s in suggestions] == [0.8, 0.6]


def test_future_typo_needs_five_years_ahead():
    assert detector.detect_future_typos(date(2030, 1, 1), "work") == []


def test_future_typo_skips_decade_still_in_future():
    suggestions = detector.detect_future_typos(date(2040, 1, 1), "education")
    assert _pairs(suggestions) == [("2040", "2026")]


def test_transposition_toward_current_year():
    suggestions = detector.detect_transpositions(2062)
    assert _pairs(suggestions) == [("2062", "2026")]
    assert suggestions[0].confidence == 0.9


def test_transposition_never_moves_away_from_now():
    """2021 -> 2012 is a valid swap but lands further from 2026."""
    assert detector.detect_transpositions(2021) == []


def test_off_by_one():
    suggestions = detector.detect_off_by_one(2019, "work")
    assert _pairs(suggestions) == [("2019", "2018"), ("2019", "2020")]
    assert all(s.confidence == 0.5 for s in suggestions)
    assert detector.detect_off_by_one(1990, "work") == []


# ===== THRESHOLD =====

def test_detect_typos_filters_by_threshold():
    education = [EducationPeriod(institution="Future University", start_date=None, end_date=date(2034, 1, 1))]
    suggestions = detector.detect_typos(education, [])
    assert set(_pairs(suggestions)) == {("2034", "2026"), ("2034", "2025"), ("2034", "2024")}
    assert all(s.confidence >= 0.8 for s in suggestions)


def test_plausible_dates_produce_nothing_above_threshold():
    work = [WorkExperience(company="Acme Inc", position="Engineer", start_date=date(2019, 5, 1), end_date=date(2022, 1, 1))]
    assert detector.detect_typos([], work) == []


def test_lower_threshold_surfaces_weaker_proposals():
    lenient = DateTypoDetector(ValidationConfig(confidence_threshold=0.5), TODAY)
    work = [WorkExperience(company="Acme Inc", position="Engineer", start_date=date(2019, 5, 1), end_date=None)]
    assert set(_pairs(lenient.detect_typos([], work))) == {("2019", "2018"), ("2019", "2020")}
