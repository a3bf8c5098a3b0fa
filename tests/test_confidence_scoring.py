"""
Test suite for confidence scoring.

Demonstrates how scores separate solid extractions and corrections from
guesses, which in turn decides what survives the confidence threshold.
"""

import pytest
from resume_dates.core.confidence_calculator import ConfidenceCalculator


class TestPeriodConfidence:
    """Extraction confidence for education and work blocks."""

    def test_recognized_university_with_degree(self):
        confidence, method = ConfidenceCalculator.education_period("University of Technology", "Bachelor of Science", [1.0, 1.0])
        assert confidence == 1.0
        assert method == "recognized_institution"

    def test_institute_is_found_but_not_recognized(self):
        confidence, method = ConfidenceCalculator.education_period("Tech Institute", None, [0.8, 0.8])
        assert confidence == pytest.approx(0.78)
        assert method == "institution_found"

    def test_dates_only(self):
        confidence, method = ConfidenceCalculator.education_period("Unknown Institution", None, [])
        assert confidence == 0.5
        assert method == "dates_only"

    def test_company_suffix_bonus(self):
        with_suffix, method = ConfidenceCalculator.work_experience("Acme Inc", "Unknown Position", [1.0])
        without_suffix, _ = ConfidenceCalculator.work_experience("Globex", "Unknown Position", [1.0])
        assert with_suffix == pytest.approx(0.9)
        assert method == "company_suffix"
        assert without_suffix == pytest.approx(0.8)

    def test_company_and_position_found(self):
        confidence, _ = ConfidenceCalculator.work_experience("Globex", "Engineer", [1.0, 1.0])
        assert confidence == 1.0


class TestCorrectionConfidence:
    """Typo and correction scores, reference year 2026."""

    def test_decade_slip_far_in_future(self):
        confidence, reason = ConfidenceCalculator.year_typo(2034, 2024, 2026, "education")
        assert confidence == 1.0
        assert reason == "common_keying_slip"

    def test_modest_typo(self):
        confidence, reason = ConfidenceCalculator.year_typo(2030, 2026, 2026, "education")
        assert confidence == pytest.approx(0.8)
        assert reason == "year_typo"

    def test_transposition(self):
        assert ConfidenceCalculator.transposition(2062, 2026, 2026)[0] == pytest.approx(0.9)
        assert ConfidenceCalculator.transposition(2030, 2003, 2026)[0] == pytest.approx(0.4)

    def test_off_by_one_context(self):
        assert ConfidenceCalculator.off_by_one(2019, 2018, 2026, "work")[0] == pytest.approx(0.5)
        assert ConfidenceCalculator.off_by_one(1990, 1989, 2026, "work")[0] == pytest.approx(0.3)

    def test_graduation_year(self):
        assert ConfidenceCalculator.graduation_year(2026, 4, (4, 3, 5), 2025, 2030) == (pytest.approx(0.9), "typical_degree_duration")
        assert ConfidenceCalculator.graduation_year(2024, None, (4,), 2025, 2030) == (0.5, "recent_graduation")

    def test_work_end_year(self):
        assert ConfidenceCalculator.work_end_year(2025, 2022, 2026)[0] == pytest.approx(0.8)
        assert ConfidenceCalculator.work_end_year(2015, None, 2026)[0] == 0.5


class TestRuleConfidence:
    @pytest.mark.parametrize("good_data,strict,expected", [
        (False, False, 0.7),
        (True, False, 0.8),
        (False, True, 0.8),
        (True, True, 0.9),
    ])
    def test_rule(self, good_data, strict, expected):
        assert ConfidenceCalculator.rule(good_data, strict)[0] == pytest.approx(expected)


def test_scores_stay_in_unit_interval():
    """Bonuses never push a score above 1.0."""
    confidence, _ = ConfidenceCalculator.year_typo(2099, 2089, 2026, "education")
    assert 0.0 <= confidence <= 1.0
