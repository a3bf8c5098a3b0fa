"""
Tests for the cross-cutting rules: implausible years, employment gaps and
work that starts before education ends.
"""

from datetime import date

from resume_dates.core.rules import GeneralRules
from resume_dates.core.schemas import EducationPeriod, IssueRule, ValidationConfig, WorkExperience

TODAY = date(2026, 10, 16)
rules = GeneralRules(ValidationConfig(), TODAY)


def edu(start, end, confidence=0.9):
    return EducationPeriod(institution="State University", start_date=start, end_date=end, confidence=confidence)


def job(start, end=None, company="Acme Inc", confidence=0.9, ongoing=False):
    return WorkExperience(
        company=company,
        position="Engineer",
        start_date=start,
        end_date=end,
        is_ongoing=ongoing,
        confidence=confidence,
    )


# ===== DATE RANGES =====

def test_ancient_date_warns_with_shifted_year():
    issues = rules.check_date_ranges([edu(date(1975, 9, 1), date(1979, 5, 1))], [])
    assert [i.rule for i in issues] == [IssueRule.ANCIENT_DATE, IssueRule.ANCIENT_DATE]
    assert issues[0].type == "warning"
    assert issues[0].suggested_fix == "Consider 1995 (+20 years)"
    assert issues[0].category == "education"


def test_far_future_date_is_critical():
    issues = rules.check_date_ranges([], [job(date(2020, 1, 1), date(2040, 1, 1))])
    assert [i.rule for i in issues] == [IssueRule.FAR_FUTURE_DATE]
    issue = issues[0]
    assert issue.type == "critical"
    assert issue.category == "work"
    assert issue.suggested_fix == "Consider 2030 (-10 years)"
    assert issue.detected_date == "2040-01-01"


def test_ordinary_dates_raise_nothing():
    assert rules.check_date_ranges([edu(date(2014, 9, 1), date(2018, 5, 1))], [job(date(2018, 6, 1), ongoing=True)]) == []


# ===== CONFIDENCE =====

def test_rule_confidence_rewards_good_data():
    good = rules.check_date_ranges([edu(date(1975, 1, 1), None, confidence=0.9)], [])
    weak = rules.check_date_ranges([edu(date(1975, 1, 1), None, confidence=0.6)], [])
    assert good[0].confidence == 0.8
    assert weak[0].confidence == 0.7


def test_strict_mode_raises_rule_confidence():
    strict = GeneralRules(ValidationConfig(strict_mode=True), TODAY)
    issues = strict.check_date_ranges([edu(date(1975, 1, 1), None, confidence=0.9)], [])
    assert issues[0].confidence == 0.9


# ===== CAREER PROGRESSION =====

def test_employment_gap_over_two_years():
    work = [job(date(2020, 1, 1), date(2022, 1, 1), company="Globex"), job(date(2015, 1, 1), date(2017, 1, 1))]
    issues = rules.check_career_progression(work)
    assert len(issues) == 1
    issue = issues[0]
    assert issue.rule == IssueRule.EMPLOYMENT_GAP
    assert issue.type == "suggestion"
    assert issue.message == "Employment gap of 3.0 years before Globex"
    assert issue.suggested_fix == "Add brief explanations for employment gaps (education, travel, family, etc.)"
    assert issue.period_index == 0


def test_short_gap_and_ongoing_predecessor_are_fine():
    assert rules.check_career_progression([job(date(2015, 1, 1), date(2017, 1, 1)), job(date(2018, 1, 1))]) == []
    assert rules.check_career_progression([job(date(2010, 1, 1), ongoing=True), job(date(2020, 1, 1))]) == []


# ===== EDUCATION / WORK CONSISTENCY =====

def test_work_before_graduation_is_general_warning():
    issues = rules.check_education_work_consistency(
        [edu(date(2016, 9, 1), date(2020, 5, 1))],
        [job(date(2019, 1, 1), date(2019, 9, 1))],
    )
    assert len(issues) == 1
    issue = issues[0]
    assert issue.rule == IssueRule.WORK_BEFORE_EDUCATION_END
    assert issue.type == "warning"
    assert issue.category == "general"
    assert issue.detected_date == "2019-01-01"


def test_consistency_needs_both_kinds():
    assert rules.check_education_work_consistency([], [job(date(2019, 1, 1))]) == []
    assert rules.check_education_work_consistency([edu(date(2016, 9, 1), date(2020, 5, 1))], []) == []


def test_work_after_graduation_is_fine():
    assert rules.check_education_work_consistency(
        [edu(date(2016, 9, 1), date(2020, 5, 1))],
        [job(date(2020, 6, 1), ongoing=True)],
    ) == []


def test_apply_runs_every_rule():
    issues = rules.apply(
        [edu(date(2016, 9, 1), date(2020, 5, 1))],
        [job(date(2019, 1, 1), date(2019, 9, 1)), job(date(2023, 1, 1), date(2040, 1, 1), company="Globex")],
    )
    assert {i.rule for i in issues} == {
        IssueRule.FAR_FUTURE_DATE,
        IssueRule.EMPLOYMENT_GAP,
        IssueRule.WORK_BEFORE_EDUCATION_END,
    }
