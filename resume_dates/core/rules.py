"""
Cross-cutting rule checks run after the per-kind timeline validators.

  ancient dates        (< 1980)          -> warning, suggest +20 years
  far-future dates     (> 10 years ahead) -> critical, suggest -10 years
  employment gaps      (> 2 years)        -> suggestion
  work before degree   (work starts before the latest finished education)
                                          -> warning
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from resume_dates.core.confidence_calculator import ConfidenceCalculator
from resume_dates.core.constants import (
    ANCIENT_SHIFT_YEARS,
    ANCIENT_YEAR,
    DECADE_SHIFT_YEARS,
    EMPLOYMENT_GAP_YEARS,
    FAR_FUTURE_YEARS,
    GOOD_DATA_CONFIDENCE,
)
from resume_dates.core.date_utils import format_date, years_between
from resume_dates.core.schemas import (
    EducationPeriod,
    IssueCategory,
    IssueRule,
    ValidationConfig,
    ValidationIssue,
    WorkExperience,
)

logger = logging.getLogger(__name__)

Period = Union[EducationPeriod, WorkExperience]


def _period_dates(category: IssueCategory, periods: Sequence[Period]) -> Iterable[Tuple[IssueCategory, int, date]]:
    for index, period in enumerate(periods):
        for value in (period.start_date, period.end_date):
            if value is not None:
                yield category, index, value


def _has_good_data(periods: Sequence[Period]) -> bool:
    return any(period.confidence > GOOD_DATA_CONFIDENCE for period in periods)


class GeneralRules:
    def __init__(self, config: Optional[ValidationConfig] = None, today: Optional[date] = None):
        self.config = config or ValidationConfig()
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _confidence(self, periods: Sequence[Period]) -> float:
        confidence, _ = ConfidenceCalculator.rule(_has_good_data(periods), self.config.strict_mode)
        return confidence

    def apply(self, education: Sequence[EducationPeriod], work: Sequence[WorkExperience]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        issues.extend(self.check_date_ranges(education, work))
        issues.extend(self.check_career_progression(work))
        issues.extend(self.check_education_work_consistency(education, work))
        logger.debug(f"General rules raised {len(issues)} issues")
        return issues

    def check_date_ranges(
        self, education: Sequence[EducationPeriod], work: Sequence[WorkExperience]
    ) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        confidence_by_category = {
            "education": self._confidence(education),
            "work": self._confidence(work),
        }
        dates = list(_period_dates("education", education)) + list(_period_dates("work", work))

        for category, index, value in dates:
            confidence = confidence_by_category[category]
            if value.year < ANCIENT_YEAR:
                issues.append(ValidationIssue(
                    type="warning",
                    category=category,
                    message=f"Date {value.year} seems unusually old for a resume entry",
                    detected_date=format_date(value),
                    suggested_fix=f"Consider {value.year + ANCIENT_SHIFT_YEARS} (+{ANCIENT_SHIFT_YEARS} years)",
                    confidence=confidence,
                    rule=IssueRule.ANCIENT_DATE,
                    period_index=index,
                ))
            elif years_between(self.today, value) > FAR_FUTURE_YEARS:
                issues.append(ValidationIssue(
                    type="critical",
                    category=category,
                    message=f"Date {value.year} is more than {FAR_FUTURE_YEARS} years in the future",
                    detected_date=format_date(value),
                    suggested_fix=f"Consider {value.year - DECADE_SHIFT_YEARS} (-{DECADE_SHIFT_YEARS} years)",
                    confidence=confidence,
                    rule=IssueRule.FAR_FUTURE_DATE,
                    period_index=index,
                ))
        return issues

    def check_career_progression(self, work: Sequence[WorkExperience]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        dated = sorted(
            ((index, p) for index, p in enumerate(work) if p.start_date is not None),
            key=lambda pair: pair[1].start_date,
        )
        confidence = self._confidence(work)
        for (_, previous), (index, following) in zip(dated, dated[1:]):
            if previous.is_ongoing or previous.end_date is None:
                continue
            gap_years = years_between(previous.end_date, following.start_date)
            if gap_years > EMPLOYMENT_GAP_YEARS:
                issues.append(ValidationIssue(
                    type="suggestion",
                    category="work",
                    message=f"Employment gap of {gap_years:.1f} years before {following.company}",
                    detected_date=f"{format_date(previous.end_date)} - {format_date(following.start_date)}",
                    suggested_fix="Add brief explanations for employment gaps (education, travel, family, etc.)",
                    confidence=confidence,
                    rule=IssueRule.EMPLOYMENT_GAP,
                    period_index=index,
                ))
        return issues

    def check_education_work_consistency(
        self, education: Sequence[EducationPeriod], work: Sequence[WorkExperience]
    ) -> List[ValidationIssue]:
        finished = [p.end_date for p in education if p.end_date is not None and not p.is_ongoing]
        starts = [p.start_date for p in work if p.start_date is not None]
        if not finished or not starts:
            return []

        latest_education_end = max(finished)
        earliest_work_start = min(starts)
        if earliest_work_start >= latest_education_end:
            return []

        return [ValidationIssue(
            type="warning",
            category="general",
            message="Work experience appears to start before education completion. Please verify timeline consistency.",
            detected_date=format_date(earliest_work_start),
            suggested_fix="Mark concurrent roles as part-time or internships if that is the case.",
            confidence=self._confidence(list(education) + list(work)),
            rule=IssueRule.WORK_BEFORE_EDUCATION_END,
        )]
