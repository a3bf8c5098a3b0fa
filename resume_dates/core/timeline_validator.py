"""
Timeline validation for education and work periods.

Pure functions of (periods, config, today): no I/O, no shared state. Rules run
per period first, then pairwise across periods of the same kind.

Time arithmetic uses a fixed 365.25-day year and 30.44-day month, so a
"3 months ahead" threshold means 91.32 days regardless of calendar months.
"""

import logging
import re
from datetime import date
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from resume_dates.core.constants import (
    EDUCATION_MAX_DURATION_YEARS,
    EDUCATION_MIN_DEGREE_YEARS,
    EDUCATION_NEAR_FUTURE_YEARS,
    EDUCATION_OVERLAP_GRACE_MONTHS,
    EDUCATION_STALE_ONGOING_YEARS,
    EDUCATION_START_FUTURE_MONTHS,
    INDUSTRY_KEYWORDS,
    OVERLAP_EXEMPT_CREDENTIALS,
    UNKNOWN_INSTITUTION,
    WORK_GAP_MONTHS,
    WORK_NEAR_FUTURE_MONTHS,
    WORK_OVERLAP_EXCUSAL_KEYWORDS,
    WORK_OVERLAP_GRACE_MONTHS,
    WORK_SHORT_DURATION_DAYS,
    WORK_STALE_ONGOING_YEARS,
)
from resume_dates.core.date_utils import describe_span, format_date, months_between, years_between
from resume_dates.core.schemas import (
    EducationPeriod,
    IssueRule,
    ValidationConfig,
    ValidationIssue,
    WorkExperience,
)

logger = logging.getLogger(__name__)


def effective_end(end: Optional[date], is_ongoing: bool, today: date) -> date:
    """End used for overlap math: today for ongoing or open-ended periods."""
    if is_ongoing or end is None:
        return today
    return end


def overlap_window(
    a_start: Optional[date], a_end: date, b_start: Optional[date], b_end: date
) -> Optional[Tuple[date, date]]:
    """The shared (start, end) of two periods, or None. Periods without a start never overlap."""
    if a_start is None or b_start is None:
        return None
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    if start < end:
        return start, end
    return None


def _mentions(text: str, keywords: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(re.search(rf"(?<![a-z]){re.escape(keyword)}(?![a-z])", lowered) for keyword in keywords)


class TimelineValidator:
    """
    Applies education and work timeline rules.

    The overlap grace periods default to the module constants and can be
    overridden per instance.
    """

    def __init__(
        self,
        config: Optional[ValidationConfig] = None,
        today: Optional[date] = None,
        education_overlap_grace_months: float = EDUCATION_OVERLAP_GRACE_MONTHS,
        work_overlap_grace_months: float = WORK_OVERLAP_GRACE_MONTHS,
    ):
        self.config = config or ValidationConfig()
        self._today = today
        self.education_overlap_grace_months = education_overlap_grace_months
        self.work_overlap_grace_months = work_overlap_grace_months

    @property
    def today(self) -> date:
        return self._today or date.today()

    # ===== EDUCATION =====

    def validate_education_timeline(self, periods: Sequence[EducationPeriod]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        for index, period in enumerate(periods):
            issues.extend(self._check_education_period(index, period))
        issues.extend(self._check_education_overlaps(periods))
        logger.debug(f"Education timeline: {len(issues)} issues over {len(periods)} periods")
        return issues

    def _check_education_period(self, index: int, period: EducationPeriod) -> List[ValidationIssue]:
        today = self.today
        max_years = self.config.max_future_education_years
        issues: List[ValidationIssue] = []
        start, end = period.start_date, period.end_date

        if end is not None and not period.is_ongoing:
            years_ahead = years_between(today, end)
            if years_ahead > max_years:
                issues.append(ValidationIssue(
                    type="critical",
                    category="education",
                    message=f"Graduation date {end.year} is more than {max_years} years in the future",
                    detected_date=format_date(end),
                    suggested_fix=f"Consider checking if this should be {end.year - 10} instead.",
                    confidence=0.9,
                    rule=IssueRule.EDUCATION_END_FAR_FUTURE,
                    period_index=index,
                ))
            elif years_ahead > EDUCATION_NEAR_FUTURE_YEARS:
                issues.append(ValidationIssue(
                    type="warning",
                    category="education",
                    message=f"Graduation date {end.year} is {years_ahead:.1f} years in the future",
                    detected_date=format_date(end),
                    suggested_fix="Verify the expected graduation date.",
                    confidence=0.7,
                    rule=IssueRule.EDUCATION_END_NEAR_FUTURE,
                    period_index=index,
                ))

        if start is not None and months_between(today, start) > EDUCATION_START_FUTURE_MONTHS:
            issues.append(ValidationIssue(
                type="critical",
                category="education",
                message=f"Education start date {format_date(start)} is in the future",
                detected_date=format_date(start),
                suggested_fix="Check whether the start year is correct.",
                confidence=0.85,
                rule=IssueRule.EDUCATION_START_FUTURE,
                period_index=index,
            ))

        if start is not None and end is not None and not period.is_ongoing:
            if start >= end:
                issues.append(ValidationIssue(
                    type="critical",
                    category="education",
                    message=f"Education start date ({format_date(start)}) is not before the end date ({format_date(end)})",
                    detected_date=f"{format_date(start)} - {format_date(end)}",
                    suggested_fix="Please check and correct the date order.",
                    confidence=0.95,
                    rule=IssueRule.EDUCATION_DATE_ORDER,
                    period_index=index,
                ))
            else:
                duration = years_between(start, end)
                if duration > EDUCATION_MAX_DURATION_YEARS:
                    issues.append(ValidationIssue(
                        type="warning",
                        category="education",
                        message=f"Education period of {duration:.1f} years is unusually long",
                        detected_date=f"{format_date(start)} - {format_date(end)}",
                        suggested_fix="Verify the start and end dates.",
                        confidence=0.6,
                        rule=IssueRule.EDUCATION_LONG_DURATION,
                        period_index=index,
                    ))
                elif duration < EDUCATION_MIN_DEGREE_YEARS and period.degree and "degree" in period.degree.lower():
                    issues.append(ValidationIssue(
                        type="suggestion",
                        category="education",
                        message=f"Degree duration of {describe_span(duration * 12)} seems short",
                        detected_date=f"{format_date(start)} - {format_date(end)}",
                        suggested_fix="Verify the program dates.",
                        confidence=0.5,
                        rule=IssueRule.EDUCATION_SHORT_DURATION,
                        period_index=index,
                    ))

        if period.is_ongoing and start is not None and years_between(start, today) > EDUCATION_STALE_ONGOING_YEARS:
            issues.append(ValidationIssue(
                type="warning",
                category="education",
                message=f"Education at {period.institution} has been ongoing since {start.year}",
                detected_date=format_date(start),
                suggested_fix="Verify that this education is still current.",
                confidence=0.7,
                rule=IssueRule.EDUCATION_STALE_ONGOING,
                period_index=index,
            ))

        return issues

    def _check_education_overlaps(self, periods: Sequence[EducationPeriod]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        today = self.today
        for (i, a), (j, b) in combinations(enumerate(periods), 2):
            window = overlap_window(
                a.start_date, effective_end(a.end_date, a.is_ongoing, today),
                b.start_date, effective_end(b.end_date, b.is_ongoing, today),
            )
            if window is None:
                continue
            months = months_between(*window)
            if self._education_overlap_excused(a, b, months):
                logger.debug(f"Education overlap excused: {a.institution!r} / {b.institution!r}")
                continue
            issues.append(ValidationIssue(
                type="suggestion",
                category="education",
                message=(
                    f"Education at {a.institution} and {b.institution} overlaps by "
                    f"{describe_span(months)}"
                ),
                detected_date=f"{format_date(window[0])} - {format_date(window[1])}",
                suggested_fix="Confirm both programs were attended at the same time.",
                confidence=0.6,
                rule=IssueRule.EDUCATION_OVERLAP,
                period_index=j,
            ))
        return issues

    def _education_overlap_excused(self, a: EducationPeriod, b: EducationPeriod, months: float) -> bool:
        same_institution = (
            a.institution != UNKNOWN_INSTITUTION
            and a.institution.strip().lower() == b.institution.strip().lower()
        )
        if same_institution:
            return True
        for period in (a, b):
            if period.degree and _mentions(period.degree, OVERLAP_EXEMPT_CREDENTIALS):
                return True
        return months < self.education_overlap_grace_months

    # ===== WORK =====

    def validate_work_timeline(self, periods: Sequence[WorkExperience]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        for index, period in enumerate(periods):
            issues.extend(self._check_work_period(index, period))
        issues.extend(self._check_work_overlaps(periods))
        issues.extend(self._check_work_gaps(periods))
        logger.debug(f"Work timeline: {len(issues)} issues over {len(periods)} periods")
        return issues

    def _check_work_period(self, index: int, period: WorkExperience) -> List[ValidationIssue]:
        today = self.today
        max_months = self.config.max_future_work_months
        issues: List[ValidationIssue] = []
        start, end = period.start_date, period.end_date

        if end is not None and not period.is_ongoing:
            months_ahead = months_between(today, end)
            if months_ahead > max_months:
                issues.append(ValidationIssue(
                    type="critical",
                    category="work",
                    message=f"Work end date {format_date(end)} is more than {max_months} months in the future",
                    detected_date=format_date(end),
                    suggested_fix="Use 'Present' for a current role or correct the end date.",
                    confidence=0.9,
                    rule=IssueRule.WORK_END_FAR_FUTURE,
                    period_index=index,
                ))
            elif months_ahead > WORK_NEAR_FUTURE_MONTHS:
                issues.append(ValidationIssue(
                    type="warning",
                    category="work",
                    message=f"Work end date {format_date(end)} is {describe_span(months_ahead)} in the future",
                    detected_date=format_date(end),
                    suggested_fix="Consider marking this role as 'Present'.",
                    confidence=0.7,
                    rule=IssueRule.WORK_END_NEAR_FUTURE,
                    period_index=index,
                ))

        if start is not None and months_between(today, start) > max_months:
            issues.append(ValidationIssue(
                type="critical",
                category="work",
                message=f"Work start date {format_date(start)} is in the future",
                detected_date=format_date(start),
                suggested_fix="Check whether the start year is correct.",
                confidence=0.85,
                rule=IssueRule.WORK_START_FUTURE,
                period_index=index,
            ))

        if start is not None and end is not None and not period.is_ongoing:
            if start >= end:
                issues.append(ValidationIssue(
                    type="critical",
                    category="work",
                    message=f"Work start date ({format_date(start)}) is not before the end date ({format_date(end)})",
                    detected_date=f"{format_date(start)} - {format_date(end)}",
                    suggested_fix="Please check and correct the date order.",
                    confidence=0.95,
                    rule=IssueRule.WORK_DATE_ORDER,
                    period_index=index,
                ))
            elif (end - start).days < WORK_SHORT_DURATION_DAYS:
                issues.append(ValidationIssue(
                    type="warning",
                    category="work",
                    message=f"Work period at {period.company} lasted only {(end - start).days} days",
                    detected_date=f"{format_date(start)} - {format_date(end)}",
                    suggested_fix="Verify the dates of this very short role.",
                    confidence=0.7,
                    rule=IssueRule.WORK_SHORT_DURATION,
                    period_index=index,
                ))

        if period.is_ongoing and start is not None and years_between(start, today) > WORK_STALE_ONGOING_YEARS:
            issues.append(ValidationIssue(
                type="suggestion",
                category="work",
                message=f"Role at {period.company} has been ongoing since {start.year}",
                detected_date=format_date(start),
                suggested_fix="Consider if this is still accurate.",
                confidence=0.6,
                rule=IssueRule.WORK_STALE_ONGOING,
                period_index=index,
            ))

        return issues

    def _check_work_overlaps(self, periods: Sequence[WorkExperience]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        today = self.today
        for (i, a), (j, b) in combinations(enumerate(periods), 2):
            window = overlap_window(
                a.start_date, effective_end(a.end_date, a.is_ongoing, today),
                b.start_date, effective_end(b.end_date, b.is_ongoing, today),
            )
            if window is None:
                continue
            months = months_between(*window)
            if self._work_overlap_excused(a, b, months):
                logger.debug(f"Work overlap excused: {a.company!r} / {b.company!r}")
                continue
            issues.append(ValidationIssue(
                type="warning",
                category="work",
                message=f"Work at {a.company} and {b.company} overlaps by {describe_span(months)}",
                detected_date=f"{format_date(window[0])} - {format_date(window[1])}",
                suggested_fix="Clarify whether these roles were held at the same time.",
                confidence=0.7,
                rule=IssueRule.WORK_OVERLAP,
                period_index=j,
            ))
        return issues

    def _work_overlap_excused(self, a: WorkExperience, b: WorkExperience, months: float) -> bool:
        # labels only, never bullet text
        texts = [f"{p.position} {p.company}" for p in (a, b)]
        if any(_mentions(text, WORK_OVERLAP_EXCUSAL_KEYWORDS) for text in texts):
            return True
        if months < self.work_overlap_grace_months:
            return True
        tagged = [_mentions(text, INDUSTRY_KEYWORDS) for text in texts]
        return tagged[0] != tagged[1]

    def _check_work_gaps(self, periods: Sequence[WorkExperience]) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        dated = sorted(
            ((index, p) for index, p in enumerate(periods) if p.start_date is not None),
            key=lambda pair: pair[1].start_date,
        )
        for (_, previous), (index, following) in zip(dated, dated[1:]):
            if previous.is_ongoing or previous.end_date is None:
                continue
            gap = months_between(previous.end_date, following.start_date)
            if gap > WORK_GAP_MONTHS:
                issues.append(ValidationIssue(
                    type="suggestion",
                    category="work",
                    message=(
                        f"Gap of {describe_span(gap)} between {previous.company} "
                        f"and {following.company}"
                    ),
                    detected_date=f"{format_date(previous.end_date)} - {format_date(following.start_date)}",
                    suggested_fix="Consider briefly explaining this gap.",
                    confidence=0.5,
                    rule=IssueRule.WORK_GAP,
                    period_index=index,
                ))
        return issues
