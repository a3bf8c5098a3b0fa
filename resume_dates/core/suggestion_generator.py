"""
Suggestion generation.

Merges typo proposals with fixes aimed at specific validator issues, plus
timeline-level hints (education gaps, overlapping jobs). The final list is
deduplicated on (original_date, suggested_date), filtered by the confidence
threshold and sorted most-confident first. No cap on count.
"""

import logging
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from resume_dates.core.confidence_calculator import ConfidenceCalculator
from resume_dates.core.constants import (
    ANY_YEAR_RE,
    DEFAULT_DEGREE_DURATIONS,
    DEGREE_DURATIONS,
    EDUCATION_GAP_YEARS,
    PRESENT_WINDOW_PAST_MONTHS,
    TYPICAL_EDUCATION_YEARS,
    TYPICAL_WORK_YEARS,
    WORK_OVERLAP_SUGGESTION_MONTHS,
)
from resume_dates.core.date_utils import format_date, format_year, months_between, years_between
from resume_dates.core.schemas import (
    DateSuggestion,
    EducationPeriod,
    IssueRule,
    ValidationConfig,
    ValidationIssue,
    WorkExperience,
)
from resume_dates.core.typo_detector import DateTypoDetector

logger = logging.getLogger(__name__)

MAX_WORK_END_OFFSET_YEARS = 5


def typical_durations(degree: Optional[str]) -> Tuple[int, ...]:
    """Typical program lengths in years for a degree label (bachelor -> 4, 3, 5)."""
    lowered = (degree or "").lower()
    for keywords, durations in DEGREE_DURATIONS:
        if any(keyword in lowered for keyword in keywords):
            return durations
    return DEFAULT_DEGREE_DURATIONS


def replace_date_year(text: str, year: int) -> str:
    """Swap the first 4-digit year in ``text`` for ``year``."""
    return ANY_YEAR_RE.sub(str(year), text, count=1)


class DateSuggestionGenerator:
    def __init__(
        self,
        config: Optional[ValidationConfig] = None,
        today: Optional[date] = None,
        typo_detector: Optional[DateTypoDetector] = None,
    ):
        self.config = config or ValidationConfig()
        self._today = today
        self.typo_detector = typo_detector or DateTypoDetector(self.config, today)
        self._issue_handlers: Dict[IssueRule, Callable[..., List[DateSuggestion]]] = {
            IssueRule.EDUCATION_END_FAR_FUTURE: self._graduation_suggestions,
            IssueRule.EDUCATION_END_NEAR_FUTURE: self._graduation_suggestions,
            IssueRule.EDUCATION_DATE_ORDER: self._date_order_suggestions,
            IssueRule.EDUCATION_LONG_DURATION: self._duration_suggestions,
            IssueRule.EDUCATION_SHORT_DURATION: self._duration_suggestions,
            IssueRule.WORK_END_FAR_FUTURE: self._work_end_suggestions,
            IssueRule.WORK_END_NEAR_FUTURE: self._work_end_suggestions,
            IssueRule.WORK_DATE_ORDER: self._date_order_suggestions,
        }

    @property
    def today(self) -> date:
        return self._today or date.today()

    def generate_suggestions(
        self,
        education: Sequence[EducationPeriod],
        work: Sequence[WorkExperience],
        issues: Sequence[ValidationIssue],
    ) -> List[DateSuggestion]:
        suggestions: List[DateSuggestion] = list(self.typo_detector.detect_typos(education, work))

        for issue in issues:
            period = self._period_for(issue, education, work)
            handler = self._issue_handlers.get(issue.rule) if issue.rule else None
            if handler is None or period is None:
                continue
            suggestions.extend(handler(period, issue))

        suggestions.extend(self.education_gap_suggestions(education))
        suggestions.extend(self.work_overlap_suggestions(work))
        return self.finalize(suggestions)

    def finalize(self, suggestions: Sequence[DateSuggestion]) -> List[DateSuggestion]:
        """Dedupe on (original, suggested) keeping the most confident copy, filter, sort."""
        best: Dict[Tuple[str, str], DateSuggestion] = {}
        for suggestion in suggestions:
            key = (suggestion.original_date, suggestion.suggested_date)
            if key not in best or suggestion.confidence > best[key].confidence:
                best[key] = suggestion
        kept = [s for s in best.values() if s.confidence >= self.config.confidence_threshold]
        kept.sort(key=lambda s: s.confidence, reverse=True)
        logger.debug(f"Suggestions: {len(kept)} kept of {len(suggestions)} proposed")
        return kept

    @staticmethod
    def _period_for(issue: ValidationIssue, education, work):
        if issue.period_index is None:
            return None
        periods = education if issue.category == "education" else work if issue.category == "work" else None
        if periods is None or not 0 <= issue.period_index < len(periods):
            return None
        return periods[issue.period_index]

    # ===== ISSUE-DRIVEN =====

    def _graduation_suggestions(self, period: EducationPeriod, issue: ValidationIssue) -> List[DateSuggestion]:
        current = self.today.year
        low, high = current - 1, current + self.config.max_future_education_years
        durations = typical_durations(period.degree)
        original = format_year(period.end_date)

        candidates: List[Tuple[int, Optional[int]]] = []
        if period.start_date is not None:
            for duration in durations:
                year = period.start_date.year + duration
                if low <= year <= high:
                    candidates.append((year, duration))
        if not candidates:
            candidates = [(year, None) for year in (current, current - 1, current - 2)]

        suggestions = []
        for year, duration in candidates:
            confidence, _ = ConfidenceCalculator.graduation_year(year, duration, durations, low, high)
            reason = (
                f"Typical {duration}-year program starting {period.start_date.year} ends in {year}"
                if duration is not None
                else f"Recent graduation year {year}"
            )
            suggestions.append(DateSuggestion(
                original_date=original,
                suggested_date=str(year),
                reason=reason,
                confidence=confidence,
            ))
        return suggestions

    def _date_order_suggestions(self, period, issue: ValidationIssue) -> List[DateSuggestion]:
        start, end = period.start_date, period.end_date
        if start is None or end is None:
            return []
        current = self.today.year
        suggestions = [DateSuggestion(
            original_date=f"{format_year(start)} - {format_year(end)}",
            suggested_date=f"{format_year(end)} - {format_year(start)}",
            reason="Start and end dates appear to be swapped",
            confidence=0.6,
        )]
        if issue.category == "education":
            typical_end = start.year + TYPICAL_EDUCATION_YEARS
        else:
            typical_end = min(start.year + TYPICAL_WORK_YEARS, current)
        suggestions.append(DateSuggestion(
            original_date=format_year(end),
            suggested_date=str(typical_end),
            reason=f"Typical end year for a period starting in {start.year}",
            confidence=0.5,
        ))
        return suggestions

    def _duration_suggestions(self, period: EducationPeriod, issue: ValidationIssue) -> List[DateSuggestion]:
        if period.start_date is None or period.end_date is None:
            return []
        return [
            DateSuggestion(
                original_date=format_year(period.end_date),
                suggested_date=str(period.start_date.year + duration),
                reason=f"Typical program length is {duration} years",
                confidence=0.4,
            )
            for duration in typical_durations(period.degree)
        ]

    def _work_end_suggestions(self, period: WorkExperience, issue: ValidationIssue) -> List[DateSuggestion]:
        end = period.end_date
        if end is None:
            return []
        current = self.today.year
        start_year = period.start_date.year if period.start_date else None

        candidates = {current, current - 1}
        if start_year is not None:
            for offset in range(1, min(MAX_WORK_END_OFFSET_YEARS, current - start_year + 1) + 1):
                if start_year + offset <= current:
                    candidates.add(start_year + offset)

        suggestions = []
        for year in sorted(candidates, reverse=True):
            confidence, _ = ConfidenceCalculator.work_end_year(year, start_year, current)
            suggestions.append(DateSuggestion(
                original_date=format_date(end),
                suggested_date=replace_date_year(format_date(end), year),
                reason=f"End year {year} fits the rest of this role's timeline",
                confidence=confidence,
            ))

        months_ahead = months_between(self.today, end)
        if -PRESENT_WINDOW_PAST_MONTHS <= months_ahead <= self.config.max_future_work_months:
            suggestions.append(DateSuggestion(
                original_date=format_date(end),
                suggested_date="Present",
                reason="End date is close to today; this role may be current",
                confidence=0.7,
            ))
        return suggestions

    # ===== TIMELINE-LEVEL =====

    def education_gap_suggestions(self, education: Sequence[EducationPeriod]) -> List[DateSuggestion]:
        dated = sorted((p for p in education if p.start_date is not None), key=lambda p: p.start_date)
        suggestions = []
        for previous, following in zip(dated, dated[1:]):
            if previous.is_ongoing or previous.end_date is None:
                continue
            gap = years_between(previous.end_date, following.start_date)
            if gap > EDUCATION_GAP_YEARS:
                suggestions.append(DateSuggestion(
                    original_date=f"{format_year(previous.end_date)} - {format_year(following.start_date)}",
                    suggested_date="Add an explanation for the gap",
                    reason=f"{gap:.1f}-year gap between {previous.institution} and {following.institution}",
                    confidence=0.3,
                ))
        return suggestions

    def work_overlap_suggestions(self, work: Sequence[WorkExperience]) -> List[DateSuggestion]:
        dated = sorted((p for p in work if p.start_date is not None), key=lambda p: p.start_date)
        suggestions = []
        for previous, following in zip(dated, dated[1:]):
            previous_end = self.today if previous.is_ongoing or previous.end_date is None else previous.end_date
            if previous_end <= following.start_date:
                continue
            overlap = months_between(following.start_date, previous_end)
            if overlap > WORK_OVERLAP_SUGGESTION_MONTHS:
                adjusted = following.start_date - timedelta(days=1)
                suggestions.append(DateSuggestion(
                    original_date=format_date(previous.end_date) if previous.end_date else "Present",
                    suggested_date=format_date(adjusted),
                    reason=f"End {previous.company} the day before {following.company} starts",
                    confidence=0.4,
                ))
        return suggestions
