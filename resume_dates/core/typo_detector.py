"""
Year typo detection.

Looks at every start/end date attached to a period and proposes arithmetic
corrections for implausible years:
  - year typos:      far-ahead year replaced by this year, last year, the year before
  - future typos:    > 60 months ahead and past the context limit -> year - 10, this year
  - transpositions:  adjacent-digit swaps that land closer to now (2202 -> 2022)
  - off-by-one:      year +/- 1

Proposals under the configured confidence threshold are dropped.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Union

from resume_dates.core.confidence_calculator import ConfidenceCalculator
from resume_dates.core.constants import (
    DECADE_SHIFT_YEARS,
    DECADE_TYPO_MIN_YEAR,
    DEFAULT_FUTURE_MONTHS,
    FUTURE_TYPO_MONTHS,
    REASONABLE_MIN_YEAR,
    REASONABLE_YEARS_AHEAD,
    TYPO_YEARS_AHEAD,
)
from resume_dates.core.date_utils import months_between
from resume_dates.core.schemas import DateSuggestion, EducationPeriod, ValidationConfig, WorkExperience

logger = logging.getLogger(__name__)

Period = Union[EducationPeriod, WorkExperience]


class DateTypoDetector:
    def __init__(self, config: Optional[ValidationConfig] = None, today: Optional[date] = None):
        self.config = config or ValidationConfig()
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def current_year(self) -> int:
        return self.today.year

    def detect_typos(
        self, education: Sequence[EducationPeriod], work: Sequence[WorkExperience]
    ) -> List[DateSuggestion]:
        suggestions: List[DateSuggestion] = []
        for context, periods in (("education", education), ("work", work)):
            for period in periods:
                for value in (period.start_date, period.end_date):
                    if value is not None:
                        suggestions.extend(self.check_date(value, context))

        kept = [s for s in suggestions if s.confidence >= self.config.confidence_threshold]
        logger.debug(f"Typo detection: {len(kept)} of {len(suggestions)} proposals above threshold")
        return kept

    def check_date(self, value: date, context: str) -> List[DateSuggestion]:
        """All typo proposals for one date, unfiltered."""
        return (
            self.detect_year_typos(value.year, context)
            + self.detect_future_typos(value, context)
            + self.detect_transpositions(value.year)
            + self.detect_off_by_one(value.year, context)
        )

    def detect_year_typos(self, year: int, context: str) -> List[DateSuggestion]:
        current = self.current_year
        if year <= current + TYPO_YEARS_AHEAD:
            return []
        suggestions = []
        for candidate in (current, current - 1, current - 2):
            confidence, _ = ConfidenceCalculator.year_typo(year, candidate, current, context)
            if confidence > 0.5:
                suggestions.append(DateSuggestion(
                    original_date=str(year),
                    suggested_date=str(candidate),
                    reason=f"Year {year} is unusually far ahead; {candidate} may have been intended ({context})",
                    confidence=confidence,
                ))
        return suggestions

    def detect_future_typos(self, value: date, context: str) -> List[DateSuggestion]:
        months_ahead = months_between(self.today, value)
        if months_ahead <= FUTURE_TYPO_MONTHS or months_ahead <= self._future_limit_months(context):
            return []

        suggestions = []
        decade_back = value.year - DECADE_SHIFT_YEARS
        if DECADE_TYPO_MIN_YEAR <= decade_back <= self.current_year:
            suggestions.append(DateSuggestion(
                original_date=str(value.year),
                suggested_date=str(decade_back),
                reason=f"Possible decade typo: {value.year} is more than five years ahead",
                confidence=0.8,
            ))
        suggestions.append(DateSuggestion(
            original_date=str(value.year),
            suggested_date=str(self.current_year),
            reason=f"Date {value.year} is more than five years ahead; the current year may be intended",
            confidence=0.6,
        ))
        return suggestions

    def _future_limit_months(self, context: str) -> float:
        if context == "education":
            return self.config.max_future_education_years * 12
        if context == "work":
            return self.config.max_future_work_months
        return DEFAULT_FUTURE_MONTHS

    def detect_transpositions(self, year: int) -> List[DateSuggestion]:
        current = self.current_year
        digits = str(year)
        suggestions = []
        seen = set()
        for i in range(len(digits) - 1):
            swapped_digits = digits[:i] + digits[i + 1] + digits[i] + digits[i + 2:]
            if swapped_digits == digits or swapped_digits.startswith("0") or swapped_digits in seen:
                continue
            seen.add(swapped_digits)
            swapped = int(swapped_digits)
            if not REASONABLE_MIN_YEAR <= swapped <= current + REASONABLE_YEARS_AHEAD:
                continue
            if abs(swapped - current) >= abs(year - current):
                continue
            confidence, _ = ConfidenceCalculator.transposition(year, swapped, current)
            if confidence > 0.4:
                suggestions.append(DateSuggestion(
                    original_date=digits,
                    suggested_date=swapped_digits,
                    reason=f"Digits may be transposed: {digits} -> {swapped_digits}",
                    confidence=confidence,
                ))
        return suggestions

    def detect_off_by_one(self, year: int, context: str) -> List[DateSuggestion]:
        current = self.current_year
        suggestions = []
        for candidate in (year - 1, year + 1):
            confidence, _ = ConfidenceCalculator.off_by_one(year, candidate, current, context)
            if confidence > 0.3:
                suggestions.append(DateSuggestion(
                    original_date=str(year),
                    suggested_date=str(candidate),
                    reason=f"Possible off-by-one year: {year} -> {candidate}",
                    confidence=confidence,
                ))
        return suggestions
