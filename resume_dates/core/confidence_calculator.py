"""
Confidence scoring for extracted periods, typo corrections and rule findings.

Every score is heuristic, not a probability. Downstream, the configured
confidence threshold decides which suggestions survive and which critical
issues are softened into warnings.

Confidence Scale:
  1.0   = Exact match (month name, ongoing keyword, full calendar date)
  0.9   = Very high confidence (clear rule violation)
  0.8   = High confidence (bare year, classic decade typo)
  0.7   = Medium-high confidence (rule finding with supporting data)
  0.6   = Medium confidence (plausible correction, some uncertainty)
  0.5   = Low-medium confidence (ambiguous but worth showing)
  <0.5  = Low confidence (only surfaced with a lowered threshold)
"""

from typing import Optional, Sequence, Tuple

from resume_dates.core.constants import (
    BASE_RULE_CONFIDENCE,
    COMPANY_INDICATORS,
    RECOGNIZED_INSTITUTION_KEYWORDS,
    UNKNOWN_COMPANY,
    UNKNOWN_INSTITUTION,
    UNKNOWN_POSITION,
)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _cap(value: float) -> float:
    return max(0.0, min(1.0, round(value, 4)))


class ConfidenceCalculator:
    """Central place for all date confidence logic."""

    @staticmethod
    def education_period(
        institution: str,
        degree: Optional[str],
        date_confidences: Sequence[float],
    ) -> Tuple[float, str]:
        """
        Confidence that an education block was read correctly.

        Starts at 0.5:
          + 0.2 institution found
          + 0.1 institution names a university or college
          + 0.2 degree found
          + 0.1 x mean parser confidence of the block's dates
        """
        confidence = 0.5
        method = "dates_only"
        if institution and institution != UNKNOWN_INSTITUTION:
            confidence += 0.2
            method = "institution_found"
            if any(keyword in institution.lower() for keyword in RECOGNIZED_INSTITUTION_KEYWORDS):
                confidence += 0.1
                method = "recognized_institution"
        if degree:
            confidence += 0.2
        confidence += _mean(date_confidences) * 0.1
        return _cap(confidence), method

    @staticmethod
    def work_experience(
        company: str,
        position: str,
        date_confidences: Sequence[float],
    ) -> Tuple[float, str]:
        """Same shape as ``education_period``: company (+0.2, +0.1 for a company suffix), position (+0.2), dates."""
        confidence = 0.5
        method = "dates_only"
        if company and company != UNKNOWN_COMPANY:
            confidence += 0.2
            method = "company_found"
            if any(indicator in company.lower() for indicator in COMPANY_INDICATORS):
                confidence += 0.1
                method = "company_suffix"
        if position and position != UNKNOWN_POSITION:
            confidence += 0.2
        confidence += _mean(date_confidences) * 0.1
        return _cap(confidence), method

    @staticmethod
    def year_typo(original: int, candidate: int, current_year: int, context: str) -> Tuple[float, str]:
        """
        Confidence that ``original`` was meant to be ``candidate``.

        Rewards moving closer to now, an extreme original, a candidate that fits
        the context's usual window, and the classic 1/2/10-year slips.
        """
        confidence = 0.5
        reason = "year_typo"
        if abs(candidate - current_year) < abs(original - current_year):
            confidence += 0.2
        if original > current_year + 5:
            confidence += 0.2
            reason = "extreme_future_year"
        if context == "education" and current_year - 10 <= candidate <= current_year + 4:
            confidence += 0.1
        if context == "work" and current_year - 5 <= candidate <= current_year:
            confidence += 0.1
        if abs(original - candidate) in (10, 1, 2):
            confidence += 0.15
            reason = "common_keying_slip"
        return _cap(confidence), reason

    @staticmethod
    def transposition(original: int, swapped: int, current_year: int) -> Tuple[float, str]:
        confidence = 0.4
        old_distance = abs(original - current_year)
        new_distance = abs(swapped - current_year)
        if new_distance < old_distance / 2:
            confidence += 0.3
        if original > current_year + 10:
            confidence += 0.2
        return _cap(confidence), "digit_transposition"

    @staticmethod
    def off_by_one(original: int, candidate: int, current_year: int, context: str) -> Tuple[float, str]:
        confidence = 0.3
        if context == "education" and current_year - 15 <= candidate <= current_year + 4:
            confidence += 0.2
        elif context == "work" and current_year - 10 <= candidate <= current_year:
            confidence += 0.2
        if original > current_year + 2:
            confidence += 0.2
        return _cap(confidence), "off_by_one"

    @staticmethod
    def graduation_year(candidate: int, duration: Optional[int], durations: Sequence[int], low: int, high: int) -> Tuple[float, str]:
        confidence = 0.5
        if low <= candidate <= high:
            confidence += 0.2
        if duration is not None and duration in durations:
            confidence += 0.2
            return _cap(confidence), "typical_degree_duration"
        return _cap(confidence), "recent_graduation"

    @staticmethod
    def work_end_year(candidate: int, start_year: Optional[int], current_year: int) -> Tuple[float, str]:
        confidence = 0.5
        if current_year - 5 <= candidate <= current_year:
            confidence += 0.2
        if start_year is not None and 0 <= candidate - start_year <= 10:
            confidence += 0.1
        return _cap(confidence), "plausible_end_year"

    @staticmethod
    def rule(has_good_data: bool, strict_mode: bool) -> Tuple[float, str]:
        """General rule findings: 0.7 base, +0.1 when the periods involved were read with confidence, +0.1 in strict mode."""
        confidence = BASE_RULE_CONFIDENCE
        method = "rule"
        if has_good_data:
            confidence += 0.1
            method = "rule_good_data"
        if strict_mode:
            confidence += 0.1
        return _cap(confidence), method
