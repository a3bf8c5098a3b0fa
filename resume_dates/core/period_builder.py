"""
Period building: turn segmented blocks into EducationPeriod / WorkExperience.

Labels come from keyword heuristics over the block's comma/pipe separated
segments; dates come from the block's extracted dates. A block without any
date is not a period.
"""

import logging
import re
from datetime import date
from typing import List, Optional, Sequence, Tuple

from resume_dates.core.confidence_calculator import ConfidenceCalculator
from resume_dates.core.constants import (
    COMPANY_INDICATORS,
    DEGREE_KEYWORDS,
    INSTITUTION_KEYWORDS,
    POSITION_KEYWORDS,
    UNKNOWN_COMPANY,
    UNKNOWN_INSTITUTION,
    UNKNOWN_POSITION,
)
from resume_dates.core.date_parser import ResumeDateParser
from resume_dates.core.observer import NullObserver, ValidationObserver
from resume_dates.core.schemas import EducationPeriod, ExtractedDate, WorkExperience
from resume_dates.core.section_segmenter import SectionSegmenter
from resume_dates.core.text_normalization import is_bullet_line, split_segments

logger = logging.getLogger(__name__)

MIN_INSTITUTION_LENGTH = 6
MIN_COMPANY_LENGTH = 4
MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 50


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(re.search(rf"(?<![a-z]){re.escape(keyword)}(?![a-z])", lowered) for keyword in keywords)


def has_degree_keyword(text: str) -> bool:
    return _contains_any(text, DEGREE_KEYWORDS)


def has_company_indicator(text: str) -> bool:
    return _contains_any(text, COMPANY_INDICATORS)


def has_position_keyword(text: str) -> bool:
    return _contains_any(text, POSITION_KEYWORDS)


def determine_date_range(dates: Sequence[ExtractedDate]) -> Tuple[Optional[date], Optional[date], bool]:
    """
    Reduce a block's dates to (start, end, is_ongoing).

      one date, no ongoing marker   -> end only (a completion date)
      one date + ongoing marker     -> start only, still ongoing
      two or more dates             -> earliest is start, latest is end;
                                       end stays None when ongoing

    Dates between the earliest and latest are dropped.
    """
    parsed = [item.parsed_date for item in dates if item.parsed_date is not None]
    is_ongoing = any(p.is_ongoing for p in parsed)
    real = sorted((p.normalized for p in parsed if not p.is_ongoing))

    if not real:
        return None, None, is_ongoing
    if len(real) == 1:
        if is_ongoing:
            return real[0], None, True
        return None, real[0], False
    return real[0], (None if is_ongoing else real[-1]), is_ongoing


class PeriodBuilder:
    def __init__(
        self,
        parser: ResumeDateParser,
        segmenter: Optional[SectionSegmenter] = None,
        observer: Optional[ValidationObserver] = None,
    ):
        self.parser = parser
        self.segmenter = segmenter or SectionSegmenter(parser)
        self.observer = observer or NullObserver()

    # ===== EDUCATION =====

    def parse_education_dates(self, text: str) -> List[EducationPeriod]:
        periods: List[EducationPeriod] = []
        for block in self.segmenter.extract_education_sections(text):
            try:
                period = self.build_education_period(block)
            except (ValueError, TypeError) as exc:
                self._report_block_failure("education", block, exc)
                continue
            if period is not None:
                periods.append(period)
        logger.debug(f"Built {len(periods)} education periods")
        return periods

    def build_education_period(self, block: str) -> Optional[EducationPeriod]:
        dates = self.parser.extract_dates_from_text(block)
        if not dates:
            return None

        institution, degree = self._education_labels(block)
        start, end, is_ongoing = determine_date_range(dates)
        confidence, method = ConfidenceCalculator.education_period(institution, degree, _date_confidences(dates))
        logger.debug(f"Education {institution!r} {start}..{end} ongoing={is_ongoing} ({method})")

        return EducationPeriod(
            institution=institution,
            degree=degree,
            start_date=start,
            end_date=end,
            is_ongoing=is_ongoing,
            original_text=block,
            confidence=confidence,
        )

    def _education_labels(self, block: str) -> Tuple[str, Optional[str]]:
        institution: Optional[str] = None
        degree: Optional[str] = None
        fallback: Optional[str] = None

        for line in _label_lines(block):
            for segment in split_segments(line):
                if degree is None and has_degree_keyword(segment):
                    degree = segment
                    continue
                if institution is None and _contains_any(segment, INSTITUTION_KEYWORDS):
                    institution = segment
                    continue
                if fallback is None and not has_degree_keyword(segment) and len(segment) >= MIN_INSTITUTION_LENGTH:
                    fallback = segment

        return institution or fallback or UNKNOWN_INSTITUTION, degree

    # ===== WORK =====

    def parse_work_experience(self, text: str) -> List[WorkExperience]:
        periods: List[WorkExperience] = []
        for block in self.segmenter.extract_work_sections(text):
            try:
                period = self.build_work_experience(block)
            except (ValueError, TypeError) as exc:
                self._report_block_failure("work", block, exc)
                continue
            if period is not None:
                periods.append(period)
        logger.debug(f"Built {len(periods)} work periods")
        return periods

    def build_work_experience(self, block: str) -> Optional[WorkExperience]:
        dates = self.parser.extract_dates_from_text(block)
        if not dates:
            return None

        company, position = self._work_labels(block)
        start, end, is_ongoing = determine_date_range(dates)
        confidence, method = ConfidenceCalculator.work_experience(company, position, _date_confidences(dates))
        logger.debug(f"Work {company!r}/{position!r} {start}..{end} ongoing={is_ongoing} ({method})")

        return WorkExperience(
            company=company,
            position=position,
            start_date=start,
            end_date=end,
            is_ongoing=is_ongoing,
            original_text=block,
            confidence=confidence,
        )

    def _work_labels(self, block: str) -> Tuple[str, str]:
        segments = [segment for line in _label_lines(block) for segment in split_segments(line)]

        company = next((s for s in segments if has_company_indicator(s)), None)
        position = next((s for s in segments if has_position_keyword(s) and s != company), None)

        if company is None:
            company = next(
                (
                    s for s in segments
                    if len(s) >= MIN_COMPANY_LENGTH and s != position
                ),
                None,
            )
        if position is None:
            position = next(
                (
                    s for s in segments
                    if MIN_TITLE_LENGTH <= len(s) <= MAX_TITLE_LENGTH
                    and not has_company_indicator(s)
                    and s != company
                ),
                None,
            )

        return company or UNKNOWN_COMPANY, position or UNKNOWN_POSITION

    def _report_block_failure(self, kind: str, block: str, exc: Exception) -> None:
        logger.warning(f"Skipping {kind} block after error: {exc}")
        self.observer.log("warn", "parsing", f"{kind}_block_failed", {"block": block[:100]}, error=str(exc))


def _label_lines(block: str) -> List[str]:
    return [line for line in block.splitlines() if line.strip() and not is_bullet_line(line)]


def _date_confidences(dates: Sequence[ExtractedDate]) -> List[float]:
    return [item.parsed_date.confidence for item in dates if item.parsed_date is not None]
