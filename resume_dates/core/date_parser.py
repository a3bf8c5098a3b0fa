"""
Date pattern matching, single-date parsing and full-text date extraction.

Matchers run in the fixed order of ``DATE_MATCHERS``. For any position the
first matcher wins:
  - a later match with the same (start_index, text) as an earlier one is dropped
  - a later match lying inside the span of an earlier one is dropped, so
    "September 2018" never also yields a bare "2018", and an invalid numeric
    date such as "2025/13/45" does not leak "2025" as a valid year

Year ranges ("2018 - 2022", "2019 - Present") are emitted as two point dates,
one per side, never as a range entity.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Pattern, Sequence, Set, Tuple

from resume_dates.core.constants import (
    CONTEXT_WINDOW,
    DATE_RANGE_RE,
    EDUCATION_CONTEXT_KEYWORDS,
    FORMAT_CONFIDENCE,
    FULL_DATE_RE,
    MAX_MATCHES_PER_PATTERN,
    MAX_YEARS_AHEAD,
    MIN_PARSEABLE_YEAR,
    MONTH_NAMES,
    MONTH_YEAR_RE,
    ONGOING_KEYWORDS,
    PRESENT_RE,
    WORK_CONTEXT_KEYWORDS,
    YEAR_ONLY_RE,
)
from resume_dates.core.observer import NullObserver, ValidationObserver
from resume_dates.core.schemas import DateFormat, ExtractedDate, ParsedDate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateMatcher:
    name: str
    pattern: Pattern[str]
    is_range: bool = False


DATE_MATCHERS: Tuple[DateMatcher, ...] = (
    DateMatcher("month_year", MONTH_YEAR_RE),
    DateMatcher("full_date", FULL_DATE_RE),
    DateMatcher("year_only", YEAR_ONLY_RE),
    DateMatcher("present", PRESENT_RE),
    DateMatcher("date_range", DATE_RANGE_RE, is_range=True),
)


def _keyword_pattern(keywords: Sequence[str]) -> Pattern[str]:
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


EDUCATION_CONTEXT_RE = _keyword_pattern(EDUCATION_CONTEXT_KEYWORDS)
WORK_CONTEXT_RE = _keyword_pattern(WORK_CONTEXT_KEYWORDS)


class ResumeDateParser:
    """Parses and extracts resume dates relative to a reference day.

    ``today`` pins the reference day (tests, replays); when omitted the system
    clock is read on every call.
    """

    def __init__(self, today: Optional[date] = None, observer: Optional[ValidationObserver] = None):
        self._today = today
        self.observer = observer or NullObserver()

    @property
    def today(self) -> date:
        return self._today or date.today()

    # ===== SINGLE DATE =====

    def parse_date(self, text: str) -> Optional[ParsedDate]:
        """
        Resolve one date substring.

        Tried in order, first success wins:
          1. ongoing keyword anywhere in the text -> PRESENT, normalized to today
          2. month name + year                    -> MONTH_YEAR, first of month
          3. bare year in [1950, current + 10]    -> YEAR_ONLY, January 1
          4. numeric full date, calendar-checked  -> FULL_DATE

        Returns None when nothing matches or the numbers do not form a real date.
        """
        if not isinstance(text, str) or not text.strip():
            return None
        try:
            original = text.strip()
            return (
                self._parse_ongoing(original)
                or self._parse_month_year(original)
                or self._parse_year_only(original)
                or self._parse_full_date(original)
            )
        except (ValueError, TypeError, IndexError) as exc:
            logger.debug(f"parse_date failed for {text!r}: {exc}")
            self.observer.log("warn", "parsing", "parse_date_failed", {"text": text}, error=str(exc))
            return None

    def detect_date_format(self, text: str) -> Optional[DateFormat]:
        parsed = self.parse_date(text)
        return parsed.format if parsed else None

    def normalize_date(self, text: str) -> Optional[date]:
        parsed = self.parse_date(text)
        return parsed.normalized if parsed else None

    def _year_in_range(self, year: int) -> bool:
        return MIN_PARSEABLE_YEAR <= year <= self.today.year + MAX_YEARS_AHEAD

    def _parse_ongoing(self, text: str) -> Optional[ParsedDate]:
        lowered = text.lower()
        if not any(keyword in lowered for keyword in ONGOING_KEYWORDS):
            return None
        return ParsedDate(
            original=text,
            normalized=self.today,
            format=DateFormat.PRESENT,
            is_ongoing=True,
            confidence=FORMAT_CONFIDENCE["EXACT_MATCH"],
        )

    def _parse_month_year(self, text: str) -> Optional[ParsedDate]:
        match = MONTH_YEAR_RE.search(text)
        if not match:
            return None
        month = _month_number(match.group(1))
        year = int(match.group(2))
        if month is None or not self._year_in_range(year):
            return None
        return ParsedDate(
            original=text,
            normalized=date(year, month, 1),
            format=DateFormat.MONTH_YEAR,
            confidence=FORMAT_CONFIDENCE["EXACT_MATCH"],
        )

    def _parse_year_only(self, text: str) -> Optional[ParsedDate]:
        if not re.fullmatch(r"\d{4}", text):
            return None
        year = int(text)
        if not self._year_in_range(year):
            return None
        return ParsedDate(
            original=text,
            normalized=date(year, 1, 1),
            format=DateFormat.YEAR_ONLY,
            confidence=FORMAT_CONFIDENCE["PATTERN_MATCH"],
        )

    def _parse_full_date(self, text: str) -> Optional[ParsedDate]:
        match = FULL_DATE_RE.search(text)
        if not match:
            return None
        groups = match.groupdict()
        if groups["year"]:
            year, month, day = groups["year"], groups["month"], groups["day"]
        elif groups["iso_year"]:
            year, month, day = groups["iso_year"], groups["iso_month"], groups["iso_day"]
        else:
            year, month, day = groups["dash_year"], groups["dash_month"], groups["dash_day"]
        year, month, day = int(year), int(month), int(day)
        if not 1 <= month <= 12 or not self._year_in_range(year):
            return None
        try:
            normalized = date(year, month, day)
        except ValueError:
            # Day outside the month (Feb 30, non-leap Feb 29, ...)
            return None
        return ParsedDate(
            original=text,
            normalized=normalized,
            format=DateFormat.FULL_DATE,
            confidence=FORMAT_CONFIDENCE["EXACT_MATCH"],
        )

    # ===== FULL TEXT =====

    def extract_dates_from_text(self, text: str) -> List[ExtractedDate]:
        """
        Find every date mention in ``text``, ordered by position.

        Never returns None. On unexpected failure the error is reported to the
        observer and an empty list is returned.
        """
        if not isinstance(text, str) or not text:
            return []
        try:
            return self._extract(text)
        except Exception as exc:
            logger.warning(f"Date extraction failed: {exc}")
            self.observer.log("error", "parsing", "extract_dates_failed", {"length": len(text)}, error=str(exc))
            return []

    def _extract(self, text: str) -> List[ExtractedDate]:
        accepted: List[ExtractedDate] = []
        seen: Set[Tuple[int, str]] = set()

        for matcher in DATE_MATCHERS:
            for count, match in enumerate(matcher.pattern.finditer(text)):
                if count >= MAX_MATCHES_PER_PATTERN:
                    logger.debug(f"Match cap reached for {matcher.name}")
                    self.observer.log(
                        "warn", "edge-case", "match_cap_reached",
                        {"matcher": matcher.name, "cap": MAX_MATCHES_PER_PATTERN},
                    )
                    break
                if matcher.is_range:
                    spans = [(match.start(1), match.group(1)), (match.start(2), match.group(2))]
                else:
                    spans = [(match.start(), match.group(0))]

                for start, token in spans:
                    end = start + len(token)
                    if (start, token) in seen or _is_contained(start, end, accepted):
                        continue
                    seen.add((start, token))
                    accepted.append(self._build_extracted(text, token, start, end))

        accepted.sort(key=lambda item: item.start_index)
        logger.debug(f"Extracted {len(accepted)} date mentions")
        return accepted

    def _build_extracted(self, text: str, token: str, start: int, end: int) -> ExtractedDate:
        context = text[max(0, start - CONTEXT_WINDOW): min(len(text), end + CONTEXT_WINDOW)].strip()
        return ExtractedDate(
            text=token,
            start_index=start,
            end_index=end,
            parsed_date=self.parse_date(token),
            context=context,
        )

    def extract_education_dates(self, text: str) -> List[ExtractedDate]:
        """Dates whose surrounding context mentions schooling (university, degree, GPA, ...)."""
        return self._filter_by_context(text, EDUCATION_CONTEXT_RE.search)

    def extract_work_experience_dates(self, text: str) -> List[ExtractedDate]:
        """Dates whose surrounding context mentions employment (company, engineer, intern, ...)."""
        return self._filter_by_context(text, WORK_CONTEXT_RE.search)

    def _filter_by_context(self, text: str, predicate: Callable[[str], object]) -> List[ExtractedDate]:
        return [item for item in self.extract_dates_from_text(text) if predicate(item.context)]


def _month_number(name: str) -> Optional[int]:
    prefix = name.lower()[:3]
    for index, month in enumerate(MONTH_NAMES, start=1):
        if month.startswith(prefix):
            return index
    return None


def _is_contained(start: int, end: int, accepted: List[ExtractedDate]) -> bool:
    return any(item.start_index <= start and end <= item.end_index for item in accepted)
