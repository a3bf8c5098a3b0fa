"""
Section segmentation: split resume text into one raw block per education or
work period.

Two passes over the same line walk:
  - Header-driven: a short header line ("EDUCATION", "Work Experience") opens
    a section; a header of the other domain or a neutral header ("Skills")
    closes it. Lines inside are grouped into one block per dated entry.
  - Headerless fallback: outside any education or work section (before the
    first header or after a neutral one), a short entry line mentioning a
    topical keyword (university, company, intern, ...) is captured with up to
    two lines of context on each side. Sentences from a summary or objective
    never anchor a block.

Blocks may overlap; each is parsed independently downstream.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Pattern, Sequence, Tuple

from resume_dates.core.constants import (
    CONTEXT_LINES,
    EDUCATION_KEYWORDS,
    EDUCATION_SECTION_HEADERS,
    MAX_ENTRY_SEGMENT_WORDS,
    MAX_HEADER_WORDS,
    NEUTRAL_SECTION_HEADERS,
    PROFILE_SECTION_HEADERS,
    WORK_KEYWORDS,
    WORK_SECTION_HEADERS,
)
from resume_dates.core.date_parser import ResumeDateParser
from resume_dates.core.text_normalization import (
    clean_label,
    compact_letters,
    is_bullet_line,
    normalize_header,
    split_segments,
)

logger = logging.getLogger(__name__)

SectionKind = Literal["education", "work", "neutral"]


def _word_pattern(keywords: Sequence[str]) -> Pattern[str]:
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


EDUCATION_TOPIC_RE = _word_pattern(EDUCATION_KEYWORDS)
WORK_TOPIC_RE = _word_pattern(WORK_KEYWORDS)


HEADER_KINDS = (
    ("education", EDUCATION_SECTION_HEADERS),
    ("work", WORK_SECTION_HEADERS),
    ("neutral", NEUTRAL_SECTION_HEADERS),
)


def detect_section_header(line: str) -> Optional[SectionKind]:
    """
    Classify a line as an education, work or neutral section header.

    Headers are short (at most five words) and never carry digits, which keeps
    entry lines such as "Career Fair Volunteer, 2019" from being read as a
    "career" header. A profile word beats a domain word on the same line, so
    "Career Objective" is neutral. Returns None for ordinary lines.
    """
    normalized = normalize_header(line)
    if not normalized or any(ch.isdigit() for ch in normalized):
        return None

    # whole line is a header with broken spacing: "E D U C A T I O N", "educati on"
    compact = compact_letters(normalized)
    for kind, headers in HEADER_KINDS:
        if any(compact == header.replace(" ", "") for header in headers):
            return kind

    if len(normalized.split()) > MAX_HEADER_WORDS:
        return None
    if _contains_header(normalized, PROFILE_SECTION_HEADERS):
        return "neutral"
    for kind, headers in HEADER_KINDS:
        if _contains_header(normalized, headers):
            return kind
    return None


def _contains_header(normalized: str, headers: Sequence[str]) -> bool:
    return any(re.search(rf"\b{re.escape(header)}\b", normalized) for header in headers)


def is_prose_line(line: str) -> bool:
    """Objective or summary sentences mention keywords too; entry lines are short labels."""
    return any(len(segment.split()) > MAX_ENTRY_SEGMENT_WORDS for segment in split_segments(line))


@dataclass
class _Entry:
    lines: List[str] = field(default_factory=list)
    date_count: int = 0
    has_ongoing: bool = False

    @property
    def has_range(self) -> bool:
        return self.date_count >= 2 or (self.date_count >= 1 and self.has_ongoing)

    def text(self) -> str:
        return "\n".join(self.lines)


class SectionSegmenter:
    def __init__(self, parser: ResumeDateParser):
        self.parser = parser

    def extract_education_sections(self, text: str) -> List[str]:
        return self._extract_sections(text, "education", EDUCATION_TOPIC_RE)

    def extract_work_sections(self, text: str) -> List[str]:
        return self._extract_sections(text, "work", WORK_TOPIC_RE)

    def _extract_sections(self, text: str, target: SectionKind, topic_re: Pattern[str]) -> List[str]:
        if not text or not text.strip():
            return []

        lines = text.splitlines()
        blocks: List[str] = []
        current_section: Optional[SectionKind] = None
        section_lines: List[str] = []
        covered_until = -1

        for index, line in enumerate(lines):
            header = detect_section_header(line)
            if header is not None:
                if current_section == target:
                    blocks.extend(self._split_entries(section_lines))
                section_lines = []
                current_section = header
                logger.debug(f"Section header {header!r}: {line.strip()!r}")
                continue

            if current_section == target:
                section_lines.append(line)
            elif (
                current_section in (None, "neutral")
                and index > covered_until
                and topic_re.search(line)
                and not is_prose_line(line)
            ):
                low, high = self._context_window(lines, index)
                blocks.append("\n".join(l for l in lines[low:high + 1] if l.strip()))
                covered_until = high

        if current_section == target:
            blocks.extend(self._split_entries(section_lines))

        unique: List[str] = []
        for block in blocks:
            if block and block not in unique:
                unique.append(block)
        logger.debug(f"Found {len(unique)} {target} blocks")
        return unique

    # ===== INSIDE A SECTION =====

    def _split_entries(self, section_lines: List[str]) -> List[str]:
        """
        Group section lines into one block per period.

        A dated, non-bullet line anchors an entry. Undated lines before it
        (company, title, institution) join it. Bullets stay with the entry
        above them.
        """
        entries: List[_Entry] = []
        current: Optional[_Entry] = None
        pending: List[str] = []

        for line in section_lines:
            if not line.strip():
                if current is not None and pending:
                    current.lines.extend(pending)
                    pending = []
                continue

            if is_bullet_line(line):
                if current is not None:
                    current.lines.extend(pending)
                    current.lines.append(line)
                    pending = []
                else:
                    pending.append(line)
                continue

            date_count, has_ongoing = self._count_dates(line)
            if date_count == 0:
                pending.append(line)
                continue

            # a bare "2018" or "Graduated May 2022" line completes the entry above
            single = date_count == 1 and not has_ongoing and len(clean_label(line).split()) <= 1
            if current is not None and single and not current.has_range and not pending:
                current.lines.append(line)
                current.date_count += 1
                continue

            if current is not None:
                entries.append(current)
            current = _Entry(lines=pending + [line], date_count=date_count, has_ongoing=has_ongoing)
            pending = []

        if current is not None:
            current.lines.extend(pending)
            entries.append(current)

        return [entry.text() for entry in entries]

    def _count_dates(self, line: str) -> Tuple[int, bool]:
        parsed = [item.parsed_date for item in self.parser.extract_dates_from_text(line) if item.parsed_date]
        real = [p for p in parsed if not p.is_ongoing]
        return len(real), len(real) < len(parsed)

    def _is_dated(self, line: str) -> bool:
        count, ongoing = self._count_dates(line)
        return count > 0 or ongoing

    # ===== HEADERLESS FALLBACK =====

    def _context_window(self, lines: List[str], index: int) -> Tuple[int, int]:
        """
        Up to CONTEXT_LINES lines either side of ``index``.

        The window stops at blank lines and headers, and when the anchor line
        is itself dated it never grows into a neighbour carrying its own dates.
        """
        anchor_dated = self._is_dated(lines[index])

        def usable(position: int) -> bool:
            candidate = lines[position]
            if not candidate.strip() or detect_section_header(candidate) is not None:
                return False
            return not (anchor_dated and self._is_dated(candidate))

        low = index
        while low > 0 and index - low < CONTEXT_LINES and usable(low - 1):
            low -= 1
        high = index
        while high < len(lines) - 1 and high - index < CONTEXT_LINES and usable(high + 1):
            high += 1
        return low, high
