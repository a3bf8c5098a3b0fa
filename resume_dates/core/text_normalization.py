"""
Line-level cleanup for resume text before section and label detection.

Conservative by intent: nothing here rewrites words inside a label, it only
strips list markers, separators and date fragments around them.
"""

import re
from typing import List

from resume_dates.core.constants import (
    DASH_RE,
    FULL_DATE_RE,
    MONTH_YEAR_RE,
    PRESENT_RE,
    YEAR_ONLY_RE,
)


BULLET_RE = re.compile(r"^[\s•●▪◦\-*>+]+")
HEADER_DECORATION_RE = re.compile(r"^[#=\s]+|[:#=\s]+$")
SEGMENT_SPLIT_RE = re.compile(r"\s*(?:[,;|]|\s[-–—]{1,2}\s(?=\D))\s*")
WHITESPACE_RE = re.compile(r"\s+")

_LABEL_TRIM = " \t,;:|()[]-–—•●*"


def is_bullet_line(line: str) -> bool:
    """True for list items like ``• Built X`` or ``- Led Y``; date ranges like ``- 2020`` are not bullets."""
    stripped = line.lstrip()
    if not stripped:
        return False
    match = BULLET_RE.match(stripped)
    if not match:
        return False
    rest = stripped[match.end():]
    return bool(rest) and not rest[:1].isdigit()


def strip_bullet(line: str) -> str:
    return BULLET_RE.sub("", line).strip()


def normalize_header(line: str) -> str:
    """Lowercase a candidate header and drop decoration such as ``## EDUCATION:``."""
    normalized = HEADER_DECORATION_RE.sub("", line.strip())
    normalized = normalized.lower().replace("&", " and ")
    return WHITESPACE_RE.sub(" ", normalized).strip()


def compact_letters(text: str) -> str:
    """
    Letters only, lowercased.

    PDF extraction often breaks words mid-token ("educati on", "E X P E R I E N C E");
    comparing compacted forms makes header keywords survive those breaks.
    """
    return re.sub(r"[^a-z]", "", text.lower())


def strip_dates(text: str) -> str:
    """Remove every date token and the dashes between them, e.g. ``Acme, 2019 - Present`` -> ``Acme,``."""
    cleaned = MONTH_YEAR_RE.sub(" ", text)
    cleaned = FULL_DATE_RE.sub(" ", cleaned)
    cleaned = YEAR_ONLY_RE.sub(" ", cleaned)
    cleaned = PRESENT_RE.sub(" ", cleaned)
    cleaned = DASH_RE.sub(" ", cleaned)
    return WHITESPACE_RE.sub(" ", cleaned).strip()


def clean_label(text: str) -> str:
    label = strip_dates(strip_bullet(text))
    return label.strip(_LABEL_TRIM).strip()


def split_segments(line: str) -> List[str]:
    """Split one resume line into its comma/pipe/dash separated parts, dropping date-only parts."""
    segments = []
    for part in SEGMENT_SPLIT_RE.split(strip_bullet(line)):
        label = clean_label(part)
        if label:
            segments.append(label)
    return segments
