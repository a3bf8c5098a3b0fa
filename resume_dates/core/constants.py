"""
Patterns, keyword sets and thresholds shared by the date engine.

Everything here is plain data. Matchers are applied in the order they are
listed in ``date_parser.DATE_MATCHERS``; the patterns themselves carry no
precedence.
"""

import re


# ===== DATE PATTERNS =====

MONTH_NAMES = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

MONTH_YEAR_RE = re.compile(
    r"\b(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?\s+(\d{4})\b",
    re.IGNORECASE,
)

# M/D/YYYY, plus the year-first forms YYYY/M/D and YYYY-MM-DD
FULL_DATE_RE = re.compile(
    r"\b(?:(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})"
    r"|(?P<iso_year>\d{4})/(?P<iso_month>\d{1,2})/(?P<iso_day>\d{1,2})"
    r"|(?P<dash_year>\d{4})-(?P<dash_month>\d{2})-(?P<dash_day>\d{2}))\b"
)

YEAR_ONLY_RE = re.compile(r"\b(?:19|20)\d{2}\b")

PRESENT_RE = re.compile(
    r"\b(?:present|current|ongoing|now|today|till date|to date|continuing)\b",
    re.IGNORECASE,
)

DATE_RANGE_RE = re.compile(
    r"\b(\d{4})\s*[-–—]\s*(\d{4}|present|current)\b",
    re.IGNORECASE,
)

# Matches any bare 4-digit run; used when rewriting a year inside a date string
ANY_YEAR_RE = re.compile(r"\b\d{4}\b")

# free-standing dashes only; "part-time" keeps its hyphen
DASH_RE = re.compile(r"(?:^|\s)[-–—]+(?=\s|$)")

ONGOING_KEYWORDS = (
    "present",
    "current",
    "ongoing",
    "now",
    "today",
    "till date",
    "to date",
    "continuing",
)

MIN_PARSEABLE_YEAR = 1950
MAX_YEARS_AHEAD = 10
MAX_MATCHES_PER_PATTERN = 200
CONTEXT_WINDOW = 50


# ===== CONFIDENCE =====

FORMAT_CONFIDENCE = {
    "EXACT_MATCH": 1.0,
    "PATTERN_MATCH": 0.8,
    "FUZZY_MATCH": 0.6,
    "GUESS": 0.4,
    "UNKNOWN": 0.2,
}


# ===== SECTION DETECTION KEYWORDS =====

EDUCATION_SECTION_HEADERS = (
    "education",
    "academic background",
    "academic qualifications",
    "educational background",
    "qualifications",
    "degrees",
)

WORK_SECTION_HEADERS = (
    "experience",
    "work experience",
    "professional experience",
    "employment",
    "career",
    "work history",
    "professional background",
)

# Headers that close both education and work sections
NEUTRAL_SECTION_HEADERS = (
    "skills",
    "projects",
    "certifications",
    "achievements",
    "awards",
    "publications",
    "references",
    "languages",
    "interests",
    "hobbies",
    "summary",
    "objective",
    "activities",
)

# Profile headers win over any domain word on the same line: "Career Objective"
PROFILE_SECTION_HEADERS = ("summary", "objective")

MAX_HEADER_WORDS = 5

# ===== TOPICAL KEYWORDS (headerless fallback and context filtering) =====

EDUCATION_KEYWORDS = (
    "university",
    "college",
    "school",
    "degree",
    "bachelor",
    "master",
    "phd",
    "doctorate",
    "diploma",
    "certificate",
    "graduation",
    "graduated",
    "education",
    "academic",
    "student",
)

WORK_KEYWORDS = (
    "company",
    "corporation",
    "inc",
    "ltd",
    "llc",
    "work",
    "job",
    "position",
    "role",
    "employment",
    "experience",
    "career",
    "professional",
    "intern",
    "internship",
    "volunteer",
)

EDUCATION_CONTEXT_KEYWORDS = EDUCATION_KEYWORDS + ("gpa", "major", "minor")
WORK_CONTEXT_KEYWORDS = WORK_KEYWORDS + (
    "manager",
    "developer",
    "engineer",
    "analyst",
    "consultant",
    "director",
)

CONTEXT_LINES = 2

# A longer label segment is a sentence, not an entry line
MAX_ENTRY_SEGMENT_WORDS = 8


# ===== LABEL HEURISTICS =====

INSTITUTION_KEYWORDS = ("university", "college", "school", "institute", "academy")

RECOGNIZED_INSTITUTION_KEYWORDS = ("university", "college")

DEGREE_KEYWORDS = (
    "bachelor",
    "master",
    "phd",
    "doctorate",
    "diploma",
    "certificate",
    "b.s.",
    "b.a.",
    "m.s.",
    "m.a.",
    "ph.d.",
    "mba",
    "degree",
)

COMPANY_INDICATORS = ("inc", "corp", "corporation", "ltd", "llc", "company")

POSITION_KEYWORDS = (
    "manager",
    "director",
    "engineer",
    "developer",
    "analyst",
    "consultant",
    "intern",
    "associate",
    "specialist",
    "coordinator",
    "assistant",
    "lead",
)

UNKNOWN_INSTITUTION = "Unknown Institution"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_POSITION = "Unknown Position"


# ===== TIMELINE RULES =====

DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44

EDUCATION_NEAR_FUTURE_YEARS = 2
EDUCATION_START_FUTURE_MONTHS = 3
EDUCATION_MAX_DURATION_YEARS = 10
EDUCATION_MIN_DEGREE_YEARS = 0.5
EDUCATION_STALE_ONGOING_YEARS = 8

WORK_NEAR_FUTURE_MONTHS = 1
WORK_SHORT_DURATION_DAYS = 7
WORK_STALE_ONGOING_YEARS = 15
WORK_GAP_MONTHS = 12

EDUCATION_OVERLAP_GRACE_MONTHS = 6
WORK_OVERLAP_GRACE_MONTHS = 3

OVERLAP_EXEMPT_CREDENTIALS = ("certificate", "diploma")

WORK_OVERLAP_EXCUSAL_KEYWORDS = (
    "part-time",
    "part time",
    "freelance",
    "consultant",
    "consulting",
    "contractor",
    "intern",
    "internship",
    "volunteer",
    "seasonal",
    "temporary",
    "project-based",
    "remote",
)

INDUSTRY_KEYWORDS = (
    "teaching",
    "education",
    "consulting",
    "research",
    "writing",
    "coaching",
    "training",
    "speaking",
    "advisory",
)

# ===== GENERAL RULES =====

ANCIENT_YEAR = 1980
ANCIENT_SHIFT_YEARS = 20
FAR_FUTURE_YEARS = 10
DECADE_SHIFT_YEARS = 10
EMPLOYMENT_GAP_YEARS = 2

BASE_RULE_CONFIDENCE = 0.7
GOOD_DATA_CONFIDENCE = 0.8

# ===== TYPO DETECTION =====

TYPO_YEARS_AHEAD = 2
FUTURE_TYPO_MONTHS = 60
DEFAULT_FUTURE_MONTHS = 12
REASONABLE_MIN_YEAR = 1970
REASONABLE_YEARS_AHEAD = 5
DECADE_TYPO_MIN_YEAR = 1990

# ===== SUGGESTIONS =====

DEGREE_DURATIONS = (
    (("phd", "doctorate", "ph.d."), (5, 4, 6, 7)),
    (("master", "m.s.", "m.a.", "mba"), (2, 1, 3)),
    (("bachelor", "b.s.", "b.a."), (4, 3, 5)),
    (("certificate", "diploma"), (1, 2)),
)
DEFAULT_DEGREE_DURATIONS = (4,)

PRESENT_WINDOW_PAST_MONTHS = 3
EDUCATION_GAP_YEARS = 2
WORK_OVERLAP_SUGGESTION_MONTHS = 6
TYPICAL_EDUCATION_YEARS = 4
TYPICAL_WORK_YEARS = 3
