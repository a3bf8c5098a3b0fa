from datetime import date
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


IssueType = Literal["critical", "warning", "suggestion"]
IssueCategory = Literal["education", "work", "general"]


class CamelModel(BaseModel):
    """Base for every wire model: snake_case in Python, camelCase in JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DateFormat(str, Enum):
    MONTH_YEAR = "MM/YYYY"
    YEAR_ONLY = "YYYY"
    FULL_DATE = "MM/DD/YYYY"
    PRESENT = "PRESENT"
    CURRENT = "CURRENT"


class IssueRule(str, Enum):
    """Internal code for the rule that raised an issue. Never serialized."""
    EDUCATION_END_FAR_FUTURE = "education_end_far_future"
    EDUCATION_END_NEAR_FUTURE = "education_end_near_future"
    EDUCATION_START_FUTURE = "education_start_future"
    EDUCATION_DATE_ORDER = "education_date_order"
    EDUCATION_LONG_DURATION = "education_long_duration"
    EDUCATION_SHORT_DURATION = "education_short_duration"
    EDUCATION_STALE_ONGOING = "education_stale_ongoing"
    EDUCATION_OVERLAP = "education_overlap"
    WORK_END_FAR_FUTURE = "work_end_far_future"
    WORK_END_NEAR_FUTURE = "work_end_near_future"
    WORK_START_FUTURE = "work_start_future"
    WORK_DATE_ORDER = "work_date_order"
    WORK_SHORT_DURATION = "work_short_duration"
    WORK_STALE_ONGOING = "work_stale_ongoing"
    WORK_OVERLAP = "work_overlap"
    WORK_GAP = "work_gap"
    ANCIENT_DATE = "ancient_date"
    FAR_FUTURE_DATE = "far_future_date"
    EMPLOYMENT_GAP = "employment_gap"
    WORK_BEFORE_EDUCATION_END = "work_before_education_end"


# ===== PARSED VALUES =====

class ParsedDate(CamelModel):
    """A single date substring resolved to a calendar date."""
    model_config = ConfigDict(frozen=True)

    original: str = Field(..., description="Exact substring that was parsed")
    normalized: date = Field(..., description="Calendar date; year-only dates fall on January 1")
    format: DateFormat
    is_ongoing: bool = False
    confidence: float = Field(..., ge=0.0, le=1.0)


class ExtractedDate(CamelModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)
    parsed_date: Optional[ParsedDate] = Field(default=None, description="None when the match is not a valid date")
    context: str = Field(default="", description="Up to 50 characters either side of the match")


class EducationPeriod(CamelModel):
    institution: str
    degree: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = Field(default=None, description="Always None while is_ongoing is set")
    is_ongoing: bool = False
    original_text: str = ""
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class WorkExperience(CamelModel):
    company: str
    position: str
    start_date: Optional[date] = None
    end_date: Optional[date] = Field(default=None, description="Always None while is_ongoing is set")
    is_ongoing: bool = False
    original_text: str = ""
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


# ===== VALIDATION OUTPUT =====

class ValidationIssue(CamelModel):
    type: IssueType
    category: IssueCategory
    message: str
    detected_date: str = Field(..., description="ISO date (or year) the issue was raised for")
    suggested_fix: Optional[str] = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    rule: Optional[IssueRule] = Field(default=None, exclude=True)
    period_index: Optional[int] = Field(default=None, exclude=True)


class ValidationWarning(CamelModel):
    category: IssueCategory
    message: str
    context: str = ""


class DateSuggestion(CamelModel):
    original_date: str
    suggested_date: str
    reason: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class DateValidationResult(CamelModel):
    is_valid: bool
    issues: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationWarning] = Field(default_factory=list)
    suggestions: List[DateSuggestion] = Field(default_factory=list)

    @classmethod
    def from_parts(
        cls,
        issues: List[ValidationIssue],
        warnings: List[ValidationWarning],
        suggestions: List[DateSuggestion],
    ) -> "DateValidationResult":
        """Build a result whose validity follows from the issues it carries."""
        return cls(
            is_valid=all(issue.type != "critical" for issue in issues),
            issues=issues,
            warnings=warnings,
            suggestions=suggestions,
        )

    @classmethod
    def empty(cls, warning: ValidationWarning) -> "DateValidationResult":
        return cls(is_valid=True, issues=[], warnings=[warning], suggestions=[])


# ===== CONFIGURATION =====

class ValidationConfig(CamelModel):
    """The five recognized engine options. Out-of-range values are rejected on construction."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    max_future_education_years: int = Field(default=4, ge=0, le=10, description="Years ahead a graduation date may lie")
    max_future_work_months: int = Field(default=3, ge=0, le=12, description="Months ahead a work end date may lie")
    enable_typo_detection: bool = True
    confidence_threshold: float = Field(default=0.8, ge=0.0, le=1.0, description="Critical issues below this become warnings")
    strict_mode: bool = False


class ConfigUpdate(CamelModel):
    """Partial configuration update; range checks happen in the config manager."""
    model_config = ConfigDict(extra="forbid")

    max_future_education_years: Optional[int] = None
    max_future_work_months: Optional[int] = None
    enable_typo_detection: Optional[bool] = None
    confidence_threshold: Optional[float] = None
    strict_mode: Optional[bool] = None


# ===== HTTP PAYLOADS =====

class ValidateDatesRequest(CamelModel):
    resume_text: str = Field(..., description="Raw resume text")


class DateValidationFeedback(CamelModel):
    """The dateValidation block embedded next to AI resume feedback."""
    score: int = Field(..., ge=0, le=100)
    issues: List[ValidationIssue] = Field(default_factory=list)
    summary: str
