"""
Validation orchestrator: the single entry point the surrounding application calls.

Pipeline (Parsing -> Validating -> Suggesting -> Done | Failed, reported to the
observer per run; the service itself holds no per-run state):
  1. empty / non-string text         -> valid empty result + one warning
  2. parse education periods
  3. parse work periods
  4. education and work timeline rules
  5. general rule checks
  6. suggestions (only with typo detection enabled)
  7. low-confidence critical issues become warnings
  8. is_valid = no critical issue left

Each stage yields a ``StageOutcome``; a failed stage contributes its empty
default plus one warning and the run continues. ``validate_resume_dates``
never raises.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from resume_dates.core.config import ConfigManager
from resume_dates.core.date_parser import ResumeDateParser
from resume_dates.core.observer import LoggingObserver, ValidationObserver, timed
from resume_dates.core.period_builder import PeriodBuilder
from resume_dates.core.rules import GeneralRules
from resume_dates.core.schemas import (
    DateSuggestion,
    DateValidationResult,
    EducationPeriod,
    IssueCategory,
    ValidationConfig,
    ValidationIssue,
    ValidationWarning,
    WorkExperience,
)
from resume_dates.core.suggestion_generator import DateSuggestionGenerator
from resume_dates.core.timeline_validator import TimelineValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_TEXT_MESSAGE = "Empty resume text provided"
INVALID_TEXT_MESSAGE = "Invalid resume text provided"
INTERNAL_ERROR_MESSAGE = "Date validation temporarily unavailable due to an internal error"


class ValidationStage(str, Enum):
    PARSING = "parsing"
    VALIDATING = "validating"
    SUGGESTING = "suggesting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class StageOutcome(Generic[T]):
    """Result of one pipeline stage: the value, or the default plus the error that replaced it."""
    label: str
    category: IssueCategory
    value: T
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_warning(self) -> Optional[ValidationWarning]:
        if self.error is None:
            return None
        return ValidationWarning(
            category=self.category,
            message=f"{self.label} encountered an error and was skipped",
            context=str(self.error),
        )


def run_stage(label: str, category: IssueCategory, fn: Callable[[], T], default: T) -> StageOutcome[T]:
    try:
        return StageOutcome(label, category, fn())
    except Exception as exc:
        logger.warning(f"{label} failed: {exc}")
        return StageOutcome(label, category, default, exc)


def reclassify_low_confidence(
    issues: Sequence[ValidationIssue], threshold: float
) -> Tuple[List[ValidationIssue], List[ValidationWarning]]:
    """Critical issues under ``threshold`` become plain warnings (their suggested fix is dropped)."""
    kept: List[ValidationIssue] = []
    softened: List[ValidationWarning] = []
    for issue in issues:
        if issue.type == "critical" and issue.confidence < threshold:
            softened.append(ValidationWarning(
                category=issue.category,
                message=issue.message,
                context=issue.detected_date,
            ))
        else:
            kept.append(issue)
    return kept, softened


class ResumeDateValidationService:
    """
    Orchestrates parsing, validation and suggestions for one resume at a time.

    Collaborators are injected: the config manager (shared, explicitly
    reloadable), the observer (logging by default) and ``today`` (the system
    clock when omitted).
    """

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        observer: Optional[ValidationObserver] = None,
        today: Optional[date] = None,
    ):
        self.observer = observer or LoggingObserver()
        self.config_manager = config_manager or ConfigManager(observer=self.observer)
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    # ===== CONFIG SURFACE =====

    def get_config(self) -> ValidationConfig:
        return self.config_manager.get_config()

    def update_config(self, **changes: Any) -> ValidationConfig:
        return self.config_manager.update_config(**changes)

    def reset_to_defaults(self) -> ValidationConfig:
        return self.config_manager.reset_to_defaults()

    # ===== NARROW OPERATIONS =====

    def _parser(self) -> ResumeDateParser:
        return ResumeDateParser(today=self.today, observer=self.observer)

    def _builder(self) -> PeriodBuilder:
        return PeriodBuilder(self._parser(), observer=self.observer)

    def parse_education_dates(self, text: str) -> List[EducationPeriod]:
        return self._builder().parse_education_dates(text)

    def parse_work_experience(self, text: str) -> List[WorkExperience]:
        return self._builder().parse_work_experience(text)

    def validate_education_timeline(self, periods: Sequence[EducationPeriod]) -> List[ValidationIssue]:
        return TimelineValidator(self.get_config(), self.today).validate_education_timeline(periods)

    def validate_work_timeline(self, periods: Sequence[WorkExperience]) -> List[ValidationIssue]:
        return TimelineValidator(self.get_config(), self.today).validate_work_timeline(periods)

    # ===== ENTRY POINT =====

    def validate_resume_dates(self, resume_text: Any) -> DateValidationResult:
        try:
            with timed(self.observer, "validation", "validate_resume_dates") as payload:
                result = self._run(resume_text)
                payload.update(_summarize(result))
        except Exception:
            self._report_stage(ValidationStage.FAILED)
            logger.exception("Date validation failed")
            return DateValidationResult.empty(ValidationWarning(
                category="general",
                message=INTERNAL_ERROR_MESSAGE,
                context="System error during validation",
            ))

        self._report_stage(ValidationStage.DONE)
        return result

    def _run(self, resume_text: Any) -> DateValidationResult:
        if not isinstance(resume_text, str):
            return self._input_rejected(INVALID_TEXT_MESSAGE, type(resume_text).__name__)
        if not resume_text.strip():
            return self._input_rejected(EMPTY_TEXT_MESSAGE, "Input validation")

        config = self.get_config()
        today = self.today
        builder = self._builder()

        self._report_stage(ValidationStage.PARSING)
        education = run_stage(
            "Education date parsing", "education",
            lambda: builder.parse_education_dates(resume_text), [],
        )
        work = run_stage(
            "Work experience parsing", "work",
            lambda: builder.parse_work_experience(resume_text), [],
        )

        self._report_stage(ValidationStage.VALIDATING)
        validator = TimelineValidator(config, today)
        education_issues = run_stage(
            "Education timeline validation", "education",
            lambda: validator.validate_education_timeline(education.value), [],
        )
        work_issues = run_stage(
            "Work timeline validation", "work",
            lambda: validator.validate_work_timeline(work.value), [],
        )
        general_issues = run_stage(
            "General date rule validation", "general",
            lambda: GeneralRules(config, today).apply(education.value, work.value), [],
        )
        issues = education_issues.value + work_issues.value + general_issues.value

        outcomes: List[StageOutcome] = [education, work, education_issues, work_issues, general_issues]
        suggestions: List[DateSuggestion] = []
        if config.enable_typo_detection:
            self._report_stage(ValidationStage.SUGGESTING)
            generator = DateSuggestionGenerator(config, today)
            suggestion_outcome = run_stage(
                "Date suggestion generation", "general",
                lambda: generator.generate_suggestions(education.value, work.value, issues), [],
            )
            suggestions = suggestion_outcome.value
            outcomes.append(suggestion_outcome)

        warnings = [outcome.as_warning() for outcome in outcomes if not outcome.ok]
        for outcome in outcomes:
            if not outcome.ok:
                self.observer.log("warn", "validation", "stage_skipped", {"stage": outcome.label}, error=str(outcome.error))

        kept, softened = reclassify_low_confidence(issues, config.confidence_threshold)
        if softened:
            logger.debug(f"Softened {len(softened)} low-confidence critical issues")

        return DateValidationResult.from_parts(kept, warnings + softened, suggestions)

    def _input_rejected(self, message: str, context: str) -> DateValidationResult:
        self.observer.log("warn", "edge-case", "invalid_input", {"reason": message})
        return DateValidationResult.empty(ValidationWarning(category="general", message=message, context=context))

    def _report_stage(self, stage: ValidationStage) -> None:
        self.observer.log("debug", "validation", "stage", {"stage": stage.value})


def _summarize(result: DateValidationResult) -> Dict[str, Any]:
    issue_types: Dict[str, int] = {}
    for issue in result.issues:
        issue_types[issue.type] = issue_types.get(issue.type, 0) + 1
    return {
        "is_valid": result.is_valid,
        "issues": len(result.issues),
        "warnings": len(result.warnings),
        "suggestions": len(result.suggestions),
        "issue_types": issue_types,
    }


def validate_resume_dates(
    resume_text: Any,
    config: Optional[ValidationConfig] = None,
    today: Optional[date] = None,
) -> DateValidationResult:
    """One-shot validation with a fixed config snapshot and no persistence."""
    manager = ConfigManager()
    if config is not None:
        manager.update_config(**config.model_dump())
    return ResumeDateValidationService(config_manager=manager, today=today).validate_resume_dates(resume_text)
