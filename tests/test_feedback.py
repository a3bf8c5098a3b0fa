"""
Tests for the AI-prompt rendering and the dateValidation feedback block.
"""

from resume_dates.core.feedback import (
    ALL_CLEAR_MESSAGE,
    build_date_validation_feedback,
    date_validation_score,
    format_validation_results_for_ai,
)
from resume_dates.core.schemas import DateValidationResult, ValidationIssue, ValidationWarning


def issue(kind, message="Something is off", fix=None):
    return ValidationIssue(
        type=kind,
        category="education",
        message=message,
        detected_date="2034-01-01",
        suggested_fix=fix,
        confidence=0.9,
    )


def test_all_clear_message():
    result = DateValidationResult.from_parts([], [], [])
    assert format_validation_results_for_ai(result) == ALL_CLEAR_MESSAGE
    assert date_validation_score(result) == 100


def test_findings_list_issues_then_warnings():
    result = DateValidationResult.from_parts(
        [issue("critical", "Graduation date 2034 is more than 4 years in the future",
               "Consider checking if this should be 2024 instead.")],
        [ValidationWarning(category="work", message="Work timeline validation encountered an error and was skipped")],
        [],
    )
    text = format_validation_results_for_ai(result)
    assert text.splitlines() == [
        "Date validation findings:",
        "- CRITICAL: Graduation date 2034 is more than 4 years in the future "
        "(Suggested: Consider checking if this should be 2024 instead.)",
        "- WARNING: Work timeline validation encountered an error and was skipped",
    ]


def test_valid_result_with_issues_is_not_all_clear():
    """Warnings and suggestions keep a result valid but still get listed."""
    result = DateValidationResult.from_parts([issue("suggestion", "Gap of 2 years")], [], [])
    assert result.is_valid is True
    assert "- SUGGESTION: Gap of 2 years" in format_validation_results_for_ai(result)


def test_score_penalties():
    result = DateValidationResult.from_parts(
        [issue("critical"), issue("warning"), issue("suggestion")],
        [ValidationWarning(category="general", message="softened")],
        [],
    )
    assert date_validation_score(result) == 100 - 25 - 10 - 3 - 10


def test_score_floors_at_zero():
    result = DateValidationResult.from_parts([issue("critical")] * 5, [], [])
    assert date_validation_score(result) == 0


def test_feedback_block():
    result = DateValidationResult.from_parts([issue("critical"), issue("critical")], [], [])
    feedback = build_date_validation_feedback(result)
    assert feedback.score == 50
    assert len(feedback.issues) == 2
    assert feedback.summary.startswith("Date validation findings:")
    assert not feedback.summary.endswith("\n")
