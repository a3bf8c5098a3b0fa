"""Rendering of validation results for the AI feedback prompt and the UI's dateValidation block."""

from resume_dates.core.schemas import DateValidationFeedback, DateValidationResult

ALL_CLEAR_MESSAGE = "Date validation: All dates appear reasonable and consistent."

CRITICAL_PENALTY = 25
WARNING_PENALTY = 10
SUGGESTION_PENALTY = 3


def format_validation_results_for_ai(result: DateValidationResult) -> str:
    """
    Plain-text summary appended to the resume-review prompt.

    Example:
        Date validation findings:
        - CRITICAL: Graduation date 2034 is more than 4 years in the future (Suggested: Consider ...)
    """
    if result.is_valid and not result.issues:
        return ALL_CLEAR_MESSAGE

    lines = ["Date validation findings:"]
    for issue in result.issues:
        line = f"- {issue.type.upper()}: {issue.message}"
        if issue.suggested_fix:
            line += f" (Suggested: {issue.suggested_fix})"
        lines.append(line)
    for warning in result.warnings:
        lines.append(f"- WARNING: {warning.message}")
    return "\n".join(lines) + "\n"


def date_validation_score(result: DateValidationResult) -> int:
    penalty = 0
    for issue in result.issues:
        if issue.type == "critical":
            penalty += CRITICAL_PENALTY
        elif issue.type == "warning":
            penalty += WARNING_PENALTY
        else:
            penalty += SUGGESTION_PENALTY
    penalty += WARNING_PENALTY * len(result.warnings)
    return max(0, 100 - penalty)


def build_date_validation_feedback(result: DateValidationResult) -> DateValidationFeedback:
    return DateValidationFeedback(
        score=date_validation_score(result),
        issues=result.issues,
        summary=format_validation_results_for_ai(result).strip(),
    )
