from fastapi import APIRouter, Depends

from resume_dates.api.dependencies import get_validation_service
from resume_dates.core.feedback import build_date_validation_feedback
from resume_dates.core.schemas import DateValidationFeedback, DateValidationResult, ValidateDatesRequest
from resume_dates.core.service import ResumeDateValidationService

router = APIRouter(tags=["validation"])


@router.post(
    "/validate-dates",
    response_model=DateValidationResult,
    summary="Validate Resume Dates",
    description="Extract education and work periods from resume text, flag implausible or inconsistent dates, and propose corrections with confidence scores.",
    responses={
        200: {
            "description": "Validation result (always returned, degraded on internal errors)",
            "content": {
                "application/json": {
                    "example": {
                        "isValid": False,
                        "issues": [
                            {
                                "type": "critical",
                                "category": "education",
                                "message": "Graduation date 2034 is more than 4 years in the future",
                                "detectedDate": "2034-01-01",
                                "suggestedFix": "Consider checking if this should be 2024 instead.",
                                "confidence": 0.9
                            }
                        ],
                        "warnings": [],
                        "suggestions": [
                            {
                                "originalDate": "2034",
                                "suggestedDate": "2024",
                                "reason": "Year 2034 is unusually far ahead; 2024 may have been intended (education)",
                                "confidence": 1.0
                            }
                        ]
                    }
                }
            }
        },
        422: {"description": "Request body is missing resumeText"}
    }
)
def validate_dates(
    request: ValidateDatesRequest,
    service: ResumeDateValidationService = Depends(get_validation_service),
):
    """
    Validate the dates in a resume.

    **Returns:**
    - **isValid**: false only when a critical issue remains
    - **issues**: critical / warning / suggestion findings
    - **warnings**: non-blocking notes (skipped stages, softened low-confidence issues)
    - **suggestions**: ranked date corrections
    """
    return service.validate_resume_dates(request.resume_text)


@router.post(
    "/validate-dates/feedback",
    response_model=DateValidationFeedback,
    summary="Date Validation Feedback Block",
    description="Score and summarize date validation for embedding next to AI resume feedback.",
)
def validate_dates_feedback(
    request: ValidateDatesRequest,
    service: ResumeDateValidationService = Depends(get_validation_service),
):
    result = service.validate_resume_dates(request.resume_text)
    return build_date_validation_feedback(result)
