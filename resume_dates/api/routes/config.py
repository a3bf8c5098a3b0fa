from fastapi import APIRouter, Depends, HTTPException

from resume_dates.api.dependencies import get_validation_service
from resume_dates.core.config import ConfigValidationError
from resume_dates.core.schemas import ConfigUpdate, ValidationConfig
from resume_dates.core.service import ResumeDateValidationService

router = APIRouter(prefix="/config", tags=["config"])


@router.get("", response_model=ValidationConfig, summary="Current Validation Config")
def read_config(service: ResumeDateValidationService = Depends(get_validation_service)):
    return service.get_config()


@router.put(
    "",
    response_model=ValidationConfig,
    summary="Update Validation Config",
    description="Partial update. Out-of-range values are rejected and the previous config is kept.",
    responses={422: {"description": "Out-of-range or unknown option"}},
)
def update_config(
    update: ConfigUpdate,
    service: ResumeDateValidationService = Depends(get_validation_service),
):
    try:
        return service.update_config(**update.model_dump(exclude_none=True))
    except ConfigValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.messages)


@router.delete("", response_model=ValidationConfig, summary="Reset Validation Config")
def reset_config(service: ResumeDateValidationService = Depends(get_validation_service)):
    return service.reset_to_defaults()
