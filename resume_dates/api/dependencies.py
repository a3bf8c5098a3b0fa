"""Process-wide collaborators shared by the HTTP routes."""

from resume_dates.core.config import ConfigManager
from resume_dates.core.observer import LoggingObserver
from resume_dates.core.service import ResumeDateValidationService

observer = LoggingObserver()
config_manager = ConfigManager(observer=observer)
validation_service = ResumeDateValidationService(config_manager=config_manager, observer=observer)


def get_validation_service() -> ResumeDateValidationService:
    return validation_service