"""
HTTP surface tests: date validation endpoints and the config resource.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from resume_dates.api.dependencies import get_validation_service
from resume_dates.core.config import ConfigManager
from resume_dates.core.observer import NullObserver
from resume_dates.core.service import EMPTY_TEXT_MESSAGE, ResumeDateValidationService
from resume_dates.main import app

client = TestClient(app)

FUTURE_PHD = "PhD in Data Science, Future University, 2030 - 2034"


@pytest.fixture(autouse=True)
def isolated_service():
    """Each test gets its own service pinned to 2026-10-16 with an empty config store."""
    service = ResumeDateValidationService(ConfigManager(), observer=NullObserver(), today=date(2026, 10, 16))
    app.dependency_overrides[get_validation_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


def test_root_and_health():
    assert client.get("/").json()["service"] == "resume-date-validator"
    assert client.get("/health").json() == {"status": "ok"}


# ===== VALIDATION =====

def test_validate_dates_flags_future_graduation():
    response = client.post("/validate-dates", json={"resumeText": FUTURE_PHD})
    assert response.status_code == 200
    data = response.json()

    assert data["isValid"] is False
    first = data["issues"][0]
    assert first["type"] == "critical"
    assert first["detectedDate"] == "2034-01-01"
    assert "rule" not in first
    assert "periodIndex" not in first
    assert data["suggestions"][0]["originalDate"] == "2034"


def test_validate_dates_empty_text_is_ok():
    response = client.post("/validate-dates", json={"resumeText": ""})
    assert response.status_code == 200
    data = response.json()
    assert data["isValid"] is True
    assert data["warnings"][0]["message"] == EMPTY_TEXT_MESSAGE


def test_validate_dates_accepts_snake_case_body():
    response = client.post("/validate-dates", json={"resume_text": FUTURE_PHD})
    assert response.status_code == 200


def test_validate_dates_requires_text():
    assert client.post("/validate-dates", json={}).status_code == 422


def test_feedback_endpoint():
    response = client.post("/validate-dates/feedback", json={"resumeText": FUTURE_PHD})
    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 50
    assert data["summary"].startswith("Date validation findings:")
    assert len(data["issues"]) == 2


# ===== CONFIG =====

def test_read_default_config():
    assert client.get("/config").json() == {
        "maxFutureEducationYears": 4,
        "maxFutureWorkMonths": 3,
        "enableTypoDetection": True,
        "confidenceThreshold": 0.8,
        "strictMode": False,
    }


def test_update_config_changes_validation(isolated_service):
    response = client.put("/config", json={"maxFutureEducationYears": 10})
    assert response.status_code == 200
    assert response.json()["maxFutureEducationYears"] == 10
    assert isolated_service.get_config().max_future_education_years == 10

    data = client.post("/validate-dates", json={"resumeText": FUTURE_PHD}).json()
    messages = [i["message"] for i in data["issues"]]
    assert "Graduation date 2034 is 7.2 years in the future" in messages


def test_out_of_range_update_is_rejected():
    response = client.put("/config", json={"confidenceThreshold": 2})
    assert response.status_code == 422
    assert response.json()["detail"][0].startswith("confidenceThreshold")
    assert client.get("/config").json()["confidenceThreshold"] == 0.8


def test_unknown_option_is_rejected():
    assert client.put("/config", json={"bogus": 1}).status_code == 422


def test_reset_config():
    client.put("/config", json={"strictMode": True})
    response = client.delete("/config")
    assert response.status_code == 200
    assert response.json()["strictMode"] is False
