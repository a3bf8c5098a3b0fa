import logging
import os

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from resume_dates.api.routes.config import router as config_router
from resume_dates.api.routes.validate import router as validate_router

logging.basicConfig(level=os.getenv("RESUME_DATES_LOG_LEVEL", "INFO").upper())

app = FastAPI(
    title="Resume Date Validator",
    description="Deterministic resume date extraction and validation: flags impossible futures, reversed ranges, overlaps and year typos, with ranked corrections",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(validate_router)
app.include_router(config_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-date-validator", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Resume Date Validator API",
        version="0.1.0",
        description="Resume date validation API with confidence-scored corrections",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
