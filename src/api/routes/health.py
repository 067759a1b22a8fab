"""Health check endpoint."""

from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import (
    API_VERSION,
    CALENDAR_ID,
    CALENDAR_USER_ID,
    GOOGLE_SERVICE_ACCOUNT_FILE,
    GRAPH_APP_ID,
    GRAPH_CLIENT_SECRET,
    GRAPH_TENANT_ID,
)

router = APIRouter()


def calendar_configured() -> bool:
    return all([GRAPH_TENANT_ID, GRAPH_APP_ID, GRAPH_CLIENT_SECRET, CALENDAR_USER_ID, CALENDAR_ID])


def spreadsheet_configured() -> bool:
    return bool(GOOGLE_SERVICE_ACCOUNT_FILE) and Path(GOOGLE_SERVICE_ACCOUNT_FILE).exists()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if both backends are configured, 503 otherwise.
    """
    calendar_ok = calendar_configured()
    spreadsheet_ok = spreadsheet_configured()
    timestamp = datetime.now(timezone.utc).isoformat()

    if calendar_ok and spreadsheet_ok:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            calendar_configured=True,
            spreadsheet_configured=True,
            timestamp=timestamp,
        )

    missing = []
    if not calendar_ok:
        missing.append("calendar")
    if not spreadsheet_ok:
        missing.append("spreadsheet")
    return JSONResponse(
        status_code=503,
        content=HealthResponse(
            status="unhealthy",
            version=API_VERSION,
            calendar_configured=calendar_ok,
            spreadsheet_configured=spreadsheet_ok,
            timestamp=timestamp,
            error=f"Backend not configured: {', '.join(missing)}",
        ).model_dump(by_alias=True),
    )
