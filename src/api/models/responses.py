"""Pydantic response models for API endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes field names as camelCase for the dashboard client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(CamelModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    calendar_configured: bool
    spreadsheet_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ScheduleResponse(CamelModel):
    """Parsed shifts of every week tab."""

    schedule: list[dict]
    shifts: list[str]
    date_headers: list[str]
    html_tables: list[str]


class AddShiftsResponse(CamelModel):
    success: bool
    message: str
    added_events: list[dict] = []
    skipped_events: list[dict] = []
    dropped_events: list[dict] = []


class UndoResponse(CamelModel):
    success: bool
    message: str
    deleted_events: list[dict] = []


class DeleteEventResponse(CamelModel):
    success: bool
    message: str
    deleted_event: dict


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    BACKEND_ERROR = "BACKEND_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
