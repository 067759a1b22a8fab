"""API Pydantic models."""

from .requests import AddShiftsRequest, ShiftSelectionRequest
from .responses import (
    AddShiftsResponse,
    DeleteEventResponse,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    ScheduleResponse,
    UndoResponse,
)

__all__ = [
    "AddShiftsRequest",
    "AddShiftsResponse",
    "DeleteEventResponse",
    "ErrorCodes",
    "ErrorResponse",
    "HealthResponse",
    "ScheduleResponse",
    "ShiftSelectionRequest",
    "UndoResponse",
]
