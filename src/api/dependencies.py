"""FastAPI dependencies for authentication and shared resources."""

import secrets
import uuid

from fastapi import Header, HTTPException, Request, status

from core.config import SHIFT_SYNC_API_KEY
from services.calendar import GraphCalendar
from services.sheets import GoogleSheets
from services.sync import DayLocks
from services.undo import UndoStore

SESSION_KEY = "session_id"

_undo_store = UndoStore()
_day_locks = DayLocks()


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 401 if key is missing or invalid
    """
    if not SHIFT_SYNC_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": "INTERNAL_ERROR",
                "details": [],
            },
        )

    # Use constant-time comparison to prevent timing attacks
    if not x_api_key or not secrets.compare_digest(x_api_key, SHIFT_SYNC_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Not authenticated",
                "code": "UNAUTHORIZED",
                "details": [],
            },
        )

    return x_api_key


def get_session_id(request: Request) -> str:
    """Return the session id stored in the session cookie, creating one if needed."""
    session_id = request.session.get(SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[SESSION_KEY] = session_id
    return session_id


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_undo_store() -> UndoStore:
    return _undo_store


def get_day_locks() -> DayLocks:
    return _day_locks


def get_calendar() -> GraphCalendar:
    return GraphCalendar()


def get_spreadsheet() -> GoogleSheets:
    return GoogleSheets()
