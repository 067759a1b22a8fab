"""API route modules."""

from .health import router as health_router
from .schedule import router as schedule_router
from .shifts import router as shifts_router

__all__ = ["health_router", "schedule_router", "shifts_router"]
