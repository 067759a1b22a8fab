"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import health_router, schedule_router, shifts_router
from api.routes.health import calendar_configured, spreadsheet_configured
from core.config import API_DEBUG, API_VERSION, LOG_LEVEL, SESSION_SECRET
from services.backends import BackendError

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: warn about missing backend configuration
    if not calendar_configured():
        logger.warning("MS Graph calendar is not configured")
    if not spreadsheet_configured():
        logger.warning("Google service account file not found")

    yield


app = FastAPI(
    title="Shift Sync API",
    description="REST API for copying weekly shift spreadsheet entries into a calendar",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies as 400 with standard error format."""
    details = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Invalid request data",
            code=ErrorCodes.INVALID_REQUEST,
            details=details,
        ).model_dump(),
    )


@app.exception_handler(BackendError)
async def backend_exception_handler(request: Request, exc: BackendError):
    logger.error("Backend failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Backend request failed",
            code=ErrorCodes.BACKEND_ERROR,
            details=[],
        ).model_dump(),
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(schedule_router)
app.include_router(shifts_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
