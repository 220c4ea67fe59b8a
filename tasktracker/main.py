"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktracker import __version__
from tasktracker.api import auth, tasks
from tasktracker.config import get_settings
from tasktracker.database import init_db
from tasktracker.errors import (
    InternalFailure,
    TaskTrackerError,
    Unauthenticated,
    ValidationError,
)
from tasktracker.schemas.error import ErrorResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    logger.info(f"Task Tracker API {__version__} started ({settings.environment})")
    yield


app = FastAPI(
    title="Task Tracker API",
    description="Personal task tracking with bearer-token authentication",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


def error_response(error: TaskTrackerError, details: list[str] | None = None) -> JSONResponse:
    if details is None:
        details = error.details
    body = ErrorResponse(error=error.message, details=details)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthenticated) else None
    return JSONResponse(status_code=error.status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(TaskTrackerError)
async def handle_domain_error(request: Request, exc: TaskTrackerError):
    """Turn a service-layer error into its public response."""
    return error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    """Unknown routes and wrong methods use the same error body as everything else."""
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code, content=body.model_dump(), headers=exc.headers
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Report malformed request bodies the same way as field validation failures."""
    reasons = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        reasons.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return error_response(ValidationError(reasons))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    """Log unexpected faults in full; callers only get a generic message."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    details = [str(exc)] if settings.is_development and settings.debug else []
    return error_response(InternalFailure(), details=details)


# Register routers
app.include_router(auth.router)
app.include_router(tasks.router)


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "Task Tracker API",
        "version": __version__,
        "environment": settings.environment,
    }
