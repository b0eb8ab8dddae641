"""
FastAPI application setup and configuration.
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import ExternalToolUnavailable, FormatError, NotFoundError
from server.middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_CORS_ORIGINS = "*"
API_TITLE = "opencode config studio"
API_VERSION = "1.0.0"


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(title=API_TITLE, version=API_VERSION)


# =============================================================================
# CORS Configuration
# =============================================================================

# allow_origins=["*"] lets any page call the API, including writes to config
# files. Set CORS_ORIGINS to a comma-separated list when exposing the server:
# Example: CORS_ORIGINS="http://localhost:5173,http://127.0.0.1:5173"

cors_origins_env = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
cors_origins = (
    [origin.strip() for origin in cors_origins_env.split(",")]
    if cors_origins_env != DEFAULT_CORS_ORIGINS
    else [DEFAULT_CORS_ORIGINS]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Request logging middleware (added after CORS so it runs first)
app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Error Handlers
# =============================================================================
# Every error body has the shape {"error": ..., "path"?: ..., "message"?: ...}


def error_body(error: str, path: str | None = None, message: str | None = None) -> dict:
    """Build a JSON error body, leaving out unset fields."""
    body = {"error": error}
    if path is not None:
        body["path"] = path
    if message is not None:
        body["message"] = message
    return body


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routes raise HTTPException with either a message or a ready error body."""
    if isinstance(exc.detail, dict):
        body = exc.detail
    elif exc.status_code == 404:
        body = error_body("API endpoint not found", path=request.url.path)
    else:
        body = error_body(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed parameters are client errors (400)."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("query", "body"))
        details.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=400,
        content=error_body("Invalid request", message="; ".join(details)),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=error_body(str(exc), path=request.url.path))


@app.exception_handler(FormatError)
async def format_error_handler(request: Request, exc: FormatError) -> JSONResponse:
    return JSONResponse(status_code=400, content=error_body(str(exc), path=request.url.path))


@app.exception_handler(ExternalToolUnavailable)
async def tool_unavailable_handler(request: Request, exc: ExternalToolUnavailable) -> JSONResponse:
    logger.warning("%s (tried: %s)", exc, ", ".join(exc.attempts))
    return JSONResponse(status_code=503, content=error_body(str(exc)))
