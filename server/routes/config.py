"""
Config file endpoints.

The editor reads and writes raw file text; parsing and merging happen on the
client side or in core.config_session.
"""

import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from config.loader import expand_path, get_default_config_path, read_config_text, write_config_text

from ..app import error_body

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================


class ConfigPathResponse(BaseModel):
    """Default config file location."""

    path: str = Field(description="Absolute path of the global opencode.json")


class ConfigWriteRequest(BaseModel):
    """Request body for writing a config file."""

    path: str = Field(description="Target file; a leading ~ is expanded")
    content: str = Field(description="Full file text to write")


class ConfigWriteResponse(BaseModel):
    """Result of a config write."""

    success: bool
    path: str


# =============================================================================
# Router
# =============================================================================

router = APIRouter()


@router.get("/api/config/path")
async def get_config_path() -> ConfigPathResponse:
    """Return the platform's default config file path."""
    return ConfigPathResponse(path=str(get_default_config_path()))


@router.get("/api/config", response_class=PlainTextResponse)
async def read_config(path: str = Query(..., description="Config file to read")) -> str:
    """
    Read a config file as raw text.

    A missing file reads as the minimal document so the editor can start
    from scratch.

    Raises:
        HTTPException: 400 if the path is blank, 500 if the file exists but
            cannot be read
    """
    if not path.strip():
        raise HTTPException(status_code=400, detail=error_body("Missing required parameter: path"))

    try:
        return read_config_text(path)
    except OSError as e:
        logger.error("Failed to read config %s: %s", path, e)
        raise HTTPException(
            status_code=500,
            detail=error_body("Failed to read config file", path=path, message=str(e)),
        )


@router.post("/api/config")
async def write_config(request: ConfigWriteRequest) -> ConfigWriteResponse:
    """
    Write raw text to a config file, creating parent directories.

    Raises:
        HTTPException: 400 if the path is blank, 500 if the file cannot be written
    """
    if not request.path.strip():
        raise HTTPException(status_code=400, detail=error_body("Missing required parameter: path"))

    target = expand_path(request.path)
    try:
        write_config_text(target, request.content)
    except OSError as e:
        logger.error("Failed to write config %s: %s", target, e)
        raise HTTPException(
            status_code=500,
            detail=error_body("Failed to write config file", path=request.path, message=str(e)),
        )

    return ConfigWriteResponse(success=True, path=str(target))
