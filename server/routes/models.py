"""
Models endpoint - list the models the local opencode CLI knows about.
"""

import logging
import subprocess

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from core.catalog import ModelCatalogEntry, group_by_provider, parse_models_output
from core.exceptions import CoreError, ExternalToolUnavailable
from core.model_listing import run_models_command

from ..app import error_body
from ..logging_config import log_timing
from ..state import get_models_timeout

logger = logging.getLogger(__name__)

MODELS_ERROR = "Failed to run opencode models"


class ModelsResponse(BaseModel):
    """Raw CLI output plus the parsed catalog."""

    model_config = ConfigDict(populate_by_name=True)

    output: str = Field(description="Unmodified stdout of `opencode models`")
    models: list[ModelCatalogEntry] = Field(description="Parsed entries in output order")
    by_provider: dict[str, list[ModelCatalogEntry]] = Field(
        alias="byProvider",
        description="Entries grouped by provider id",
    )


router = APIRouter()


@router.get("/api/models", response_model_by_alias=True)
async def list_models(
    provider: str | None = Query(None, description="Only list this provider's models"),
    timeout: float = Depends(get_models_timeout),
) -> ModelsResponse:
    """
    Run `opencode models [provider]` and parse its output.

    Raises:
        HTTPException: 503 if the CLI is not installed, 500 if it fails
    """
    try:
        with log_timing(logger, "opencode models", level=logging.INFO):
            output = await run_models_command(provider or None, timeout=timeout)
    except ExternalToolUnavailable as e:
        raise HTTPException(status_code=503, detail=error_body(MODELS_ERROR, message=str(e)))
    except (CoreError, OSError, subprocess.SubprocessError) as e:
        logger.error("opencode models failed: %s", e)
        raise HTTPException(status_code=500, detail=error_body(MODELS_ERROR, message=str(e)))

    entries = parse_models_output(output)
    return ModelsResponse(output=output, models=entries, by_provider=group_by_provider(entries))
