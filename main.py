"""
Config studio server entry point.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from config.loader import get_config_dir
from core.model_listing import DEFAULT_TIMEOUT_SECONDS
from core.templates import JsonFileTemplateStorage, TemplateStore
from server import app, init_state
from server.logging_config import setup_logging
from server.state import DEFAULT_STATIC_DIR

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

# Constants
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
TEMPLATES_FILE_NAME = "templates.json"


def get_templates_path() -> Path:
    """Where user templates are stored (TEMPLATES_PATH or <config dir>/templates.json)."""
    configured = os.environ.get("TEMPLATES_PATH")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / TEMPLATES_FILE_NAME


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the per-process objects and attach them to the app."""
    templates_path = get_templates_path()
    static_dir = Path(os.environ.get("STATIC_DIR", DEFAULT_STATIC_DIR))
    models_timeout = float(os.environ.get("OPENCODE_MODELS_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS)))

    logger.info("Starting opencode config studio")
    logger.info("Templates: %s", templates_path)
    logger.info("Static files: %s", static_dir.resolve())
    logger.info("Model listing timeout: %.0fs", models_timeout)

    template_store = TemplateStore(JsonFileTemplateStorage(templates_path))
    init_state(app, template_store, static_dir=static_dir, models_timeout=models_timeout)

    yield

    logger.info("Server stopped")


app.router.lifespan_context = lifespan


def main() -> None:
    """Start the server."""
    host = os.environ.get("HOST", DEFAULT_HOST)
    port = int(os.environ.get("PORT", str(DEFAULT_PORT)))

    logger.info("Server listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
