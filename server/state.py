"""
Server-side state management.

Long-lived objects (the template store, the static directory, the model
listing timeout) are created once at startup and kept on ``app.state``.
Routes reach them through the dependency functions below.
"""

from pathlib import Path

from fastapi import FastAPI, Request

from core.model_listing import DEFAULT_TIMEOUT_SECONDS
from core.templates import TemplateStore

DEFAULT_STATIC_DIR = "dist"


# =============================================================================
# Initialization
# =============================================================================


def init_state(
    app: FastAPI,
    template_store: TemplateStore,
    static_dir: str | Path = DEFAULT_STATIC_DIR,
    models_timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> None:
    """Attach the per-process objects to the application."""
    app.state.template_store = template_store
    app.state.static_dir = Path(static_dir)
    app.state.models_timeout = models_timeout


# =============================================================================
# Dependencies
# =============================================================================


def get_template_store(request: Request) -> TemplateStore:
    """The process-wide template store."""
    return request.app.state.template_store


def get_static_dir(request: Request) -> Path:
    return getattr(request.app.state, "static_dir", Path(DEFAULT_STATIC_DIR))


def get_models_timeout(request: Request) -> float:
    return getattr(request.app.state, "models_timeout", DEFAULT_TIMEOUT_SECONDS)
