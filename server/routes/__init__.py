"""
Route registration for the config studio API.
"""

from fastapi import FastAPI

from . import config, health, models, static, templates


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application."""
    app.include_router(health.router)
    app.include_router(config.router)
    app.include_router(models.router)
    app.include_router(templates.router)
    # Catch-all; must stay last
    app.include_router(static.router)
