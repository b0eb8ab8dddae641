"""
HTTP server for the opencode config studio.

Serves the config file, model listing and template endpoints used by the
web UI, and the built UI itself.
"""

from .app import app
from .routes import register_routes
from .state import get_template_store, init_state

# Register all routes with the app
register_routes(app)

__all__ = ["app", "init_state", "get_template_store"]
