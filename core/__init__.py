"""
Core business logic package.

This package contains transport-agnostic logic for editing opencode
configuration: permission resolution, templates, the model catalog and the
editing session. The server package provides HTTP bindings around it.

Submodules are imported directly (``from core.templates import TemplateStore``)
so that ``config`` can depend on ``core.exceptions`` without import cycles.
"""

from .exceptions import (
    CoreError,
    ExternalToolUnavailable,
    FormatError,
    InvalidOperationError,
    NotFoundError,
)
from .ids import gen_id

__all__ = [
    # Exceptions
    "CoreError",
    "NotFoundError",
    "FormatError",
    "ExternalToolUnavailable",
    "InvalidOperationError",
    # Utils
    "gen_id",
]
