"""
Core domain exceptions.

These exceptions are transport-agnostic and should be caught by the server
layer to convert into appropriate HTTP responses.
"""


class CoreError(Exception):
    """Base exception for all core errors."""

    pass


class NotFoundError(CoreError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with id \"{identifier}\" not found")


class FormatError(CoreError):
    """Raised when imported or parsed JSON is malformed or missing required fields."""

    pass


class ExternalToolUnavailable(CoreError):
    """Raised when no candidate invocation of an external tool could be started."""

    def __init__(self, tool: str, attempts: list[str] | None = None):
        self.tool = tool
        self.attempts = attempts or []
        super().__init__(f"{tool} command not found")


class InvalidOperationError(CoreError):
    """Raised when an operation cannot be performed in the current state."""

    pass
