"""Glob matching for permission patterns.

Dialect:
- ``*`` matches any run of characters, including ``/`` and spaces
- ``?`` matches exactly one character
- everything else is literal (no character classes, no ``**``, no braces)

Patterns must match the whole subject: ``git *`` matches ``git status`` but
not ``git`` or ``legit status``.
"""

import logging
import re
from functools import lru_cache

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a permission glob into an anchored regular expression."""
    parts: list[str] = []
    previous = ""
    for char in pattern:
        if char == "*":
            # Runs of * behave like a single *
            if previous != "*":
                parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
        previous = char
    return re.compile("".join(parts), re.DOTALL)


def match_pattern(pattern: str, value: str) -> bool:
    """
    Check if a value matches a glob pattern.

    Supports:
    - Exact matches: "git status" matches "git status"
    - Wildcards: "git *" matches "git status", "git commit", etc.
    - Globs: "*.env" matches ".env" and "config/prod.env"

    Args:
        pattern: The pattern to match against
        value: The value to check

    Returns:
        True if value matches pattern. Patterns that cannot be compiled, and
        non-string input, never match.
    """
    if not isinstance(pattern, str) or not isinstance(value, str):
        return False

    if pattern == "*":
        return True

    try:
        regex = compile_pattern(pattern)
    except re.error as e:
        logger.debug("Ignoring unusable permission pattern %r: %s", pattern, e)
        return False

    return regex.fullmatch(value) is not None
