"""
Permission resolution for tool invocations.

Provides the three-tier (ask/allow/deny) decision model and last-match-wins
glob resolution over per-tool rules.
"""

from config.permissions_config import (
    Level,
    PatternEntry,
    PatternRule,
    PermissionRule,
    ScalarRule,
    parse_permission_rule,
)

from .patterns import compile_pattern, match_pattern
from .resolver import (
    FALLBACK_LEVEL,
    PermissionResolver,
    describe_rule,
    resolve_for_config,
    resolve_permission,
)

__all__ = [
    # Permission levels
    "Level",
    "FALLBACK_LEVEL",
    # Rules
    "PermissionRule",
    "ScalarRule",
    "PatternRule",
    "PatternEntry",
    "parse_permission_rule",
    # Functions
    "match_pattern",
    "compile_pattern",
    "resolve_permission",
    "resolve_for_config",
    "describe_rule",
    # Classes
    "PermissionResolver",
]
