"""Permission resolution for tool invocations."""

import logging
from collections.abc import Mapping
from typing import Any

from config.main_config import Config
from config.permissions_config import Level, PatternRule, ScalarRule, parse_permission_rule

from .patterns import match_pattern

logger = logging.getLogger(__name__)

FALLBACK_LEVEL = Level.ASK
WILDCARD_PATTERN = "*"


class PermissionResolver:
    """
    Resolve allow/deny/ask decisions from permission rules.

    Pattern maps are evaluated in insertion order and the LAST matching
    pattern wins, so a general ``"*"`` entry goes first and more specific
    patterns after it:

        {"*": "ask", "git *": "allow", "git push *": "deny"}

    Resolution never raises. Invalid rules, decisions and patterns are
    skipped, and anything left undecided gets the fallback level.
    """

    def __init__(self, fallback: Level = FALLBACK_LEVEL):
        """
        Initialize the resolver.

        Args:
            fallback: Decision used when no rule or no pattern applies
        """
        self.fallback = fallback

    def resolve(self, tool: str, rule: Any, subject: str | None = None) -> Level:
        """
        Resolve the decision for one tool invocation.

        Args:
            tool: Tool name (bash, edit, read, ...)
            rule: Tagged rule, config-file rule value, or None
            subject: What the tool acts on: a command line for bash, a
                file path for edit/read. None when not known.

        Returns:
            Permission level (ask/allow/deny)
        """
        try:
            parsed = parse_permission_rule(rule, strict=False)
        except ValueError as e:
            logger.debug("Unusable permission rule for %s: %s", tool, e)
            parsed = None

        if parsed is None:
            return self.fallback
        if isinstance(parsed, ScalarRule):
            return parsed.decision
        return self._resolve_patterns(tool, parsed, subject)

    def _resolve_patterns(self, tool: str, rule: PatternRule, subject: str | None) -> Level:
        decision: Level | None = None

        if subject is None:
            for entry in rule.entries:
                if entry.pattern == WILDCARD_PATTERN:
                    decision = entry.decision
        else:
            for entry in rule.entries:
                if match_pattern(entry.pattern, subject):
                    decision = entry.decision

        if decision is None:
            logger.debug("No %s pattern matched %r, using %s", tool, subject, self.fallback.value)
            return self.fallback
        return decision

    def resolve_for_config(
        self,
        document: Mapping[str, Any] | Config,
        tool: str,
        subject: str | None = None,
        agent: str | None = None,
    ) -> Level:
        """
        Resolve a tool's decision from a whole config document.

        The named agent's ``permission`` takes precedence over the top-level
        ``permission``. A single decision at either level applies to every
        tool. A tool absent from every level gets the fallback.

        Args:
            document: Config document or validated Config
            tool: Tool name
            subject: Command line or path the tool acts on
            agent: Optional agent name whose permissions apply first

        Returns:
            Permission level (ask/allow/deny)
        """
        if isinstance(document, Config):
            document = document.to_document()

        layers: list[Any] = []
        if agent:
            agents = document.get("agent")
            agent_config = agents.get(agent) if isinstance(agents, Mapping) else None
            if isinstance(agent_config, Mapping):
                layers.append(agent_config.get("permission"))
        layers.append(document.get("permission"))

        for layer in layers:
            rule = _rule_for_tool(layer, tool)
            if rule is not None:
                return self.resolve(tool, rule, subject)

        return self.fallback


def _rule_for_tool(layer: Any, tool: str) -> Any:
    if isinstance(layer, (str, Level)):
        return layer
    if isinstance(layer, Mapping):
        return layer.get(tool)
    return None


_default_resolver = PermissionResolver()


def resolve_permission(
    tool: str,
    rule: Any,
    subject: str | None = None,
    fallback: Level = FALLBACK_LEVEL,
) -> Level:
    """Resolve a single rule with the given fallback. See PermissionResolver.resolve."""
    if fallback is FALLBACK_LEVEL:
        return _default_resolver.resolve(tool, rule, subject)
    return PermissionResolver(fallback).resolve(tool, rule, subject)


def resolve_for_config(
    document: Mapping[str, Any] | Config,
    tool: str,
    subject: str | None = None,
    agent: str | None = None,
    fallback: Level = FALLBACK_LEVEL,
) -> Level:
    """Resolve a tool's decision from a document. See PermissionResolver.resolve_for_config."""
    resolver = _default_resolver if fallback is FALLBACK_LEVEL else PermissionResolver(fallback)
    return resolver.resolve_for_config(document, tool, subject, agent)


def describe_rule(rule: Any) -> str:
    """
    Summarize a rule for display.

    Returns "default" when no rule is set, the decision for a single decision
    or a lone ``*`` pattern, and "<n> rules" otherwise.
    """
    try:
        parsed = parse_permission_rule(rule, strict=False)
    except ValueError:
        parsed = None

    if parsed is None or (isinstance(parsed, PatternRule) and parsed.is_empty):
        return "default"
    if isinstance(parsed, ScalarRule):
        return parsed.decision.value
    if len(parsed.entries) == 1 and parsed.entries[0].pattern == WILDCARD_PATTERN:
        return parsed.entries[0].decision.value
    count = len(parsed.entries)
    return f"{count} rule" if count == 1 else f"{count} rules"
