"""
Config editing session.

Owns one in-memory config document and applies edits to it through the
merge engine. Nothing is written to disk until ``save`` is called.
"""

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from config.defaults import SCALAR_ONLY_TOOLS, TOOL_PERMISSIONS, minimal_document
from config.loader import (
    dump_document,
    expand_path,
    get_default_config_path,
    parse_document,
    read_config_text,
    write_config_text,
)
from config.main_config import Config, validate_document
from config.merge import clear_field, merge, merge_with_defaults
from config.permissions_config import Level, PatternRule, parse_permission_rule

from .permissions.resolver import describe_rule, resolve_for_config
from .templates.models import BuiltinTemplate, Template

logger = logging.getLogger(__name__)


class ConfigSession:
    """
    A single-writer editor over one config file.

    Example:
        session = ConfigSession.open("~/.config/opencode/opencode.json")
        session.update_permission("bash", {"*": "ask", "git *": "allow"})
        session.save()
    """

    def __init__(self, path: str | Path | None = None, document: Mapping[str, Any] | None = None):
        """
        Initialize the session.

        Args:
            path: Config file the session saves to (defaults to the platform path)
            document: Starting document (defaults to the minimal document)
        """
        self.path = expand_path(path) if path is not None else get_default_config_path()
        self._document: dict[str, Any] = (
            copy.deepcopy(dict(document)) if document is not None else minimal_document()
        )
        self.dirty = False

    @classmethod
    def open(cls, path: str | Path | None = None) -> "ConfigSession":
        """Create a session and load its file. A missing file reads as the minimal document."""
        session = cls(path)
        session.load()
        return session

    @property
    def document(self) -> dict[str, Any]:
        """Copy of the current document."""
        return copy.deepcopy(self._document)

    # -------------------------------------------------------------------------
    # File I/O
    # -------------------------------------------------------------------------

    def load(self) -> dict[str, Any]:
        """
        Replace the in-memory document with the file's contents.

        Raises:
            FormatError: If the file is not a JSON object
            OSError: If the file exists but cannot be read
        """
        self._document = parse_document(read_config_text(self.path))
        self.dirty = False
        logger.info("Loaded config from %s", self.path)
        return self.document

    reload = load

    def export(self) -> str:
        """The current document as pretty-printed JSON text."""
        return dump_document(self._document)

    def save(self) -> Path:
        """
        Validate the document and write it to the session's path.

        Raises:
            pydantic.ValidationError: If a declared field has the wrong shape
            OSError: If the file cannot be written
        """
        validate_document(self._document)
        write_config_text(self.path, self.export())
        self.dirty = False
        logger.info("Saved config to %s", self.path)
        return self.path

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def _replace(self, document: dict[str, Any]) -> dict[str, Any]:
        if document != self._document:
            self._document = document
            self.dirty = True
        return self.document

    def update(self, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Merge a partial document into the current one."""
        return self._replace(merge(self._document, patch))

    def clear(self, *path: str) -> dict[str, Any]:
        """Remove the field at ``path``, pruning records left empty."""
        return self._replace(clear_field(self._document, *path))

    def update_permission(self, tool: str, rule: Any) -> dict[str, Any]:
        """
        Set or remove one tool's permission rule.

        Args:
            tool: Tool name
            rule: A decision, a pattern map, a tagged rule, or None to remove it.
                An empty pattern map also removes the rule.

        Raises:
            ValueError: If the rule has an invalid decision or shape, or is a
                pattern map for a tool that only takes a single decision
        """
        parsed = parse_permission_rule(rule, strict=True)
        if tool in SCALAR_ONLY_TOOLS and isinstance(parsed, PatternRule) and not parsed.is_empty:
            raise ValueError(f"{tool} only accepts a single decision, not patterns")

        logger.info("Setting %s permission: %s", tool, describe_rule(parsed))
        if parsed is None or (isinstance(parsed, PatternRule) and parsed.is_empty):
            return self.clear("permission", tool)

        current = self._document.get("permission")
        if isinstance(current, str):
            # A single decision for every tool becomes the same decision per tool
            logger.debug("Expanding scalar permission %r into per-tool rules", current)
            expanded: dict[str, Any] = {name: current for name in TOOL_PERMISSIONS}
            expanded[tool] = parsed.to_json()
            document = clear_field(self._document, "permission")
            return self._replace(merge(document, {"permission": expanded}))

        return self.update({"permission": {tool: parsed.to_json()}})

    def apply_template(
        self,
        template: Template | BuiltinTemplate | Mapping[str, Any],
        replace: bool = False,
    ) -> dict[str, Any]:
        """
        Apply a template's document.

        Args:
            template: Template, or a bare config document
            replace: Discard the current document instead of merging onto it
        """
        config = template.config if isinstance(template, (Template, BuiltinTemplate)) else template
        if replace:
            return self._replace(copy.deepcopy(dict(config)))
        return self.update(config)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def effective(self) -> dict[str, Any]:
        """The document overlaid on the built-in defaults."""
        return merge_with_defaults(self._document)

    def validate(self) -> Config:
        return validate_document(self._document)

    def resolve(self, tool: str, subject: str | None = None, agent: str | None = None) -> Level:
        """Decision for a tool invocation under the effective configuration."""
        return resolve_for_config(self.effective(), tool, subject, agent)
