"""Permission rule models.

A tool's permission is written in config files either as a single decision
(``"allow"``) or as an ordered map of glob patterns to decisions
(``{"*": "ask", "git *": "allow"}``). In code both forms are carried as a
tagged variant so consumers can branch on ``kind`` instead of inspecting
runtime types.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Level(str, Enum):
    """Permission level for operations."""

    ASK = "ask"
    ALLOW = "allow"
    DENY = "deny"


class PatternEntry(BaseModel):
    """One glob pattern and the decision it maps to."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    decision: Level


class ScalarRule(BaseModel):
    """A single decision applied to every invocation of a tool."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    decision: Level

    def to_json(self) -> str:
        return self.decision.value


class PatternRule(BaseModel):
    """Ordered glob patterns; later entries override earlier ones."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["patterns"] = "patterns"
    entries: tuple[PatternEntry, ...] = Field(default_factory=tuple)

    def to_json(self) -> dict[str, str]:
        return {entry.pattern: entry.decision.value for entry in self.entries}

    @property
    def is_empty(self) -> bool:
        return not self.entries


PermissionRule = Annotated[Union[ScalarRule, PatternRule], Field(discriminator="kind")]

# Config-file form of a single tool's permission
PermissionValue = Union[Level, dict[str, Level]]


def _coerce_level(value: Any) -> Level | None:
    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        try:
            return Level(value)
        except ValueError:
            return None
    return None


def parse_permission_rule(raw: Any, strict: bool = True) -> ScalarRule | PatternRule | None:
    """
    Convert a config-file permission value into its tagged form.

    Args:
        raw: ``None``, a decision string, a pattern mapping, or an already
            tagged rule
        strict: If True, invalid input raises ValueError. If False, invalid
            pattern entries are dropped and an invalid scalar yields None.

    Returns:
        The tagged rule, or None when no rule is defined

    Raises:
        ValueError: If ``strict`` and the value is not a valid rule
    """
    if raw is None:
        return None
    if isinstance(raw, (ScalarRule, PatternRule)):
        return raw

    if isinstance(raw, (str, Level)):
        level = _coerce_level(raw)
        if level is None:
            if strict:
                raise ValueError(f"Invalid permission value: {raw!r}")
            return None
        return ScalarRule(decision=level)

    if isinstance(raw, Mapping):
        entries = []
        for pattern, value in raw.items():
            level = _coerce_level(value)
            if not isinstance(pattern, str) or level is None:
                if strict:
                    raise ValueError(f"Invalid permission entry: {pattern!r} -> {value!r}")
                continue
            entries.append(PatternEntry(pattern=pattern, decision=level))
        return PatternRule(entries=tuple(entries))

    if strict:
        raise ValueError(f"Unsupported permission rule type: {type(raw).__name__}")
    return None
