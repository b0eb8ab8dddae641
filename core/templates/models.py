"""Template data models."""

import copy
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

TemplateCategory = Literal["general", "security", "local", "enterprise", "custom"]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Template(BaseModel):
    """
    A user-defined configuration preset.

    Fields this version does not know about are kept, so a record written by
    a newer release survives being loaded and saved again.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(description="Opaque template identifier")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Free-text description")
    created_at: str = Field(
        default_factory=utc_now_iso,
        alias="createdAt",
        description="ISO-8601 creation timestamp",
    )
    config: dict[str, Any] = Field(description="Full or partial config document")

    def to_record(self) -> dict[str, Any]:
        """JSON-ready dict using the persisted field names."""
        return self.model_dump(mode="json", by_alias=True)


class BuiltinTemplate(BaseModel):
    """A read-only preset shipped with the application."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    category: TemplateCategory
    config: dict[str, Any]

    def config_copy(self) -> dict[str, Any]:
        """Deep copy of the preset document, safe to modify."""
        return copy.deepcopy(self.config)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
