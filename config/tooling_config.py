"""LSP, formatter, compaction, watcher, skills and enterprise settings."""

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class LspServerConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    command: list[str] | None = None
    extensions: list[str] | None = None
    disabled: bool | None = None
    env: dict[str, str] | None = None
    initialization: dict[str, JsonValue] | None = None


class FormatterLanguageConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    disabled: bool | None = None
    command: list[str] | None = None
    environment: dict[str, str] | None = None
    extensions: list[str] | None = None


class CompactionConfig(BaseModel):
    """Session compaction settings."""

    model_config = ConfigDict(extra="allow")

    auto: bool | None = Field(default=None, description="Compact automatically near the context limit")
    prune: bool | None = Field(default=None, description="Prune old tool output")


class WatcherConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    ignore: list[str] | None = Field(default=None, description="Glob patterns the file watcher skips")


class SkillsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    paths: list[str] | None = None


class EnterpriseConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str | None = None
