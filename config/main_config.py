"""Main Config model."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .agent_config import AgentConfig, CommandConfig
from .experimental_config import ExperimentalConfig
from .mcp_server_config import MCPServerConfig
from .permissions_config import Level, PermissionValue
from .provider_config import ProviderConfig
from .tooling_config import (
    CompactionConfig,
    EnterpriseConfig,
    FormatterLanguageConfig,
    LspServerConfig,
    SkillsConfig,
    WatcherConfig,
)
from .ui_config import KeybindConfig, ServerConfig, TuiConfig


class Config(BaseModel):
    """An opencode configuration document.

    Every field is optional: an absent field means "use the default". Fields
    this model does not declare are kept as extras so that documents written
    by newer opencode versions survive a load/save cycle.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_: str | None = Field(default=None, alias="$schema")

    model: str | None = Field(
        default=None,
        description="Default model identifier in provider/model format",
    )
    small_model: str | None = Field(
        default=None,
        description="Model for lightweight tasks such as title generation",
    )
    default_agent: str | None = None
    username: str | None = None
    theme: str | None = None

    provider: dict[str, ProviderConfig] | None = None
    disabled_providers: list[str] | None = None
    enabled_providers: list[str] | None = None

    agent: dict[str, AgentConfig] | None = None
    mode: dict[str, AgentConfig] | None = Field(default=None, description="Deprecated, use agent")
    command: dict[str, CommandConfig] | None = None

    permission: Level | dict[str, PermissionValue] | None = Field(
        default=None,
        description="One decision for every tool, or per-tool rules",
    )
    tools: dict[str, bool] | None = Field(default=None, description="Deprecated tool toggles")

    mcp: dict[str, MCPServerConfig] | None = None
    keybinds: KeybindConfig | None = None
    tui: TuiConfig | None = None
    server: ServerConfig | None = None
    lsp: Literal[False] | dict[str, LspServerConfig] | None = None
    formatter: Literal[False] | dict[str, FormatterLanguageConfig] | None = None
    compaction: CompactionConfig | None = None
    experimental: ExperimentalConfig | None = None
    watcher: WatcherConfig | None = None
    skills: SkillsConfig | None = None
    enterprise: EnterpriseConfig | None = None

    plugin: list[str] | None = None
    instructions: list[str] | None = None
    share: Literal["manual", "auto", "disabled"] | None = None
    autoshare: bool | None = Field(default=None, description="Deprecated, use share")
    layout: Literal["auto", "stretch"] | None = None
    logLevel: Literal["DEBUG", "INFO", "WARN", "ERROR"] | None = None
    autoupdate: bool | Literal["notify"] | None = None
    snapshot: bool | None = None

    def to_document(self) -> dict[str, Any]:
        """Dump to the JSON-shaped document written to config files."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_document(document: dict[str, Any]) -> Config:
    """
    Validate a JSON-shaped document against the schema.

    Args:
        document: Parsed config document

    Returns:
        The validated Config model

    Raises:
        pydantic.ValidationError: If a declared field has the wrong shape
    """
    return Config.model_validate(document)
