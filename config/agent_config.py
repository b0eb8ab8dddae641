"""AgentConfig and CommandConfig models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from .permissions_config import Level, PermissionValue

AgentMode = Literal["primary", "subagent", "all"]


class AgentConfig(BaseModel):
    """Custom agent configuration."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    description: str | None = None
    mode: AgentMode | None = None
    model: str | None = Field(
        default=None,
        description="Model override in provider/model format",
    )
    variant: str | None = None
    prompt: str | None = Field(
        default=None,
        description="System prompt; supports {file:./path} references",
    )
    temperature: float | None = None
    top_p: float | None = None
    steps: int | None = None
    maxSteps: int | None = Field(default=None, description="Deprecated, use steps")
    color: str | None = Field(default=None, description="Hex color #RRGGBB")
    hidden: bool | None = None
    disable: bool | None = None
    tools: dict[str, bool] | None = Field(
        default=None,
        description="Tool enable/disable toggles for this agent",
    )
    options: dict[str, JsonValue] | None = None
    permission: Level | dict[str, PermissionValue] | None = Field(
        default=None,
        description="Agent-level permissions, same shape as the top-level permission",
    )


class CommandConfig(BaseModel):
    """Custom slash command."""

    model_config = ConfigDict(extra="allow")

    template: str
    description: str | None = None
    agent: str | None = None
    model: str | None = None
    subtask: bool | None = None
