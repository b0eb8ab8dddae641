"""ExperimentalConfig model."""

from pydantic import BaseModel, ConfigDict, Field


class ExperimentalConfig(BaseModel):
    """Experimental features configuration."""

    model_config = ConfigDict(extra="allow")

    batch_tool: bool | None = Field(default=None, description="Enable the batch tool")
    openTelemetry: bool | None = Field(default=None, description="Emit OpenTelemetry spans")
    primary_tools: list[str] | None = Field(
        default=None,
        description="Tools only available to primary agents",
    )
    continue_loop_on_deny: bool | None = None
    mcp_timeout: int | None = None
    disable_paste_summary: bool | None = None
