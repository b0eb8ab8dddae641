"""MCP server models, tagged by ``type``."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class McpOAuthConfig(BaseModel):
    clientId: str | None = None
    clientSecret: str | None = None
    scope: str | None = None


class McpLocalConfig(BaseModel):
    """MCP server started as a local process."""

    model_config = ConfigDict(extra="allow")

    type: Literal["local"] = "local"
    command: list[str] = Field(description="Command and arguments to start the MCP server")
    environment: dict[str, str] | None = Field(default=None, description="Environment variables")
    enabled: bool | None = None
    timeout: int | None = None


class McpRemoteConfig(BaseModel):
    """MCP server reached over HTTP."""

    model_config = ConfigDict(extra="allow")

    type: Literal["remote"] = "remote"
    url: str
    enabled: bool | None = None
    headers: dict[str, str] | None = None
    oauth: McpOAuthConfig | Literal[False] | None = None
    timeout: int | None = None


MCPServerConfig = Annotated[Union[McpLocalConfig, McpRemoteConfig], Field(discriminator="type")]
