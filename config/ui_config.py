"""TUI, keybind and server settings."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .defaults import DEFAULT_LEADER_KEY


class ScrollAcceleration(BaseModel):
    enabled: bool


class TuiConfig(BaseModel):
    """TUI-specific configuration."""

    model_config = ConfigDict(extra="allow")

    scroll_speed: float | None = Field(default=None, description="Scroll speed for TUI")
    scroll_acceleration: ScrollAcceleration | None = None
    diff_style: Literal["auto", "stacked"] | None = None


class KeybindConfig(BaseModel):
    """Keybind configuration.

    Only the leader key is declared; every other action (``session_new``,
    ``input_submit``, ...) is accepted as an extra string field.
    """

    model_config = ConfigDict(extra="allow")

    leader: str | None = Field(
        default=None,
        description=f"Leader key for TUI commands (default {DEFAULT_LEADER_KEY})",
    )


class ServerConfig(BaseModel):
    """Settings for `opencode serve`."""

    model_config = ConfigDict(extra="allow")

    port: int | None = None
    hostname: str | None = None
    mdns: bool | None = None
    mdnsDomain: str | None = None
    cors: list[str] | None = None
