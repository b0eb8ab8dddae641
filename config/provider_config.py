"""Provider and model declaration models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue

ModelModality = Literal["text", "audio", "image", "video", "pdf"]


class ModelLimit(BaseModel):
    """Token limits for a model."""

    model_config = ConfigDict(extra="allow")

    context: int | None = None
    input: int | None = None
    output: int | None = None


class ModelCostConfig(BaseModel):
    """Per-token pricing for a model."""

    model_config = ConfigDict(extra="allow")

    input: float | None = None
    output: float | None = None
    cache_read: float | None = None
    cache_write: float | None = None
    context_over_200k: dict[str, float] | None = None


class ModelModalities(BaseModel):
    input: list[ModelModality] = Field(default_factory=list)
    output: list[ModelModality] = Field(default_factory=list)


class ModelConfig(BaseModel):
    """A model declared under a provider."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    family: str | None = None
    release_date: str | None = None
    attachment: bool | None = None
    reasoning: bool | None = None
    temperature: bool | None = None
    tool_call: bool | None = None
    experimental: bool | None = None
    status: Literal["alpha", "beta", "deprecated"] | None = None
    cost: ModelCostConfig | None = None
    limit: ModelLimit | None = None
    modalities: ModelModalities | None = None
    options: dict[str, JsonValue] | None = Field(
        default=None,
        description="Provider/model specific options (temperature, reasoningEffort, thinking, ...)",
    )
    headers: dict[str, str] | None = None
    variants: dict[str, dict[str, JsonValue]] | None = Field(
        default=None,
        description="Named parameter presets for the model",
    )


class ProviderOptions(BaseModel):
    """Connection options for a provider. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    baseURL: str | None = None
    apiKey: str | None = None
    headers: dict[str, str] | None = None
    timeout: int | Literal[False] | None = None
    setCacheKey: bool | None = None
    enterpriseUrl: str | None = None


class ProviderConfig(BaseModel):
    """Provider descriptor: connection options, declared models, filters."""

    model_config = ConfigDict(extra="allow")

    api: str | None = None
    id: str | None = None
    npm: str | None = Field(
        default=None,
        description="AI SDK package, e.g. @ai-sdk/openai-compatible",
    )
    name: str | None = Field(default=None, description="Display name")
    env: list[str] | None = None
    options: ProviderOptions | None = None
    models: dict[str, ModelConfig] | None = None
    whitelist: list[str] | None = None
    blacklist: list[str] | None = None
