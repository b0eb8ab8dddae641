"""Parse `opencode models` output into a model catalog."""

import re

from pydantic import BaseModel, ConfigDict, Field

# provider/model token; the provider segment is word characters, dots and hyphens
MODEL_TOKEN_RE = re.compile(r"([A-Za-z0-9_.-]+/\S+)")


class ModelCatalogEntry(BaseModel):
    """One model listed by the CLI."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    provider_id: str = Field(alias="providerId")
    model_id: str = Field(alias="modelId")
    model_name: str = Field(alias="modelName")
    full_id: str = Field(alias="fullId")


def parse_models_output(output: str) -> list[ModelCatalogEntry]:
    """
    Extract provider/model pairs from free-text CLI output.

    Each non-blank line contributes at most one entry: the first
    ``provider/model`` token on it, split at the first ``/`` (so
    ``openrouter/anthropic/claude-sonnet-4`` is provider ``openrouter``, model
    ``anthropic/claude-sonnet-4``). Repeated ids are dropped; the first
    occurrence keeps its position.

    Args:
        output: Raw command output

    Returns:
        Entries in first-seen order
    """
    entries: list[ModelCatalogEntry] = []
    seen: set[str] = set()

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        match = MODEL_TOKEN_RE.search(line)
        if not match:
            continue

        provider_id, _, model_id = match.group(1).partition("/")
        if not provider_id or not model_id:
            continue

        full_id = f"{provider_id}/{model_id}"
        if full_id in seen:
            continue
        seen.add(full_id)

        entries.append(
            ModelCatalogEntry(
                provider_id=provider_id,
                model_id=model_id,
                model_name=model_id,
                full_id=full_id,
            )
        )

    return entries


def group_by_provider(entries: list[ModelCatalogEntry]) -> dict[str, list[ModelCatalogEntry]]:
    """Group entries by provider id, keeping first-seen provider order."""
    grouped: dict[str, list[ModelCatalogEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.provider_id, []).append(entry)
    return grouped
