"""
Merge partial config updates into a document.

Merge rules, by the shape of the field being merged:

- Scalars and lists: the patch value replaces the base value.
- Records (``tui``, ``server``, ``permission``, ...): shallow-merged one level
  deep. Keys in the patch record overwrite the base record's keys; keys
  absent from the patch are kept.
- Maps of named entries (``provider``, ``agent``, ``mcp``, ...): merged by
  entry name, and each entry present on both sides is shallow-merged.

``None`` in a patch always means "unspecified" and leaves the base value
alone. Removing a field is the caller's job (see ``clear_field``); treating
``None`` as a delete here would break additive updates from form fields that
were never touched.
"""

import copy
from collections.abc import Mapping
from typing import Any

from .defaults import default_configuration

# Fields holding a map of named entries, merged entry by entry
MAP_OF_MAPS_FIELDS = frozenset({"provider", "agent", "mcp", "command", "mode"})


def _shallow_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        if value is None:
            continue
        merged[key] = copy.deepcopy(value)
    return merged


def _merge_entries(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for name, entry in patch.items():
        if entry is None:
            continue
        existing = merged.get(name)
        if not isinstance(entry, Mapping):
            merged[name] = copy.deepcopy(entry)
        elif not isinstance(existing, Mapping):
            merged[name] = _shallow_merge({}, entry)
        elif "type" in entry and existing.get("type") not in (None, entry["type"]):
            # Switching an MCP server between local and remote replaces it
            merged[name] = _shallow_merge({}, entry)
        else:
            merged[name] = _shallow_merge(existing, entry)
    return merged


def merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update to a configuration document.

    Neither argument is modified.

    Args:
        base: Current document
        patch: Partial document with the fields to change

    Returns:
        A new merged document
    """
    result = copy.deepcopy(dict(base))

    for key, value in patch.items():
        if value is None:
            continue

        current = result.get(key)
        if isinstance(value, Mapping):
            # A record missing from the base merges onto an empty one
            if not isinstance(current, Mapping):
                current = {}
            if key in MAP_OF_MAPS_FIELDS:
                result[key] = _merge_entries(current, value)
            else:
                result[key] = _shallow_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def merge_with_defaults(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return the effective configuration: built-in defaults overlaid by ``document``."""
    return merge(default_configuration(), document)


def clear_field(document: Mapping[str, Any], *path: str) -> dict[str, Any]:
    """
    Return a copy of ``document`` without the field at ``path``.

    Parent records left empty by the removal are dropped as well, so clearing
    ``("server", "port")`` from ``{"server": {"port": 1}}`` yields ``{}``.
    Missing paths are ignored.

    Args:
        document: Source document
        *path: Keys leading to the field, e.g. ``"watcher", "ignore"``

    Returns:
        A new document
    """
    result = copy.deepcopy(dict(document))
    if not path:
        return result

    parents: list[dict[str, Any]] = [result]
    node: Any = result
    for key in path[:-1]:
        node = node.get(key) if isinstance(node, dict) else None
        if not isinstance(node, dict):
            return result
        parents.append(node)

    parents[-1].pop(path[-1], None)

    # Walk back up, dropping records that became empty
    for depth in range(len(parents) - 1, 0, -1):
        if parents[depth]:
            break
        parents[depth - 1].pop(path[depth - 1], None)

    return result


def compact_list(values: list[Any] | None) -> list[Any] | None:
    """Return None for an empty list so the caller can drop the field."""
    if not values:
        return None
    return list(values)
