"""Persistence backends for user templates."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol

from ..exceptions import FormatError

logger = logging.getLogger(__name__)

STORAGE_NAME = "opencode-templates-storage"
STORAGE_VERSION = 1


class TemplateStorage(Protocol):
    """Loads and saves the persisted template record."""

    def load(self) -> dict[str, Any] | None:
        """Return the stored record, or None if nothing has been saved yet."""
        ...

    def save(self, record: dict[str, Any]) -> None:
        """Replace the stored record."""
        ...


def empty_record() -> dict[str, Any]:
    """Record for a store that has never been saved."""
    return {"name": STORAGE_NAME, "version": STORAGE_VERSION, "state": {"userTemplates": []}}


class InMemoryTemplateStorage:
    """Keeps the record in memory. Used in tests and for throwaway stores."""

    def __init__(self, record: dict[str, Any] | None = None):
        self._record = copy.deepcopy(record)

    def load(self) -> dict[str, Any] | None:
        return copy.deepcopy(self._record)

    def save(self, record: dict[str, Any]) -> None:
        self._record = copy.deepcopy(record)


class JsonFileTemplateStorage:
    """
    Keeps the record in a single JSON file.

    Writes go to a sibling temporary file first and are then moved into
    place, so an interrupted write never leaves a truncated record behind.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, Any] | None:
        """
        Read the record from disk.

        Returns:
            The record, or None if the file does not exist

        Raises:
            FormatError: If the file is not a JSON object
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            record = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"Template storage {self.path} is not valid JSON: {e}") from e

        if not isinstance(record, dict):
            raise FormatError(f"Template storage {self.path} must contain a JSON object")

        logger.debug("Loaded template storage from %s", self.path)
        return record

    def save(self, record: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self.path)
        logger.debug("Saved template storage to %s", self.path)
