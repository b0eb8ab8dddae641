"""User template store."""

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from config.merge import merge

from ..exceptions import FormatError, NotFoundError
from ..ids import gen_id
from .builtin import get_builtin_template
from .models import BuiltinTemplate, Template, utc_now_iso
from .storage import (
    STORAGE_NAME,
    STORAGE_VERSION,
    InMemoryTemplateStorage,
    TemplateStorage,
    empty_record,
)

logger = logging.getLogger(__name__)

TEMPLATE_ID_PREFIX = "tpl_"
# Fields update_template is allowed to change
MUTABLE_FIELDS = ("name", "description", "config")


class TemplateStore:
    """
    CRUD plus import/export over the persisted list of user templates.

    Built-in templates are not stored here; ``instantiate`` accepts either
    kind. Every mutation is written through to the storage backend
    immediately. The store assumes a single writer.
    """

    def __init__(self, storage: TemplateStorage | None = None):
        """
        Initialize the store and load any persisted templates.

        Args:
            storage: Persistence backend (defaults to in-memory)

        Raises:
            FormatError: If the backend holds an unreadable record
        """
        self._storage = storage if storage is not None else InMemoryTemplateStorage()
        self._issued_ids: set[str] = set()
        self._record: dict[str, Any] = {}
        self._templates: list[Template] = []
        self._load()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load(self) -> None:
        record = self._storage.load()
        if record is None:
            record = empty_record()

        version = record.get("version")
        if isinstance(version, int) and version > STORAGE_VERSION:
            logger.warning(
                "Template storage version %s is newer than %s; unknown fields are kept",
                version,
                STORAGE_VERSION,
            )

        state = record.get("state")
        raw_templates = state.get("userTemplates") if isinstance(state, Mapping) else None

        templates: list[Template] = []
        for raw in raw_templates or []:
            try:
                template = Template.model_validate(raw)
            except ValidationError as e:
                logger.warning("Skipping unreadable stored template: %s", e)
                continue
            templates.append(template)
            self._issued_ids.add(template.id)

        self._record = record
        self._templates = templates
        logger.info("Loaded %d user templates", len(templates))

    def _commit(self, templates: list[Template]) -> None:
        """Write ``templates`` to storage, then make them current."""
        record = dict(self._record)
        state = record.get("state")
        state = dict(state) if isinstance(state, Mapping) else {}
        state["userTemplates"] = [template.to_record() for template in templates]
        record["state"] = state
        record.setdefault("name", STORAGE_NAME)
        record.setdefault("version", STORAGE_VERSION)

        self._storage.save(record)
        self._record = record
        self._templates = templates

    def _new_id(self) -> str:
        while True:
            template_id = gen_id(TEMPLATE_ID_PREFIX)
            if template_id not in self._issued_ids:
                self._issued_ids.add(template_id)
                return template_id

    def _find(self, template_id: str) -> Template | None:
        for template in self._templates:
            if template.id == template_id:
                return template
        return None

    def _require(self, template_id: str) -> Template:
        template = self._find(template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    def _from_untrusted(self, raw: Any) -> Template:
        """Build a template from imported data, always with a fresh id."""
        if not isinstance(raw, Mapping):
            raise FormatError("Invalid template format: expected an object")
        if not raw.get("name") or raw.get("config") is None:
            raise FormatError("Invalid template format: missing name or config")

        data = {key: value for key, value in raw.items() if key != "id"}
        data["id"] = self._new_id()
        data["description"] = raw.get("description") or ""
        data["createdAt"] = raw.get("createdAt") or utc_now_iso()
        data.pop("created_at", None)

        try:
            return Template.model_validate(copy.deepcopy(data))
        except ValidationError as e:
            raise FormatError(f"Invalid template format: {e}") from e

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._templates)

    def list_templates(self) -> list[Template]:
        """All user templates in insertion order (copies)."""
        return [template.model_copy(deep=True) for template in self._templates]

    def get_template(self, template_id: str) -> Template | None:
        template = self._find(template_id)
        return template.model_copy(deep=True) if template else None

    def search_templates(self, query: str) -> list[Template]:
        """Case-insensitive substring search over name and description."""
        if not query.strip():
            return self.list_templates()

        needle = query.lower()
        return [
            template.model_copy(deep=True)
            for template in self._templates
            if needle in template.name.lower() or needle in template.description.lower()
        ]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def save_as_template(self, name: str, description: str, config: Mapping[str, Any]) -> Template:
        """
        Save a config document as a new user template.

        Args:
            name: Display name
            description: Free-text description
            config: Document to store (copied)

        Returns:
            The new template
        """
        template = Template(
            id=self._new_id(),
            name=name,
            description=description,
            created_at=utc_now_iso(),
            config=copy.deepcopy(dict(config)),
        )
        self._commit([*self._templates, template])
        logger.info("Saved template %s (%s)", template.id, name)
        return template.model_copy(deep=True)

    def delete_template(self, template_id: str) -> bool:
        """Remove a template. Returns False, without error, if it does not exist."""
        template = self._find(template_id)
        if template is None:
            return False
        self._commit([t for t in self._templates if t is not template])
        logger.info("Deleted template %s", template_id)
        return True

    def import_template(self, json_text: str) -> Template:
        """
        Import one template from JSON text.

        Any id in the input is ignored and a fresh one assigned.

        Raises:
            FormatError: If the text is not JSON or lacks ``name`` or ``config``
        """
        try:
            parsed = json.loads(json_text)
            template = self._from_untrusted(parsed)
        except (json.JSONDecodeError, FormatError) as e:
            raise FormatError(f"Failed to import template: {e}") from e

        self._commit([*self._templates, template])
        logger.info("Imported template %s (%s)", template.id, template.name)
        return template.model_copy(deep=True)

    def export_template(self, template_id: str) -> str:
        """
        Serialize one template to JSON text.

        Raises:
            NotFoundError: If no template has this id
        """
        template = self._require(template_id)
        return json.dumps(template.to_record(), indent=2, ensure_ascii=False)

    def export_all_templates(self) -> str:
        """Serialize every user template to a JSON array."""
        records = [template.to_record() for template in self._templates]
        return json.dumps(records, indent=2, ensure_ascii=False)

    def import_all_templates(self, json_text: str) -> list[Template]:
        """
        Replace every user template with the contents of a JSON array.

        Nothing changes unless every element is valid.

        Raises:
            FormatError: If the text is not a JSON array of templates
        """
        try:
            parsed = json.loads(json_text)
            if not isinstance(parsed, list):
                raise FormatError("Invalid format: expected array of templates")
            templates = [self._from_untrusted(raw) for raw in parsed]
        except (json.JSONDecodeError, FormatError) as e:
            raise FormatError(f"Failed to import templates: {e}") from e

        self._commit(templates)
        logger.info("Replaced user templates with %d imported templates", len(templates))
        return self.list_templates()

    def update_template(self, template_id: str, updates: Mapping[str, Any]) -> Template | None:
        """
        Change a template's name, description or config.

        Other keys in ``updates`` (including ``id`` and ``createdAt``) are
        ignored. An unknown id is a no-op.

        Returns:
            The updated template, or None if no template has this id

        Raises:
            FormatError: If an updated field has the wrong type
        """
        template = self._find(template_id)
        if template is None:
            logger.debug("Ignoring update for unknown template %s", template_id)
            return None

        changes = {key: updates[key] for key in MUTABLE_FIELDS if updates.get(key) is not None}
        if not changes:
            return template.model_copy(deep=True)

        data = template.to_record()
        data.update(copy.deepcopy(changes))
        try:
            updated = Template.model_validate(data)
        except ValidationError as e:
            raise FormatError(f"Invalid template update: {e}") from e

        self._commit([updated if t is template else t for t in self._templates])
        logger.info("Updated template %s (%s)", template_id, ", ".join(changes))
        return updated.model_copy(deep=True)

    def duplicate_template(self, template_id: str, new_name: str | None = None) -> Template:
        """
        Copy a template under a new id.

        Args:
            template_id: Template to copy
            new_name: Name for the copy (defaults to "<original> (Copy)")

        Raises:
            NotFoundError: If no template has this id
        """
        original = self._require(template_id)
        duplicate = Template(
            id=self._new_id(),
            name=new_name or f"{original.name} (Copy)",
            description=original.description,
            created_at=utc_now_iso(),
            config=copy.deepcopy(original.config),
        )
        self._commit([*self._templates, duplicate])
        logger.info("Duplicated template %s as %s", template_id, duplicate.id)
        return duplicate.model_copy(deep=True)

    def clear_all_templates(self) -> None:
        self._commit([])
        logger.info("Cleared all user templates")

    # -------------------------------------------------------------------------
    # Instantiation
    # -------------------------------------------------------------------------

    def instantiate(
        self,
        template: str | Template | BuiltinTemplate,
        base: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Produce a config document from a template.

        Args:
            template: Template object, or the id of a built-in or user template
            base: Document to merge the template onto (defaults to empty)

        Returns:
            A new document

        Raises:
            NotFoundError: If an id matches no built-in or user template
        """
        if isinstance(template, str):
            resolved = get_builtin_template(template) or self._find(template)
            if resolved is None:
                raise NotFoundError("Template", template)
            template = resolved

        return merge(base or {}, template.config)
