"""Tests for the config editing session."""

import json
import logging

import pytest
from pydantic import ValidationError

from config import SCHEMA_URL
from config.defaults import TOOL_PERMISSIONS
from core.config_session import ConfigSession
from core.permissions import Level, PatternRule
from core.templates import get_builtin_template


class TestLoadSave:
    """Tests for file I/O."""

    def test_open_missing_file(self, temp_dir):
        """Test that a missing file starts from the minimal document."""
        session = ConfigSession.open(temp_dir / "opencode.json")
        assert session.document == {"$schema": SCHEMA_URL}
        assert session.dirty is False

    def test_open_jsonc(self, config_file):
        """Test opening a commented file."""
        session = ConfigSession.open(config_file)
        assert session.document["permission"]["bash"] == {"*": "ask", "git *": "allow"}

    def test_save_round_trip(self, temp_dir, sample_document):
        """Test that a saved document reloads unchanged."""
        path = temp_dir / "nested" / "opencode.json"
        session = ConfigSession(path, sample_document)

        assert session.save() == path
        assert json.loads(path.read_text()) == sample_document
        assert ConfigSession.open(path).document == sample_document

    def test_save_rejects_invalid(self, temp_dir):
        """Test that an invalid document is not written."""
        path = temp_dir / "opencode.json"
        session = ConfigSession(path, {"share": "sometimes"})
        with pytest.raises(ValidationError):
            session.save()
        assert not path.exists()

    def test_reload_discards_edits(self, config_file):
        """Test that reloading drops unsaved edits."""
        session = ConfigSession.open(config_file)
        session.update({"model": "openai/gpt-4o"})
        assert session.dirty

        session.reload()

        assert session.document["model"] == "anthropic/claude-sonnet-4-20250514"
        assert session.dirty is False

    def test_export(self, sample_document):
        """Test exporting the document as JSON text."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        assert json.loads(session.export()) == sample_document


class TestEdits:
    """Tests for editing operations."""

    def test_update_merges(self, sample_document):
        """Test that updates go through the merge engine."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        document = session.update({"tui": {"diff_style": "stacked"}})
        assert document["tui"] == {"scroll_speed": 2, "diff_style": "stacked"}
        assert session.dirty

    def test_noop_update_not_dirty(self, sample_document):
        """Test that an update changing nothing leaves the session clean."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        session.update({"model": sample_document["model"]})
        assert session.dirty is False

    def test_document_is_a_copy(self, sample_document):
        """Test that callers cannot edit the session's document directly."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        session.document["model"] = "x/y"
        assert session.document["model"] == sample_document["model"]

    def test_clear(self, sample_document):
        """Test clearing a nested field."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        document = session.clear("tui", "scroll_speed")
        assert "tui" not in document

    def test_update_permission_map(self, sample_document):
        """Test replacing one tool's rule."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        document = session.update_permission("bash", {"*": "deny", "ls *": "allow"})
        assert document["permission"]["bash"] == {"*": "deny", "ls *": "allow"}
        assert document["permission"]["edit"] == "allow"

    def test_update_permission_tagged(self):
        """Test setting a rule from its tagged form."""
        session = ConfigSession("/tmp/unused.json", {})
        rule = PatternRule.model_validate({"entries": [{"pattern": "*", "decision": "ask"}]})
        assert session.update_permission("edit", rule) == {"permission": {"edit": {"*": "ask"}}}

    def test_update_permission_remove(self, sample_document):
        """Test that None or an empty map removes the rule."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        session.update_permission("bash", None)
        document = session.update_permission("edit", {})
        assert "permission" not in document

    def test_update_permission_expands_scalar(self):
        """Test that a top-level scalar becomes a per-tool map keeping its decision."""
        session = ConfigSession("/tmp/unused.json", {"permission": "allow"})
        permission = session.update_permission("bash", "ask")["permission"]

        assert permission["bash"] == "ask"
        assert set(permission) == set(TOOL_PERMISSIONS)
        assert all(permission[tool] == "allow" for tool in TOOL_PERMISSIONS if tool != "bash")

    def test_update_permission_keeps_global_deny(self):
        """Test that changing one tool does not loosen a global deny for the others."""
        session = ConfigSession("/tmp/unused.json", {"permission": "deny"})
        session.update_permission("bash", {"*": "deny", "git status": "allow"})

        assert session.resolve("read", "secret.env") == Level.DENY
        assert session.resolve("edit", "x.py") == Level.DENY
        assert session.resolve("bash", "git status") == Level.ALLOW
        assert session.resolve("bash", "rm -rf /") == Level.DENY

    def test_update_permission_logged(self, caplog):
        """Test that permission changes are logged with a rule summary."""
        session = ConfigSession("/tmp/unused.json", {})
        with caplog.at_level(logging.INFO, logger="core.config_session"):
            session.update_permission("bash", {"*": "ask", "git *": "allow"})

        assert "Setting bash permission: 2 rules" in caplog.text

    def test_update_permission_invalid(self):
        """Test that an invalid decision is rejected."""
        session = ConfigSession("/tmp/unused.json", {})
        with pytest.raises(ValueError):
            session.update_permission("bash", "sometimes")

    def test_update_permission_scalar_only(self):
        """Test that single-decision tools reject pattern maps."""
        session = ConfigSession("/tmp/unused.json", {})
        with pytest.raises(ValueError):
            session.update_permission("webfetch", {"*": "allow"})
        assert session.update_permission("webfetch", "deny") == {"permission": {"webfetch": "deny"}}

    def test_apply_template_merge(self, sample_document):
        """Test merging a template onto the document."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        document = session.apply_template(get_builtin_template("local-ollama"))
        assert document["model"] == "ollama/llama2"
        assert document["instructions"] == ["AGENTS.md"]
        assert "anthropic" in document["provider"]
        assert "ollama" in document["provider"]

    def test_apply_template_replace(self, sample_document):
        """Test replacing the document with a template."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        document = session.apply_template({"model": "a/b"}, replace=True)
        assert document == {"model": "a/b"}


class TestQueries:
    """Tests for derived views."""

    def test_effective_includes_defaults(self):
        """Test that unset fields come from the defaults."""
        session = ConfigSession("/tmp/unused.json", {"share": "disabled"})
        effective = session.effective()
        assert effective["share"] == "disabled"
        assert effective["permission"]["read"] == {"*": "allow"}

    def test_resolve(self, sample_document):
        """Test resolving through the effective configuration."""
        session = ConfigSession("/tmp/unused.json", sample_document)
        assert session.resolve("bash", "git push origin") == Level.DENY
        assert session.resolve("read", "README.md") == Level.ALLOW
        assert session.resolve("webfetch", "https://x") == Level.ASK

    def test_validate(self, sample_document):
        """Test validating the current document."""
        config = ConfigSession("/tmp/unused.json", sample_document).validate()
        assert config.model == sample_document["model"]
