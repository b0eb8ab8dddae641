"""Tests for merging partial config updates."""

import copy

from config import clear_field, compact_list, default_configuration, merge, merge_with_defaults


class TestMergeRules:
    """Tests for the per-field merge rules."""

    def test_empty_patch_is_identity(self, sample_document):
        """Test that merging nothing returns an equal document."""
        assert merge(sample_document, {}) == sample_document

    def test_inputs_not_modified(self, sample_document):
        """Test that neither argument is changed."""
        before = copy.deepcopy(sample_document)
        patch = {"tui": {"diff_style": "stacked"}, "provider": {"openai": {}}}
        patch_before = copy.deepcopy(patch)

        merge(sample_document, patch)

        assert sample_document == before
        assert patch == patch_before

    def test_result_shares_no_structure(self, sample_document):
        """Test that editing the result leaves the base alone."""
        result = merge(sample_document, {})
        result["permission"]["bash"]["*"] = "deny"
        assert sample_document["permission"]["bash"]["*"] == "ask"

    def test_idempotent(self, sample_document):
        """Test that applying the same patch twice changes nothing more."""
        patch = {"model": "openai/gpt-4o", "tui": {"diff_style": "stacked"}, "agent": {"plan": {"model": "x/y"}}}
        once = merge(sample_document, patch)
        assert merge(once, patch) == once

    def test_scalar_replaced(self, sample_document):
        """Test that scalar fields are replaced."""
        assert merge(sample_document, {"model": "openai/gpt-4o"})["model"] == "openai/gpt-4o"

    def test_none_means_no_change(self, sample_document):
        """Test that None values in a patch are ignored."""
        result = merge(sample_document, {"model": None, "tui": {"scroll_speed": None}})
        assert result["model"] == sample_document["model"]
        assert result["tui"] == {"scroll_speed": 2}

    def test_none_dropped_when_base_lacks_record(self):
        """Test that None inside a new record is ignored, as it is over an existing one."""
        patch = {"tui": {"scroll_speed": None, "diff_style": "auto"}, "provider": {"x": None}}
        from_missing = merge({}, patch)
        from_empty = merge({"tui": {}, "provider": {}}, patch)

        assert from_missing == from_empty == {"tui": {"diff_style": "auto"}, "provider": {}}

    def test_record_shallow_merged(self):
        """Test that nested records keep keys the patch does not mention."""
        base = {"tui": {"scroll_speed": 1, "diff_style": "auto"}}
        result = merge(base, {"tui": {"diff_style": "stacked"}})
        assert result["tui"] == {"scroll_speed": 1, "diff_style": "stacked"}

    def test_record_merge_is_one_level(self):
        """Test that values nested below the record are replaced, not merged."""
        base = {"tui": {"scroll_acceleration": {"enabled": True, "extra": 1}}}
        result = merge(base, {"tui": {"scroll_acceleration": {"enabled": False}}})
        assert result["tui"]["scroll_acceleration"] == {"enabled": False}

    def test_permission_tool_replaced_whole(self, sample_document):
        """Test that a tool's pattern map is replaced rather than merged."""
        result = merge(sample_document, {"permission": {"bash": {"*": "deny"}}})
        assert result["permission"]["bash"] == {"*": "deny"}
        assert result["permission"]["edit"] == "allow"

    def test_list_replaced(self, sample_document):
        """Test that lists are replaced wholesale."""
        result = merge(sample_document, {"instructions": ["CONTRIBUTING.md"]})
        assert result["instructions"] == ["CONTRIBUTING.md"]

    def test_nested_list_replaced(self):
        """Test that lists inside records are replaced."""
        base = {"watcher": {"ignore": ["node_modules"]}}
        result = merge(base, {"watcher": {"ignore": ["dist"]}})
        assert result["watcher"]["ignore"] == ["dist"]

    def test_record_replaces_scalar(self):
        """Test that a mapping replaces a scalar of the same field."""
        assert merge({"permission": "allow"}, {"permission": {"bash": "ask"}}) == {
            "permission": {"bash": "ask"}
        }

    def test_unknown_fields_survive(self):
        """Test that fields the schema does not know are merged like any other."""
        base = {"future": {"a": 1}, "other": 1}
        result = merge(base, {"future": {"b": 2}})
        assert result == {"future": {"a": 1, "b": 2}, "other": 1}


class TestMapOfMaps:
    """Tests for provider/agent/mcp/command/mode maps."""

    def test_provider_entries_merged(self, sample_document):
        """Test that existing entries are shallow-merged and new ones added."""
        patch = {
            "provider": {
                "anthropic": {"name": "Anthropic"},
                "openai": {"options": {"apiKey": "sk"}},
            }
        }
        result = merge(sample_document, patch)
        assert result["provider"]["anthropic"] == {
            "options": {"apiKey": "{env:ANTHROPIC_API_KEY}"},
            "name": "Anthropic",
        }
        assert result["provider"]["openai"] == {"options": {"apiKey": "sk"}}

    def test_base_only_entries_retained(self):
        """Test that entries missing from the patch are kept."""
        base = {"agent": {"build": {"model": "a/b"}, "plan": {"model": "c/d"}}}
        result = merge(base, {"agent": {"plan": {"temperature": 0.1}}})
        assert result["agent"]["build"] == {"model": "a/b"}
        assert result["agent"]["plan"] == {"model": "c/d", "temperature": 0.1}

    def test_entry_options_replaced(self):
        """Test that records inside an entry are replaced, not merged."""
        base = {"provider": {"x": {"options": {"baseURL": "u", "apiKey": "k"}}}}
        result = merge(base, {"provider": {"x": {"options": {"baseURL": "v"}}}})
        assert result["provider"]["x"]["options"] == {"baseURL": "v"}

    def test_mcp_type_switch_replaces_entry(self):
        """Test that switching an MCP server from local to remote drops local-only keys."""
        base = {"mcp": {"s": {"type": "local", "command": ["run"], "enabled": True}}}
        result = merge(base, {"mcp": {"s": {"type": "remote", "url": "https://x"}}})
        assert result["mcp"]["s"] == {"type": "remote", "url": "https://x"}

    def test_new_entry_drops_none(self):
        """Test that a new map entry keeps only the fields actually set."""
        result = merge({"provider": {}}, {"provider": {"x": {"name": "X", "npm": None}}})
        assert result["provider"]["x"] == {"name": "X"}

    def test_mcp_same_type_merged(self):
        """Test that an MCP update without a type change is merged."""
        base = {"mcp": {"s": {"type": "local", "command": ["run"]}}}
        result = merge(base, {"mcp": {"s": {"enabled": False}}})
        assert result["mcp"]["s"] == {"type": "local", "command": ["run"], "enabled": False}


class TestClearing:
    """Tests for the caller-side clearing helpers."""

    def test_clear_top_level(self, sample_document):
        """Test removing a top-level field."""
        result = clear_field(sample_document, "instructions")
        assert "instructions" not in result
        assert "instructions" in sample_document

    def test_clear_prunes_empty_parent(self):
        """Test that a record left empty is removed."""
        assert clear_field({"server": {"port": 1}, "model": "a/b"}, "server", "port") == {"model": "a/b"}

    def test_clear_keeps_non_empty_parent(self):
        """Test that siblings keep their parent alive."""
        result = clear_field({"server": {"port": 1, "hostname": "h"}}, "server", "port")
        assert result == {"server": {"hostname": "h"}}

    def test_clear_missing_path(self, sample_document):
        """Test that clearing a missing path is a no-op."""
        assert clear_field(sample_document, "watcher", "ignore") == sample_document

    def test_clear_through_scalar(self):
        """Test that a path running through a scalar is ignored."""
        assert clear_field({"permission": "allow"}, "permission", "bash") == {"permission": "allow"}

    def test_compact_list(self):
        """Test that empty lists collapse to None."""
        assert compact_list([]) is None
        assert compact_list(None) is None
        assert compact_list(["a"]) == ["a"]


class TestMergeWithDefaults:
    """Tests for the effective configuration."""

    def test_empty_document_gives_defaults(self):
        """Test that an empty document yields the defaults."""
        assert merge_with_defaults({}) == default_configuration()

    def test_document_overrides_defaults(self):
        """Test that document values win over defaults."""
        result = merge_with_defaults({"permission": {"bash": "allow"}, "share": "disabled"})
        assert result["permission"]["bash"] == "allow"
        assert result["permission"]["read"] == {"*": "allow"}
        assert result["share"] == "disabled"
