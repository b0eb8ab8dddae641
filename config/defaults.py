"""Default configuration values."""

import copy
from types import MappingProxyType
from typing import Any, Mapping

SCHEMA_URL = "https://opencode.ai/config.json"
DEFAULT_MODEL = "anthropic/claude-sonnet-4-20250514"
DEFAULT_LEADER_KEY = "ctrl+x"
DEFAULT_SCROLL_SPEED = 3

# What a config file that does not exist yet reads as
MINIMAL_DOCUMENT: Mapping[str, Any] = MappingProxyType({"$schema": SCHEMA_URL})

_DEFAULT_CONFIGURATION: dict[str, Any] = {
    "$schema": SCHEMA_URL,
    "model": DEFAULT_MODEL,
    "permission": {
        "bash": {"*": "ask"},
        "edit": {"*": "ask"},
        "read": {"*": "allow"},
    },
    "keybinds": {
        "leader": DEFAULT_LEADER_KEY,
    },
    "share": "auto",
    "autoupdate": True,
    "tui": {
        "scroll_speed": DEFAULT_SCROLL_SPEED,
        "scroll_acceleration": {"enabled": True},
        "diff_style": "auto",
    },
    "compaction": {
        "auto": True,
        "prune": False,
    },
    "snapshot": True,
}

# Read-only view; use default_configuration() for a mutable copy
DEFAULT_CONFIGURATION: Mapping[str, Any] = MappingProxyType(_DEFAULT_CONFIGURATION)


def default_configuration() -> dict[str, Any]:
    """Return a deep copy of the built-in default document."""
    return copy.deepcopy(_DEFAULT_CONFIGURATION)


def minimal_document() -> dict[str, Any]:
    """Return a fresh copy of the document used for missing config files."""
    return dict(MINIMAL_DOCUMENT)


# Tools that accept a permission entry
TOOL_PERMISSIONS = (
    "read",
    "edit",
    "glob",
    "grep",
    "list",
    "bash",
    "task",
    "skill",
    "lsp",
    "todoread",
    "todowrite",
    "question",
    "webfetch",
    "websearch",
    "codesearch",
    "external_directory",
    "doom_loop",
)

# Tools whose permission is always a single decision (never a pattern map)
SCALAR_ONLY_TOOLS = frozenset({
    "todoread",
    "todowrite",
    "question",
    "webfetch",
    "websearch",
    "codesearch",
    "doom_loop",
})

BUILTIN_PROVIDERS = (
    "anthropic",
    "openai",
    "google",
    "azure",
    "azure-cognitive",
    "bedrock",
    "openrouter",
    "groq",
    "xai",
)

BUILTIN_LSP_SERVERS = ("typescript", "python", "go", "rust", "java", "csharp")
DIFF_STYLES = ("auto", "stacked")
SHARE_OPTIONS = ("manual", "auto", "disabled")
AGENT_MODES = ("primary", "subagent", "all")

KEYBIND_CATEGORIES = {
    "application": (
        "app_exit", "editor_open", "theme_list", "sidebar_toggle", "scrollbar_toggle",
        "username_toggle", "status_view", "tool_details", "display_thinking",
    ),
    "session": (
        "session_export", "session_new", "session_list", "session_timeline", "session_fork",
        "session_rename", "session_delete", "session_share", "session_unshare",
        "session_interrupt", "session_compact", "session_child_cycle",
        "session_child_cycle_reverse", "session_parent",
    ),
    "stash": ("stash_delete",),
    "messages": (
        "messages_page_up", "messages_page_down", "messages_line_up", "messages_line_down",
        "messages_half_page_up", "messages_half_page_down", "messages_first", "messages_last",
        "messages_next", "messages_previous", "messages_copy", "messages_undo", "messages_redo",
        "messages_last_user", "messages_toggle_conceal",
    ),
    "model": (
        "model_list", "model_cycle_recent", "model_cycle_recent_reverse",
        "model_cycle_favorite", "model_cycle_favorite_reverse", "model_provider_list",
        "model_favorite_toggle", "variant_cycle",
    ),
    "command": ("command_list", "agent_list", "agent_cycle", "agent_cycle_reverse"),
    "input": (
        "input_clear", "input_paste", "input_submit", "input_newline", "input_move_left",
        "input_move_right", "input_move_up", "input_move_down", "input_select_left",
        "input_select_right", "input_select_up", "input_select_down", "input_line_home",
        "input_line_end", "input_select_line_home", "input_select_line_end",
        "input_visual_line_home", "input_visual_line_end", "input_select_visual_line_home",
        "input_select_visual_line_end", "input_buffer_home", "input_buffer_end",
        "input_select_buffer_home", "input_select_buffer_end", "input_delete_line",
        "input_delete_to_line_end", "input_delete_to_line_start", "input_backspace",
        "input_delete", "input_undo", "input_redo", "input_word_forward",
        "input_word_backward", "input_select_word_forward", "input_select_word_backward",
        "input_delete_word_forward", "input_delete_word_backward",
    ),
    "history": ("history_previous", "history_next"),
    "terminal": ("terminal_suspend", "terminal_title_toggle", "tips_toggle"),
}
