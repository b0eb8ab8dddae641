"""
Configuration module for opencode config documents.

Exports the schema models, the built-in defaults, the merge engine and the
config file helpers.
"""

from .agent_config import AgentConfig, CommandConfig
from .defaults import (
    DEFAULT_CONFIGURATION,
    DEFAULT_MODEL,
    MINIMAL_DOCUMENT,
    SCHEMA_URL,
    TOOL_PERMISSIONS,
    default_configuration,
    minimal_document,
)
from .experimental_config import ExperimentalConfig
from .loader import (
    dump_document,
    expand_path,
    get_config_dir,
    get_default_config_path,
    load_document,
    parse_document,
    read_config_text,
    strip_jsonc_comments,
    write_config_text,
)
from .main_config import Config, validate_document
from .mcp_server_config import MCPServerConfig, McpLocalConfig, McpRemoteConfig
from .merge import clear_field, compact_list, merge, merge_with_defaults
from .permissions_config import (
    Level,
    PatternEntry,
    PatternRule,
    PermissionRule,
    ScalarRule,
    parse_permission_rule,
)
from .provider_config import ModelConfig, ProviderConfig, ProviderOptions
from .tooling_config import CompactionConfig, WatcherConfig
from .ui_config import KeybindConfig, ServerConfig, TuiConfig

__all__ = [
    # Constants
    "SCHEMA_URL",
    "DEFAULT_MODEL",
    "DEFAULT_CONFIGURATION",
    "MINIMAL_DOCUMENT",
    "TOOL_PERMISSIONS",
    "default_configuration",
    "minimal_document",
    # Config models
    "Config",
    "AgentConfig",
    "CommandConfig",
    "ProviderConfig",
    "ProviderOptions",
    "ModelConfig",
    "MCPServerConfig",
    "McpLocalConfig",
    "McpRemoteConfig",
    "ExperimentalConfig",
    "CompactionConfig",
    "WatcherConfig",
    "KeybindConfig",
    "ServerConfig",
    "TuiConfig",
    "validate_document",
    # Permission rules
    "Level",
    "PatternEntry",
    "PatternRule",
    "ScalarRule",
    "PermissionRule",
    "parse_permission_rule",
    # Merge
    "merge",
    "merge_with_defaults",
    "clear_field",
    "compact_list",
    # Loader functions
    "expand_path",
    "get_config_dir",
    "get_default_config_path",
    "read_config_text",
    "write_config_text",
    "parse_document",
    "dump_document",
    "load_document",
    "strip_jsonc_comments",
]
