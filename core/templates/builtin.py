"""Presets shipped with the application."""

from config.defaults import DEFAULT_LEADER_KEY, DEFAULT_MODEL, SCHEMA_URL

from .models import BuiltinTemplate, TemplateCategory

SMALL_MODEL = "anthropic/claude-haiku-4-20250514"

BUILTIN_TEMPLATES: tuple[BuiltinTemplate, ...] = (
    BuiltinTemplate(
        id="developer-default",
        name="Developer Default",
        description="Balanced setup for everyday development with Claude Sonnet as the main model",
        icon="💻",
        category="general",
        config={
            "$schema": SCHEMA_URL,
            "model": DEFAULT_MODEL,
            "small_model": SMALL_MODEL,
            "permission": {
                "bash": {"*": "ask", "git *": "allow", "npm *": "allow", "pnpm *": "allow"},
                "edit": {"*": "ask"},
                "read": {"*": "allow"},
                "glob": "allow",
                "grep": "allow",
                "list": "allow",
            },
            "keybinds": {"leader": DEFAULT_LEADER_KEY},
            "tui": {
                "scroll_speed": 1.0,
                "scroll_acceleration": {"enabled": True},
                "diff_style": "auto",
            },
            "compaction": {"auto": True, "prune": True},
            "share": "auto",
            "autoupdate": True,
        },
    ),
    BuiltinTemplate(
        id="security-strict",
        name="Strict Security",
        description="Tight permissions; every risky operation needs confirmation",
        icon="🔒",
        category="security",
        config={
            "$schema": SCHEMA_URL,
            "model": DEFAULT_MODEL,
            "permission": {
                "bash": {"*": "ask", "rm *": "deny", "sudo *": "deny"},
                "edit": {"*": "ask"},
                "read": {"*": "ask", "*.env": "deny", "*secret*": "deny"},
                "glob": "ask",
                "grep": "ask",
                "list": "ask",
                "webfetch": "deny",
                "external_directory": "deny",
            },
            "compaction": {"auto": True, "prune": False},
            "share": "disabled",
            "autoupdate": False,
        },
    ),
    BuiltinTemplate(
        id="local-ollama",
        name="Local Models (Ollama)",
        description="Run local models through Ollama, fully offline",
        icon="🏠",
        category="local",
        config={
            "$schema": SCHEMA_URL,
            "model": "ollama/llama2",
            "provider": {
                "ollama": {
                    "npm": "@ai-sdk/openai-compatible",
                    "name": "Ollama (local)",
                    "options": {"baseURL": "http://localhost:11434/v1"},
                    "models": {
                        "llama2": {"name": "Llama 2"},
                        "codellama": {"name": "Code Llama"},
                        "deepseek-coder": {"name": "DeepSeek Coder"},
                    },
                },
            },
            "permission": {
                "bash": {"*": "allow"},
                "edit": {"*": "allow"},
                "read": {"*": "allow"},
            },
            "compaction": {"auto": False, "prune": False},
            "share": "disabled",
        },
    ),
    BuiltinTemplate(
        id="local-lmstudio",
        name="Local Models (LM Studio)",
        description="Run local models through LM Studio",
        icon="🖥️",
        category="local",
        config={
            "$schema": SCHEMA_URL,
            "model": "lmstudio/local-model",
            "provider": {
                "lmstudio": {
                    "npm": "@ai-sdk/openai-compatible",
                    "name": "LM Studio (local)",
                    "options": {"baseURL": "http://127.0.0.1:1234/v1"},
                    "models": {"local-model": {"name": "Local Model"}},
                },
            },
            "permission": {
                "bash": {"*": "allow"},
                "edit": {"*": "allow"},
                "read": {"*": "allow"},
            },
            "compaction": {"auto": False, "prune": False},
            "share": "disabled",
        },
    ),
    BuiltinTemplate(
        id="enterprise",
        name="Enterprise",
        description="Sharing disabled and strict permissions for company environments",
        icon="🏢",
        category="enterprise",
        config={
            "$schema": SCHEMA_URL,
            "model": DEFAULT_MODEL,
            "permission": {
                "bash": {"*": "ask"},
                "edit": {"*": "ask"},
                "read": {"*": "allow", "*.env": "deny"},
                "webfetch": "ask",
                "external_directory": "deny",
            },
            "compaction": {"auto": True, "prune": True},
            "share": "disabled",
            "autoupdate": False,
            "instructions": [
                "Follow company coding standards",
                "Do not expose sensitive information",
            ],
        },
    ),
    BuiltinTemplate(
        id="openrouter-multi",
        name="OpenRouter Multi-Model",
        description="Reach several model vendors through OpenRouter",
        icon="🌐",
        category="general",
        config={
            "$schema": SCHEMA_URL,
            "model": "openrouter/anthropic/claude-sonnet-4",
            "provider": {
                "openrouter": {
                    "models": {
                        "anthropic/claude-sonnet-4": {},
                        "openai/gpt-4o": {},
                        "google/gemini-pro": {},
                    },
                },
            },
            "permission": {
                "bash": {"*": "ask"},
                "edit": {"*": "ask"},
                "read": {"*": "allow"},
            },
            "compaction": {"auto": True, "prune": True},
        },
    ),
    BuiltinTemplate(
        id="custom-provider",
        name="Custom Provider",
        description="Configure a custom OpenAI-compatible provider",
        icon="⚙️",
        category="custom",
        config={
            "$schema": SCHEMA_URL,
            "model": "custom/model-name",
            "provider": {
                "custom": {
                    "npm": "@ai-sdk/openai-compatible",
                    "name": "Custom Provider",
                    "options": {
                        "baseURL": "https://api.example.com/v1",
                        "apiKey": "${CUSTOM_API_KEY}",
                    },
                    "models": {
                        "model-name": {
                            "name": "Model Name",
                            "limit": {"context": 128000, "output": 4096},
                        },
                    },
                },
            },
            "compaction": {"auto": True, "prune": True},
        },
    ),
    BuiltinTemplate(
        id="advanced-developer",
        name="Advanced Developer",
        description="Full TUI setup with a fast small model and common tool allowances",
        icon="🚀",
        category="general",
        config={
            "$schema": SCHEMA_URL,
            "model": DEFAULT_MODEL,
            "small_model": SMALL_MODEL,
            "permission": {
                "bash": {"*": "ask", "git *": "allow", "npm *": "allow"},
                "edit": {"*": "ask"},
                "read": {"*": "allow"},
            },
            "tui": {
                "scroll_speed": 1.0,
                "scroll_acceleration": {"enabled": True},
                "diff_style": "auto",
            },
            "compaction": {"auto": True, "prune": True},
            "share": "manual",
            "autoupdate": "notify",
        },
    ),
    BuiltinTemplate(
        id="enterprise-security",
        name="Enterprise Security",
        description="Experimental features off and shell access denied by default",
        icon="🛡️",
        category="enterprise",
        config={
            "$schema": SCHEMA_URL,
            "model": DEFAULT_MODEL,
            "permission": {
                "bash": {"*": "deny", "git status": "allow", "git diff": "allow"},
                "edit": {"*": "ask"},
                "read": {"*": "ask"},
                "websearch": "deny",
                "webfetch": "deny",
            },
            "share": "disabled",
            "autoupdate": False,
            "compaction": {"auto": True, "prune": True},
            "experimental": {"batch_tool": False, "openTelemetry": False},
        },
    ),
    BuiltinTemplate(
        id="mcp-integration",
        name="MCP Integration",
        description="Preconfigured filesystem and GitHub MCP servers",
        icon="🔌",
        category="general",
        config={
            "$schema": SCHEMA_URL,
            "model": DEFAULT_MODEL,
            "permission": {
                "bash": {"*": "ask"},
                "edit": {"*": "ask"},
                "read": {"*": "allow"},
            },
            "mcp": {
                "filesystem": {
                    "type": "local",
                    "command": ["npx", "-y", "@anthropic-ai/mcp-server-filesystem"],
                    "enabled": True,
                },
                "github": {
                    "type": "local",
                    "command": ["npx", "-y", "@anthropic-ai/mcp-server-github"],
                    "environment": {"GITHUB_TOKEN": "{env:GITHUB_TOKEN}"},
                    "enabled": True,
                },
            },
        },
    ),
)

_BY_ID = {template.id: template for template in BUILTIN_TEMPLATES}


def get_builtin_template(template_id: str) -> BuiltinTemplate | None:
    """Look up a built-in template by id."""
    return _BY_ID.get(template_id)


def get_templates_by_category(category: TemplateCategory) -> list[BuiltinTemplate]:
    """Built-in templates in a category, in declaration order."""
    return [template for template in BUILTIN_TEMPLATES if template.category == category]
