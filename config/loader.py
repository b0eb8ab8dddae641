"""Configuration file reading, writing and layering."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Iterator, Mapping

from core.exceptions import FormatError

from .defaults import minimal_document

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "opencode"
CONFIG_FILE_NAME = "opencode.json"


def expand_path(path: str | Path) -> Path:
    """Expand a leading ``~`` to the current user's home directory."""
    text = str(path)
    if text.startswith("~"):
        text = str(Path.home()) + text[1:]
    return Path(text)


def get_config_dir(platform: str | None = None, env: Mapping[str, str] | None = None) -> Path:
    """
    Get the platform's opencode config directory.

    - Windows: %LOCALAPPDATA%\\opencode
    - macOS: ~/.config/opencode
    - Linux: $XDG_CONFIG_HOME/opencode (~/.config/opencode)

    Args:
        platform: Platform override (defaults to sys.platform)
        env: Environment override (defaults to os.environ)

    Returns:
        Path to the config directory
    """
    platform = platform or sys.platform
    env = os.environ if env is None else env
    home = Path.home()

    if platform == "win32":
        base = env.get("LOCALAPPDATA") or str(home / "AppData" / "Local")
        return Path(base) / CONFIG_DIR_NAME
    if platform == "darwin":
        return home / ".config" / CONFIG_DIR_NAME
    base = env.get("XDG_CONFIG_HOME") or str(home / ".config")
    return Path(base) / CONFIG_DIR_NAME


def get_default_config_path() -> Path:
    """Path of the global opencode.json."""
    return get_config_dir() / CONFIG_FILE_NAME


def strip_jsonc_comments(content: str) -> str:
    """
    Strip comments and trailing commas from JSONC content.

    Handles:
    - Single-line comments: // comment
    - Multi-line comments: /* comment */
    - Trailing commas before } or ]

    Comment markers inside string literals (such as the ``//`` in
    ``"https://opencode.ai/config.json"``) are left alone.

    Args:
        content: JSONC content string

    Returns:
        JSON string with comments removed
    """
    return _strip_trailing_commas(_strip_comments(content))


def _scan(content: str) -> Iterator[tuple[int, str, bool]]:
    """Yield (index, char, inside_string) for each character of comment-free JSON."""
    in_string = False
    escaped = False
    for i, char in enumerate(content):
        if in_string:
            yield i, char, True
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
            yield i, char, True
        else:
            yield i, char, False


def _strip_comments(content: str) -> str:
    out: list[str] = []
    length = len(content)
    i = 0
    in_string = False

    while i < length:
        char = content[i]
        if in_string:
            out.append(char)
            if char == "\\" and i + 1 < length:
                out.append(content[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
        elif char == '"':
            in_string = True
            out.append(char)
            i += 1
        elif content.startswith("//", i):
            end = content.find("\n", i)
            i = length if end == -1 else end
        elif content.startswith("/*", i):
            end = content.find("*/", i + 2)
            i = length if end == -1 else end + 2
        else:
            out.append(char)
            i += 1

    return "".join(out)


def _strip_trailing_commas(content: str) -> str:
    out: list[str] = []
    for i, char, in_string in _scan(content):
        if char == "," and not in_string:
            rest = content[i + 1:].lstrip()
            if not rest or rest[0] in "}]":
                continue
        out.append(char)
    return "".join(out)


def parse_document(text: str) -> dict[str, Any]:
    """
    Parse JSON or JSONC text into a config document.

    Raises:
        FormatError: If the text is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(strip_jsonc_comments(text))
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid config JSON: {e}") from e
    if not isinstance(data, dict):
        raise FormatError("Invalid config JSON: expected an object at the top level")
    return data


def dump_document(document: Mapping[str, Any]) -> str:
    """Serialize a document the way the editor writes config files."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def read_config_text(path: str | Path) -> str:
    """
    Read a config file.

    A missing file reads as the minimal document; any other I/O error is
    raised to the caller.

    Args:
        path: File path, may start with ``~``

    Returns:
        The file's text
    """
    expanded = expand_path(path)
    try:
        return expanded.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("Config file %s does not exist, using minimal document", expanded)
        return dump_document(minimal_document())


def write_config_text(path: str | Path, content: str) -> bool:
    """
    Write a config file, creating parent directories as needed.

    Args:
        path: File path, may start with ``~``
        content: Text to write

    Returns:
        True once the file is written
    """
    expanded = expand_path(path)
    expanded.parent.mkdir(parents=True, exist_ok=True)
    expanded.write_text(content, encoding="utf-8")
    logger.info("Wrote config file %s (%d bytes)", expanded, len(content))
    return True


def load_document(path: str | Path) -> dict[str, Any]:
    """Read and parse a config file into a document."""
    return parse_document(read_config_text(path))

