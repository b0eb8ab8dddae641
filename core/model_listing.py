"""
Run `opencode models` to discover installed models.

The CLI may be installed under different names depending on the platform
and install method, so an ordered list of candidate invocations is tried
until one can be started.
"""

import asyncio
import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .exceptions import ExternalToolUnavailable, InvalidOperationError

logger = logging.getLogger(__name__)

# Constants
TOOL_NAME = "opencode"
DEFAULT_TIMEOUT_SECONDS = 15.0
MAX_OUTPUT_BYTES = 1024 * 1024
READ_CHUNK_BYTES = 64 * 1024


@dataclass(frozen=True)
class CandidateCommand:
    """One way of invoking the CLI."""

    command: str
    args: tuple[str, ...]

    def describe(self) -> str:
        return " ".join((self.command, *self.args))


def build_candidate_commands(args: list[str], platform: str | None = None) -> list[CandidateCommand]:
    """
    Build the ordered list of invocations to try.

    Args:
        args: Arguments for the CLI, e.g. ["models", "anthropic"]
        platform: Platform override (defaults to sys.platform)

    Returns:
        Candidates in the order they should be tried
    """
    platform = platform or sys.platform
    args_tuple = tuple(args)

    if platform == "win32":
        return [
            CandidateCommand("opencode.exe", args_tuple),
            CandidateCommand("opencode", args_tuple),
            CandidateCommand("opencode.cmd", args_tuple),
            CandidateCommand("npx.cmd", (TOOL_NAME, *args_tuple)),
        ]

    return [
        CandidateCommand("opencode", args_tuple),
        CandidateCommand("npx", (TOOL_NAME, *args_tuple)),
    ]


def build_command_env(platform: str | None = None, env: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Environment for the CLI, with common install locations appended to PATH.

    Args:
        platform: Platform override (defaults to sys.platform)
        env: Base environment (defaults to os.environ)

    Returns:
        A new environment mapping
    """
    platform = platform or sys.platform
    result = dict(os.environ if env is None else env)
    home = Path.home()

    extra_paths = [str(home / ".opencode" / "bin")]
    if platform == "darwin":
        extra_paths.extend(["/usr/local/bin", "/opt/homebrew/bin", "/opt/homebrew/sbin"])
    if platform != "win32":
        extra_paths.append(str(home / ".local" / "bin"))

    separator = ";" if platform == "win32" else ":"
    current = result.get("PATH", "")
    result["PATH"] = separator.join(p for p in [current, *extra_paths] if p)
    return result


async def _read_capped(stream: asyncio.StreamReader | None, limit: int) -> bytes:
    if stream is None:
        return b""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await stream.read(READ_CHUNK_BYTES)
        if not chunk:
            return b"".join(chunks)
        total += len(chunk)
        if total > limit:
            raise InvalidOperationError(f"Command output exceeded {limit} bytes")
        chunks.append(chunk)


async def _run_candidate(
    candidate: CandidateCommand,
    env: Mapping[str, str],
    timeout: float,
    max_output: int,
) -> str:
    process = await asyncio.create_subprocess_exec(
        candidate.command,
        *candidate.args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=dict(env),
    )

    async def communicate() -> tuple[bytes, bytes, int]:
        stdout, stderr = await asyncio.gather(
            _read_capped(process.stdout, max_output),
            _read_capped(process.stderr, max_output),
        )
        return stdout, stderr, await process.wait()

    try:
        # One deadline covers both reading the output and the exit
        stdout, stderr, returncode = await asyncio.wait_for(communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise TimeoutError(f"{candidate.describe()} timed out after {timeout:g}s")
    except InvalidOperationError:
        process.kill()
        await process.wait()
        raise

    if returncode != 0:
        raise subprocess.CalledProcessError(
            returncode,
            candidate.describe(),
            output=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )

    return stdout.decode(errors="replace")


async def run_models_command(
    provider: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_output: int = MAX_OUTPUT_BYTES,
    platform: str | None = None,
    candidates: list[CandidateCommand] | None = None,
) -> str:
    """
    Run `opencode models [provider]` and return its stdout.

    Candidates whose executable cannot be found are skipped. Any other
    failure (non-zero exit, timeout, oversized output) is raised as-is
    without trying further candidates.

    Args:
        provider: Optional provider filter passed to the CLI
        timeout: Seconds allowed for the command
        max_output: Maximum bytes accepted on stdout or stderr
        platform: Platform override (defaults to sys.platform)
        candidates: Explicit invocations to try instead of the platform defaults

    Returns:
        The command's stdout

    Raises:
        ExternalToolUnavailable: If no candidate executable exists
        TimeoutError: If the command runs longer than ``timeout``
        subprocess.CalledProcessError: If the command exits non-zero
    """
    args = ["models", provider] if provider else ["models"]
    candidates = candidates if candidates is not None else build_candidate_commands(args, platform)
    env = build_command_env(platform)
    attempts: list[str] = []

    for candidate in candidates:
        try:
            output = await _run_candidate(candidate, env, timeout, max_output)
        except FileNotFoundError:
            logger.debug("%s not found, trying next candidate", candidate.command)
            attempts.append(candidate.describe())
            continue

        logger.info("Listed models with %s (%d bytes)", candidate.describe(), len(output))
        return output

    logger.warning("No %s executable found (tried: %s)", TOOL_NAME, ", ".join(attempts))
    raise ExternalToolUnavailable(TOOL_NAME, attempts)
