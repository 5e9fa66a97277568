"""
process.py — Subprocess helpers shared by the yt-dlp and whisper providers.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Sequence

from youtube_reader.errors import ProviderExecutionError

logger = logging.getLogger(__name__)

# How much of stderr to quote in an error message.
_STDERR_TAIL_CHARS = 500


def run_command(argv: Sequence[str], provider: str) -> subprocess.CompletedProcess:
    """
    Run an external tool, capturing its output as text.

    A non-zero exit is not raised here; callers decide whether partial
    output is good enough.  Failure to start the program is.

    Raises:
        ProviderExecutionError: The executable is missing or can't be run.
    """
    logger.debug("[%s] running %s", provider, " ".join(argv))
    try:
        return subprocess.run(
            list(argv),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise ProviderExecutionError(provider, f"Could not run {argv[0]}: {exc}") from exc


def command_failed(completed: subprocess.CompletedProcess, provider: str, what: str) -> ProviderExecutionError:
    """Build the error for a command that exited non-zero."""
    stderr = (completed.stderr or "").strip()
    detail = f": {stderr[-_STDERR_TAIL_CHARS:]}" if stderr else ""
    return ProviderExecutionError(
        provider,
        f"{what} failed (exit code {completed.returncode}){detail}",
    )


def parse_info_json(stdout: str) -> dict:
    """
    Read the video info yt-dlp prints with --dump-json.

    yt-dlp prints one JSON object per line; the first parseable one is
    returned.  Anything unparseable yields {}.
    """
    for line in (stdout or "").splitlines():
        line = line.strip()
        if not line.startswith("{"):
            continue
        try:
            info = json.loads(line)
        except ValueError:
            continue
        if isinstance(info, dict):
            return info
    return {}


def title_from_info(info: dict) -> str | None:
    title = info.get("title") or info.get("fulltitle")
    return title if isinstance(title, str) and title.strip() else None
