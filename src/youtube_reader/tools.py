"""
tools.py — Detect the external programs the providers shell out to.

Detection is a PATH lookup plus, for the ambiguous `whisper` binary, one
`--help` invocation.  Nothing here downloads or transcribes anything.

Whisper backend priority:
    1. whisper.cpp installed as `whisper-cpp` or `whisper-cli`
    2. `whisper`: either whisper.cpp or openai-whisper, told apart by its
       help text (best effort; a failed probe means openai-whisper)
    3. `mlx_whisper` (Apple Silicon)
    4. The OpenAI transcription API, when an API key is configured
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from youtube_reader.models import WhisperBackend, WhisperBackendKind

logger = logging.getLogger(__name__)

YTDLP_EXECUTABLE = "yt-dlp"

_WHISPER_CPP_EXECUTABLES = ("whisper-cpp", "whisper-cli")
_WHISPER_EXECUTABLE = "whisper"
_MLX_WHISPER_EXECUTABLE = "mlx_whisper"

# Substring that only whisper.cpp's usage text contains.
_WHISPER_CPP_MARKER = "whisper.cpp"

_HELP_PROBE_TIMEOUT_SECS = 15


def find_executable(name: str) -> str | None:
    """Return the absolute path of `name` on PATH, or None."""
    return shutil.which(name)


def has_ytdlp() -> bool:
    return find_executable(YTDLP_EXECUTABLE) is not None


def _probe_whisper_binary(path: str) -> WhisperBackendKind:
    """
    Decide whether a `whisper` executable is whisper.cpp or openai-whisper.

    Both projects install a binary with this name.  whisper.cpp mentions
    itself in its usage text; anything else, including a probe that fails
    to run, is treated as openai-whisper.
    """
    try:
        completed = subprocess.run(
            [path, "--help"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=_HELP_PROBE_TIMEOUT_SECS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("whisper --help probe failed (%s); assuming openai-whisper", exc)
        return WhisperBackendKind.WHISPER

    if _WHISPER_CPP_MARKER in (completed.stdout or ""):
        return WhisperBackendKind.WHISPER_CPP
    return WhisperBackendKind.WHISPER


def detect_whisper_backend(openai_api_key: str | None = None) -> WhisperBackend | None:
    """
    Find the best available speech-to-text backend.

    Args:
        openai_api_key: Enables the cloud backend as the last resort.

    Returns:
        The detected WhisperBackend, or None when nothing is usable.
    """
    for name in _WHISPER_CPP_EXECUTABLES:
        path = find_executable(name)
        if path:
            return WhisperBackend(WhisperBackendKind.WHISPER_CPP, path)

    path = find_executable(_WHISPER_EXECUTABLE)
    if path:
        return WhisperBackend(_probe_whisper_binary(path), path)

    path = find_executable(_MLX_WHISPER_EXECUTABLE)
    if path:
        return WhisperBackend(WhisperBackendKind.MLX_WHISPER, path)

    if openai_api_key:
        return WhisperBackend(WhisperBackendKind.OPENAI_API)

    return None


def backend_is_usable(backend: WhisperBackend, openai_api_key: str | None = None) -> bool:
    """
    Cheap re-check that an already-detected backend can still be used.

    Local backends need their executable to still be there; the cloud
    backend needs a key.  No help probe is run.
    """
    if backend.kind is WhisperBackendKind.OPENAI_API:
        return bool(openai_api_key)
    return bool(backend.path) and os.access(backend.path, os.X_OK)
