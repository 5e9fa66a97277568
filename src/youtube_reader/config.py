"""
config.py — Run configuration, built once and passed explicitly.

Nothing in the fetch pipeline reads os.environ directly; the CLI builds a
ReaderConfig (explicit option values first, then environment variables,
then defaults) and hands it to resolve_providers().  Tests construct
ReaderConfig directly without touching the process environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "https://www.youtube-transcript.io/api/transcripts"
DEFAULT_WHISPER_MODEL = "base"

PROVIDER_CHOICES = ("auto", "api", "ytdlp", "whisper")
WHISPER_MODEL_CHOICES = ("tiny", "base", "small", "medium", "large")

ENV_API_TOKEN = "YOUTUBE_TRANSCRIPT_API_TOKEN"
ENV_API_URL = "YOUTUBE_TRANSCRIPT_API_URL"
ENV_WHISPER_MODEL_PATH = "WHISPER_MODEL_PATH"
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"


def _clean(value: str | None) -> str | None:
    """Strip whitespace; blank strings count as unset."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class ReaderConfig:
    """
    Everything provider resolution needs to know about the run.

    Attributes:
        token:              Transcript API token (None disables the API provider).
        api_url:            Transcript API endpoint.
        provider:           "auto" or the name of a provider to force.
        whisper_model:      Model name passed to the whisper backends.
        whisper_model_path: Explicit ggml model file for whisper.cpp.
        lang:               Preferred language code, e.g. "en".
        allow_fallback:     Whether to move on to the next provider on failure.
        openai_api_key:     Enables the cloud whisper backend and summarization.
    """
    token: str | None = None
    api_url: str = DEFAULT_API_URL
    provider: str = "auto"
    whisper_model: str = DEFAULT_WHISPER_MODEL
    whisper_model_path: str | None = None
    lang: str | None = None
    allow_fallback: bool = True
    openai_api_key: str | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        token: str | None = None,
        api_url: str | None = None,
        provider: str | None = None,
        whisper_model: str | None = None,
        lang: str | None = None,
        allow_fallback: bool = True,
    ) -> "ReaderConfig":
        """
        Build a config from explicit values with environment fallbacks.

        Args:
            environ: Mapping to read variables from.  Defaults to os.environ.
            token, api_url, provider, whisper_model, lang, allow_fallback:
                Explicit (command-line) values; they take precedence.

        Returns:
            A ReaderConfig.
        """
        env = os.environ if environ is None else environ

        return cls(
            token=_clean(token) or _clean(env.get(ENV_API_TOKEN)),
            api_url=_clean(api_url) or _clean(env.get(ENV_API_URL)) or DEFAULT_API_URL,
            provider=(_clean(provider) or "auto").lower(),
            whisper_model=_clean(whisper_model) or DEFAULT_WHISPER_MODEL,
            whisper_model_path=_clean(env.get(ENV_WHISPER_MODEL_PATH)),
            lang=_clean(lang),
            allow_fallback=allow_fallback,
            openai_api_key=_clean(env.get(ENV_OPENAI_API_KEY)),
        )
