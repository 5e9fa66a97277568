"""
resolver.py — Decide which transcript providers to try, and in what order.

Two modes:

    forced  config.provider names one provider.  The chain holds exactly that
            provider; unmet prerequisites raise ConfigurationError right away
            instead of silently falling back to something else.

    auto    Probe in priority order: api (token configured), ytdlp (yt-dlp on
            PATH), whisper (yt-dlp on PATH and a backend detected).  An empty
            chain raises NoProviderAvailableError; gaps that only reduce
            fallback coverage come back as warnings.

The chain is built once per run and reused for every video.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from youtube_reader import tools
from youtube_reader.config import PROVIDER_CHOICES, ReaderConfig
from youtube_reader.errors import ConfigurationError, NoProviderAvailableError
from youtube_reader.providers import (
    ApiProvider,
    TranscriptProvider,
    WhisperProvider,
    YtdlpProvider,
)

_YTDLP_INSTALL_HINT = "Install it with: pip install yt-dlp (or brew install yt-dlp)"

_WHISPER_INSTALL_HINT = (
    "Install one of:\n"
    "  - whisper.cpp: brew install whisper-cpp\n"
    "  - OpenAI whisper: pip install openai-whisper\n"
    "  - MLX whisper: pip install mlx-whisper\n"
    "  - Or set OPENAI_API_KEY for API transcription"
)


class ResolvedProviders(NamedTuple):
    providers: tuple[TranscriptProvider, ...]
    warnings: tuple[str, ...]


def _whisper_provider(config: ReaderConfig, backend) -> WhisperProvider:
    return WhisperProvider(
        backend,
        config.whisper_model,
        config.lang,
        model_path=config.whisper_model_path,
        openai_api_key=config.openai_api_key,
    )


def _resolve_forced(config: ReaderConfig) -> TranscriptProvider:
    """Build the single provider for forced mode, or raise."""
    name = config.provider

    if name == "api":
        if not config.token:
            raise ConfigurationError(
                "API provider requires a token.",
                hint="Set YOUTUBE_TRANSCRIPT_API_TOKEN or use --token.",
            )
        return ApiProvider(config.token, config.api_url)

    if name == "ytdlp":
        if not tools.has_ytdlp():
            raise ConfigurationError(
                "yt-dlp provider requested but yt-dlp is not installed.",
                hint=_YTDLP_INSTALL_HINT,
            )
        return YtdlpProvider(config.lang)

    if name == "whisper":
        if not tools.has_ytdlp():
            raise ConfigurationError(
                "Whisper provider requires yt-dlp for audio download.",
                hint=_YTDLP_INSTALL_HINT,
            )
        backend = tools.detect_whisper_backend(config.openai_api_key)
        if backend is None:
            raise ConfigurationError(
                "Whisper provider requested but no whisper backend is available.",
                hint=_WHISPER_INSTALL_HINT,
            )
        return _whisper_provider(config, backend)

    raise ConfigurationError(
        f"Unknown provider: {name!r}",
        hint=f"Choose one of: {', '.join(PROVIDER_CHOICES)}",
    )


def resolve_providers(config: ReaderConfig) -> ResolvedProviders:
    """
    Build the ordered provider chain for this run.

    Args:
        config: The run configuration.

    Returns:
        ResolvedProviders(providers, warnings).

    Raises:
        ConfigurationError:        A forced provider can't be used, or the
                                   provider name is unknown.
        NoProviderAvailableError:  Auto mode found nothing usable.
    """
    if config.provider != "auto":
        return ResolvedProviders((_resolve_forced(config),), ())

    providers: list[TranscriptProvider] = []
    warnings: list[str] = []

    ytdlp_available = tools.has_ytdlp()
    backend = tools.detect_whisper_backend(config.openai_api_key) if ytdlp_available else None

    if config.token:
        providers.append(ApiProvider(config.token, config.api_url))

    if ytdlp_available:
        providers.append(YtdlpProvider(config.lang))
        if backend is not None:
            providers.append(_whisper_provider(config, backend))

    if not providers:
        raise NoProviderAvailableError()

    if not config.token:
        warnings.append("No API token set. Using yt-dlp for subtitles.")
    if not ytdlp_available:
        warnings.append("yt-dlp not found. No fallback if API fails.")
    elif backend is None:
        warnings.append("No whisper backend found. Cannot transcribe videos without subtitles.")

    return ResolvedProviders(tuple(providers), tuple(warnings))


def provider_names(providers: Sequence[TranscriptProvider]) -> list[str]:
    return [provider.name for provider in providers]
