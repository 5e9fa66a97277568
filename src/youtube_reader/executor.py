"""
executor.py — Run a provider chain against one video with fallback.

Providers are tried strictly in order, one at a time, and the first result
wins.  With fallback enabled, a provider that has nothing (None) or fails
(ProviderExecutionError) is recorded in the attempt log and the next one is
tried.  With fallback disabled, the first non-success is final.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

from youtube_reader.errors import (
    AllProvidersFailedError,
    NoTranscriptFromProviderError,
    ProviderExecutionError,
)
from youtube_reader.models import FetchAttempt, TranscriptResult
from youtube_reader.providers import TranscriptProvider

logger = logging.getLogger(__name__)

NO_TRANSCRIPT_MESSAGE = "No transcript available"


class FetchOutcome(NamedTuple):
    result: TranscriptResult
    attempts: tuple[FetchAttempt, ...]


def run_fallback(
    video_id: str,
    providers: Sequence[TranscriptProvider],
    allow_fallback: bool = True,
) -> FetchOutcome:
    """
    Try each provider in turn until one produces a transcript.

    Args:
        video_id:       The 11-character video ID.
        providers:      The ordered chain from resolve_providers().
        allow_fallback: When False, the first provider that is available
                        decides the outcome.

    Returns:
        FetchOutcome(result, attempts), where attempts lists the providers
        that were tried (or skipped) before the winning one.

    Raises:
        NoTranscriptFromProviderError: Fallback disabled and the provider had
                                       nothing for this video.
        ProviderExecutionError:        Fallback disabled and the provider failed.
        AllProvidersFailedError:       Every provider was tried without result.
    """
    attempts: list[FetchAttempt] = []

    for provider in providers:
        # Checked again here: a tool may have disappeared since resolution.
        if not provider.is_available():
            logger.debug("[%s] unavailable, skipping", provider.name)
            attempts.append(FetchAttempt(provider.name))
            continue

        try:
            result = provider.fetch(video_id)
        except ProviderExecutionError as exc:
            if not allow_fallback:
                raise
            attempts.append(FetchAttempt(provider.name, exc.message))
            logger.warning("[%s] %s", provider.name, exc.message)
            continue

        if result is not None:
            return FetchOutcome(result, tuple(attempts))

        if not allow_fallback:
            raise NoTranscriptFromProviderError(provider.name, video_id)
        attempts.append(FetchAttempt(provider.name, NO_TRANSCRIPT_MESSAGE))
        logger.info("[%s] %s for %s", provider.name, NO_TRANSCRIPT_MESSAGE, video_id)

    raise AllProvidersFailedError(video_id, attempts, len(providers))


def fetch_transcript(
    video_id: str,
    providers: Sequence[TranscriptProvider],
    allow_fallback: bool = True,
) -> TranscriptResult:
    """Fetch one video's transcript; see run_fallback() for the semantics."""
    return run_fallback(video_id, providers, allow_fallback).result
