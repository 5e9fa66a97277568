"""
errors.py — Custom exception hierarchy for youtube-reader.

Every exception carries a `hint` attribute with remediation text (what to
install or configure) so the CLI can print a complete, human-readable
message without a separate lookup table.

Hierarchy:
    ReaderError (base)
    ├── ConfigurationError
    │   └── NoProviderAvailableError
    ├── InvalidVideoIdError
    ├── ProviderExecutionError
    │   └── TranscriptApiError
    ├── NoTranscriptFromProviderError
    ├── AllProvidersFailedError
    ├── SummarizationError
    └── MetadataFetchError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from youtube_reader.models import FetchAttempt


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class ReaderError(Exception):
    """
    Root exception for all youtube-reader errors.

    Attributes:
        message: Human-readable description of what went wrong.
        hint:    Optional remediation text (install/configure instructions).
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def describe(self) -> str:
        """Render the message followed by the hint, if any."""
        if self.hint:
            return f"{self.message}\n{self.hint}"
        return self.message


# ---------------------------------------------------------------------------
# Resolution-time errors
# ---------------------------------------------------------------------------

class ConfigurationError(ReaderError):
    """
    Raised when the requested setup cannot work, e.g. forcing the API
    provider without a token.  Fatal; never retried.
    """


class NoProviderAvailableError(ConfigurationError):
    """Raised in auto mode when probing finds no usable provider at all."""

    def __init__(self) -> None:
        super().__init__(
            message="No transcript provider available.",
            hint=(
                "To fix this, either:\n"
                "  - Set YOUTUBE_TRANSCRIPT_API_TOKEN for API access\n"
                "  - Install yt-dlp: pip install yt-dlp (or brew install yt-dlp)\n"
                "  - Install whisper: pip install openai-whisper"
            ),
        )


class InvalidVideoIdError(ReaderError):
    """Raised when one or more inputs are not a YouTube URL or video ID."""

    def __init__(self, inputs: Sequence[str]) -> None:
        super().__init__(message=f"Invalid YouTube URL or ID: {', '.join(inputs)}")
        self.inputs = list(inputs)


# ---------------------------------------------------------------------------
# Fetch-time errors
# ---------------------------------------------------------------------------

class ProviderExecutionError(ReaderError):
    """
    Raised when a provider fails mid-fetch (subprocess exit, network error,
    missing output file).  Triggers fallback unless fallback is disabled.
    """

    def __init__(self, provider: str, message: str, hint: str | None = None) -> None:
        super().__init__(message=message, hint=hint)
        self.provider = provider


class TranscriptApiError(ProviderExecutionError):
    """
    Raised when the transcript API answers with a non-2xx status or the
    request cannot be completed.  `status_code` is None for transport errors.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(provider="api", message=message)
        self.status_code = status_code


class NoTranscriptFromProviderError(ReaderError):
    """
    Raised when fallback is disabled and the only provider tried ran fine
    but had nothing for the video.
    """

    def __init__(self, provider: str, video_id: str) -> None:
        super().__init__(message=f"[{provider}] No transcript available for video {video_id}")
        self.provider = provider
        self.video_id = video_id


class AllProvidersFailedError(ReaderError):
    """
    Terminal error once every provider in the chain was tried without a
    result.  The message carries one line per attempted provider.
    """

    def __init__(
        self,
        video_id: str,
        attempts: Sequence[FetchAttempt],
        provider_count: int,
    ) -> None:
        details = "\n".join(f"  - {attempt.describe()}" for attempt in attempts)
        super().__init__(
            message=(
                f"Failed to get transcript for video {video_id}.\n"
                f"Tried {provider_count} provider(s):\n{details}"
            ).rstrip(),
        )
        self.video_id = video_id
        self.attempts = list(attempts)


# ---------------------------------------------------------------------------
# Output-layer errors
# ---------------------------------------------------------------------------

class SummarizationError(ReaderError):
    """Raised when the summarization endpoint fails or returns nothing."""


class MetadataFetchError(ReaderError):
    """
    Raised when yt-dlp fails to retrieve video metadata from YouTube.

    Typically a network issue, rate limiting, or a private/deleted video.
    The CLI treats it as a warning since metadata is optional.
    """

    def __init__(self, video_id: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(message=f"Failed to fetch metadata for video {video_id}{detail}")
        self.video_id = video_id
