"""
providers — The fixed set of transcript sources.

    ApiProvider      hosted transcript API (needs a token)
    YtdlpProvider    YouTube's own captions via yt-dlp
    WhisperProvider  audio download + speech-to-text

Each one satisfies the TranscriptProvider protocol structurally; there is
no shared base class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from youtube_reader.models import TranscriptResult
from youtube_reader.providers.api import ApiProvider
from youtube_reader.providers.whisper import WhisperProvider
from youtube_reader.providers.ytdlp import YtdlpProvider


@runtime_checkable
class TranscriptProvider(Protocol):
    """
    A transcript source.

    name:           Stable identifier ("api", "ytdlp", "whisper").
    is_available(): Cheap capability check.  May look up an executable on
                    PATH but never fetches content.
    fetch():        A result, or None when this source definitively has
                    nothing for the video.  Failures raise
                    ProviderExecutionError.
    """

    name: str

    def is_available(self) -> bool: ...

    def fetch(self, video_id: str) -> TranscriptResult | None: ...


__all__ = [
    "TranscriptProvider",
    "ApiProvider",
    "YtdlpProvider",
    "WhisperProvider",
]
