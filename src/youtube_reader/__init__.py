"""
youtube_reader — Turn YouTube transcripts into readable articles.

Public API:
    extract_video_id()     Parse a YouTube URL or validate a bare video ID.
    ReaderConfig           Run configuration (token, provider, whisper model...).
    resolve_providers()    Build the ordered provider chain for a run.
    fetch_transcript()     Run the chain against one video with fallback.
    run_fallback()         Same, but also returns the per-provider attempt log.
    parse_subtitles()      Collapse VTT / SRT / TTML captions into plain text.
    extract_transcript_items()  Recover transcript records from API payloads.
    build_article()        Render transcript text as a markdown article.
    TranscriptResult       A fetched transcript (text, title, language, source).

Exception hierarchy (all importable from this package):
    ReaderError
    ├── ConfigurationError
    │   └── NoProviderAvailableError
    ├── InvalidVideoIdError
    ├── ProviderExecutionError
    │   └── TranscriptApiError
    ├── NoTranscriptFromProviderError
    ├── AllProvidersFailedError
    ├── SummarizationError
    └── MetadataFetchError

Usage:
    from youtube_reader import ReaderConfig, fetch_transcript, resolve_providers

    providers, warnings = resolve_providers(ReaderConfig.from_env())
    result = fetch_transcript("dQw4w9WgXcQ", providers)
    print(result.source, result.text[:80])
"""

from youtube_reader.article import build_article
from youtube_reader.config import ReaderConfig
from youtube_reader.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    InvalidVideoIdError,
    MetadataFetchError,
    NoProviderAvailableError,
    NoTranscriptFromProviderError,
    ProviderExecutionError,
    ReaderError,
    SummarizationError,
    TranscriptApiError,
)
from youtube_reader.executor import FetchOutcome, fetch_transcript, run_fallback
from youtube_reader.models import (
    FetchAttempt,
    TranscriptItem,
    TranscriptResult,
    TranscriptSource,
    WhisperBackend,
    WhisperBackendKind,
)
from youtube_reader.normalize import extract_transcript_items
from youtube_reader.resolver import ResolvedProviders, resolve_providers
from youtube_reader.subtitles import parse_subtitles
from youtube_reader.youtube import extract_video_id

__all__ = [
    "build_article",
    "extract_transcript_items",
    "extract_video_id",
    "fetch_transcript",
    "parse_subtitles",
    "resolve_providers",
    "run_fallback",
    "FetchAttempt",
    "FetchOutcome",
    "ReaderConfig",
    "ResolvedProviders",
    "TranscriptItem",
    "TranscriptResult",
    "TranscriptSource",
    "WhisperBackend",
    "WhisperBackendKind",
    "ReaderError",
    "ConfigurationError",
    "NoProviderAvailableError",
    "InvalidVideoIdError",
    "ProviderExecutionError",
    "TranscriptApiError",
    "NoTranscriptFromProviderError",
    "AllProvidersFailedError",
    "SummarizationError",
    "MetadataFetchError",
]
