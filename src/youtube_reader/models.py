"""
models.py — Value types shared across the fetch pipeline.

All records are frozen dataclasses: they are created once (per video, or
once per run for the whisper backend) and never mutated afterwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TranscriptSource(str, enum.Enum):
    """Which provider produced a transcript.  Doubles as the provider name."""

    API = "api"
    YTDLP = "ytdlp"
    WHISPER = "whisper"


class WhisperBackendKind(str, enum.Enum):
    """The four speech-to-text flavors we know how to drive."""

    WHISPER_CPP = "whisper-cpp"
    WHISPER = "whisper"
    MLX_WHISPER = "mlx-whisper"
    OPENAI_API = "openai-api"


@dataclass(frozen=True)
class WhisperBackend:
    """
    A detected speech-to-text backend.

    Attributes:
        kind: Which flavor of whisper this is.
        path: Resolved executable path.  None only for the cloud backend.
    """
    kind: WhisperBackendKind
    path: str | None = None

    def __post_init__(self) -> None:
        if self.kind is WhisperBackendKind.OPENAI_API:
            if self.path is not None:
                raise ValueError("openai-api backend takes no executable path")
        elif not self.path:
            raise ValueError(f"{self.kind.value} backend requires an executable path")


@dataclass(frozen=True)
class TranscriptResult:
    """
    A successfully fetched transcript.

    Attributes:
        text:     The transcript text.  Never empty; already deduplicated.
        source:   The provider that produced it.
        title:    Video title, when the provider could determine it.
        language: Language code, when known.
    """
    text: str
    source: TranscriptSource
    title: str | None = None
    language: str | None = None

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValueError("TranscriptResult.text must be non-empty")

    def to_dict(self) -> dict:
        """JSON-serialisable view used by the CLI's --json output."""
        return {
            "title": self.title,
            "text": self.text,
            "language": self.language,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class TranscriptItem:
    """One transcript record recovered from a loosely-shaped API payload."""
    text: str
    id: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class FetchAttempt:
    """
    One entry of the per-video attempt log.

    `error` is None when the provider was skipped because it was unavailable.
    """
    provider: str
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        return f"{self.provider}: {self.error if self.error is not None else 'skipped (unavailable)'}"
