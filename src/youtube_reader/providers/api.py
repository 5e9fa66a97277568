"""
api.py — Provider backed by the hosted transcript API.
"""

from __future__ import annotations

from youtube_reader import api
from youtube_reader.config import DEFAULT_API_URL
from youtube_reader.models import TranscriptResult, TranscriptSource
from youtube_reader.normalize import extract_transcript_items


class ApiProvider:
    """Fetches transcripts from the hosted API.  Usable iff a token is set."""

    name = TranscriptSource.API.value

    def __init__(self, token: str | None, api_url: str = DEFAULT_API_URL) -> None:
        self.token = token
        self.api_url = api_url

    def is_available(self) -> bool:
        return bool(self.token)

    def fetch(self, video_id: str) -> TranscriptResult | None:
        payload = api.fetch_transcripts([video_id], self.token or "", self.api_url)
        items = extract_transcript_items(payload)
        if not items:
            return None

        # Prefer the record for our video when the API labels them.
        item = next((i for i in items if i.id == video_id), items[0])
        if not item.text:
            return None

        return TranscriptResult(
            text=item.text,
            title=item.title,
            source=TranscriptSource.API,
        )

    def __repr__(self) -> str:
        return f"ApiProvider(api_url={self.api_url!r})"
