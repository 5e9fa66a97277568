"""
normalize.py — Best-effort extraction of transcript records from API payloads.

The transcript API's response shape isn't fixed: depending on the endpoint
version it returns a bare string, a list of entries, or an object wrapping
entries under "transcripts", "results", "data" or "items", and the text
itself may be a string, a list of strings, or a list of {"text": ...}
segments.  extract_transcript_items() searches those shapes structurally and
returns whatever it can recover.  It never raises.
"""

from __future__ import annotations

from typing import Any, Mapping

from youtube_reader.models import TranscriptItem

# ---------------------------------------------------------------------------
# Known field names
# ---------------------------------------------------------------------------

_COLLECTION_KEYS = ("transcripts", "results", "data", "items")
_TITLE_KEYS = ("title", "video_title", "name")
_ID_KEYS = ("id", "video_id", "videoId")
_ENTRY_TEXT_KEYS = ("transcript", "text", "segments", "captions", "items", "data")
_DIRECT_TEXT_KEYS = ("text", "transcript", "caption", "content")
_NESTED_TEXT_KEYS = ("segments", "captions", "items", "data", "results", "transcripts")


def extract_transcript_items(payload: Any) -> list[TranscriptItem]:
    """
    Pull transcript records out of an arbitrary JSON-like payload.

    Args:
        payload: Decoded JSON (dict / list / str) or raw response text.

    Returns:
        A list of TranscriptItem, empty when nothing usable was found.
    """
    if payload is None:
        return []

    if isinstance(payload, str):
        text = payload.strip()
        return [TranscriptItem(text=text)] if text else []

    if isinstance(payload, list):
        items = _items_from_entries(payload)
        if items:
            return items
        text = _text_from(payload)
        return [TranscriptItem(text=text)] if text else []

    if isinstance(payload, Mapping):
        for key in _COLLECTION_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                items = _items_from_entries(value)
                if items:
                    return items

        text = _text_from(payload)
        if text:
            return [TranscriptItem(text=text)]

    return []


def _is_segment_list(entries: list) -> bool:
    """
    True for [{"text": ...}, ...] lists that describe one transcript's
    segments rather than one record per video.
    """
    return bool(entries) and all(
        isinstance(entry, Mapping)
        and "text" in entry
        and not any(key in entry for key in _ID_KEYS + _TITLE_KEYS)
        for entry in entries
    )


def _items_from_entries(entries: list) -> list[TranscriptItem]:
    if _is_segment_list(entries):
        text = _text_from(entries)
        return [TranscriptItem(text=text)] if text else []

    items: list[TranscriptItem] = []
    for entry in entries:
        items.extend(_item_from_entry(entry))
    return items


def _item_from_entry(entry: Any) -> list[TranscriptItem]:
    if entry is None:
        return []

    if isinstance(entry, str):
        text = entry.strip()
        return [TranscriptItem(text=text)] if text else []

    if isinstance(entry, list):
        text = _text_from(entry)
        return [TranscriptItem(text=text)] if text else []

    if isinstance(entry, Mapping):
        # First key that is present at all wins, even if its value is empty.
        source = next(
            (entry[key] for key in _ENTRY_TEXT_KEYS if entry.get(key) is not None),
            None,
        )
        text = _text_from(source)
        if text:
            return [TranscriptItem(
                text=text,
                id=_first_string(entry, _ID_KEYS),
                title=_first_string(entry, _TITLE_KEYS),
            )]

    return []


def _first_string(obj: Mapping, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = obj.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _text_from(value: Any) -> str | None:
    """Recursively flatten a value into a single space-joined string."""
    if value is None:
        return None

    if isinstance(value, str):
        return value.strip() or None

    if isinstance(value, list):
        if not value:
            return None

        if all(isinstance(item, str) for item in value):
            return _join(value)

        if all(isinstance(item, Mapping) and "text" in item for item in value):
            return _join(item["text"] for item in value if isinstance(item["text"], str))

        parts = [text for text in (_text_from(item) for item in value) if text]
        return " ".join(parts) if parts else None

    if isinstance(value, Mapping):
        direct_source = next(
            (value[key] for key in _DIRECT_TEXT_KEYS if value.get(key) is not None),
            None,
        )
        direct = _text_from(direct_source)
        if direct:
            return direct

        for key in _NESTED_TEXT_KEYS:
            nested = _text_from(value.get(key))
            if nested:
                return nested

    return None


def _join(parts) -> str | None:
    joined = " ".join(part.strip() for part in parts if part.strip())
    return joined or None
