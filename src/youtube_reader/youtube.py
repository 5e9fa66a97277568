"""
youtube.py — Turn user input (URL or bare ID) into an 11-character video ID.

Accepted shapes:
    - dQw4w9WgXcQ                                   (bare ID)
    - https://www.youtube.com/watch?v=dQw4w9WgXcQ   (any youtube.com host)
    - https://youtu.be/dQw4w9WgXcQ
    - https://www.youtube.com/embed/dQw4w9WgXcQ
    - https://www.youtube.com/shorts/dQw4w9WgXcQ
    - https://www.youtube.com/live/dQw4w9WgXcQ

The scheme may be omitted ("youtube.com/watch?v=...").  Anything else,
including IDs of the wrong length, yields None.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

# A video ID is exactly 11 characters from the base64url alphabet.
_VIDEO_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")

# Path prefixes on youtube.com whose next segment is the video ID.
_ID_PATH_PREFIXES = ("embed", "shorts", "live", "v")


def is_video_id(value: str) -> bool:
    return _VIDEO_ID_PATTERN.fullmatch(value) is not None


def extract_video_id(url_or_id: str) -> str | None:
    """
    Extract a YouTube video ID from a URL string, or validate a raw ID.

    Args:
        url_or_id: A YouTube URL or a raw 11-character video ID.

    Returns:
        The video ID, or None if the input isn't a recognisable reference.
    """
    value = url_or_id.strip()
    if not value:
        return None

    if is_video_id(value):
        return value

    # urlsplit only finds the host when a scheme (or "//") is present.
    if "://" not in value:
        value = f"https://{value}"

    try:
        parts = urlsplit(value)
        host = (parts.hostname or "").lower()
    except ValueError:
        return None

    if host.startswith("www."):
        host = host[4:]
    segments = [segment for segment in parts.path.split("/") if segment]

    if host == "youtu.be":
        if segments and is_video_id(segments[0]):
            return segments[0]
        return None

    if host == "youtube.com" or host.endswith(".youtube.com"):
        v_params = parse_qs(parts.query).get("v", [])
        if v_params and is_video_id(v_params[0]):
            return v_params[0]

        for index, segment in enumerate(segments[:-1]):
            if segment in _ID_PATH_PREFIXES and is_video_id(segments[index + 1]):
                return segments[index + 1]

    return None


def watch_url(video_id: str) -> str:
    """Canonical watch URL for a video ID."""
    return f"https://www.youtube.com/watch?v={video_id}"
