"""
metadata.py — Look up video title and channel with yt-dlp's Python API.

Providers don't always know the title or language (the transcript API
often omits both), and summarization wants the author.
fetch_video_metadata() runs yt-dlp in metadata-only mode to fill those gaps.
It is only called when the user asks for it with --metadata, since it costs
an extra request per video.
"""

from __future__ import annotations

from dataclasses import dataclass

import yt_dlp

from youtube_reader.errors import MetadataFetchError
from youtube_reader.youtube import watch_url


@dataclass(frozen=True)
class VideoMetadata:
    """
    Metadata for a single YouTube video.

    Attributes:
        video_id:      The 11-character YouTube video identifier.
        title:         The video title, if yt-dlp reported one.
        channel_name:  Channel (or uploader) name, if known.
        duration_secs: Video length in seconds (None for livestreams).
        language:      Spoken language code YouTube reports, if any.
    """
    video_id: str
    title: str | None
    channel_name: str | None
    duration_secs: int | None
    language: str | None = None


def fetch_video_metadata(video_id: str) -> VideoMetadata:
    """
    Fetch metadata for a YouTube video without downloading any media.

    Args:
        video_id: The 11-character YouTube video ID.

    Returns:
        A VideoMetadata with whatever fields yt-dlp provided.

    Raises:
        MetadataFetchError: yt-dlp couldn't retrieve the video info.
    """
    ydl_opts = {
        "skip_download": True,
        "quiet": True,
        "no_warnings": True,
    }

    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(watch_url(video_id), download=False)
    except yt_dlp.utils.DownloadError as exc:
        raise MetadataFetchError(video_id, reason=str(exc)) from exc

    if info is None:
        raise MetadataFetchError(video_id, reason="yt-dlp returned no info")

    return VideoMetadata(
        video_id=video_id,
        title=info.get("title") or info.get("fulltitle"),
        channel_name=info.get("channel") or info.get("uploader"),
        duration_secs=info.get("duration"),
        language=info.get("language"),
    )
