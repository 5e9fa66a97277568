"""
ytdlp.py — Provider that downloads YouTube's own captions with yt-dlp.

Manual subtitles are preferred; auto-generated ones are the fallback.  The
caption file lands in a scratch directory that is removed however the fetch
ends.
"""

from __future__ import annotations

import logging
import os
import tempfile

from youtube_reader.errors import ProviderExecutionError
from youtube_reader.models import TranscriptResult, TranscriptSource
from youtube_reader.providers.process import (
    command_failed,
    parse_info_json,
    run_command,
    title_from_info,
)
from youtube_reader.subtitles import parse_subtitles, subtitle_format_for
from youtube_reader.tools import YTDLP_EXECUTABLE, find_executable
from youtube_reader.youtube import watch_url

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "youtube-reader-"

_DEFAULT_LANG = "en"


class YtdlpProvider:
    """Fetches existing captions via `yt-dlp --skip-download`."""

    name = TranscriptSource.YTDLP.value

    def __init__(self, lang: str | None = None) -> None:
        self.lang = lang

    def is_available(self) -> bool:
        return find_executable(YTDLP_EXECUTABLE) is not None

    def build_command(self, video_id: str, output_dir: str) -> list[str]:
        # One language only; requesting every track gets rate limited.
        return [
            find_executable(YTDLP_EXECUTABLE) or YTDLP_EXECUTABLE,
            "--write-subs",
            "--write-auto-subs",
            "--sub-langs", self.lang or _DEFAULT_LANG,
            "--sub-format", "vtt/srt/best",
            "--skip-download",
            "--ignore-errors",
            "--dump-json",
            "--no-simulate",
            "-o", os.path.join(output_dir, "%(id)s"),
            watch_url(video_id),
        ]

    def fetch(self, video_id: str) -> TranscriptResult | None:
        try:
            with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX) as scratch:
                return self._fetch_into(video_id, scratch)
        except OSError as exc:
            raise ProviderExecutionError(self.name, f"Subtitle file handling failed: {exc}") from exc

    def _fetch_into(self, video_id: str, scratch: str) -> TranscriptResult | None:
        completed = run_command(self.build_command(video_id, scratch), self.name)

        # yt-dlp exits non-zero when one of several subtitle requests
        # fails even though others were written; only give up when it
        # produced nothing at all.
        if completed.returncode != 0 and not (completed.stdout or "").strip():
            raise command_failed(completed, self.name, "yt-dlp subtitle download")

        info = parse_info_json(completed.stdout)
        title = title_from_info(info)
        requested = info.get("requested_subtitles")
        detected_lang = next(iter(requested), None) if isinstance(requested, dict) else None

        subtitle_file = _find_subtitle_file(scratch)
        if subtitle_file is None:
            logger.info("[ytdlp] No subtitles available for %s", video_id)
            return None

        with open(subtitle_file, encoding="utf-8", errors="replace") as fh:
            content = fh.read()

        text = parse_subtitles(content, subtitle_format_for(subtitle_file) or "")
        if not text.strip():
            return None

        return TranscriptResult(
            text=text.strip(),
            title=title,
            language=detected_lang,
            source=TranscriptSource.YTDLP,
        )

    def __repr__(self) -> str:
        return f"YtdlpProvider(lang={self.lang!r})"


def _find_subtitle_file(directory: str) -> str | None:
    for filename in sorted(os.listdir(directory)):
        if subtitle_format_for(filename):
            return os.path.join(directory, filename)
    return None
