"""
subtitles.py — Collapse caption files into clean, deduplicated prose.

Three caption formats are supported:

    vtt   WebVTT, what yt-dlp downloads by default from YouTube
    srt   SubRip
    ttml  Timed Text Markup Language (XML, one <p> per cue)

YouTube's auto-generated captions use a "rolling" display: each cue repeats
the previous line before adding the next one.  Deduplication is therefore
done by exact cleaned-line identity across the whole document, keeping the
first occurrence, not just within one cue block.

parse_subtitles() never raises; input it can't make sense of yields "".
"""

from __future__ import annotations

import os
import re

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Blank-line separated cue blocks.
_BLOCK_SPLIT = re.compile(r"\n\s*\n+")

_CUE_NUMBER = re.compile(r"^\d+$")
_VTT_TIMESTAMP_START = re.compile(r"^\d{2}:\d{2}")
_VTT_HEADER_PREFIXES = ("WEBVTT", "Kind:", "Language:", "NOTE")

# <c>, <c.colorE5E5E5>, </c>
_STYLE_TAG = re.compile(r"</?c[^>]*>")
# Per-word karaoke timestamps: <00:00:01.234>
_WORD_TIMESTAMP = re.compile(r"<\d{2}:\d{2}:\d{2}\.\d{3}>")
_ANY_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")

_TTML_PARAGRAPH = re.compile(r"<p[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)

# Only this fixed set is decoded; any other entity is left as-is.
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)

_BRACKETED = re.compile(r"^\[.*\]$")
_MUSIC_MARKED = re.compile(r"^♪.*♪$")


# ---------------------------------------------------------------------------
# Line cleaning
# ---------------------------------------------------------------------------

def _decode_entities(text: str) -> str:
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text


def clean_subtitle_line(line: str) -> str:
    """
    Strip markup from one caption line.

    Removes styling tags, per-word timestamps and any other tags, decodes
    the common HTML entities, and collapses whitespace.  Lines that are
    purely an annotation ("[Music]", "♪ la la ♪") become "".
    """
    cleaned = _STYLE_TAG.sub("", line)
    cleaned = _WORD_TIMESTAMP.sub("", cleaned)
    cleaned = _ANY_TAG.sub("", cleaned)
    cleaned = _decode_entities(cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()

    if _BRACKETED.match(cleaned) or _MUSIC_MARKED.match(cleaned):
        return ""

    return cleaned.replace("♪", "").strip()


class _Deduplicator:
    """Collects cleaned lines, keeping only the first of each."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self.lines: list[str] = []

    def add(self, raw: str) -> None:
        cleaned = clean_subtitle_line(raw)
        if cleaned and cleaned not in self._seen:
            self._seen.add(cleaned)
            self.lines.append(cleaned)

    def text(self) -> str:
        return " ".join(self.lines)


# ---------------------------------------------------------------------------
# Format parsers
# ---------------------------------------------------------------------------

def _normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").replace("\r", "\n")


def _is_vtt_metadata(line: str) -> bool:
    return (
        line.startswith(_VTT_HEADER_PREFIXES)
        or bool(_CUE_NUMBER.match(line.strip()))
        or bool(_VTT_TIMESTAMP_START.match(line))
        or "-->" in line
    )


def parse_vtt(content: str) -> str:
    """Parse WebVTT, skipping the header, cue ids and timing lines."""
    dedup = _Deduplicator()
    for block in _BLOCK_SPLIT.split(_normalize_newlines(content)):
        for line in block.split("\n"):
            if _is_vtt_metadata(line):
                continue
            dedup.add(line)
    return dedup.text()


def parse_srt(content: str) -> str:
    """Parse SubRip, skipping sequence numbers and timing lines."""
    dedup = _Deduplicator()
    for block in _BLOCK_SPLIT.split(_normalize_newlines(content)):
        for line in block.split("\n"):
            if _CUE_NUMBER.match(line.strip()) or "-->" in line:
                continue
            dedup.add(line)
    return dedup.text()


def parse_ttml(content: str) -> str:
    """Parse TTML by taking the text of every <p> element."""
    dedup = _Deduplicator()
    for match in _TTML_PARAGRAPH.finditer(content):
        # Inner tags (<br/>, <span>) separate words, so they become spaces.
        dedup.add(_ANY_TAG.sub(" ", match.group(1)))
    return dedup.text()


_PARSERS = {
    "vtt": parse_vtt,
    "srt": parse_srt,
    "ttml": parse_ttml,
}


def parse_subtitles(content: str, fmt: str) -> str:
    """
    Convert a caption document into plain text.

    Args:
        content: The raw caption file contents.
        fmt:     One of "vtt", "srt", "ttml" (case-insensitive).

    Returns:
        Deduplicated text with lines joined by single spaces, or "" when the
        format is unknown or nothing readable was found.
    """
    parser = _PARSERS.get((fmt or "").lower().lstrip("."))
    if parser is None or not content:
        return ""
    return parser(content)


def subtitle_format_for(filename: str) -> str | None:
    """Map a caption file name to its format, or None if it isn't one."""
    ext = os.path.splitext(filename)[1].lower().lstrip(".")
    return ext if ext in _PARSERS else None
