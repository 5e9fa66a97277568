"""
test_normalize.py — Tests for best-effort transcript extraction from API payloads.
"""

from __future__ import annotations

import pytest

from youtube_reader.models import TranscriptItem
from youtube_reader.normalize import extract_transcript_items


class TestEmptyShapes:
    """Unrecognised or empty payloads yield an empty list, never an error."""

    @pytest.mark.parametrize("payload", [None, {}, [], "", "   ", 42, 3.5, True, {"status": "ok"}, [None, 1]])
    def test_returns_empty(self, payload) -> None:
        assert extract_transcript_items(payload) == []


class TestStrings:
    def test_plain_string(self) -> None:
        assert extract_transcript_items("plain string") == [TranscriptItem(text="plain string")]

    def test_string_is_stripped(self) -> None:
        assert extract_transcript_items("  padded  ") == [TranscriptItem(text="padded")]


class TestCollections:
    """Payloads that wrap records under a known collection key."""

    def test_segment_list_under_data(self) -> None:
        """A list of bare {text} segments is one transcript, joined by spaces."""
        payload = {"data": [{"text": "hello"}, {"text": "world"}]}
        assert extract_transcript_items(payload) == [TranscriptItem(text="hello world")]

    def test_records_with_ids_and_titles(self) -> None:
        payload = {
            "transcripts": [
                {"id": "dQw4w9WgXcQ", "title": "Never Gonna", "text": "we're no strangers"},
                {"video_id": "jNQXAC9IVRw", "video_title": "Me at the zoo", "transcript": "elephants"},
            ],
        }
        assert extract_transcript_items(payload) == [
            TranscriptItem(text="we're no strangers", id="dQw4w9WgXcQ", title="Never Gonna"),
            TranscriptItem(text="elephants", id="jNQXAC9IVRw", title="Me at the zoo"),
        ]

    def test_nested_segments_inside_record(self) -> None:
        """A record's transcript can itself be a list of {text} segments."""
        payload = [{
            "id": "dQw4w9WgXcQ",
            "title": "  Title  ",
            "tracks": "ignored",
            "transcript": [{"text": " one ", "start": 0}, {"text": "two", "start": 1}],
        }]
        assert extract_transcript_items(payload) == [
            TranscriptItem(text="one two", id="dQw4w9WgXcQ", title="Title"),
        ]

    def test_list_of_strings_under_record(self) -> None:
        payload = {"results": [{"videoId": "abc", "captions": ["a", " ", "b"]}]}
        assert extract_transcript_items(payload) == [TranscriptItem(text="a b", id="abc")]

    def test_collection_without_text_falls_through(self) -> None:
        """An empty collection doesn't stop the direct text search."""
        payload = {"items": [], "content": "fallback text"}
        assert extract_transcript_items(payload) == [TranscriptItem(text="fallback text")]

    def test_records_without_text_are_skipped(self) -> None:
        payload = {"data": [{"id": "x", "title": "no text here"}, {"id": "y", "text": "kept"}]}
        assert extract_transcript_items(payload) == [TranscriptItem(text="kept", id="y")]


class TestDirectText:
    """Objects with no collection wrapper are searched for text directly."""

    def test_direct_text_field(self) -> None:
        assert extract_transcript_items({"text": "direct"}) == [TranscriptItem(text="direct")]

    def test_deeply_nested(self) -> None:
        payload = {"response": "ignored", "results": {"segments": [{"text": "deep"}, {"text": "down"}]}}
        assert extract_transcript_items(payload) == [TranscriptItem(text="deep down")]

    def test_top_level_list_of_strings(self) -> None:
        assert extract_transcript_items(["first", "second"]) == [
            TranscriptItem(text="first"),
            TranscriptItem(text="second"),
        ]

    def test_top_level_segment_list(self) -> None:
        assert extract_transcript_items([{"text": "a"}, {"text": "b"}]) == [TranscriptItem(text="a b")]
