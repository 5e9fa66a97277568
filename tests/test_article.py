"""
test_article.py — Tests for markdown article rendering.
"""

from __future__ import annotations

from youtube_reader.article import (
    build_article,
    normalize_text,
    split_sentences,
    to_paragraphs,
    wrap_by_words,
)


class TestNormalizeText:
    def test_collapses_whitespace(self) -> None:
        assert normalize_text("  one\n\ntwo\tthree  ") == "one two three"

    def test_removes_space_before_punctuation(self) -> None:
        assert normalize_text("Hello , world ! Really ?") == "Hello, world! Really?"


class TestSplitSentences:
    def test_splits_on_terminal_punctuation(self) -> None:
        assert split_sentences("One. Two! Three? Four") == ["One.", "Two!", "Three?", "Four"]

    def test_no_punctuation(self) -> None:
        assert split_sentences("just some words") == ["just some words"]


class TestToParagraphs:
    """Sentences are grouped until a paragraph reaches the target word count."""

    def test_groups_sentences(self) -> None:
        text = "One two three. Four five. Six seven eight. Nine."
        assert to_paragraphs(text, target_words=4) == [
            "One two three. Four five.",
            "Six seven eight. Nine.",
        ]

    def test_sentences_are_never_split(self) -> None:
        text = "This sentence has exactly seven words in it. Short one."
        assert to_paragraphs(text, target_words=3) == [
            "This sentence has exactly seven words in it.",
            "Short one.",
        ]

    def test_unpunctuated_text_wraps_by_words(self) -> None:
        text = " ".join(f"w{i}" for i in range(10))
        assert to_paragraphs(text, target_words=4) == ["w0 w1 w2 w3", "w4 w5 w6 w7", "w8 w9"]

    def test_empty(self) -> None:
        assert to_paragraphs("") == []


def test_wrap_by_words() -> None:
    assert wrap_by_words(["a", "b", "c"], 2) == ["a b", "c"]
    assert wrap_by_words([], 2) == []


class TestBuildArticle:
    """Tests for the full article layout."""

    def test_layout(self) -> None:
        article = build_article(
            "First sentence here. Second one follows. Third closes it.",
            title="My Video",
            source_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            paragraph_words=5,
        )
        assert article == (
            "# My Video\n"
            "\n"
            "Source: https://www.youtube.com/watch?v=dQw4w9WgXcQ\n"
            "\n"
            "First sentence here. Second one follows.\n"
            "\n"
            "Third closes it.\n"
        )

    def test_default_title_and_no_source(self) -> None:
        assert build_article("Hello there.") == "# Transcript\n\nHello there.\n"

    def test_blank_title_uses_default(self) -> None:
        assert build_article("Hi.", title="   ").startswith("# Transcript\n")

    def test_empty_text_is_heading_only(self) -> None:
        assert build_article("   ", title="Nothing") == "# Nothing\n"

    def test_ends_with_single_newline(self) -> None:
        article = build_article("words " * 500)
        assert article.endswith("\n")
        assert not article.endswith("\n\n")

    def test_default_paragraph_size(self) -> None:
        body = build_article(" ".join(["word"] * 200)).split("\n\n")[1:]
        assert [len(p.split()) for p in body] == [90, 90, 20]
