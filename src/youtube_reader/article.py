"""
article.py — Render transcript text as a readable markdown article.

Transcripts arrive as one long run of text.  build_article() normalises the
spacing, splits it into sentences, and groups sentences into paragraphs of
roughly `paragraph_words` words.  Text without sentence punctuation (common
for auto-generated captions) is wrapped by word count instead.
"""

from __future__ import annotations

import re

DEFAULT_PARAGRAPH_WORDS = 90
DEFAULT_TITLE = "Transcript"

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([,.!?;:])")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace and remove spaces before punctuation."""
    text = _WHITESPACE.sub(" ", text)
    text = _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)
    return text.strip()


def split_sentences(text: str) -> list[str]:
    return [part.strip() for part in _SENTENCE_BOUNDARY.split(text) if part.strip()]


def wrap_by_words(words: list[str], target_words: int) -> list[str]:
    """Group words into paragraphs of exactly `target_words` (last may be short)."""
    return [
        " ".join(words[start:start + target_words])
        for start in range(0, len(words), target_words)
    ]


def to_paragraphs(text: str, target_words: int = DEFAULT_PARAGRAPH_WORDS) -> list[str]:
    """
    Group sentences into paragraphs.

    A paragraph is closed once it holds at least `target_words` words, so
    sentences are never split across paragraphs.
    """
    if not text:
        return []

    sentences = split_sentences(text)
    if len(sentences) <= 1:
        return wrap_by_words(text.split(), target_words)

    paragraphs: list[str] = []
    current: list[str] = []
    word_count = 0

    for sentence in sentences:
        words = sentence.split()
        if word_count >= target_words and current:
            paragraphs.append(" ".join(current))
            current = []
            word_count = 0
        current.append(sentence)
        word_count += len(words)

    if current:
        paragraphs.append(" ".join(current))

    return paragraphs


def build_article(
    text: str,
    title: str | None = None,
    source_url: str | None = None,
    paragraph_words: int | None = None,
) -> str:
    """
    Build the markdown article for one transcript.

    Args:
        text:            Transcript text.
        title:           Heading; defaults to "Transcript".
        source_url:      Added as a "Source:" line under the heading.
        paragraph_words: Target words per paragraph (default 90).

    Returns:
        The article, ending with exactly one newline.
    """
    cleaned = normalize_text(text)
    heading = (title or "").strip() or DEFAULT_TITLE
    paragraphs = to_paragraphs(cleaned, paragraph_words or DEFAULT_PARAGRAPH_WORDS)

    lines = [f"# {heading}"]
    if source_url:
        lines += ["", f"Source: {source_url}"]
    for paragraph in paragraphs:
        lines += ["", paragraph]

    return "\n".join(lines).strip() + "\n"
