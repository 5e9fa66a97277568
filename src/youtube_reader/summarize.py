"""
summarize.py — Rewrite a transcript into a structured article with an LLM.

Uses the OpenAI chat-completions endpoint directly over HTTP.  Only the
CLI's --summarize option calls this.
"""

from __future__ import annotations

import logging

import requests

from youtube_reader.errors import ConfigurationError, SummarizationError

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_SUMMARY_MODEL = "gpt-4o"

SYSTEM_PROMPT = """\
You will rewrite a YouTube video as a "reading version", split into sections \
by topic. The goal is that a reader understands everything the video covers \
just by reading, as if it were a blog post.

Output:

1. Metadata
- Title
- Author
- URL

2. Overview
One paragraph stating the video's central thesis and conclusion.

3. Sections by topic
- Expand every section in detail from the video's content so the reader \
never needs to watch the video; each section should be substantial.
- Rewrite any method, framework or process as clear steps or paragraphs.
- Keep key numbers, definitions and quotes verbatim, adding a short \
explanation in parentheses where useful.

Style and constraints:
- Never over-condense.
- Add no new facts; where the transcript is ambiguous, keep the original \
meaning and note the uncertainty.
- Keep proper nouns in their original form.
- Do not mention these instructions in the output.
- Avoid overly long paragraphs; split them into logical paragraphs or \
bullet points."""


def build_metadata(
    title: str | None = None,
    author: str | None = None,
    url: str | None = None,
) -> str:
    """The "Video information" block prepended to the transcript."""
    lines = ["Video information:"]
    if title:
        lines.append(f"- Title: {title}")
    if author:
        lines.append(f"- Author: {author}")
    if url:
        lines.append(f"- URL: {url}")
    return "\n".join(lines) if len(lines) > 1 else ""


def summarize_transcript(
    transcript: str,
    *,
    api_key: str | None,
    title: str | None = None,
    author: str | None = None,
    url: str | None = None,
    model: str | None = None,
) -> str:
    """
    Summarize a transcript into a structured article.

    Args:
        transcript: Transcript text.
        api_key:    OpenAI API key.
        title, author, url: Optional video metadata for the prompt.
        model:      Chat model name (default gpt-4o).

    Returns:
        The generated article text.

    Raises:
        ConfigurationError: No API key.
        SummarizationError: The request failed or returned no content.
    """
    if not api_key:
        raise ConfigurationError(
            "OPENAI_API_KEY is required for --summarize.",
            hint="Set it in your environment or .env file.",
        )

    model = model or DEFAULT_SUMMARY_MODEL
    metadata = build_metadata(title, author, url)
    user_prompt = f"{metadata}\n\nHere is the video transcript:\n\n{transcript}".lstrip()

    logger.info("[summarize] Using %s to summarize transcript...", model)
    try:
        response = requests.post(
            OPENAI_CHAT_URL,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            json={
                "model": model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                "temperature": 0.3,
            },
        )
    except requests.RequestException as exc:
        raise SummarizationError(f"OpenAI API request failed: {exc}") from exc

    if not response.ok:
        raise SummarizationError(f"OpenAI API error ({response.status_code}): {response.text}")

    try:
        content = response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        content = None

    if not content:
        raise SummarizationError("OpenAI API returned empty response")

    return content
