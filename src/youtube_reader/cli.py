"""
cli.py — Command-line interface for youtube-reader.

Provides the `youtube-reader` command (registered as a console script in
pyproject.toml).  Each input is resolved to a video ID, the provider chain
is built once, transcripts are fetched one video at a time, and the result
is printed as an article, raw text, JSON, or an AI-written summary.

Usage examples:
    youtube-reader "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    youtube-reader dQw4w9WgXcQ --raw
    youtube-reader dQw4w9WgXcQ jNQXAC9IVRw --json
    youtube-reader dQw4w9WgXcQ --provider whisper --whisper-model small
    youtube-reader dQw4w9WgXcQ --summarize -o article.md

Configuration is read from the environment (and a .env file):
    YOUTUBE_TRANSCRIPT_API_TOKEN, YOUTUBE_TRANSCRIPT_API_URL,
    WHISPER_MODEL_PATH, OPENAI_API_KEY
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace

import click
from dotenv import load_dotenv

from youtube_reader.article import build_article
from youtube_reader.config import (
    DEFAULT_WHISPER_MODEL,
    PROVIDER_CHOICES,
    WHISPER_MODEL_CHOICES,
    ReaderConfig,
)
from youtube_reader.errors import (
    ConfigurationError,
    InvalidVideoIdError,
    MetadataFetchError,
    ReaderError,
)
from youtube_reader.executor import fetch_transcript
from youtube_reader.metadata import VideoMetadata, fetch_video_metadata
from youtube_reader.models import TranscriptResult
from youtube_reader.resolver import provider_names, resolve_providers
from youtube_reader.summarize import DEFAULT_SUMMARY_MODEL, summarize_transcript
from youtube_reader.youtube import extract_video_id, watch_url

# Separator between articles when several videos are rendered together.
_BLOCK_SEPARATOR = "\n---\n\n"


# ---------------------------------------------------------------------------
# Logging: library progress and warnings go to stderr
# ---------------------------------------------------------------------------

class _ClickEchoHandler(logging.Handler):
    """Write log records to stderr through click, like the rest of the CLI."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("youtube_reader")
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)
    if not any(isinstance(h, _ClickEchoHandler) for h in package_logger.handlers):
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_inputs(inputs: tuple[str, ...]) -> list[str]:
    """Map every input to a video ID, failing on the first bad batch."""
    ids = [extract_video_id(value) for value in inputs]
    invalid = [value for value, video_id in zip(inputs, ids) if video_id is None]
    if invalid:
        raise InvalidVideoIdError(invalid)
    return [video_id for video_id in ids if video_id is not None]


def _join_blocks(blocks: list[str]) -> str:
    if len(blocks) <= 1:
        return blocks[0] if blocks else ""
    return _BLOCK_SEPARATOR.join(blocks)


def _write_output(content: str, out: str | None) -> None:
    if out:
        with open(out, "w", encoding="utf-8") as fh:
            fh.write(content)
        click.echo(f"Output written to {out}", err=True)
    else:
        click.echo(content, nl=False)


def _lookup_metadata(video_id: str) -> VideoMetadata | None:
    """Metadata via yt-dlp; a failed lookup is only a warning."""
    try:
        return fetch_video_metadata(video_id)
    except MetadataFetchError as exc:
        click.echo(f"Warning: {exc.message}", err=True)
        return None


def _enrich(result: TranscriptResult, metadata: VideoMetadata) -> TranscriptResult:
    """Fill fields the provider left empty; provider values always win."""
    return replace(
        result,
        title=result.title or metadata.title,
        language=result.language or metadata.language,
    )


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("inputs", nargs=-1, required=True, metavar="URL_OR_ID...")
@click.option("--token", "-t", default=None, help="API token (overrides YOUTUBE_TRANSCRIPT_API_TOKEN).")
@click.option("--api", "-a", "api_url", default=None, help="API endpoint override.")
@click.option(
    "--out", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write output to a file (single input only).",
)
@click.option("--raw", is_flag=True, help="Output raw transcript text instead of a formatted article.")
@click.option("--json", "as_json", is_flag=True, help="Output result as JSON (includes the source field).")
@click.option(
    "--paragraph-words",
    type=click.IntRange(min=1),
    default=None,
    help="Target words per paragraph.",
)
@click.option("--title", default=None, help="Override the article title.")
@click.option(
    "--provider",
    type=click.Choice(PROVIDER_CHOICES, case_sensitive=False),
    default="auto",
    show_default=True,
    help="Force a specific provider.",
)
@click.option(
    "--whisper-model",
    type=click.Choice(WHISPER_MODEL_CHOICES),
    default=DEFAULT_WHISPER_MODEL,
    show_default=True,
    help="Whisper model size.",
)
@click.option("--lang", default=None, help="Preferred language code (en, zh, ...).")
@click.option(
    "--fallback/--no-fallback",
    default=True,
    show_default=True,
    help="Fall back to the next provider when one fails.",
)
@click.option("--summarize", is_flag=True, help="Summarize the transcript into a structured article using AI.")
@click.option("--model", default=DEFAULT_SUMMARY_MODEL, show_default=True, help="AI model for summarization.")
@click.option(
    "--metadata", "with_metadata",
    is_flag=True,
    help="Look up missing title and channel with yt-dlp.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show provider progress messages.")
def main(
    inputs: tuple[str, ...],
    token: str | None,
    api_url: str | None,
    out: str | None,
    raw: bool,
    as_json: bool,
    paragraph_words: int | None,
    title: str | None,
    provider: str,
    whisper_model: str,
    lang: str | None,
    fallback: bool,
    summarize: bool,
    model: str,
    with_metadata: bool,
    verbose: bool,
) -> None:
    """
    Turn YouTube transcripts into readable articles.

    URL_OR_ID can be full YouTube URLs or 11-character video IDs.
    """
    load_dotenv()
    _configure_logging(verbose)

    try:
        if out and len(inputs) > 1:
            raise ConfigurationError("--out supports a single input only. Use one URL/ID at a time.")

        video_ids = _parse_inputs(inputs)
        config = ReaderConfig.from_env(
            token=token,
            api_url=api_url,
            provider=provider,
            whisper_model=whisper_model,
            lang=lang,
            allow_fallback=fallback,
        )

        providers, warnings = resolve_providers(config)
        for warning in warnings:
            click.echo(f"Warning: {warning}", err=True)
        if verbose:
            click.echo(f"Providers: {' -> '.join(provider_names(providers))}", err=True)

        results: list[tuple[str, TranscriptResult]] = []
        for video_id in video_ids:
            result = fetch_transcript(video_id, providers, config.allow_fallback)
            results.append((video_id, result))

        authors: dict[str, str | None] = {}
        if with_metadata:
            enriched: list[tuple[str, TranscriptResult]] = []
            for video_id, result in results:
                metadata = _lookup_metadata(video_id)
                if metadata is not None:
                    authors[video_id] = metadata.channel_name
                    result = _enrich(result, metadata)
                enriched.append((video_id, result))
            results = enriched

        if as_json:
            records = [{"id": video_id, **result.to_dict()} for video_id, result in results]
            payload = records[0] if len(records) == 1 else records
            _write_output(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", out)
            return

        blocks: list[str] = []
        for video_id, result in results:
            source_url = watch_url(video_id)
            heading = title or result.title or f"Video {video_id}"

            if raw:
                blocks.append(result.text.strip() + "\n")
            elif summarize:
                summary = summarize_transcript(
                    result.text,
                    api_key=config.openai_api_key,
                    title=heading,
                    author=authors.get(video_id),
                    url=source_url,
                    model=model,
                )
                blocks.append(summary.strip() + "\n")
            else:
                blocks.append(build_article(
                    result.text,
                    title=heading,
                    source_url=source_url,
                    paragraph_words=paragraph_words,
                ))

        _write_output(_join_blocks(blocks), out)

    except ReaderError as exc:
        # No traceback: the message (and hint) already says what to do.
        click.echo(f"Error: {exc.describe()}", err=True)
        sys.exit(1)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
