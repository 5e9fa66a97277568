"""
api.py — Client for the hosted transcript API.

One endpoint: POST {"ids": [...]} with a Basic token, answered with JSON (or,
on some errors, plain text).  The response shape isn't contractual, so the
payload is returned undecoded for normalize.extract_transcript_items().
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

import requests

from youtube_reader.config import DEFAULT_API_URL
from youtube_reader.errors import ConfigurationError, TranscriptApiError

logger = logging.getLogger(__name__)

# Upper bound on how much of an error body ends up in the message.
_MAX_DETAIL_CHARS = 500


def fetch_transcripts(
    ids: Sequence[str],
    token: str,
    api_url: str = DEFAULT_API_URL,
) -> Any:
    """
    Request transcripts for one or more video IDs.

    Args:
        ids:     Video IDs to look up.
        token:   API token, sent as "Authorization: Basic <token>".
        api_url: Endpoint override.

    Returns:
        The decoded JSON payload, or the response text for non-JSON bodies.

    Raises:
        ConfigurationError:  No token was given.
        TranscriptApiError:  Transport failure or a non-2xx response.
    """
    if not token:
        raise ConfigurationError(
            "Missing API token.",
            hint="Set YOUTUBE_TRANSCRIPT_API_TOKEN or use --token.",
        )

    logger.debug("POST %s ids=%s", api_url, list(ids))
    try:
        response = requests.post(
            api_url,
            json={"ids": list(ids)},
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Basic {token}",
            },
        )
    except requests.RequestException as exc:
        raise TranscriptApiError(f"API request failed: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    is_json = "application/json" in content_type
    payload: Any = response.text
    if is_json:
        try:
            payload = response.json()
        except ValueError:
            is_json = False

    if not response.ok:
        detail = json.dumps(payload) if is_json else str(payload)
        raise TranscriptApiError(
            f"API request failed ({response.status_code} {response.reason}): "
            f"{detail[:_MAX_DETAIL_CHARS]}",
            status_code=response.status_code,
        )

    return payload
