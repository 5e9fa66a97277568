"""
whisper.py — Provider that transcribes the audio track itself.

Last resort for videos without captions: yt-dlp downloads the audio into a
scratch directory, then one of four speech-to-text backends turns it into
text.  Each backend has its own argument convention and output location:

    whisper-cpp   -m <ggml model> -f <audio> -otxt -of <base>  ->  <base>.txt
    whisper       <audio> --output_dir <dir> --output_format txt  ->  <stem>.txt
    mlx-whisper   <audio> --output-dir <dir>                    ->  <stem>.txt
    openai-api    multipart upload to the transcription endpoint

The scratch directory is removed on every exit path.
"""

from __future__ import annotations

import logging
import os
import tempfile

import requests

from youtube_reader.config import DEFAULT_WHISPER_MODEL
from youtube_reader.errors import ProviderExecutionError
from youtube_reader.models import (
    TranscriptResult,
    TranscriptSource,
    WhisperBackend,
    WhisperBackendKind,
)
from youtube_reader.providers.process import (
    command_failed,
    parse_info_json,
    run_command,
    title_from_info,
)
from youtube_reader.providers.ytdlp import SCRATCH_PREFIX
from youtube_reader.tools import YTDLP_EXECUTABLE, backend_is_usable, find_executable
from youtube_reader.youtube import watch_url

logger = logging.getLogger(__name__)

OPENAI_TRANSCRIPTION_URL = "https://api.openai.com/v1/audio/transcriptions"
OPENAI_TRANSCRIPTION_MODEL = "whisper-1"


def default_model_locations(model: str) -> list[str]:
    """Common install locations of whisper.cpp's ggml model files."""
    model_name = f"ggml-{model}.bin"
    home = os.path.expanduser("~")
    return [
        f"/usr/local/share/whisper/{model_name}",
        f"/opt/homebrew/share/whisper/{model_name}",
        os.path.join(home, ".local", "share", "whisper", model_name),
        os.path.join(home, "whisper.cpp", "models", model_name),
    ]


class WhisperProvider:
    """Downloads audio with yt-dlp and transcribes it locally or in the cloud."""

    name = TranscriptSource.WHISPER.value

    def __init__(
        self,
        backend: WhisperBackend,
        model: str | None = None,
        lang: str | None = None,
        *,
        model_path: str | None = None,
        openai_api_key: str | None = None,
    ) -> None:
        self.backend = backend
        self.model = model or DEFAULT_WHISPER_MODEL
        self.lang = lang
        self.model_path = model_path
        self.openai_api_key = openai_api_key

    def is_available(self) -> bool:
        if find_executable(YTDLP_EXECUTABLE) is None:
            return False
        return backend_is_usable(self.backend, self.openai_api_key)

    # -----------------------------------------------------------------------
    # Fetch
    # -----------------------------------------------------------------------

    def fetch(self, video_id: str) -> TranscriptResult | None:
        try:
            with tempfile.TemporaryDirectory(prefix=f"{SCRATCH_PREFIX}whisper-") as scratch:
                logger.info("[whisper] Downloading audio for %s...", video_id)
                audio_path, title = self._download_audio(video_id, scratch)

                logger.info("[whisper] Transcribing with %s...", self.backend.kind.value)
                text = self.transcribe(audio_path, scratch)
        except OSError as exc:
            raise ProviderExecutionError(self.name, f"Audio file handling failed: {exc}") from exc

        if not text.strip():
            return None

        return TranscriptResult(
            text=text.strip(),
            title=title,
            language=self.lang,
            source=TranscriptSource.WHISPER,
        )

    def _download_audio(self, video_id: str, scratch: str) -> tuple[str, str | None]:
        argv = [
            find_executable(YTDLP_EXECUTABLE) or YTDLP_EXECUTABLE,
            "-x",
            "--audio-format", "mp3",
            "--audio-quality", "5",
            "--no-warnings",
            "--dump-json",
            "--no-simulate",
            "-o", os.path.join(scratch, "%(id)s.%(ext)s"),
            watch_url(video_id),
        ]
        completed = run_command(argv, self.name)
        if completed.returncode != 0:
            raise command_failed(completed, self.name, "yt-dlp audio download")

        audio_path = os.path.join(scratch, f"{video_id}.mp3")
        if not os.path.exists(audio_path):
            raise ProviderExecutionError(self.name, "Failed to download audio file")

        return audio_path, title_from_info(parse_info_json(completed.stdout))

    def transcribe(self, audio_path: str, scratch: str) -> str:
        """Run the configured backend on an audio file and return its text."""
        kind = self.backend.kind
        if kind is WhisperBackendKind.WHISPER_CPP:
            return self._run_whisper_cpp(audio_path, scratch)
        if kind is WhisperBackendKind.WHISPER:
            return self._run_whisper_cli(audio_path, scratch)
        if kind is WhisperBackendKind.MLX_WHISPER:
            return self._run_mlx_whisper(audio_path, scratch)
        if kind is WhisperBackendKind.OPENAI_API:
            return self._run_openai_api(audio_path)
        raise ProviderExecutionError(self.name, f"Unknown whisper backend: {kind}")

    # -----------------------------------------------------------------------
    # Backends
    # -----------------------------------------------------------------------

    def resolve_model_path(self) -> str:
        """
        Locate the ggml model file whisper.cpp needs.

        An explicit path (WHISPER_MODEL_PATH) wins; otherwise the first
        common location that exists, else the first one so whisper.cpp
        reports the missing file itself.
        """
        if self.model_path:
            return self.model_path
        candidates = default_model_locations(self.model)
        return next((path for path in candidates if os.path.exists(path)), candidates[0])

    def _run_whisper_cpp(self, audio_path: str, scratch: str) -> str:
        output_base = os.path.join(scratch, "output")
        argv = [
            self.backend.path,
            "-m", self.resolve_model_path(),
            "-f", audio_path,
            "-otxt",
            "-of", output_base,
        ]
        if self.lang:
            argv += ["-l", self.lang]

        completed = run_command(argv, self.name)
        if completed.returncode != 0:
            raise command_failed(completed, self.name, "whisper.cpp")
        return self._read_output(f"{output_base}.txt", "Whisper.cpp failed to produce output")

    def _run_whisper_cli(self, audio_path: str, scratch: str) -> str:
        argv = [
            self.backend.path,
            audio_path,
            "--model", self.model,
            "--output_dir", scratch,
            "--output_format", "txt",
        ]
        if self.lang:
            argv += ["--language", self.lang]

        completed = run_command(argv, self.name)
        if completed.returncode != 0:
            raise command_failed(completed, self.name, "whisper")
        return self._read_output(_txt_beside(audio_path), "Whisper CLI failed to produce output")

    def _run_mlx_whisper(self, audio_path: str, scratch: str) -> str:
        argv = [
            self.backend.path,
            audio_path,
            "--model", self.model,
            "--output-dir", scratch,
        ]
        if self.lang:
            argv += ["--language", self.lang]

        completed = run_command(argv, self.name)
        if completed.returncode != 0:
            raise command_failed(completed, self.name, "mlx_whisper")
        return self._read_output(_txt_beside(audio_path), "MLX Whisper failed to produce output")

    def _run_openai_api(self, audio_path: str) -> str:
        if not self.openai_api_key:
            raise ProviderExecutionError(
                self.name,
                "OPENAI_API_KEY is required for OpenAI Whisper API",
            )

        data = {"model": OPENAI_TRANSCRIPTION_MODEL}
        if self.lang:
            data["language"] = self.lang

        try:
            with open(audio_path, "rb") as audio:
                response = requests.post(
                    OPENAI_TRANSCRIPTION_URL,
                    headers={"Authorization": f"Bearer {self.openai_api_key}"},
                    data=data,
                    files={"file": (os.path.basename(audio_path), audio)},
                )
        except requests.RequestException as exc:
            raise ProviderExecutionError(self.name, f"OpenAI API request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            raise ProviderExecutionError(
                self.name,
                f"OpenAI API returned invalid JSON: {response.text[:200]}",
            )

        error = body.get("error") if isinstance(body, dict) else None
        if error or not response.ok:
            message = error.get("message") if isinstance(error, dict) else None
            raise ProviderExecutionError(
                self.name,
                message or f"OpenAI API error ({response.status_code})",
            )

        text = body.get("text") if isinstance(body, dict) else None
        return text if isinstance(text, str) else ""

    def _read_output(self, path: str, missing_message: str) -> str:
        try:
            with open(path, encoding="utf-8", errors="replace") as fh:
                return fh.read()
        except OSError:
            raise ProviderExecutionError(self.name, missing_message)

    def __repr__(self) -> str:
        return f"WhisperProvider(backend={self.backend.kind.value!r}, model={self.model!r})"


def _txt_beside(audio_path: str) -> str:
    """whisper and mlx_whisper name their output after the input file."""
    return os.path.splitext(audio_path)[0] + ".txt"
