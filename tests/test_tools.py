"""
test_tools.py — Tests for external tool detection.

shutil.which and subprocess.run are mocked so the results don't depend on
what happens to be installed on the test machine.
"""

from __future__ import annotations

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from youtube_reader.models import WhisperBackend, WhisperBackendKind
from youtube_reader.tools import (
    backend_is_usable,
    detect_whisper_backend,
    find_executable,
    has_ytdlp,
)


def _which(installed: dict[str, str]):
    """Build a shutil.which replacement that knows only `installed`."""
    return lambda name: installed.get(name)


class TestFindExecutable:
    @patch("youtube_reader.tools.shutil.which", return_value="/usr/bin/yt-dlp")
    def test_found(self, mock_which: MagicMock) -> None:
        assert find_executable("yt-dlp") == "/usr/bin/yt-dlp"
        mock_which.assert_called_once_with("yt-dlp")

    @patch("youtube_reader.tools.shutil.which", return_value=None)
    def test_missing(self, mock_which: MagicMock) -> None:
        assert find_executable("yt-dlp") is None
        assert has_ytdlp() is False


class TestDetectWhisperBackend:
    """Priority: whisper.cpp > whisper (probed) > mlx_whisper > cloud API."""

    @patch("youtube_reader.tools.subprocess.run")
    @patch("youtube_reader.tools.shutil.which")
    def test_whisper_cpp_binary_wins(self, mock_which: MagicMock, mock_run: MagicMock) -> None:
        mock_which.side_effect = _which({
            "whisper-cpp": "/opt/bin/whisper-cpp",
            "whisper": "/usr/bin/whisper",
            "mlx_whisper": "/usr/bin/mlx_whisper",
        })
        backend = detect_whisper_backend("sk-test")
        assert backend == WhisperBackend(WhisperBackendKind.WHISPER_CPP, "/opt/bin/whisper-cpp")
        mock_run.assert_not_called()

    @patch("youtube_reader.tools.shutil.which")
    def test_whisper_cli_name(self, mock_which: MagicMock) -> None:
        mock_which.side_effect = _which({"whisper-cli": "/opt/bin/whisper-cli"})
        assert detect_whisper_backend() == WhisperBackend(WhisperBackendKind.WHISPER_CPP, "/opt/bin/whisper-cli")

    @patch("youtube_reader.tools.subprocess.run")
    @patch("youtube_reader.tools.shutil.which")
    def test_whisper_binary_identified_as_whisper_cpp(self, mock_which: MagicMock, mock_run: MagicMock) -> None:
        """A `whisper` binary whose help mentions whisper.cpp is whisper.cpp."""
        mock_which.side_effect = _which({"whisper": "/usr/bin/whisper"})
        mock_run.return_value = subprocess.CompletedProcess(
            args=["/usr/bin/whisper", "--help"], returncode=0,
            stdout="usage: whisper [options] file0.wav\n\nwhisper.cpp build 1.5\n",
        )
        assert detect_whisper_backend() == WhisperBackend(WhisperBackendKind.WHISPER_CPP, "/usr/bin/whisper")
        argv = mock_run.call_args[0][0]
        assert argv == ["/usr/bin/whisper", "--help"]
        assert mock_run.call_args[1]["stderr"] == subprocess.STDOUT

    @patch("youtube_reader.tools.subprocess.run")
    @patch("youtube_reader.tools.shutil.which")
    def test_whisper_binary_identified_as_openai_whisper(self, mock_which: MagicMock, mock_run: MagicMock) -> None:
        mock_which.side_effect = _which({"whisper": "/usr/bin/whisper", "mlx_whisper": "/usr/bin/mlx_whisper"})
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="usage: whisper [-h] [--model MODEL] audio [audio ...]\n",
        )
        assert detect_whisper_backend() == WhisperBackend(WhisperBackendKind.WHISPER, "/usr/bin/whisper")

    @pytest.mark.parametrize("failure", [
        OSError("exec format error"),
        subprocess.TimeoutExpired(cmd="whisper --help", timeout=15),
    ])
    @patch("youtube_reader.tools.subprocess.run")
    @patch("youtube_reader.tools.shutil.which")
    def test_failed_probe_defaults_to_openai_whisper(
        self, mock_which: MagicMock, mock_run: MagicMock, failure: Exception,
    ) -> None:
        mock_which.side_effect = _which({"whisper": "/usr/bin/whisper"})
        mock_run.side_effect = failure
        assert detect_whisper_backend() == WhisperBackend(WhisperBackendKind.WHISPER, "/usr/bin/whisper")

    @patch("youtube_reader.tools.shutil.which")
    def test_mlx_whisper(self, mock_which: MagicMock) -> None:
        mock_which.side_effect = _which({"mlx_whisper": "/opt/homebrew/bin/mlx_whisper"})
        assert detect_whisper_backend("sk-test") == WhisperBackend(
            WhisperBackendKind.MLX_WHISPER, "/opt/homebrew/bin/mlx_whisper",
        )

    @patch("youtube_reader.tools.shutil.which", return_value=None)
    def test_cloud_api_needs_key(self, mock_which: MagicMock) -> None:
        assert detect_whisper_backend("sk-test") == WhisperBackend(WhisperBackendKind.OPENAI_API)
        assert detect_whisper_backend(None) is None
        assert detect_whisper_backend("") is None


class TestBackendIsUsable:
    def test_cloud_backend_needs_key(self) -> None:
        backend = WhisperBackend(WhisperBackendKind.OPENAI_API)
        assert backend_is_usable(backend, "sk-test") is True
        assert backend_is_usable(backend, None) is False

    @patch("youtube_reader.tools.os.access", return_value=True)
    def test_local_backend_executable_present(self, mock_access: MagicMock) -> None:
        backend = WhisperBackend(WhisperBackendKind.WHISPER, "/usr/bin/whisper")
        assert backend_is_usable(backend) is True
        mock_access.assert_called_once_with("/usr/bin/whisper", os.X_OK)

    def test_local_backend_executable_gone(self, tmp_path) -> None:
        missing = WhisperBackend(WhisperBackendKind.WHISPER, str(tmp_path / "gone"))
        assert backend_is_usable(missing) is False


class TestWhisperBackendModel:
    def test_cloud_backend_rejects_path(self) -> None:
        with pytest.raises(ValueError):
            WhisperBackend(WhisperBackendKind.OPENAI_API, "/usr/bin/whisper")

    def test_local_backend_requires_path(self) -> None:
        with pytest.raises(ValueError):
            WhisperBackend(WhisperBackendKind.MLX_WHISPER)
