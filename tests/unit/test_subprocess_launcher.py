"""Unit tests for the subprocess encoder launcher."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from src.domain.errors import ProcessLaunchError
from src.infrastructure.adapters.subprocess_launcher import SubprocessLauncherAdapter

MODULE = "src.infrastructure.adapters.subprocess_launcher"


def test_missing_binary():
    with patch(f"{MODULE}.shutil.which", return_value=None):
        with pytest.raises(ProcessLaunchError, match="not found"):
            SubprocessLauncherAdapter().launch(["-version"])


def test_launch_merges_output_and_returns_exit_code():
    completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="error: bad input\n")
    with patch(f"{MODULE}.shutil.which", return_value="/usr/bin/ffmpeg"), \
         patch(f"{MODULE}.subprocess.run", return_value=completed) as mock_run:
        result = SubprocessLauncherAdapter().launch(["-i", "in.mp4", "out.mp4"])

    assert result.exit_code == 1
    assert result.output == "error: bad input\n"
    cmd = mock_run.call_args[0][0]
    assert cmd == ["/usr/bin/ffmpeg", "-i", "in.mp4", "out.mp4"]
    kwargs = mock_run.call_args[1]
    assert kwargs["stderr"] == subprocess.STDOUT
    assert kwargs["check"] is False


def test_configured_binary_is_resolved():
    with patch(f"{MODULE}.shutil.which", return_value="/opt/ff") as mock_which, \
         patch(f"{MODULE}.subprocess.run", return_value=subprocess.CompletedProcess([], 0, stdout="")):
        SubprocessLauncherAdapter(binary="ff-custom").launch([])

    mock_which.assert_called_once_with("ff-custom")


def test_os_error_becomes_launch_error():
    with patch(f"{MODULE}.shutil.which", return_value="/usr/bin/ffmpeg"), \
         patch(f"{MODULE}.subprocess.run", side_effect=PermissionError("denied")):
        with pytest.raises(ProcessLaunchError, match="denied"):
            SubprocessLauncherAdapter().launch([])


def test_version_first_line():
    completed = subprocess.CompletedProcess([], 0, stdout="ffmpeg version 7.0\nbuilt with gcc\n")
    with patch(f"{MODULE}.shutil.which", return_value="/usr/bin/ffmpeg"), \
         patch(f"{MODULE}.subprocess.run", return_value=completed):
        assert SubprocessLauncherAdapter().version() == "ffmpeg version 7.0"
