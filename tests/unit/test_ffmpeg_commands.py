"""Unit tests for encoder argument building and run_transcode."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from src.application.services.ffmpeg_commands import build_args
from src.application.use_cases.run_transcode import run_transcode
from src.domain.errors import InvalidParams, ProcessExitError
from src.domain.models.transcode import LaunchResult, LoopMode, TranscodeOperation, TranscodeParams


class TestBuildArgs:
    def test_loop_by_duration(self):
        params = TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.DURATION, duration="03:00:00")
        assert build_args(TranscodeOperation.LOOP, params) == [
            "-hide_banner", "-y",
            "-stream_loop", "-1",
            "-i", "in.mp4",
            "-t", "03:00:00",
            "-c", "copy",
            "out.mp4",
        ]

    def test_loop_by_count_passes_extra_repetitions(self):
        params = TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.LOOPS, loop_count=3)
        args = build_args(TranscodeOperation.LOOP, params)
        assert args[args.index("-stream_loop") + 1] == "2"
        assert "-t" not in args

    def test_single_loop_plays_once(self):
        params = TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.LOOPS, loop_count=1)
        args = build_args(TranscodeOperation.LOOP, params)
        assert args[args.index("-stream_loop") + 1] == "0"

    def test_reverse(self):
        args = build_args(TranscodeOperation.REVERSE, TranscodeParams("in.mp4", "out.mp4"))
        assert ["-vf", "reverse"] == args[args.index("-vf"):args.index("-vf") + 2]
        assert ["-af", "areverse"] == args[args.index("-af"):args.index("-af") + 2]
        assert args[-1] == "out.mp4"

    def test_extract_audio_drops_video(self):
        args = build_args(TranscodeOperation.EXTRACT_AUDIO, TranscodeParams("in.mp4", "in.wav"))
        assert "-vn" in args
        assert args[args.index("-acodec") + 1] == "pcm_s16le"

    def test_overlay_audio_maps_both_inputs(self):
        params = TranscodeParams("in.mp4", "out.mp4", audio_path="song.mp3")
        args = build_args(TranscodeOperation.OVERLAY_AUDIO, params)
        assert args.count("-i") == 2
        assert args[args.index("-i") + 1] == "in.mp4"
        assert "song.mp3" in args
        assert "-shortest" in args
        assert ["-map", "0:v:0", "-map", "1:a:0"] == args[args.index("-map"):args.index("-map") + 4]

    @pytest.mark.parametrize(
        ("operation", "params", "message"),
        [
            (TranscodeOperation.LOOP, TranscodeParams("in.mp4", "out.mp4"), "loop mode"),
            (TranscodeOperation.LOOP, TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.DURATION), "duration"),
            (TranscodeOperation.LOOP, TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.LOOPS, loop_count=0), "at least 1"),
            (TranscodeOperation.LOOP, TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.LOOPS), "at least 1"),
            (TranscodeOperation.OVERLAY_AUDIO, TranscodeParams("in.mp4", "out.mp4"), "audio path"),
            (TranscodeOperation.REVERSE, TranscodeParams("", "out.mp4"), "input path"),
            (TranscodeOperation.EXTRACT_AUDIO, TranscodeParams("in.mp4", " "), "output path"),
        ],
    )
    def test_invalid_params(self, operation: TranscodeOperation, params: TranscodeParams, message: str):
        with pytest.raises(InvalidParams, match=message):
            build_args(operation, params)


class TestRunTranscode:
    def test_invalid_params_never_launch(self):
        launcher = Mock()
        params = TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.LOOPS, loop_count=0)

        with pytest.raises(InvalidParams):
            run_transcode(TranscodeOperation.LOOP, params, launcher)

        launcher.launch.assert_not_called()

    def test_success_returns_launch_result(self):
        launcher = Mock()
        launcher.launch.return_value = LaunchResult(exit_code=0, output="frame=100")

        result = run_transcode(TranscodeOperation.REVERSE, TranscodeParams("in.mp4", "out.mp4"), launcher)

        assert result.succeeded
        args = launcher.launch.call_args[0][0]
        assert args[-1] == "out.mp4"

    def test_non_zero_exit_raises_with_output(self):
        launcher = Mock()
        launcher.launch.return_value = LaunchResult(exit_code=1, output="in.mp4: No such file or directory")

        with pytest.raises(ProcessExitError) as exc_info:
            run_transcode(TranscodeOperation.EXTRACT_AUDIO, TranscodeParams("in.mp4", "in.wav"), launcher)

        assert exc_info.value.exit_code == 1
        assert "No such file" in exc_info.value.output

    def test_output_equal_to_input_never_launches(self, tmp_path):
        launcher = Mock()
        same = str(tmp_path / "voice.wav")

        with pytest.raises(InvalidParams, match="differ from the input"):
            run_transcode(TranscodeOperation.EXTRACT_AUDIO, TranscodeParams(same, same), launcher)

        launcher.launch.assert_not_called()
