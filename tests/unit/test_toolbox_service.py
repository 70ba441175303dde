"""Unit tests for the async ToolboxService facade."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from src.application.dto.settings import UserSettings
from src.application.services.toolbox_service import ToolboxService
from src.domain.errors import InvalidParams, JobApiNotConfigured, ToolboxError
from src.domain.models.job import JobRequest
from src.domain.models.transcode import LaunchResult, LoopMode, TranscodeOperation, TranscodeParams
from src.infrastructure.adapters.json_settings_store import JsonSettingsStore


class CopyCodec:
    def decode(self, source_path: Path) -> Any:
        return Path(source_path).read_bytes()

    def encode(self, image: Any, target_path: Path) -> None:
        Path(target_path).write_bytes(image)


class ImmediateJobApi:
    async def submit(self, request: JobRequest) -> str:
        return "pred-9"

    async def fetch_status(self, job_id: str, credential: str) -> dict[str, Any]:
        return {"status": "succeeded", "output": "done"}


def _service(tmp_path: Path, launcher: Mock | None = None, **kwargs: Any) -> ToolboxService:
    return ToolboxService(
        codec=CopyCodec(),
        settings_store=JsonSettingsStore(tmp_path / "settings" / "settings.json"),
        launcher=launcher or Mock(),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_convert_and_delete(tmp_path: Path):
    images = tmp_path / "images"
    images.mkdir()
    (images / "a.webp").write_bytes(b"a")
    (images / "b.webp").write_bytes(b"b")
    service = _service(tmp_path)

    report = await service.convert_all(images)
    deleted = await service.delete_all_matching(images)

    assert report.converted_count == 2
    assert deleted == 2
    assert sorted(p.name for p in images.iterdir()) == ["a.png", "b.png"]


@pytest.mark.asyncio
async def test_configured_extensions(tmp_path: Path):
    (tmp_path / "a.bmp").write_bytes(b"a")
    service = _service(tmp_path, source_extension="bmp", target_extension="gif")

    target = await service.convert_one(tmp_path / "a.bmp")

    assert target == tmp_path / "a.gif"
    assert service.source_extension == "bmp"


@pytest.mark.asyncio
async def test_check_path_is_directory(tmp_path: Path):
    service = _service(tmp_path)
    (tmp_path / "file.txt").write_text("x")

    assert await service.check_path_is_directory(tmp_path) is True
    assert await service.check_path_is_directory(tmp_path / "file.txt") is False
    assert await service.check_path_is_directory(tmp_path / "missing") is False


@pytest.mark.asyncio
async def test_settings_round_trip(tmp_path: Path):
    service = _service(tmp_path)

    assert await service.load_settings() == UserSettings()
    await service.set_api_key("Replicate", "r8_abc")
    exported = tmp_path / "keys.json"
    assert await service.export_api_keys(exported) == 1

    await service.save_settings(UserSettings())
    imported = await service.import_api_keys(exported)

    assert imported.api_keys.replicate == "r8_abc"
    assert (await service.load_settings()).api_keys.replicate == "r8_abc"


@pytest.mark.asyncio
async def test_run_transcode_validates_before_launch(tmp_path: Path):
    launcher = Mock()
    service = _service(tmp_path, launcher=launcher)

    with pytest.raises(InvalidParams):
        await service.run_transcode(
            TranscodeOperation.LOOP,
            TranscodeParams("in.mp4", "out.mp4", mode=LoopMode.LOOPS, loop_count=0),
        )
    launcher.launch.assert_not_called()

    launcher.launch.return_value = LaunchResult(exit_code=0)
    result = await service.run_transcode(TranscodeOperation.REVERSE, TranscodeParams("in.mp4", "out.mp4"))
    assert result.succeeded


@pytest.mark.asyncio
async def test_run_job(tmp_path: Path):
    service = _service(tmp_path, job_api=ImmediateJobApi(), poll_interval=0)

    result = await service.run_job(JobRequest("ver", {}, "tok"))

    assert result.output == "done"
    assert result.job_id == "pred-9"


@pytest.mark.asyncio
async def test_run_job_without_api(tmp_path: Path):
    with pytest.raises(JobApiNotConfigured) as exc_info:
        await _service(tmp_path).run_job(JobRequest("ver", {}, "tok"))

    assert isinstance(exc_info.value, ToolboxError)
