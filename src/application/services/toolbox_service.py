"""Async facade over the use cases, the surface a desktop shell calls into."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ...domain.errors import JobApiNotConfigured
from ...domain.models.conversion_report import ConversionReport
from ...domain.models.job import JobRequest, JobResult
from ...domain.models.transcode import LaunchResult, TranscodeOperation, TranscodeParams
from ..dto.settings import UserSettings
from ..ports.image_codec import ImageCodecPort
from ..ports.job_api import JobApiPort
from ..ports.process_launcher import ProcessLauncherPort
from ..ports.progress_reporter import ProgressReporterPort
from ..ports.settings_store import SettingsStorePort
from ..use_cases import convert_images, delete_files, manage_settings
from ..use_cases.run_job import DEFAULT_POLL_INTERVAL_SECONDS, run_job
from ..use_cases.run_transcode import run_transcode

logger = logging.getLogger(__name__)


class ToolboxService:
    """
    Entry point for every caller-facing operation.

    Filesystem and encoder work runs in worker threads via asyncio.to_thread so
    the event loop stays responsive; HTTP calls and poll sleeps are awaited
    directly. Calls share no mutable state.
    """

    def __init__(
        self,
        codec: ImageCodecPort,
        settings_store: SettingsStorePort,
        launcher: ProcessLauncherPort,
        job_api: JobApiPort | None = None,
        *,
        source_extension: str = convert_images.DEFAULT_SOURCE_EXTENSION,
        target_extension: str = convert_images.DEFAULT_TARGET_EXTENSION,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:
        self._codec = codec
        self._settings_store = settings_store
        self._launcher = launcher
        self._job_api = job_api
        self._source_extension = source_extension
        self._target_extension = target_extension
        self._poll_interval = poll_interval

    @property
    def source_extension(self) -> str:
        return self._source_extension

    async def convert_all(
        self,
        directory: Path | str,
        progress_reporter: ProgressReporterPort | None = None,
    ) -> ConversionReport:
        return await asyncio.to_thread(
            convert_images.convert_all,
            directory,
            self._codec,
            self._source_extension,
            self._target_extension,
            progress_reporter,
        )

    async def convert_one(self, file_path: Path | str) -> Path:
        return await asyncio.to_thread(
            convert_images.convert_one,
            file_path,
            self._codec,
            self._source_extension,
            self._target_extension,
        )

    async def delete_all_matching(self, directory: Path | str, extension: str | None = None) -> int:
        return await asyncio.to_thread(
            delete_files.delete_all_matching,
            directory,
            extension or self._source_extension,
        )

    async def check_path_is_directory(self, path: Path | str) -> bool:
        """True when path exists and is a directory; never raises."""
        return await asyncio.to_thread(lambda: Path(path).is_dir())

    async def load_settings(self) -> UserSettings:
        return await asyncio.to_thread(manage_settings.load_settings, self._settings_store)

    async def save_settings(self, settings: UserSettings) -> None:
        await asyncio.to_thread(manage_settings.save_settings, settings, self._settings_store)

    async def set_api_key(self, provider: str, value: str | None) -> UserSettings:
        return await asyncio.to_thread(manage_settings.set_api_key, self._settings_store, provider, value)

    async def export_api_keys(self, path: Path | str) -> int:
        settings = await self.load_settings()
        return await asyncio.to_thread(manage_settings.export_api_keys, settings, path)

    async def import_api_keys(self, path: Path | str) -> UserSettings:
        return await asyncio.to_thread(manage_settings.import_api_keys, path, self._settings_store)

    async def run_job(self, request: JobRequest) -> JobResult:
        if self._job_api is None:
            raise JobApiNotConfigured()
        return await run_job(request, self._job_api, poll_interval=self._poll_interval)

    async def run_transcode(self, operation: TranscodeOperation, params: TranscodeParams) -> LaunchResult:
        return await asyncio.to_thread(run_transcode, operation, params, self._launcher)
