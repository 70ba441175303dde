"""Wire adapters from configuration into a ToolboxService."""

from __future__ import annotations

from ..application.services.toolbox_service import ToolboxService
from .adapters.json_settings_store import JsonSettingsStore
from .adapters.pillow_codec import PillowImageCodec
from .adapters.replicate_client import ReplicatePredictionsClient
from .adapters.subprocess_launcher import SubprocessLauncherAdapter
from .config.settings import Settings


def build_predictions_client(settings: Settings) -> ReplicatePredictionsClient:
    return ReplicatePredictionsClient(
        base_url=settings.replicate.base_url,
        timeout=settings.replicate.request_timeout_s,
    )


def build_service(
    settings: Settings,
    job_api: ReplicatePredictionsClient | None = None,
) -> ToolboxService:
    """
    Create the service with production adapters.

    The settings file path is resolved here from configuration and injected
    into the store; the use cases never compute it themselves.
    """
    return ToolboxService(
        codec=PillowImageCodec(),
        settings_store=JsonSettingsStore(settings.paths.settings_file),
        launcher=SubprocessLauncherAdapter(settings.ffmpeg.binary),
        job_api=job_api,
        source_extension=settings.images.source_extension,
        target_extension=settings.images.target_extension,
        poll_interval=settings.replicate.poll_interval_seconds,
    )
