from __future__ import annotations

import logging
import time

from ...domain.errors import ProcessExitError
from ...domain.models.transcode import LaunchResult, TranscodeOperation, TranscodeParams
from ..ports.process_launcher import ProcessLauncherPort
from ..services.ffmpeg_commands import build_args

logger = logging.getLogger(__name__)


def run_transcode(
    operation: TranscodeOperation,
    params: TranscodeParams,
    launcher: ProcessLauncherPort,
) -> LaunchResult:
    """
    Run one video operation through the external encoder.

    Parameters are validated before the launcher is touched. This call blocks
    until the encoder exits; async callers should run it in a worker thread.

    Returns:
        LaunchResult of the successful run (exit code 0, captured output)

    Raises:
        InvalidParams: If operation-specific parameters are missing or invalid
        ProcessLaunchError: If the encoder cannot be started
        ProcessExitError: If the encoder exits with a non-zero code
    """
    args = build_args(operation, params)

    logger.info(
        f"Starting {operation.value}",
        extra={"operation": operation.value, "input_path": params.input_path, "output_path": params.output_path},
    )
    start_time = time.time()
    result = launcher.launch(args)
    duration = round(time.time() - start_time, 3)

    if not result.succeeded:
        logger.error(
            f"{operation.value} failed with exit code {result.exit_code}",
            extra={"operation": operation.value, "duration_seconds": duration},
        )
        raise ProcessExitError(result.exit_code, result.output)

    logger.info(
        f"{operation.value} finished: {params.output_path}",
        extra={"operation": operation.value, "duration_seconds": duration},
    )
    return result
