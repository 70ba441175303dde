from __future__ import annotations

import logging
import time
from pathlib import Path

from ...domain.errors import DecodeError, EncodeError, InvalidPath, NotAFile, WrongExtension
from ...domain.models.conversion_report import ConversionReport
from ...domain.models.file_candidate import FileCandidate
from ...domain.services.file_selection import has_extension, list_matching_files, normalize_extension
from ..ports.image_codec import ImageCodecPort
from ..ports.progress_reporter import ProgressContext, ProgressReporterPort

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_EXTENSION = "webp"
DEFAULT_TARGET_EXTENSION = "png"


def _convert_candidate(candidate: FileCandidate, codec: ImageCodecPort) -> None:
    image = codec.decode(candidate.source_path)
    codec.encode(image, candidate.target_path)


def _describe_failure(candidate: FileCandidate, error: Exception) -> str:
    if isinstance(error, (DecodeError, EncodeError)):
        return f"{candidate.name}: {error.cause}"
    return f"{candidate.name}: {error}"


def convert_all(
    directory: Path | str,
    codec: ImageCodecPort,
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
    target_extension: str = DEFAULT_TARGET_EXTENSION,
    progress_reporter: ProgressReporterPort | None = None,
) -> ConversionReport:
    """
    Convert every matching image in a directory, collecting per-file failures.

    Only regular files directly inside directory whose extension matches
    source_extension (case-insensitive) are examined. Each is written next to
    the source with its extension replaced. A failing file is recorded in the
    report and the batch carries on.

    Args:
        directory: Directory to scan
        codec: ImageCodecPort used to decode and encode
        source_extension: Extension of files to convert (default: webp)
        target_extension: Extension of converted files (default: png)
        progress_reporter: Optional reporter advanced once per file

    Returns:
        ConversionReport where converted_count + failed_count equals the number of
        candidates examined

    Raises:
        InvalidPath: If directory does not exist or is not a directory
        FileIOError: If the directory cannot be listed
    """
    start_time = time.time()
    candidates = [
        FileCandidate.for_source(path, target_extension)
        for path in list_matching_files(Path(directory), source_extension)
    ]

    logger.info(
        f"Converting {len(candidates)} .{normalize_extension(source_extension)} file(s)",
        extra={"directory": str(directory), "target_extension": target_extension},
    )

    progress: ProgressContext | None = None
    if progress_reporter:
        progress = progress_reporter.start_batch(len(candidates), description=f"Converting to {target_extension.upper()}")

    converted = 0
    errors: list[str] = []
    try:
        for candidate in candidates:
            try:
                _convert_candidate(candidate, codec)
            except Exception as e:
                message = _describe_failure(candidate, e)
                errors.append(message)
                logger.warning(f"Conversion failed: {message}", extra={"source_path": str(candidate.source_path)})
                if progress:
                    progress.advance(candidate.name, succeeded=False)
                continue

            converted += 1
            logger.debug(
                f"Converted {candidate.name}",
                extra={"source_path": str(candidate.source_path), "target_path": str(candidate.target_path)},
            )
            if progress:
                progress.advance(candidate.name, succeeded=True)
    finally:
        if progress:
            progress.finish()

    report = ConversionReport(
        converted_count=converted,
        failed_count=len(errors),
        errors=tuple(errors),
    )
    logger.info(
        f"Batch conversion finished: {report.converted_count} converted, {report.failed_count} failed",
        extra={"duration_seconds": round(time.time() - start_time, 3)},
    )
    return report


def convert_one(
    file_path: Path | str,
    codec: ImageCodecPort,
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
    target_extension: str = DEFAULT_TARGET_EXTENSION,
) -> Path:
    """
    Convert a single image and return the path of the written file.

    The extension check happens before anything is written.

    Raises:
        InvalidPath: If file_path does not exist
        NotAFile: If file_path is not a regular file
        WrongExtension: If file_path lacks the source extension
        DecodeError: If the image cannot be opened or decoded
        EncodeError: If the converted image cannot be written
    """
    path = Path(file_path)
    if not path.exists():
        raise InvalidPath(path, "file does not exist")
    if not path.is_file():
        raise NotAFile(path)
    if not has_extension(path, source_extension):
        raise WrongExtension(path, normalize_extension(source_extension))

    candidate = FileCandidate.for_source(path, target_extension)
    _convert_candidate(candidate, codec)
    logger.info(
        f"Converted {candidate.name}",
        extra={"source_path": str(candidate.source_path), "target_path": str(candidate.target_path)},
    )
    return candidate.target_path
