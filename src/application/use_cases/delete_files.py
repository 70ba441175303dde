from __future__ import annotations

import logging
from pathlib import Path

from ...domain.errors import FileIOError
from ...domain.services.file_selection import list_matching_files, normalize_extension

logger = logging.getLogger(__name__)


def delete_all_matching(directory: Path | str, extension: str = "webp") -> int:
    """
    Delete every regular file in directory whose extension matches.

    Deletion is not transactional: the first failure aborts the run and files
    removed before it stay removed.

    Returns:
        Number of files deleted (0 when nothing matches)

    Raises:
        InvalidPath: If directory does not exist or is not a directory
        FileIOError: If listing the directory or deleting a file fails
    """
    matches = list_matching_files(Path(directory), extension)
    deleted = 0
    for path in matches:
        try:
            path.unlink()
        except FileNotFoundError:
            # Removed by someone else since listing
            continue
        except OSError as e:
            logger.error(
                f"Deletion aborted after {deleted} file(s): {e}",
                extra={"path": str(path)},
            )
            raise FileIOError(path, f"cannot delete file: {e}") from e
        deleted += 1

    logger.info(
        f"Deleted {deleted} .{normalize_extension(extension)} file(s)",
        extra={"directory": str(directory)},
    )
    return deleted
