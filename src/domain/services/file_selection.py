"""Domain service for selecting candidate files by extension."""

from __future__ import annotations

from pathlib import Path

from src.domain.errors import FileIOError, InvalidPath


def normalize_extension(extension: str) -> str:
    """Strip a leading dot and lowercase, so "WEBP", ".webp" and "webp" compare equal."""
    return extension.strip().lstrip(".").lower()


def has_extension(path: Path, extension: str) -> bool:
    """
    Check whether a path's final suffix matches extension, case-insensitively.

    Dotfiles such as ".webp" have no suffix and never match.
    """
    suffix = Path(path).suffix
    if not suffix:
        return False
    return suffix[1:].lower() == normalize_extension(extension)


def require_directory(directory: Path) -> Path:
    """
    Validate that directory exists and is a directory.

    Raises:
        InvalidPath: If the path is missing or is not a directory
    """
    directory = Path(directory)
    if not directory.exists():
        raise InvalidPath(directory, "directory does not exist")
    if not directory.is_dir():
        raise InvalidPath(directory, "path is not a directory")
    return directory


def list_matching_files(directory: Path, extension: str) -> list[Path]:
    """
    List regular files directly inside directory whose extension matches.

    Subdirectories are not descended into. The result is sorted by name so
    repeated runs over the same directory process files in the same order.

    Raises:
        InvalidPath: If directory is missing or not a directory
        FileIOError: If the directory cannot be listed
    """
    directory = require_directory(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FileIOError(directory, f"cannot list directory: {e}") from e
    return sorted(
        (entry for entry in entries if entry.is_file() and has_extension(entry, extension)),
        key=lambda p: p.name,
    )
