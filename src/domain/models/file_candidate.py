from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileCandidate:
    """A source file paired with the path its converted copy will be written to."""

    source_path: Path
    target_path: Path

    @classmethod
    def for_source(cls, source_path: Path, target_extension: str) -> FileCandidate:
        source_path = Path(source_path)
        return cls(
            source_path=source_path,
            target_path=source_path.with_suffix(f".{target_extension.lstrip('.')}"),
        )

    @property
    def name(self) -> str:
        return self.source_path.name
