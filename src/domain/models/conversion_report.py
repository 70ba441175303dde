from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ConversionReport:
    """
    Outcome of one batch conversion.

    Fields:
        converted_count: Files converted successfully
        failed_count: Files that could not be converted
        errors: One "<filename>: <cause>" entry per failed file, in processing order
    """

    converted_count: int = 0
    failed_count: int = 0
    errors: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.converted_count < 0 or self.failed_count < 0:
            raise ValueError("counts must be non-negative")
        if len(self.errors) != self.failed_count:
            raise ValueError("each failed file must carry exactly one error entry")

    @property
    def examined_count(self) -> int:
        return self.converted_count + self.failed_count

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the field names the desktop shell expects."""
        return {
            "converted": self.converted_count,
            "failed": self.failed_count,
            "errors": list(self.errors),
        }
