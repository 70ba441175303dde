"""Port interface for reporting progress during batch processing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol


class ProgressContext(Protocol):
    """Handle for one running batch."""

    def advance(self, item_name: str, succeeded: bool) -> None:
        """
        Record that one more item was processed.

        Args:
            item_name: File name of the processed item
            succeeded: Whether the item was processed without error
        """
        ...

    def finish(self) -> None:
        """Mark batch as complete."""
        ...


class ProgressReporterPort(ABC):
    """Port for reporting progress during batch processing."""

    @abstractmethod
    def start_batch(
        self,
        total_items: int,
        description: str = "Converting files",
    ) -> ProgressContext:
        """
        Start progress reporting for a batch operation.

        Args:
            total_items: Number of candidate files in the batch
            description: Description for progress bar

        Returns:
            ProgressContext for updating progress
        """
        pass
