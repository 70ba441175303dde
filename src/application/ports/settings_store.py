"""Port interface for persisting user settings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..dto.settings import UserSettings


class SettingsStorePort(ABC):
    """Port for reading and writing the user settings document."""

    @abstractmethod
    def load(self) -> UserSettings:
        """
        Load settings.

        Returns:
            Stored settings, or defaults when nothing has been saved yet

        Raises:
            FileIOError: If the settings file exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    def save(self, settings: UserSettings) -> None:
        """
        Persist settings, replacing what was stored.

        Raises:
            FileIOError: If the settings file cannot be written
        """
        pass
