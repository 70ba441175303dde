"""JSON file adapter for user settings with atomic writes."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ...application.dto.settings import UserSettings
from ...application.ports.settings_store import SettingsStorePort
from ...domain.errors import FileIOError

logger = logging.getLogger(__name__)


class JsonSettingsStore(SettingsStorePort):
    """Store settings as pretty-printed JSON at a fixed path."""

    def __init__(self, path: Path | str) -> None:
        """
        Args:
            path: Settings file; its parent directory is created on first save
        """
        self.path = Path(path)

    def load(self) -> UserSettings:
        if not self.path.exists():
            logger.debug(f"No settings file at {self.path}, using defaults")
            return UserSettings()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise FileIOError(self.path, f"cannot read settings: {e}") from e
        except json.JSONDecodeError as e:
            raise FileIOError(self.path, f"settings file is not valid JSON: {e}") from e

        try:
            return UserSettings.model_validate(data)
        except ValidationError as e:
            raise FileIOError(self.path, f"settings file has unexpected content: {e}") from e

    def save(self, settings: UserSettings) -> None:
        """Write to a temp file in the same directory, then rename over the target."""
        temp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.tmp.",
                delete=False,
            ) as temp_file:
                temp_path = Path(temp_file.name)
                json.dump(settings.to_json_dict(), temp_file, indent=2, ensure_ascii=False)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            shutil.move(str(temp_path), str(self.path))
        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            logger.error(f"Failed to save settings to {self.path}: {e}", exc_info=True)
            raise FileIOError(self.path, f"cannot write settings: {e}") from e

        logger.debug(f"Settings written to {self.path}")
