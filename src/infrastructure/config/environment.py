"""Environment variable loading from .env files with precedence support."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Recognised variables; all optional, the system falls back to toolbox.toml or built-in defaults
OPTIONAL_ENV_VARS = {
    "TOOLBOX_CONFIG": "Custom configuration file path (defaults to toolbox.toml)",
    "TOOLBOX_SETTINGS_FILE": "User settings file (defaults to ~/.toolbox/settings.json)",
    "REPLICATE_API_BASE": "Predictions API base URL (defaults to https://api.replicate.com/v1)",
    "REPLICATE_API_TOKEN": "Replicate token used when no key is stored in settings",
    "FFMPEG_BINARY": "Encoder executable (defaults to ffmpeg on PATH)",
}


def load_environment_variables(dotenv_path: Path | str | None = None) -> None:
    """
    Load environment variables from a .env file.

    System environment variables take precedence over .env values
    (python-dotenv with override=False).

    Args:
        dotenv_path: Optional path to .env file. If None, searches the current
            working directory and up to two parent directories.
    """
    if dotenv_path is None:
        current = Path.cwd()
        for path in (current / ".env", current.parent / ".env", current.parent.parent / ".env"):
            if path.exists():
                dotenv_path = path
                break

        if dotenv_path is None:
            load_dotenv(override=False)
            return

    dotenv_path = Path(dotenv_path)
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)
        logger.debug(f"Loaded .env file from: {dotenv_path}")
    else:
        logger.debug(f".env file not found at: {dotenv_path}")


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable value, treating blank values as unset."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_optional_api_key(key: str, description: str | None = None) -> str | None:
    """
    Get optional API key with graceful degradation.

    Returns the API key if present, None otherwise. Never logs the value.
    """
    value = get_env(key)
    if value:
        logger.debug(f"Optional API key {key} found")
        return value

    desc = description or OPTIONAL_ENV_VARS.get(key, "optional service")
    logger.debug(f"Optional API key {key} not found ({desc})")
    return None


def default_settings_file() -> Path:
    """Per-user settings location: ~/.toolbox/settings.json."""
    return Path.home() / ".toolbox" / "settings.json"
