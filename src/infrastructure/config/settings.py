"""Pydantic settings for toolbox.toml configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .environment import default_settings_file, get_env, load_environment_variables

DEFAULT_CONFIG_FILE = "toolbox.toml"
DEFAULT_REPLICATE_BASE_URL = "https://api.replicate.com/v1"


class ConfigError(Exception):
    """Raised when toolbox.toml exists but cannot be parsed or validated."""


class PathsSettings(BaseModel):
    """Path configuration settings."""

    settings_file: Path = Field(default_factory=default_settings_file)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable precedence."""
        env_settings_file = get_env("TOOLBOX_SETTINGS_FILE")
        if env_settings_file is not None:
            data["settings_file"] = env_settings_file
        super().__init__(**data)

    @field_validator("settings_file", mode="before")
    @classmethod
    def expand_user(cls, v: Any) -> Path:
        return Path(v).expanduser()


class ReplicateSettings(BaseModel):
    """Predictions API connection settings."""

    base_url: str = DEFAULT_REPLICATE_BASE_URL
    poll_interval_ms: int = Field(default=1000, ge=1)
    request_timeout_s: float = Field(default=30.0, gt=0)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable precedence."""
        env_base_url = get_env("REPLICATE_API_BASE")
        if env_base_url is not None:
            data["base_url"] = env_base_url
        super().__init__(**data)

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval_ms / 1000


class FfmpegSettings(BaseModel):
    """Encoder settings."""

    binary: str | None = None  # None means look up "ffmpeg" on PATH

    def __init__(self, **data: Any) -> None:
        env_binary = get_env("FFMPEG_BINARY")
        if env_binary is not None:
            data["binary"] = env_binary
        super().__init__(**data)


class ImagesSettings(BaseModel):
    """Batch conversion formats."""

    source_extension: str = "webp"
    target_extension: str = "png"

    @field_validator("source_extension", "target_extension")
    @classmethod
    def strip_dot(cls, v: str) -> str:
        v = v.strip().lstrip(".").lower()
        if not v:
            raise ValueError("extension must not be empty")
        return v


class Settings(BaseModel):
    """Main settings loaded from toolbox.toml."""

    paths: PathsSettings = Field(default_factory=PathsSettings)
    replicate: ReplicateSettings = Field(default_factory=ReplicateSettings)
    ffmpeg: FfmpegSettings = Field(default_factory=FfmpegSettings)
    images: ImagesSettings = Field(default_factory=ImagesSettings)

    @classmethod
    def from_toml(cls, toml_path: Path | str | None = None) -> "Settings":
        """
        Load settings from toolbox.toml with environment variable precedence.

        Environment variables (system env > .env file) override TOML values.
        A missing file yields defaults.

        Args:
            toml_path: Path to the config file (default: $TOOLBOX_CONFIG or toolbox.toml)

        Returns:
            Settings instance with loaded configuration

        Raises:
            ConfigError: If the file is not valid TOML or holds invalid values
        """
        load_environment_variables()

        toml_path = Path(toml_path or get_env("TOOLBOX_CONFIG") or DEFAULT_CONFIG_FILE)
        if not toml_path.exists():
            return cls()

        try:
            with toml_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

        try:
            return cls(
                paths=PathsSettings(**data.get("paths", {})),
                replicate=ReplicateSettings(**data.get("replicate", {})),
                ffmpeg=FfmpegSettings(**data.get("ffmpeg", {})),
                images=ImagesSettings(**data.get("images", {})),
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {toml_path}: {e}") from e
