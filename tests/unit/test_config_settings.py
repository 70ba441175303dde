"""Unit tests for toolbox.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.infrastructure.config.settings import DEFAULT_REPLICATE_BASE_URL, ConfigError, Settings

ENV_VARS = ("TOOLBOX_CONFIG", "TOOLBOX_SETTINGS_FILE", "REPLICATE_API_BASE", "FFMPEG_BINARY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = Settings.from_toml(tmp_path / "toolbox.toml")

    assert settings.replicate.base_url == DEFAULT_REPLICATE_BASE_URL
    assert settings.replicate.poll_interval_seconds == 1.0
    assert settings.ffmpeg.binary is None
    assert settings.images.source_extension == "webp"
    assert settings.images.target_extension == "png"
    assert settings.paths.settings_file.name == "settings.json"


def test_values_from_toml(tmp_path: Path):
    config = tmp_path / "toolbox.toml"
    config.write_text(
        """
[paths]
settings_file = "~/custom/settings.json"

[replicate]
base_url = "http://localhost:9000/v1"
poll_interval_ms = 250

[ffmpeg]
binary = "/opt/ffmpeg/bin/ffmpeg"

[images]
source_extension = ".WEBP"
target_extension = "jpg"
""",
        encoding="utf-8",
    )

    settings = Settings.from_toml(config)

    assert settings.paths.settings_file == Path("~/custom/settings.json").expanduser()
    assert settings.replicate.base_url == "http://localhost:9000/v1"
    assert settings.replicate.poll_interval_seconds == 0.25
    assert settings.ffmpeg.binary == "/opt/ffmpeg/bin/ffmpeg"
    assert settings.images.source_extension == "webp"
    assert settings.images.target_extension == "jpg"


def test_environment_overrides_toml(tmp_path: Path, monkeypatch):
    config = tmp_path / "toolbox.toml"
    config.write_text('[ffmpeg]\nbinary = "from-toml"\n', encoding="utf-8")
    monkeypatch.setenv("FFMPEG_BINARY", "from-env")
    monkeypatch.setenv("TOOLBOX_SETTINGS_FILE", str(tmp_path / "s.json"))

    settings = Settings.from_toml(config)

    assert settings.ffmpeg.binary == "from-env"
    assert settings.paths.settings_file == tmp_path / "s.json"


def test_config_path_from_environment(tmp_path: Path, monkeypatch):
    config = tmp_path / "elsewhere.toml"
    config.write_text('[images]\ntarget_extension = "bmp"\n', encoding="utf-8")
    monkeypatch.setenv("TOOLBOX_CONFIG", str(config))

    assert Settings.from_toml().images.target_extension == "bmp"


def test_invalid_toml(tmp_path: Path):
    config = tmp_path / "toolbox.toml"
    config.write_text("[replicate\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        Settings.from_toml(config)


def test_invalid_values(tmp_path: Path):
    config = tmp_path / "toolbox.toml"
    config.write_text("[replicate]\npoll_interval_ms = 0\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        Settings.from_toml(config)


def test_empty_extension_rejected(tmp_path: Path):
    config = tmp_path / "toolbox.toml"
    config.write_text('[images]\nsource_extension = "."\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        Settings.from_toml(config)
