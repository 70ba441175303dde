"""Unit tests for settings use cases and the API key DTOs."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.application.dto.settings import ApiKeys, UserSettings
from src.application.ports.settings_store import SettingsStorePort
from src.application.use_cases.manage_settings import (
    export_api_keys,
    import_api_keys,
    load_settings,
    resolve_replicate_credential,
    set_api_key,
)
from src.domain.errors import FileIOError, InvalidParams


class InMemorySettingsStore(SettingsStorePort):
    def __init__(self, settings: UserSettings | None = None) -> None:
        self.settings = settings or UserSettings()
        self.saves = 0

    def load(self) -> UserSettings:
        return self.settings.model_copy(deep=True)

    def save(self, settings: UserSettings) -> None:
        self.settings = settings.model_copy(deep=True)
        self.saves += 1


class TestApiKeys:
    def test_provider_names_in_declaration_order(self):
        assert ApiKeys.provider_names() == ["FAL", "Replicate", "HF", "GPT", "Grok", "RunPod", "RunPodEndpoint"]

    def test_accepts_aliases_and_field_names(self):
        assert ApiKeys.model_validate({"Replicate": "r8"}).replicate == "r8"
        assert ApiKeys(replicate="r8").get("Replicate") == "r8"

    def test_get_unknown_provider(self):
        with pytest.raises(KeyError):
            ApiKeys().get("OpenAI")

    def test_json_dict_skips_missing_keys(self):
        settings = UserSettings(api_keys=ApiKeys(hf="hf_x"))
        assert settings.to_json_dict() == {"api_keys": {"HF": "hf_x"}}

    def test_fresh_settings_have_no_keys(self):
        assert UserSettings().to_json_dict() == {}


class TestSetApiKey:
    def test_sets_and_persists(self):
        store = InMemorySettingsStore()

        set_api_key(store, "Replicate", "  r8_abc  ")

        assert store.settings.api_keys.replicate == "r8_abc"
        assert store.saves == 1

    def test_keeps_other_keys(self):
        store = InMemorySettingsStore(UserSettings(api_keys=ApiKeys(fal="fal_1")))

        set_api_key(store, "GPT", "sk-1")

        assert store.settings.api_keys.to_json_dict() == {"FAL": "fal_1", "GPT": "sk-1"}

    def test_blank_value_removes_key(self):
        store = InMemorySettingsStore(UserSettings(api_keys=ApiKeys(fal="fal_1", grok="g")))

        set_api_key(store, "FAL", "")

        assert store.settings.api_keys.to_json_dict() == {"Grok": "g"}

    def test_unknown_provider(self):
        store = InMemorySettingsStore()
        with pytest.raises(InvalidParams, match="unknown provider"):
            set_api_key(store, "OpenAI", "x")
        assert store.saves == 0


def test_load_settings_defaults():
    assert load_settings(InMemorySettingsStore()).api_keys is None


class TestExportImport:
    def test_export_writes_flat_object(self, tmp_path: Path):
        settings = UserSettings(api_keys=ApiKeys(replicate="r8", runpod_endpoint="ep-1"))
        path = tmp_path / "keys.json"

        count = export_api_keys(settings, path)

        assert count == 2
        assert json.loads(path.read_text(encoding="utf-8")) == {"Replicate": "r8", "RunPodEndpoint": "ep-1"}

    def test_export_without_keys(self, tmp_path: Path):
        path = tmp_path / "keys.json"
        assert export_api_keys(UserSettings(), path) == 0
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_export_to_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileIOError):
            export_api_keys(UserSettings(), tmp_path / "missing" / "keys.json")

    def test_import_replaces_keys_and_ignores_unknown(self, tmp_path: Path):
        path = tmp_path / "keys.json"
        path.write_text(json.dumps({"HF": "hf_1", "OpenAI": "x", "GPT": "", "Grok": 5}), encoding="utf-8")
        store = InMemorySettingsStore(UserSettings(api_keys=ApiKeys(fal="old")))

        imported = import_api_keys(path, store)

        assert imported.api_keys.to_json_dict() == {"HF": "hf_1"}
        assert store.settings == imported

    def test_import_invalid_json(self, tmp_path: Path):
        path = tmp_path / "keys.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FileIOError, match="invalid JSON"):
            import_api_keys(path, InMemorySettingsStore())

    def test_import_non_object(self, tmp_path: Path):
        path = tmp_path / "keys.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(FileIOError, match="JSON object"):
            import_api_keys(path, InMemorySettingsStore())

    def test_import_missing_file(self, tmp_path: Path):
        with pytest.raises(FileIOError):
            import_api_keys(tmp_path / "nope.json", InMemorySettingsStore())


class TestResolveReplicateCredential:
    def test_explicit_wins(self):
        settings = UserSettings(api_keys=ApiKeys(replicate="stored"))
        assert resolve_replicate_credential(settings, explicit="cli", environment_token="env") == "cli"

    def test_stored_before_environment(self):
        settings = UserSettings(api_keys=ApiKeys(replicate="stored"))
        assert resolve_replicate_credential(settings, environment_token="env") == "stored"

    def test_environment_fallback(self):
        assert resolve_replicate_credential(UserSettings(), environment_token="env") == "env"

    def test_blank_values_ignored(self):
        settings = UserSettings(api_keys=ApiKeys(replicate="  "))
        assert resolve_replicate_credential(settings, explicit="") is None
