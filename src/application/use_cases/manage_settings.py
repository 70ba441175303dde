from __future__ import annotations

import json
import logging
from pathlib import Path

from ...domain.errors import FileIOError, InvalidParams
from ..dto.settings import ApiKeys, UserSettings
from ..ports.settings_store import SettingsStorePort

logger = logging.getLogger(__name__)


def load_settings(store: SettingsStorePort) -> UserSettings:
    """Load stored settings; a store with nothing saved yields defaults."""
    return store.load()


def save_settings(settings: UserSettings, store: SettingsStorePort) -> None:
    store.save(settings)
    providers = sorted(settings.api_keys.to_json_dict()) if settings.api_keys else []
    logger.info("Settings saved", extra={"providers": providers})


def set_api_key(store: SettingsStorePort, provider: str, value: str | None) -> UserSettings:
    """
    Set or clear one provider key and persist the result.

    A blank value removes the key.

    Raises:
        InvalidParams: If provider is not a known key name
    """
    if provider not in ApiKeys.provider_names():
        known = ", ".join(ApiKeys.provider_names())
        raise InvalidParams("set-key", f"unknown provider '{provider}', expected one of: {known}")

    settings = store.load()
    keys = settings.api_keys.to_json_dict() if settings.api_keys else {}
    if value and value.strip():
        keys[provider] = value.strip()
    else:
        keys.pop(provider, None)

    updated = UserSettings(api_keys=ApiKeys.model_validate(keys))
    save_settings(updated, store)
    return updated


def export_api_keys(settings: UserSettings, path: Path | str) -> int:
    """
    Write the non-empty keys as a flat JSON object, e.g. {"Replicate": "..."}.

    Returns:
        Number of keys exported

    Raises:
        FileIOError: If the file cannot be written
    """
    keys = {
        name: value
        for name, value in (settings.api_keys.to_json_dict() if settings.api_keys else {}).items()
        if value.strip()
    }
    path = Path(path)
    try:
        path.write_text(json.dumps(keys, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise FileIOError(path, f"cannot write export file: {e}") from e
    logger.info(f"Exported {len(keys)} API key(s)", extra={"path": str(path)})
    return len(keys)


def import_api_keys(path: Path | str, store: SettingsStorePort) -> UserSettings:
    """
    Read a flat JSON object of keys, store it and return the saved settings.

    Unknown names and blank or non-string values are ignored. The imported set
    replaces the stored keys.

    Raises:
        FileIOError: If the file cannot be read or is not a JSON object
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FileIOError(path, f"cannot read import file: {e}") from e
    except json.JSONDecodeError as e:
        raise FileIOError(path, f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FileIOError(path, "expected a JSON object of provider keys")

    known = set(ApiKeys.provider_names())
    keys = {
        name: value.strip()
        for name, value in data.items()
        if name in known and isinstance(value, str) and value.strip()
    }
    skipped = sorted(set(data) - set(keys))
    if skipped:
        logger.warning(f"Ignored {len(skipped)} unknown or empty key(s) while importing", extra={"names": skipped})

    settings = UserSettings(api_keys=ApiKeys.model_validate(keys))
    save_settings(settings, store)
    return settings


def resolve_replicate_credential(
    settings: UserSettings,
    explicit: str | None = None,
    environment_token: str | None = None,
) -> str | None:
    """Pick the credential for prediction jobs: explicit > stored key > environment."""
    for candidate in (
        explicit,
        settings.api_keys.replicate if settings.api_keys else None,
        environment_token,
    ):
        if candidate and candidate.strip():
            return candidate.strip()
    return None
