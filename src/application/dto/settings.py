from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiKeys(BaseModel):
    """API keys per provider, serialized under the provider names the desktop shell uses."""

    model_config = ConfigDict(populate_by_name=True)

    fal: str | None = Field(default=None, alias="FAL")
    replicate: str | None = Field(default=None, alias="Replicate")
    hf: str | None = Field(default=None, alias="HF")
    gpt: str | None = Field(default=None, alias="GPT")
    grok: str | None = Field(default=None, alias="Grok")
    runpod: str | None = Field(default=None, alias="RunPod")
    runpod_endpoint: str | None = Field(default=None, alias="RunPodEndpoint")

    @classmethod
    def provider_names(cls) -> list[str]:
        """Serialized key names in declaration order (FAL, Replicate, ...)."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    def get(self, provider: str) -> str | None:
        for name, field in type(self).model_fields.items():
            if field.alias == provider:
                return getattr(self, name)
        raise KeyError(provider)

    def to_json_dict(self) -> dict[str, str]:
        """Present keys only, keyed by provider name."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UserSettings(BaseModel):
    """Settings document stored in the per-user settings file."""

    api_keys: ApiKeys | None = None

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
