"""Settings loader for Sori backed by pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Sequence

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ProviderConfigurationError
from .languages import LANGUAGE_NAMES

ECHO_PROVIDER_NAMES = frozenset({"echo", "noop", "mock"})
OPENAI_PROVIDER_NAMES = frozenset({"openai", "gpt", "default"})
AZURE_PROVIDER_NAMES = frozenset({"azure", "azure_openai", "azureopenai", "azure_open_ai"})


class SoriConfig(BaseSettings):
    """Schema describing all supported configuration options.

    Values come from the process environment first and a ``.env`` file in the
    application directory second.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    LLM_PROVIDER: Literal["azure_openai", "openai"] = Field(
        default="openai",
        description="Large language model provider selection.",
    )
    AZURE_OPENAI_API_KEY: str | None = Field(default=None, repr=False)
    AZURE_OPENAI_ENDPOINT: str | None = Field(default=None)
    AZURE_OPENAI_API_VERSION: str | None = Field(default=None)
    AZURE_OPENAI_DEPLOYMENT_NAME: str | None = Field(default=None)
    OPENAI_API_KEY: str | None = Field(default=None, repr=False)
    SORI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Chat model used for completions.",
    )
    SORI_REQUEST_TIMEOUT: float = Field(
        default=30.0,
        description="Seconds to wait for a completion before giving up.",
    )
    SORI_MAX_WORDS: int = Field(
        default=50,
        description="Largest selection accepted in translation mode.",
    )
    SORI_DEFAULT_TARGET_LANGUAGE: str = Field(default="en")
    SORI_PROVIDER_DEBUG: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def _normalise_provider(cls, data: Any) -> Any:
        if isinstance(data, dict):
            raw_value = data.get("LLM_PROVIDER")
            if isinstance(raw_value, str):
                normalized = raw_value.strip().lower().replace("-", "_")
                synonyms = {
                    "azure_open_ai": "azure_openai",
                    "azureopenai": "azure_openai",
                }
                normalized = synonyms.get(normalized, normalized)
                if normalized not in {"openai", "azure_openai"}:
                    normalized = "openai"
                data["LLM_PROVIDER"] = normalized
            language = data.get("SORI_DEFAULT_TARGET_LANGUAGE")
            if isinstance(language, str):
                data["SORI_DEFAULT_TARGET_LANGUAGE"] = language.strip().lower()
        return data


def resolve_provider_kind(name: str | None) -> str | None:
    """Map a provider identifier to ``openai`` or ``azure_openai``.

    Returns ``None`` when no identifier was given, so the caller can fall back
    to ``LLM_PROVIDER``. Echo identifiers are not backed by settings and are
    rejected along with unknown names.
    """

    if name is None or not name.strip():
        return None
    normalized = name.strip().lower().replace("-", "_")
    if normalized in OPENAI_PROVIDER_NAMES:
        return "openai"
    if normalized in AZURE_PROVIDER_NAMES:
        return "azure_openai"
    raise ProviderConfigurationError(f"Unknown completion provider '{name}'.")


@lru_cache(maxsize=4)
def _load_settings(
    app_dir: Path | None = None, provider: str | None = None
) -> SoriConfig:
    """Load and validate settings once per directory and provider."""

    base_dir = app_dir or Path.cwd()
    try:
        settings = SoriConfig(_env_file=base_dir / ".env")
    except ValidationError as exc:
        raise ProviderConfigurationError(
            _format_validation_errors(exc.errors())
        ) from exc

    errors = collect_settings_errors(settings, provider=provider)
    if errors:
        bullet_list = "\n".join(f"- {message}" for message in errors)
        raise ProviderConfigurationError(
            "Configuration validation errors detected:\n" + bullet_list
        )
    return settings


def collect_settings_errors(
    settings: SoriConfig, provider: str | None = None
) -> list[str]:
    """Return human-readable problems with the provider and limit settings.

    Credentials are checked for ``provider`` when given, otherwise for
    ``LLM_PROVIDER``.
    """

    provider = provider or settings.LLM_PROVIDER
    errors: list[str] = []

    if provider == "openai":
        if not settings.OPENAI_API_KEY:
            errors.append(
                "OPENAI_API_KEY is required when the provider is 'openai'."
            )
    elif provider == "azure_openai":
        missing = [
            name
            for name, value in {
                "AZURE_OPENAI_API_KEY": settings.AZURE_OPENAI_API_KEY,
                "AZURE_OPENAI_ENDPOINT": settings.AZURE_OPENAI_ENDPOINT,
                "AZURE_OPENAI_API_VERSION": settings.AZURE_OPENAI_API_VERSION,
                "AZURE_OPENAI_DEPLOYMENT_NAME": settings.AZURE_OPENAI_DEPLOYMENT_NAME,
            }.items()
            if not value
        ]
        if missing:
            errors.append(
                "The following Azure OpenAI settings must be provided when "
                f"the provider is 'azure_openai': {', '.join(missing)}."
            )

    if settings.SORI_REQUEST_TIMEOUT <= 0:
        errors.append("SORI_REQUEST_TIMEOUT must be a positive number of seconds.")
    if settings.SORI_MAX_WORDS < 1:
        errors.append("SORI_MAX_WORDS must be at least 1.")
    if settings.SORI_DEFAULT_TARGET_LANGUAGE not in LANGUAGE_NAMES:
        errors.append(
            "SORI_DEFAULT_TARGET_LANGUAGE must be one of: "
            + ", ".join(sorted(LANGUAGE_NAMES))
            + "."
        )
    return errors


def _format_validation_errors(entries: Sequence[Any]) -> str:
    details: list[str] = []
    for entry in entries:
        path = entry.get("loc") or []
        if isinstance(path, (list, tuple)):
            location = ".".join(str(part) for part in path if part not in {None, ""})
        else:
            location = str(path)
        message = str(entry.get("msg") or "Invalid value")
        prefix = f"{location}: " if location else ""
        details.append(f"- {prefix}{message}")
    return "Configuration validation errors detected:\n" + "\n".join(details)


def get_settings(
    app_dir: Path | None = None, provider: str | None = None
) -> SoriConfig:
    """Return the validated settings for typed access.

    ``provider`` overrides ``LLM_PROVIDER`` when deciding which credentials
    must be present.
    """

    return _load_settings(app_dir=app_dir, provider=resolve_provider_kind(provider))


def clear_settings_cache() -> None:
    _load_settings.cache_clear()
