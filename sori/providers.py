"""Completion provider abstractions."""

from __future__ import annotations

import json
import sys
from abc import ABC, abstractmethod
from typing import Any

import openai
from openai import AzureOpenAI, OpenAI

from .configuration import ECHO_PROVIDER_NAMES, get_settings, resolve_provider_kind
from .errors import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from .structures import Prompt

DEFAULT_TIMEOUT = 30.0


class CompletionProvider(ABC):
    """Abstract adapter for language-model completion APIs."""

    @abstractmethod
    def complete(
        self,
        prompt: Prompt,
        *,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str:
        """Send the prompt and return the raw reply text."""


class EchoCompletionProvider(CompletionProvider):
    """A provider that returns the user content (useful for testing)."""

    def complete(
        self,
        prompt: Prompt,
        *,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str:
        return prompt.user


class OpenAICompletionProvider(CompletionProvider):
    """Completion provider that uses OpenAI or Azure OpenAI chat models."""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        *,
        provider_kind: str = "openai",
        api_key: str | None = None,
        azure_endpoint: str | None = None,
        azure_api_version: str | None = None,
        azure_deployment: str | None = None,
        default_model: str | None = None,
        debug: bool = False,
    ) -> None:
        self.debug = debug
        self.provider_kind = provider_kind
        if provider_kind == "azure_openai":
            self._client, self._default_model = self._build_azure_client(
                api_key=api_key,
                endpoint=azure_endpoint,
                api_version=azure_api_version,
                deployment_name=azure_deployment,
            )
        else:
            self._client, self._default_model = self._build_openai_client(
                api_key=api_key,
                model=default_model,
            )

    def _build_openai_client(
        self, *, api_key: str | None, model: str | None
    ) -> tuple[Any, str]:
        if not api_key:
            raise ProviderConfigurationError(
                "OpenAI configuration missing. Set OPENAI_API_KEY or choose a "
                "different provider."
            )
        return OpenAI(api_key=api_key, max_retries=0), model or self.DEFAULT_MODEL

    def _build_azure_client(
        self,
        *,
        api_key: str | None,
        endpoint: str | None,
        api_version: str | None,
        deployment_name: str | None,
    ) -> tuple[Any, str]:
        missing = [
            name
            for name, value in {
                "AZURE_OPENAI_API_KEY": api_key,
                "AZURE_OPENAI_ENDPOINT": endpoint,
                "AZURE_OPENAI_API_VERSION": api_version,
                "AZURE_OPENAI_DEPLOYMENT_NAME": deployment_name,
            }.items()
            if not value
        ]
        if missing:
            raise ProviderConfigurationError(
                "Azure OpenAI configuration incomplete. Please set: "
                + ", ".join(missing)
                + "."
            )
        client = AzureOpenAI(
            api_key=api_key,
            api_version=api_version,
            azure_endpoint=endpoint,
            max_retries=0,
        )
        return client, deployment_name  # type: ignore[return-value]

    def complete(
        self,
        prompt: Prompt,
        *,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str:
        messages = [
            {"role": "system", "content": prompt.system},
            {"role": "user", "content": prompt.user},
        ]
        self._log_debug("provider.request.messages", messages)

        try:
            response = self._client.chat.completions.create(
                model=model or self._default_model,
                temperature=0,
                messages=messages,
                timeout=timeout,
            )
        except openai.APITimeoutError as exc:
            raise ProviderTimeoutError(
                f"Completion request timed out after {timeout:g} seconds."
            ) from exc
        except openai.AuthenticationError as exc:
            raise ProviderAuthenticationError(
                "Completion provider authentication failed."
            ) from exc
        except openai.RateLimitError as exc:
            raise ProviderRateLimitError(
                "Completion provider rate limit exceeded."
            ) from exc
        except openai.OpenAIError as exc:
            raise ProviderError(
                f"Completion service temporarily unavailable: {exc}"
            ) from exc

        self._log_debug("provider.response.raw", self._safe_dump_response(response))
        return self._extract_content(response)

    def _extract_content(self, response: Any) -> str:
        """Return the text of the first choice that carries any."""

        choices = getattr(response, "choices", None) or []
        for choice in choices:
            message = getattr(choice, "message", None)
            content = getattr(message, "content", None) if message else None
            if isinstance(content, list):
                parts: list[str] = []
                for part in content:
                    if isinstance(part, dict):
                        text_value = part.get("text")
                    else:
                        text_value = getattr(part, "text", None)
                    if text_value:
                        parts.append(str(text_value))
                content = "\n".join(parts)
            if content:
                return str(content).strip()
        raise ProviderError("Completion provider response empty or unrecognised.")

    def _log_debug(self, label: str, payload: Any) -> None:
        """Emit structured debug information when enabled."""

        if not self.debug:
            return
        if isinstance(payload, (dict, list)):
            message = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
        else:
            message = str(payload)
        print(f"[sori][provider-debug] {label}:\n{message}", file=sys.stderr)

    def _safe_dump_response(self, response: Any) -> Any:
        """Best-effort conversion of SDK response objects into plain data."""

        dump = getattr(response, "model_dump", None)
        if callable(dump):
            return dump()
        return str(response)


def build_provider(
    name: str | None,
    *,
    settings: Any = None,
    debug: bool = False,
) -> CompletionProvider:
    """Factory to create providers by name.

    ``settings`` is only consulted for the OpenAI-backed providers. An explicit
    ``name`` wins over ``LLM_PROVIDER``; without one the configured provider is
    built.
    """

    if (name or "").strip().lower() in ECHO_PROVIDER_NAMES:
        return EchoCompletionProvider()
    requested = resolve_provider_kind(name)
    if settings is None:
        settings = get_settings(provider=requested)
    kind = requested or settings.LLM_PROVIDER
    return OpenAICompletionProvider(
        provider_kind=kind,
        api_key=(
            settings.AZURE_OPENAI_API_KEY
            if kind == "azure_openai"
            else settings.OPENAI_API_KEY
        ),
        azure_endpoint=settings.AZURE_OPENAI_ENDPOINT,
        azure_api_version=settings.AZURE_OPENAI_API_VERSION,
        azure_deployment=settings.AZURE_OPENAI_DEPLOYMENT_NAME,
        default_model=settings.SORI_MODEL,
        debug=debug or settings.SORI_PROVIDER_DEBUG,
    )
