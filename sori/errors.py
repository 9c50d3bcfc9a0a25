"""Error definitions for the Sori translator."""

from __future__ import annotations

from typing import Sequence


class SoriError(Exception):
    """Base exception for all custom errors."""


class ProviderConfigurationError(SoriError):
    """Raised when the completion provider is misconfigured."""


class ProviderError(SoriError):
    """Raised when the completion provider fails."""


class ProviderAuthenticationError(ProviderError):
    """Raised when the provider rejects the configured credentials."""


class ProviderRateLimitError(ProviderError):
    """Raised when the provider reports that its rate limit was exceeded."""


class ProviderTimeoutError(ProviderError):
    """Raised when the provider does not answer within the request timeout."""


class UnsupportedLanguageError(SoriError):
    """Raised when a target language is not in the supported set."""

    def __init__(self, code: str | None, supported: Sequence[str]) -> None:
        self.code = code
        self.supported = list(supported)
        super().__init__(
            f"Target language '{code}' is not supported. "
            f"Choose one of: {', '.join(self.supported)}."
        )


class InvalidSelectionError(SoriError):
    """Raised when a selection cannot be used for the requested lookup."""

    def __init__(self, message: str, *, word_count: int | None = None) -> None:
        self.word_count = word_count
        super().__init__(message)
