"""Supported languages and page-language detection."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .errors import UnsupportedLanguageError

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "en": "English",
        "es": "Spanish",
        "fr": "French",
        "de": "German",
        "zh": "Simplified Chinese",
        "zh-tw": "Traditional Chinese",
        "ja": "Japanese",
        "ko": "Korean",
        "pt": "Portuguese",
        "ar": "Arabic",
        "hi": "Hindi",
        "it": "Italian",
        "ru": "Russian",
        "ro": "Romanian",
    }
)


def is_supported(code: str | None) -> bool:
    return code in LANGUAGE_NAMES


def language_name(code: str) -> str:
    """Return the display name for a supported language code."""

    try:
        return LANGUAGE_NAMES[code]
    except KeyError:
        raise UnsupportedLanguageError(code, sorted(LANGUAGE_NAMES)) from None


def resolve_language_tag(tag: str) -> str:
    """Reduce a BCP-47 tag such as ``en-US`` or ``zh-Hant`` to a language code."""

    lowered = tag.strip().lower()
    if "tw" in lowered or "hant" in lowered:
        return "zh-tw"
    return lowered.split("-")[0]


def detect_page_language(
    html_lang: Optional[str],
    navigator_lang: Optional[str] = None,
) -> str:
    """Choose the language of a page from its ``lang`` attribute.

    The browser language is consulted only when the page declares a language
    that is not supported. Anything else falls back to English.
    """

    if not html_lang:
        return DEFAULT_LANGUAGE

    code = resolve_language_tag(html_lang)
    if is_supported(code):
        return code

    if navigator_lang:
        code = resolve_language_tag(navigator_lang)
        if is_supported(code):
            return code

    return DEFAULT_LANGUAGE
