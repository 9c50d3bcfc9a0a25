"""Best-effort patches for translations the model failed to produce."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from .segmenter import contains_hangul

logger = logging.getLogger(__name__)

SHORT_TOKEN_FALLBACKS: Mapping[str, str] = MappingProxyType(
    {
        "전": "former",
        "후": "after",
        "중": "during",
        "내": "my",
        "외": "foreign",
        "상": "top",
        "하": "bottom",
        "좌": "left",
        "우": "right",
    }
)

ROMANIZED_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "윤석열": "Yoon Suk-yeol",
        "문재인": "Moon Jae-in",
        "박근혜": "Park Geun-hye",
        "이명박": "Lee Myung-bak",
        "김정은": "Kim Jong-un",
        "김일성": "Kim Il-sung",
    }
)


def validate_translation(
    candidate: str,
    original_input: str,
    target_language: str,
) -> str:
    """Substitute known answers for translations that came back untranslated.

    An answer identical to its input is looked up in the short-token table.
    An English answer that still contains Hangul is looked up in the
    romanized-name table; misses are logged and passed through unchanged.
    Only Korean into English is covered.
    """

    if candidate == original_input:
        fallback = SHORT_TOKEN_FALLBACKS.get(original_input)
        if fallback is not None:
            return fallback

    if target_language == "en" and contains_hangul(candidate):
        romanized = ROMANIZED_NAMES.get(candidate)
        if romanized is not None:
            return romanized
        logger.warning("Untranslated Korean text detected: %s", candidate)

    return candidate
