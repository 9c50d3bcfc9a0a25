"""Core data structures for the Sori translator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ContextType(str, Enum):
    """How much surrounding text could be recovered for a selection."""

    WORD_ONLY = "word_only"
    SENTENCE = "sentence"
    SURROUNDING_WORDS = "surrounding_words"
    ERROR_FALLBACK = "error_fallback"


class LookupMode(str, Enum):
    """Lookup modes offered to the user."""

    TRANSLATION = "translation"
    DICTIONARY = "dictionary"
    BILINGUAL_DICTIONARY = "bilingual_dictionary"


@dataclass(frozen=True)
class Selection:
    """A selected token and the raw text of its enclosing block."""

    word: str
    container_text: Optional[str]


@dataclass(frozen=True)
class SentenceSpan:
    """A sentence located inside normalized text."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class ContextResult:
    """Context recovered for a selected word."""

    selected_word: str
    context: str
    context_type: ContextType
    full_text: Optional[str] = None

    @property
    def is_contextual(self) -> bool:
        return self.context_type in (
            ContextType.SENTENCE,
            ContextType.SURROUNDING_WORDS,
        )


@dataclass(frozen=True)
class Prompt:
    """System and user messages sent to a completion provider."""

    system: str
    user: str
