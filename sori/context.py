"""Context extraction around a selected word."""

from __future__ import annotations

import logging
from typing import List, Optional

from .segmenter import normalize_whitespace, segment_sentences
from .structures import ContextResult, ContextType, Selection

logger = logging.getLogger(__name__)

MIN_SENTENCE_LENGTH = 10
MAX_SENTENCE_LENGTH = 500
WORDS_BEFORE = 5
WORDS_AFTER = 5


def find_sentence(text: str, word_index: int) -> Optional[str]:
    """Return the sentence holding ``word_index`` when its length is usable."""

    for span in segment_sentences(text):
        if span.start <= word_index < span.end:
            if MIN_SENTENCE_LENGTH <= len(span.text) <= MAX_SENTENCE_LENGTH:
                return span.text
            return None
    return None


def _locate_token(words: List[str], word_index: int) -> int:
    position = 0
    for index, token in enumerate(words):
        token_end = position + len(token)
        if position <= word_index < token_end:
            return index
        # One separator between tokens in normalized text.
        position = token_end + 1
    return -1


def surrounding_words(
    text: str,
    word_index: int,
    *,
    words_before: int = WORDS_BEFORE,
    words_after: int = WORDS_AFTER,
) -> str:
    """Return a window of whitespace tokens centred on the selection."""

    words = text.split()
    if not words:
        return ""

    target = _locate_token(words, word_index)
    if target == -1:
        estimated = int(word_index // (len(text) / len(words)))
        target = max(0, min(estimated, len(words) - 1))

    start = max(0, target - words_before)
    end = min(len(words), target + words_after + 1)
    return " ".join(words[start:end])


def _selected_word(selection: Selection) -> str:
    word = getattr(selection, "word", None)
    return word.strip() if isinstance(word, str) else ""


def extract_context(selection: Selection) -> ContextResult:
    """Derive the smallest adequate context for a selected word.

    Falls back from the containing sentence to a window of surrounding words
    and finally to the bare word. Never raises: unexpected failures produce an
    ``error_fallback`` result carrying the word alone.
    """

    selected = _selected_word(selection)
    try:
        full_text = normalize_whitespace(selection.container_text)
        word_index = full_text.lower().find(selected.lower()) if selected else -1

        if word_index == -1:
            return ContextResult(
                selected_word=selected,
                context=selected,
                context_type=ContextType.WORD_ONLY,
            )

        sentence = find_sentence(full_text, word_index)
        if sentence is not None:
            return ContextResult(
                selected_word=selected,
                context=sentence,
                context_type=ContextType.SENTENCE,
                full_text=full_text,
            )

        return ContextResult(
            selected_word=selected,
            context=surrounding_words(full_text, word_index),
            context_type=ContextType.SURROUNDING_WORDS,
            full_text=full_text,
        )
    except Exception:
        logger.exception("Context extraction failed for %r", selected)
        return ContextResult(
            selected_word=selected,
            context=selected,
            context_type=ContextType.ERROR_FALLBACK,
        )
