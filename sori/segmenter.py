"""Whitespace normalization and sentence segmentation."""

from __future__ import annotations

import re
from typing import List

from .structures import SentenceSpan

SENTENCE_TERMINATORS = frozenset(".!?。！？।॥|‼⁇⁈⁉؟")
WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim the result."""

    return WHITESPACE_PATTERN.sub(" ", text).strip()


def contains_hangul(text: str) -> bool:
    """Detect Hangul compatibility jamo or precomposed syllables."""

    for char in text:
        code = ord(char)
        if (
            0x3131 <= code <= 0x318E  # Hangul compatibility jamo
            or 0xAC00 <= code <= 0xD7A3  # Hangul syllables
        ):
            return True
    return False


def segment_sentences(text: str) -> List[SentenceSpan]:
    """Split normalized text into sentence spans.

    Every terminator closes a span that starts at the previous boundary, so
    spans are ordered and contiguous. Text after the last terminator becomes a
    final unterminated span. Span offsets cover the raw slice; ``text`` holds
    the trimmed sentence.
    """

    spans: List[SentenceSpan] = []
    boundary = 0
    for index, char in enumerate(text):
        if char not in SENTENCE_TERMINATORS:
            continue
        end = index + 1
        sentence = text[boundary:end].strip()
        if sentence:
            spans.append(SentenceSpan(text=sentence, start=boundary, end=end))
        boundary = end

    if boundary < len(text):
        sentence = text[boundary:].strip()
        if sentence:
            spans.append(SentenceSpan(text=sentence, start=boundary, end=len(text)))

    return spans
