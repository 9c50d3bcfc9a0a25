"""Cleanup of free-form model replies into a single display string."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from .validator import validate_translation


@dataclass(frozen=True)
class CleanupRule:
    """A pattern and its replacement, applied at most once."""

    pattern: re.Pattern[str]
    replacement: str = ""

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text, count=1)


def _label(expression: str) -> CleanupRule:
    return CleanupRule(re.compile(rf"^{expression}:\s*", re.IGNORECASE))


LABELLED_LANGUAGES: Tuple[str, ...] = (
    "English",
    "French",
    "Korean",
    "Chinese",
    "Japanese",
    "Spanish",
    "German",
    "Italian",
    "Portuguese",
    "Russian",
    "Arabic",
    "Hindi",
    "Indonesian",
    "Romanian",
)

# Leading text on the first line up to a colon that is followed by whitespace.
GENERIC_LABEL_RULE = CleanupRule(re.compile(r"^[^:\n]*:\s+"))

TRANSLATION_PREFIX_RULES: Tuple[CleanupRule, ...] = (
    _label("Translation"),
    _label("Interpretation"),
    _label(r"In\s+\w+"),
    *(_label(name) for name in LABELLED_LANGUAGES),
    _label(r"The\s+translation\s+is"),
    _label(r"Here\s+is\s+the\s+translation"),
    GENERIC_LABEL_RULE,
)

DEFINITION_PREFIX_RULES: Tuple[CleanupRule, ...] = (
    _label("Definition"),
    _label("Meaning"),
    _label("Dictionary"),
    GENERIC_LABEL_RULE,
)

TRAILING_NOTE_RULES: Tuple[CleanupRule, ...] = (
    CleanupRule(re.compile(r"\s*\([^)]*\)\s*$")),
    CleanupRule(re.compile(r"\s*\[[^\]]*\]\s*$")),
)

LINE_BREAKS = re.compile(r"\n+")
METADATA_LINE = re.compile(
    r"^(Translation|Interpretation|Note|Explanation):", re.IGNORECASE
)
PARENTHETICAL_LINE = re.compile(r"^\(.+\)$")
QUOTE_CHARACTERS = ('"', "'")

LinePredicate = Callable[[str], bool]

ANSWER_LINE_PREDICATES: Tuple[LinePredicate, ...] = (
    bool,
    lambda line: METADATA_LINE.match(line) is None,
    lambda line: PARENTHETICAL_LINE.match(line) is None,
    lambda line: len(line) > 2,
)


def apply_rules(text: str, rules: Iterable[CleanupRule]) -> str:
    """Run each rule once, in order, against the current text."""

    for rule in rules:
        text = rule.apply(text)
    return text


def is_answer_line(
    line: str, predicates: Sequence[LinePredicate] = ANSWER_LINE_PREDICATES
) -> bool:
    return all(predicate(line) for predicate in predicates)


def first_answer_line(text: str) -> Optional[str]:
    """Return the first substantive line of a multi-line reply."""

    lines = LINE_BREAKS.split(text)
    if len(lines) <= 1:
        return None
    candidates = (line.strip() for line in lines)
    return next(filter(is_answer_line, candidates), None)


def strip_wrapping_quotes(text: str) -> str:
    if len(text) >= 2:
        for quote in QUOTE_CHARACTERS:
            if text.startswith(quote) and text.endswith(quote):
                return text[1:-1]
    return text


def clean_response(raw: str) -> str:
    """Apply the translation cleanup stages that precede validation."""

    cleaned = apply_rules(raw.strip(), TRANSLATION_PREFIX_RULES)
    answer = first_answer_line(cleaned)
    if answer is not None:
        cleaned = answer
    cleaned = apply_rules(cleaned, TRAILING_NOTE_RULES)
    return strip_wrapping_quotes(cleaned)


def normalize_translation(
    raw: str,
    target_language: str,
    original_text: str,
) -> str:
    """Reduce a translation reply to a single clean answer."""

    cleaned = clean_response(raw)
    cleaned = validate_translation(cleaned, original_text, target_language)
    return cleaned.strip()


def normalize_definition(raw: str) -> str:
    """Strip dictionary labels from a definition reply."""

    return apply_rules(raw.strip(), DEFINITION_PREFIX_RULES).strip()
