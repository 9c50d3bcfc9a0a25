"""High-level orchestration of selection lookups."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .context import extract_context
from .errors import InvalidSelectionError
from .languages import DEFAULT_LANGUAGE, LANGUAGE_NAMES, language_name
from .normalizer import normalize_definition, normalize_translation
from .prompts import (
    bilingual_dictionary_prompt,
    contextual_prompt,
    monolingual_dictionary_prompt,
    translation_prompt,
)
from .providers import DEFAULT_TIMEOUT, CompletionProvider
from .structures import ContextType, LookupMode, Prompt, Selection

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class TranslationResult:
    """Report returned after translating a selection."""

    translation: str
    word_count: int
    target_language: str
    target_language_name: str
    contextual: bool = False
    original_word: Optional[str] = None
    context: Optional[str] = None
    context_type: Optional[ContextType] = None
    timestamp: str = field(default_factory=_timestamp)


@dataclass
class DefinitionResult:
    """Report returned after a dictionary lookup."""

    definition: str
    word: str
    mode: LookupMode
    dictionary_type: str
    language: str
    language_name: str
    detected_from_context: bool = False
    timestamp: str = field(default_factory=_timestamp)


class SelectionGate:
    """Drops empty selections and repeats of the previous selection."""

    def __init__(self) -> None:
        self._last_selection = ""

    def should_process(self, text: str) -> bool:
        selected = text.strip()
        if not selected or selected == self._last_selection:
            return False
        self._last_selection = selected
        return True

    def reset(self) -> None:
        self._last_selection = ""


class SelectionTranslator:
    """Coordinates context extraction, prompting, and reply cleanup."""

    def __init__(
        self,
        provider: CompletionProvider,
        *,
        model: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_words: int = 50,
        default_target_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.provider = provider
        self.model = model
        self.timeout = timeout
        self.max_words = max_words
        self.default_target_language = default_target_language

    def translate(
        self,
        text: str,
        *,
        container_text: str | None = None,
        target_language: str | None = None,
    ) -> TranslationResult:
        """Translate a selection, using its surroundings when it is one word."""

        selected = text.strip()
        words = selected.split()
        if not words:
            raise InvalidSelectionError("Nothing was selected.", word_count=0)
        if len(words) > self.max_words:
            raise InvalidSelectionError(
                f"Please select at most {self.max_words} words.",
                word_count=len(words),
            )

        target = target_language or self.default_target_language
        target_name = language_name(target)

        if len(words) == 1 and container_text is not None:
            context = extract_context(Selection(word=selected, container_text=container_text))
            logger.info(
                "Context for %r: %s", context.selected_word, context.context_type.value
            )
            if context.is_contextual:
                raw = self._complete(
                    contextual_prompt(
                        context.selected_word,
                        context.context,
                        context.context_type,
                        target_name,
                    )
                )
                return TranslationResult(
                    translation=normalize_translation(raw, target, context.selected_word),
                    word_count=1,
                    target_language=target,
                    target_language_name=target_name,
                    contextual=True,
                    original_word=context.selected_word,
                    context=context.context,
                    context_type=context.context_type,
                )

        raw = self._complete(translation_prompt(selected, target_name))
        return TranslationResult(
            translation=normalize_translation(raw, target, selected),
            word_count=len(words),
            target_language=target,
            target_language_name=target_name,
        )

    def define(
        self,
        word: str,
        *,
        mode: LookupMode | str = LookupMode.DICTIONARY,
        target_language: str | None = None,
        page_language: str = DEFAULT_LANGUAGE,
        context: str | None = None,
    ) -> DefinitionResult:
        """Look up a single word in monolingual or bilingual dictionary mode."""

        lookup_mode = LookupMode(mode)
        if lookup_mode is LookupMode.TRANSLATION:
            raise InvalidSelectionError("Dictionary lookups need a dictionary mode.")

        selected = word.strip()
        word_count = len(selected.split())
        if word_count != 1:
            raise InvalidSelectionError(
                "Dictionary mode only works with single words.",
                word_count=word_count,
            )

        prompt: Prompt
        if lookup_mode is LookupMode.BILINGUAL_DICTIONARY:
            if not target_language:
                raise InvalidSelectionError(
                    "A target language is required for bilingual dictionary lookups."
                )
            language = target_language
            name = language_name(language)
            prompt = bilingual_dictionary_prompt(selected, name, context)
            dictionary_type = "bilingual"
        else:
            language = page_language
            name = LANGUAGE_NAMES.get(page_language, LANGUAGE_NAMES[DEFAULT_LANGUAGE])
            prompt = monolingual_dictionary_prompt(selected, name, context)
            dictionary_type = "monolingual"

        raw = self._complete(prompt)
        return DefinitionResult(
            definition=normalize_definition(raw),
            word=selected,
            mode=lookup_mode,
            dictionary_type=dictionary_type,
            language=language,
            language_name=name,
            detected_from_context=bool(context),
        )

    def _complete(self, prompt: Prompt) -> str:
        return self.provider.complete(prompt, model=self.model, timeout=self.timeout)
