from __future__ import annotations

import pytest

from sori.normalizer import (
    TRANSLATION_PREFIX_RULES,
    apply_rules,
    first_answer_line,
    normalize_definition,
    normalize_translation,
    strip_wrapping_quotes,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('Translation: "Bonjour"', "Bonjour"),
        ("In French: bonjour (a greeting)", "bonjour"),
        ("  Here is the translation: Hola  ", "Hola"),
        ("The translation is: Hallo", "Hallo"),
        ("interpretation:salut", "salut"),
        ("French: merci [informal]", "merci"),
        ("'Ciao'", "Ciao"),
        ("Best rendering here: bonheur", "bonheur"),
        ("Meet at 12:30", "Meet at 12:30"),
        ("Bonjour\nNote: This is a greeting.", "Bonjour"),
        ("(informal)\nSalut", "Salut"),
        ("Translation:\nHola\nExplanation: a greeting", "Hola"),
        ("\n\nGuten Tag\n\n(formal)", "Guten Tag"),
    ],
)
def test_normalize_translation_cleans_reply(raw: str, expected: str) -> None:
    assert normalize_translation(raw, "fr", "hello") == expected


def test_normalize_translation_keeps_text_when_no_line_qualifies() -> None:
    assert normalize_translation("ok\nno", "fr", "hello") == "ok\nno"


def test_prefix_rules_apply_in_order_to_current_text() -> None:
    # The language label comes first here, so only later rules can see the
    # "Translation:" that it exposes.
    assert apply_rules("English: Translation: hi", TRANSLATION_PREFIX_RULES) == "hi"


def test_first_answer_line_single_line_is_none() -> None:
    assert first_answer_line("Bonjour") is None


def test_first_answer_line_skips_metadata_and_short_lines() -> None:
    text = "Note: literal\nok\n(aside)\nBonsoir\nAu revoir"
    assert first_answer_line(text) == "Bonsoir"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('"quoted"', "quoted"),
        ("'quoted'", "quoted"),
        ('"mixed\'', '"mixed\''),
        ('"', '"'),
        ('""', ""),
    ],
)
def test_strip_wrapping_quotes(text: str, expected: str) -> None:
    assert strip_wrapping_quotes(text) == expected


def test_normalize_translation_applies_korean_fallback() -> None:
    assert normalize_translation('"전"', "en", "전") == "former"


def test_normalize_translation_romanizes_known_name() -> None:
    assert normalize_translation("English: 윤석열", "en", "윤석열") == "Yoon Suk-yeol"


@pytest.mark.parametrize(
    "raw",
    [
        'Translation: "Bonjour"',
        "In French: bonjour (a greeting)",
        "Bonjour\nNote: This is a greeting.",
        "Meet at 12:30",
        "ok\nno",
    ],
)
def test_normalize_translation_is_stable_on_clean_output(raw: str) -> None:
    once = normalize_translation(raw, "fr", "hello")
    assert normalize_translation(once, "fr", "hello") == once


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Definition: A feeling of joy.", "A feeling of joy."),
        ("meaning: to run quickly", "to run quickly"),
        ("  Dictionary:   happiness ", "happiness"),
        ("Sense 1: the act of running", "the act of running"),
        ("noun. A greeting used in the morning", "noun. A greeting used in the morning"),
    ],
)
def test_normalize_definition(raw: str, expected: str) -> None:
    assert normalize_definition(raw) == expected
