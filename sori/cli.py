"""Command line interface for the Sori translator."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Iterable, Optional

from .configuration import ECHO_PROVIDER_NAMES, SoriConfig, get_settings
from .context import extract_context
from .errors import (
    InvalidSelectionError,
    ProviderConfigurationError,
    ProviderError,
    SoriError,
    UnsupportedLanguageError,
)
from .languages import detect_page_language
from .providers import build_provider
from .structures import ContextResult, LookupMode, Selection
from .translator import DefinitionResult, SelectionTranslator, TranslationResult

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_PROVIDER = 2


def _add_provider_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p",
        "--provider",
        help="Completion provider identifier (openai, azure_openai, echo).",
    )
    parser.add_argument(
        "-m",
        "--model",
        help="Provider-specific model or deployment identifier.",
    )
    parser.add_argument(
        "--debug-provider",
        action="store_true",
        help="Log complete provider requests and responses for troubleshooting.",
    )


def _add_context_options(parser: argparse.ArgumentParser, *, required: bool) -> None:
    group = parser.add_mutually_exclusive_group(required=required)
    group.add_argument(
        "-c",
        "--context",
        help="Text of the block the selection was taken from.",
    )
    group.add_argument(
        "--context-file",
        help="Read the surrounding block of text from a file.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sori",
        description="Translate or define highlighted text with a language model.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress information.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    translate = commands.add_parser(
        "translate", help="Translate a selection, using its context for single words."
    )
    translate.add_argument("text", help="The selected text.")
    translate.add_argument(
        "-t",
        "--target-language",
        help="Destination language code (default from SORI_DEFAULT_TARGET_LANGUAGE).",
    )
    _add_context_options(translate, required=False)
    _add_provider_options(translate)

    define = commands.add_parser("define", help="Look up a single word.")
    define.add_argument("word", help="The selected word.")
    define.add_argument(
        "--bilingual",
        action="store_true",
        help="Define the word in the target language instead of its own.",
    )
    define.add_argument(
        "-t",
        "--target-language",
        help="Definition language for bilingual lookups.",
    )
    define.add_argument(
        "--page-language",
        default="en",
        help="Language tag of the page the word came from (default: en).",
    )
    define.add_argument(
        "-c",
        "--context",
        help="Text surrounding the word, used to detect its language.",
    )
    _add_provider_options(define)

    context = commands.add_parser(
        "context", help="Show the context that would accompany a selected word."
    )
    context.add_argument("word", help="The selected word.")
    _add_context_options(context, required=True)

    return parser


def read_context(args: argparse.Namespace) -> str | None:
    """Return the container text supplied inline or through a file."""

    if getattr(args, "context_file", None):
        path = pathlib.Path(args.context_file).expanduser()
        return path.read_text(encoding="utf-8")
    return getattr(args, "context", None)


def build_translator(
    args: argparse.Namespace, settings: SoriConfig | None
) -> SelectionTranslator:
    provider = build_provider(
        args.provider,
        settings=settings,
        debug=args.debug_provider,
    )
    if settings is None:
        return SelectionTranslator(provider, model=args.model)
    return SelectionTranslator(
        provider,
        model=args.model,
        timeout=settings.SORI_REQUEST_TIMEOUT,
        max_words=settings.SORI_MAX_WORDS,
        default_target_language=settings.SORI_DEFAULT_TARGET_LANGUAGE,
    )


def execute_lookup(
    args: argparse.Namespace,
    settings: SoriConfig | None,
) -> tuple[int, TranslationResult | DefinitionResult | None, str | None]:
    """Execute a lookup and return the exit code, result, and message."""

    try:
        container_text = read_context(args)
    except OSError as exc:
        return EXIT_USAGE, None, f"Context file could not be read: {exc}"

    try:
        translator = build_translator(args, settings)
        if args.command == "translate":
            result: TranslationResult | DefinitionResult = translator.translate(
                args.text,
                container_text=container_text,
                target_language=args.target_language,
            )
        else:
            result = translator.define(
                args.word,
                mode=(
                    LookupMode.BILINGUAL_DICTIONARY
                    if args.bilingual
                    else LookupMode.DICTIONARY
                ),
                target_language=args.target_language,
                page_language=detect_page_language(args.page_language),
                context=container_text,
            )
    except (InvalidSelectionError, UnsupportedLanguageError) as exc:
        return EXIT_USAGE, None, str(exc)
    except ProviderConfigurationError as exc:
        return EXIT_USAGE, None, str(exc)
    except ProviderError as exc:
        return EXIT_PROVIDER, None, str(exc)
    except SoriError as exc:
        return EXIT_USAGE, None, str(exc)

    return EXIT_OK, result, None


def print_result(result: TranslationResult | DefinitionResult) -> None:
    """Output the answer followed by a short report."""

    if isinstance(result, TranslationResult):
        print(result.translation)
        print(f"  Target language: {result.target_language_name} ({result.target_language})")
        print(f"  Words:           {result.word_count}")
        if result.contextual and result.context_type is not None:
            print(f"  Context type:    {result.context_type.value}")
            print(f"  Context:         {result.context}")
        return

    print(result.definition)
    print(f"  Dictionary:      {result.dictionary_type}")
    print(f"  Language:        {result.language_name} ({result.language})")


def print_context(context: ContextResult) -> None:
    print(context.context)
    print(f"  Selected word:   {context.selected_word}")
    print(f"  Context type:    {context.context_type.value}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "context":
        try:
            container_text = read_context(args)
        except OSError as exc:
            print(f"Context file could not be read: {exc}")
            return EXIT_USAGE
        print_context(
            extract_context(Selection(word=args.word, container_text=container_text))
        )
        return EXIT_OK

    settings: SoriConfig | None = None
    if (args.provider or "").strip().lower() not in ECHO_PROVIDER_NAMES:
        try:
            settings = get_settings(provider=args.provider)
        except ProviderConfigurationError as exc:
            print(exc)
            return EXIT_USAGE

    exit_code, result, message = execute_lookup(args, settings)
    if message:
        print(message)
    if result:
        print_result(result)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
