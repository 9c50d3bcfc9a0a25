"""Prompt construction for translation and dictionary lookups."""

from __future__ import annotations

from typing import Optional

from .structures import ContextType, Prompt

OUTPUT_RULES = (
    "OUTPUT RULES:\n"
    "- ONLY respond with the {language} {subject}\n"
    "- NO explanations, prefixes, or metadata\n"
    '- NO phrases like "Translation:" or "In English:"\n'
    "{extra}"
    "- Return ONLY the clean {subject} in {language}"
)


def translation_prompt(text: str, target_name: str) -> Prompt:
    """Prompt for translating free text or a word without usable context."""

    system = (
        f"You are a professional translator. Your task is to translate text to "
        f"{target_name}. Follow these rules strictly:\n\n"
        "CRITICAL REQUIREMENTS:\n"
        f"1. ALWAYS translate to {target_name} - NEVER return text in the source language\n"
        f"2. For proper nouns (names, places): provide the standard romanized form in {target_name}\n"
        '3. For Korean names like "윤석열": return "Yoon Suk-yeol" (not the Hangul)\n'
        '4. For short words/particles like "전": translate the meaning ("former", "previous", etc.)\n'
        f"5. NEVER return untranslated Korean, Chinese, or other non-{target_name} text\n\n"
        + OUTPUT_RULES.format(
            language=target_name,
            subject="translation",
            extra="- NO parenthetical notes or alternatives\n",
        )
    )
    return Prompt(system=system, user=text)


def contextual_prompt(
    word: str,
    context: str,
    context_type: ContextType | str | None,
    target_name: str,
) -> Prompt:
    """Prompt for translating one word using its surrounding text."""

    kind = ContextType(context_type).value if context_type else "unknown"
    system = (
        "You are a professional translator specializing in contextual word "
        f"translation. Your task is to translate a specific word to {target_name} "
        "based on its context. Follow these rules strictly:\n\n"
        "CRITICAL REQUIREMENTS:\n"
        "1. You will receive a specific word and its surrounding context\n"
        f"2. Translate ONLY the specified word to {target_name} based on the context\n"
        "3. Consider grammar, usage, and context to provide the most appropriate translation\n"
        "4. For ambiguous words, use the context to determine the correct meaning\n"
        "5. NEVER return the entire context translated - only the word\n\n"
        "CONTEXTUAL ANALYSIS:\n"
        f"- Context type: {kind}\n"
        "- Analyze the grammatical role of the word in context\n"
        "- Consider idiomatic usage and collocations\n"
        "- Choose the most appropriate translation based on context\n\n"
        + OUTPUT_RULES.format(
            language=target_name,
            subject="translated word/phrase",
            extra=(
                "- If the word has multiple possible translations, choose the one "
                "that best fits the context\n"
            ),
        )
    )
    user = (
        f'Word to translate: "{word}"\n'
        f'Context: "{context}"\n\n'
        f'Translate only the word "{word}" to {target_name} based on its usage '
        "in the given context."
    )
    return Prompt(system=system, user=user)


def monolingual_dictionary_prompt(
    word: str,
    page_language_name: str,
    context: Optional[str] = None,
) -> Prompt:
    """Prompt for a definition written in the word's own language."""

    system = (
        "You are a monolingual dictionary that provides definitions in the same "
        "language as the input word. Follow these rules strictly:\n\n"
        "CRITICAL REQUIREMENTS:\n"
        "1. DETECT the language of the input word from the context provided\n"
        "2. Provide a concise definition in THE SAME LANGUAGE as the detected word\n"
        f"3. The page language ({page_language_name}) is a hint, but verify the "
        "word's actual language from context\n"
        f"4. For ambiguous words, prefer the page language ({page_language_name})\n"
        "5. NEVER translate to another language - define the word in its own language\n\n"
        "OUTPUT RULES:\n"
        "- ONLY respond with the definition in the SAME LANGUAGE as the input word\n"
        '- NO prefixes like "Definition:" or "Meaning:"\n'
        "- Keep definitions concise (1-2 sentences maximum)\n"
        "- For multiple meanings, show the most common one"
    )
    if context:
        user = (
            f'Word to define: "{word}"\n'
            f'Context: "{context}"\n\n'
            "Detect the language of the word from the context and provide a "
            "definition in that same language."
        )
    else:
        user = (
            f'Word to define: "{word}"\n'
            f"Page language hint: {page_language_name}\n\n"
            "Detect the language of the word and provide a definition in that "
            "same language."
        )
    return Prompt(system=system, user=user)


def bilingual_dictionary_prompt(
    word: str,
    target_name: str,
    context: Optional[str] = None,
) -> Prompt:
    """Prompt for a definition of a foreign word written in the target language."""

    system = (
        "You are a bilingual dictionary providing dictionary-style definitions. "
        "Follow these rules strictly:\n\n"
        "CRITICAL REQUIREMENTS:\n"
        "1. Detect the source language of the input word automatically (use "
        "context if provided)\n"
        f"2. Provide a dictionary-style definition/explanation in {target_name}\n"
        "3. This is NOT a simple translation - provide a proper dictionary definition\n"
        "4. Include the part of speech when relevant\n\n"
        "OUTPUT RULES:\n"
        f"- ONLY respond with the dictionary definition in {target_name}\n"
        '- NO prefixes like "Definition:" or "Meaning:"\n'
        "- Keep definitions concise but informative (2-3 sentences maximum)\n\n"
        "EXAMPLES:\n"
        "Input: \"bonjour\" → \"interjection. A French greeting meaning 'hello' "
        "or 'good day', commonly used when meeting someone\""
    )
    lines = [f'Word to define: "{word}"']
    if context:
        lines.append(f'Context: "{context}"')
    user = (
        "\n".join(lines)
        + f"\n\nProvide a dictionary-style definition in {target_name}."
    )
    return Prompt(system=system, user=user)
