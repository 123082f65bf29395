"""Prompt strategy selection and prompt text construction.

Selections are classified by whitespace-delimited word count:

- 500 words or more: structured summary
- 5 to 499 words: exact translation
- fewer than 5 words: word/phrase explanation with context
"""

from __future__ import annotations

import re

from ..entities.prompt import PromptBundle, PromptStrategy

SUMMARY_MIN_WORDS = 500
TRANSLATION_MIN_WORDS = 5

# Target language that gets a phonetic hint and no romanization.
LOGOGRAPHIC_LANGUAGE = "Chinese"
SAMPLE_FALLBACK_LANGUAGE = "English"

_SAMPLE_STRIP_RE = re.compile(r"""[\s.,\-_'"!?()]""")

ALLOWED_TAGS = ("<p>", "<b>", "<i>", "<a>", "<li>", "<ol>", "<ul>")


def count_words(text: str) -> int:
    return len(text.split())


def classify(selected_text: str) -> PromptStrategy:
    """Pick the prompt strategy for a selection; first match wins."""
    words = count_words(selected_text)
    if words >= SUMMARY_MIN_WORDS:
        return PromptStrategy.SUMMARY
    if words >= TRANSLATION_MIN_WORDS:
        return PromptStrategy.TRANSLATION
    return PromptStrategy.EXPLAIN


def sample_sentence_language(selected_text: str, language: str) -> str:
    """Language for example sentences.

    Pure-ASCII selections get English examples regardless of the target
    language; anything else uses the target language.
    """
    stripped = _SAMPLE_STRIP_RE.sub("", selected_text)
    ascii_count = sum(1 for char in stripped if ord(char) <= 127)
    if ascii_count == len(stripped):
        return SAMPLE_FALLBACK_LANGUAGE
    return language


def build_system_prompt(language: str) -> str:
    return (
        f"Respond in {language} with HTML tags to improve readability.\n"
        "- Prioritize clarity and conciseness\n"
        "- Use bullet points when appropriate"
    )


def build_context_block(
    selected_text: str, paragraph_text: str, text_before: str, text_after: str
) -> str:
    """Labeled Before/Selected/After block, or the paragraph when both sides are empty."""
    if not (text_before or text_after):
        return paragraph_text
    return (
        "# Context:\n"
        "## Before selected text:\n"
        f"{text_before or 'None'}\n"
        "## Selected text:\n"
        f"{selected_text}\n"
        "## After selected text:\n"
        f"{text_after or 'None'}"
    )


def _summary_prompt(selected_text: str, language: str) -> str:
    return (
        f"Create a structured summary in {language}:\n"
        "- Identify key themes and concepts\n"
        "- Extract 3-5 main points\n"
        "- Use nested <ul> lists for hierarchy\n"
        "- Keep bullets concise\n"
        "\n"
        "for the following selected text:\n"
        "\n"
        f"{selected_text}\n"
    )


def _translation_prompt(selected_text: str, language: str) -> str:
    return (
        f"Translate exactly to {language} without commentary:\n"
        "- Preserve technical terms and names\n"
        "- Maintain original punctuation\n"
        "- Match formal/informal tone of source\n"
        "\n"
        "for the following selected text:\n"
        "\n"
        f"{selected_text}\n"
    )


def _explain_prompt(
    selected_text: str,
    paragraph_text: str,
    text_before: str,
    text_after: str,
    language: str,
) -> str:
    logographic = language == LOGOGRAPHIC_LANGUAGE
    ipa_hint = "(with IPA if necessary)" if logographic else ""
    romanization = " DO NOT add Pinyin for it." if logographic else ""
    sample_language = sample_sentence_language(selected_text, language)
    context = build_context_block(selected_text, paragraph_text, text_before, text_after)

    return (
        f'Provide an explanation for the word: "{selected_text}{ipa_hint}" '
        f"in {language} without commentary.{romanization}\n"
        "\n"
        "Use the context from the surrounding paragraph to inform your explanation when relevant:\n"
        "\n"
        f"{context}\n"
        "\n"
        "# Consider these scenarios:\n"
        "\n"
        "## Names\n"
        f'If "{selected_text}" is a person\'s name, company name, or organization name, '
        "provide a brief description (e.g., who they are or what they do).\n"
        "\n"
        "## Technical Terms\n"
        f'If "{selected_text}" is a technical term or jargon\n'
        "- give a concise definition and explain.\n"
        "- Some best practice of using it\n"
        "- Explain how it works.\n"
        "- No need example sentence for the technical term.\n"
        "\n"
        "## Normal Words\n"
        "- For any other word, explain its meaning and provide 1-2 example sentences "
        f"with the word in {sample_language}.\n"
        "\n"
        "# Format\n"
        "- Output the words first, then the explanation, and then the example sentences if necessary.\n"
        "- No extra explanation\n"
        f"- Remember to using proper html format like {' '.join(ALLOWED_TAGS)} to improve readability.\n"
    )


def build_prompt(
    selected_text: str,
    paragraph_text: str,
    text_before: str,
    text_after: str,
    language: str,
) -> PromptBundle:
    """Build the prompt and system prompt for a selection."""
    strategy = classify(selected_text)
    system_prompt = build_system_prompt(language)

    if strategy is PromptStrategy.SUMMARY:
        prompt = _summary_prompt(selected_text, language)
    elif strategy is PromptStrategy.TRANSLATION:
        prompt = _translation_prompt(selected_text, language)
    else:
        prompt = _explain_prompt(
            selected_text, paragraph_text, text_before, text_after, language
        )

    return PromptBundle(prompt=prompt, system_prompt=system_prompt, strategy=strategy)
