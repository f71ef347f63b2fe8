"""Translation-only prompt for every chunk after the first."""

from typing import Sequence

from .base import PromptStrategy, format_paragraphs
from ..models.prompt import PromptKind


def build_translation_only_prompt(paragraphs: Sequence[str]) -> str:
    """Build the prompt that asks for the translation array only."""
    return f"""Translate the following English paragraphs into Chinese. Output JSON only, in exactly this format and nothing else. "translation" is an array of Chinese translations, one per input paragraph, in the same order ({len(paragraphs)} items). Do not echo the English:
{{
  "translation": ["中文1", "中文2", "..."]
}}

Paragraphs to translate (keep the order):
{format_paragraphs(paragraphs)}""".strip()


class TranslationOnlyStrategy(PromptStrategy):
    """Strategy for trailing chunks; no title, author or analysis."""

    kind = PromptKind.TRANSLATION_ONLY

    def render(self, paragraphs: Sequence[str]) -> str:
        return build_translation_only_prompt(paragraphs)
