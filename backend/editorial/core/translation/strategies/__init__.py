"""Chunk prompt strategies.

This module provides strategy classes for the two request variants.
Each strategy encapsulates the prompt building logic for its variant.
"""

from .base import PromptStrategy, SYSTEM_PROMPT, format_paragraphs
from .full_analysis import FullAnalysisStrategy, build_full_prompt
from .translation_only import TranslationOnlyStrategy, build_translation_only_prompt

__all__ = [
    "PromptStrategy",
    "SYSTEM_PROMPT",
    "format_paragraphs",
    "FullAnalysisStrategy",
    "TranslationOnlyStrategy",
    "build_full_prompt",
    "build_translation_only_prompt",
]
