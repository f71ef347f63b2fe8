"""Prompt engine with strategy pattern.

This module provides the PromptEngine class that routes a chunk to the
prompt strategy for its request variant.
"""

from typing import Any, Dict, Sequence, Type

from ..models.prompt import PromptBundle, PromptKind
from ..strategies import (
    PromptStrategy,
    FullAnalysisStrategy,
    TranslationOnlyStrategy,
)
from .chunker import Chunk


class PromptEngine:
    """Factory and router for prompt strategies.

    The first chunk of a document always gets the full prompt; every other
    chunk gets the translation-only prompt.
    """

    # Strategy registry: kind -> strategy class
    _strategies: Dict[PromptKind, Type[PromptStrategy]] = {
        PromptKind.FULL: FullAnalysisStrategy,
        PromptKind.TRANSLATION_ONLY: TranslationOnlyStrategy,
    }

    @classmethod
    def get_strategy(cls, kind: PromptKind) -> PromptStrategy:
        """Get strategy instance for a prompt variant.

        Raises:
            ValueError: If no strategy is registered for the variant
        """
        strategy_class = cls._strategies.get(kind)
        if not strategy_class:
            raise ValueError(f"No strategy registered for prompt kind: {kind}")
        return strategy_class()

    @staticmethod
    def kind_for(chunk: Chunk) -> PromptKind:
        return PromptKind.FULL if chunk.index == 0 else PromptKind.TRANSLATION_ONLY

    @classmethod
    def build(cls, kind: PromptKind, paragraphs: Sequence[str]) -> PromptBundle:
        """Build prompt bundle for a prompt variant and paragraph sequence."""
        return cls.get_strategy(kind).build(paragraphs)

    @classmethod
    def build_for_chunk(cls, chunk: Chunk) -> PromptBundle:
        """Build prompt bundle for a chunk based on its position."""
        return cls.build(cls.kind_for(chunk), chunk.paragraphs)

    @classmethod
    def preview(cls, chunk: Chunk) -> Dict[str, Any]:
        """Generate a preview of the prompts without making an LLM call."""
        return cls.build_for_chunk(chunk).to_preview_dict()
