"""Base prompt strategy.

This module defines the abstract base class for chunk prompt strategies.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models.prompt import Message, PromptBundle, PromptKind

SYSTEM_PROMPT = (
    "You are a professional bilingual literary editor. "
    "Always respond with valid JSON only."
)

# Structured output is requested on every call
JSON_RESPONSE_FORMAT = {"type": "json_object"}


def format_paragraphs(paragraphs: Sequence[str]) -> str:
    """Render paragraphs as numbered blocks, preserving order."""
    return "\n\n".join(
        f"# Paragraph {i}\n{paragraph}" for i, paragraph in enumerate(paragraphs, start=1)
    )


class PromptStrategy(ABC):
    """Abstract base class for chunk prompt strategies.

    Each strategy owns one request variant: it renders the user prompt for a
    chunk and wraps it with the shared system prompt and model parameters.
    """

    kind: PromptKind

    @abstractmethod
    def render(self, paragraphs: Sequence[str]) -> str:
        """Render the user prompt for a chunk's paragraphs."""
        pass

    def build(self, paragraphs: Sequence[str]) -> PromptBundle:
        """Build prompt bundle for a chunk.

        Args:
            paragraphs: The chunk's source paragraphs, in order

        Returns:
            PromptBundle ready for LLM call
        """
        user_prompt = self.render(paragraphs)
        return PromptBundle(
            messages=[
                Message(role="system", content=SYSTEM_PROMPT),
                Message(role="user", content=user_prompt),
            ],
            max_tokens=8192,
            response_format=JSON_RESPONSE_FORMAT,
            kind=self.kind,
            paragraph_count=len(paragraphs),
            estimated_input_tokens=self.estimate_tokens(SYSTEM_PROMPT + user_prompt),
        )

    def estimate_tokens(self, text: str) -> int:
        """Estimate token count for text.

        Uses a simple heuristic based on character count.
        """
        # Rough estimate: ~4 chars per token for English, ~2 for Chinese
        # Use average of 3 for mixed content
        return len(text) // 3
