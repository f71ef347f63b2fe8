"""Prompt bundle models.

This module defines the prompt data structures that are passed to LLM providers,
providing a unified interface for different provider formats.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PromptKind(str, Enum):
    """Which request variant a chunk is sent with."""

    FULL = "full"  # translation + title/author + analysis
    TRANSLATION_ONLY = "translation_only"


class Message(BaseModel):
    """Single message in LLM conversation."""

    role: str = Field(
        ..., description="Message role: 'system', 'user', or 'assistant'"
    )
    content: str = Field(..., description="Message content")


class PromptBundle(BaseModel):
    """Complete prompt package ready for LLM.

    This is the output of the PromptEngine and input to LLMGateway.
    """

    messages: List[Message] = Field(..., description="Conversation messages")

    # Model configuration
    # None defers to the runtime configuration
    temperature: Optional[float] = Field(
        default=None, ge=0.0, le=2.0, description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=8192, gt=0, description="Maximum tokens in response"
    )

    # Response format (for JSON mode)
    response_format: Optional[Dict[str, Any]] = Field(
        default=None, description="Response format specification"
    )

    # Metadata for logging and debugging
    kind: PromptKind = Field(default=PromptKind.FULL, description="Prompt variant")
    paragraph_count: int = Field(default=0, description="Paragraphs in the chunk")
    estimated_input_tokens: int = Field(
        default=0, description="Estimated input token count"
    )

    @property
    def system_prompt(self) -> Optional[str]:
        """Extract system prompt from messages."""
        for msg in self.messages:
            if msg.role == "system":
                return msg.content
        return None

    @property
    def user_prompt(self) -> Optional[str]:
        """Extract user prompt from messages."""
        for msg in self.messages:
            if msg.role == "user":
                return msg.content
        return None

    def to_openai_format(self) -> List[Dict[str, str]]:
        """Convert to OpenAI API message format."""
        return [{"role": m.role, "content": m.content} for m in self.messages]

    def to_preview_dict(self) -> Dict[str, Any]:
        """Convert to preview format for logging and the CLI."""
        return {
            "system_prompt": self.system_prompt,
            "user_prompt": self.user_prompt,
            "kind": self.kind.value,
            "paragraph_count": self.paragraph_count,
            "estimated_tokens": self.estimated_input_tokens,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
