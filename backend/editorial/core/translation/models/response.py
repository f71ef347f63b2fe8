"""Gateway reply models."""

from pydantic import BaseModel, Field


class TokenUsage(BaseModel):
    """Token counts reported by the provider, zero when it reports none."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class LLMResponse(BaseModel):
    """Text returned for one chunk request, with call accounting for logs."""

    content: str
    provider: str
    model: str
    usage: TokenUsage = Field(default_factory=TokenUsage)
    latency_ms: int = 0
