"""Shared LLM-related request schemas."""

from typing import Optional

from pydantic import BaseModel

from editorial.core.llm.runtime_config import LLMConfigOverride


class LLMConfigMixin(BaseModel):
    """Mixin for optional per-request LLM overrides.

    Anything left unset falls back to the server settings, so a client
    normally sends none of these.
    """

    model: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None

    def to_override(self) -> LLMConfigOverride:
        return LLMConfigOverride(
            api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
        )
