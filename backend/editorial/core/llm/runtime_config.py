"""Unified LLM Runtime Configuration.

This module provides a single source of truth for LLM configuration that
flows from settings to the actual LLM call.

Key components:
- LLMRuntimeConfig: Complete configuration for a single LLM request
- LLMConfigOverride: Optional request-level parameter overrides
- LLMConfigResolver: Resolves configuration from settings and overrides
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from editorial.config import Settings, settings as default_settings
from editorial.core.errors import MissingCredentialError

logger = logging.getLogger(__name__)


@dataclass
class LLMRuntimeConfig:
    """Complete LLM configuration resolved for a single run."""

    # Connection parameters
    provider: str
    model: str
    api_key: str
    base_url: Optional[str] = None

    # Generation parameters
    temperature: float = 0.3
    max_tokens: int = 8192
    timeout: Optional[float] = None

    # Response format (for structured output)
    response_format: Optional[Dict[str, Any]] = None

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        provider_prefixes = {
            "openai": "",  # No prefix for OpenAI
            "anthropic": "anthropic/",
            "gemini": "gemini/",
            "qwen": "openai/",  # Qwen uses OpenAI-compatible API
            "deepseek": "deepseek/",
            "ollama": "ollama/",
            "openrouter": "openrouter/",
        }
        prefix = provider_prefixes.get(self.provider, f"{self.provider}/")

        if not prefix or self.model.startswith(prefix):
            return self.model
        return f"{prefix}{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "api_key": self.api_key,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        if self.base_url:
            kwargs["api_base"] = self.base_url

        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        if self.response_format:
            kwargs["response_format"] = self.response_format

        return kwargs

    def with_overrides(
        self,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> "LLMRuntimeConfig":
        """Create a copy with specific overrides applied."""
        return replace(
            self,
            temperature=temperature if temperature is not None else self.temperature,
            max_tokens=max_tokens if max_tokens is not None else self.max_tokens,
            response_format=(
                response_format if response_format is not None else self.response_format
            ),
        )


@dataclass
class LLMConfigOverride:
    """Optional overrides that can be passed from a caller.

    These have the highest priority and override the settings values.
    """

    api_key: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class LLMConfigResolver:
    """Resolves LLM configuration from settings.

    Resolution priority (highest to lowest):
    1. Caller override (LLMConfigOverride)
    2. Settings / environment variables
    """

    # Default endpoints for providers LiteLLM routes through OpenAI-compatible APIs
    PROVIDER_BASE_URLS = {
        "qwen": "https://dashscope.aliyuncs.com/compatible-mode/v1",
    }

    @classmethod
    def resolve(
        cls,
        settings: Optional[Settings] = None,
        *,
        override: Optional[LLMConfigOverride] = None,
    ) -> LLMRuntimeConfig:
        """Resolve complete LLM configuration.

        Raises:
            MissingCredentialError: If no usable API key is configured
        """
        settings = settings or default_settings
        override = override or LLMConfigOverride()

        provider = settings.llm_provider.lower()
        api_key = (override.api_key or "").strip() or settings.get_api_key(provider)
        if not api_key:
            raise MissingCredentialError()

        runtime_config = LLMRuntimeConfig(
            provider=provider,
            model=override.model or settings.llm_model,
            api_key=api_key,
            base_url=settings.llm_base_url or cls.PROVIDER_BASE_URLS.get(provider),
            temperature=(
                override.temperature
                if override.temperature is not None
                else settings.llm_temperature
            ),
            max_tokens=override.max_tokens or settings.llm_max_tokens,
            timeout=settings.llm_request_timeout,
        )

        logger.info(
            f"Resolved LLM config: provider={runtime_config.provider}, "
            f"model={runtime_config.model}, base_url={runtime_config.base_url}"
        )
        return runtime_config


def resolve_llm_config(
    settings: Optional[Settings] = None,
    *,
    override: Optional[LLMConfigOverride] = None,
) -> LLMRuntimeConfig:
    """Convenience function to resolve LLM configuration."""
    return LLMConfigResolver.resolve(settings, override=override)
