"""LLM configuration package.

The actual provider calls go through
``editorial.core.translation.pipeline.llm_gateway``.
"""

from .runtime_config import (
    LLMConfigOverride,
    LLMConfigResolver,
    LLMRuntimeConfig,
    resolve_llm_config,
)

__all__ = [
    "LLMConfigOverride",
    "LLMConfigResolver",
    "LLMRuntimeConfig",
    "resolve_llm_config",
]
