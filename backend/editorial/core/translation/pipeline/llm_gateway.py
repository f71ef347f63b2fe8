"""LLM Gateway for unified provider access.

This module provides an abstract gateway interface for LLM providers,
along with a unified implementation using LiteLLM. Provider failures are
translated into the run's error taxonomy here, so nothing above the
gateway sees provider-specific exceptions.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from litellm import acompletion
from litellm import exceptions as litellm_exceptions

from editorial.core.errors import AuthError, RateLimitError, ServiceError
from editorial.core.llm.runtime_config import LLMRuntimeConfig
from editorial.utils.text import safe_truncate
from ..models.prompt import PromptBundle
from ..models.response import LLMResponse, TokenUsage

logger = logging.getLogger(__name__)


class LLMGateway(ABC):
    """Abstract gateway for LLM providers.

    Given a prompt bundle, returns the raw response text after some latency.
    May raise AuthError, RateLimitError or ServiceError; never retries.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Get provider name."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Get model identifier."""
        pass

    @abstractmethod
    async def call(self, bundle: PromptBundle) -> LLMResponse:
        """Make an LLM call.

        Args:
            bundle: Prompt bundle with messages and configuration

        Returns:
            LLMResponse with content and metadata

        Raises:
            AuthError: Credential rejected
            RateLimitError: Provider throttling
            ServiceError: Any other failure
        """
        pass


class LiteLLMGateway(LLMGateway):
    """Unified Gateway for all providers using LiteLLM."""

    def __init__(self, config: LLMRuntimeConfig):
        """Initialize LiteLLM gateway.

        Args:
            config: Resolved runtime configuration (credential included)
        """
        self._config = config
        logger.info(
            f"[LLM Gateway] Initialized: provider={config.provider}, model={config.model}, "
            f"litellm_model={config.get_litellm_model()}, base_url={config.base_url}"
        )

    @property
    def provider(self) -> str:
        return self._config.provider

    @property
    def model(self) -> str:
        return self._config.model

    async def call(self, bundle: PromptBundle) -> LLMResponse:
        """Make LLM API call using LiteLLM."""
        start_time = time.time()

        kwargs = self._config.with_overrides(
            temperature=bundle.temperature,
            max_tokens=min(bundle.max_tokens, self._config.max_tokens),
            response_format=bundle.response_format,
        ).to_litellm_kwargs()
        kwargs["messages"] = bundle.to_openai_format()

        logger.info(
            f"[LLM Gateway] Calling LiteLLM: model={kwargs['model']}, "
            f"kind={bundle.kind.value}, paragraphs={bundle.paragraph_count}"
        )

        try:
            response = await acompletion(**kwargs)
        except litellm_exceptions.AuthenticationError as e:
            logger.error(f"LLM call rejected credential: model={self.model}, error={e}")
            raise AuthError(detail=safe_truncate(str(e), 500)) from e
        except litellm_exceptions.RateLimitError as e:
            logger.error(f"LLM call rate limited: model={self.model}, error={e}")
            raise RateLimitError(detail=safe_truncate(str(e), 500)) from e
        except Exception as e:
            logger.error(f"LLM call failed: model={self.model}, error={e}")
            raise ServiceError(
                self._provider_message(e), detail=safe_truncate(str(e), 500)
            ) from e

        choices = getattr(response, "choices", None)
        if not choices:
            logger.error(f"LLM call returned no choices: model={self.model}")
            raise ServiceError(detail="Provider response contained no choices")

        latency_ms = int((time.time() - start_time) * 1000)
        usage = getattr(response, "usage", None)

        result = LLMResponse(
            content=choices[0].message.content or "",
            provider=self.provider,
            model=self.model,
            usage=TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            ),
            latency_ms=latency_ms,
        )

        logger.info(
            f"[LLM Gateway] Response: tokens={result.usage.total_tokens} "
            f"(prompt={result.usage.prompt_tokens}, completion={result.usage.completion_tokens}), "
            f"latency={latency_ms}ms"
        )
        return result

    @staticmethod
    def _provider_message(error: Exception) -> Optional[str]:
        """Pick a presentable message from a provider exception."""
        message = getattr(error, "message", None) or str(error)
        if not message:
            return None
        return safe_truncate(message, 200)


class GatewayFactory:
    """Factory for creating LLM gateways."""

    @classmethod
    def create(cls, config: LLMRuntimeConfig) -> LLMGateway:
        """Create an LLM gateway for a resolved configuration."""
        return LiteLLMGateway(config)
