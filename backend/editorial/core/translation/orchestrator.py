"""Translation Service - Runs the pipeline for a request and saves the result."""

import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import TYPE_CHECKING, AsyncIterator, List, Optional, Sequence, Tuple

from editorial.config import Settings, settings as default_settings
from editorial.core.errors import PreconditionError, TranslationError
from editorial.core.llm.runtime_config import LLMConfigOverride, resolve_llm_config

from .models import DoneEvent, ErrorEvent, PipelineEvent, PipelineResult
from .pipeline import (
    DispatchMode,
    GatewayFactory,
    LLMGateway,
    PipelineConfig,
    TranslationPipeline,
)

if TYPE_CHECKING:
    from editorial.core.history.store import HistoryStore

logger = logging.getLogger(__name__)


@dataclass
class TranslationOutcome:
    """A completed run and, when it was saved, its history id."""

    result: PipelineResult
    id: Optional[str] = None
    created_at: Optional[int] = None


class TranslationService:
    """Entry point for translating one document.

    Validates the request, builds a pipeline per run, and hands each
    completed result to the history store. A failed save is logged and
    never fails the run.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        history_store: Optional["HistoryStore"] = None,
        gateway: Optional[LLMGateway] = None,
    ):
        """Initialize the service.

        Args:
            settings: Application settings (defaults to the global settings)
            history_store: Where completed runs are saved; None disables saving
            gateway: Remote engine to use instead of one resolved from settings
        """
        self.settings = settings or default_settings
        self.history_store = history_store
        self._gateway = gateway

    def prepare(
        self,
        paragraphs: Sequence[str],
        mode: DispatchMode = DispatchMode.BATCH,
        override: Optional[LLMConfigOverride] = None,
    ) -> Tuple[TranslationPipeline, List[str]]:
        """Validate a request and build its pipeline.

        Args:
            paragraphs: Source paragraphs; blank entries are dropped
            mode: Batch or streaming dispatch
            override: Request-level LLM overrides

        Raises:
            PreconditionError: If no non-empty paragraph remains after trimming
            MissingCredentialError: If no usable API key is configured
        """
        cleaned = [p.strip() for p in paragraphs if p and p.strip()]
        if not cleaned:
            raise PreconditionError()

        gateway = self._gateway or GatewayFactory.create(
            resolve_llm_config(self.settings, override=override)
        )
        pipeline = TranslationPipeline(
            gateway, PipelineConfig.from_settings(self.settings, mode)
        )
        return pipeline, cleaned

    async def translate(
        self, paragraphs: Sequence[str], override: Optional[LLMConfigOverride] = None
    ) -> TranslationOutcome:
        """Translate a document in batch mode.

        Raises:
            TranslationError: If validation or the run fails
        """
        pipeline, cleaned = self.prepare(paragraphs, DispatchMode.BATCH, override)
        result = await pipeline.run(cleaned)
        entry_id, created_at = await self._save(result)
        return TranslationOutcome(result=result, id=entry_id, created_at=created_at)

    async def translate_stream(
        self, paragraphs: Sequence[str], override: Optional[LLMConfigOverride] = None
    ) -> AsyncIterator[PipelineEvent]:
        """Translate a document in streaming mode; failures become an ErrorEvent."""
        try:
            pipeline, cleaned = self.prepare(paragraphs, DispatchMode.STREAMING, override)
        except TranslationError as e:
            yield ErrorEvent(message=e.message, category=e.category)
            return

        async with aclosing(self.stream_prepared(pipeline, cleaned)) as events:
            async for event in events:
                yield event

    async def stream_prepared(
        self, pipeline: TranslationPipeline, paragraphs: Sequence[str]
    ) -> AsyncIterator[PipelineEvent]:
        """Stream an already validated run, saving the result before ``done``."""
        async with aclosing(pipeline.stream(paragraphs)) as events:
            async for event in events:
                if isinstance(event, DoneEvent):
                    entry_id, created_at = await self._save(event.result)
                    event = DoneEvent(result=event.result, id=entry_id, created_at=created_at)
                yield event

    async def _save(self, result: PipelineResult) -> Tuple[Optional[str], Optional[int]]:
        if self.history_store is None or not self.settings.auto_save_history:
            return None, None
        try:
            return await self.history_store.save(result)
        except Exception as e:
            logger.error(f"[TranslationService] Failed to save translation history: {e}")
            return None, None
