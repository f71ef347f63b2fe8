"""Main translation pipeline orchestrator.

This module provides the TranslationPipeline class that coordinates
all pipeline components for one document run:

    paragraphs -> chunks -> PromptEngine -> LLMGateway -> OutputProcessor
               -> merger -> metadata fallback -> PipelineResult

The first chunk always carries the full prompt (analysis plus metadata) and
must succeed. Trailing chunks carry the translation-only prompt and are
scheduled by a dispatch strategy.
"""

import logging
from contextlib import aclosing
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, List, Optional, Sequence

from editorial.core.errors import (
    MalformedResponseError,
    PreconditionError,
    ServiceError,
    TranslationError,
)
from editorial.utils.text import safe_truncate
from ..models.events import DoneEvent, ErrorEvent, PipelineEvent, ProgressEvent
from ..models.result import Analysis, BilingualName, ParagraphPair, PipelineResult
from .chunker import DEFAULT_CHUNK_SIZE, Chunk, partition_paragraphs
from .dispatch import DispatchMode, DispatchStrategy, create_dispatch
from .llm_gateway import LLMGateway
from .merger import merge_translation
from .metadata_extractor import apply_fallback
from .output_processor import OutputProcessor
from .prompt_engine import PromptEngine

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Lifecycle of a single run."""

    NOT_STARTED = "not_started"
    DISPATCHING = "dispatching"
    MERGING = "merging"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineConfig:
    """Configuration for translation pipeline."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    mode: DispatchMode = DispatchMode.BATCH
    max_concurrency: int = 4
    # Degrade a trailing chunk's service failure to empty targets
    tolerate_trailing_errors: bool = True

    @classmethod
    def from_settings(cls, settings, mode: DispatchMode = DispatchMode.BATCH) -> "PipelineConfig":
        return cls(
            chunk_size=settings.chunk_size,
            mode=mode,
            max_concurrency=settings.max_concurrency,
            tolerate_trailing_errors=settings.tolerate_trailing_errors,
        )


@dataclass
class PipelineRun:
    """Mutable state of one document run.

    Each chunk's pairs are written into the slot at the chunk's index, so
    the merged output never depends on completion order.
    """

    chunks: List[Chunk]
    slots: List[Optional[List[ParagraphPair]]]
    state: PipelineState = PipelineState.NOT_STARTED
    completed: int = 0
    title: BilingualName = field(default_factory=BilingualName)
    author: BilingualName = field(default_factory=BilingualName)
    analysis: Optional[Analysis] = None

    @classmethod
    def start(cls, paragraphs: Sequence[str], chunk_size: int) -> "PipelineRun":
        """Partition the input into chunks.

        Raises:
            PreconditionError: If there are no paragraphs
        """
        if not paragraphs:
            raise PreconditionError()
        chunks = partition_paragraphs(paragraphs, chunk_size)
        return cls(chunks=chunks, slots=[None] * len(chunks))

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def paragraph_count(self) -> int:
        return sum(len(chunk) for chunk in self.chunks)

    def transition(self, state: PipelineState) -> None:
        logger.info(f"[Pipeline] {self.state.value} -> {state.value}")
        self.state = state

    def record(self, index: int, pairs: List[ParagraphPair]) -> None:
        self.slots[index] = pairs
        self.completed += 1

    def assemble(self) -> PipelineResult:
        """Concatenate slots in chunk order and backfill title/author."""
        translation: List[ParagraphPair] = []
        for index, pairs in enumerate(self.slots):
            if pairs is None:
                raise RuntimeError(f"Chunk {index} finished without a result")
            translation.extend(pairs)

        title, author = apply_fallback(self.title, self.author, translation)
        return PipelineResult(
            title=title,
            author=author,
            translation=translation,
            analysis=self.analysis,
        )


class TranslationPipeline:
    """Main orchestrator for the translation pipeline.

    The pipeline instance holds no per-run state; every call to ``run`` or
    ``stream`` gets its own PipelineRun.

    Supports:
    - Batch runs (trailing chunks dispatched concurrently)
    - Streaming runs (trailing chunks one at a time, progress after each)
    - Prompt preview
    """

    def __init__(
        self,
        gateway: LLMGateway,
        config: Optional[PipelineConfig] = None,
        dispatch: Optional[DispatchStrategy] = None,
    ):
        """Initialize translation pipeline.

        Args:
            gateway: Remote engine used for every chunk
            config: Pipeline configuration
            dispatch: Scheduling for trailing chunks; derived from
                ``config.mode`` when omitted
        """
        self.config = config or PipelineConfig()
        self.gateway = gateway
        self.dispatch = dispatch or create_dispatch(self.config.mode, self.config.max_concurrency)
        self.output_processor = OutputProcessor()

    async def run(self, paragraphs: Sequence[str]) -> PipelineResult:
        """Translate a whole document and return the result.

        Raises:
            TranslationError: If the run fails; no partial result is returned
        """
        async with aclosing(self._events(paragraphs)) as events:
            async for event in events:
                if isinstance(event, DoneEvent):
                    return event.result
        raise RuntimeError("Pipeline finished without a result")

    async def stream(self, paragraphs: Sequence[str]) -> AsyncIterator[PipelineEvent]:
        """Translate a document, yielding progress and one terminal event.

        Never raises for run failures: they arrive as an ErrorEvent.
        """
        try:
            async with aclosing(self._events(paragraphs)) as events:
                async for event in events:
                    yield event
        except TranslationError as e:
            yield ErrorEvent(message=e.message, category=e.category)
        except Exception as e:
            logger.exception(f"[Pipeline] Unexpected failure: {e}")
            yield ErrorEvent(message="Translation failed", category="internal")

    async def _events(self, paragraphs: Sequence[str]) -> AsyncIterator[PipelineEvent]:
        run = PipelineRun.start(paragraphs, self.config.chunk_size)
        logger.info(
            f"[Pipeline] Starting run: paragraphs={run.paragraph_count}, "
            f"chunks={run.total_chunks}, mode={self.config.mode.value}"
        )
        yield ProgressEvent.for_chunk(0, run.total_chunks)

        run.transition(PipelineState.DISPATCHING)
        try:
            first = run.chunks[0]
            run.record(first.index, await self._translate_first(run, first))
            yield ProgressEvent.for_chunk(run.completed, run.total_chunks)

            trailing = run.chunks[1:]
            async with aclosing(self.dispatch.dispatch(trailing, self._translate_trailing)) as outcomes:
                async for index, pairs in outcomes:
                    run.record(index, pairs)
                    yield ProgressEvent.for_chunk(run.completed, run.total_chunks)

            run.transition(PipelineState.MERGING)
            result = run.assemble()
        except Exception:
            run.transition(PipelineState.FAILED)
            raise

        run.transition(PipelineState.DONE)
        logger.info(
            f"[Pipeline] Run complete: pairs={result.paragraph_count}, "
            f"untranslated={result.untranslated_count()}"
        )
        yield DoneEvent(result=result)

    async def _translate_first(self, run: PipelineRun, chunk: Chunk) -> List[ParagraphPair]:
        """Translate the first chunk and capture the document metadata.

        Raises:
            MalformedResponseError: If the response has no translation array
        """
        response = await self.gateway.call(PromptEngine.build_for_chunk(chunk))
        envelope = self.output_processor.process(response.content)
        if not envelope.has_translation:
            logger.error(
                f"[Pipeline] First chunk has no translation array "
                f"(stage={envelope.stage.value})"
            )
            raise MalformedResponseError(detail=safe_truncate(response.content, 500))

        run.title = envelope.title
        run.author = envelope.author
        run.analysis = envelope.analysis
        return merge_translation(chunk.paragraphs, envelope.translation)

    async def _translate_trailing(self, chunk: Chunk) -> List[ParagraphPair]:
        """Translate a trailing chunk, degrading to empty targets on bad output."""
        try:
            response = await self.gateway.call(PromptEngine.build_for_chunk(chunk))
        except ServiceError as e:
            if not self.config.tolerate_trailing_errors:
                raise
            logger.warning(
                f"[Pipeline] Chunk {chunk.index} failed, leaving {len(chunk)} "
                f"paragraph(s) untranslated: {e.message}"
            )
            return merge_translation(chunk.paragraphs, None)

        envelope = self.output_processor.process(response.content)
        if not envelope.has_translation:
            logger.warning(
                f"[Pipeline] Chunk {chunk.index} has no translation array, "
                f"leaving {len(chunk)} paragraph(s) untranslated"
            )
        return merge_translation(chunk.paragraphs, envelope.translation)

    def preview(self, paragraphs: Sequence[str]) -> List[dict]:
        """Preview the prompts of every chunk without making LLM calls."""
        chunks = partition_paragraphs(paragraphs, self.config.chunk_size)
        return [PromptEngine.preview(chunk) for chunk in chunks]
