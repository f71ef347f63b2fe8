"""Dispatch strategies for trailing chunks.

Both strategies yield ``(chunk_index, pairs)`` as chunks finish. Callers
write results by index, so completion order never affects the final
paragraph order.
"""

import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable, List, Sequence, Tuple

from ..models.result import ParagraphPair
from .chunker import Chunk

ChunkTranslator = Callable[[Chunk], Awaitable[List[ParagraphPair]]]
ChunkOutcome = Tuple[int, List[ParagraphPair]]


class DispatchMode(str, Enum):
    """How chunks after the first are scheduled."""

    BATCH = "batch"  # concurrent, result returned at the end
    STREAMING = "streaming"  # sequential, progress after each chunk


class DispatchStrategy(ABC):
    """Schedules translation calls for a sequence of chunks."""

    @abstractmethod
    def dispatch(
        self, chunks: Sequence[Chunk], translate: ChunkTranslator
    ) -> AsyncIterator[ChunkOutcome]:
        """Translate chunks, yielding each outcome as it completes."""
        pass


class SequentialDispatch(DispatchStrategy):
    """One call at a time, in chunk order.

    The next call starts only when the consumer asks for the next outcome,
    i.e. after it has merged the previous chunk and reported progress.
    """

    async def dispatch(
        self, chunks: Sequence[Chunk], translate: ChunkTranslator
    ) -> AsyncIterator[ChunkOutcome]:
        for chunk in chunks:
            yield chunk.index, await translate(chunk)


class ConcurrentDispatch(DispatchStrategy):
    """All chunks in flight at once, bounded by ``max_concurrency``."""

    def __init__(self, max_concurrency: int = 4):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.max_concurrency = max_concurrency

    async def dispatch(
        self, chunks: Sequence[Chunk], translate: ChunkTranslator
    ) -> AsyncIterator[ChunkOutcome]:
        if not chunks:
            return

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run(chunk: Chunk) -> ChunkOutcome:
            async with semaphore:
                return chunk.index, await translate(chunk)

        tasks = [asyncio.ensure_future(run(chunk)) for chunk in chunks]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            # A fatal error or a closed consumer stops every pending call
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)


def create_dispatch(mode: DispatchMode, max_concurrency: int = 4) -> DispatchStrategy:
    if mode is DispatchMode.STREAMING:
        return SequentialDispatch()
    return ConcurrentDispatch(max_concurrency=max_concurrency)
