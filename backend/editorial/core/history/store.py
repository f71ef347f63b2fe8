"""Translation history storage.

The translation service and the history routes only depend on the
``HistoryStore`` interface; ``SQLHistoryStore`` is the SQLAlchemy-backed
implementation used by the application.
"""

import logging
import time
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from editorial.core.translation.models.result import (
    Analysis,
    BilingualName,
    ParagraphPair,
    PipelineResult,
)
from editorial.models.database.translation_record import TranslationRecord

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100


def now_ms() -> int:
    return int(time.time() * 1000)


class HistoryEntry(BaseModel):
    """A persisted translation as returned by ``GET /history``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: int = Field(..., alias="createdAt", description="Epoch milliseconds")
    title: BilingualName = Field(default_factory=BilingualName)
    author: BilingualName = Field(default_factory=BilingualName)
    content: List[ParagraphPair] = Field(default_factory=list)
    analysis: Optional[Analysis] = None

    @classmethod
    def from_record(cls, record: TranslationRecord) -> "HistoryEntry":
        analysis = record.analysis
        return cls(
            id=record.id,
            created_at=record.created_at_ms,
            title=BilingualName(en=record.title_en or "", zh=record.title_zh or ""),
            author=BilingualName(en=record.author_en or "", zh=record.author_zh or ""),
            content=[ParagraphPair.model_validate(pair) for pair in record.content or []],
            analysis=Analysis.model_validate(analysis) if isinstance(analysis, dict) else None,
        )

    def to_result(self) -> PipelineResult:
        return PipelineResult(
            title=self.title,
            author=self.author,
            translation=self.content,
            analysis=self.analysis,
        )


class HistoryStore(ABC):
    """Storage interface for completed translations."""

    @abstractmethod
    async def save(
        self,
        result: PipelineResult,
        entry_id: Optional[str] = None,
        created_at: Optional[int] = None,
    ) -> Tuple[str, int]:
        """Insert or replace a saved translation.

        Args:
            result: Completed pipeline result
            entry_id: Existing id to overwrite; a new one is generated if None
            created_at: Epoch milliseconds; defaults to now

        Returns:
            Tuple of (id, created_at)
        """
        pass

    @abstractmethod
    async def list(self, limit: int = DEFAULT_LIST_LIMIT) -> List[HistoryEntry]:
        """Return saved translations, newest first."""
        pass

    @abstractmethod
    async def remove(self, entry_id: str) -> None:
        """Delete a saved translation. Unknown ids are ignored."""
        pass


class SQLHistoryStore(HistoryStore):
    """History store backed by the ``translations`` table."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def save(
        self,
        result: PipelineResult,
        entry_id: Optional[str] = None,
        created_at: Optional[int] = None,
    ) -> Tuple[str, int]:
        entry_id = entry_id or str(uuid.uuid4())
        created_at = created_at if created_at is not None else now_ms()

        record = TranslationRecord(
            id=entry_id,
            created_at_ms=created_at,
            title_en=result.title.en,
            title_zh=result.title.zh,
            author_en=result.author.en,
            author_zh=result.author.zh,
            content=[pair.model_dump(by_alias=True) for pair in result.translation],
            analysis=result.analysis.model_dump(by_alias=True) if result.analysis else None,
        )

        async with self._session_maker() as session:
            # merge() updates the row when the id already exists
            await session.merge(record)
            await session.commit()

        logger.info(f"Saved translation {entry_id} ({result.paragraph_count} paragraphs)")
        return entry_id, created_at

    async def list(self, limit: int = DEFAULT_LIST_LIMIT) -> List[HistoryEntry]:
        async with self._session_maker() as session:
            rows = await session.execute(
                select(TranslationRecord)
                .order_by(TranslationRecord.created_at_ms.desc())
                .limit(limit)
            )
            return [HistoryEntry.from_record(record) for record in rows.scalars().all()]

    async def remove(self, entry_id: str) -> None:
        async with self._session_maker() as session:
            await session.execute(delete(TranslationRecord).where(TranslationRecord.id == entry_id))
            await session.commit()
        logger.info(f"Deleted translation {entry_id}")
