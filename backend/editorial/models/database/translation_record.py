"""Saved translation database model."""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import BigInteger, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from editorial.models.database.base import Base


class TranslationRecord(Base):
    """One completed translation run, saved to history."""

    __tablename__ = "translations"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Epoch milliseconds, as sent by the web client
    created_at_ms: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    title_zh: Mapped[str] = mapped_column(Text, default="")
    title_en: Mapped[str] = mapped_column(Text, default="")
    author_zh: Mapped[str] = mapped_column(Text, default="")
    author_en: Mapped[str] = mapped_column(Text, default="")

    # [{"en": ..., "zh": ...}, ...]
    content: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False)
    analysis: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
