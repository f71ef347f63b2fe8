"""Database models package."""

from editorial.models.database.base import Base, async_session_maker, init_db
from editorial.models.database.translation_record import TranslationRecord

__all__ = [
    # Base
    "Base",
    "async_session_maker",
    "init_db",
    # Models
    "TranslationRecord",
]
