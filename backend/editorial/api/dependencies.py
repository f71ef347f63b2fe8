"""API dependencies for the history store and translation service.

The history store is optional: when ``DATABASE_URL`` is empty the history
routes answer 503 and translations are simply not saved.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException

from editorial.config import settings
from editorial.core.errors import TranslationError
from editorial.core.history.store import HistoryStore, SQLHistoryStore
from editorial.core.translation.orchestrator import TranslationService
from editorial.models.database import base as database


def get_optional_history_store() -> Optional[HistoryStore]:
    """History store, or None when persistence is not configured."""
    if database.async_session_maker is None:
        return None
    return SQLHistoryStore(database.async_session_maker)


def get_history_store(
    store: Annotated[Optional[HistoryStore], Depends(get_optional_history_store)],
) -> HistoryStore:
    """History store for the history routes.

    Raises:
        HTTPException: 503 if persistence is not configured
    """
    if store is None:
        raise HTTPException(
            status_code=503,
            detail="Database is not configured. Set DATABASE_URL to enable history.",
        )
    return store


def get_translation_service(
    store: Annotated[Optional[HistoryStore], Depends(get_optional_history_store)],
) -> TranslationService:
    return TranslationService(settings=settings, history_store=store)


def http_error(error: TranslationError) -> HTTPException:
    """Convert a run failure into the HTTP error returned to the client."""
    return HTTPException(status_code=error.status_code, detail=error.message)


# Type aliases for cleaner dependency injection
HistoryStoreDep = Annotated[HistoryStore, Depends(get_history_store)]
TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]
