"""Translation history API routes."""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from editorial.api.dependencies import HistoryStoreDep
from editorial.config import settings
from editorial.core.history.store import HistoryEntry
from editorial.models.schemas.translation import SaveHistoryRequest, SaveHistoryResponse

router = APIRouter()


@router.get("/history", response_model=List[HistoryEntry])
async def list_history(store: HistoryStoreDep):
    """List saved translations, newest first."""
    return await store.list(limit=settings.history_limit)


@router.post("/history", response_model=SaveHistoryResponse)
async def save_history(request: SaveHistoryRequest, store: HistoryStoreDep):
    """Save a translation, overwriting the entry with the same id."""
    if not request.content:
        raise HTTPException(status_code=400, detail="content is required")

    entry_id, created_at = await store.save(
        request.to_result(), entry_id=request.id, created_at=request.created_at
    )
    return SaveHistoryResponse(id=entry_id, created_at=created_at)


@router.delete("/history/{entry_id}", status_code=204)
async def delete_history(entry_id: str, store: HistoryStoreDep):
    """Delete a saved translation."""
    await store.remove(entry_id)
    return Response(status_code=204)


@router.delete("/history", status_code=204)
async def delete_history_by_query(
    store: HistoryStoreDep,
    entry_id: Optional[str] = Query(default=None, alias="id"),
):
    """Delete a saved translation given as ``?id=``."""
    if not entry_id:
        raise HTTPException(status_code=400, detail="id is required")
    await store.remove(entry_id)
    return Response(status_code=204)
