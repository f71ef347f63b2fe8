"""Translation API routes."""

import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from editorial.api.dependencies import TranslationServiceDep, http_error
from editorial.core.errors import TranslationError
from editorial.core.translation.pipeline import DispatchMode
from editorial.models.schemas.translation import TranslateRequest, TranslateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest, service: TranslationServiceDep):
    """Translate a document and return the complete result.

    Trailing chunks are translated concurrently. The result is saved to
    history when persistence is configured; ``id`` and ``createdAt`` are
    set only if that save succeeded.
    """
    try:
        outcome = await service.translate(
            request.resolve_paragraphs(), override=request.to_override()
        )
    except TranslationError as e:
        logger.error(f"Translation failed ({e.category}): {e.message} {e.detail}".rstrip())
        raise http_error(e)

    result = outcome.result
    return TranslateResponse(
        title=result.title,
        author=result.author,
        translation=result.translation,
        analysis=result.analysis,
        id=outcome.id,
        created_at=outcome.created_at,
    )


@router.post("/translate/stream")
async def translate_stream(request: TranslateRequest, service: TranslationServiceDep):
    """Translate a document with NDJSON progress updates.

    Each line is one JSON object: ``progress`` events followed by exactly
    one ``done`` (carrying the result) or ``error`` event. Chunks are
    translated one at a time so progress is reported after each.
    """
    try:
        pipeline, paragraphs = service.prepare(
            request.resolve_paragraphs(),
            DispatchMode.STREAMING,
            override=request.to_override(),
        )
    except TranslationError as e:
        raise http_error(e)

    async def event_generator():
        """Encode pipeline events as NDJSON lines."""
        async for event in service.stream_prepared(pipeline, paragraphs):
            yield event.to_ndjson()

    return StreamingResponse(
        event_generator(),
        media_type="application/x-ndjson",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
