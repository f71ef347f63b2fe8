"""Progress events emitted by a streaming pipeline run.

A stream is any number of ``ProgressEvent``s followed by exactly one
``DoneEvent`` or ``ErrorEvent``. Each event encodes to one JSON line.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .result import PipelineResult


class _Event(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_ndjson(self) -> str:
        return self.model_dump_json(by_alias=True) + "\n"


class ProgressEvent(_Event):
    """Emitted once before dispatch and once after each completed chunk."""

    type: Literal["progress"] = "progress"
    chunk_index: int = Field(..., alias="chunkIndex", description="Chunks completed so far")
    total_chunks: int = Field(..., alias="totalChunks")
    percent: int = Field(..., ge=0, le=100)
    message: str = ""

    @classmethod
    def for_chunk(cls, completed: int, total: int) -> "ProgressEvent":
        if completed == 0:
            message = f"Translating {total} chunk(s)"
        else:
            message = f"Translated chunk {completed}/{total}"
        return cls(
            chunk_index=completed,
            total_chunks=total,
            # Half-up rounding; round() would give 12 for 12.5
            percent=int(completed * 100 / total + 0.5) if total else 100,
            message=message,
        )


class DoneEvent(_Event):
    """Terminal event carrying the final result."""

    type: Literal["done"] = "done"
    result: PipelineResult
    id: Optional[str] = None
    created_at: Optional[int] = Field(default=None, alias="createdAt")


class ErrorEvent(_Event):
    """Terminal event for a failed run."""

    type: Literal["error"] = "error"
    message: str
    category: str = "internal"


PipelineEvent = Union[ProgressEvent, DoneEvent, ErrorEvent]
