"""Translation and history request/response schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from editorial.core.translation.models.result import (
    Analysis,
    BilingualName,
    ParagraphPair,
    PipelineResult,
)
from editorial.models.schemas.llm import LLMConfigMixin
from editorial.utils.text import split_paragraphs


class TranslateRequest(LLMConfigMixin):
    """Request to translate a document.

    Send either ``paragraphs`` or raw ``text``; text is split on blank lines.
    """

    paragraphs: Optional[List[str]] = None
    text: Optional[str] = None

    def resolve_paragraphs(self) -> List[str]:
        if self.paragraphs:
            return list(self.paragraphs)
        return split_paragraphs(self.text or "")


class TranslateResponse(PipelineResult):
    """Pipeline result plus its history id when it was saved."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    created_at: Optional[int] = Field(default=None, alias="createdAt")


class SaveHistoryRequest(BaseModel):
    """Request to save (or overwrite) a translation in history."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    created_at: Optional[int] = Field(default=None, alias="createdAt")
    title: BilingualName = Field(default_factory=BilingualName)
    author: BilingualName = Field(default_factory=BilingualName)
    content: List[ParagraphPair] = Field(default_factory=list)
    analysis: Optional[Analysis] = None

    def to_result(self) -> PipelineResult:
        return PipelineResult(
            title=self.title,
            author=self.author,
            translation=self.content,
            analysis=self.analysis,
        )


class SaveHistoryResponse(BaseModel):
    """Saved history entry identity."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: int = Field(..., alias="createdAt")
