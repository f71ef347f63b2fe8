"""Translation result models.

This module defines the final output data structures of a pipeline run.
Field aliases reproduce the wire format used by the web client and the
history table: pairs are ``{en, zh}`` and analysis keys are camelCase.
"""

import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Placeholder values the engine uses for "unknown"
_PLACEHOLDER_CHARS = re.compile(r"[\s\-—–]+")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [text for text in (_as_text(item) for item in value) if text]


class ParagraphPair(BaseModel):
    """One source paragraph aligned with its translation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source: str = Field(..., alias="en", description="Original English paragraph")
    target: str = Field(default="", alias="zh", description="Chinese translation")


class BilingualName(BaseModel):
    """Title or author in both languages."""

    model_config = ConfigDict(frozen=True)

    en: str = ""
    zh: str = ""

    @classmethod
    def from_raw(cls, value: Any) -> "BilingualName":
        """Build from an untrusted engine value; anything but an object is empty."""
        if not isinstance(value, dict):
            return cls()
        return cls(en=_as_text(value.get("en")).strip(), zh=_as_text(value.get("zh")).strip())

    def is_absent(self) -> bool:
        """True when both languages are empty or only dash placeholders."""
        return not _PLACEHOLDER_CHARS.sub("", self.en) and not _PLACEHOLDER_CHARS.sub("", self.zh)


class Analysis(BaseModel):
    """Structured literary analysis produced from the first chunk."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    summary: str = ""
    narrative_detail: str = Field(default="", alias="narrativeDetail")
    themes: List[str] = Field(default_factory=list)
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, value: Any) -> Optional["Analysis"]:
        """Build from an untrusted engine value.

        Length ceilings requested in the prompt are not enforced here.
        """
        if not isinstance(value, dict):
            return None
        return cls(
            summary=_as_text(value.get("summary")),
            narrative_detail=_as_text(value.get("narrativeDetail")),
            themes=_as_text_list(value.get("themes")),
            pros=_as_text_list(value.get("pros")),
            cons=_as_text_list(value.get("cons")),
        )


class PipelineResult(BaseModel):
    """Final output of one document run.

    Immutable once built; this is the unit handed to the history store.
    """

    model_config = ConfigDict(frozen=True)

    title: BilingualName = Field(default_factory=BilingualName)
    author: BilingualName = Field(default_factory=BilingualName)
    translation: List[ParagraphPair] = Field(default_factory=list)
    analysis: Optional[Analysis] = None

    @property
    def paragraph_count(self) -> int:
        return len(self.translation)

    def untranslated_count(self) -> int:
        """Number of pairs whose translation came back empty."""
        return sum(1 for pair in self.translation if not pair.target.strip())
