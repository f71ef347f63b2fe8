"""Merge recovered translations back onto the source paragraphs.

Alignment is strictly positional: element ``i`` of the recovered array
belongs to paragraph ``i`` of the chunk. The output always has one pair per
source paragraph, however far the engine's array length drifts.
"""

from enum import Enum
from typing import Any, List, Sequence

from ..models.result import ParagraphPair

SOURCE_KEY = "en"
TARGET_KEY = "zh"


class ElementKind(str, Enum):
    """Shapes a recovered translation element can take."""

    PLAIN_TEXT = "plain_text"  # "译文"
    TARGET_ONLY = "target_only"  # {"zh": "译文"} or {"en": ..., "zh": ...}
    SOURCE_ONLY = "source_only"  # {"en": "..."} without a translation
    MALFORMED = "malformed"  # missing, null, number, list, unrelated object


def classify_element(element: Any) -> ElementKind:
    if isinstance(element, str):
        return ElementKind.PLAIN_TEXT
    if isinstance(element, dict):
        if TARGET_KEY in element:
            return ElementKind.TARGET_ONLY
        if SOURCE_KEY in element:
            return ElementKind.SOURCE_ONLY
    return ElementKind.MALFORMED


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def merge_element(source: str, element: Any) -> ParagraphPair:
    """Build the pair for one source paragraph and its recovered element."""
    kind = classify_element(element)
    if kind is ElementKind.PLAIN_TEXT:
        return ParagraphPair(source=source, target=element)
    if kind is ElementKind.TARGET_ONLY:
        return ParagraphPair(source=source, target=_text(element.get(TARGET_KEY)))
    if kind is ElementKind.SOURCE_ONLY:
        return ParagraphPair(source=_text(element.get(SOURCE_KEY), source), target="")
    return ParagraphPair(source=source, target="")


def merge_translation(paragraphs: Sequence[str], raw: Any) -> List[ParagraphPair]:
    """Align a recovered ``translation`` value with the chunk's paragraphs.

    Args:
        paragraphs: The chunk's source paragraphs
        raw: Recovered ``translation`` field; anything that is not a list
            is treated as all elements missing

    Returns:
        Exactly ``len(paragraphs)`` pairs, in paragraph order
    """
    elements = raw if isinstance(raw, list) else []
    return [
        merge_element(source, elements[i] if i < len(elements) else None)
        for i, source in enumerate(paragraphs)
    ]
