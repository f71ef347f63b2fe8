"""Output processor for raw LLM responses.

The engine is asked for pure JSON but nothing enforces it, so its replies
are decoded defensively through a fixed cascade of recovery stages. The
processor never raises: when every stage fails it yields an empty object
and callers detect the missing fields.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import json_repair

from ..models.result import Analysis, BilingualName

logger = logging.getLogger(__name__)


class RecoveryStage(str, Enum):
    """Cascade stage that produced the recovered object."""

    STRICT = "strict"
    SANITIZED = "sanitized"
    LENIENT = "lenient"
    EXTRACTED = "extracted"
    FAILED = "failed"


# Trailing comma right before a closing bracket or brace
TRAILING_COMMA_PATTERN = re.compile(r",(\s*[\]}])")
# First fenced block, with optional json tag
FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
# Greedy first-brace to last-brace span
BRACE_SPAN_PATTERN = re.compile(r"\{[\s\S]*\}")


def _parse_strict(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text or "{}")
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _parse_lenient(text: str) -> Optional[Dict[str, Any]]:
    # Lenient parsing only applies to a document that is itself an object;
    # prose or fences around it are left to the extraction stage.
    if not text.strip().startswith("{"):
        return None
    try:
        value = json_repair.loads(text)
    except Exception as e:
        logger.debug(f"Lenient JSON parse failed: {e}")
        return None
    return value if isinstance(value, dict) else None


def _extract_candidate(text: str) -> str:
    match = FENCED_BLOCK_PATTERN.search(text)
    if match:
        return match.group(1)
    match = BRACE_SPAN_PATTERN.search(text)
    if match:
        return match.group(0)
    return "{}"


def sanitize_json(text: str) -> str:
    """Remove trailing commas before ``]`` or ``}``."""
    return TRAILING_COMMA_PATTERN.sub(r"\1", text)


def recover_json_with_stage(text: str) -> Tuple[Dict[str, Any], RecoveryStage]:
    """Recover a JSON object from untrusted model output.

    Stages, each attempted only when the previous one fails:
    1. Strict JSON
    2. Strict JSON after removing trailing commas
    3. Lenient JSON (unquoted keys, trailing commas, comments)
    4. Lenient JSON on the first fenced block, or else the outer brace span

    Returns:
        Tuple of (recovered object, stage that succeeded). The object is
        empty when every stage fails.
    """
    text = text or ""

    recovered = _parse_strict(text)
    if recovered is not None:
        return recovered, RecoveryStage.STRICT

    recovered = _parse_strict(sanitize_json(text))
    if recovered is not None:
        return recovered, RecoveryStage.SANITIZED

    recovered = _parse_lenient(text)
    if recovered is not None:
        return recovered, RecoveryStage.LENIENT

    recovered = _parse_lenient(_extract_candidate(text))
    if recovered is not None:
        return recovered, RecoveryStage.EXTRACTED

    return {}, RecoveryStage.FAILED


def recover_json(text: str) -> Dict[str, Any]:
    """Recover a JSON object from untrusted model output, ``{}`` on failure."""
    return recover_json_with_stage(text)[0]


@dataclass
class ChunkEnvelope:
    """Typed view of one recovered chunk response."""

    translation: Optional[List[Any]] = None
    title: BilingualName = field(default_factory=BilingualName)
    author: BilingualName = field(default_factory=BilingualName)
    analysis: Optional[Analysis] = None
    stage: RecoveryStage = RecoveryStage.FAILED

    @property
    def has_translation(self) -> bool:
        return self.translation is not None


class OutputProcessor:
    """Processes raw LLM responses into chunk envelopes.

    Responsibilities:
    1. Recover a JSON object from the response text
    2. Check for the load-bearing ``translation`` array
    3. Coerce title, author and analysis into typed models
    """

    def recover(self, content: str) -> Tuple[Dict[str, Any], RecoveryStage]:
        """Recover the response object, logging which stage succeeded."""
        recovered, stage = recover_json_with_stage(content)
        if stage is RecoveryStage.FAILED:
            logger.warning(
                f"Could not recover JSON from model response ({len(content or '')} chars)"
            )
        elif stage is not RecoveryStage.STRICT:
            logger.debug(f"Recovered model response via {stage.value} stage")
        return recovered, stage

    def process(self, content: str) -> ChunkEnvelope:
        """Process raw response text into a typed envelope.

        Args:
            content: Raw response content

        Returns:
            ChunkEnvelope; ``translation`` is None when missing or not a list
        """
        recovered, stage = self.recover(content)
        translation = recovered.get("translation")
        return ChunkEnvelope(
            translation=translation if isinstance(translation, list) else None,
            title=BilingualName.from_raw(recovered.get("title")),
            author=BilingualName.from_raw(recovered.get("author")),
            analysis=Analysis.from_raw(recovered.get("analysis")),
            stage=stage,
        )
