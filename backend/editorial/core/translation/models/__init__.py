"""Translation pipeline data models.

This module provides structured data models for the translation pipeline,
ensuring type safety and clear contracts between components.
"""

from .prompt import Message, PromptBundle, PromptKind
from .response import TokenUsage, LLMResponse
from .result import Analysis, BilingualName, ParagraphPair, PipelineResult
from .events import DoneEvent, ErrorEvent, PipelineEvent, ProgressEvent

__all__ = [
    # Prompt models
    "Message",
    "PromptBundle",
    "PromptKind",
    # Response models
    "TokenUsage",
    "LLMResponse",
    # Result models
    "Analysis",
    "BilingualName",
    "ParagraphPair",
    "PipelineResult",
    # Stream events
    "DoneEvent",
    "ErrorEvent",
    "PipelineEvent",
    "ProgressEvent",
]
