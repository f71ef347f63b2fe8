"""Translation package.

This package provides the translation pipeline and the service that runs it.

Architecture:
- models/: Data models (PromptBundle, PipelineResult, progress events, etc.)
- strategies/: Prompt strategies for the two request variants
- pipeline/: Pipeline components (chunker, PromptEngine, merger, etc.)
- orchestrator.py: TranslationService, validation and history hand-off
"""

# Re-export models for convenience
from .models import (
    # Prompt models
    Message,
    PromptBundle,
    PromptKind,
    # Response models
    TokenUsage,
    LLMResponse,
    # Result models
    Analysis,
    BilingualName,
    ParagraphPair,
    PipelineResult,
    # Stream events
    DoneEvent,
    ErrorEvent,
    PipelineEvent,
    ProgressEvent,
)

# Re-export pipeline components
from .pipeline import (
    DispatchMode,
    PromptEngine,
    LLMGateway,
    GatewayFactory,
    OutputProcessor,
    TranslationPipeline,
    PipelineConfig,
)

from .orchestrator import TranslationOutcome, TranslationService

__all__ = [
    # Models
    "Message",
    "PromptBundle",
    "PromptKind",
    "TokenUsage",
    "LLMResponse",
    "Analysis",
    "BilingualName",
    "ParagraphPair",
    "PipelineResult",
    "DoneEvent",
    "ErrorEvent",
    "PipelineEvent",
    "ProgressEvent",
    # Pipeline
    "DispatchMode",
    "PromptEngine",
    "LLMGateway",
    "GatewayFactory",
    "OutputProcessor",
    "TranslationPipeline",
    "PipelineConfig",
    # Service
    "TranslationOutcome",
    "TranslationService",
]
