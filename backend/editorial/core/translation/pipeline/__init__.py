"""Translation pipeline components.

This module provides the core pipeline components for translation:
- partition_paragraphs: Splits a document into request-sized chunks
- PromptEngine: Builds prompts using strategy pattern
- LLMGateway: Unified interface for LLM providers
- OutputProcessor: Recovers JSON from raw LLM responses
- merge_translation: Aligns recovered translations with source paragraphs
- apply_fallback: Backfills missing title/author
- TranslationPipeline: Orchestrates the complete flow
"""

from .chunker import DEFAULT_CHUNK_SIZE, Chunk, partition_paragraphs
from .dispatch import ConcurrentDispatch, DispatchMode, DispatchStrategy, SequentialDispatch
from .prompt_engine import PromptEngine
from .llm_gateway import LLMGateway, LiteLLMGateway, GatewayFactory
from .output_processor import OutputProcessor, RecoveryStage, recover_json
from .merger import merge_translation
from .metadata_extractor import apply_fallback, extract_title_author
from .pipeline import (
    PipelineConfig,
    PipelineRun,
    PipelineState,
    TranslationPipeline,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "Chunk",
    "partition_paragraphs",
    "ConcurrentDispatch",
    "DispatchMode",
    "DispatchStrategy",
    "SequentialDispatch",
    "PromptEngine",
    "LLMGateway",
    "LiteLLMGateway",
    "GatewayFactory",
    "OutputProcessor",
    "RecoveryStage",
    "recover_json",
    "merge_translation",
    "apply_fallback",
    "extract_title_author",
    "PipelineConfig",
    "PipelineRun",
    "PipelineState",
    "TranslationPipeline",
]
