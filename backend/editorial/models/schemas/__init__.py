"""Shared Pydantic schemas for API requests and responses."""

from .llm import LLMConfigMixin
from .translation import (
    SaveHistoryRequest,
    SaveHistoryResponse,
    TranslateRequest,
    TranslateResponse,
)

__all__ = [
    "LLMConfigMixin",
    "SaveHistoryRequest",
    "SaveHistoryResponse",
    "TranslateRequest",
    "TranslateResponse",
]
