"""Utility modules for the bilingual editorial backend."""

from .text import safe_truncate, split_paragraphs

__all__ = ["safe_truncate", "split_paragraphs"]
