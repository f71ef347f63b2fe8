"""Text utilities for paragraph handling and safe string truncation."""

import re
from typing import List

# Paragraphs are separated by one or more blank lines
PARAGRAPH_SEPARATOR = re.compile(r"\n\s*\n")

_BREAK_CHARS = {" ", "\n", "\t", ",", ".", "!", "?", ";", ":", "-", "。", "，", "、"}


def split_paragraphs(text: str) -> List[str]:
    """Split extracted document text into trimmed, non-empty paragraphs.

    Windows line endings are normalized first so ``\\r\\n\\r\\n`` separates
    paragraphs too.
    """
    if not text:
        return []
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [p.strip() for p in PARAGRAPH_SEPARATOR.split(text) if p.strip()]


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text for logs and error details.

    Tries to break at a word or punctuation boundary within the last 20
    characters for cleaner output.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]
    # Nearest break point first
    for i in range(1, min(20, max_chars - 1) + 1):
        if truncated[-i] in _BREAK_CHARS:
            truncated = truncated[: len(truncated) - i + 1].rstrip()
            break

    return truncated + suffix
