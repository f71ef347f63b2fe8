"""Chunk partitioning for long documents.

Paragraphs are grouped greedily into request-sized chunks. A paragraph is
never split or dropped: one that exceeds the budget on its own becomes a
chunk by itself.
"""

from dataclasses import dataclass
from typing import List, Sequence

DEFAULT_CHUNK_SIZE = 5500  # characters


@dataclass(frozen=True)
class Chunk:
    """Contiguous, order-preserving group of source paragraphs."""

    index: int
    paragraphs: tuple[str, ...]

    @property
    def char_count(self) -> int:
        return sum(len(p) for p in self.paragraphs)

    def __len__(self) -> int:
        return len(self.paragraphs)


def partition_paragraphs(
    paragraphs: Sequence[str],
    max_chars: int = DEFAULT_CHUNK_SIZE,
) -> List[Chunk]:
    """Split paragraphs into chunks of at most ``max_chars`` characters.

    Args:
        paragraphs: Ordered source paragraphs
        max_chars: Character budget per chunk

    Returns:
        Ordered chunks whose concatenation reproduces ``paragraphs``

    Raises:
        ValueError: If ``max_chars`` is not positive
    """
    if max_chars <= 0:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    groups: List[List[str]] = []
    current: List[str] = []
    size = 0

    for paragraph in paragraphs:
        if current and size + len(paragraph) > max_chars:
            groups.append(current)
            current = []
            size = 0
        current.append(paragraph)
        size += len(paragraph)

    if current:
        groups.append(current)

    return [Chunk(index=i, paragraphs=tuple(group)) for i, group in enumerate(groups)]
