"""Rule-based title/author fallback.

When the engine leaves the title or author empty, they are inferred from the
first few translated pairs. Each heuristic is a row in an ordered rule table
so it can be tested on its own.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..models.result import BilingualName, ParagraphPair

# Only the opening pairs are examined
SCAN_PAIRS = 4
TITLE_MAX_CHARS = 60


@dataclass(frozen=True)
class ExtractionRule:
    """One heuristic: lower priority values are tried first."""

    name: str
    language: str  # "en" (source) or "zh" (target)
    priority: int
    pattern: re.Pattern

    def match(self, text: str) -> Optional[str]:
        found = self.pattern.search(text)
        if not found:
            return None
        if found.groups():
            return found.group(1).strip() or None
        return found.group(0)


# Lines that name the author and so can never be the title
AUTHOR_LINE_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("label_zh", "zh", 0, re.compile(r"^作者[：:]")),
    ExtractionRule("label_en", "en", 0, re.compile(r"^Author[：:\s]")),
    ExtractionRule("byline_en", "en", 0, re.compile(r"^[Bb]y\s+\w+")),
    ExtractionRule("label_zh_in_en", "en", 0, re.compile(r"^作者[：:]")),
)

# Sentence-terminal punctuation disqualifies a title line
TERMINAL_PUNCTUATION_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("terminal_en", "en", 0, re.compile(r"[.!?]\s*$")),
    ExtractionRule("terminal_zh", "zh", 0, re.compile(r"[。！？]\s*$")),
)

AUTHOR_RULES: Tuple[ExtractionRule, ...] = (
    ExtractionRule("label_zh", "zh", 0, re.compile(r"作者[：:]\s*([^\n。，]+)")),
    ExtractionRule("label_en", "en", 0, re.compile(r"Author[：:\s]+([^\n.,]+)", re.IGNORECASE)),
    ExtractionRule("loose_zh", "zh", 1, re.compile(r"作者[：:]?\s*([^\n。，]+)")),
    ExtractionRule(
        "byline_en", "en", 1, re.compile(r"\b[Bb]y\s+([^\n.,]+(?:\s+[A-Z][a-z]+)?)")
    ),
)


def rules_for(rules: Sequence[ExtractionRule], language: str) -> List[ExtractionRule]:
    return sorted((r for r in rules if r.language == language), key=lambda r: r.priority)


def first_match(rules: Sequence[ExtractionRule], language: str, text: str) -> Optional[str]:
    for rule in rules_for(rules, language):
        value = rule.match(text)
        if value:
            return value
    return None


def _first_line(text: str) -> str:
    for line in text.split("\n"):
        line = line.strip()
        if line:
            return line
    return ""


def _is_short_line(line: str, language: str) -> bool:
    if not line or len(line) > TITLE_MAX_CHARS:
        return False
    return first_match(TERMINAL_PUNCTUATION_RULES, language, line) is None


def extract_title(pair: ParagraphPair) -> Optional[BilingualName]:
    """Accept the first line of the first pair as the title if it looks like one."""
    source, target = pair.source.strip(), pair.target.strip()
    if not source and not target:
        return None

    line_en = _first_line(source)
    line_zh = _first_line(target)

    is_author_line = (
        first_match(AUTHOR_LINE_RULES, "en", line_en) is not None
        or first_match(AUTHOR_LINE_RULES, "zh", line_zh) is not None
    )
    if is_author_line:
        return None

    if _is_short_line(line_en, "en") or _is_short_line(line_zh, "zh"):
        return BilingualName(en=line_en, zh=line_zh)
    return None


def extract_author(pairs: Sequence[ParagraphPair]) -> Optional[BilingualName]:
    """Return the first author name found in either language."""
    for pair in pairs:
        name_zh = first_match(AUTHOR_RULES, "zh", pair.target.strip())
        name_en = first_match(AUTHOR_RULES, "en", pair.source.strip())
        if name_zh or name_en:
            return BilingualName(en=name_en or "", zh=name_zh or "")
    return None


@dataclass(frozen=True)
class FallbackMetadata:
    title: Optional[BilingualName] = None
    author: Optional[BilingualName] = None


def extract_title_author(translation: Sequence[ParagraphPair]) -> FallbackMetadata:
    """Infer title and author from the opening pairs of a merged translation."""
    opening = list(translation[:SCAN_PAIRS])
    if not opening:
        return FallbackMetadata()
    return FallbackMetadata(
        title=extract_title(opening[0]),
        author=extract_author(opening),
    )


def apply_fallback(
    title: BilingualName,
    author: BilingualName,
    translation: Sequence[ParagraphPair],
) -> Tuple[BilingualName, BilingualName]:
    """Backfill title/author only where the engine left them absent."""
    if not title.is_absent() and not author.is_absent():
        return title, author

    fallback = extract_title_author(translation)
    if title.is_absent() and fallback.title and not fallback.title.is_absent():
        title = fallback.title
    if author.is_absent() and fallback.author and not fallback.author.is_absent():
        author = fallback.author
    return title, author
