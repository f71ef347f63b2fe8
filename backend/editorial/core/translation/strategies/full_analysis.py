"""Full prompt for the first chunk: translation, metadata and analysis."""

from typing import Sequence

from .base import PromptStrategy, format_paragraphs
from ..models.prompt import PromptKind

# Ceilings are instructions to the engine only; nothing truncates locally
SUMMARY_MAX_CHARS = 60
NARRATIVE_MAX_CHARS = 200
ITEM_MAX_CHARS = 40
TITLE_MAX_CHARS = 60


def build_full_prompt(paragraphs: Sequence[str]) -> str:
    """Build the translation + title/author + analysis prompt."""
    return f"""You are a professional English-Chinese literary editor.

Translate the English paragraphs below into Chinese and give a structured writing analysis. You must also identify the article's title and author from the text.

[Title rules]
- The title is usually the first paragraph or first line and is often a short phrase (e.g. "TOKYO WEEDS" / "东京杂草")
- If the first paragraph is short (at most {TITLE_MAX_CHARS} characters) and does not end with a period, question mark or exclamation mark, treat it as the title, unless it is an author line
- Keep the original casing of the title (all caps, title case, etc.)

[Author rules]
- Common formats: English "Author: Amos", "By John Smith"; Chinese "作者：阿莫斯"
- The author may appear below the title, at the start or at the end of the text
- Return the name only, without prefixes such as "作者：", "Author:" or "By"

[Length limits] Strict; be concise rather than exceed them:
- summary: at most {SUMMARY_MAX_CHARS} Chinese characters
- narrativeDetail: at most {NARRATIVE_MAX_CHARS} Chinese characters
- each item of themes / pros / cons: at most {ITEM_MAX_CHARS} Chinese characters

The output must be strict JSON with exactly this structure and nothing else. "translation" contains only the Chinese translations, one per input paragraph, in the same order ({len(paragraphs)} items). Do not echo the English:
{{
  "title": {{ "en": "English title", "zh": "中文标题" }},
  "author": {{ "en": "English author name", "zh": "中文作者名" }},
  "translation": ["中文翻译1", "中文翻译2", "..."],
  "analysis": {{
    "summary": "One-sentence summary",
    "narrativeDetail": "Narrative analysis",
    "themes": ["主题1", "主题2", "主题3"],
    "pros": ["优点1", "优点2", "优点3"],
    "cons": ["不足1", "不足2", "不足3"]
  }}
}}

English paragraphs to translate (keep the order):
{format_paragraphs(paragraphs)}""".strip()


class FullAnalysisStrategy(PromptStrategy):
    """First-chunk strategy; its response is the only source of metadata."""

    kind = PromptKind.FULL

    def render(self, paragraphs: Sequence[str]) -> str:
        return build_full_prompt(paragraphs)
