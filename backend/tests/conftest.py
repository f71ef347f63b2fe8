"""
Pytest configuration and fixtures for the bilingual editorial test suite.

This module provides reusable fixtures for:
- A scripted fake LLM gateway (no network, no credentials)
- Temporary SQLite history stores
- Settings instances isolated from the developer's .env files
"""

import asyncio
import json
import os
import re
from typing import Callable, List, Optional, Union

# Keep the module-level engine from pointing at a real database file
os.environ["DATABASE_URL"] = ""

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from editorial.config import Settings  # noqa: E402
from editorial.core.history.store import SQLHistoryStore  # noqa: E402
from editorial.core.translation.models import LLMResponse, PromptBundle, PromptKind  # noqa: E402
from editorial.core.translation.pipeline import LLMGateway  # noqa: E402
from editorial.models.database.base import create_session_maker, init_db  # noqa: E402

PARAGRAPH_BLOCK = re.compile(r"# Paragraph \d+\n(.*?)(?=\n\n# Paragraph \d+\n|\Z)", re.DOTALL)

Outcome = Union[str, Exception]
Responder = Callable[[PromptBundle, List[str]], Outcome]


def prompt_paragraphs(bundle: PromptBundle) -> List[str]:
    """Recover the source paragraphs rendered into a chunk prompt."""
    return PARAGRAPH_BLOCK.findall(bundle.user_prompt or "")


def zh(paragraph: str) -> str:
    """Deterministic stand-in translation."""
    return f"译:{paragraph}"


def full_response(
    paragraphs: List[str],
    *,
    title: Optional[dict] = None,
    author: Optional[dict] = None,
    analysis: Optional[dict] = None,
) -> str:
    return json.dumps(
        {
            "title": title if title is not None else {"en": "", "zh": ""},
            "author": author if author is not None else {"en": "", "zh": ""},
            "translation": [zh(p) for p in paragraphs],
            "analysis": analysis
            if analysis is not None
            else {
                "summary": "摘要",
                "narrativeDetail": "叙事",
                "themes": ["主题"],
                "pros": ["优点"],
                "cons": ["不足"],
            },
        },
        ensure_ascii=False,
    )


def translation_response(paragraphs: List[str]) -> str:
    return json.dumps({"translation": [zh(p) for p in paragraphs]}, ensure_ascii=False)


def default_responder(bundle: PromptBundle, paragraphs: List[str]) -> Outcome:
    if bundle.kind is PromptKind.FULL:
        return full_response(paragraphs)
    return translation_response(paragraphs)


class FakeGateway(LLMGateway):
    """Gateway stub that answers each call from a responder function.

    ``delay`` maps a chunk's paragraphs to a sleep in seconds so tests
    can force trailing chunks to finish out of order.
    """

    def __init__(
        self,
        responder: Responder = default_responder,
        delay: Optional[Callable[[List[str]], float]] = None,
    ) -> None:
        self.responder = responder
        self.delay = delay
        self.calls: List[PromptBundle] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def provider(self) -> str:
        return "fake"

    @property
    def model(self) -> str:
        return "fake-model"

    async def call(self, bundle: PromptBundle) -> LLMResponse:
        self.calls.append(bundle)
        paragraphs = prompt_paragraphs(bundle)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay is not None:
                await asyncio.sleep(self.delay(paragraphs))
            else:
                await asyncio.sleep(0)
            outcome = self.responder(bundle, paragraphs)
        finally:
            self.in_flight -= 1

        if isinstance(outcome, Exception):
            raise outcome
        return LLMResponse(content=outcome, provider=self.provider, model=self.model)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def test_settings() -> Settings:
    """Settings that ignore .env files and the process environment's keys."""
    return Settings(
        _env_file=None,
        database_url="",
        deepseek_api_key="sk-test",
        chunk_size=5500,
        max_concurrency=4,
    )


@pytest.fixture
def history_store(tmp_path) -> SQLHistoryStore:
    """History store backed by a fresh SQLite file."""
    # NullPool: each asyncio.run gets connections bound to its own loop
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'history.db'}", poolclass=NullPool
    )
    asyncio.run(init_db(engine))
    yield SQLHistoryStore(create_session_maker(engine))
    asyncio.run(engine.dispose())
