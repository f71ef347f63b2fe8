"""
Tests for the HTTP API (editorial/main.py and editorial/api/v1/routes/).

Dependencies are overridden so the routes talk to FakeGateway and a
temporary SQLite history store.
"""

import json
from typing import List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from editorial.api.dependencies import get_optional_history_store, get_translation_service
from editorial.config import Settings
from editorial.core.history.store import HistoryEntry, HistoryStore
from editorial.core.translation.models import PipelineResult, PromptKind
from editorial.core.translation.orchestrator import TranslationService
from editorial.main import app

from conftest import FakeGateway, default_responder, zh

PARAGRAPHS = ["TOKYO WEEDS", "By Amos Lee", "The weeds grew everywhere that summer."]


class FailingStore(HistoryStore):
    """Store whose writes always fail."""

    async def save(self, result, entry_id=None, created_at=None) -> Tuple[str, int]:
        raise RuntimeError("disk full")

    async def list(self, limit: int = 100) -> List[HistoryEntry]:
        return []

    async def remove(self, entry_id: str) -> None:
        return None


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(history_store, test_settings, gateway):
    """Test client wired to the fake gateway and a temporary history store."""
    app.dependency_overrides[get_optional_history_store] = lambda: history_store
    app.dependency_overrides[get_translation_service] = lambda: TranslationService(
        settings=test_settings, history_store=history_store, gateway=gateway
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _override_service(service: TranslationService, store: Optional[HistoryStore] = None):
    app.dependency_overrides[get_translation_service] = lambda: service
    app.dependency_overrides[get_optional_history_store] = lambda: store


class TestTranslate:
    def test_translate_paragraphs(self, client):
        response = client.post("/api/v1/translate", json={"paragraphs": PARAGRAPHS})

        assert response.status_code == 200
        data = response.json()
        assert data["title"]["en"] == "TOKYO WEEDS"
        assert data["author"]["en"] == "Amos Lee"
        assert data["translation"][0] == {"en": "TOKYO WEEDS", "zh": zh("TOKYO WEEDS")}
        assert data["analysis"]["narrativeDetail"] == "叙事"
        assert data["id"]
        assert isinstance(data["createdAt"], int)

        history = client.get("/api/v1/history").json()
        assert [entry["id"] for entry in history] == [data["id"]]

    def test_translate_raw_text(self, client, gateway):
        text = "TOKYO WEEDS\r\n\r\nBy Amos Lee\n\n  \n\nBody text."

        response = client.post("/api/v1/translate", json={"text": text})

        assert response.status_code == 200
        sources = [pair["en"] for pair in response.json()["translation"]]
        assert sources == ["TOKYO WEEDS", "By Amos Lee", "Body text."]

    def test_empty_request_is_400(self, client, gateway):
        response = client.post("/api/v1/translate", json={"paragraphs": ["  ", ""]})

        assert response.status_code == 400
        assert gateway.calls == []

    def test_missing_api_key_is_503(self, client):
        settings = Settings(_env_file=None, database_url="", deepseek_api_key="YOUR_DEEPSEEK_API_KEY")
        _override_service(TranslationService(settings=settings))

        response = client.post("/api/v1/translate", json={"paragraphs": PARAGRAPHS})

        assert response.status_code == 503
        assert "DEEPSEEK_API_KEY" in response.json()["detail"]

    def test_malformed_first_chunk_is_502_and_not_saved(self, client, history_store, test_settings):
        gateway = FakeGateway(lambda bundle, paragraphs: "not json at all")
        _override_service(
            TranslationService(settings=test_settings, history_store=history_store, gateway=gateway),
            history_store,
        )

        response = client.post("/api/v1/translate", json={"paragraphs": PARAGRAPHS})

        assert response.status_code == 502
        assert client.get("/api/v1/history").json() == []

    def test_history_failure_does_not_fail_translation(self, client, test_settings):
        _override_service(
            TranslationService(settings=test_settings, history_store=FailingStore(), gateway=FakeGateway())
        )

        response = client.post("/api/v1/translate", json={"paragraphs": PARAGRAPHS})

        assert response.status_code == 200
        assert response.json()["id"] is None


class TestTranslateStream:
    def test_ndjson_progress_and_done(self, client):
        paragraphs = [f"P{i:02d} " + "w" * 96 for i in range(9)]
        settings = Settings(_env_file=None, database_url="", deepseek_api_key="sk-test", chunk_size=300)
        _override_service(TranslationService(settings=settings, gateway=FakeGateway()))

        response = client.post("/api/v1/translate/stream", json={"paragraphs": paragraphs})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/x-ndjson")
        events = [json.loads(line) for line in response.text.splitlines() if line]
        assert [e["type"] for e in events] == ["progress"] * 4 + ["done"]
        assert [e["percent"] for e in events[:4]] == [0, 33, 67, 100]
        assert events[-1]["result"]["translation"][8]["en"] == paragraphs[8]

    def test_done_event_carries_history_id(self, client):
        response = client.post("/api/v1/translate/stream", json={"paragraphs": PARAGRAPHS})

        done = json.loads(response.text.splitlines()[-1])
        assert done["type"] == "done"
        assert done["id"]
        assert done["createdAt"] > 0

    def test_run_failure_ends_stream_with_error(self, client, test_settings):
        def responder(bundle, paragraphs):
            if bundle.kind is PromptKind.FULL:
                return '{"analysis": {}}'
            return default_responder(bundle, paragraphs)

        _override_service(TranslationService(settings=test_settings, gateway=FakeGateway(responder)))

        response = client.post("/api/v1/translate/stream", json={"paragraphs": PARAGRAPHS})

        last = json.loads(response.text.splitlines()[-1])
        assert last == {
            "type": "error",
            "message": "Malformed model response, please retry",
            "category": "malformed_response",
        }

    def test_invalid_request_is_rejected_before_streaming(self, client):
        response = client.post("/api/v1/translate/stream", json={"text": "\n\n"})
        assert response.status_code == 400


class TestHistory:
    def test_save_list_delete(self, client):
        body = {
            "title": {"en": "TOKYO WEEDS", "zh": "东京杂草"},
            "content": [{"en": "TOKYO WEEDS", "zh": "东京杂草"}],
            "analysis": {"summary": "摘要", "narrativeDetail": "细节"},
        }

        saved = client.post("/api/v1/history", json=body).json()
        listed = client.get("/api/v1/history").json()

        assert listed[0]["id"] == saved["id"]
        assert listed[0]["createdAt"] == saved["createdAt"]
        assert listed[0]["analysis"]["narrativeDetail"] == "细节"

        assert client.delete(f"/api/v1/history/{saved['id']}").status_code == 204
        assert client.get("/api/v1/history").json() == []

    def test_upsert_by_id(self, client):
        base = {"id": "fixed-id", "createdAt": 1700000000000, "content": [{"en": "A", "zh": "甲"}]}
        client.post("/api/v1/history", json=base)
        client.post("/api/v1/history", json={**base, "content": [{"en": "A", "zh": "乙"}]})

        listed = client.get("/api/v1/history").json()

        assert len(listed) == 1
        assert listed[0]["content"] == [{"en": "A", "zh": "乙"}]
        assert listed[0]["createdAt"] == 1700000000000

    def test_empty_content_is_400(self, client):
        assert client.post("/api/v1/history", json={"content": []}).status_code == 400

    def test_delete_by_query(self, client):
        saved = client.post("/api/v1/history", json={"content": [{"en": "A", "zh": "甲"}]}).json()

        assert client.delete(f"/api/v1/history?id={saved['id']}").status_code == 204
        assert client.delete("/api/v1/history").status_code == 400
        assert client.get("/api/v1/history").json() == []

    def test_history_disabled_is_503(self, client):
        app.dependency_overrides[get_optional_history_store] = lambda: None

        assert client.get("/api/v1/history").status_code == 503
        assert client.post("/api/v1/history", json={"content": [{"en": "A"}]}).status_code == 503


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert "history_enabled" in health


def test_stored_result_round_trips_through_api(client, history_store):
    """A saved run reads back as the same PipelineResult."""
    data = client.post("/api/v1/translate", json={"paragraphs": PARAGRAPHS}).json()

    entry = HistoryEntry.model_validate(client.get("/api/v1/history").json()[0])

    assert entry.id == data["id"]
    assert entry.to_result() == PipelineResult.model_validate(
        {k: data[k] for k in ("title", "author", "translation", "analysis")}
    )
