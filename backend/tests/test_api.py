"""Tests for the HTTP endpoints."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from notetagger.config import Settings
from notetagger.core.models.tagger_settings import TaggerSettings
from notetagger.core.repositories.implementations.filesystem.note_repository import (
    FilesystemNoteRepository,
)
from notetagger.core.repositories.implementations.filesystem.settings_repository import (
    JsonSettingsStore,
)
from notetagger.dependencies import get_client_factory, get_note_repository, get_settings_store
from notetagger.main import app, create_app

from fakes import BASE_URL

NOTE_TEXT = "---\ncreated: 2024-05-01\ntags:\n- old\n---\nMeeting notes about the roadmap.\n"


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    (root / "work").mkdir(parents=True)
    (root / "work" / "meeting.md").write_text(NOTE_TEXT, encoding="utf-8")
    (root / "plain.md").write_text("No front matter here.\n", encoding="utf-8")
    return root


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"api_key": "sk-test", "base_url": BASE_URL, "model_name": "test-model"}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def client(vault, settings_file, endpoint):
    app.dependency_overrides[get_note_repository] = lambda: FilesystemNoteRepository(vault)
    app.dependency_overrides[get_settings_store] = lambda: JsonSettingsStore(settings_file)
    app.dependency_overrides[get_client_factory] = lambda: endpoint.client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    resp = client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_generate_tags(client, endpoint):
    endpoint.reply("roadmap, planning，meeting")
    resp = client.post("/api/v1/tags/generate", json={"title": "Meeting", "content": "Roadmap talk"})
    assert resp.status_code == 200
    assert resp.json() == {"tags": ["roadmap", "planning", "meeting"]}


def test_generate_tags_remote_failure(client, endpoint):
    endpoint.fail(401, "unauthorized")
    resp = client.post("/api/v1/tags/generate", json={"content": "x"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "failed to generate tags"


def test_merge_tags(client):
    resp = client.post("/api/v1/tags/merge", json={"text": "Body\n", "tags": ["a", " ", "b"]})
    assert resp.status_code == 200
    assert resp.json()["text"] == "---\ntags:\n- a\n- b\n---\n\nBody\n"


def test_merge_without_tags_keeps_text(client):
    resp = client.post("/api/v1/tags/merge", json={"text": "Body\n", "tags": []})
    assert resp.json()["text"] == "Body\n"


def test_list_and_get_notes(client):
    listed = client.get("/api/v1/notes/").json()
    assert [n["path"] for n in listed] == ["plain.md", "work/meeting.md"]

    resp = client.get("/api/v1/notes/work/meeting.md")
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "meeting"
    assert body["front_matter"] == {"created": "2024-05-01", "tags": ["old"]}

    assert client.get("/api/v1/notes/plain.md").json()["front_matter"] is None
    assert client.get("/api/v1/notes/missing.md").status_code == 404


def test_get_note_with_non_string_keys(client, vault):
    (vault / "week.md").write_text("---\non: monday\n2024: year\n---\nPlan\n", encoding="utf-8")
    resp = client.get("/api/v1/notes/week.md")
    assert resp.status_code == 200
    assert resp.json()["front_matter"] == {"on": "monday", "2024": "year"}


def test_non_utf8_note(client, endpoint, vault):
    (vault / "bad.md").write_bytes(b"caf\xe9\n")

    listed = client.get("/api/v1/notes/")
    assert listed.status_code == 200

    assert client.get("/api/v1/notes/bad.md").status_code == 404

    resp = client.post("/api/v1/notes/bad.md/tags")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "no active document"
    assert endpoint.requests == []
    assert (vault / "bad.md").read_bytes() == b"caf\xe9\n"


def test_tag_note_updates_file(client, endpoint, vault):
    endpoint.reply("roadmap, planning")
    resp = client.post("/api/v1/notes/work/meeting.md/tags")
    assert resp.status_code == 200
    assert resp.json() == {
        "path": "work/meeting.md",
        "tags": ["roadmap", "planning"],
        "updated": True,
        "message": "tags updated: roadmap, planning",
    }
    assert (vault / "work" / "meeting.md").read_text(encoding="utf-8") == (
        "---\ncreated: 2024-05-01\ntags:\n- roadmap\n- planning\n---\nMeeting notes about the roadmap.\n"
    )


def test_tag_note_with_selection(client, endpoint):
    endpoint.reply("roadmap")
    resp = client.post("/api/v1/notes/plain.md/tags", json={"selection": "roadmap review"})
    assert resp.status_code == 200
    assert "Title" not in endpoint.last_user_prompt
    assert "roadmap review" in endpoint.last_user_prompt


def test_tag_missing_note(client, endpoint):
    resp = client.post("/api/v1/notes/missing.md/tags")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "no active document"
    assert endpoint.requests == []


def test_tag_note_no_tags(client, endpoint, vault):
    endpoint.reply("")
    resp = client.post("/api/v1/notes/work/meeting.md/tags")
    assert resp.status_code == 422
    assert resp.json()["detail"] == "no tags generated"
    assert (vault / "work" / "meeting.md").read_text(encoding="utf-8") == NOTE_TEXT


def test_tag_note_remote_failure_leaves_file(client, endpoint, vault):
    endpoint.fail(500, "boom")
    resp = client.post("/api/v1/notes/work/meeting.md/tags")
    assert resp.status_code == 502
    assert (vault / "work" / "meeting.md").read_text(encoding="utf-8") == NOTE_TEXT


def test_settings_masks_api_key(client):
    body = client.get("/api/v1/settings/").json()
    assert body["api_key"] == "********"
    assert body["model_name"] == "test-model"
    assert body["max_results"] == 4


def test_settings_update(client, settings_file):
    resp = client.put("/api/v1/settings/", json={"max_results": 2, "api_key": "sk-new"})
    assert resp.status_code == 200
    assert resp.json()["max_results"] == 2

    stored = json.loads(settings_file.read_text(encoding="utf-8"))
    assert stored["api_key"] == "sk-new"
    assert stored["model_name"] == "test-model"


def test_settings_update_keeps_key_when_stored_value_invalid(client, settings_file):
    settings_file.write_text(json.dumps({"api_key": "sk-keep", "max_results": 42}), encoding="utf-8")
    resp = client.put("/api/v1/settings/", json={"model_name": "m2"})
    assert resp.status_code == 200

    stored = json.loads(settings_file.read_text(encoding="utf-8"))
    assert stored["api_key"] == "sk-keep"
    assert stored["model_name"] == "m2"
    assert stored["max_results"] == 4


@pytest.mark.parametrize("value", [0, 11])
def test_settings_rejects_out_of_range_max_results(client, settings_file, value):
    before = settings_file.read_text(encoding="utf-8")
    resp = client.put("/api/v1/settings/", json={"max_results": value})
    assert resp.status_code == 422
    assert settings_file.read_text(encoding="utf-8") == before


def test_max_results_applies_to_note_tagging(client, endpoint):
    client.put("/api/v1/settings/", json={"max_results": 1})
    endpoint.reply("one, two, three")
    resp = client.post("/api/v1/notes/plain.md/tags")
    assert resp.json()["tags"] == ["one"]


def test_default_settings_are_valid():
    assert 1 <= TaggerSettings().max_results <= 10


def test_proxy_headers_only_for_configured_proxies():
    plain = create_app(Settings(forwarded_allow_ips=[]))
    assert ProxyHeadersMiddleware not in [m.cls for m in plain.user_middleware]

    proxied = create_app(Settings(forwarded_allow_ips=["10.0.0.1"]))
    assert ProxyHeadersMiddleware in [m.cls for m in proxied.user_middleware]
