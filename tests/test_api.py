"""
Tests for the REST API routes.

Uses FastAPI TestClient against a real NoteCache with a temp vault.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient

from vault_notes.api.app import create_app
from vault_notes.cache.note_cache import NoteCache


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_vault(tmp_path: Path) -> Path:
    vault = tmp_path / "vault"
    vault.mkdir()

    (vault / "Inbox.md").write_text(
        "---\n"
        "tags: [inbox]\n"
        "---\n"
        "\n"
        "# Projects\n"
        "\n"
        "## Work\n"
        "- [ ] Draft plan 📅 2026-02-28\n",
        encoding="utf-8",
    )

    (vault / "projects").mkdir()
    (vault / "projects" / "Roadmap.md").write_text("# Q4\nShip it\n", encoding="utf-8")

    return vault


@pytest.fixture
def client_with_vault(tmp_path):
    vault = _make_vault(tmp_path)
    cache = NoteCache()
    cache.initialize(vault, set())
    app = create_app(cache)
    return TestClient(app), vault


@pytest.fixture
def client(client_with_vault):
    return client_with_vault[0]


# ---------------------------------------------------------------------------
# Note endpoints
# ---------------------------------------------------------------------------

class TestNoteEndpoints:
    def test_list_notes(self, client):
        resp = client.get("/api/notes")
        assert resp.status_code == 200
        assert resp.json() == [{"path": "Inbox.md"}, {"path": "projects/Roadmap.md"}]

    def test_list_notes_folder(self, client):
        resp = client.get("/api/notes", params={"folder": "projects"})
        assert [n["path"] for n in resp.json()] == ["projects/Roadmap.md"]

    def test_list_notes_escape(self, client):
        resp = client.get("/api/notes", params={"folder": "../.."})
        assert resp.status_code == 400

    def test_get_note(self, client):
        resp = client.get("/api/notes/Inbox")
        assert resp.status_code == 200
        data = resp.json()
        assert data["frontmatter"] == {"tags": ["inbox"]}
        assert [s["title"] for s in data["sections"]] == ["Projects", "Work"]

    def test_get_nested_note(self, client):
        resp = client.get("/api/notes/projects/Roadmap.md")
        assert resp.status_code == 200
        assert resp.json()["sections"][0]["body"] == "Ship it\n"

    def test_get_note_not_found(self, client):
        resp = client.get("/api/notes/Nope")
        assert resp.status_code == 404

    def test_create_note(self, client_with_vault):
        client, vault = client_with_vault
        resp = client.post("/api/notes", json={
            "path": "ideas/Garden",
            "frontmatter": {"tags": ["#plants"], "beds": 2, "organic": True},
            "body": "Plan the beds",
        })
        assert resp.status_code == 201
        assert resp.json()["frontmatter"] == {"tags": ["plants"], "beds": 2, "organic": True}
        assert (vault / "ideas" / "Garden.md").read_text(encoding="utf-8") == (
            '---\ntags: ["plants"]\nbeds: 2\norganic: true\n---\n\nPlan the beds'
        )

    def test_create_existing(self, client):
        resp = client.post("/api/notes", json={"path": "Inbox"})
        assert resp.status_code == 400

    def test_daily(self, client):
        resp = client.get("/api/daily", params={"day": "2025-10-05"})
        assert resp.status_code == 200
        assert resp.json()["path"] == "daily/2025-10-05.md"

    def test_daily_bad_day(self, client):
        resp = client.get("/api/daily", params={"day": "someday"})
        assert resp.status_code == 400

    def test_cache_status(self, client):
        client.get("/api/notes/Inbox")
        resp = client.get("/api/cache/status")
        assert resp.status_code == 200
        assert resp.json()["notes_open"] == 1


# ---------------------------------------------------------------------------
# Front matter endpoints
# ---------------------------------------------------------------------------

class TestFrontmatterEndpoints:
    def test_set(self, client):
        resp = client.put("/api/notes/Inbox/frontmatter/status", json={"value": "triaged"})
        assert resp.status_code == 200
        assert resp.json()["frontmatter"] == {"tags": ["inbox"], "status": "triaged"}

    def test_set_list(self, client):
        resp = client.put("/api/notes/Inbox/frontmatter/aliases", json={"value": ["in", "box"]})
        assert resp.json()["frontmatter"]["aliases"] == ["in", "box"]

    def test_set_keeps_number_type(self, client):
        resp = client.put("/api/notes/Inbox/frontmatter/rating", json={"value": 4})
        assert resp.json()["frontmatter"]["rating"] == 4

    def test_remove(self, client):
        resp = client.delete("/api/notes/Inbox/frontmatter/tags")
        assert resp.status_code == 200
        assert resp.json()["frontmatter"] == {}

    def test_remove_missing(self, client):
        resp = client.delete("/api/notes/Inbox/frontmatter/nope")
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Section endpoints
# ---------------------------------------------------------------------------

class TestSectionEndpoints:
    def test_get_section_by_path(self, client):
        resp = client.get("/api/notes/Inbox/sections", params={"heading": "Projects > Work"})
        assert resp.status_code == 200
        assert resp.json()["title"] == "Work"

    def test_get_section_missing(self, client):
        resp = client.get("/api/notes/Inbox/sections", params={"heading": "Garden"})
        assert resp.status_code == 404

    def test_add_section(self, client_with_vault):
        client, vault = client_with_vault
        resp = client.post("/api/notes/projects/Roadmap/sections", json={
            "title": "Q1",
            "body": "Plan",
            "level": 1,
        })
        assert resp.status_code == 201
        assert (vault / "projects" / "Roadmap.md").read_text(encoding="utf-8") == (
            "# Q4\nShip it\n\n# Q1\nPlan"
        )

    def test_add_section_bad_level(self, client):
        resp = client.post("/api/notes/Inbox/sections", json={"title": "X", "level": 0})
        assert resp.status_code == 400

    def test_append_section(self, client):
        resp = client.patch("/api/notes/Inbox/sections", json={"heading": "work", "text": "- [ ] Next"})
        assert resp.status_code == 200
        assert resp.json()["body"].endswith("\n- [ ] Next")

    def test_append_missing(self, client):
        resp = client.patch("/api/notes/Inbox/sections", json={"heading": "Nope", "text": "x"})
        assert resp.status_code == 404

    def test_remove_section(self, client):
        resp = client.delete("/api/notes/Inbox/sections", params={"heading": "Work"})
        assert resp.status_code == 200
        data = client.get("/api/notes/Inbox").json()
        assert [s["title"] for s in data["sections"]] == ["Projects"]


# ---------------------------------------------------------------------------
# Task endpoints
# ---------------------------------------------------------------------------

class TestTaskEndpoints:
    def test_list_tasks(self, client):
        resp = client.get("/api/notes/Inbox/tasks")
        assert resp.status_code == 200
        tasks = resp.json()["tasks"]
        assert tasks[0]["description"] == "Draft plan"
        assert tasks[0]["due"] == "2026-02-28"

    def test_list_tasks_missing_section(self, client):
        resp = client.get("/api/notes/Inbox/tasks", params={"heading": "Nope"})
        assert resp.status_code == 404

    def test_add_task(self, client):
        resp = client.post("/api/notes/Inbox/tasks", json={
            "heading": "Work",
            "description": "Book travel",
            "start": "2026-03-02",
            "priority": "low",
        })
        assert resp.status_code == 201
        assert resp.json()["task"] == "- [ ] Book travel 🛫 2026-03-02 🔽"

    def test_add_task_bad_date(self, client):
        resp = client.post("/api/notes/Inbox/tasks", json={
            "heading": "Work",
            "description": "x",
            "due": "eventually",
        })
        assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Invalid paths and rejected values
# ---------------------------------------------------------------------------

OUTSIDE = "/api/notes/%2E%2E%2Foutside"


class TestRejectedInput:
    @pytest.mark.parametrize("method, suffix, kwargs", [
        ("get", "", {}),
        ("get", "/sections", {"params": {"heading": "A"}}),
        ("patch", "/sections", {"json": {"heading": "A", "text": "x"}}),
        ("delete", "/sections", {"params": {"heading": "A"}}),
        ("delete", "/frontmatter/a", {}),
        ("get", "/tasks", {}),
    ])
    def test_path_outside_vault_is_400(self, client, method, suffix, kwargs):
        resp = getattr(client, method)(OUTSIDE + suffix, **kwargs)
        assert resp.status_code == 400
        assert "escapes the vault" in resp.json()["detail"]

    def test_missing_notes_not_cached(self, client):
        for i in range(5):
            assert client.get(f"/api/notes/missing-{i}").status_code == 404
            assert client.get(f"/api/notes/missing-{i}/tasks").status_code == 404
        assert client.get("/api/cache/status").json()["notes_open"] == 0

    def test_create_with_multiline_value(self, client_with_vault):
        client, vault = client_with_vault
        resp = client.post("/api/notes", json={
            "path": "Draft",
            "frontmatter": {"title": "ok", "summary": "a\n---\n# Injected"},
        })
        assert resp.status_code == 400
        assert not (vault / "Draft.md").exists()
        assert client.get("/api/cache/status").json()["notes_dirty"] == 0

    def test_set_list_item_with_comma(self, client):
        resp = client.put("/api/notes/Inbox/frontmatter/authors", json={"value": ["Smith, John"]})
        assert resp.status_code == 400
