from __future__ import annotations

from pathlib import Path

import pytest
from starlette.testclient import TestClient

from mcp_site_explorer.asgi import create_app

HEADERS = {"x-api-key": "k"}


def test_folder_and_view_routes(site_env: Path) -> None:
    with TestClient(create_app()) as client:
        view = client.get("/api/view", headers=HEADERS).json()
        assert view["breadcrumb"] == "/content"
        assert [f["name"] for f in view["folders"]] == ["assets", "guide"]

        folder = client.get("/api/folder", params={"path": "/content/guide"}, headers=HEADERS).json()
        assert folder["status"] == "ok"
        assert folder["can_go_up"] is True
        assert [leaf["name"] for leaf in folder["leaves"]] == ["Intro", "Setup"]

        missing = client.get("/api/folder", params={"path": "/content/nope"}, headers=HEADERS).json()
        assert missing["status"] == "not_found"


def test_search_route(site_env: Path) -> None:
    with TestClient(create_app()) as client:
        r = client.get("/api/search", params={"q": " Intro "}, headers=HEADERS)
        assert r.status_code == 200
        body = r.json()
        assert body["breadcrumb"] == "/search: intro"
        assert [leaf["name"] for leaf in body["leaves"]] == ["Intro", "Setup"]

        r = client.get("/api/search", params={"q": "readme"}, headers=HEADERS)
        assert r.json()["status"] == "no_results"

        r = client.get("/api/search", params={"q": "  "}, headers=HEADERS)
        assert r.status_code == 400


def test_failed_index_load_still_serves(monkeypatch: pytest.MonkeyPatch, site_env: Path, tmp_path: Path) -> None:
    monkeypatch.setenv("SITE_INDEX_FILE", str(tmp_path / "missing.json"))
    with TestClient(create_app()) as client:
        assert client.get("/health").json() == {"ok": True, "index_loaded": False, "items": 0}
        view = client.get("/api/view", headers=HEADERS).json()
        assert view["mode"] == "load_failed"
        assert view["message"] == "Failed to load index."
