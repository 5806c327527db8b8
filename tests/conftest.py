from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from mcp_site_explorer.models import FileItem, PageItem, SiteIndex

SAMPLE_INDEX: dict[str, Any] = {
    "pages": [
        {
            "title": "Intro",
            "url": "/content/guide/intro.html",
            "path": "/content/guide/intro.html",
            "body": "Welcome to the guide.",
        },
        {
            "title": "Setup",
            "url": "/content/guide/setup.html",
            "path": "/content/guide/setup.html",
            "body": "Install the tools, then read the intro again.",
        },
        {
            "title": "Home",
            "url": "/content/index.html",
            "path": "/content/index.html",
            "body": "",
        },
    ],
    "files": [
        {
            "name": "logo.png",
            "url": "/content/assets/logo.png",
            "path": "/content/assets/logo.png",
        },
        {
            "name": "readme.txt",
            "url": "/other/readme.txt",
            "path": "/other/readme.txt",
        },
    ],
}


def page(title: str, url: str, path: str | None = None, body: str = "") -> PageItem:
    return PageItem(title=title, url=url, path=url if path is None else path, body=body)


def file(name: str, url: str, path: str | None = None) -> FileItem:
    return FileItem(name=name, url=url, path=url if path is None else path)


@pytest.fixture
def sample_index() -> SiteIndex:
    return SiteIndex.model_validate(SAMPLE_INDEX)


@pytest.fixture
def index_file(tmp_path: Path) -> Path:
    target = tmp_path / "search_index.json"
    target.write_text(json.dumps(SAMPLE_INDEX), encoding="utf-8")
    return target


@pytest.fixture
def site_env(monkeypatch: pytest.MonkeyPatch, index_file: Path) -> Path:
    monkeypatch.setenv("MCP_API_KEY", "k")
    monkeypatch.setenv("SITE_INDEX_FILE", str(index_file))
    monkeypatch.delenv("SITE_URL", raising=False)
    monkeypatch.delenv("SITE_BASE_PATH", raising=False)
    return index_file
