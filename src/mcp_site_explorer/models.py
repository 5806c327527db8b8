"""Index records and structured views returned by tools and the JSON API."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

ItemKind = Literal["page", "file"]


def _as_text(value: Any) -> str:
    """Strings pass through, numbers are stringified, anything else becomes ``""``."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


class _IndexRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str = ""
    path: str = ""

    @field_validator("url", "path", mode="before")
    @classmethod
    def _reference_as_text(cls, value: Any) -> str:
        return _as_text(value)


class PageItem(_IndexRecord):
    kind: Literal["page"] = "page"
    title: str = ""
    body: str = ""

    @field_validator("title", "body", mode="before")
    @classmethod
    def _text_as_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("kind", mode="before")
    @classmethod
    def _page_kind(cls, value: Any) -> str:
        return "page"

    @property
    def identifier(self) -> str:
        return self.title


class FileItem(_IndexRecord):
    kind: Literal["file"] = "file"
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("kind", mode="before")
    @classmethod
    def _file_kind(cls, value: Any) -> str:
        return "file"

    @property
    def identifier(self) -> str:
        return self.name


IndexedItem = PageItem | FileItem


class SiteIndex(BaseModel):
    """The ``search_index.json`` document produced by the site build."""

    model_config = ConfigDict(extra="ignore")

    pages: list[PageItem] = Field(default_factory=list)
    files: list[FileItem] = Field(default_factory=list)

    @field_validator("pages", "files", mode="before")
    @classmethod
    def _object_entries_only(cls, value: Any, info: ValidationInfo) -> list[Any]:
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning("Ignoring index field %r: expected a list, got %s", info.field_name, type(value).__name__)
            return []
        entries = [entry for entry in value if isinstance(entry, dict)]
        if len(entries) != len(value):
            logger.warning(
                "Skipped %d non-object entries in index field %r",
                len(value) - len(entries),
                info.field_name,
            )
        return entries

    def items(self) -> list[IndexedItem]:
        """Flatten into one list: pages first, then files, each in index order."""
        return [*self.pages, *self.files]


class LeafRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ItemKind
    display_name: str
    url: str
    path: str
    full_path: str


class FolderEntry(BaseModel):
    name: str
    path: str


class LeafEntry(BaseModel):
    kind: ItemKind
    name: str
    icon: str
    href: str
    full_path: str


ViewMode = Literal["browse", "search", "load_failed"]
ViewStatus = Literal["ok", "empty", "not_found", "results", "no_results", "load_failed"]


class ExplorerView(BaseModel):
    mode: ViewMode
    breadcrumb: str
    status: ViewStatus
    message: str = ""
    can_go_up: bool = False
    folders: list[FolderEntry] = Field(default_factory=list)
    leaves: list[LeafEntry] = Field(default_factory=list)


class SearchResults(BaseModel):
    query: str
    total: int = Field(ge=0)
    limit: int = Field(ge=1)
    items: list[LeafEntry]


class FolderNode(BaseModel):
    name: str
    path: str
    leaf_count: int = 0
    children: list[FolderNode] = Field(default_factory=list)
