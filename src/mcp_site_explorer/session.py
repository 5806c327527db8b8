"""Explorer session: the tree, the flat item list and the navigation position.

One ``ExplorerSession`` exists per index load. ``Explorer`` owns the load step
and stands in with a ``load_failed`` view when the index could not be loaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from .errors import IndexLoadError
from .index_client import load_site_index
from .models import (
    ExplorerView,
    FolderEntry,
    FolderNode,
    IndexedItem,
    ItemKind,
    LeafEntry,
    LeafRef,
    SearchResults,
    SiteIndex,
)
from .navigation import Browsing, NavigationState, Searching, State, breadcrumb
from .paths import join_path, root_path, split_path, with_base
from .search import DEFAULT_MAX_RESULTS, normalize_query, search_items
from .settings import Settings
from .tree import (
    TreeNode,
    build_tree,
    child_path,
    list_folders,
    list_leaves,
    resolve,
    tree_reference,
    tree_snapshot,
)

logger = logging.getLogger(__name__)

ICONS: dict[ItemKind, str] = {"page": "📝", "file": "📄"}
UNTITLED = "Untitled"

FOLDER_NOT_FOUND = "Folder not found in index."
FOLDER_EMPTY = "This folder is empty."
NO_RESULTS = "No results"
LOAD_FAILED = "Failed to load index."


def _leaf_entry(leaf: LeafRef, base_path: str) -> LeafEntry:
    return LeafEntry(
        kind=leaf.kind,
        name=leaf.display_name,
        icon=ICONS[leaf.kind],
        href=with_base(leaf.url, base_path),
        full_path=leaf.full_path,
    )


def _hit_entry(item: IndexedItem, base_path: str) -> LeafEntry:
    return LeafEntry(
        kind=item.kind,
        name=item.identifier or UNTITLED,
        icon=ICONS[item.kind],
        href=with_base(item.url, base_path),
        full_path=join_path(split_path(tree_reference(item))),
    )


def check_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        raise ValueError("'limit' must be >= 1")


def load_failed_view() -> ExplorerView:
    return ExplorerView(mode="load_failed", breadcrumb="", status="load_failed", message=LOAD_FAILED)


def empty_tree(content_root: str) -> FolderNode:
    return FolderNode(name=content_root, path=root_path(content_root))


@dataclass(slots=True)
class ExplorerSession:
    items: list[IndexedItem]
    tree: TreeNode
    content_root: str
    max_results: int = DEFAULT_MAX_RESULTS
    base_path: str = ""
    navigation: NavigationState = field(init=False)

    def __post_init__(self) -> None:
        self.navigation = NavigationState(self.content_root)

    @classmethod
    def from_index(
        cls,
        index: SiteIndex,
        *,
        content_root: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        base_path: str = "",
    ) -> ExplorerSession:
        items = index.items()
        return cls(
            items=items,
            tree=build_tree(items, content_root),
            content_root=content_root,
            max_results=max_results,
            base_path=base_path,
        )

    @property
    def root_path(self) -> str:
        return root_path(self.content_root)

    def render(self, state: State) -> ExplorerView:
        if isinstance(state, Searching):
            return self._render_search(state)
        return self._render_folder(state)

    def _render_folder(self, state: Browsing) -> ExplorerView:
        folder_path = state.folder_path
        node = resolve(self.tree, folder_path)
        if node is None:
            return ExplorerView(
                mode="browse",
                breadcrumb=folder_path,
                status="not_found",
                message=FOLDER_NOT_FOUND,
            )

        folders = [FolderEntry(name=name, path=child_path(folder_path, name)) for name in list_folders(node)]
        leaves = [_leaf_entry(leaf, self.base_path) for leaf in list_leaves(node)]
        empty = not folders and not leaves
        return ExplorerView(
            mode="browse",
            breadcrumb=folder_path,
            status="empty" if empty else "ok",
            message=FOLDER_EMPTY if empty else "",
            can_go_up=split_path(folder_path) != split_path(self.root_path),
            folders=folders,
            leaves=leaves,
        )

    def _render_search(self, state: Searching) -> ExplorerView:
        hits = search_items(self.items, state.query, self.content_root, self.max_results)
        return ExplorerView(
            mode="search",
            breadcrumb=breadcrumb(state),
            status="results" if hits else "no_results",
            message=f"{len(hits)} result(s)" if hits else NO_RESULTS,
            leaves=[_hit_entry(item, self.base_path) for item in hits],
        )

    def view(self) -> ExplorerView:
        return self.render(self.navigation.current)

    def open_folder(self, path: str) -> ExplorerView:
        self.navigation.enter_folder(path)
        return self.view()

    def go_up(self) -> ExplorerView:
        self.navigation.go_up()
        return self.view()

    def set_query(self, text: str) -> ExplorerView:
        self.navigation.type_query(text)
        return self.view()

    def search(self, query: str, limit: int | None = None) -> SearchResults:
        """Run a search without touching the navigation position."""
        check_limit(limit)
        cap = self.max_results if limit is None else min(limit, self.max_results)
        q = normalize_query(query)
        hits = search_items(self.items, q, self.content_root, cap)
        entries = [_hit_entry(item, self.base_path) for item in hits]
        return SearchResults(query=q, total=len(entries), limit=cap, items=entries)

    def folder_tree(self) -> FolderNode:
        node = resolve(self.tree, self.root_path)
        if node is None:
            return empty_tree(self.content_root)
        return tree_snapshot(node, self.root_path)


class Explorer:
    """Owns the single index load of a running server."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.session: ExplorerSession | None = None
        self.load_error: IndexLoadError | None = None

    @property
    def loaded(self) -> bool:
        return self.session is not None

    async def load(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        try:
            index = await load_site_index(self.settings, transport=transport)
        except IndexLoadError as exc:
            logger.error("%s", exc)
            self.session = None
            self.load_error = exc
            return

        self.session = ExplorerSession.from_index(
            index,
            content_root=self.settings.content_root,
            max_results=self.settings.search_max_results,
            base_path=self.settings.site_base_path,
        )
        self.load_error = None

    def view(self) -> ExplorerView:
        if self.session is None:
            return load_failed_view()
        return self.session.view()

    def render(self, state: State) -> ExplorerView:
        if self.session is None:
            return load_failed_view()
        return self.session.render(state)

    def open_folder(self, path: str) -> ExplorerView:
        if self.session is None:
            return load_failed_view()
        return self.session.open_folder(path)

    def go_up(self) -> ExplorerView:
        if self.session is None:
            return load_failed_view()
        return self.session.go_up()

    def set_query(self, text: str) -> ExplorerView:
        if self.session is None:
            return load_failed_view()
        return self.session.set_query(text)

    def search(self, query: str, limit: int | None = None) -> SearchResults:
        check_limit(limit)
        if self.session is None:
            cap = self.settings.search_max_results if limit is None else min(limit, self.settings.search_max_results)
            return SearchResults(query=normalize_query(query), total=0, limit=cap, items=[])
        return self.session.search(query, limit)

    def folder_tree(self) -> FolderNode:
        if self.session is None:
            return empty_tree(self.settings.content_root)
        return self.session.folder_tree()
