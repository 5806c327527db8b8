"""Substring search over the flat item list."""

from __future__ import annotations

from collections.abc import Iterable

from .models import IndexedItem, PageItem

DEFAULT_MAX_RESULTS = 40


def normalize_query(text: str | None) -> str:
    return (text or "").lower().strip()


def root_marker(root_name: str) -> str:
    """Substring that marks a reference as living under the content root."""
    return f"{root_name}/"


def search_reference(item: IndexedItem) -> str:
    return item.path or item.url


def haystack(item: IndexedItem) -> str:
    body = item.body if isinstance(item, PageItem) else ""
    return f"{item.identifier} {body} {item.path} {item.url}".lower()


def search_items(
    items: Iterable[IndexedItem],
    query: str,
    root_name: str,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[IndexedItem]:
    """Return at most ``max_results`` items whose haystack contains ``query``.

    The query is normalized here as well, so an empty or blank query matches
    nothing. Results keep the order of ``items``.
    """
    q = normalize_query(query)
    if not q or max_results < 1:
        return []

    marker = root_marker(root_name)
    matches: list[IndexedItem] = []
    for item in items:
        if marker not in search_reference(item):
            continue
        if q not in haystack(item):
            continue
        matches.append(item)
        if len(matches) >= max_results:
            break
    return matches
