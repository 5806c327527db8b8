"""Path and locator helpers."""

from __future__ import annotations


def split_path(raw: str | None) -> tuple[str, ...]:
    """Split ``raw`` into non-empty segments, ignoring leading/trailing/double slashes."""
    return tuple(seg for seg in (raw or "").lstrip("/").split("/") if seg)


def is_under_root(segments: tuple[str, ...], root_name: str) -> bool:
    return len(segments) > 0 and segments[0] == root_name


def join_path(segments: tuple[str, ...] | list[str]) -> str:
    return "/" + "/".join(segments)


def root_path(root_name: str) -> str:
    """Absolute folder path of the content root, e.g. ``/content``."""
    return join_path((root_name,))


def with_base(locator: str | None, base_path: str) -> str:
    """Prefix a root-absolute locator with the site base path.

    Relative locators and full URLs are returned unchanged.
    """
    base = (base_path or "").rstrip("/")
    if not locator:
        return base
    if not locator.startswith("/"):
        return locator
    return base + locator
