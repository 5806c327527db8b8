"""Loading the site's ``search_index.json`` over HTTP or from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from .errors import IndexLoadError
from .models import SiteIndex
from .paths import with_base
from .settings import Settings

logger = logging.getLogger(__name__)


def parse_index(data: Any, *, source: str) -> SiteIndex:
    """Validate decoded JSON into a ``SiteIndex``."""
    if not isinstance(data, dict):
        raise IndexLoadError(source=source, reason=f"Unexpected JSON type: {type(data).__name__}")
    try:
        return SiteIndex.model_validate(data)
    except ValidationError as exc:
        raise IndexLoadError(source=source, reason=f"Invalid index document: {exc}") from exc


class SiteIndexClient:
    """Thin wrapper fetching the index from the published site."""

    def __init__(
        self,
        *,
        base_url: str,
        index_path: str,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._index_path = index_path if index_path.startswith("/") else f"/{index_path}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_index(self) -> SiteIndex:
        try:
            resp = await self._client.get(self._index_path, headers={"Cache-Control": "no-cache"})
        except httpx.HTTPError as exc:
            raise IndexLoadError(source=self._index_path, reason=str(exc) or type(exc).__name__) from exc

        url = str(resp.request.url)
        if resp.status_code >= 400:
            raise IndexLoadError(
                source=url,
                reason=(resp.text or "").strip() or resp.reason_phrase,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise IndexLoadError(source=url, reason="Response is not valid JSON") from exc
        return parse_index(data, source=url)


def read_index_file(path: Path) -> SiteIndex:
    source = str(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise IndexLoadError(source=source, reason=str(exc)) from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        # Covers undecodable bytes as well as malformed JSON.
        raise IndexLoadError(source=source, reason="File is not valid JSON") from exc
    return parse_index(data, source=source)


async def load_site_index(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SiteIndex:
    """Load the index from ``SITE_INDEX_FILE`` when set, otherwise from ``SITE_URL``."""
    if settings.site_index_file is not None:
        index = read_index_file(settings.site_index_file)
        logger.info(
            "Loaded site index from %s (%d pages, %d files)",
            settings.site_index_file,
            len(index.pages),
            len(index.files),
        )
        return index

    client = SiteIndexClient(
        base_url=str(settings.site_url),
        index_path=with_base(settings.site_index_path, settings.site_base_path),
        timeout_seconds=settings.http_timeout_seconds,
        transport=transport,
    )
    try:
        index = await client.fetch_index()
    finally:
        await client.aclose()
    logger.info(
        "Fetched site index from %s (%d pages, %d files)",
        settings.site_url,
        len(index.pages),
        len(index.files),
    )
    return index
