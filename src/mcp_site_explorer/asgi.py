"""ASGI app hosting the MCP Streamable HTTP endpoint and the JSON explorer API."""

from __future__ import annotations

import contextlib
import secrets
from collections.abc import AsyncIterator, Awaitable, Callable

import httpx
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .mcp_server import create_mcp_server
from .navigation import Browsing, Searching
from .paths import root_path
from .search import normalize_query
from .session import Explorer
from .settings import Settings


class ApiKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: Starlette, *, api_key: str) -> None:
        super().__init__(app)
        self._api_key = api_key

    @staticmethod
    def _bypass_auth(path: str) -> bool:
        # Allow unauthenticated health checks and OAuth discovery probes.
        # Some MCP clients probe these endpoints before sending custom headers.
        if path == "/health":
            return True
        if path.startswith("/.well-known/"):
            return True
        return False

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if self._bypass_auth(request.url.path):
            return await call_next(request)
        presented = request.headers.get("x-api-key")
        if not presented or not secrets.compare_digest(presented, self._api_key):
            return JSONResponse({"error": "unauthorized"}, status_code=401)
        return await call_next(request)


def _explorer(request: Request) -> Explorer:
    return request.app.state.explorer


async def health(request: Request) -> Response:
    explorer = _explorer(request)
    items = len(explorer.session.items) if explorer.session is not None else 0
    return JSONResponse({"ok": True, "index_loaded": explorer.loaded, "items": items})


async def api_view(request: Request) -> Response:
    return JSONResponse(_explorer(request).view().model_dump())


async def api_folder(request: Request) -> Response:
    explorer = _explorer(request)
    path = request.query_params.get("path") or root_path(explorer.settings.content_root)
    return JSONResponse(explorer.render(Browsing(path)).model_dump())


async def api_search(request: Request) -> Response:
    explorer = _explorer(request)
    query = normalize_query(request.query_params.get("q"))
    if not query:
        return JSONResponse({"error": "missing query parameter 'q'"}, status_code=400)
    state = Searching(query=query, folder_path=root_path(explorer.settings.content_root))
    return JSONResponse(explorer.render(state).model_dump())


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Starlette:
    settings = settings or Settings()
    explorer = Explorer(settings)
    mcp = create_mcp_server(explorer)

    @contextlib.asynccontextmanager
    async def lifespan(_: Starlette) -> AsyncIterator[None]:
        # The tree must exist before any tool call can observe it.
        await explorer.load(transport=transport)
        # Streamable HTTP transport uses a session manager.
        async with mcp.session_manager.run():
            yield

    app = Starlette(
        routes=[
            Route("/health", endpoint=health, methods=["GET"]),
            Route("/api/view", endpoint=api_view, methods=["GET"]),
            Route("/api/folder", endpoint=api_folder, methods=["GET"]),
            Route("/api/search", endpoint=api_search, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    app.state.explorer = explorer

    # Mount MCP at /mcp (default for streamable-http when mounted at /).
    app.mount("/", mcp.streamable_http_app())
    app.add_middleware(ApiKeyMiddleware, api_key=settings.mcp_api_key)
    return app
