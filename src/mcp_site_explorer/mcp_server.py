"""FastMCP server definition (tools + resources)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from mcp.server.fastmcp import Context, FastMCP

from .models import ExplorerView, FolderNode, SearchResults
from .navigation import Browsing
from .session import Explorer


@dataclass(slots=True)
class AppContext:
    explorer: Explorer


def create_mcp_server(explorer: Explorer) -> FastMCP:
    # The index is loaded by the hosting app before requests are served;
    # every MCP request shares the same explorer.
    @asynccontextmanager
    async def lifespan(_: FastMCP) -> AsyncIterator[AppContext]:
        yield AppContext(explorer=explorer)

    mcp = FastMCP(
        "Site Explorer",
        instructions=(
            "Browse and search a statically generated site through its search index. "
            "Navigate folders with folders_open/folders_up, and search titles, names, "
            "paths and page text with search or search_set_query."
        ),
        lifespan=lifespan,
        stateless_http=True,
        json_response=True,
    )

    @mcp.resource("site-tree://root")
    async def read_tree_resource() -> FolderNode:
        """Return the folder tree below the content root."""
        return explorer.folder_tree()

    @mcp.tool()
    async def explorer_view(ctx: Context) -> ExplorerView:
        """Show the current folder listing, or the active search results."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.view()

    @mcp.tool()
    async def folders_open(path: str, ctx: Context) -> ExplorerView:
        """Open the folder at an absolute path such as /content/guide."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.open_folder(path)

    @mcp.tool()
    async def folders_up(ctx: Context) -> ExplorerView:
        """Go up one folder (no-op at the content root)."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.go_up()

    @mcp.tool()
    async def folders_list(path: str, ctx: Context) -> ExplorerView:
        """List a folder without changing the current position."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.render(Browsing(path))

    @mcp.tool()
    async def folders_tree(ctx: Context) -> FolderNode:
        """Return the folder tree below the content root."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.folder_tree()

    @mcp.tool()
    async def search_set_query(query: str, ctx: Context) -> ExplorerView:
        """Set the explorer's search query; an empty query returns to the last folder."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.set_query(query)

    @mcp.tool()
    async def search(query: str, ctx: Context, limit: int | None = None) -> SearchResults:
        """Search titles, names, paths and page text (case-insensitive substring)."""
        app: AppContext = ctx.request_context.lifespan_context
        return app.explorer.search(query, limit)

    return mcp
