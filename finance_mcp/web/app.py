from contextlib import asynccontextmanager

from fastapi import FastAPI

from finance_mcp import __version__
from finance_mcp.core.config import Settings, settings as default_settings
from finance_mcp.core.database import Database
from finance_mcp.server import MCP_PATH, build_server
from finance_mcp.web.middleware import RequestContextMiddleware
from finance_mcp.web.routes import health, tools


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the HTTP transport around one Database owned by the app lifespan.

    MCP clients speak Streamable HTTP at ``/mcp``; ``/tools`` is a plain JSON
    view of the same registry.
    """
    settings = settings or default_settings
    database = database or Database(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        busy_timeout_ms=settings.SQLITE_BUSY_TIMEOUT_MS,
    )
    mcp_app = build_server(database).http_app(
        path=MCP_PATH,
        stateless_http=True,
        json_response=True,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the store on startup and release it on shutdown."""
        await database.connect()
        app.state.database = database
        try:
            async with mcp_app.lifespan(app):
                yield
        finally:
            await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Personal finance bookkeeping tools",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(RequestContextMiddleware)

    app.include_router(tools.router, prefix="/tools", tags=["tools"])
    app.include_router(health.router, tags=["health"])
    # Last, so the routers above take precedence over the catch-all mount.
    app.mount("/", mcp_app)
    return app
