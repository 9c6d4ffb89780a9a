import asyncio

from finance_mcp.core.config import settings
from finance_mcp.core.logging_config import setup_logging
from finance_mcp.server import serve_stdio
from finance_mcp.web.app import create_app

setup_logging(settings)

# HTTP transport; run with `uvicorn main:app` or `TRANSPORT=http python main.py`
app = create_app(settings)


def run() -> None:
    """Start the server on the transport selected by TRANSPORT."""
    if settings.TRANSPORT == "http":
        import uvicorn

        uvicorn.run(app, host=settings.HOST, port=settings.PORT)
    else:
        asyncio.run(serve_stdio(settings))


if __name__ == "__main__":
    run()
