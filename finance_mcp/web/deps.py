from fastapi import Request

from finance_mcp.core.database import Database


def get_database(request: Request) -> Database:
    """Return the Database opened by the application lifespan."""
    return request.app.state.database
