import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from finance_mcp.core.database import Database
from finance_mcp.web.deps import get_database

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", summary="Store liveness")
async def health(database: Database = Depends(get_database)) -> Any:
    """Report whether the ledger store answers, with its journal mode."""
    try:
        journal_mode = await database.ping()
    except (SQLAlchemyError, RuntimeError):
        logger.exception("Ledger store unreachable")
        return JSONResponse(status_code=503, content={"status": "degraded", "database": "error"})
    return {"status": "ok", "database": "ok", "journal_mode": journal_mode}
