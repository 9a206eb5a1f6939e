import logging

from fastapi import APIRouter, Depends
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.dependencies import get_session

router = APIRouter()
logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("users", "events", "venues")


@router.get("")
async def health_check():
    """Report basic service health.

    Returns:
        A simple status message.
    """
    return {"status": "ok"}


@router.get("/db-check")
async def db_check(session: AsyncSession = Depends(get_session)):
    """Verify database connectivity and required tables.

    Returns:
        Status details indicating database health.
    """
    try:
        await session.execute(text("SELECT 1"))
        tables = await session.run_sync(
            lambda sync_session: inspect(sync_session.connection()).get_table_names()
        )
    except SQLAlchemyError as e:
        logger.error(f"Database check failed: {e}")
        return {"status": "error", "details": str(e)}
    for table in REQUIRED_TABLES:
        if table not in tables:
            return {"status": "error", "details": f"table '{table}' missing"}
    return {"status": "ok"}
