import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from app.database.base import Base
from app import models  # noqa: F401 - registers tables on Base.metadata

logger = logging.getLogger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables (idempotent, CREATE IF NOT EXISTS semantics)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db.schema.ready", extra={"tables": sorted(Base.metadata.tables)})
