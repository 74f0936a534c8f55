"""
Create every table on the configured database (idempotent: existing tables are left alone).

Usage: python -m app.db.init_db
"""

import asyncio
import logging

import app.core.models  # noqa: F401  registers all tables on Base.metadata
from app.db.session import Base, engine

logger = logging.getLogger(__name__)


async def init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
