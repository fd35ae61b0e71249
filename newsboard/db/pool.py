# newsboard/db/pool.py
from __future__ import annotations

import logging
from typing import Optional

import asyncpg
from fastapi import Request

from newsboard import config

logger = logging.getLogger("newsboard.db")


async def connect_db(dsn: Optional[str] = None) -> asyncpg.Pool:
    dsn = dsn or config.DB_DSN
    if not dsn:
        raise RuntimeError("DATABASE_URL is not configured")
    pool = await asyncpg.create_pool(
        dsn=dsn,
        min_size=config.DB_POOL_MIN_SIZE,
        max_size=config.DB_POOL_MAX_SIZE,
        command_timeout=config.DB_COMMAND_TIMEOUT,
    )
    logger.info("Database pool opened", extra={"event": "db_pool_opened"})
    return pool


async def close_db(pool: Optional[asyncpg.Pool]) -> None:
    if pool is None:
        return
    await pool.close()
    logger.info("Database pool closed", extra={"event": "db_pool_closed"})


def get_db(request: Request) -> asyncpg.Pool:
    """FastAPI dependency: the pool opened by the app lifespan."""
    pool = getattr(request.app.state, "db", None)
    if pool is None:
        raise RuntimeError("Database pool is not initialized. Call connect_db() on startup.")
    return pool
