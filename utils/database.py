"""
PostgreSQL access via asyncpg
"""
import asyncio
from typing import Any, Dict, List, Optional, Sequence

import asyncpg

from config import settings
from utils.errors import StoreQueryFailure
import logging

logger = logging.getLogger(__name__)

# Connection pool (lazy init)
_pool: Optional[asyncpg.Pool] = None
_pool_lock = asyncio.Lock()


async def _init_connection(conn):
    """Initialize connection with statement_timeout"""
    await conn.execute(f"SET statement_timeout = {int(settings.db_statement_timeout_ms)}")


async def get_db_pool() -> asyncpg.Pool:
    """Get or create connection pool (created once, even under concurrent first use)"""
    global _pool
    if _pool is not None:
        return _pool

    async with _pool_lock:
        if _pool is None:
            if not settings.database_url:
                raise StoreQueryFailure("DATABASE_URL not configured")
            try:
                _pool = await asyncpg.create_pool(
                    settings.database_url,
                    min_size=settings.db_pool_min_size,
                    max_size=settings.db_pool_max_size,
                    command_timeout=settings.db_command_timeout,
                    init=_init_connection,
                )
            except (asyncpg.PostgresError, OSError, asyncio.TimeoutError) as e:
                logger.error(f"Failed to create database pool: {e}")
                raise StoreQueryFailure("Data store unavailable") from e
            logger.info(
                f"Database pool created (min={settings.db_pool_min_size}, "
                f"max={settings.db_pool_max_size})"
            )
    return _pool


async def close_pool() -> None:
    """Close the connection pool if one was created"""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Database pool closed")


def _describe_params(params: Sequence[Any]) -> List[str]:
    """Abbreviate long parameters (vector literals) for log output"""
    described = []
    for value in params:
        text = repr(value)
        if len(text) > 80:
            text = f"{text[:40]}...<{len(text)} chars>"
        described.append(text)
    return described


async def fetch_rows(sql: str, params: Sequence[Any], pool: Optional[asyncpg.Pool] = None) -> List[Dict[str, Any]]:
    """
    Execute a compiled query and return rows as dictionaries

    Args:
        sql: Query text with $n placeholders
        params: Positional parameters, in placeholder order
        pool: Pool to use (the shared pool by default)

    Returns:
        List of row mappings

    Raises:
        StoreQueryFailure: If the query is rejected or times out
    """
    if pool is None:
        pool = await get_db_pool()

    try:
        records = await pool.fetch(sql, *params)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
        logger.error(
            f"Query execution failed: {e}\nSQL: {sql}\nParams: {_describe_params(params)}"
        )
        raise StoreQueryFailure("Search query failed", sql=sql, params=tuple(params)) from e

    return [dict(r) for r in records]
