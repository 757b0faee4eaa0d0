"""
Tests for data store access
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

import utils.database as database
from config import settings
from utils.database import fetch_rows, get_db_pool
from utils.errors import StoreQueryFailure


pytestmark = pytest.mark.asyncio

SQL = 'SELECT id FROM "resources" ORDER BY "averagerating" DESC LIMIT $1 OFFSET $2'


def fake_pool(**fetch_kwargs):
    pool = MagicMock()
    pool.fetch = AsyncMock(**fetch_kwargs)
    return pool


async def test_rows_returned_as_dicts():
    pool = fake_pool(return_value=[{"id": "r1"}, {"id": "r2"}])

    rows = await fetch_rows(SQL, (20, 0), pool=pool)

    assert rows == [{"id": "r1"}, {"id": "r2"}]
    pool.fetch.assert_awaited_once_with(SQL, 20, 0)


@pytest.mark.parametrize("error", [asyncio.TimeoutError(), OSError("connection reset")])
async def test_store_errors_wrapped(error):
    pool = fake_pool(side_effect=error)

    with pytest.raises(StoreQueryFailure) as exc_info:
        await fetch_rows(SQL, (20, 0), pool=pool)

    assert exc_info.value.sql == SQL
    assert exc_info.value.params == (20, 0)
    assert exc_info.value.message == "Search query failed"


async def test_concurrent_first_use_creates_one_pool(monkeypatch):
    created = MagicMock()

    async def slow_create_pool(*args, **kwargs):
        await asyncio.sleep(0.01)
        return created

    create_pool = AsyncMock(side_effect=slow_create_pool)
    monkeypatch.setattr(database, "_pool", None)
    monkeypatch.setattr(database, "_pool_lock", asyncio.Lock())
    monkeypatch.setattr(database.asyncpg, "create_pool", create_pool)
    monkeypatch.setattr(settings, "database_url", "postgresql://localhost/resources")

    first, second = await asyncio.gather(get_db_pool(), get_db_pool())

    assert first is created
    assert second is created
    assert create_pool.await_count == 1


async def test_missing_database_url_is_store_failure(monkeypatch):
    monkeypatch.setattr(database, "_pool", None)
    monkeypatch.setattr(database, "_pool_lock", asyncio.Lock())
    monkeypatch.setattr(settings, "database_url", None)

    with pytest.raises(StoreQueryFailure):
        await get_db_pool()
