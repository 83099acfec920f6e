"""
Database connection pool for the Postgres data source.

One pool per process, created at startup and handed to PostgresDataSource.
Ad-hoc queries go through connection().
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager

import asyncpg

from resource_lists.config import settings

pool: asyncpg.Pool | None = None


async def init_pool(dsn: str | None = None) -> asyncpg.Pool:
    """
    Initialize the connection pool.
    Called once at startup. Returns the pool so callers can pass it on.
    """
    global pool
    if pool is not None:
        return pool
    pool = await asyncpg.create_pool(
        dsn=dsn or settings.require_database_url(),
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=60,
        init=_init_connection,
    )
    return pool


def get_pool() -> asyncpg.Pool:
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return pool


async def close_pool() -> None:
    """
    Close the connection pool.
    Called at shutdown.
    """
    global pool
    if pool is not None:
        await pool.close()
        pool = None


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode json/jsonb columns to Python dicts and lists."""
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )
    await conn.set_type_codec(
        "json",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


@asynccontextmanager
async def connection():
    """
    Acquire a pooled connection inside a transaction.

    Usage:
        async with connection() as conn:
            rows = await conn.fetch("SELECT id FROM resources WHERE collection = $1", name)
    """
    async with get_pool().acquire() as conn:
        async with conn.transaction():
            yield conn
