"""asyncpg-backed implementation of the DatabaseRepository protocol."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import asyncpg

from ....core.exceptions import ConfigurationError, DatabaseError

logger = logging.getLogger(__name__)

SLOW_QUERY_THRESHOLD_MS = 100


class AsyncpgDatabaseRepository:
    """Run parameterised SQL against an asyncpg connection pool.

    Rows are returned as plain dicts so repositories never depend on
    ``asyncpg.Record``.
    """

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self._pool = pool
        self._schema = schema

    @property
    def schema(self) -> str:
        return self._schema

    async def execute_query(self, query: str, *args: Any) -> List[Dict[str, Any]]:
        """Fetch all rows as dicts."""
        start_time = datetime.now(timezone.utc)

        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Query failed: {e}")
            raise DatabaseError(f"Query failed: {e}") from e

        duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
        if duration_ms > SLOW_QUERY_THRESHOLD_MS:
            logger.warning(f"Slow query ({duration_ms:.2f}ms): {query[:100]}...")

        return [dict(row) for row in rows]

    async def execute_fetchrow(self, query: str, *args: Any) -> Optional[Dict[str, Any]]:
        """Fetch the first row as a dict, or None."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(query, *args)
                return dict(row) if row else None
        except asyncpg.PostgresError as e:
            logger.error(f"Fetchrow failed: {e}")
            raise DatabaseError(f"Fetchrow failed: {e}") from e

    async def execute_fetchval(self, query: str, *args: Any) -> Any:
        """Fetch the first column of the first row."""
        try:
            async with self._pool.acquire() as conn:
                return await conn.fetchval(query, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Fetchval failed: {e}")
            raise DatabaseError(f"Fetchval failed: {e}") from e

    async def execute_command(self, command: str, *args: Any) -> str:
        """Run a statement and return the asyncpg status tag, e.g. ``UPDATE 1``."""
        try:
            async with self._pool.acquire() as conn:
                return await conn.execute(command, *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Command failed: {e}")
            raise DatabaseError(f"Command failed: {e}") from e


async def create_database_pool(
    database_url: Optional[str],
    min_size: int = 2,
    max_size: int = 10,
    command_timeout: float = 30.0,
) -> asyncpg.Pool:
    """Create the asyncpg pool used by every repository."""
    if not database_url:
        raise ConfigurationError("DATABASE_URL is not configured")

    pool = await asyncpg.create_pool(
        dsn=database_url,
        min_size=min_size,
        max_size=max_size,
        command_timeout=command_timeout,
    )
    logger.info(f"Database pool created (min={min_size}, max={max_size})")
    return pool
