"""Seed record repository.

Generic access to the tenant catalog tables (membership types, stages,
discipleship pathways) that onboarding plugins populate. Table names come
from ``SeedTables`` and are never user supplied.
"""

import logging
from typing import Any, Dict

from ....core.exceptions import DatabaseError
from ....features.database.entities.protocols import DatabaseRepository

logger = logging.getLogger(__name__)


class SeedRecordDatabaseRepository:
    """Database repository for onboarding seed records."""

    def __init__(self, database_repository: DatabaseRepository, schema: str = "public"):
        """Initialize with existing database repository.

        Args:
            database_repository: Database repository used for all queries
            schema: Schema holding the tenant catalog tables
        """
        self._db = database_repository
        self._schema = schema

    def _table(self, table: str) -> str:
        return f"{self._schema}.{table}"

    async def exists_by_code(self, table: str, tenant_id: str, code: str) -> bool:
        """Check for a live record with the given code in the tenant."""
        query = f"""
            SELECT id FROM {self._table(table)}
            WHERE tenant_id = $1 AND code = $2 AND deleted_at IS NULL
            LIMIT 1
        """
        try:
            row = await self._db.execute_fetchrow(query, tenant_id, code)
        except Exception as e:
            logger.error(f"Failed to look up {table} '{code}' for tenant {tenant_id}: {e}")
            raise DatabaseError(f"Failed to look up {table} record: {e}") from e

        return row is not None

    async def create(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record and return the stored row."""
        columns = list(record.keys())
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        query = f"""
            INSERT INTO {self._table(table)} ({", ".join(columns)})
            VALUES ({placeholders})
            RETURNING *
        """
        try:
            row = await self._db.execute_fetchrow(query, *record.values())
        except Exception as e:
            logger.error(f"Failed to insert into {table}: {e}")
            raise DatabaseError(f"Failed to insert {table} record: {e}") from e

        if row is None:
            raise DatabaseError(f"Insert into {table} returned no row")

        logger.debug(f"Inserted {table} record '{record.get('code')}'")
        return row
