"""Lookup repository for ledger reference tables.

One instance per table: financial sources, categories, funds and the chart
of accounts all resolve to ``LedgerReference`` summaries.
"""

import logging
from typing import Any, Dict, Iterable

from ....core.exceptions import DatabaseError
from ....features.database.entities.protocols import DatabaseRepository
from ..entities.transaction import LedgerReference

logger = logging.getLogger(__name__)


class LedgerReferenceDatabaseRepository:
    """Read-only lookups against a ledger reference table."""

    def __init__(self, database_repository: DatabaseRepository, table: str, schema: str = "public"):
        self._db = database_repository
        self._table_name = table
        self._table = f"{schema}.{table}"

    @property
    def table_name(self) -> str:
        return self._table_name

    async def find_by_ids(self, tenant_id: str, ids: Iterable[str]) -> Dict[str, LedgerReference]:
        """Live records with the given IDs, keyed by ID. Unknown IDs are omitted."""
        unique_ids = list(dict.fromkeys(i for i in ids if i))
        if not unique_ids:
            return {}

        query = f"""
            SELECT * FROM {self._table}
            WHERE tenant_id = $1 AND id = ANY($2::uuid[]) AND deleted_at IS NULL
        """
        try:
            rows = await self._db.execute_query(query, tenant_id, unique_ids)
        except Exception as e:
            logger.error(f"Failed to load {self._table_name} records: {e}")
            raise DatabaseError(f"Failed to load {self._table_name} records: {e}") from e

        references = [self._map_row_to_reference(row) for row in rows]
        return {reference.id: reference for reference in references}

    @staticmethod
    def _map_row_to_reference(row: Dict[str, Any]) -> LedgerReference:
        return LedgerReference(
            id=str(row["id"]),
            name=row.get("name") or "",
            code=row.get("code"),
            type=row.get("type"),
            account_number=row.get("account_number"),
            account_type=row.get("account_type"),
        )
