"""Financial transaction header repository using the database repository protocol."""

import logging
from typing import Any, Dict, Iterable, Optional

from ....config.constants import FinanceTables, TransactionStatus
from ....core.exceptions import DatabaseError
from ....features.database.entities.protocols import DatabaseRepository
from ..entities.transaction import FinancialTransactionHeader

logger = logging.getLogger(__name__)


class FinancialTransactionHeaderDatabaseRepository:
    """Database repository for financial transaction headers."""

    def __init__(self, database_repository: DatabaseRepository, schema: str = "public"):
        self._db = database_repository
        self._schema = schema
        self._table = f"{schema}.{FinanceTables.TRANSACTION_HEADERS}"

    async def find_by_id(self, tenant_id: str, header_id: str) -> Optional[FinancialTransactionHeader]:
        """Find a live header by ID."""
        query = f"""
            SELECT * FROM {self._table}
            WHERE tenant_id = $1 AND id = $2 AND deleted_at IS NULL
        """
        try:
            row = await self._db.execute_fetchrow(query, tenant_id, header_id)
        except Exception as e:
            logger.error(f"Failed to find transaction header {header_id}: {e}")
            raise DatabaseError(f"Failed to find transaction header: {e}") from e

        return self._map_row_to_header(row) if row else None

    async def find_by_ids(
        self,
        tenant_id: str,
        header_ids: Iterable[str]
    ) -> Dict[str, FinancialTransactionHeader]:
        """Find live headers by ID, keyed by ID."""
        ids = list(dict.fromkeys(header_ids))
        if not ids:
            return {}

        query = f"""
            SELECT * FROM {self._table}
            WHERE tenant_id = $1 AND id = ANY($2::uuid[]) AND deleted_at IS NULL
        """
        try:
            rows = await self._db.execute_query(query, tenant_id, ids)
        except Exception as e:
            logger.error(f"Failed to load {len(ids)} transaction headers: {e}")
            raise DatabaseError(f"Failed to load transaction headers: {e}") from e

        headers = [self._map_row_to_header(row) for row in rows]
        return {header.id: header for header in headers}

    async def create(self, header: FinancialTransactionHeader) -> FinancialTransactionHeader:
        """Insert a new header."""
        query = f"""
            INSERT INTO {self._table} (
                id, tenant_id, transaction_number, transaction_date, description,
                reference, status, created_at, updated_at, created_by, updated_by
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
            RETURNING *
        """
        try:
            row = await self._db.execute_fetchrow(
                query,
                header.id, header.tenant_id, header.transaction_number, header.transaction_date,
                header.description, header.reference, header.status.value,
                header.created_at, header.updated_at, header.created_by, header.updated_by
            )
        except Exception as e:
            logger.error(f"Failed to create transaction header {header.transaction_number}: {e}")
            raise DatabaseError(f"Failed to create transaction header: {e}") from e

        if row is None:
            raise DatabaseError("Failed to create transaction header")

        logger.info(f"Created transaction header {header.transaction_number}")
        return self._map_row_to_header(row)

    async def update(self, header: FinancialTransactionHeader) -> FinancialTransactionHeader:
        """Persist header fields and workflow stamps."""
        query = f"""
            UPDATE {self._table} SET
                transaction_date = $3, description = $4, reference = $5, status = $6,
                submitted_at = $7, submitted_by = $8, approved_at = $9, approved_by = $10,
                posted_at = $11, posted_by = $12, voided_at = $13, voided_by = $14,
                void_reason = $15, updated_at = $16, updated_by = $17
            WHERE tenant_id = $1 AND id = $2 AND deleted_at IS NULL
            RETURNING *
        """
        try:
            row = await self._db.execute_fetchrow(
                query,
                header.tenant_id, header.id, header.transaction_date, header.description,
                header.reference, header.status.value,
                header.submitted_at, header.submitted_by, header.approved_at, header.approved_by,
                header.posted_at, header.posted_by, header.voided_at, header.voided_by,
                header.void_reason, header.updated_at, header.updated_by
            )
        except Exception as e:
            logger.error(f"Failed to update transaction header {header.id}: {e}")
            raise DatabaseError(f"Failed to update transaction header: {e}") from e

        if row is None:
            raise DatabaseError(f"Transaction header {header.id} was not updated")

        return self._map_row_to_header(row)

    async def soft_delete(self, tenant_id: str, header_id: str, user_id: Optional[str] = None) -> bool:
        """Mark a header deleted."""
        query = f"""
            UPDATE {self._table}
            SET deleted_at = NOW(), updated_at = NOW(), updated_by = COALESCE($3, updated_by)
            WHERE tenant_id = $1 AND id = $2 AND deleted_at IS NULL
        """
        try:
            status = await self._db.execute_command(query, tenant_id, header_id, user_id)
        except Exception as e:
            logger.error(f"Failed to delete transaction header {header_id}: {e}")
            raise DatabaseError(f"Failed to delete transaction header: {e}") from e

        return status.endswith(" 1")

    def _map_row_to_header(self, row: Dict[str, Any]) -> FinancialTransactionHeader:
        return FinancialTransactionHeader(
            id=str(row["id"]),
            tenant_id=str(row["tenant_id"]),
            transaction_number=row.get("transaction_number") or "",
            transaction_date=row["transaction_date"],
            description=row.get("description") or "",
            reference=row.get("reference"),
            status=TransactionStatus(row.get("status") or TransactionStatus.DRAFT.value),
            submitted_at=row.get("submitted_at"),
            submitted_by=_optional_str(row.get("submitted_by")),
            approved_at=row.get("approved_at"),
            approved_by=_optional_str(row.get("approved_by")),
            posted_at=row.get("posted_at"),
            posted_by=_optional_str(row.get("posted_by")),
            voided_at=row.get("voided_at"),
            voided_by=_optional_str(row.get("voided_by")),
            void_reason=row.get("void_reason"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            created_by=_optional_str(row.get("created_by")),
            updated_by=_optional_str(row.get("updated_by")),
            deleted_at=row.get("deleted_at"),
        )


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None
