"""Income/expense transaction (line item) repository."""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ....config.constants import FinanceTables, TransactionType
from ....core.exceptions import DatabaseError
from ....features.database.entities.protocols import DatabaseRepository
from ..entities.transaction import IncomeExpenseTransaction

logger = logging.getLogger(__name__)


class IncomeExpenseTransactionDatabaseRepository:
    """Database repository for income/expense line items."""

    def __init__(self, database_repository: DatabaseRepository, schema: str = "public"):
        self._db = database_repository
        self._schema = schema
        self._table = f"{schema}.{FinanceTables.INCOME_EXPENSE_TRANSACTIONS}"

    async def find_all(self, tenant_id: str) -> List[IncomeExpenseTransaction]:
        """All live line items for the tenant, newest first."""
        query = f"""
            SELECT * FROM {self._table}
            WHERE tenant_id = $1 AND deleted_at IS NULL
            ORDER BY transaction_date DESC, created_at DESC
        """
        try:
            rows = await self._db.execute_query(query, tenant_id)
        except Exception as e:
            logger.error(f"Failed to list transactions for tenant {tenant_id}: {e}")
            raise DatabaseError(f"Failed to retrieve financial transactions: {e}") from e

        return [self._map_row_to_line(row) for row in rows]

    async def find_by_id(self, tenant_id: str, transaction_id: str) -> Optional[IncomeExpenseTransaction]:
        query = f"""
            SELECT * FROM {self._table}
            WHERE tenant_id = $1 AND id = $2 AND deleted_at IS NULL
        """
        try:
            row = await self._db.execute_fetchrow(query, tenant_id, transaction_id)
        except Exception as e:
            logger.error(f"Failed to find transaction {transaction_id}: {e}")
            raise DatabaseError(f"Failed to find transaction: {e}") from e

        return self._map_row_to_line(row) if row else None

    async def find_by_header_id(self, tenant_id: str, header_id: str) -> List[IncomeExpenseTransaction]:
        query = f"""
            SELECT * FROM {self._table}
            WHERE tenant_id = $1 AND header_id = $2 AND deleted_at IS NULL
            ORDER BY created_at
        """
        try:
            rows = await self._db.execute_query(query, tenant_id, header_id)
        except Exception as e:
            logger.error(f"Failed to list lines of header {header_id}: {e}")
            raise DatabaseError(f"Failed to list transaction lines: {e}") from e

        return [self._map_row_to_line(row) for row in rows]

    async def create(self, line: IncomeExpenseTransaction) -> IncomeExpenseTransaction:
        query = f"""
            INSERT INTO {self._table} (
                id, tenant_id, header_id, transaction_type, transaction_date, description,
                reference, amount, source_id, category_id, fund_id, account_id,
                created_at, updated_at, created_by, updated_by
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15, $16)
            RETURNING *
        """
        try:
            row = await self._db.execute_fetchrow(
                query,
                line.id, line.tenant_id, line.header_id, line.transaction_type.value,
                line.transaction_date, line.description, line.reference, line.amount,
                line.source_id, line.category_id, line.fund_id, line.account_id,
                line.created_at, line.updated_at, line.created_by, line.updated_by
            )
        except Exception as e:
            logger.error(f"Failed to create transaction line: {e}")
            raise DatabaseError(f"Failed to create transaction line: {e}") from e

        if row is None:
            raise DatabaseError("Failed to create transaction line")

        return self._map_row_to_line(row)

    async def update(self, line: IncomeExpenseTransaction) -> IncomeExpenseTransaction:
        query = f"""
            UPDATE {self._table} SET
                transaction_date = $3, description = $4, reference = $5, amount = $6,
                source_id = $7, category_id = $8, fund_id = $9, account_id = $10,
                updated_at = $11, updated_by = $12
            WHERE tenant_id = $1 AND id = $2 AND deleted_at IS NULL
            RETURNING *
        """
        try:
            row = await self._db.execute_fetchrow(
                query,
                line.tenant_id, line.id, line.transaction_date, line.description,
                line.reference, line.amount, line.source_id, line.category_id,
                line.fund_id, line.account_id, line.updated_at, line.updated_by
            )
        except Exception as e:
            logger.error(f"Failed to update transaction {line.id}: {e}")
            raise DatabaseError(f"Failed to update transaction: {e}") from e

        if row is None:
            raise DatabaseError(f"Transaction {line.id} was not updated")

        return self._map_row_to_line(row)

    async def soft_delete_by_header(self, tenant_id: str, header_id: str, user_id: Optional[str] = None) -> int:
        """Mark every line of a header deleted. Returns the number of lines."""
        query = f"""
            UPDATE {self._table}
            SET deleted_at = NOW(), updated_at = NOW(), updated_by = COALESCE($3, updated_by)
            WHERE tenant_id = $1 AND header_id = $2 AND deleted_at IS NULL
        """
        try:
            status = await self._db.execute_command(query, tenant_id, header_id, user_id)
        except Exception as e:
            logger.error(f"Failed to delete lines of header {header_id}: {e}")
            raise DatabaseError(f"Failed to delete transaction lines: {e}") from e

        # asyncpg returns e.g. "UPDATE 2"
        try:
            return int(status.split()[-1])
        except (ValueError, IndexError):
            return 0

    def _map_row_to_line(self, row: Dict[str, Any]) -> IncomeExpenseTransaction:
        return IncomeExpenseTransaction(
            id=str(row["id"]),
            tenant_id=str(row["tenant_id"]),
            header_id=_optional_str(row.get("header_id")),
            transaction_type=TransactionType(row["transaction_type"]),
            transaction_date=row["transaction_date"],
            description=row.get("description") or "",
            reference=row.get("reference"),
            amount=Decimal(str(row.get("amount") or 0)),
            source_id=_optional_str(row.get("source_id")),
            category_id=_optional_str(row.get("category_id")),
            fund_id=_optional_str(row.get("fund_id")),
            account_id=_optional_str(row.get("account_id")),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            created_by=_optional_str(row.get("created_by")),
            updated_by=_optional_str(row.get("updated_by")),
            deleted_at=row.get("deleted_at"),
        )


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None
