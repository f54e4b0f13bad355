"""
Income/expense transaction writer.

Creates, edits and deletes draft transactions (a header plus its line
items). Workflow transitions past draft are handled by
``FinancialTransactionService`` through the header entity.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from ....config.constants import TransactionStatus, TransactionType
from ....core.exceptions import BusinessLogicError, EntityNotFoundError
from ....utils.uuid import generate_uuid_v7
from ..entities.protocols import FinancialTransactionHeaderRepository, IncomeExpenseTransactionRepository
from ..entities.transaction import FinancialTransactionHeader, IncomeExpenseTransaction

logger = logging.getLogger(__name__)

# Line fields a draft edit may change; transaction_type is fixed at creation
UPDATABLE_LINE_FIELDS = frozenset({
    "transaction_date",
    "description",
    "reference",
    "amount",
    "source_id",
    "category_id",
    "fund_id",
    "account_id",
})

# Columns that are NOT NULL on the line item
REQUIRED_LINE_FIELDS = frozenset({"transaction_date", "description", "amount"})


def generate_transaction_number(transaction_date: date) -> str:
    """Human-facing number, e.g. ``TXN-20261018-3F9A1C``."""
    suffix = generate_uuid_v7().replace("-", "")[-6:].upper()
    return f"TXN-{transaction_date:%Y%m%d}-{suffix}"


class IncomeExpenseTransactionService:
    """Writes draft income/expense transactions."""

    def __init__(
        self,
        header_repository: FinancialTransactionHeaderRepository,
        line_repository: IncomeExpenseTransactionRepository
    ):
        self._headers = header_repository
        self._lines = line_repository

    async def create(
        self,
        tenant_id: str,
        *,
        transaction_type: TransactionType,
        transaction_date: date,
        description: str,
        amount: Decimal,
        source_id: Optional[str] = None,
        category_id: Optional[str] = None,
        fund_id: Optional[str] = None,
        account_id: Optional[str] = None,
        reference: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> Tuple[FinancialTransactionHeader, IncomeExpenseTransaction]:
        """Create a draft header with a single line item."""
        amount = Decimal(str(amount))
        if amount <= 0:
            raise BusinessLogicError("Transaction amount must be greater than zero")

        now = datetime.now(timezone.utc)
        header = FinancialTransactionHeader(
            id=generate_uuid_v7(),
            tenant_id=tenant_id,
            transaction_number=generate_transaction_number(transaction_date),
            transaction_date=transaction_date,
            description=description,
            reference=reference,
            status=TransactionStatus.DRAFT,
            created_at=now,
            updated_at=now,
            created_by=user_id,
            updated_by=user_id,
        )
        header = await self._headers.create(header)

        line = IncomeExpenseTransaction(
            id=generate_uuid_v7(),
            tenant_id=tenant_id,
            header_id=header.id,
            transaction_type=TransactionType(transaction_type),
            transaction_date=transaction_date,
            description=description,
            reference=reference,
            amount=amount,
            source_id=source_id,
            category_id=category_id,
            fund_id=fund_id,
            account_id=account_id,
            created_at=now,
            updated_at=now,
            created_by=user_id,
            updated_by=user_id,
        )
        line = await self._lines.create(line)

        logger.info(
            f"Created {line.transaction_type.value} transaction {header.transaction_number}",
            extra={"tenant_id": tenant_id, "header_id": header.id, "amount": str(amount)}
        )
        return header, line

    async def update(
        self,
        tenant_id: str,
        transaction_id: str,
        changes: Dict[str, Any],
        user_id: Optional[str] = None
    ) -> Tuple[FinancialTransactionHeader, IncomeExpenseTransaction]:
        """Apply changes to a draft line item and mirror date/description onto its header."""
        unknown = set(changes) - UPDATABLE_LINE_FIELDS
        if unknown:
            raise BusinessLogicError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)}
            )
        nulled = sorted(key for key in REQUIRED_LINE_FIELDS if key in changes and changes[key] is None)
        if nulled:
            raise BusinessLogicError(
                f"Fields cannot be cleared: {', '.join(nulled)}",
                details={"fields": nulled}
            )
        if "amount" in changes:
            changes = {**changes, "amount": Decimal(str(changes["amount"]))}
            if changes["amount"] <= 0:
                raise BusinessLogicError("Transaction amount must be greater than zero")

        line, header = await self._load_draft(tenant_id, transaction_id, "update")

        now = datetime.now(timezone.utc)
        updated_line = replace(line, **changes, updated_at=now, updated_by=user_id or line.updated_by)
        updated_line = await self._lines.update(updated_line)

        header_changes = {
            key: changes[key]
            for key in ("transaction_date", "description", "reference")
            if key in changes
        }
        if header_changes:
            header = replace(header, **header_changes, updated_at=now, updated_by=user_id or header.updated_by)
            header = await self._headers.update(header)

        logger.info(
            f"Updated transaction {transaction_id}",
            extra={"tenant_id": tenant_id, "fields": sorted(changes)}
        )
        return header, updated_line

    async def delete(self, tenant_id: str, transaction_id: str, user_id: Optional[str] = None) -> bool:
        """Soft delete a draft transaction and all of its line items."""
        line, header = await self._load_draft(tenant_id, transaction_id, "delete")

        await self._lines.soft_delete_by_header(tenant_id, header.id, user_id)
        deleted = await self._headers.soft_delete(tenant_id, header.id, user_id)

        logger.info(
            f"Deleted transaction {header.transaction_number}",
            extra={"tenant_id": tenant_id, "header_id": header.id}
        )
        return deleted

    async def _load_draft(
        self,
        tenant_id: str,
        transaction_id: str,
        action: str
    ) -> Tuple[IncomeExpenseTransaction, FinancialTransactionHeader]:
        line = await self._lines.find_by_id(tenant_id, transaction_id)
        if line is None or not line.header_id:
            raise EntityNotFoundError("Transaction", transaction_id)

        header = await self._headers.find_by_id(tenant_id, line.header_id)
        if header is None:
            raise EntityNotFoundError("Transaction header", line.header_id)

        header.ensure_editable(action)
        return line, header
