"""
Financial Transaction Service

Read and mutation paths for a tenant's financial transactions. Reads go
through the tenant-scoped cache (cache-aside); every mutation that reaches
the database invalidates the tenant's cache entry, even when it fails part
way. The tenant is taken from the request context bound with ``tenant_scope``.
"""

import asyncio
import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar

from ....config.constants import DEFAULT_SEARCH_LIMIT, TransactionStatus, TransactionType
from ....core.exceptions import BusinessLogicError, EntityNotFoundError
from ....core.shared.context import get_current_user_id, require_tenant_id
from ..entities.protocols import (
    FinancialTransactionHeaderRepository,
    IncomeExpenseTransactionRepository,
    LedgerReferenceRepository,
)
from ..entities.transaction import (
    EnrichedFinancialTransaction,
    FinancialTransactionHeader,
    IncomeExpenseTransaction,
    TransactionSearchFilters,
)
from .income_expense_service import IncomeExpenseTransactionService
from .transaction_cache import FinancialTransactionCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FinancialTransactionService:
    """Cache-aware access to financial transactions for the current tenant."""

    def __init__(
        self,
        line_repository: IncomeExpenseTransactionRepository,
        header_repository: FinancialTransactionHeaderRepository,
        source_repository: LedgerReferenceRepository,
        category_repository: LedgerReferenceRepository,
        fund_repository: LedgerReferenceRepository,
        account_repository: LedgerReferenceRepository,
        writer: IncomeExpenseTransactionService,
        cache: FinancialTransactionCache,
        default_search_limit: int = DEFAULT_SEARCH_LIMIT
    ):
        self._lines = line_repository
        self._headers = header_repository
        self._sources = source_repository
        self._categories = category_repository
        self._funds = fund_repository
        self._accounts = account_repository
        self._writer = writer
        self._cache = cache
        self._default_search_limit = default_search_limit

    # Reads

    async def get_all_transactions(self) -> List[EnrichedFinancialTransaction]:
        """All enriched transactions for the current tenant, cached."""
        tenant_id = require_tenant_id()

        cached = self._cache.get(tenant_id)
        if cached is not None:
            return cached

        lines = await self._lines.find_all(tenant_id)
        enriched = await self._enrich(tenant_id, lines)

        self._cache.set(tenant_id, enriched)
        logger.debug(f"Loaded {len(enriched)} transactions for tenant {tenant_id}")
        return enriched

    async def search_transactions(
        self,
        filters: Optional[TransactionSearchFilters] = None
    ) -> List[EnrichedFinancialTransaction]:
        """Filter the tenant's transactions. All filters are combined with AND."""
        filters = filters or TransactionSearchFilters()
        transactions = await self.get_all_transactions()

        if filters.search_term and filters.search_term.strip():
            term = filters.search_term.strip().lower()
            transactions = [t for t in transactions if _matches_search_term(t, term)]

        if filters.transaction_type:
            transaction_type = TransactionType(filters.transaction_type)
            transactions = [t for t in transactions if t.transaction_type == transaction_type]

        if filters.status:
            status = TransactionStatus(filters.status)
            # A line without a header never matches a status filter
            transactions = [t for t in transactions if t.header is not None and t.header.status == status]

        transactions = _filter_by_date(transactions, filters.start_date, filters.end_date)

        if filters.category_id:
            transactions = [t for t in transactions if t.category_id == filters.category_id]
        if filters.source_id:
            transactions = [t for t in transactions if t.source_id == filters.source_id]
        if filters.fund_id:
            transactions = [t for t in transactions if t.fund_id == filters.fund_id]

        limit = filters.limit if filters.limit is not None else self._default_search_limit
        return transactions[:limit]

    async def get_transaction(self, transaction_id: str) -> Optional[EnrichedFinancialTransaction]:
        """Direct lookup of one transaction, bypassing the cache."""
        tenant_id = require_tenant_id()

        line = await self._lines.find_by_id(tenant_id, transaction_id)
        if line is None:
            return None

        enriched = await self._enrich(tenant_id, [line])
        return enriched[0]

    async def get_transaction_stats(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Counts and totals by type and status over an optional date range."""
        transactions = _filter_by_date(await self.get_all_transactions(), start_date, end_date)

        by_type: Dict[str, Dict[str, Any]] = {}
        by_status: Dict[str, int] = {}
        total_income = Decimal("0")
        total_expense = Decimal("0")

        for t in transactions:
            type_key = t.transaction_type.value if t.transaction_type else "unknown"
            bucket = by_type.setdefault(type_key, {"count": 0, "total_amount": Decimal("0")})
            bucket["count"] += 1
            bucket["total_amount"] += t.amount

            status_key = t.status.value
            by_status[status_key] = by_status.get(status_key, 0) + 1

            if t.transaction_type == TransactionType.INCOME:
                total_income += t.amount
            elif t.transaction_type == TransactionType.EXPENSE:
                total_expense += t.amount

        return {
            "total": len(transactions),
            "by_type": [
                {"transaction_type": key, "count": value["count"], "total_amount": value["total_amount"]}
                for key, value in by_type.items()
            ],
            "by_status": [
                {"status": key, "count": count}
                for key, count in by_status.items()
            ],
            "total_income": total_income,
            "total_expense": total_expense,
            "net_income": total_income - total_expense,
        }

    # Mutations

    async def create_transaction(
        self,
        *,
        transaction_type: TransactionType,
        transaction_date: date,
        description: str,
        amount: Decimal,
        source_id: Optional[str] = None,
        category_id: Optional[str] = None,
        fund_id: Optional[str] = None,
        account_id: Optional[str] = None,
        reference: Optional[str] = None
    ) -> EnrichedFinancialTransaction:
        """Create a draft transaction with one line item."""
        tenant_id = require_tenant_id()

        header, line = await self._write(tenant_id, self._writer.create(
            tenant_id,
            transaction_type=transaction_type,
            transaction_date=transaction_date,
            description=description,
            amount=amount,
            source_id=source_id,
            category_id=category_id,
            fund_id=fund_id,
            account_id=account_id,
            reference=reference,
            user_id=get_current_user_id(),
        ))

        return await self._enrich_one(tenant_id, line, header)

    async def update_transaction(self, transaction_id: str, changes: Dict[str, Any]) -> EnrichedFinancialTransaction:
        """Edit a draft transaction."""
        tenant_id = require_tenant_id()

        header, line = await self._write(tenant_id, self._writer.update(
            tenant_id, transaction_id, changes, user_id=get_current_user_id()
        ))

        return await self._enrich_one(tenant_id, line, header)

    async def submit_transaction(self, transaction_id: str) -> EnrichedFinancialTransaction:
        return await self._transition(transaction_id, "submit", lambda h, user: h.submit(user))

    async def approve_transaction(self, transaction_id: str) -> EnrichedFinancialTransaction:
        return await self._transition(transaction_id, "approve", lambda h, user: h.approve(user))

    async def post_transaction(self, transaction_id: str) -> EnrichedFinancialTransaction:
        return await self._transition(transaction_id, "post", lambda h, user: h.post(user))

    async def void_transaction(self, transaction_id: str, reason: str) -> EnrichedFinancialTransaction:
        return await self._transition(transaction_id, "void", lambda h, user: h.void(reason, user))

    async def delete_transaction(self, transaction_id: str) -> bool:
        """Soft delete a draft transaction."""
        tenant_id = require_tenant_id()

        return await self._write(
            tenant_id, self._writer.delete(tenant_id, transaction_id, user_id=get_current_user_id())
        )

    async def _transition(
        self,
        transaction_id: str,
        action: str,
        apply: Callable[[FinancialTransactionHeader, Optional[str]], None]
    ) -> EnrichedFinancialTransaction:
        """Load the header of a line, apply a workflow transition and persist it."""
        tenant_id = require_tenant_id()
        user_id = get_current_user_id()

        line = await self._lines.find_by_id(tenant_id, transaction_id)
        if line is None or not line.header_id:
            raise EntityNotFoundError("Transaction", transaction_id)

        header = await self._headers.find_by_id(tenant_id, line.header_id)
        if header is None:
            raise EntityNotFoundError("Transaction header", line.header_id)

        header = replace(header)
        apply(header, user_id)
        header = await self._write(tenant_id, self._headers.update(header))

        logger.info(
            f"Transaction {header.transaction_number} {action}: now '{header.status.value}'",
            extra={"tenant_id": tenant_id, "transaction_id": transaction_id, "user_id": user_id}
        )
        return await self._enrich_one(tenant_id, line, header)

    async def _write(self, tenant_id: str, operation: Awaitable[T]) -> T:
        """Await a write and drop the tenant's cached list once it may have changed rows.

        Rejections raised before anything is written leave the cache alone.
        Any other failure can follow a committed statement of a multi-step
        write (line then header), so the entry is dropped before re-raising.
        """
        try:
            result = await operation
        except (BusinessLogicError, EntityNotFoundError):
            raise
        except Exception:
            self._cache.invalidate(tenant_id)
            raise
        self._cache.invalidate(tenant_id)
        return result

    # Enrichment

    async def _enrich_one(
        self,
        tenant_id: str,
        line: IncomeExpenseTransaction,
        header: FinancialTransactionHeader
    ) -> EnrichedFinancialTransaction:
        enriched = await self._enrich(tenant_id, [line], headers={header.id: header})
        return enriched[0]

    async def _enrich(
        self,
        tenant_id: str,
        lines: List[IncomeExpenseTransaction],
        headers: Optional[Dict[str, FinancialTransactionHeader]] = None
    ) -> List[EnrichedFinancialTransaction]:
        """Join line items with headers and ledger references, fetched concurrently."""
        if not lines:
            return []

        async def known_headers() -> Dict[str, FinancialTransactionHeader]:
            return headers

        header_lookup = (
            known_headers() if headers is not None
            else self._headers.find_by_ids(tenant_id, _ids(line.header_id for line in lines))
        )

        header_map, source_map, category_map, fund_map, account_map = await asyncio.gather(
            header_lookup,
            self._sources.find_by_ids(tenant_id, _ids(line.source_id for line in lines)),
            self._categories.find_by_ids(tenant_id, _ids(line.category_id for line in lines)),
            self._funds.find_by_ids(tenant_id, _ids(line.fund_id for line in lines)),
            self._accounts.find_by_ids(tenant_id, _ids(line.account_id for line in lines)),
        )

        return [
            EnrichedFinancialTransaction.from_line(
                line,
                header=header_map.get(line.header_id) if line.header_id else None,
                source=source_map.get(line.source_id) if line.source_id else None,
                category=category_map.get(line.category_id) if line.category_id else None,
                fund=fund_map.get(line.fund_id) if line.fund_id else None,
                account=account_map.get(line.account_id) if line.account_id else None,
            )
            for line in lines
        ]


def _ids(values: Iterable[Optional[str]]) -> List[str]:
    """Distinct non-empty ids, first-seen order."""
    return list(dict.fromkeys(v for v in values if v))


def _matches_search_term(transaction: EnrichedFinancialTransaction, term: str) -> bool:
    header = transaction.header
    haystacks = (
        transaction.description,
        transaction.reference,
        header.description if header else None,
        header.transaction_number if header else None,
    )
    return any(term in value.lower() for value in haystacks if value)


def _filter_by_date(
    transactions: List[EnrichedFinancialTransaction],
    start_date: Optional[date],
    end_date: Optional[date]
) -> List[EnrichedFinancialTransaction]:
    if start_date:
        transactions = [t for t in transactions if t.transaction_date >= start_date]
    if end_date:
        transactions = [t for t in transactions if t.transaction_date <= end_date]
    return transactions


def format_transaction(transaction: EnrichedFinancialTransaction) -> Dict[str, Any]:
    """Flat response shape of a transaction with nested reference summaries."""
    header = transaction.header
    source = transaction.source
    category = transaction.category
    fund = transaction.fund
    account = transaction.account

    return {
        "id": transaction.id,
        "tenant_id": transaction.tenant_id,
        "transaction_number": header.transaction_number if header else "",
        "transaction_date": transaction.transaction_date,
        "transaction_type": transaction.transaction_type.value,
        "description": transaction.description,
        "reference": transaction.reference or None,
        "status": transaction.status.value,
        "amount": transaction.amount,
        "source_id": transaction.source_id or None,
        "source": {
            "id": source.id,
            "name": source.name,
            "code": source.code or None,
            "type": source.type or None,
        } if source else None,
        "category_id": transaction.category_id or None,
        "category": {
            "id": category.id,
            "name": category.name,
            "code": category.code or None,
            "type": category.type or None,
        } if category else None,
        "fund_id": transaction.fund_id or None,
        "fund": {
            "id": fund.id,
            "name": fund.name,
            "code": fund.code or None,
        } if fund else None,
        "account_id": transaction.account_id or None,
        "account": {
            "id": account.id,
            "name": account.name,
            "account_number": account.account_number,
            "account_type": account.account_type,
        } if account else None,
        "submitted_at": header.submitted_at if header else None,
        "submitted_by": header.submitted_by if header else None,
        "approved_at": header.approved_at if header else None,
        "approved_by": header.approved_by if header else None,
        "posted_at": header.posted_at if header else None,
        "posted_by": header.posted_by if header else None,
        "voided_at": header.voided_at if header else None,
        "voided_by": header.voided_by if header else None,
        "void_reason": header.void_reason if header else None,
        "created_at": transaction.created_at,
        "updated_at": transaction.updated_at,
    }
