"""Financial transaction domain entities.

A financial transaction is a header (workflow status, number, audit stamps)
with one or more income/expense line items. Matches the
financial_transaction_headers and income_expense_transactions tables of the
tenant schema.
"""

from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from ....config.constants import TransactionStatus, TransactionType
from ....core.exceptions import BusinessLogicError, InvalidStateError


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FinancialTransactionHeader:
    """Financial transaction header entity.

    Owns the approval workflow:
    draft -> submitted -> approved -> posted, with void allowed from any
    state past draft that is not already voided.
    """

    id: str
    tenant_id: str
    transaction_number: str
    transaction_date: date
    description: str
    reference: Optional[str] = None
    status: TransactionStatus = TransactionStatus.DRAFT

    # Workflow stamps
    submitted_at: Optional[datetime] = None
    submitted_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    posted_at: Optional[datetime] = None
    posted_by: Optional[str] = None
    voided_at: Optional[datetime] = None
    voided_by: Optional[str] = None
    void_reason: Optional[str] = None

    # Audit
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_draft(self) -> bool:
        return self.status == TransactionStatus.DRAFT

    def submit(self, user_id: Optional[str] = None) -> None:
        """Submit a draft for approval."""
        self._require_status(TransactionStatus.DRAFT, "submit")
        now = _utc_now()
        self.status = TransactionStatus.SUBMITTED
        self.submitted_at = now
        self.submitted_by = user_id
        self._touch(user_id, now)

    def approve(self, user_id: Optional[str] = None) -> None:
        """Approve a submitted transaction."""
        self._require_status(TransactionStatus.SUBMITTED, "approve")
        now = _utc_now()
        self.status = TransactionStatus.APPROVED
        self.approved_at = now
        self.approved_by = user_id
        self._touch(user_id, now)

    def post(self, user_id: Optional[str] = None) -> None:
        """Post an approved transaction to the ledger."""
        self._require_status(TransactionStatus.APPROVED, "post")
        now = _utc_now()
        self.status = TransactionStatus.POSTED
        self.posted_at = now
        self.posted_by = user_id
        self._touch(user_id, now)

    def void(self, reason: str, user_id: Optional[str] = None) -> None:
        """Void a transaction that has left draft."""
        if not reason or not reason.strip():
            raise BusinessLogicError("A reason is required to void a transaction")
        if self.status in (TransactionStatus.DRAFT, TransactionStatus.VOIDED):
            raise InvalidStateError(
                f"Cannot void transaction {self.transaction_number} in status '{self.status.value}'",
                current_state=self.status.value
            )
        now = _utc_now()
        self.status = TransactionStatus.VOIDED
        self.voided_at = now
        self.voided_by = user_id
        self.void_reason = reason.strip()
        self._touch(user_id, now)

    def ensure_editable(self, action: str) -> None:
        """Only drafts may be edited or deleted."""
        if not self.is_draft:
            raise InvalidStateError(
                f"Cannot {action} transaction {self.transaction_number}: "
                f"only drafts can be changed, status is '{self.status.value}'",
                current_state=self.status.value
            )

    def _require_status(self, expected: TransactionStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidStateError(
                f"Cannot {action} transaction {self.transaction_number}: "
                f"status is '{self.status.value}', expected '{expected.value}'",
                current_state=self.status.value
            )

    def _touch(self, user_id: Optional[str], now: datetime) -> None:
        self.updated_at = now
        if user_id:
            self.updated_by = user_id


@dataclass
class IncomeExpenseTransaction:
    """Income/expense line item belonging to a transaction header."""

    id: str
    tenant_id: str
    transaction_type: TransactionType
    transaction_date: date
    description: str
    amount: Decimal
    header_id: Optional[str] = None
    reference: Optional[str] = None
    source_id: Optional[str] = None
    category_id: Optional[str] = None
    fund_id: Optional[str] = None
    account_id: Optional[str] = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    deleted_at: Optional[datetime] = None


@dataclass
class LedgerReference:
    """Summary of a financial source, category, fund or chart-of-accounts row."""

    id: str
    name: str
    code: Optional[str] = None
    type: Optional[str] = None
    account_number: Optional[str] = None
    account_type: Optional[str] = None


@dataclass
class EnrichedFinancialTransaction(IncomeExpenseTransaction):
    """Line item joined with its header and related ledger records."""

    header: Optional[FinancialTransactionHeader] = None
    source: Optional[LedgerReference] = None
    category: Optional[LedgerReference] = None
    fund: Optional[LedgerReference] = None
    account: Optional[LedgerReference] = None

    @classmethod
    def from_line(cls, line: IncomeExpenseTransaction, **related: Any) -> "EnrichedFinancialTransaction":
        values: Dict[str, Any] = {f.name: getattr(line, f.name) for f in fields(IncomeExpenseTransaction)}
        values.update(related)
        return cls(**values)

    @property
    def status(self) -> TransactionStatus:
        """Header status; a line without a header counts as draft."""
        return self.header.status if self.header else TransactionStatus.DRAFT


@dataclass
class TransactionSearchFilters:
    """Filters applied to a tenant's transaction list."""

    search_term: Optional[str] = None
    transaction_type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category_id: Optional[str] = None
    source_id: Optional[str] = None
    fund_id: Optional[str] = None
    limit: Optional[int] = None
