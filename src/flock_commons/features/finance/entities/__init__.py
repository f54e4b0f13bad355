"""Finance domain entities and protocols."""

from .transaction import (
    FinancialTransactionHeader,
    IncomeExpenseTransaction,
    EnrichedFinancialTransaction,
    LedgerReference,
    TransactionSearchFilters,
)
from .protocols import (
    FinancialTransactionHeaderRepository,
    IncomeExpenseTransactionRepository,
    LedgerReferenceRepository,
)

__all__ = [
    "FinancialTransactionHeader",
    "IncomeExpenseTransaction",
    "EnrichedFinancialTransaction",
    "LedgerReference",
    "TransactionSearchFilters",
    "FinancialTransactionHeaderRepository",
    "IncomeExpenseTransactionRepository",
    "LedgerReferenceRepository",
]
