"""Finance feature for flock-commons.

Income/expense transactions with a header approval workflow, served
through a tenant-scoped TTL cache.
"""

from .entities import (
    FinancialTransactionHeader,
    IncomeExpenseTransaction,
    EnrichedFinancialTransaction,
    LedgerReference,
    TransactionSearchFilters,
)
from .repositories import (
    FinancialTransactionHeaderDatabaseRepository,
    IncomeExpenseTransactionDatabaseRepository,
    LedgerReferenceDatabaseRepository,
)
from .services import (
    CacheEntry,
    FinancialTransactionCache,
    IncomeExpenseTransactionService,
    FinancialTransactionService,
    format_transaction,
)

__all__ = [
    "FinancialTransactionHeader",
    "IncomeExpenseTransaction",
    "EnrichedFinancialTransaction",
    "LedgerReference",
    "TransactionSearchFilters",
    "FinancialTransactionHeaderDatabaseRepository",
    "IncomeExpenseTransactionDatabaseRepository",
    "LedgerReferenceDatabaseRepository",
    "CacheEntry",
    "FinancialTransactionCache",
    "IncomeExpenseTransactionService",
    "FinancialTransactionService",
    "format_transaction",
]
