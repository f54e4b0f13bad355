"""Finance repositories."""

from .header_repository import FinancialTransactionHeaderDatabaseRepository
from .line_repository import IncomeExpenseTransactionDatabaseRepository
from .ledger_repository import LedgerReferenceDatabaseRepository

__all__ = [
    "FinancialTransactionHeaderDatabaseRepository",
    "IncomeExpenseTransactionDatabaseRepository",
    "LedgerReferenceDatabaseRepository",
]
