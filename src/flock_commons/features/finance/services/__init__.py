"""Finance services."""

from .transaction_cache import CACHE_TTL_SECONDS, CacheEntry, FinancialTransactionCache
from .income_expense_service import IncomeExpenseTransactionService, generate_transaction_number
from .transaction_service import FinancialTransactionService, format_transaction

__all__ = [
    "CACHE_TTL_SECONDS",
    "CacheEntry",
    "FinancialTransactionCache",
    "IncomeExpenseTransactionService",
    "generate_transaction_number",
    "FinancialTransactionService",
    "format_transaction",
]
