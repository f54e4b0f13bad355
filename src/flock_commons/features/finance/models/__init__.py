"""Finance API models."""

from .requests import TransactionCreateRequest, TransactionUpdateRequest, TransactionVoidRequest
from .responses import (
    LedgerReferenceResponse,
    FinancialTransactionResponse,
    TransactionTypeStats,
    TransactionStatusStats,
    FinancialTransactionStatsResponse,
    TransactionDeleteResponse,
)

__all__ = [
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionVoidRequest",
    "LedgerReferenceResponse",
    "FinancialTransactionResponse",
    "TransactionTypeStats",
    "TransactionStatusStats",
    "FinancialTransactionStatsResponse",
    "TransactionDeleteResponse",
]
