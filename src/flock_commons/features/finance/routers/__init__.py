"""Finance routers."""

from .transaction_router import (
    transaction_router,
    get_financial_transaction_service,
    get_request_identity,
    RequestIdentity,
)

__all__ = [
    "transaction_router",
    "get_financial_transaction_service",
    "get_request_identity",
    "RequestIdentity",
]
