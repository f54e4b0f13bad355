"""Financial transaction router.

Search, statistics and workflow endpoints for a tenant's income/expense
transactions. The tenant comes from the ``X-Tenant-ID`` header and is bound
into the request context for the duration of each call.
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Path, Query, status

from ....config.constants import TransactionStatus, TransactionType
from ....core.exceptions import EntityNotFoundError
from ....core.shared.context import tenant_scope
from ..entities.transaction import EnrichedFinancialTransaction, TransactionSearchFilters
from ..models.requests import TransactionCreateRequest, TransactionUpdateRequest, TransactionVoidRequest
from ..models.responses import (
    FinancialTransactionResponse,
    FinancialTransactionStatsResponse,
    TransactionDeleteResponse,
)
from ..services.transaction_service import FinancialTransactionService, format_transaction

logger = logging.getLogger(__name__)

transaction_router = APIRouter(
    prefix="/financial-transactions",
    tags=["Financial Transactions"],
    responses={
        400: {"description": "Missing tenant context or invalid request"},
        404: {"description": "Transaction not found"},
        409: {"description": "Invalid status transition"},
        500: {"description": "Internal server error"}
    }
)


# Placeholder dependency; applications override via dependency_overrides

def get_financial_transaction_service() -> FinancialTransactionService:
    """Placeholder for financial transaction service dependency.

    Applications must override this via:
    app.dependency_overrides[get_financial_transaction_service] = lambda: service
    """
    raise HTTPException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        detail="Financial transaction service dependency not configured"
    )


@dataclass(frozen=True)
class RequestIdentity:
    tenant_id: Optional[str]
    user_id: Optional[str]


def get_request_identity(
    x_tenant_id: Optional[str] = Header(None, alias="X-Tenant-ID"),
    x_user_id: Optional[str] = Header(None, alias="X-User-ID")
) -> RequestIdentity:
    return RequestIdentity(tenant_id=x_tenant_id, user_id=x_user_id)


def _scope(identity: RequestIdentity):
    # Without a tenant the service raises TenantContextError
    if not identity.tenant_id:
        return nullcontext()
    return tenant_scope(identity.tenant_id, identity.user_id)


def _to_response(transaction: EnrichedFinancialTransaction) -> FinancialTransactionResponse:
    return FinancialTransactionResponse.from_formatted(format_transaction(transaction))


@transaction_router.get(
    "",
    response_model=List[FinancialTransactionResponse],
    summary="Search financial transactions",
    description="Filter the tenant's transactions by text, type, status, dates and ledger references"
)
async def search_financial_transactions(
    search_term: Optional[str] = Query(None, description="Matches description, reference and transaction number"),
    transaction_type: Optional[TransactionType] = Query(None, description="income or expense"),
    transaction_status: Optional[TransactionStatus] = Query(None, alias="status", description="Header status"),
    start_date: Optional[date] = Query(None, description="Earliest transaction date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Latest transaction date (inclusive)"),
    category_id: Optional[str] = Query(None, description="Category ID"),
    source_id: Optional[str] = Query(None, description="Financial source ID"),
    fund_id: Optional[str] = Query(None, description="Fund ID"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum results"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> List[FinancialTransactionResponse]:
    filters = TransactionSearchFilters(
        search_term=search_term,
        transaction_type=transaction_type,
        status=transaction_status,
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
        source_id=source_id,
        fund_id=fund_id,
        limit=limit,
    )
    with _scope(identity):
        transactions = await service.search_transactions(filters)
    return [_to_response(t) for t in transactions]


@transaction_router.get(
    "/stats",
    response_model=FinancialTransactionStatsResponse,
    summary="Get transaction statistics"
)
async def get_financial_transaction_stats(
    start_date: Optional[date] = Query(None, description="Earliest transaction date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Latest transaction date (inclusive)"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionStatsResponse:
    with _scope(identity):
        stats = await service.get_transaction_stats(start_date, end_date)
    return FinancialTransactionStatsResponse(**stats)


@transaction_router.get(
    "/{transaction_id}",
    response_model=FinancialTransactionResponse,
    summary="Get financial transaction"
)
async def get_financial_transaction(
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.get_transaction(transaction_id)
    if transaction is None:
        raise EntityNotFoundError("Transaction", transaction_id)
    return _to_response(transaction)


@transaction_router.post(
    "",
    response_model=FinancialTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create financial transaction"
)
async def create_financial_transaction(
    request: TransactionCreateRequest,
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.create_transaction(**request.model_dump())
    return _to_response(transaction)


@transaction_router.patch(
    "/{transaction_id}",
    response_model=FinancialTransactionResponse,
    summary="Update draft financial transaction"
)
async def update_financial_transaction(
    request: TransactionUpdateRequest,
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.update_transaction(
            transaction_id, request.model_dump(exclude_unset=True)
        )
    return _to_response(transaction)


@transaction_router.post(
    "/{transaction_id}/submit",
    response_model=FinancialTransactionResponse,
    summary="Submit transaction for approval"
)
async def submit_financial_transaction(
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.submit_transaction(transaction_id)
    return _to_response(transaction)


@transaction_router.post(
    "/{transaction_id}/approve",
    response_model=FinancialTransactionResponse,
    summary="Approve submitted transaction"
)
async def approve_financial_transaction(
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.approve_transaction(transaction_id)
    return _to_response(transaction)


@transaction_router.post(
    "/{transaction_id}/post",
    response_model=FinancialTransactionResponse,
    summary="Post approved transaction to the ledger"
)
async def post_financial_transaction(
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.post_transaction(transaction_id)
    return _to_response(transaction)


@transaction_router.post(
    "/{transaction_id}/void",
    response_model=FinancialTransactionResponse,
    summary="Void transaction"
)
async def void_financial_transaction(
    request: TransactionVoidRequest,
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> FinancialTransactionResponse:
    with _scope(identity):
        transaction = await service.void_transaction(transaction_id, request.reason)
    return _to_response(transaction)


@transaction_router.delete(
    "/{transaction_id}",
    response_model=TransactionDeleteResponse,
    summary="Delete draft transaction"
)
async def delete_financial_transaction(
    transaction_id: str = Path(..., description="Transaction ID"),
    identity: RequestIdentity = Depends(get_request_identity),
    service: FinancialTransactionService = Depends(get_financial_transaction_service)
) -> TransactionDeleteResponse:
    with _scope(identity):
        deleted = await service.delete_transaction(transaction_id)
    return TransactionDeleteResponse(id=transaction_id, deleted=deleted)
