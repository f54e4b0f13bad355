"""Financial transaction response models for API endpoints."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LedgerReferenceResponse(BaseModel):
    """Summary of a source, category, fund or account."""

    id: str = Field(..., description="Record ID")
    name: str = Field(..., description="Display name")
    code: Optional[str] = Field(None, description="Short code")
    type: Optional[str] = Field(None, description="Record type")
    account_number: Optional[str] = Field(None, description="Account number (accounts only)")
    account_type: Optional[str] = Field(None, description="Account type (accounts only)")


class FinancialTransactionResponse(BaseModel):
    """Response model for a financial transaction line with its header state."""

    id: str = Field(..., description="Transaction ID")
    tenant_id: str = Field(..., description="Tenant ID")
    transaction_number: str = Field(..., description="Header transaction number")
    transaction_date: date = Field(..., description="Transaction date")
    transaction_type: str = Field(..., description="income or expense")
    description: str = Field(..., description="Description")
    reference: Optional[str] = Field(None, description="External reference")
    status: str = Field(..., description="Workflow status")
    amount: float = Field(..., description="Amount")

    source_id: Optional[str] = Field(None, description="Financial source ID")
    source: Optional[LedgerReferenceResponse] = Field(None, description="Financial source")
    category_id: Optional[str] = Field(None, description="Category ID")
    category: Optional[LedgerReferenceResponse] = Field(None, description="Category")
    fund_id: Optional[str] = Field(None, description="Fund ID")
    fund: Optional[LedgerReferenceResponse] = Field(None, description="Fund")
    account_id: Optional[str] = Field(None, description="Account ID")
    account: Optional[LedgerReferenceResponse] = Field(None, description="Account")

    # Workflow stamps
    submitted_at: Optional[datetime] = Field(None, description="Submission time")
    submitted_by: Optional[str] = Field(None, description="Submitting user")
    approved_at: Optional[datetime] = Field(None, description="Approval time")
    approved_by: Optional[str] = Field(None, description="Approving user")
    posted_at: Optional[datetime] = Field(None, description="Posting time")
    posted_by: Optional[str] = Field(None, description="Posting user")
    voided_at: Optional[datetime] = Field(None, description="Void time")
    voided_by: Optional[str] = Field(None, description="Voiding user")
    void_reason: Optional[str] = Field(None, description="Void reason")

    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")

    @classmethod
    def from_formatted(cls, data: Dict[str, Any]) -> "FinancialTransactionResponse":
        return cls(**data)


class TransactionTypeStats(BaseModel):
    transaction_type: str
    count: int
    total_amount: float


class TransactionStatusStats(BaseModel):
    status: str
    count: int


class FinancialTransactionStatsResponse(BaseModel):
    """Response model for transaction statistics."""

    total: int = Field(..., description="Number of transactions in range")
    by_type: List[TransactionTypeStats] = Field(default_factory=list, description="Counts and totals per type")
    by_status: List[TransactionStatusStats] = Field(default_factory=list, description="Counts per status")
    total_income: float = Field(..., description="Sum of income amounts")
    total_expense: float = Field(..., description="Sum of expense amounts")
    net_income: float = Field(..., description="Income minus expense")


class TransactionDeleteResponse(BaseModel):
    id: str
    deleted: bool
