"""Financial transaction request models for API endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ....config.constants import TransactionType


class TransactionCreateRequest(BaseModel):
    """Request model for creating a draft transaction."""

    transaction_type: TransactionType = Field(..., description="income or expense")
    transaction_date: date = Field(..., description="Date of the transaction")
    description: str = Field(..., min_length=1, max_length=500, description="Transaction description")
    reference: Optional[str] = Field(None, max_length=100, description="External reference (check no., receipt)")
    amount: Decimal = Field(..., gt=0, description="Positive amount")
    category_id: str = Field(..., description="Income or expense category ID")
    source_id: str = Field(..., description="Financial source ID")
    fund_id: str = Field(..., description="Fund ID")
    account_id: Optional[str] = Field(None, description="Chart of accounts ID")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "transaction_type": "income",
            "transaction_date": "2026-10-18",
            "description": "Sunday offering",
            "amount": "1250.00",
            "category_id": "01920f3e-0000-7000-8000-000000000001",
            "source_id": "01920f3e-0000-7000-8000-000000000002",
            "fund_id": "01920f3e-0000-7000-8000-000000000003"
        }
    })


class TransactionUpdateRequest(BaseModel):
    """Request model for editing a draft transaction. Omitted fields are unchanged."""

    transaction_date: Optional[date] = Field(None, description="Date of the transaction")
    description: Optional[str] = Field(None, min_length=1, max_length=500, description="Transaction description")
    reference: Optional[str] = Field(None, max_length=100, description="External reference")
    amount: Optional[Decimal] = Field(None, gt=0, description="Positive amount")
    category_id: Optional[str] = Field(None, description="Category ID")
    source_id: Optional[str] = Field(None, description="Financial source ID")
    fund_id: Optional[str] = Field(None, description="Fund ID")
    account_id: Optional[str] = Field(None, description="Chart of accounts ID")

    @field_validator("transaction_date", "description", "amount")
    @classmethod
    def reject_explicit_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class TransactionVoidRequest(BaseModel):
    """Request model for voiding a transaction."""

    reason: str = Field(..., min_length=1, max_length=500, description="Why the transaction is voided")
