"""Tests for IncomeExpenseTransactionService."""

import re
from datetime import date
from decimal import Decimal

import pytest
from unittest.mock import AsyncMock

from flock_commons.config.constants import TransactionStatus, TransactionType
from flock_commons.core.exceptions import (
    BusinessLogicError,
    EntityNotFoundError,
    InvalidStateError,
)
from flock_commons.features.finance.services.income_expense_service import (
    IncomeExpenseTransactionService,
    generate_transaction_number,
)

from conftest import TENANT_ID, USER_ID, make_header, make_line


@pytest.fixture
def repositories(finance_store):
    finance_store.header_repository.create = AsyncMock(side_effect=lambda header: header)
    finance_store.header_repository.soft_delete = AsyncMock(return_value=True)
    finance_store.line_repository.create = AsyncMock(side_effect=lambda line: line)
    finance_store.line_repository.soft_delete_by_header = AsyncMock(return_value=1)
    return finance_store


@pytest.fixture
def writer(repositories):
    return IncomeExpenseTransactionService(repositories.header_repository, repositories.line_repository)


def test_transaction_number_format():
    number = generate_transaction_number(date(2026, 10, 18))

    assert re.fullmatch(r"TXN-20261018-[0-9A-F]{6}", number)


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_draft_header_and_line(self, writer, repositories):
        header, line = await writer.create(
            TENANT_ID,
            transaction_type=TransactionType.EXPENSE,
            transaction_date=date(2026, 10, 18),
            description="Sound system repair",
            amount=Decimal("250.00"),
            category_id="cat-1",
            user_id=USER_ID,
        )

        assert header.status == TransactionStatus.DRAFT
        assert header.transaction_number.startswith("TXN-20261018-")
        assert header.created_by == USER_ID
        assert line.header_id == header.id
        assert line.tenant_id == TENANT_ID
        assert line.amount == Decimal("250.00")
        assert line.category_id == "cat-1"
        repositories.header_repository.create.assert_awaited_once()
        repositories.line_repository.create.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    async def test_rejects_non_positive_amount(self, writer, repositories, amount):
        with pytest.raises(BusinessLogicError):
            await writer.create(
                TENANT_ID,
                transaction_type=TransactionType.INCOME,
                transaction_date=date(2026, 10, 18),
                description="Offering",
                amount=amount,
            )

        repositories.header_repository.create.assert_not_awaited()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_updates_line_and_mirrors_header_fields(self, writer, repositories):
        repositories.add(make_line(), make_header())

        header, line = await writer.update(
            TENANT_ID,
            "line-1",
            {"description": "Evening offering", "amount": "120.00", "fund_id": "fund-2"},
            user_id=USER_ID,
        )

        assert line.description == "Evening offering"
        assert line.amount == Decimal("120.00")
        assert line.fund_id == "fund-2"
        assert line.updated_by == USER_ID
        assert header.description == "Evening offering"
        repositories.header_repository.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_line_only_change_leaves_header_alone(self, writer, repositories):
        repositories.add(make_line(), make_header())

        await writer.update(TENANT_ID, "line-1", {"fund_id": "fund-2"})

        repositories.header_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_fields_are_rejected(self, writer, repositories):
        repositories.add(make_line(), make_header())

        with pytest.raises(BusinessLogicError, match="transaction_type"):
            await writer.update(TENANT_ID, "line-1", {"transaction_type": "expense"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["transaction_date", "description", "amount"])
    async def test_required_fields_cannot_be_cleared(self, writer, repositories, field):
        repositories.add(make_line(), make_header())

        with pytest.raises(BusinessLogicError, match=field) as exc_info:
            await writer.update(TENANT_ID, "line-1", {field: None})

        assert exc_info.value.details == {"fields": [field]}
        repositories.line_repository.update.assert_not_awaited()
        repositories.header_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_optional_references_can_be_cleared(self, writer, repositories):
        repositories.add(make_line(reference="INV-1", account_id="acct-1"), make_header())

        _, line = await writer.update(TENANT_ID, "line-1", {"reference": None, "account_id": None})

        assert line.reference is None
        assert line.account_id is None

    @pytest.mark.asyncio
    async def test_only_drafts_can_be_updated(self, writer, repositories):
        repositories.add(make_line(), make_header(status=TransactionStatus.SUBMITTED))

        with pytest.raises(InvalidStateError):
            await writer.update(TENANT_ID, "line-1", {"description": "x"})

        repositories.line_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_transaction(self, writer):
        with pytest.raises(EntityNotFoundError):
            await writer.update(TENANT_ID, "nope", {"description": "x"})


class TestDelete:
    @pytest.mark.asyncio
    async def test_soft_deletes_lines_then_header(self, writer, repositories):
        repositories.add(make_line(), make_header())

        assert await writer.delete(TENANT_ID, "line-1", user_id=USER_ID) is True

        repositories.line_repository.soft_delete_by_header.assert_awaited_once_with(TENANT_ID, "hdr-1", USER_ID)
        repositories.header_repository.soft_delete.assert_awaited_once_with(TENANT_ID, "hdr-1", USER_ID)

    @pytest.mark.asyncio
    async def test_posted_transactions_cannot_be_deleted(self, writer, repositories):
        repositories.add(make_line(), make_header(status=TransactionStatus.POSTED))

        with pytest.raises(InvalidStateError):
            await writer.delete(TENANT_ID, "line-1")

        repositories.header_repository.soft_delete.assert_not_awaited()
