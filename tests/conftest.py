"""Pytest configuration and fixtures for flock-commons tests."""

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence
from unittest.mock import AsyncMock

import pytest

from flock_commons.config.constants import TransactionStatus, TransactionType
from flock_commons.features.finance.entities.transaction import (
    FinancialTransactionHeader,
    IncomeExpenseTransaction,
    LedgerReference,
)
from flock_commons.features.finance.services.income_expense_service import IncomeExpenseTransactionService
from flock_commons.features.finance.services.transaction_cache import FinancialTransactionCache
from flock_commons.features.finance.services.transaction_service import FinancialTransactionService
from flock_commons.features.onboarding.entities.context import (
    FeatureOnboardingContext,
    FeatureOnboardingResult,
)
from flock_commons.features.onboarding.plugins.base import BaseFeatureOnboardingPlugin


TENANT_ID = "01920f3e-7b7a-7c1e-9a57-1f2d3c4b5a69"
OTHER_TENANT_ID = "01920f3e-7b7a-7c1e-9a57-000000000002"
USER_ID = "01920f3e-8c21-7d4a-b0b2-6e5f4d3c2b1a"


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubPlugin(BaseFeatureOnboardingPlugin):
    """Configurable onboarding plugin recording its executions."""

    def __init__(
        self,
        feature_code: str,
        priority: int = 100,
        dependencies: Sequence[str] = (),
        records_created: int = 1,
        error: Optional[Exception] = None,
        call_log: Optional[List[str]] = None
    ):
        self.feature_code = feature_code
        self.name = f"{feature_code} plugin"
        self.description = f"Seeds {feature_code}"
        self.priority = priority
        self.dependencies = tuple(dependencies)
        self._records_created = records_created
        self._error = error
        self.call_log = call_log if call_log is not None else []

    async def _execute_internal(self, context: FeatureOnboardingContext) -> FeatureOnboardingResult:
        self.call_log.append(self.feature_code)
        if self._error is not None:
            raise self._error
        return self.success_result(f"seeded {self.feature_code}", self._records_created)


@pytest.fixture
def onboarding_context():
    """Context granting the members feature."""
    return FeatureOnboardingContext(
        tenant_id=TENANT_ID,
        user_id=USER_ID,
        subscription_tier="professional",
        granted_features=("members.core",),
    )


@pytest.fixture
def make_plugin():
    """Factory for StubPlugin instances sharing one call log."""
    call_log: List[str] = []

    def _make(feature_code: str, **kwargs) -> StubPlugin:
        kwargs.setdefault("call_log", call_log)
        return StubPlugin(feature_code, **kwargs)

    _make.call_log = call_log
    return _make


@pytest.fixture
def mock_seed_repository():
    """Seed repository where nothing exists yet and every insert succeeds."""
    repository = AsyncMock()
    repository.exists_by_code = AsyncMock(return_value=False)
    repository.create = AsyncMock(side_effect=lambda table, record: {"id": "generated", **record})
    return repository


@pytest.fixture
def mock_database_repository():
    """Mock DatabaseRepository for repository tests."""
    database = AsyncMock()
    database.execute_query = AsyncMock(return_value=[])
    database.execute_fetchrow = AsyncMock(return_value=None)
    database.execute_fetchval = AsyncMock(return_value=None)
    database.execute_command = AsyncMock(return_value="UPDATE 1")
    return database


# Finance fixtures

def make_header(
    header_id: str = "hdr-1",
    status: TransactionStatus = TransactionStatus.DRAFT,
    transaction_number: str = "TXN-20261001-AAAAAA",
    description: str = "Sunday offering",
    transaction_date: date = date(2026, 10, 1),
    tenant_id: str = TENANT_ID
) -> FinancialTransactionHeader:
    created = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
    return FinancialTransactionHeader(
        id=header_id,
        tenant_id=tenant_id,
        transaction_number=transaction_number,
        transaction_date=transaction_date,
        description=description,
        status=status,
        created_at=created,
        updated_at=created,
    )


def make_line(
    line_id: str = "line-1",
    header_id: Optional[str] = "hdr-1",
    transaction_type: TransactionType = TransactionType.INCOME,
    amount: str = "100.00",
    transaction_date: date = date(2026, 10, 1),
    description: str = "Sunday offering",
    reference: Optional[str] = None,
    source_id: Optional[str] = "src-1",
    category_id: Optional[str] = "cat-1",
    fund_id: Optional[str] = "fund-1",
    account_id: Optional[str] = None,
    tenant_id: str = TENANT_ID
) -> IncomeExpenseTransaction:
    created = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
    return IncomeExpenseTransaction(
        id=line_id,
        tenant_id=tenant_id,
        header_id=header_id,
        transaction_type=transaction_type,
        transaction_date=transaction_date,
        description=description,
        reference=reference,
        amount=Decimal(amount),
        source_id=source_id,
        category_id=category_id,
        fund_id=fund_id,
        account_id=account_id,
        created_at=created,
        updated_at=created,
    )


def _lookup_by_ids(records):
    by_id = {record.id: record for record in records}

    async def find_by_ids(tenant_id, ids):
        return {i: by_id[i] for i in ids if i in by_id}

    return AsyncMock(side_effect=find_by_ids)


class FinanceStore:
    """AsyncMock repositories backed by in-memory lists."""

    def __init__(self):
        self.headers = {}
        self.lines = []
        self.sources = [LedgerReference(id="src-1", name="Offering Plate", code="PLATE", type="cash")]
        self.categories = [LedgerReference(id="cat-1", name="Tithes", code="TITHE", type="income")]
        self.funds = [LedgerReference(id="fund-1", name="General Fund", code="GEN")]
        self.accounts = [
            LedgerReference(id="acct-1", name="Checking", account_number="1000", account_type="asset")
        ]

        self.line_repository = AsyncMock()
        self.line_repository.find_all = AsyncMock(side_effect=self._find_all)
        self.line_repository.find_by_id = AsyncMock(side_effect=self._find_line)
        self.line_repository.update = AsyncMock(side_effect=self._update_line)

        self.header_repository = AsyncMock()
        self.header_repository.find_by_id = AsyncMock(side_effect=self._find_header)
        self.header_repository.find_by_ids = AsyncMock(side_effect=self._find_headers)
        self.header_repository.update = AsyncMock(side_effect=self._update_header)

        self.source_repository = AsyncMock()
        self.source_repository.find_by_ids = _lookup_by_ids(self.sources)
        self.category_repository = AsyncMock()
        self.category_repository.find_by_ids = _lookup_by_ids(self.categories)
        self.fund_repository = AsyncMock()
        self.fund_repository.find_by_ids = _lookup_by_ids(self.funds)
        self.account_repository = AsyncMock()
        self.account_repository.find_by_ids = _lookup_by_ids(self.accounts)

    def add(self, line: IncomeExpenseTransaction, header: Optional[FinancialTransactionHeader] = None):
        self.lines.append(line)
        if header is not None:
            self.headers[header.id] = header

    async def _find_all(self, tenant_id):
        return [line for line in self.lines if line.tenant_id == tenant_id]

    async def _find_line(self, tenant_id, transaction_id):
        for line in self.lines:
            if line.tenant_id == tenant_id and line.id == transaction_id:
                return replace(line)
        return None

    async def _update_line(self, line):
        self.lines = [replace(line) if stored.id == line.id else stored for stored in self.lines]
        return line

    async def _find_header(self, tenant_id, header_id):
        header = self.headers.get(header_id)
        return replace(header) if header and header.tenant_id == tenant_id else None

    async def _find_headers(self, tenant_id, header_ids):
        return {
            i: replace(self.headers[i]) for i in header_ids
            if i in self.headers and self.headers[i].tenant_id == tenant_id
        }

    async def _update_header(self, header):
        self.headers[header.id] = replace(header)
        return header


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transaction_cache(clock):
    return FinancialTransactionCache(clock=clock)


@pytest.fixture
def finance_store():
    return FinanceStore()


@pytest.fixture
def mock_writer():
    return AsyncMock(spec=IncomeExpenseTransactionService)


@pytest.fixture
def transaction_service(finance_store, mock_writer, transaction_cache):
    return FinancialTransactionService(
        line_repository=finance_store.line_repository,
        header_repository=finance_store.header_repository,
        source_repository=finance_store.source_repository,
        category_repository=finance_store.category_repository,
        fund_repository=finance_store.fund_repository,
        account_repository=finance_store.account_repository,
        writer=mock_writer,
        cache=transaction_cache,
    )


@pytest.fixture
def header_factory():
    return make_header


@pytest.fixture
def line_factory():
    return make_line
