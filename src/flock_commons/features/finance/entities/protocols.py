"""Finance protocols for flock-commons."""

from abc import abstractmethod
from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

from .transaction import FinancialTransactionHeader, IncomeExpenseTransaction, LedgerReference


@runtime_checkable
class FinancialTransactionHeaderRepository(Protocol):
    """Protocol for transaction header persistence."""

    @abstractmethod
    async def find_by_id(self, tenant_id: str, header_id: str) -> Optional[FinancialTransactionHeader]:
        ...

    @abstractmethod
    async def find_by_ids(self, tenant_id: str, header_ids: Iterable[str]) -> Dict[str, FinancialTransactionHeader]:
        ...

    @abstractmethod
    async def create(self, header: FinancialTransactionHeader) -> FinancialTransactionHeader:
        ...

    @abstractmethod
    async def update(self, header: FinancialTransactionHeader) -> FinancialTransactionHeader:
        ...

    @abstractmethod
    async def soft_delete(self, tenant_id: str, header_id: str, user_id: Optional[str] = None) -> bool:
        ...


@runtime_checkable
class IncomeExpenseTransactionRepository(Protocol):
    """Protocol for income/expense line item persistence."""

    @abstractmethod
    async def find_all(self, tenant_id: str) -> List[IncomeExpenseTransaction]:
        ...

    @abstractmethod
    async def find_by_id(self, tenant_id: str, transaction_id: str) -> Optional[IncomeExpenseTransaction]:
        ...

    @abstractmethod
    async def find_by_header_id(self, tenant_id: str, header_id: str) -> List[IncomeExpenseTransaction]:
        ...

    @abstractmethod
    async def create(self, line: IncomeExpenseTransaction) -> IncomeExpenseTransaction:
        ...

    @abstractmethod
    async def update(self, line: IncomeExpenseTransaction) -> IncomeExpenseTransaction:
        ...

    @abstractmethod
    async def soft_delete_by_header(self, tenant_id: str, header_id: str, user_id: Optional[str] = None) -> int:
        ...


@runtime_checkable
class LedgerReferenceRepository(Protocol):
    """Protocol for lookups of sources, categories, funds and accounts."""

    @abstractmethod
    async def find_by_ids(self, tenant_id: str, ids: Iterable[str]) -> Dict[str, LedgerReference]:
        ...
