"""
Tenant-scoped cache for enriched financial transactions.

One entry per tenant holding the full enriched transaction list. Entries
expire after a fixed TTL and are invalidated after every mutation on the
tenant's transactions, so a read never sees data older than the TTL or
older than the last known write.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ....config.constants import CacheTTL
from ..entities.transaction import EnrichedFinancialTransaction

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = CacheTTL.FINANCIAL_TRANSACTIONS


@dataclass
class CacheEntry:
    """Cached transaction list for one tenant."""
    data: List[EnrichedFinancialTransaction]
    timestamp: float


class FinancialTransactionCache:
    """In-process cache keyed by tenant id.

    No stampede protection: concurrent misses for the same tenant each
    perform the fetch and the last ``set`` wins.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, tenant_id: str) -> Optional[List[EnrichedFinancialTransaction]]:
        """Cached list for the tenant, or None when missing or expired."""
        entry = self._entries.get(tenant_id)
        if entry is None:
            return None

        if self._clock() - entry.timestamp > self._ttl:
            del self._entries[tenant_id]
            logger.debug(f"Transaction cache expired for tenant {tenant_id}")
            return None

        logger.debug(f"Transaction cache hit for tenant {tenant_id}")
        return entry.data

    def set(self, tenant_id: str, data: List[EnrichedFinancialTransaction]) -> None:
        self._entries[tenant_id] = CacheEntry(data=data, timestamp=self._clock())
        logger.debug(f"Cached {len(data)} transactions for tenant {tenant_id}")

    def invalidate(self, tenant_id: str) -> None:
        if self._entries.pop(tenant_id, None) is not None:
            logger.debug(f"Invalidated transaction cache for tenant {tenant_id}")

    def clear(self) -> None:
        self._entries.clear()

    def get_stats(self) -> Dict[str, Any]:
        return {
            "size": len(self._entries),
            "keys": list(self._entries.keys()),
        }
