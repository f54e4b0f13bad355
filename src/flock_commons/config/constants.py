"""Constants and enums for flock-commons.

This module defines the constants, enums, and configuration values used
throughout the flock-commons library. Enum values correspond to the
database enums of the tenant schema.
"""

from enum import Enum
from typing import Final


class CacheTTL:
    """Cache TTL values in seconds."""

    FINANCIAL_TRANSACTIONS: Final[int] = 300  # 5 minutes


class TransactionType(str, Enum):
    """Income/expense line classification."""
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, Enum):
    """Financial transaction header workflow status."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    POSTED = "posted"
    VOIDED = "voided"


class SeedStatus(str, Enum):
    """Outcome of seeding a single default record."""
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


class FeatureCodes:
    """Feature catalog codes that trigger onboarding plugins."""

    MEMBERS_CORE: Final[str] = "members.core"


class SeedTables:
    """Tenant tables populated by onboarding plugins."""

    MEMBERSHIP_TYPE: Final[str] = "membership_type"
    MEMBERSHIP_STAGE: Final[str] = "membership_stage"
    DISCIPLESHIP_PATHWAYS: Final[str] = "discipleship_pathways"


class FinanceTables:
    """Tenant tables backing financial transactions."""

    TRANSACTION_HEADERS: Final[str] = "financial_transaction_headers"
    INCOME_EXPENSE_TRANSACTIONS: Final[str] = "income_expense_transactions"
    FINANCIAL_SOURCES: Final[str] = "financial_sources"
    CATEGORIES: Final[str] = "categories"
    FUNDS: Final[str] = "funds"
    ACCOUNTS: Final[str] = "chart_of_accounts"


DEFAULT_SEARCH_LIMIT: Final[int] = 50
