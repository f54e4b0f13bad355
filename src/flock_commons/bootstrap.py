"""
Application wiring for flock-commons.

Builds one explicitly constructed set of registry, cache, repositories and
services per process. Nothing is registered at import time; callers build
an ``ApplicationContext`` and hand its parts to routers or workers.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config.constants import FinanceTables
from .config.logging_config import setup_logging
from .config.settings import FlockSettings, get_settings
from .features.database.entities.protocols import DatabaseRepository
from .features.database.repositories.asyncpg_repository import (
    AsyncpgDatabaseRepository,
    create_database_pool,
)
from .features.finance.repositories import (
    FinancialTransactionHeaderDatabaseRepository,
    IncomeExpenseTransactionDatabaseRepository,
    LedgerReferenceDatabaseRepository,
)
from .features.finance.services import (
    FinancialTransactionCache,
    FinancialTransactionService,
    IncomeExpenseTransactionService,
)
from .features.onboarding.entities.protocols import SeedRecordRepository
from .features.onboarding.plugins import MembershipOnboardingPlugin
from .features.onboarding.repositories import SeedRecordDatabaseRepository
from .features.onboarding.services import FeatureOnboardingOrchestrator, FeatureOnboardingRegistry

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """Process-wide collaborators shared by every request."""
    settings: FlockSettings
    database: DatabaseRepository
    onboarding_registry: FeatureOnboardingRegistry
    onboarding_orchestrator: FeatureOnboardingOrchestrator
    transaction_cache: FinancialTransactionCache
    transaction_service: FinancialTransactionService


def register_default_plugins(
    registry: FeatureOnboardingRegistry,
    seed_repository: SeedRecordRepository
) -> FeatureOnboardingRegistry:
    """Register the built-in onboarding plugins."""
    registry.register(MembershipOnboardingPlugin(seed_repository))
    logger.info(
        f"Registered onboarding plugins: {', '.join(registry.get_registered_feature_codes())}"
    )
    return registry


def build_application_context(
    database: DatabaseRepository,
    settings: Optional[FlockSettings] = None
) -> ApplicationContext:
    """Wire repositories, cache and services over a database repository."""
    settings = settings or get_settings()
    schema = settings.db_schema

    registry = register_default_plugins(
        FeatureOnboardingRegistry(),
        SeedRecordDatabaseRepository(database, schema=schema)
    )

    header_repository = FinancialTransactionHeaderDatabaseRepository(database, schema=schema)
    line_repository = IncomeExpenseTransactionDatabaseRepository(database, schema=schema)
    cache = FinancialTransactionCache(ttl_seconds=settings.cache_ttl_transactions)

    transaction_service = FinancialTransactionService(
        line_repository=line_repository,
        header_repository=header_repository,
        source_repository=LedgerReferenceDatabaseRepository(database, FinanceTables.FINANCIAL_SOURCES, schema),
        category_repository=LedgerReferenceDatabaseRepository(database, FinanceTables.CATEGORIES, schema),
        fund_repository=LedgerReferenceDatabaseRepository(database, FinanceTables.FUNDS, schema),
        account_repository=LedgerReferenceDatabaseRepository(database, FinanceTables.ACCOUNTS, schema),
        writer=IncomeExpenseTransactionService(header_repository, line_repository),
        cache=cache,
        default_search_limit=settings.transaction_search_limit,
    )

    return ApplicationContext(
        settings=settings,
        database=database,
        onboarding_registry=registry,
        onboarding_orchestrator=FeatureOnboardingOrchestrator(registry),
        transaction_cache=cache,
        transaction_service=transaction_service,
    )


async def initialize(settings: Optional[FlockSettings] = None) -> ApplicationContext:
    """Configure logging, open the database pool and build the context."""
    settings = settings or get_settings()
    setup_logging(settings)

    pool = await create_database_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
    )
    database = AsyncpgDatabaseRepository(pool, schema=settings.db_schema)

    logger.info(f"{settings.app_name} initialized ({settings.environment})")
    return build_application_context(database, settings)
