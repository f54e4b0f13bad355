"""Flock-Commons - shared backend library for the Flock church management platform.

Provides feature onboarding (plugin registry, orchestrator and default
seeding), tenant-scoped caching of financial transactions, the exception
hierarchy, request tenant context and configuration.

Logging is not configured on import; call ``setup_logging()`` or
``bootstrap.initialize()`` from the application entry point.
"""

from .__version__ import __version__

from .config import FlockSettings, get_settings, setup_logging

from .core.exceptions import (
    FlockCommonsError,
    ConfigurationError,
    TenantError,
    TenantContextError,
    BusinessLogicError,
    InvalidStateError,
    DatabaseError,
    RepositoryError,
    EntityNotFoundError,
)

from .core.shared import (
    RequestContext,
    tenant_scope,
    get_current_tenant_id,
    require_tenant_id,
)

from .features.onboarding import (
    FeatureOnboardingContext,
    FeatureOnboardingResult,
    BaseFeatureOnboardingPlugin,
    MembershipOnboardingPlugin,
    FeatureOnboardingRegistry,
    FeatureOnboardingOrchestrator,
)

from .features.finance import (
    FinancialTransactionCache,
    FinancialTransactionService,
)

from .bootstrap import ApplicationContext, build_application_context, register_default_plugins

__all__ = [
    "__version__",

    # Configuration
    "FlockSettings",
    "get_settings",
    "setup_logging",

    # Exceptions
    "FlockCommonsError",
    "ConfigurationError",
    "TenantError",
    "TenantContextError",
    "BusinessLogicError",
    "InvalidStateError",
    "DatabaseError",
    "RepositoryError",
    "EntityNotFoundError",

    # Tenant context
    "RequestContext",
    "tenant_scope",
    "get_current_tenant_id",
    "require_tenant_id",

    # Onboarding
    "FeatureOnboardingContext",
    "FeatureOnboardingResult",
    "BaseFeatureOnboardingPlugin",
    "MembershipOnboardingPlugin",
    "FeatureOnboardingRegistry",
    "FeatureOnboardingOrchestrator",

    # Finance
    "FinancialTransactionCache",
    "FinancialTransactionService",

    # Wiring
    "ApplicationContext",
    "build_application_context",
    "register_default_plugins",
]
