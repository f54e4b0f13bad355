"""FastAPI application factory wiring flock-commons routers to an ApplicationContext."""

from fastapi import FastAPI

from ..bootstrap import ApplicationContext
from ..features.finance.routers import get_financial_transaction_service, transaction_router
from ..features.onboarding.routers import get_onboarding_orchestrator, onboarding_router
from .exception_handlers import register_exception_handlers


def create_app(context: ApplicationContext) -> FastAPI:
    """Create an application serving the onboarding and transaction routers."""
    app = FastAPI(title=context.settings.app_name)

    app.include_router(onboarding_router)
    app.include_router(transaction_router)

    app.dependency_overrides[get_onboarding_orchestrator] = lambda: context.onboarding_orchestrator
    app.dependency_overrides[get_financial_transaction_service] = lambda: context.transaction_service

    register_exception_handlers(app, is_production=context.settings.is_production)
    app.state.context = context
    return app
