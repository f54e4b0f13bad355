"""Onboarding routers."""

from .onboarding_router import onboarding_router, get_onboarding_orchestrator

__all__ = [
    "onboarding_router",
    "get_onboarding_orchestrator",
]
