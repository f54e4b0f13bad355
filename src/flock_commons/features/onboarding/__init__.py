"""Feature onboarding for flock-commons.

Plugins seed tenant defaults when features are granted. The registry
orders them by priority and dependencies; the orchestrator runs them.
"""

from .entities import (
    FeatureOnboardingContext,
    FeatureOnboardingResult,
    SeedOutcome,
    FeatureOnboardingPlugin,
    SeedRecordRepository,
)
from .plugins import BaseFeatureOnboardingPlugin, MembershipOnboardingPlugin
from .repositories import SeedRecordDatabaseRepository
from .services import FeatureOnboardingRegistry, FeatureOnboardingOrchestrator, OnboardingSummary

__all__ = [
    "FeatureOnboardingContext",
    "FeatureOnboardingResult",
    "SeedOutcome",
    "FeatureOnboardingPlugin",
    "SeedRecordRepository",
    "BaseFeatureOnboardingPlugin",
    "MembershipOnboardingPlugin",
    "SeedRecordDatabaseRepository",
    "FeatureOnboardingRegistry",
    "FeatureOnboardingOrchestrator",
    "OnboardingSummary",
]
