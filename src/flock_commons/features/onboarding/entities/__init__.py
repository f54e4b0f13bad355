"""Onboarding domain entities and protocols."""

from .context import FeatureOnboardingContext, FeatureOnboardingResult, SeedOutcome
from .protocols import FeatureOnboardingPlugin, SeedRecordRepository

__all__ = [
    "FeatureOnboardingContext",
    "FeatureOnboardingResult",
    "SeedOutcome",
    "FeatureOnboardingPlugin",
    "SeedRecordRepository",
]
