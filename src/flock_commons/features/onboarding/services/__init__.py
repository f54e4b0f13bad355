"""Onboarding services."""

from .registry import FeatureOnboardingRegistry
from .orchestrator import FeatureOnboardingOrchestrator, OnboardingSummary

__all__ = [
    "FeatureOnboardingRegistry",
    "FeatureOnboardingOrchestrator",
    "OnboardingSummary",
]
