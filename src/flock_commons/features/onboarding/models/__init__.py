"""Onboarding API models."""

from .requests import FeatureOnboardingRequest
from .responses import FeatureOnboardingResultResponse, OnboardingSummaryResponse

__all__ = [
    "FeatureOnboardingRequest",
    "FeatureOnboardingResultResponse",
    "OnboardingSummaryResponse",
]
