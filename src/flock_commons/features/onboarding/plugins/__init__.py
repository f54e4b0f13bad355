"""Onboarding plugins."""

from .base import BaseFeatureOnboardingPlugin
from .membership import (
    MembershipOnboardingPlugin,
    DEFAULT_MEMBERSHIP_TYPES,
    DEFAULT_MEMBERSHIP_STAGES,
    DEFAULT_DISCIPLESHIP_PATHWAYS,
)

__all__ = [
    "BaseFeatureOnboardingPlugin",
    "MembershipOnboardingPlugin",
    "DEFAULT_MEMBERSHIP_TYPES",
    "DEFAULT_MEMBERSHIP_STAGES",
    "DEFAULT_DISCIPLESHIP_PATHWAYS",
]
