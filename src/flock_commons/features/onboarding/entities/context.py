"""Feature onboarding value objects.

This module defines the immutable input handed to every onboarding plugin
and the result each plugin produces.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ....config.constants import SeedStatus


@dataclass(frozen=True)
class FeatureOnboardingContext:
    """Input for a single onboarding run.

    Represents a tenant that has just been granted one or more features,
    and the actor who triggered the grant.
    """
    tenant_id: str
    user_id: str
    subscription_tier: str = ""
    granted_features: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.tenant_id or not self.tenant_id.strip():
            raise ValueError("tenant_id is required")
        if not self.user_id or not self.user_id.strip():
            raise ValueError("user_id is required")

        # Keep order, drop repeats
        features = tuple(dict.fromkeys(self.granted_features or ()))
        object.__setattr__(self, 'granted_features', features)

    def has_feature(self, feature_code: str) -> bool:
        """Check whether a feature code was granted."""
        return feature_code in self.granted_features


@dataclass
class FeatureOnboardingResult:
    """Outcome of one plugin execution."""
    success: bool
    message: str
    records_created: int = 0
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    feature_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses and audit logs."""
        return {
            "feature_code": self.feature_code,
            "success": self.success,
            "message": self.message,
            "records_created": self.records_created,
            "error": str(self.error) if self.error is not None else None,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class SeedOutcome:
    """Result of seeding one default record."""
    code: str
    status: SeedStatus
    error: Optional[str] = None

    @property
    def created(self) -> bool:
        return self.status == SeedStatus.CREATED

    @property
    def failed(self) -> bool:
        return self.status == SeedStatus.FAILED
