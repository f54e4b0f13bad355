"""Onboarding protocols for flock-commons."""

from abc import abstractmethod
from typing import Any, Dict, Protocol, Sequence, runtime_checkable

from .context import FeatureOnboardingContext, FeatureOnboardingResult


@runtime_checkable
class FeatureOnboardingPlugin(Protocol):
    """Protocol for plugins that seed defaults when a feature is granted."""

    feature_code: str
    name: str
    description: str
    priority: int
    dependencies: Sequence[str]

    async def should_execute(self, context: FeatureOnboardingContext) -> bool:
        """Check whether this plugin applies to the granted features."""
        ...

    async def execute(self, context: FeatureOnboardingContext) -> FeatureOnboardingResult:
        """Run the plugin. Failures are returned, never raised."""
        ...


@runtime_checkable
class SeedRecordRepository(Protocol):
    """Protocol for tenant-scoped catalog tables seeded during onboarding."""

    @abstractmethod
    async def exists_by_code(self, table: str, tenant_id: str, code: str) -> bool:
        """Check for a live (not soft-deleted) record with the given code."""
        ...

    @abstractmethod
    async def create(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record and return the stored row."""
        ...
