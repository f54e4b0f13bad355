"""
Feature Onboarding Orchestrator

Runs the registered onboarding plugins for a tenant in dependency order,
one at a time. Plugins mutate shared tenant state, so they are never run
concurrently.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..entities.context import FeatureOnboardingContext, FeatureOnboardingResult
from .registry import FeatureOnboardingRegistry

logger = logging.getLogger(__name__)


@dataclass
class OnboardingSummary:
    """Aggregate outcome of an onboarding run."""
    tenant_id: str
    results: List[FeatureOnboardingResult] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> List[str]:
        return [r.feature_code for r in self.results if r.success]

    @property
    def failed(self) -> List[str]:
        return [r.feature_code for r in self.results if not r.success]

    @property
    def total_records_created(self) -> int:
        return sum(r.records_created for r in self.results)

    @property
    def success(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tenant_id": self.tenant_id,
            "success": self.success,
            "total_records_created": self.total_records_created,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": list(self.skipped),
            "results": [r.to_dict() for r in self.results],
        }


class FeatureOnboardingOrchestrator:
    """Execute onboarding plugins for newly granted features."""

    def __init__(self, registry: FeatureOnboardingRegistry):
        self._registry = registry

    @property
    def registry(self) -> FeatureOnboardingRegistry:
        return self._registry

    async def run(self, context: FeatureOnboardingContext) -> OnboardingSummary:
        """Run every applicable plugin in execution order.

        A plugin failure is recorded in the summary and the run continues
        with the next plugin.
        """
        summary = OnboardingSummary(tenant_id=context.tenant_id)
        plugins = self._registry.get_all_sorted()

        logger.info(
            f"Starting feature onboarding for tenant {context.tenant_id} "
            f"({len(context.granted_features)} granted features, {len(plugins)} plugins)",
            extra={
                "tenant_id": context.tenant_id,
                "subscription_tier": context.subscription_tier,
                "granted_features": list(context.granted_features),
            }
        )

        for plugin in plugins:
            try:
                applies = await plugin.should_execute(context)
            except Exception as e:
                logger.error(
                    f"should_execute failed for onboarding plugin {plugin.feature_code}: {e}",
                    extra={"tenant_id": context.tenant_id, "feature_code": plugin.feature_code}
                )
                summary.results.append(FeatureOnboardingResult(
                    success=False,
                    message=f"Could not determine whether {plugin.name} applies: {e}",
                    error=e,
                    feature_code=plugin.feature_code,
                ))
                continue

            if not applies:
                summary.skipped.append(plugin.feature_code)
                continue

            result = await plugin.execute(context)
            if result.feature_code is None:
                result.feature_code = plugin.feature_code
            summary.results.append(result)

        log = logger.info if summary.success else logger.warning
        log(
            f"Feature onboarding finished for tenant {context.tenant_id}: "
            f"{len(summary.succeeded)} succeeded, {len(summary.failed)} failed, "
            f"{summary.total_records_created} records created",
            extra={
                "tenant_id": context.tenant_id,
                "succeeded": summary.succeeded,
                "failed": summary.failed,
            }
        )
        return summary
