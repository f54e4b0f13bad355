"""
Base Feature Onboarding Plugin

Provides uniform logging and error containment for onboarding plugins.
Concrete plugins implement ``_execute_internal`` only; ``execute`` is the
entry point used by the orchestrator and never raises.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from ....config.constants import SeedStatus
from ..entities.context import FeatureOnboardingContext, FeatureOnboardingResult, SeedOutcome
from ..entities.protocols import SeedRecordRepository

logger = logging.getLogger(__name__)


class BaseFeatureOnboardingPlugin(ABC):
    """Base class for feature onboarding plugins."""

    feature_code: str = ""
    name: str = ""
    description: str = ""
    priority: int = 100
    dependencies: Sequence[str] = ()

    async def should_execute(self, context: FeatureOnboardingContext) -> bool:
        """Run only when this plugin's feature was granted. Override for aliases."""
        return self.feature_code in context.granted_features

    async def execute(self, context: FeatureOnboardingContext) -> FeatureOnboardingResult:
        """Execute the plugin, converting any exception into a failure result."""
        logger.info(
            f"Starting onboarding plugin {self.name} ({self.feature_code}) "
            f"for tenant {context.tenant_id}",
            extra={
                "feature_code": self.feature_code,
                "tenant_id": context.tenant_id,
                "subscription_tier": context.subscription_tier,
            }
        )

        try:
            result = await self._execute_internal(context)
        except Exception as e:
            logger.error(
                f"Onboarding plugin {self.name} ({self.feature_code}) failed "
                f"for tenant {context.tenant_id}: {e}",
                extra={
                    "feature_code": self.feature_code,
                    "tenant_id": context.tenant_id,
                    "error": str(e),
                },
                exc_info=True
            )
            return self.failure_result(f"{self.name} onboarding failed: {e}", error=e)

        result.feature_code = self.feature_code
        if result.success:
            logger.info(
                f"Onboarding plugin {self.name} completed: {result.message}",
                extra={
                    "feature_code": self.feature_code,
                    "tenant_id": context.tenant_id,
                    "records_created": result.records_created,
                }
            )
        else:
            logger.warning(
                f"Onboarding plugin {self.name} reported failure: {result.message}",
                extra={
                    "feature_code": self.feature_code,
                    "tenant_id": context.tenant_id,
                }
            )
        return result

    @abstractmethod
    async def _execute_internal(self, context: FeatureOnboardingContext) -> FeatureOnboardingResult:
        """Seed the feature's default records."""
        pass

    def success_result(
        self,
        message: str,
        records_created: int,
        metadata: Optional[Dict[str, Any]] = None
    ) -> FeatureOnboardingResult:
        return FeatureOnboardingResult(
            success=True,
            message=message,
            records_created=records_created,
            metadata=metadata or {},
            feature_code=self.feature_code,
        )

    def failure_result(
        self,
        message: str,
        error: Optional[BaseException] = None
    ) -> FeatureOnboardingResult:
        return FeatureOnboardingResult(
            success=False,
            message=message,
            records_created=0,
            error=error,
            feature_code=self.feature_code,
        )

    async def seed_records(
        self,
        repository: SeedRecordRepository,
        table: str,
        tenant_id: str,
        definitions: Iterable[Dict[str, Any]],
        build_record: Callable[[Dict[str, Any]], Dict[str, Any]],
    ) -> List[SeedOutcome]:
        """Insert each definition unless a live record with its code exists.

        A failed existence check is treated as "not found" so the insert is
        still attempted. A failed insert is recorded and the loop continues.
        """
        outcomes: List[SeedOutcome] = []

        for definition in definitions:
            code = definition["code"]

            try:
                exists = await repository.exists_by_code(table, tenant_id, code)
            except Exception as e:
                logger.warning(
                    f"Existence check for {table} '{code}' failed, attempting insert: {e}",
                    extra={"tenant_id": tenant_id, "table": table, "code": code}
                )
                exists = False

            if exists:
                logger.debug(f"{table} '{code}' already exists for tenant {tenant_id}, skipping")
                outcomes.append(SeedOutcome(code=code, status=SeedStatus.SKIPPED))
                continue

            try:
                await repository.create(table, build_record(definition))
            except Exception as e:
                logger.error(
                    f"Failed to seed {table} '{code}' for tenant {tenant_id}: {e}",
                    extra={"tenant_id": tenant_id, "table": table, "code": code}
                )
                outcomes.append(SeedOutcome(code=code, status=SeedStatus.FAILED, error=str(e)))
                continue

            outcomes.append(SeedOutcome(code=code, status=SeedStatus.CREATED))

        return outcomes
