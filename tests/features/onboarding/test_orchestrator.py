"""Tests for FeatureOnboardingOrchestrator."""

import pytest
from unittest.mock import AsyncMock

from flock_commons.features.onboarding.entities.context import FeatureOnboardingContext
from flock_commons.features.onboarding.plugins.membership import MembershipOnboardingPlugin
from flock_commons.features.onboarding.services.orchestrator import (
    FeatureOnboardingOrchestrator,
    OnboardingSummary,
)
from flock_commons.features.onboarding.services.registry import FeatureOnboardingRegistry


def context_for(*features):
    return FeatureOnboardingContext(tenant_id="t1", user_id="u1", granted_features=features)


@pytest.fixture
def registry():
    return FeatureOnboardingRegistry()


@pytest.fixture
def orchestrator(registry):
    return FeatureOnboardingOrchestrator(registry)


class TestOrchestratorRun:
    """Tests for running plugins over a granted feature set."""

    @pytest.mark.asyncio
    async def test_runs_only_granted_features_in_execution_order(self, registry, orchestrator, make_plugin):
        registry.register(make_plugin("finance.core", priority=1, dependencies=["members.core"]))
        registry.register(make_plugin("members.core", priority=10, records_created=15))
        registry.register(make_plugin("events.core", priority=5))

        summary = await orchestrator.run(context_for("members.core", "finance.core"))

        assert make_plugin.call_log == ["members.core", "finance.core"]
        assert summary.succeeded == ["members.core", "finance.core"]
        assert summary.skipped == ["events.core"]
        assert summary.total_records_created == 16
        assert summary.success is True

    @pytest.mark.asyncio
    async def test_plugin_failure_does_not_stop_the_run(self, registry, orchestrator, make_plugin):
        registry.register(make_plugin("members.core", priority=1, error=RuntimeError("boom")))
        registry.register(make_plugin("finance.core", priority=2))

        summary = await orchestrator.run(context_for("members.core", "finance.core"))

        assert make_plugin.call_log == ["members.core", "finance.core"]
        assert summary.failed == ["members.core"]
        assert summary.succeeded == ["finance.core"]
        assert summary.success is False

    @pytest.mark.asyncio
    async def test_should_execute_error_is_recorded_as_failure(self, registry, orchestrator, make_plugin):
        broken = make_plugin("members.core", priority=1)
        broken.should_execute = AsyncMock(side_effect=RuntimeError("lookup failed"))
        registry.register(broken)
        registry.register(make_plugin("finance.core", priority=2))

        summary = await orchestrator.run(context_for("members.core", "finance.core"))

        assert summary.failed == ["members.core"]
        assert "lookup failed" in str(summary.results[0].error)
        assert make_plugin.call_log == ["finance.core"]

    @pytest.mark.asyncio
    async def test_no_granted_features_runs_nothing(self, registry, orchestrator, make_plugin):
        registry.register(make_plugin("members.core"))

        summary = await orchestrator.run(context_for())

        assert summary.results == []
        assert summary.skipped == ["members.core"]
        assert summary.success is True

    @pytest.mark.asyncio
    async def test_membership_plugin_runs_for_legacy_code(self, registry, orchestrator, mock_seed_repository):
        registry.register(MembershipOnboardingPlugin(mock_seed_repository))

        summary = await orchestrator.run(context_for("member-management"))

        assert summary.succeeded == ["members.core"]
        assert summary.total_records_created == 15


class TestOnboardingSummary:
    def test_to_dict(self, make_plugin):
        plugin = make_plugin("members.core")
        summary = OnboardingSummary(
            tenant_id="t1",
            results=[plugin.success_result("ok", 2), plugin.failure_result("nope")],
            skipped=["events.core"],
        )

        data = summary.to_dict()

        assert data["tenant_id"] == "t1"
        assert data["success"] is False
        assert data["total_records_created"] == 2
        assert data["skipped"] == ["events.core"]
        assert len(data["results"]) == 2
