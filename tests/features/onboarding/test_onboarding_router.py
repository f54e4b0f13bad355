"""Tests for the onboarding router."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from flock_commons.features.onboarding.models.requests import FeatureOnboardingRequest
from flock_commons.features.onboarding.routers import get_onboarding_orchestrator, onboarding_router
from flock_commons.features.onboarding.services import (
    FeatureOnboardingOrchestrator,
    FeatureOnboardingRegistry,
)

PAYLOAD = {
    "tenant_id": "t1",
    "user_id": "u1",
    "subscription_tier": "starter",
    "granted_features": ["members.core", "  ", "events.core"],
}


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(onboarding_router)
    return app


class TestOnboardingEndpoint:
    def test_unconfigured_dependency_returns_501(self, app):
        client = TestClient(app)

        response = client.post("/onboarding/features", json=PAYLOAD)

        assert response.status_code == 501

    def test_runs_orchestrator_and_returns_summary(self, app, make_plugin):
        registry = FeatureOnboardingRegistry()
        registry.register(make_plugin("members.core", records_created=15))
        registry.register(make_plugin("finance.core", error=RuntimeError("boom")))
        registry.register(make_plugin("events.core", records_created=2))
        app.dependency_overrides[get_onboarding_orchestrator] = (
            lambda: FeatureOnboardingOrchestrator(registry)
        )
        client = TestClient(app)

        response = client.post("/onboarding/features", json=PAYLOAD)

        assert response.status_code == 200
        body = response.json()
        assert body["tenant_id"] == "t1"
        assert body["success"] is True
        assert body["total_records_created"] == 17
        assert body["succeeded"] == ["members.core", "events.core"]
        assert body["skipped"] == ["finance.core"]

    def test_failed_plugin_is_reported_with_error(self, app, make_plugin):
        registry = FeatureOnboardingRegistry()
        registry.register(make_plugin("members.core", error=RuntimeError("boom")))
        app.dependency_overrides[get_onboarding_orchestrator] = (
            lambda: FeatureOnboardingOrchestrator(registry)
        )
        client = TestClient(app)

        response = client.post("/onboarding/features", json=PAYLOAD)

        body = response.json()
        assert body["success"] is False
        assert body["failed"] == ["members.core"]
        assert body["results"][0]["error"] == "boom"

    def test_missing_tenant_is_rejected(self, app):
        app.dependency_overrides[get_onboarding_orchestrator] = (
            lambda: FeatureOnboardingOrchestrator(FeatureOnboardingRegistry())
        )
        client = TestClient(app)

        response = client.post("/onboarding/features", json={**PAYLOAD, "tenant_id": ""})

        assert response.status_code == 422

    @pytest.mark.parametrize("field", ["tenant_id", "user_id"])
    def test_blank_identifiers_are_rejected(self, app, field):
        app.dependency_overrides[get_onboarding_orchestrator] = (
            lambda: FeatureOnboardingOrchestrator(FeatureOnboardingRegistry())
        )
        client = TestClient(app)

        response = client.post("/onboarding/features", json={**PAYLOAD, field: "   "})

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", field]


def test_request_strips_padded_identifiers():
    request = FeatureOnboardingRequest(**{**PAYLOAD, "tenant_id": " t1 ", "user_id": "u1\n"})

    context = request.to_context()

    assert (context.tenant_id, context.user_id) == ("t1", "u1")
