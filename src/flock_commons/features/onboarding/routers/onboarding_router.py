"""Feature onboarding router.

Exposes the onboarding orchestrator so the registration and subscription
flows can seed defaults after granting features to a tenant.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..models.requests import FeatureOnboardingRequest
from ..models.responses import OnboardingSummaryResponse
from ..services.orchestrator import FeatureOnboardingOrchestrator

logger = logging.getLogger(__name__)

onboarding_router = APIRouter(
    prefix="/onboarding",
    tags=["Onboarding"],
    responses={
        422: {"description": "Invalid onboarding request"},
        500: {"description": "Internal server error"}
    }
)


# Placeholder dependency; applications override via dependency_overrides

def get_onboarding_orchestrator() -> FeatureOnboardingOrchestrator:
    """Placeholder for onboarding orchestrator dependency.

    Applications must override this via:
    app.dependency_overrides[get_onboarding_orchestrator] = lambda: orchestrator
    """
    raise HTTPException(
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
        detail="Onboarding orchestrator dependency not configured"
    )


@onboarding_router.post(
    "/features",
    response_model=OnboardingSummaryResponse,
    summary="Run feature onboarding",
    description="Seed default records for the features newly granted to a tenant"
)
async def run_feature_onboarding(
    request: FeatureOnboardingRequest,
    orchestrator: FeatureOnboardingOrchestrator = Depends(get_onboarding_orchestrator)
) -> OnboardingSummaryResponse:
    """Run every applicable onboarding plugin for the tenant."""
    summary = await orchestrator.run(request.to_context())
    return OnboardingSummaryResponse.from_summary(summary)
