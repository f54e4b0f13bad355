"""Onboarding response models for API endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..services.orchestrator import OnboardingSummary


class FeatureOnboardingResultResponse(BaseModel):
    """Outcome of a single onboarding plugin."""

    feature_code: Optional[str] = Field(None, description="Feature code of the plugin")
    success: bool = Field(..., description="Whether the plugin completed")
    message: str = Field(..., description="Human-readable summary")
    records_created: int = Field(0, description="Records inserted by the plugin")
    error: Optional[str] = Field(None, description="Error message when the plugin failed")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Per-category detail")


class OnboardingSummaryResponse(BaseModel):
    """Response model for an onboarding run."""

    tenant_id: str = Field(..., description="Tenant ID")
    success: bool = Field(..., description="True when no plugin failed")
    total_records_created: int = Field(..., description="Records inserted across plugins")
    succeeded: List[str] = Field(default_factory=list, description="Feature codes that completed")
    failed: List[str] = Field(default_factory=list, description="Feature codes that failed")
    skipped: List[str] = Field(default_factory=list, description="Feature codes that did not apply")
    results: List[FeatureOnboardingResultResponse] = Field(default_factory=list, description="Per-plugin results")

    @classmethod
    def from_summary(cls, summary: OnboardingSummary) -> "OnboardingSummaryResponse":
        return cls(**summary.to_dict())
