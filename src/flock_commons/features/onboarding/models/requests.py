"""Onboarding request models for API endpoints."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..entities.context import FeatureOnboardingContext


class FeatureOnboardingRequest(BaseModel):
    """Request model for running feature onboarding for a tenant."""

    tenant_id: str = Field(..., min_length=1, description="Tenant receiving the features")
    user_id: str = Field(..., min_length=1, description="Actor who triggered the grant")
    subscription_tier: str = Field("", description="Subscription tier label")
    granted_features: List[str] = Field(default_factory=list, description="Newly granted feature codes")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "tenant_id": "01920f3e-7b7a-7c1e-9a57-1f2d3c4b5a69",
            "user_id": "01920f3e-8c21-7d4a-b0b2-6e5f4d3c2b1a",
            "subscription_tier": "professional",
            "granted_features": ["members.core", "finance.core"]
        }
    })

    @field_validator('tenant_id', 'user_id')
    @classmethod
    def strip_identifier(cls, v, info):
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} cannot be blank")
        return v

    @field_validator('granted_features')
    @classmethod
    def strip_blank_features(cls, v):
        return [feature.strip() for feature in v if feature and feature.strip()]

    def to_context(self) -> FeatureOnboardingContext:
        return FeatureOnboardingContext(
            tenant_id=self.tenant_id,
            user_id=self.user_id,
            subscription_tier=self.subscription_tier,
            granted_features=tuple(self.granted_features),
        )
