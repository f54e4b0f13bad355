"""
Membership onboarding plugin.

Seeds default membership types, membership stages and discipleship
pathways for a tenant that has been granted the members feature. Types and
stages are flagged ``is_system`` so users can tell them apart from their own
records while still being able to edit or deactivate them.
"""

import logging
from typing import Any, Dict, List

from ....config.constants import FeatureCodes, SeedTables
from ..entities.context import FeatureOnboardingContext, FeatureOnboardingResult, SeedOutcome
from ..entities.protocols import SeedRecordRepository
from .base import BaseFeatureOnboardingPlugin

logger = logging.getLogger(__name__)


DEFAULT_MEMBERSHIP_TYPES: List[Dict[str, Any]] = [
    {
        "code": "member",
        "name": "Member",
        "description": "Full church member with voting rights and access to member-only services",
        "sort_order": 1,
    },
    {
        "code": "regular_attendee",
        "name": "Regular Attendee",
        "description": "Attends services regularly but not yet a formal member",
        "sort_order": 2,
    },
    {
        "code": "visitor",
        "name": "Visitor",
        "description": "First-time or occasional visitor",
        "sort_order": 3,
    },
    {
        "code": "online_member",
        "name": "Online Member",
        "description": "Member who primarily attends online services",
        "sort_order": 4,
    },
    {
        "code": "inactive",
        "name": "Inactive",
        "description": "Previously active member who is no longer attending",
        "sort_order": 5,
    },
]

DEFAULT_MEMBERSHIP_STAGES: List[Dict[str, Any]] = [
    {
        "code": "first_time_guest",
        "name": "First Time Guest",
        "description": "Initial visit to the church",
        "sort_order": 1,
    },
    {
        "code": "returning_guest",
        "name": "Returning Guest",
        "description": "Has visited multiple times",
        "sort_order": 2,
    },
    {
        "code": "connected",
        "name": "Connected",
        "description": "Engaged with a small group or ministry team",
        "sort_order": 3,
    },
    {
        "code": "growing",
        "name": "Growing",
        "description": "Actively participating in discipleship and spiritual growth",
        "sort_order": 4,
    },
    {
        "code": "serving",
        "name": "Serving",
        "description": "Contributing to ministry through volunteer service",
        "sort_order": 5,
    },
    {
        "code": "leading",
        "name": "Leading",
        "description": "Taking leadership roles within the church",
        "sort_order": 6,
    },
]

DEFAULT_DISCIPLESHIP_PATHWAYS: List[Dict[str, Any]] = [
    {
        "code": "growth_track",
        "name": "Growth Track",
        "description": "Next steps for newcomers to discover church life and their gifts",
        "display_order": 1,
    },
    {
        "code": "foundations",
        "name": "Foundations",
        "description": "Core teaching on the basics of the faith",
        "display_order": 2,
    },
    {
        "code": "leadership",
        "name": "Leadership",
        "description": "Development track for current and emerging leaders",
        "display_order": 3,
    },
    {
        "code": "baptism_class",
        "name": "Baptism Class",
        "description": "Preparation for believers planning to be baptized",
        "display_order": 4,
    },
]

# Granted-feature spellings that predate the feature catalog
LEGACY_FEATURE_CODES = frozenset({"member-management", "community"})
FEATURE_FAMILY_PREFIXES = ("members.", "member-", "community_")


class MembershipOnboardingPlugin(BaseFeatureOnboardingPlugin):
    """Seed the membership catalog for tenants granted ``members.core``."""

    feature_code = FeatureCodes.MEMBERS_CORE
    name = "Member Management Feature"
    description = "Seeds default membership types, stages, and discipleship pathways for new tenants"
    priority = 10
    dependencies = ()

    def __init__(self, repository: SeedRecordRepository):
        self._repository = repository

    async def should_execute(self, context: FeatureOnboardingContext) -> bool:
        matched = any(
            feature == self.feature_code
            or feature in LEGACY_FEATURE_CODES
            or feature.startswith(FEATURE_FAMILY_PREFIXES)
            for feature in context.granted_features
        )
        logger.debug(
            f"Membership onboarding applies: {matched}",
            extra={"granted_features": list(context.granted_features)}
        )
        return matched

    async def _execute_internal(self, context: FeatureOnboardingContext) -> FeatureOnboardingResult:
        type_outcomes = await self.seed_records(
            self._repository,
            SeedTables.MEMBERSHIP_TYPE,
            context.tenant_id,
            DEFAULT_MEMBERSHIP_TYPES,
            lambda definition: self._build_record(definition, context, is_system=True),
        )
        stage_outcomes = await self.seed_records(
            self._repository,
            SeedTables.MEMBERSHIP_STAGE,
            context.tenant_id,
            DEFAULT_MEMBERSHIP_STAGES,
            lambda definition: self._build_record(definition, context, is_system=True),
        )
        pathway_outcomes = await self.seed_records(
            self._repository,
            SeedTables.DISCIPLESHIP_PATHWAYS,
            context.tenant_id,
            DEFAULT_DISCIPLESHIP_PATHWAYS,
            lambda definition: self._build_record(definition, context),
        )

        types_created = _count_created(type_outcomes)
        stages_created = _count_created(stage_outcomes)
        pathways_created = _count_created(pathway_outcomes)

        failed_records = (
            [f"{SeedTables.MEMBERSHIP_TYPE}:{o.code}" for o in type_outcomes if o.failed]
            + [f"{SeedTables.MEMBERSHIP_STAGE}:{o.code}" for o in stage_outcomes if o.failed]
            + [f"{SeedTables.DISCIPLESHIP_PATHWAYS}:{o.code}" for o in pathway_outcomes if o.failed]
        )

        return self.success_result(
            f"Created {types_created} membership types, {stages_created} membership stages, "
            f"and {pathways_created} discipleship pathways",
            types_created + stages_created + pathways_created,
            {
                "membership_types_created": types_created,
                "membership_stages_created": stages_created,
                "discipleship_pathways_created": pathways_created,
                "failed_records": failed_records,
            }
        )

    @staticmethod
    def _build_record(
        definition: Dict[str, Any],
        context: FeatureOnboardingContext,
        is_system: bool = False
    ) -> Dict[str, Any]:
        record = dict(definition)
        record["tenant_id"] = context.tenant_id
        if is_system:
            record["is_system"] = True
        record["is_active"] = True
        record["created_by"] = context.user_id
        record["updated_by"] = context.user_id
        return record


def _count_created(outcomes: List[SeedOutcome]) -> int:
    return sum(1 for outcome in outcomes if outcome.created)
