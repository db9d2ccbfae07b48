"""Rule-based synthesis of a landing-zone Design from a RequirementOrder."""

import re
from typing import List, Optional

from loguru import logger

from landing_zone_designer.addressing import allocate_hub, allocate_spokes
from landing_zone_designer.clouds import CloudProfile, get_profile
from landing_zone_designer.data_models import (
    WORKLOAD_KEYS,
    Design,
    Hub,
    LandingZone,
    Observability,
    RequirementOrder,
    RoleBinding,
    SecurityPosture,
    SecurityRequirements,
    Spoke,
    Workloads,
)

DEFAULT_ORG_NAME = "org"
COST_GUARDRAILS = "Budgets + Cost Anomaly Alerts"
FALLBACK_RECOMMENDATION = "Enable the provider's native security posture management"

_WHITESPACE = re.compile(r"\s+")


def slugify(value: str) -> str:
    """Lowercase and collapse whitespace runs into single hyphens."""
    return _WHITESPACE.sub("-", value.lower())


def org_slug(org_name: Optional[str]) -> str:
    return slugify(org_name or DEFAULT_ORG_NAME)


def _suffixed(name: str, region: str) -> str:
    return slugify(f"{name}-{region}" if region else name)


# ============================================================================
# Component selection
# ============================================================================


def select_components(workloads: Workloads, profile: Optional[CloudProfile]) -> List[str]:
    """Map true workload flags to service bundles in fixed evaluation order.

    A flag the cloud has no bundle for (m365 outside Azure) contributes nothing.
    """
    if profile is None:
        return []
    return [profile.bundles[key] for key in WORKLOAD_KEYS if getattr(workloads, key) and key in profile.bundles]


# ============================================================================
# Security posture, IAM and recommendations
# ============================================================================


def map_security_posture(security: SecurityRequirements, profile: Optional[CloudProfile]) -> SecurityPosture:
    key_management = profile.key_management if profile and security.key_vault else ""
    defender = profile.defender if profile and security.defender else ""
    return SecurityPosture(
        identity=security.identity_provider,
        key_management=key_management,
        defender=defender,
        zero_trust=security.zero_trust,
        private_endpoints=security.private_endpoints,
    )


def build_iam(profile: Optional[CloudProfile]) -> List[RoleBinding]:
    admin_role = profile.admin_role if profile else "Owner"
    contributor_role = profile.contributor_role if profile else "Contributor"
    return [
        RoleBinding(role=admin_role, group="Cloud-Platform-Admins"),
        RoleBinding(role=contributor_role, group="Project-DevOps"),
        RoleBinding(role="Reader", group="Security-Auditors"),
    ]


def build_recommendations(profile: Optional[CloudProfile]) -> List[str]:
    return [
        "Enforce naming + tagging policy",
        profile.recommendation if profile else FALLBACK_RECOMMENDATION,
        "Use private endpoints/private access for PaaS",
        "Store secrets in managed KMS/Key Vault; use managed identity/service accounts",
    ]


def build_observability(order: RequirementOrder, profile: Optional[CloudProfile]) -> Observability:
    return Observability(
        monitoring=list(order.tooling.monitoring),
        backup=profile.backup if profile and order.tooling.backup else "",
        cost=COST_GUARDRAILS if order.tooling.cost_guardrails else "",
    )


# ============================================================================
# Landing zone
# ============================================================================


def _spoke_name(profile: CloudProfile, idx: int) -> str:
    if idx < len(profile.named_spokes):
        return profile.named_spokes[idx]
    return f"spoke-{idx + 1}"


def build_landing_zone(order: RequirementOrder, profile: CloudProfile) -> LandingZone:
    """Build the hub/spoke scaffold for a supported cloud."""
    region = order.primary_region
    security = order.security

    hub_address_space, hub_subnets = allocate_hub(profile.cloud)
    hub = Hub(
        name=_suffixed(f"{order.org_name or DEFAULT_ORG_NAME}-{profile.hub_label}", region),
        address_space=hub_address_space,
        subnets=hub_subnets,
        services=[service for service, flag in profile.hub_services if flag is None or getattr(security, flag)],
    )

    spokes = [
        Spoke(
            name=_suffixed(_spoke_name(profile, idx), region),
            address_space=block.address_space,
            subnets=list(block.subnets),
            private_endpoints=security.private_endpoints,
        )
        for idx, block in enumerate(allocate_spokes(profile.cloud, order.networking.spoke_count))
    ]

    on_prem = order.networking.on_prem_connectivity
    return LandingZone(
        model=profile.landing_zone_model or order.networking.topology,
        hub=hub,
        spokes=spokes,
        connectivity=profile.connectivity.get(on_prem, on_prem),
    )


def synthesize_design(order: RequirementOrder) -> Design:
    """Derive the canonical Design for an order.

    Total over its input: unsupported clouds produce a Design without a landing
    zone or cloud-specific services instead of raising.
    """
    profile = get_profile(order.preferred_cloud)
    landing_zone = build_landing_zone(order, profile) if profile else None

    design = Design(
        cloud=order.preferred_cloud,
        regions=list(dict.fromkeys(order.regions)),
        landing_zone=landing_zone,
        components=select_components(order.workloads, profile),
        security=map_security_posture(order.security, profile),
        observability=build_observability(order, profile),
        iam=build_iam(profile),
        recommendations=build_recommendations(profile),
    )
    logger.debug(
        "Synthesized {} design: {} component(s), {} spoke(s)",
        design.cloud,
        len(design.components),
        len(landing_zone.spokes) if landing_zone else 0,
    )
    return design
