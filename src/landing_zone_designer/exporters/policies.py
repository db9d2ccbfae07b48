"""Policy-as-code baselines per cloud."""

from typing import Dict, List, Optional, Tuple

from landing_zone_designer.clouds import Cloud

POLICY_BASELINES: Dict[Cloud, Tuple[str, ...]] = {
    Cloud.AZURE: (
        "Enforce naming convention",
        "Require tags: Owner, CostCenter",
        "Deny public IPs on NICs",
        "Require Private Endpoints for Storage/DB",
        "Enable Defender for Cloud",
    ),
    Cloud.AWS: (
        "SCP: deny *:* on root",
        "Tagging policy required",
        "CloudTrail enabled in all regions",
        "AWS Config recorder mandatory",
        "GuardDuty + Security Hub",
    ),
    Cloud.GCP: (
        "Org policy: restrict external IPs",
        "Require labels for billing",
        "VPC Service Controls for data services",
        "Enable Security Command Center",
        "Require CMEK for storage",
    ),
}


def policy_baselines(cloud: Optional[str]) -> List[str]:
    member = Cloud.parse(cloud)
    if member is None:
        return []
    return list(POLICY_BASELINES[member])
