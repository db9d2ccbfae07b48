"""Closed set of supported clouds and the per-cloud design profile table."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from loguru import logger


class Cloud(str, Enum):
    AZURE = "Azure"
    AWS = "AWS"
    GCP = "GCP"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Cloud"]:
        """Return the matching member, or None for anything unrecognized."""
        for member in cls:
            if member.value == value:
                return member
        return None


@dataclass(frozen=True)
class CloudProfile:
    """Everything the synthesizer needs to know about one cloud.

    ``hub_services`` pairs a service name with the security flag that gates it
    (None means always present). ``landing_zone_model`` of None means the order's
    own topology value is used.
    """

    cloud: Cloud
    landing_zone_model: Optional[str]
    hub_label: str
    hub_services: Tuple[Tuple[str, Optional[str]], ...]
    named_spokes: Tuple[str, ...]
    bundles: Dict[str, str]
    key_management: str
    defender: str
    backup: str
    admin_role: str
    contributor_role: str
    recommendation: str
    connectivity: Dict[str, str] = field(default_factory=dict)


AZURE_PROFILE = CloudProfile(
    cloud=Cloud.AZURE,
    landing_zone_model=None,
    hub_label="hub",
    hub_services=(
        ("DDoS Protection", "ddos"),
        ("Azure Firewall", None),
        ("Azure Bastion", None),
        ("Private DNS Zones", "private_endpoints"),
    ),
    named_spokes=("app", "data"),
    bundles={
        "webapp": "Front Door + App Service",
        "containers": "AKS + ACR",
        "vm": "VM Scale Set",
        "data": "ADLS + Synapse/ADF",
        "serverless": "Functions + Service Bus",
        "m365": "Entra ID App Registrations + Graph API",
    },
    key_management="Azure Key Vault",
    defender="Microsoft Defender for Cloud",
    backup="Azure Backup",
    admin_role="Owner",
    contributor_role="Contributor",
    recommendation="Enable Defender for Cloud",
)

AWS_PROFILE = CloudProfile(
    cloud=Cloud.AWS,
    landing_zone_model="vpc-hub-spoke",
    hub_label="hub",
    hub_services=(("IGW", None), ("NAT Gateway", None)),
    named_spokes=(),
    bundles={
        "webapp": "ALB + ECS/EKS",
        "containers": "EKS + ECR",
        "vm": "EC2 ASG",
        "data": "S3 + Glue + Redshift",
        "serverless": "Lambda + SQS/SNS",
    },
    key_management="AWS KMS",
    defender="GuardDuty + Security Hub",
    backup="AWS Backup",
    admin_role="AdministratorAccess",
    contributor_role="PowerUserAccess",
    recommendation="Enable GuardDuty/Security Hub",
    connectivity={"site-to-site": "Site-to-Site VPN", "expressroute": "Direct Connect"},
)

# GCP keeps the Owner/Contributor labels rather than its native roles/* names.
GCP_PROFILE = CloudProfile(
    cloud=Cloud.GCP,
    landing_zone_model="vpc-shared",
    hub_label="vpc",
    hub_services=(("Cloud NAT", None), ("IAP/Bastion", None)),
    named_spokes=(),
    bundles={
        "webapp": "Cloud LB + Cloud Run/App Engine",
        "containers": "GKE + Artifact Registry",
        "vm": "Compute Engine MIG",
        "data": "GCS + Dataflow + BigQuery",
        "serverless": "Cloud Functions + Pub/Sub",
    },
    key_management="Cloud KMS",
    defender="Security Command Center",
    backup="Backup/DR",
    admin_role="Owner",
    contributor_role="Contributor",
    recommendation="Enable Security Command Center",
)

PROFILES: Dict[Cloud, CloudProfile] = {
    Cloud.AZURE: AZURE_PROFILE,
    Cloud.AWS: AWS_PROFILE,
    Cloud.GCP: GCP_PROFILE,
}


def get_profile(cloud: Optional[str]) -> Optional[CloudProfile]:
    """Look up the profile for a cloud name; None when the cloud is unsupported."""
    member = Cloud.parse(cloud)
    if member is None:
        logger.warning("Unsupported cloud {!r}; falling back to an empty landing zone", cloud)
        return None
    logger.debug("Using {} cloud profile", member.value)
    return PROFILES[member]
