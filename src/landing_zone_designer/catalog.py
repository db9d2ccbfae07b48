"""Region options and the default order used by the intake form."""

from typing import Dict, List, Optional

from landing_zone_designer.clouds import Cloud
from landing_zone_designer.data_models import RequirementOrder

REGIONS: Dict[Cloud, List[str]] = {
    Cloud.AZURE: ["Sweden Central", "Sweden South", "North Europe", "West Europe"],
    Cloud.AWS: ["eu-north-1 (Stockholm)", "eu-west-1 (Ireland)", "eu-west-2 (London)"],
    Cloud.GCP: ["europe-north1 (Finland)", "europe-west1 (Belgium)", "europe-west2 (London)"],
}


def region_options(cloud: Optional[str]) -> List[str]:
    member = Cloud.parse(cloud)
    return list(REGIONS[member]) if member else []


def default_order() -> RequirementOrder:
    """A fresh order pre-filled with the intake form defaults."""
    return RequirementOrder()
