"""Shared fixtures for landing zone designer tests."""

from typing import Dict, List, Optional

import pytest

from landing_zone_designer.data_models import (
    NetworkingRequirements,
    RequirementOrder,
    SecurityRequirements,
    ToolingRequirements,
    Workloads,
)

PRIMARY_REGIONS = {
    "Azure": "Sweden Central",
    "AWS": "eu-north-1 (Stockholm)",
    "GCP": "europe-north1 (Finland)",
}

ALL_CLOUDS = ["Azure", "AWS", "GCP"]


def _make_order(
    cloud: str = "Azure",
    spoke_count: int = 2,
    regions: Optional[List[str]] = None,
    org_name: str = "Contoso Retail",
    workloads: Optional[Dict[str, bool]] = None,
    security: Optional[Dict[str, object]] = None,
    tooling: Optional[Dict[str, object]] = None,
    on_prem_connectivity: str = "site-to-site",
    topology: str = "hub-spoke",
) -> RequirementOrder:
    return RequirementOrder(
        org_name=org_name,
        preferred_cloud=cloud,
        regions=regions if regions is not None else [PRIMARY_REGIONS.get(cloud, "Somewhere Central")],
        workloads=Workloads(**(workloads or {})),
        security=SecurityRequirements(**(security or {})),
        networking=NetworkingRequirements(
            spoke_count=spoke_count,
            topology=topology,
            on_prem_connectivity=on_prem_connectivity,
        ),
        tooling=ToolingRequirements(**(tooling or {})),
    )


@pytest.fixture
def make_order():
    """Factory for requirement orders with test-friendly defaults."""
    return _make_order


@pytest.fixture
def only_workloads():
    """Build a workload mapping where only the named flags are true."""

    def _only(*keys: str) -> Dict[str, bool]:
        flags = {key: False for key in ("webapp", "containers", "vm", "data", "serverless", "m365")}
        flags.update({key: True for key in keys})
        return flags

    return _only
