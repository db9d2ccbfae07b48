"""CIDR allocation conventions for hub and spoke networks.

Nothing here validates address ranges; each cloud follows a fixed striding
convention so spoke blocks never collide by construction. Output depends only on
``(cloud, spoke_count)``.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from loguru import logger

from landing_zone_designer.clouds import Cloud
from landing_zone_designer.data_models import Subnet

SPOKE_BLOCK_SIZE = 16
SPOKE_SUBNET_NAMES = ("app", "data", "admin")


@dataclass(frozen=True)
class AllocationRule:
    """Fixed hub layout plus the spoke striding rule for one cloud.

    Spoke ``i`` gets ``{prefix}.{(i + block_offset) * 16}.0/20``. The number of
    spokes is ``max(min_spokes, spoke_count - reserved_spokes)``.
    """

    prefix: str
    hub_address_space: str
    hub_subnets: Tuple[Tuple[str, str], ...]
    block_offset: int
    reserved_spokes: int = 0
    min_spokes: int = 0


@dataclass(frozen=True)
class SpokeBlock:
    address_space: str
    subnets: Tuple[Subnet, ...]


# Azure's reserved subnet names are always emitted, whether or not firewall/bastion are wanted.
ALLOCATION_RULES: Dict[Cloud, AllocationRule] = {
    Cloud.AZURE: AllocationRule(
        prefix="10.10",
        hub_address_space="10.10.0.0/20",
        hub_subnets=(
            ("AzureFirewallSubnet", "10.10.0.0/24"),
            ("AzureBastionSubnet", "10.10.1.0/27"),
            ("shared-services", "10.10.2.0/24"),
            ("private-endpoints", "10.10.3.0/24"),
        ),
        block_offset=1,
    ),
    Cloud.AWS: AllocationRule(
        prefix="10.20",
        hub_address_space="10.20.0.0/16",
        hub_subnets=(
            ("public-a", "10.20.0.0/24"),
            ("public-b", "10.20.1.0/24"),
            ("private-a", "10.20.10.0/24"),
            ("private-b", "10.20.11.0/24"),
        ),
        block_offset=2,
        reserved_spokes=1,
        min_spokes=1,
    ),
    Cloud.GCP: AllocationRule(
        prefix="10.30",
        hub_address_space="10.30.0.0/16",
        hub_subnets=(
            ("apps", "10.30.0.0/24"),
            ("data", "10.30.1.0/24"),
            ("admin", "10.30.2.0/24"),
        ),
        block_offset=1,
        reserved_spokes=1,
        min_spokes=1,
    ),
}


def spoke_total(cloud: Cloud, spoke_count: int) -> int:
    """Number of spokes the landing zone gets for a requested spoke count."""
    rule = ALLOCATION_RULES[cloud]
    return max(rule.min_spokes, spoke_count - rule.reserved_spokes)


def allocate_hub(cloud: Cloud) -> Tuple[str, List[Subnet]]:
    """Return the hub address space and its fixed subnets."""
    rule = ALLOCATION_RULES[cloud]
    return rule.hub_address_space, [Subnet(name=name, cidr=cidr) for name, cidr in rule.hub_subnets]


def allocate_spokes(cloud: Cloud, spoke_count: int) -> List[SpokeBlock]:
    """Return one address block (with app/data/admin subnets) per spoke."""
    rule = ALLOCATION_RULES[cloud]
    blocks = []
    for idx in range(spoke_total(cloud, spoke_count)):
        third_octet = (idx + rule.block_offset) * SPOKE_BLOCK_SIZE
        subnets = tuple(
            Subnet(name=name, cidr=f"{rule.prefix}.{third_octet + offset}.0/24") for offset, name in enumerate(SPOKE_SUBNET_NAMES)
        )
        blocks.append(SpokeBlock(address_space=f"{rule.prefix}.{third_octet}.0/20", subnets=subnets))

    logger.debug("Allocated {} spoke block(s) for {} (requested {})", len(blocks), cloud.value, spoke_count)
    return blocks
