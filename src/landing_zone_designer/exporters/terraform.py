"""Terraform exporters.

Each cloud has one backend registered by cloud. Backends declare whether they
read the computed landing zone: the Azure backend renders the full hub/spoke
design, while the AWS and GCP backends emit a fixed VPC skeleton that only
substitutes the organization slug and the primary region code.
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Type

from loguru import logger

from landing_zone_designer.clouds import Cloud
from landing_zone_designer.data_models import Design, RequirementOrder, Spoke, Subnet
from landing_zone_designer.synthesizer import DEFAULT_ORG_NAME, org_slug

UNSUPPORTED_CLOUD = "# Unsupported cloud"

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_]")


def region_code(label: Optional[str], default: str) -> str:
    """Reduce a labelled region such as ``"eu-west-1 (Ireland)"`` to ``"eu-west-1"``."""
    return (label or default).strip().split(" ")[0]


def hcl_identifier(name: str) -> str:
    """Turn a slug into a Terraform block label (letters, digits and underscores)."""
    identifier = _INVALID_IDENTIFIER_CHARS.sub("_", name)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier


def hcl_string(value: str) -> str:
    """Quote a value as an HCL string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("${", "$${").replace("%{", "%%{")
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f'"{escaped}"'


def _render(blocks: List[str]) -> str:
    return "\n\n".join(block.strip("\n") for block in blocks if block) + "\n"


# ============================================================================
# Backend registry
# ============================================================================


class TerraformBackend(ABC):
    """A Terraform syntax backend for one cloud."""

    cloud: Cloud
    reads_landing_zone: bool = False

    @abstractmethod
    def render(self, design: Design, order: RequirementOrder) -> str:
        """Return the full Terraform document."""


_BACKENDS: Dict[Cloud, TerraformBackend] = {}


def register_backend(cloud: Cloud) -> Callable[[Type[TerraformBackend]], Type[TerraformBackend]]:
    def decorator(backend_cls: Type[TerraformBackend]) -> Type[TerraformBackend]:
        backend_cls.cloud = cloud
        _BACKENDS[cloud] = backend_cls()
        return backend_cls

    return decorator


def backend_for(cloud: Optional[str]) -> Optional[TerraformBackend]:
    member = Cloud.parse(cloud)
    return _BACKENDS.get(member) if member else None


def export_terraform(design: Design, order: RequirementOrder) -> str:
    """Render the Terraform document for a design, or the unsupported-cloud comment."""
    backend = backend_for(design.cloud)
    if backend is None:
        logger.warning("No Terraform backend for cloud {!r}", design.cloud)
        return UNSUPPORTED_CLOUD

    logger.debug("Rendering Terraform with {} (reads landing zone: {})", type(backend).__name__, backend.reads_landing_zone)
    return backend.render(design, order)


# ============================================================================
# Azure
# ============================================================================


@register_backend(Cloud.AZURE)
class AzureTerraformBackend(TerraformBackend):
    """Resource group, hub and spokes with peering, plus optional shared services."""

    reads_landing_zone = True

    default_location = "Sweden Central"

    def render(self, design: Design, order: RequirementOrder) -> str:
        org = org_slug(order.org_name)
        location = order.primary_region or self.default_location
        ddos = order.security.ddos
        landing_zone = design.landing_zone

        blocks = [
            _AZURE_HEADER,
            f"""variable "project_name" {{
  type    = string
  default = {hcl_string(order.org_name or DEFAULT_ORG_NAME)}
}}""",
            f"""resource "azurerm_resource_group" "main" {{
  name     = {hcl_string(f"{org}-rg")}
  location = {hcl_string(location)}
  tags = {{
    Project = var.project_name
    Owner   = "Platform Team"
  }}
}}""",
        ]

        if ddos:
            blocks.append(
                f"""resource "azurerm_network_ddos_protection_plan" "ddos" {{
  name                = {hcl_string(f"{org}-ddos")}
  location            = azurerm_resource_group.main.location
  resource_group_name = azurerm_resource_group.main.name
}}"""
            )

        hub = landing_zone.hub if landing_zone else None
        hub_name = hub.name if hub else f"{org}-hub"
        hub_address_space = hub.address_space if hub else "10.10.0.0/20"
        ddos_link = (
            """

  ddos_protection_plan {
    id     = azurerm_network_ddos_protection_plan.ddos.id
    enable = true
  }"""
            if ddos
            else ""
        )
        blocks.append(
            f"""resource "azurerm_virtual_network" "hub" {{
  name                = {hcl_string(f"{hub_name}-vnet")}
  address_space       = [{hcl_string(hub_address_space)}]
  location            = azurerm_resource_group.main.location
  resource_group_name = azurerm_resource_group.main.name{ddos_link}
}}"""
        )

        for subnet in hub.subnets if hub else []:
            blocks.append(self._subnet(f"hub_{hcl_identifier(subnet.name)}", "hub", subnet))

        for spoke in landing_zone.spokes if landing_zone else []:
            blocks.extend(self._spoke(spoke))

        if "Log Analytics" in order.tooling.monitoring:
            blocks.append(
                f"""resource "azurerm_log_analytics_workspace" "law" {{
  name                = {hcl_string(f"{org}-law")}
  location            = azurerm_resource_group.main.location
  resource_group_name = azurerm_resource_group.main.name
  sku                 = "PerGB2018"
  retention_in_days   = 30
}}"""
            )

        if order.security.key_vault:
            blocks.append(
                f"""resource "azurerm_key_vault" "kv" {{
  name                       = {hcl_string(f"{org}-kv-aaaaaa")}
  location                   = azurerm_resource_group.main.location
  resource_group_name        = azurerm_resource_group.main.name
  tenant_id                  = data.azurerm_client_config.current.tenant_id
  sku_name                   = "standard"
  purge_protection_enabled   = true
  soft_delete_retention_days = 90
}}"""
            )

        if order.workloads.webapp:
            blocks.append(_azure_front_door(org))

        return _render(blocks)

    @staticmethod
    def _subnet(identifier: str, vnet_identifier: str, subnet: Subnet) -> str:
        return f"""resource "azurerm_subnet" "{identifier}" {{
  name                 = {hcl_string(subnet.name)}
  resource_group_name  = azurerm_resource_group.main.name
  virtual_network_name = azurerm_virtual_network.{vnet_identifier}.name
  address_prefixes     = [{hcl_string(subnet.cidr)}]
}}"""

    def _spoke(self, spoke: Spoke) -> List[str]:
        ident = hcl_identifier(spoke.name)
        blocks = [
            f"""resource "azurerm_virtual_network" "{ident}" {{
  name                = {hcl_string(f"{spoke.name}-vnet")}
  address_space       = [{hcl_string(spoke.address_space)}]
  location            = azurerm_resource_group.main.location
  resource_group_name = azurerm_resource_group.main.name
}}"""
        ]
        blocks.extend(self._subnet(f"{ident}_{hcl_identifier(subnet.name)}", ident, subnet) for subnet in spoke.subnets)
        blocks.append(
            f"""resource "azurerm_virtual_network_peering" "{ident}_to_hub" {{
  name                      = {hcl_string(f"{spoke.name}-to-hub")}
  resource_group_name       = azurerm_resource_group.main.name
  virtual_network_name      = azurerm_virtual_network.{ident}.name
  remote_virtual_network_id = azurerm_virtual_network.hub.id
  allow_forwarded_traffic   = true
  allow_gateway_transit     = true
}}"""
        )
        blocks.append(
            f"""resource "azurerm_virtual_network_peering" "hub_to_{ident}" {{
  name                      = {hcl_string(f"hub-to-{spoke.name}")}
  resource_group_name       = azurerm_resource_group.main.name
  virtual_network_name      = azurerm_virtual_network.hub.name
  remote_virtual_network_id = azurerm_virtual_network.{ident}.id
  allow_forwarded_traffic   = true
  use_remote_gateways       = true
}}"""
        )
        return blocks


_AZURE_HEADER = """terraform {
  required_providers {
    azurerm = {
      source  = "hashicorp/azurerm"
      version = ">= 3.0"
    }
  }
}

provider "azurerm" {
  features {}
}

data "azurerm_client_config" "current" {}"""


def _azure_front_door(org: str) -> str:
    return f"""resource "azurerm_frontdoor" "fd" {{
  name                = {hcl_string(f"{org}-fd")}
  resource_group_name = azurerm_resource_group.main.name

  routing_rule {{
    name               = "default"
    accepted_protocols = ["Http", "Https"]
    patterns_to_match  = ["/*"]
    frontend_endpoints = ["fe"]

    forwarding_configuration {{
      forwarding_protocol = "MatchRequest"
      backend_pool_name   = "defaultpool"
    }}
  }}

  backend_pool_load_balancing {{
    name = "defaultlb"
  }}

  backend_pool_health_probe {{
    name = "defaultprobe"
  }}

  backend_pool {{
    name                = "defaultpool"
    load_balancing_name = "defaultlb"
    health_probe_name   = "defaultprobe"

    backend {{
      host_header = "example.com"
      address     = "example.com"
      http_port   = 80
      https_port  = 443
    }}
  }}

  frontend_endpoint {{
    name      = "fe"
    host_name = {hcl_string(f"{org}-fe.azurefd.net")}
  }}
}}"""


# ============================================================================
# AWS / GCP
# ============================================================================


@register_backend(Cloud.AWS)
class AwsTerraformBackend(TerraformBackend):
    """Fixed two-AZ VPC with public/private subnets, IGW and a NAT gateway."""

    default_region = "eu-north-1"

    def render(self, design: Design, order: RequirementOrder) -> str:
        org = org_slug(order.org_name)
        region = region_code(order.primary_region, self.default_region)

        blocks = [
            """terraform {
  required_providers {
    aws = {
      source  = "hashicorp/aws"
      version = ">= 5.0"
    }
  }
}""",
            f"""provider "aws" {{
  region = {hcl_string(region)}
}}""",
            f"""resource "aws_vpc" "main" {{
  cidr_block = "10.20.0.0/16"
  tags = {{
    Name = {hcl_string(f"{org}-vpc")}
  }}
}}""",
            """resource "aws_internet_gateway" "igw" {
  vpc_id = aws_vpc.main.id
}""",
        ]
        for name, cidr, public in _AWS_SUBNETS:
            public_ip = "\n  map_public_ip_on_launch = true" if public else ""
            blocks.append(
                f"""resource "aws_subnet" "{name}" {{
  vpc_id     = aws_vpc.main.id
  cidr_block = "{cidr}"{public_ip}
}}"""
            )
        blocks.append(
            """resource "aws_eip" "nat" {
  domain = "vpc"
}

resource "aws_nat_gateway" "nat" {
  allocation_id = aws_eip.nat.id
  subnet_id     = aws_subnet.public_a.id
}"""
        )
        blocks.append(_aws_route_table("public", "gateway_id = aws_internet_gateway.igw.id", ("public_a", "public_b")))
        blocks.append(_aws_route_table("private", "nat_gateway_id = aws_nat_gateway.nat.id", ("private_a", "private_b")))
        return _render(blocks)


_AWS_SUBNETS = (
    ("public_a", "10.20.0.0/24", True),
    ("public_b", "10.20.1.0/24", True),
    ("private_a", "10.20.10.0/24", False),
    ("private_b", "10.20.11.0/24", False),
)


def _aws_route_table(name: str, target: str, subnets: tuple) -> str:
    route_name = "public_inet" if name == "public" else "private_nat"
    associations = "\n\n".join(
        f"""resource "aws_route_table_association" "{subnet}" {{
  subnet_id      = aws_subnet.{subnet}.id
  route_table_id = aws_route_table.{name}.id
}}"""
        for subnet in subnets
    )
    return f"""resource "aws_route_table" "{name}" {{
  vpc_id = aws_vpc.main.id
}}

resource "aws_route" "{route_name}" {{
  route_table_id         = aws_route_table.{name}.id
  destination_cidr_block = "0.0.0.0/0"
  {target}
}}

{associations}"""


@register_backend(Cloud.GCP)
class GcpTerraformBackend(TerraformBackend):
    """Custom-mode VPC with fixed apps/data/admin subnetworks."""

    default_region = "europe-north1"

    subnetworks = (("apps", "10.30.0.0/24"), ("data", "10.30.1.0/24"), ("admin", "10.30.2.0/24"))

    def render(self, design: Design, order: RequirementOrder) -> str:
        org = org_slug(order.org_name)
        region = hcl_string(region_code(order.primary_region, self.default_region))

        blocks = [
            """terraform {
  required_providers {
    google = {
      source  = "hashicorp/google"
      version = ">= 5.0"
    }
  }
}""",
            f"""provider "google" {{
  project = var.project_id
  region  = {region}
}}""",
            """variable "project_id" {
  type = string
}""",
            f"""resource "google_compute_network" "vpc" {{
  name                    = {hcl_string(f"{org}-vpc")}
  auto_create_subnetworks = false
}}""",
        ]
        for name, cidr in self.subnetworks:
            blocks.append(
                f"""resource "google_compute_subnetwork" "{name}" {{
  name          = "{name}"
  ip_cidr_range = "{cidr}"
  region        = {region}
  network       = google_compute_network.vpc.id
}}"""
            )
        return _render(blocks)
