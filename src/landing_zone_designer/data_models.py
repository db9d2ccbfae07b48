from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, FieldSerializationInfo, field_serializer, field_validator
from pydantic.alias_generators import to_camel

# Python attributes stay snake_case; the JSON interchange shape is camelCase.
_ORDER_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_VALUE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

WORKLOAD_KEYS = ("webapp", "containers", "vm", "data", "serverless", "m365")


# ============================================================================
# Requirement Order Models
# ============================================================================


class Workloads(BaseModel):
    """Workload flags captured at intake."""

    model_config = _ORDER_CONFIG

    webapp: bool = Field(default=True, description="Web App / API")
    containers: bool = Field(default=False, description="Containers (AKS/EKS/GKE)")
    vm: bool = Field(default=False, description="VMs (Lift & Shift)")
    data: bool = Field(default=False, description="Data Platform (ETL/Lake/Warehouse)")
    serverless: bool = Field(default=False, description="Serverless (Functions/Lambda/Run)")
    m365: bool = Field(default=False, description="Microsoft 365 integration")


class Availability(BaseModel):
    """Availability and scale requirements."""

    model_config = _ORDER_CONFIG

    sla_tier: str = Field(default="99.9%", description="Target SLA tier")
    multi_region: bool = Field(default=False, description="Whether the workload spans several regions")
    dr_rto_hours: float = Field(default=4, ge=0, description="Disaster recovery RTO in hours")
    dr_rpo_minutes: float = Field(default=30, ge=0, description="Disaster recovery RPO in minutes")
    traffic_level: str = Field(default="moderate", description="low | moderate | high | unknown")


class SecurityRequirements(BaseModel):
    """Security toggles captured at intake."""

    model_config = _ORDER_CONFIG

    identity_provider: str = Field(default="Microsoft Entra ID", description="Identity provider name")
    zero_trust: bool = Field(default=True, description="Apply zero trust principles")
    private_endpoints: bool = Field(default=True, description="Use private endpoints/private access for PaaS")
    ddos: bool = Field(default=True, description="Enable DDoS protection")
    key_vault: bool = Field(default=True, description="Use a managed key/secrets store")
    defender: bool = Field(default=True, description="Enable the cloud's security posture management")


class NetworkingRequirements(BaseModel):
    """Network topology requirements."""

    model_config = _ORDER_CONFIG

    topology: str = Field(default="hub-spoke", description="hub-spoke | flat | mesh")
    address_space: str = Field(default="10.10.0.0/16", description="Requested address space (informational only)")
    spoke_count: int = Field(default=2, ge=0, description="Number of requested spokes")
    on_prem_connectivity: str = Field(
        default="site-to-site",
        description="none | vpn-client-only | site-to-site | expressroute | direct-connect",
    )


class ToolingRequirements(BaseModel):
    """Delivery tooling preferences."""

    model_config = _ORDER_CONFIG

    iac: str = Field(default="Terraform", description="Infrastructure-as-code tool")
    cicd: str = Field(default="GitHub Actions", description="CI/CD system")
    monitoring: List[str] = Field(default_factory=lambda: ["Log Analytics", "App Insights"], description="Monitoring stack")
    backup: bool = Field(default=True, description="Enable managed backup")
    cost_guardrails: bool = Field(default=True, description="Enable budgets and anomaly alerts")

    @field_validator("monitoring")
    @classmethod
    def _dedupe_monitoring(cls, monitoring: List[str]) -> List[str]:
        return list(dict.fromkeys(monitoring))


class RequirementOrder(BaseModel):
    """A complete intake order for a cloud landing zone."""

    model_config = _ORDER_CONFIG

    org_name: str = Field(default="", description="Organization name")
    contact_email: str = Field(default="", description="Contact email")
    industry: str = Field(default="", description="Industry vertical")
    preferred_cloud: str = Field(default="Azure", description="Azure | AWS | GCP")
    regions: List[str] = Field(default_factory=lambda: ["Sweden Central"], description="Regions, primary first")
    compliance: List[str] = Field(default_factory=lambda: ["GDPR"], description="Compliance frameworks")
    workloads: Workloads = Field(default_factory=Workloads)
    availability: Availability = Field(default_factory=Availability)
    security: SecurityRequirements = Field(default_factory=SecurityRequirements)
    networking: NetworkingRequirements = Field(default_factory=NetworkingRequirements)
    tooling: ToolingRequirements = Field(default_factory=ToolingRequirements)
    notes: str = Field(default="", description="Free-text notes")

    @field_validator("org_name", mode="before")
    @classmethod
    def _null_org_name(cls, org_name):
        # null means unnamed; the default org name applies downstream
        return "" if org_name is None else org_name

    @field_validator("compliance")
    @classmethod
    def _dedupe_compliance(cls, compliance: List[str]) -> List[str]:
        # compliance is a set; keep first-seen order for stable output
        return list(dict.fromkeys(compliance))

    @property
    def primary_region(self) -> str:
        return self.regions[0] if self.regions else ""


# ============================================================================
# Design Models
# ============================================================================


class Subnet(BaseModel):
    """A named subnet and its CIDR."""

    model_config = _VALUE_CONFIG

    name: str
    cidr: str


class Hub(BaseModel):
    """Central shared-services network."""

    model_config = _VALUE_CONFIG

    name: str = Field(..., description="Slugged hub name")
    address_space: str = Field(..., description="Hub CIDR")
    subnets: List[Subnet] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list, description="Shared services hosted in the hub")


class Spoke(BaseModel):
    """Per-workload network peered to the hub."""

    model_config = _VALUE_CONFIG

    name: str = Field(..., description="Slugged spoke name")
    address_space: str = Field(..., description="Spoke CIDR")
    subnets: List[Subnet] = Field(default_factory=list)
    private_endpoints: bool = False


class LandingZone(BaseModel):
    """Hub/spoke network scaffold."""

    model_config = _VALUE_CONFIG

    model: str = Field(..., description="Topology model (hub-spoke, vpc-hub-spoke, vpc-shared, ...)")
    hub: Hub
    spokes: List[Spoke] = Field(default_factory=list)
    connectivity: str = Field(default="", description="On-premises connectivity")


class SecurityPosture(BaseModel):
    """Cloud-specific security services derived from the order's toggles."""

    model_config = _VALUE_CONFIG

    identity: str = ""
    key_management: str = Field(default="", description="Empty when the key vault flag is off")
    defender: str = Field(default="", description="Empty when the defender flag is off")
    zero_trust: bool = False
    private_endpoints: bool = False


class Observability(BaseModel):
    """Monitoring, backup and cost guardrails."""

    model_config = _VALUE_CONFIG

    monitoring: List[str] = Field(default_factory=list)
    backup: str = ""
    cost: str = ""


class RoleBinding(BaseModel):
    """An IAM role granted to a group."""

    model_config = _VALUE_CONFIG

    role: str
    group: str


class Design(BaseModel):
    """Canonical landing-zone design. Recomputed in full from a RequirementOrder."""

    model_config = _VALUE_CONFIG

    cloud: str
    regions: List[str] = Field(default_factory=list, description="Deduplicated, first-seen order")
    landing_zone: Optional[LandingZone] = Field(default=None, description="None for unsupported clouds")
    components: List[str] = Field(default_factory=list, description="Service bundles in rule-evaluation order")
    security: SecurityPosture = Field(default_factory=SecurityPosture)
    observability: Observability = Field(default_factory=Observability)
    iam: List[RoleBinding] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @field_validator("landing_zone", mode="before")
    @classmethod
    def _empty_landing_zone(cls, landing_zone):
        # archived documents carry {} for a missing landing zone
        return None if landing_zone == {} else landing_zone

    @field_serializer("landing_zone")
    def _serialize_landing_zone(self, landing_zone: Optional[LandingZone], info: FieldSerializationInfo) -> dict:
        if landing_zone is None:
            return {}
        return landing_zone.model_dump(mode=info.mode, by_alias=bool(info.by_alias))


# ============================================================================
# Export Models
# ============================================================================


class CostEstimate(BaseModel):
    """Rough monthly/yearly cost ballpark."""

    model_config = _VALUE_CONFIG

    monthly_usd: int = Field(..., alias="monthlyUSD")
    yearly_usd: int = Field(..., alias="yearlyUSD")
    note: str = Field(..., description="Always labels the figure as a rough estimate")


class Box(BaseModel):
    """A labelled rectangle in the topology diagram."""

    model_config = _VALUE_CONFIG

    x: int
    y: int
    width: int
    height: int
    title: str
    subtitle: str = ""
    labels: List[str] = Field(default_factory=list)


class Connector(BaseModel):
    """A dashed line from the hub to one spoke."""

    model_config = _VALUE_CONFIG

    x1: int
    y1: int
    x2: int
    y2: int


class DiagramLayout(BaseModel):
    """Deterministic 2-D layout of the hub/spoke topology."""

    model_config = _VALUE_CONFIG

    width: int
    height: int
    hub: Optional[Box] = None
    spokes: List[Box] = Field(default_factory=list)
    connectors: List[Connector] = Field(default_factory=list)
    legend: str = ""
