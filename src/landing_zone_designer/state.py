"""Artifact bundle produced for one requirement order."""

from typing import List

from pydantic import BaseModel, ConfigDict

from landing_zone_designer.data_models import CostEstimate, Design, DiagramLayout, RequirementOrder


class ArtifactBundle(BaseModel):
    """Every artifact derived from the current order, as one immutable snapshot."""

    model_config = ConfigDict(frozen=True)

    # Input
    order: RequirementOrder

    # Canonical design
    design: Design

    # Exports
    terraform: str
    pipeline: str
    policies: List[str]
    cost: CostEstimate
    diagram: DiagramLayout
