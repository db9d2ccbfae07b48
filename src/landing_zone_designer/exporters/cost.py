"""Rough cost ballpark from the number of selected service bundles."""

from landing_zone_designer.data_models import CostEstimate, Design

BASE_MONTHLY_USD = 500
PER_COMPONENT_USD = 200
ESTIMATE_NOTE = "Rough ballpark only. Plug in real pricing later."


def estimate_cost(design: Design) -> CostEstimate:
    monthly = BASE_MONTHLY_USD + PER_COMPONENT_USD * len(design.components)
    return CostEstimate(monthly_usd=monthly, yearly_usd=monthly * 12, note=ESTIMATE_NOTE)
