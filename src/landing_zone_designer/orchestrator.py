"""Orchestrator: derive every artifact for an order and write them to disk."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from landing_zone_designer.data_models import Design, RequirementOrder
from landing_zone_designer.exporters.cost import estimate_cost
from landing_zone_designer.exporters.diagram import layout_diagram, render_svg
from landing_zone_designer.exporters.pipelines import pipeline_filename, select_pipeline
from landing_zone_designer.exporters.policies import policy_baselines
from landing_zone_designer.exporters.terraform import export_terraform
from landing_zone_designer.state import ArtifactBundle
from landing_zone_designer.synthesizer import slugify, synthesize_design

# Configuration
DOCUMENT_VERSION = 3
OUTPUT_DIR = "outputs"


def build_artifacts(order: RequirementOrder) -> ArtifactBundle:
    """Synthesize the design and run all five exporters against it."""
    design = synthesize_design(order)
    return ArtifactBundle(
        order=order,
        design=design,
        terraform=export_terraform(design, order),
        pipeline=select_pipeline(order.tooling.cicd),
        policies=policy_baselines(order.preferred_cloud),
        cost=estimate_cost(design),
        diagram=layout_diagram(design.landing_zone),
    )


def build_order_document(order: RequirementOrder, design: Design, generated_at: datetime) -> dict:
    """Archival envelope: metadata, the order as captured and the design."""
    return {
        "metadata": {"generatedAt": generated_at.isoformat(), "version": DOCUMENT_VERSION},
        "order": order.model_dump(mode="json", by_alias=True),
        "design": design.model_dump(mode="json", by_alias=True),
    }


def order_filename(org_name: str) -> str:
    return f"{slugify(org_name or 'order')}-cloud-order.json"


def load_order(input_file: str) -> RequirementOrder:
    """Load a requirement order from a JSON file."""
    input_path = Path(input_file)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    with open(input_path, "r", encoding="utf-8") as f:
        return RequirementOrder.model_validate(json.load(f))


def run_export(input_file: str, output_dir: str = OUTPUT_DIR, now: Optional[datetime] = None) -> Path:
    """
    Load an order, derive every artifact and write them to a timestamped directory.

    Args:
        input_file: Path to the requirement order JSON
        output_dir: Directory under which the artifacts directory is created
        now: Generation time; defaults to the current UTC time

    Returns:
        Path of the artifacts directory
    """
    print("\n" + "=" * 80)
    print("LANDING ZONE DESIGN EXPORT")
    print("=" * 80)
    print(f"Input: {input_file}")
    print("=" * 80 + "\n")

    order = load_order(input_file)
    print(f"✓ Loaded order for {order.org_name or 'unnamed organization'} ({order.preferred_cloud})")

    bundle = build_artifacts(order)
    print(f"✓ Design synthesized: {len(bundle.design.components)} component(s)")

    now = now or datetime.now(timezone.utc)
    artifacts_dir = Path(output_dir) / f"artifacts_{now.strftime('%Y%m%d_%H%M%S')}"
    _write_artifacts(bundle, artifacts_dir, now)

    print("\n✓ Output generated successfully")
    print(f"  Artifacts: {artifacts_dir}")
    print(f"  Estimated cost: ${bundle.cost.monthly_usd}/month (${bundle.cost.yearly_usd}/year)")
    print(f"  Policies: {len(bundle.policies)}")

    return artifacts_dir


def _write_artifacts(bundle: ArtifactBundle, artifacts_dir: Path, now: datetime):
    """Write each artifact of the bundle to its own file."""
    print("\n" + "=" * 80)
    print("Writing Artifacts")
    print("=" * 80)

    artifacts_dir.mkdir(parents=True, exist_ok=True)
    order = bundle.order

    document = build_order_document(order, bundle.design, now)
    with open(artifacts_dir / order_filename(order.org_name), "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)

    (artifacts_dir / "main.tf").write_text(bundle.terraform, encoding="utf-8")

    pipeline_path = artifacts_dir / pipeline_filename(order.tooling.cicd)
    pipeline_path.parent.mkdir(parents=True, exist_ok=True)
    pipeline_path.write_text(bundle.pipeline, encoding="utf-8")

    with open(artifacts_dir / "policies.json", "w", encoding="utf-8") as f:
        json.dump(bundle.policies, f, indent=2)

    with open(artifacts_dir / "cost.json", "w", encoding="utf-8") as f:
        json.dump(bundle.cost.model_dump(by_alias=True), f, indent=2)

    with open(artifacts_dir / "diagram.json", "w", encoding="utf-8") as f:
        json.dump(bundle.diagram.model_dump(by_alias=True), f, indent=2, ensure_ascii=False)

    (artifacts_dir / "diagram.svg").write_text(render_svg(bundle.diagram), encoding="utf-8")

    print(f"  ✓ Wrote 7 artifact files to {artifacts_dir}")
