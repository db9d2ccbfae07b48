import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from loguru import logger
from pydantic import ValidationError

from landing_zone_designer.catalog import default_order, region_options
from landing_zone_designer.data_models import Design, RequirementOrder
from landing_zone_designer.orchestrator import build_artifacts, build_order_document, load_order, order_filename, run_export

SAMPLE_ORDER = Path(__file__).resolve().parent.parent / "inputs" / "sample_order.json"
GENERATED_AT = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_build_artifacts_for_default_order():
    bundle = build_artifacts(default_order())
    assert bundle.design.cloud == "Azure"
    assert bundle.design.components == ["Front Door + App Service"]
    assert bundle.cost.monthly_usd == 700
    assert len(bundle.policies) == 5
    assert bundle.terraform.startswith("terraform {")
    assert "hashicorp/setup-terraform" in bundle.pipeline
    assert len(bundle.diagram.spokes) == 2


def test_build_artifacts_for_unsupported_cloud(make_order):
    bundle = build_artifacts(make_order(cloud="OtherCloud"))
    assert bundle.design.landing_zone is None
    assert bundle.terraform == "# Unsupported cloud"
    assert bundle.policies == []
    assert bundle.cost.monthly_usd == 500
    assert bundle.diagram.hub is None


def test_order_document_envelope(make_order):
    order = make_order()
    bundle = build_artifacts(order)
    document = build_order_document(order, bundle.design, GENERATED_AT)
    assert document["metadata"] == {"generatedAt": "2026-01-02T03:04:05+00:00", "version": 3}
    assert document["order"]["orgName"] == "Contoso Retail"
    assert document["design"]["landingZone"]["hub"]["addressSpace"] == "10.10.0.0/20"
    json.dumps(document)


def test_order_document_is_reproducible(make_order):
    order = make_order(cloud="GCP", spoke_count=3)
    first = build_order_document(order, build_artifacts(order).design, GENERATED_AT)
    second = build_order_document(order, build_artifacts(order).design, GENERATED_AT)
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


@pytest.mark.parametrize("org_name, filename", [("Contoso Retail", "contoso-retail-cloud-order.json"), ("", "order-cloud-order.json")])
def test_order_filename(org_name, filename):
    assert order_filename(org_name) == filename


def test_load_order_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_order(str(tmp_path / "missing.json"))


def test_load_sample_order():
    order = load_order(str(SAMPLE_ORDER))
    assert order.org_name == "Contoso Retail"
    assert order.networking.spoke_count == 3
    assert order.workloads.containers


def test_run_export_writes_every_artifact(tmp_path, capsys):
    artifacts_dir = run_export(str(SAMPLE_ORDER), str(tmp_path), now=GENERATED_AT)

    assert artifacts_dir == tmp_path / "artifacts_20260102_030405"
    for name in [
        "contoso-retail-cloud-order.json",
        "main.tf",
        ".github/workflows/deploy.yml",
        "policies.json",
        "cost.json",
        "diagram.json",
        "diagram.svg",
    ]:
        assert (artifacts_dir / name).exists(), name

    cost = json.loads((artifacts_dir / "cost.json").read_text(encoding="utf-8"))
    assert cost["monthlyUSD"] == 500 + 3 * 200
    assert "azurerm_frontdoor" in (artifacts_dir / "main.tf").read_text(encoding="utf-8")
    assert "✓ Output generated successfully" in capsys.readouterr().out


def test_order_accepts_camel_and_snake_case():
    camel = RequirementOrder.model_validate({"orgName": "X", "networking": {"spokeCount": 4}})
    snake = RequirementOrder.model_validate({"org_name": "X", "networking": {"spoke_count": 4}})
    assert camel == snake
    assert camel.networking.spoke_count == 4


def test_order_rejects_negative_spoke_count():
    with pytest.raises(ValidationError):
        RequirementOrder.model_validate({"networking": {"spokeCount": -1}})


def test_order_compliance_is_deduplicated():
    order = RequirementOrder(compliance=["GDPR", "SOC 2", "GDPR"])
    assert order.compliance == ["GDPR", "SOC 2"]


def test_order_monitoring_is_deduplicated():
    order = RequirementOrder.model_validate({"tooling": {"monitoring": ["Log Analytics", "App Insights", "Log Analytics"]}})
    assert order.tooling.monitoring == ["Log Analytics", "App Insights"]


@pytest.mark.parametrize("cloud", ["Azure", "OtherCloud"])
def test_design_reloads_from_archived_json(make_order, cloud):
    design = build_artifacts(make_order(cloud=cloud)).design
    archived = json.loads(json.dumps(design.model_dump(mode="json", by_alias=True)))
    assert Design.model_validate(archived) == design


def test_region_options():
    assert region_options("AWS")[1] == "eu-west-1 (Ireland)"
    assert len(region_options("Azure")) == 4
    assert region_options("OtherCloud") == []


def test_kickoff_reads_environment(tmp_path, monkeypatch):
    from landing_zone_designer.main import kickoff

    monkeypatch.setenv("INPUT_FILE", str(SAMPLE_ORDER))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    try:
        kickoff()
    finally:
        # drop the sink bound to the captured stderr of this test
        logger.remove()

    [artifacts_dir] = list(tmp_path.glob("artifacts_*"))
    assert (artifacts_dir / "main.tf").exists()
