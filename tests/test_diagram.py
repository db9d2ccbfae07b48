import pytest

from landing_zone_designer.data_models import Hub, LandingZone, Spoke, Subnet
from landing_zone_designer.exporters.diagram import layout_diagram, render_svg
from landing_zone_designer.synthesizer import synthesize_design


def _landing_zone(services, subnet_count, spoke_count=1):
    subnets = [Subnet(name=f"s{i}", cidr=f"10.0.{i}.0/24") for i in range(subnet_count)]
    return LandingZone(
        model="hub-spoke",
        hub=Hub(name="hub", address_space="10.0.0.0/16", services=services),
        spokes=[Spoke(name=f"spoke-{i}", address_space=f"10.{i}.0.0/20", subnets=subnets) for i in range(spoke_count)],
    )


def test_layout_positions(make_order):
    layout = layout_diagram(synthesize_design(make_order(spoke_count=3)).landing_zone)
    assert (layout.hub.x, layout.hub.y) == (160, 80)
    assert [box.y for box in layout.spokes] == [40, 160, 280]
    assert all(box.x == 480 for box in layout.spokes)
    assert len(layout.connectors) == 3
    assert [(c.x1, c.y1) for c in layout.connectors] == [(380, 170)] * 3
    assert [c.y2 for c in layout.connectors] == [80, 200, 320]


def test_layout_labels(make_order):
    layout = layout_diagram(synthesize_design(make_order(spoke_count=1)).landing_zone)
    assert layout.hub.title == "HUB: contoso-retail-hub-sweden-central"
    assert layout.hub.subtitle == "10.10.0.0/20"
    assert layout.spokes[0].title == "SPOKE: app-sweden-central"
    assert layout.spokes[0].labels == ["app: 10.10.16.0/24", "data: 10.10.17.0/24", "admin: 10.10.18.0/24"]


@pytest.mark.parametrize("count, shown", [(0, 0), (2, 2), (4, 4), (6, 4)])
def test_hub_services_truncate_to_four(count, shown):
    layout = layout_diagram(_landing_zone([f"svc-{i}" for i in range(count)], 1))
    assert len(layout.hub.labels) == shown


@pytest.mark.parametrize("count, shown", [(0, 0), (1, 1), (3, 3), (5, 3)])
def test_spoke_subnets_truncate_to_three(count, shown):
    layout = layout_diagram(_landing_zone([], count))
    assert len(layout.spokes[0].labels) == shown


def test_no_landing_zone_gives_empty_layout():
    layout = layout_diagram(None)
    assert layout.hub is None
    assert layout.spokes == []
    assert layout.connectors == []
    assert layout.height == 420


def test_canvas_grows_for_many_spokes():
    assert layout_diagram(_landing_zone([], 3, spoke_count=2)).height == 420
    assert layout_diagram(_landing_zone([], 3, spoke_count=5)).height == 720


def test_layout_is_deterministic(make_order):
    lz = synthesize_design(make_order(spoke_count=4)).landing_zone
    assert layout_diagram(lz) == layout_diagram(lz)


def test_render_svg(make_order):
    layout = layout_diagram(synthesize_design(make_order(spoke_count=2)).landing_zone)
    svg = render_svg(layout)
    assert svg.startswith("<svg")
    assert 'viewBox="0 0 920 420"' in svg
    assert "HUB: contoso-retail-hub-sweden-central" in svg
    assert "SPOKE: data-sweden-central" in svg
    assert svg.count("<line ") == 2
    assert "Legend:" in svg


def test_render_svg_without_landing_zone():
    svg = render_svg(layout_diagram(None))
    assert "HUB:" not in svg
    assert "<line " not in svg
