"""Hub/spoke topology diagram: deterministic layout plus an SVG rendering of it."""

from typing import Optional
from xml.etree.ElementTree import Element, SubElement, tostring

from landing_zone_designer.data_models import Box, Connector, DiagramLayout, LandingZone

CANVAS_WIDTH = 920
CANVAS_HEIGHT = 420

HUB_X, HUB_Y = 160, 80
HUB_WIDTH, HUB_HEIGHT = 220, 180
HUB_MAX_SERVICES = 4

SPOKE_X = 480
SPOKE_TOP = 40
SPOKE_PITCH = 120
SPOKE_WIDTH, SPOKE_HEIGHT = 360, 100
SPOKE_MAX_SUBNETS = 3

LEGEND_MARGIN = 80
LEGEND = (
    "Legend: Hub/VPC with spokes + peering/TGW • Private endpoints/access (optional) • DDoS/Shield • "
    "Front Door/ALB/Cloud LB"
)


def layout_diagram(landing_zone: Optional[LandingZone]) -> DiagramLayout:
    """Place the hub at a fixed anchor and stack one spoke box per spoke.

    The canvas grows past its default height when the spokes need more room.
    """
    if landing_zone is None:
        return DiagramLayout(width=CANVAS_WIDTH, height=CANVAS_HEIGHT, legend=LEGEND)

    hub = landing_zone.hub
    hub_box = Box(
        x=HUB_X,
        y=HUB_Y,
        width=HUB_WIDTH,
        height=HUB_HEIGHT,
        title=f"HUB: {hub.name}",
        subtitle=hub.address_space,
        labels=hub.services[:HUB_MAX_SERVICES],
    )

    spokes = []
    connectors = []
    for idx, spoke in enumerate(landing_zone.spokes):
        y = SPOKE_TOP + idx * SPOKE_PITCH
        spokes.append(
            Box(
                x=SPOKE_X,
                y=y,
                width=SPOKE_WIDTH,
                height=SPOKE_HEIGHT,
                title=f"SPOKE: {spoke.name}",
                subtitle=spoke.address_space,
                labels=[f"{subnet.name}: {subnet.cidr}" for subnet in spoke.subnets[:SPOKE_MAX_SUBNETS]],
            )
        )
        connectors.append(Connector(x1=HUB_X + HUB_WIDTH, y1=HUB_Y + HUB_HEIGHT // 2, x2=SPOKE_X, y2=y + 40))

    height = max(CANVAS_HEIGHT, SPOKE_TOP + len(spokes) * SPOKE_PITCH + LEGEND_MARGIN)
    return DiagramLayout(width=CANVAS_WIDTH, height=height, hub=hub_box, spokes=spokes, connectors=connectors, legend=LEGEND)


def _text(parent: Element, x: int, y: int, value: str, size: int = 12, **attrs: str) -> None:
    node = SubElement(parent, "text", x=str(x), y=str(y), attrib={"font-size": str(size), **attrs})
    node.text = value


def _rect(parent: Element, box: Box, radius: int) -> None:
    SubElement(
        parent,
        "rect",
        x=str(box.x),
        y=str(box.y),
        width=str(box.width),
        height=str(box.height),
        rx=str(radius),
        fill="#ffffff",
        stroke="#cbd5e1",
    )


def render_svg(layout: DiagramLayout) -> str:
    """Serialize a layout to a standalone SVG document."""
    svg = Element(
        "svg",
        xmlns="http://www.w3.org/2000/svg",
        viewBox=f"0 0 {layout.width} {layout.height}",
        width=str(layout.width),
        height=str(layout.height),
    )

    if layout.hub:
        hub = layout.hub
        _rect(svg, hub, 16)
        _text(svg, hub.x + 16, hub.y + 26, hub.title, size=14, **{"font-weight": "600"})
        _text(svg, hub.x + 16, hub.y + 46, hub.subtitle, fill="#475569")
        for i, service in enumerate(hub.labels):
            _text(svg, hub.x + 16, hub.y + 70 + i * 18, f"• {service}")

    for connector, spoke in zip(layout.connectors, layout.spokes):
        group = SubElement(svg, "g")
        SubElement(
            group,
            "line",
            x1=str(connector.x1),
            y1=str(connector.y1),
            x2=str(connector.x2),
            y2=str(connector.y2),
            stroke="#94a3b8",
            attrib={"stroke-dasharray": "4 4"},
        )
        _rect(group, spoke, 12)
        _text(group, spoke.x + 12, spoke.y + 22, spoke.title, size=13, **{"font-weight": "600"})
        _text(group, spoke.x + 12, spoke.y + 40, spoke.subtitle, fill="#475569")
        for j, label in enumerate(spoke.labels):
            _text(group, spoke.x + 12 + j * 110, spoke.y + 66, label)

    legend_y = layout.height - 70
    SubElement(svg, "rect", x="20", y=str(legend_y), width="880", height="50", rx="10", fill="#ffffff", stroke="#e2e8f0")
    _text(svg, 30, legend_y + 30, layout.legend, fill="#475569")

    return tostring(svg, encoding="unicode")
