"""
Drive a drawing surface from a computed tree layout.

The core owns no drawing state: NetworkDiagram computes positions and issues
one call per edge and per node to any object implementing DrawingSink.
"""

import logging
from typing import Dict, Optional, Protocol

from phylonetview.config import (
    DEFAULT_COLOR,
    DEFAULT_HEIGHT,
    DEFAULT_LABEL_COLOR,
    DEFAULT_LABEL_OFFSET,
    DEFAULT_MARGIN,
    DEFAULT_NODE_RADIUS,
    DEFAULT_WIDTH,
)
from phylonetview.layout import Point, TreeLayout, compute_layout
from phylonetview.tree import Node, PhylogeneticNetwork

logger = logging.getLogger(__name__)


class DrawingSink(Protocol):
    """The 2D surface a diagram is drawn on."""

    def clear(self, width: float, height: float) -> None: ...

    def draw_line(self, start: Point, end: Point, color: str) -> None: ...

    def draw_circle(self, center: Point, radius: float, fill_color: str) -> None: ...

    def draw_text(self, text: str, position: Point, color: str) -> None: ...


class NetworkDiagram:
    """
    Canvas settings plus per-node color and label overrides.

    Overrides are keyed by node name, so unnamed internal nodes always use the
    defaults.
    """

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        margin: float = DEFAULT_MARGIN,
        node_radius: float = DEFAULT_NODE_RADIUS,
        label_offset: float = DEFAULT_LABEL_OFFSET,
    ):
        self.width = width
        self.height = height
        self.margin = margin
        self.node_radius = node_radius
        self.label_offset = label_offset
        self.node_colors: Dict[str, str] = {}
        self.node_labels: Dict[str, str] = {}

    def set_node_color(self, name: str, color: str) -> None:
        self.node_colors[name] = color

    def set_node_label(self, name: str, label: str) -> None:
        self.node_labels[name] = label

    def color_of(self, node: Node) -> str:
        if node.name is None:
            return DEFAULT_COLOR
        return self.node_colors.get(node.name, DEFAULT_COLOR)

    def label_of(self, node: Node) -> str:
        if node.name is None:
            return ""
        return self.node_labels.get(node.name, node.name)

    def compute_positions(self, network: PhylogeneticNetwork) -> TreeLayout:
        """Lay the tree out inside the canvas, inset by the margin."""
        layout = compute_layout(
            network,
            self.width - 2 * self.margin,
            self.height - 2 * self.margin,
        )
        if self.margin:
            layout = layout.translate(self.margin, self.margin)
        return layout

    def render(
        self, sink: DrawingSink, network: PhylogeneticNetwork
    ) -> TreeLayout:
        """
        Draw the tree: every edge as a line in its parent's color, every node
        as a filled circle, and each non-empty label above its node.

        Returns:
            The layout that was drawn.
        """
        layout = self.compute_positions(network)
        sink.clear(self.width, self.height)

        for node in network.traverse():
            x, y = layout.point(node)
            color = self.color_of(node)

            for child in node.children:
                sink.draw_line((x, y), layout.point(child), color)

            sink.draw_circle((x, y), self.node_radius, color)

            label = self.label_of(node)
            if label:
                sink.draw_text(label, (x, y - self.label_offset), DEFAULT_LABEL_COLOR)

        logger.debug("Rendered %d nodes", len(layout))
        return layout


def render_network(
    network: PhylogeneticNetwork,
    sink: DrawingSink,
    diagram: Optional[NetworkDiagram] = None,
) -> TreeLayout:
    """Render with a default diagram unless one is given."""
    return (diagram or NetworkDiagram()).render(sink, network)
