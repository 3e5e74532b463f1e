"""
Layout calculation for phylogenetic trees.

Horizontal position follows a size cladogram: every node owns a horizontal
band whose width is proportional to the number of nodes in its subtree, and
sits at the midpoint of that band. Vertical position is the cumulative branch
length from the root, scaled so the deepest leaf lands on the bottom edge.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

import numpy as np

from phylonetview.config import DEFAULT_DEPTH_FLOOR
from phylonetview.exceptions import DegenerateLayoutError, InvalidCanvasError
from phylonetview.tree import Node, PhylogeneticNetwork, subtree_metrics

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class NodePlacement:
    x: float
    y: float
    band_low: float
    band_high: float

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass
class TreeLayout(Mapping):
    """
    Coordinates computed for one tree and canvas size.

    Behaves as a read-only mapping from Node to its ``(x, y)`` point. The
    layout belongs to the caller; the tree is never modified.
    """

    width: float
    height: float
    x_scale: float
    y_scale: float
    placements: Dict[Node, NodePlacement] = field(default_factory=dict)

    def __getitem__(self, node: Node) -> Point:
        return self.placements[node].point

    def __iter__(self) -> Iterator[Node]:
        return iter(self.placements)

    def __len__(self) -> int:
        return len(self.placements)

    def point(self, node: Node) -> Point:
        return self.placements[node].point

    def band(self, node: Node) -> Tuple[float, float]:
        placement = self.placements[node]
        return (placement.band_low, placement.band_high)

    def by_id(self, network: PhylogeneticNetwork) -> Dict[str, Point]:
        """Points keyed by ``network.node_ids()``, one entry per node."""
        ids = network.node_ids()
        return {ids[node]: placement.point for node, placement in self.placements.items()}

    def translate(self, dx: float, dy: float) -> "TreeLayout":
        """Return a copy with every coordinate shifted by ``(dx, dy)``."""
        moved = {
            node: NodePlacement(p.x + dx, p.y + dy, p.band_low + dx, p.band_high + dx)
            for node, p in self.placements.items()
        }
        return TreeLayout(self.width, self.height, self.x_scale, self.y_scale, moved)


def _check_canvas(width: float, height: float) -> None:
    for label, value in (("width", width), ("height", height)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidCanvasError(f"Canvas {label} must be a positive number, got {value}")


def compute_layout(
    network: PhylogeneticNetwork,
    width: float,
    height: float,
    *,
    depth_floor: float = DEFAULT_DEPTH_FLOOR,
    strict: bool = False,
) -> TreeLayout:
    """
    Assign every node of the tree a 2D coordinate.

    Args:
        network: The tree to lay out.
        width: Target canvas width; the root band is ``[0, width)``.
        height: Target canvas height; the root sits at ``y = 0``.
        depth_floor: Depth used for scaling when the tree has no branch length.
        strict: Raise DegenerateLayoutError instead of applying the depth floor.

    Returns:
        A TreeLayout mapping each node to ``(x, y)``.

    Raises:
        InvalidCanvasError: If width or height is not a positive finite number.
        DegenerateLayoutError: If ``strict`` and the total depth is zero.
    """
    _check_canvas(width, height)

    root = network.root
    sizes, depths = subtree_metrics(root)

    total_depth = depths[root]
    if total_depth == 0:
        if strict:
            raise DegenerateLayoutError("Tree has zero total depth, cannot scale height")
        if depth_floor <= 0:
            raise DegenerateLayoutError(f"Depth floor must be positive, got {depth_floor}")
        logger.warning(
            "Tree has zero total depth, scaling height with depth %s", depth_floor
        )
        total_depth = depth_floor

    x_scale = width / sizes[root]
    y_scale = height / total_depth
    layout = TreeLayout(width, height, x_scale, y_scale)

    # (node, band_low, band_high, y)
    stack: List[Tuple[Node, float, float, float]] = [(root, 0.0, float(width), 0.0)]
    while stack:
        node, low, high, y = stack.pop()
        layout.placements[node] = NodePlacement((low + high) / 2, y, low, high)
        if not node.children:
            continue

        unit = (high - low) / sizes[node]
        child_sizes = np.array([sizes[child] for child in node.children], dtype=float)
        # Half a unit of slack on each side centres the children under the node
        edges = low + unit / 2 + unit * np.concatenate(([0.0], np.cumsum(child_sizes)))

        for index in reversed(range(len(node.children))):
            child = node.children[index]
            child_y = y + child.distance_to_parent * y_scale
            stack.append((child, float(edges[index]), float(edges[index + 1]), child_y))

    logger.debug(
        "Laid out %d nodes into %sx%s (x_scale=%.4g, y_scale=%.4g)",
        len(layout), width, height, x_scale, y_scale,
    )
    return layout
