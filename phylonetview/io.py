import json
import logging
from typing import IO, Any, Dict, List, Optional

from matplotlib.figure import Figure

from phylonetview.layout import compute_layout
from phylonetview.mpl import MatplotlibSink
from phylonetview.parser.newick_parser import parse_newick, parse_newick_trees
from phylonetview.render import NetworkDiagram
from phylonetview.svg import SvgSink
from phylonetview.tree import PhylogeneticNetwork

logger = logging.getLogger(__name__)


def read_newick(path: str) -> PhylogeneticNetwork:
    with open(path) as f:
        newick_string: str = f.read()
    return parse_newick(newick_string)


def read_newick_trees(path: str) -> List[PhylogeneticNetwork]:
    with open(path) as f:
        newick_string: str = f.read()
    trees = parse_newick_trees(newick_string)
    logger.info("Read %d trees from %s", len(trees), path)
    return trees


def dump_json(network: PhylogeneticNetwork, f: IO[str]) -> None:
    json.dump(network.root.to_hierarchy(), f)


def write_json(network: PhylogeneticNetwork, path: str) -> None:
    with open(path, mode="w") as f:
        dump_json(network, f)


def layout_to_dict(
    network: PhylogeneticNetwork, width: float, height: float
) -> Dict[str, Dict[str, Any]]:
    """Coordinates keyed by node id, with the node's name and branch length."""
    layout = compute_layout(network, width, height)
    ids = network.node_ids()
    return {
        ids[node]: {
            "x": placement.x,
            "y": placement.y,
            "name": node.name,
            "distance_to_parent": node.distance_to_parent,
        }
        for node, placement in layout.placements.items()
    }


def write_layout_json(
    network: PhylogeneticNetwork, path: str, width: float, height: float
) -> None:
    with open(path, mode="w") as f:
        json.dump(layout_to_dict(network, width, height), f, indent=2)


def write_svg(
    network: PhylogeneticNetwork, path: str, diagram: Optional[NetworkDiagram] = None
) -> None:
    sink = SvgSink()
    (diagram or NetworkDiagram()).render(sink, network)
    with open(path, mode="w") as f:
        f.write(sink.to_string())


def write_png(
    network: PhylogeneticNetwork,
    path: str,
    diagram: Optional[NetworkDiagram] = None,
    dpi: int = 100,
) -> None:
    diagram = diagram or NetworkDiagram()
    fig = Figure(figsize=(diagram.width / dpi, diagram.height / dpi), dpi=dpi)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    diagram.render(MatplotlibSink(ax), network)
    fig.savefig(path, dpi=dpi)
