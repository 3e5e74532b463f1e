import json
import tempfile
import xml.etree.ElementTree as ET
from pathlib import Path

from phylonetview.io import (
    layout_to_dict,
    read_newick,
    read_newick_trees,
    write_json,
    write_layout_json,
    write_png,
    write_svg,
)
from phylonetview.parser import parse_newick
from phylonetview.render import NetworkDiagram
from phylonetview.tree import get_child


def test_read_newick_write_json():
    newick = "((A,(B,C)),I:2);"

    with tempfile.NamedTemporaryFile(mode="w", suffix=".nwk") as f_in:
        f_in.write(newick)
        f_in.flush()
        network = read_newick(f_in.name)

    assert get_child(network.root, 0, 1, 0).name == "B"
    assert get_child(network.root, 1).distance_to_parent == 2.0

    with tempfile.TemporaryDirectory() as tmp:
        out = Path(tmp) / "tree.json"
        write_json(network, str(out))
        data = json.loads(out.read_text())

    assert data["children"][0]["children"][1]["children"][0]["name"] == "B"
    assert data["children"][1]["name"] == "I"
    assert data["children"][1]["distance_to_parent"] == 2.0


def test_read_newick_trees(tmp_path):
    path = tmp_path / "trees.nwk"
    path.write_text("(A,B);\n((C,D),E);\n")
    trees = read_newick_trees(str(path))
    assert [t.subtree_size() for t in trees] == [3, 5]


def test_layout_to_dict():
    network = parse_newick("(A:1,B:1);")
    data = layout_to_dict(network, 100, 50)
    assert data["internal-0"] == {"x": 50, "y": 0, "name": None, "distance_to_parent": 0.0}
    assert data["A"]["y"] == 50
    assert data["B"]["x"] > data["A"]["x"]


def test_layout_to_dict_repeated_names():
    data = layout_to_dict(parse_newick("(A:1,A:2);"), 100, 50)
    assert set(data) == {"internal-0", "A", "A-2"}
    assert data["A"]["distance_to_parent"] == 1.0
    assert data["A-2"]["distance_to_parent"] == 2.0
    assert data["A-2"]["name"] == "A"


def test_write_layout_json(tmp_path):
    path = tmp_path / "layout.json"
    write_layout_json(parse_newick("(A:1,B:1)R;"), str(path), 100, 50)
    data = json.loads(path.read_text())
    assert set(data) == {"R", "A", "B"}
    assert data["R"]["x"] == 50


def test_write_svg(tmp_path):
    path = tmp_path / "tree.svg"
    write_svg(parse_newick("(A:1,B:1)R;"), str(path), NetworkDiagram(width=100, height=60))
    svg = ET.parse(path).getroot()
    assert svg.get("width") == "100"
    assert svg.get("height") == "60"


def test_write_png(tmp_path):
    path = tmp_path / "tree.png"
    write_png(parse_newick("(A:1,B:1)R;"), str(path), NetworkDiagram(width=200, height=100))
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
