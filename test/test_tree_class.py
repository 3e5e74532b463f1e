import gc

import pytest

from phylonetview.parser import parse_newick
from phylonetview.tree import Node, PhylogeneticNetwork, get_child, subtree_metrics


def create_star_tree(root_name, leaf_names):
    """
    Create a star-like tree:
        Root
       / | \\
      L1 L2 L3 ...
    """
    root = Node(name=root_name)
    for ln in leaf_names:
        root.append_child(Node(name=ln))
    return root


def create_balanced_tree():
    """
    Create a balanced binary tree with branch lengths:
         A
        / \\
       B   C
      / \\ / \\
     D  E F  G
    """
    D = Node(name="D", distance_to_parent=1.0)
    E = Node(name="E", distance_to_parent=2.0)
    F = Node(name="F", distance_to_parent=0.5)
    G = Node(name="G", distance_to_parent=0.5)
    B = Node(name="B", distance_to_parent=1.0, children=[D, E])
    C = Node(name="C", distance_to_parent=3.0, children=[F, G])
    return Node(name="A", children=[B, C])


def test_is_internal():
    leaf = Node(name="Leaf")
    assert leaf.is_leaf()
    assert not leaf.is_internal()
    root = create_star_tree("Root", ["L1", "L2"])
    assert root.is_internal()


def test_append_child_sets_parent():
    root = Node(name="Root")
    child = Node(name="Child")
    root.append_child(child)
    assert root.children == [child]
    assert child.parent is root
    assert root.parent is None


def test_parent_reference_does_not_own_parent():
    child = Node(name="Child")
    Node(name="Root", children=[child])
    gc.collect()
    assert child.parent is None


def test_negative_length_is_rejected():
    with pytest.raises(ValueError):
        Node(name="A", distance_to_parent=-1.0)


def test_traverse_preorder():
    tree = create_balanced_tree()
    assert [n.name for n in tree.traverse()] == ["A", "B", "D", "E", "C", "F", "G"]


def test_postorder():
    tree = create_balanced_tree()
    assert [n.name for n in tree.postorder()] == ["D", "E", "B", "F", "G", "C", "A"]


def test_leaves():
    tree = create_balanced_tree()
    assert [n.name for n in tree.leaves] == ["D", "E", "F", "G"]


def test_subtree_size():
    tree = create_balanced_tree()
    assert tree.subtree_size() == 7
    assert get_child(tree, 0).subtree_size() == 3
    assert get_child(tree, 0, 0).subtree_size() == 1


def test_subtree_depth_is_cumulative_distance():
    tree = create_balanced_tree()
    # A->C->F = 3.5 beats A->B->E = 3.0
    assert tree.subtree_depth() == 3.5
    assert get_child(tree, 0).subtree_depth() == 2.0
    assert get_child(tree, 0, 0).subtree_depth() == 0.0


def test_size_and_depth_are_distinct_measures():
    # Four nodes but only zero-length branches
    tree = parse_newick("((A,B),C);").root
    assert tree.subtree_size() == 5
    assert tree.subtree_depth() == 0.0


def test_size_invariant():
    network = parse_newick("((A:1,B:2)X:1,(C,(D,E)Y)Z:3,F);")
    non_root = sum(1 for node in network.traverse() if node is not network.root)
    assert network.subtree_size(network.root) == 1 + non_root
    assert len(network) == network.subtree_size()


def test_depth_monotonicity():
    network = parse_newick("((A:1,B:2)X:1,(C:0.5,(D:4,E)Y:0.1)Z:3,F:0.2);")
    for node in network.traverse():
        for child in node.children:
            assert node.subtree_depth() >= child.distance_to_parent
            assert node.subtree_depth() >= child.distance_to_parent + child.subtree_depth()


def test_deep_tree_traversal():
    newick = "(" * 3000 + "A" + ")" * 3000 + ";"
    network = parse_newick(newick)
    assert len(network.traverse()) == 3001
    assert len(network.root.postorder()) == 3001


def test_deep_tree_measures_and_serialization():
    newick = "(" * 3000 + "A:1" + ")" * 3000 + ";"
    network = parse_newick(newick)
    assert network.subtree_size() == 3001
    assert network.subtree_depth() == 1.0
    assert network.to_newick() == newick
    assert repr(network).startswith("PhylogeneticNetwork(")

    hierarchy = network.root.to_hierarchy()
    levels = 0
    while hierarchy["children"]:
        (hierarchy,) = hierarchy["children"]
        levels += 1
    assert levels == 3000
    assert hierarchy == {"name": "A", "distance_to_parent": 1.0, "children": []}


def test_subtree_metrics():
    network = parse_newick("((A:1,B:3)C:1,D:1);")
    sizes, depths = subtree_metrics(network.root)
    c = network.find("C")
    assert sizes[network.root] == 5
    assert sizes[c] == 3
    assert depths[c] == 3
    assert depths[network.root] == 4
    assert depths[network.find("D")] == 0


def test_to_newick_round_trip():
    newick = "((B:0.2,(C:0.3,D:0.4)E:0.5)F:0.1)A:0.9;"
    network = parse_newick(newick)
    assert network.to_newick() == newick
    assert parse_newick(network.to_newick()).to_newick() == newick


def test_to_newick_omits_zero_lengths():
    assert parse_newick("(A,B:0,C:2.0);").to_newick() == "(A,B,C:2);"


def test_to_hierarchy():
    hierarchy = parse_newick("(A:1,B)C;").root.to_hierarchy()
    assert hierarchy == {
        "name": "C",
        "distance_to_parent": 0.0,
        "children": [
            {"name": "A", "distance_to_parent": 1.0, "children": []},
            {"name": "B", "distance_to_parent": 0.0, "children": []},
        ],
    }


def test_network_index_and_ids():
    network = PhylogeneticNetwork(create_balanced_tree())
    assert network.find("E").distance_to_parent == 2.0
    assert len(network.nodes) == 7

    unnamed = parse_newick("((A,B),C);")
    ids = unnamed.node_ids()
    assert ids[unnamed.root] == "internal-0"
    assert ids[get_child(unnamed.root, 0)] == "internal-1"
    assert ids[get_child(unnamed.root, 0, 1)] == "B"
    assert unnamed.node_id(get_child(unnamed.root, 1)) == "C"


def test_node_ids_are_unique_for_repeated_names():
    network = parse_newick("((A:1,B)A:2,A);")
    ids = network.node_ids()
    assert len(set(ids.values())) == len(network) == 5
    assert ids[get_child(network.root, 0)] == "A"
    assert ids[get_child(network.root, 0, 0)] == "A-2"
    assert ids[get_child(network.root, 1)] == "A-4"

    clash = PhylogeneticNetwork(Node(children=[Node("A"), Node("A"), Node("A-2")]))
    assert sorted(clash.node_ids().values()) == ["A", "A-2", "A-2-3", "internal-0"]


def test_add_node():
    network = PhylogeneticNetwork(Node(name="A"))
    extra = Node(name="Z")
    network.add_node(extra)
    network.add_node(Node())
    assert network.find("Z") is extra
    assert len(network.nodes) == 2
