from __future__ import annotations

import logging
import weakref
from typing import Any, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Node:
    """
    A node of a rooted, ordered phylogenetic tree.

    Children are owned by their parent and keep the left-to-right order of the
    Newick source. The parent link is a weak reference so the ownership graph
    stays a strict tree.
    """

    __slots__ = ("name", "_distance_to_parent", "children", "_parent_ref", "__weakref__")

    name: Optional[str]
    children: List[Node]

    def __init__(
        self,
        name: Optional[str] = None,
        distance_to_parent: float = 0.0,
        children: Optional[List[Node]] = None,
    ):
        self.name = name
        self.distance_to_parent = distance_to_parent
        self._parent_ref: Optional[weakref.ReferenceType[Node]] = None
        self.children = []
        for child in children or []:
            self.append_child(child)

    # ------------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------------

    @property
    def distance_to_parent(self) -> float:
        return self._distance_to_parent

    @distance_to_parent.setter
    def distance_to_parent(self, value: float) -> None:
        value = float(value)
        if value < 0:
            raise ValueError(f"Branch length must be non-negative, got {value}")
        self._distance_to_parent = value

    @property
    def parent(self) -> Optional[Node]:
        """The parent node, or None for the root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional[Node]) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    def append_child(self, node: Node) -> None:
        node.parent = self
        self.children.append(node)

    def is_leaf(self) -> bool:
        return not self.children

    def is_internal(self) -> bool:
        return bool(self.children)

    def __repr__(self) -> str:
        return f"Node({self.name!r})"

    # ------------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------------

    def traverse(self) -> List[Node]:
        """
        Return all nodes of the subtree rooted here in pre-order.
        Iterative, so deep trees do not hit the recursion limit.
        """
        nodes: List[Node] = []
        stack: List[Node] = [self]
        while stack:
            current = stack.pop()
            nodes.append(current)
            # Reverse to keep left-to-right visit order
            stack.extend(reversed(current.children))
        return nodes

    def postorder(self) -> List[Node]:
        """Return all nodes of the subtree, children before their parent."""
        nodes: List[Node] = []
        stack: List[Node] = [self]
        while stack:
            current = stack.pop()
            nodes.append(current)
            stack.extend(current.children)
        nodes.reverse()
        return nodes

    @property
    def leaves(self) -> List[Node]:
        return [node for node in self.traverse() if node.is_leaf()]

    # ------------------------------------------------------------------------
    # Subtree measures
    # ------------------------------------------------------------------------

    def subtree_size(self) -> int:
        """Number of nodes in the subtree rooted here, inclusive."""
        sizes, _ = subtree_metrics(self)
        return sizes[self]

    def subtree_depth(self) -> float:
        """
        Largest cumulative branch length from this node down to a leaf.

        A leaf has depth 0. This is a distance, not a node count; see
        ``subtree_size`` for the latter.
        """
        _, depths = subtree_metrics(self)
        return depths[self]

    # ------------------------------------------------------------------------
    # Serialization (iterative, children are finished before their parent)
    # ------------------------------------------------------------------------

    def to_newick(self) -> str:
        text: Dict[Node, str] = {}
        for node in self.postorder():
            label = node.name or ""
            if node.children:
                label = "(" + ",".join(text.pop(ch) for ch in node.children) + ")" + label
            if node.distance_to_parent:
                label += ":" + _format_length(node.distance_to_parent)
            text[node] = label
        return text[self] + ";"

    def to_hierarchy(self) -> Dict[str, Any]:
        built: Dict[Node, Dict[str, Any]] = {}
        for node in self.postorder():
            built[node] = {
                "name": node.name,
                "distance_to_parent": node.distance_to_parent,
                "children": [built.pop(ch) for ch in node.children],
            }
        return built[self]


def subtree_metrics(root: Node) -> Tuple[Dict[Node, int], Dict[Node, float]]:
    """Subtree size and depth of every node below ``root`` in one post-order pass."""
    sizes: Dict[Node, int] = {}
    depths: Dict[Node, float] = {}
    for node in root.postorder():
        sizes[node] = 1 + sum(sizes[child] for child in node.children)
        depths[node] = max(
            (child.distance_to_parent + depths[child] for child in node.children),
            default=0.0,
        )
    return sizes, depths


def _format_length(length: float) -> str:
    # The lexer only reads plain decimals, never exponents
    text = f"{length:.10f}".rstrip("0")
    return text.rstrip(".") if text.endswith(".") else text


def get_child(node: Node, *path: int) -> Node:
    """Follow a path of child indices starting at ``node``."""
    for index in path:
        node = node.children[index]
    return node


class PhylogeneticNetwork:
    """
    A parsed tree: the exclusively owned root plus a name lookup.

    Only named nodes are indexed. Names are not required to be unique; the
    index is filled in post-order (the order names appear in Newick text), so
    for a repeated name the node written last wins.
    """

    def __init__(self, root: Node):
        self.root = root
        self.nodes: Dict[str, Node] = {}
        for node in root.postorder():
            self.add_node(node)

    def add_node(self, node: Node) -> None:
        if node.name is None:
            return
        if node.name in self.nodes and self.nodes[node.name] is not node:
            logger.debug("Duplicate node name %r, keeping the later node", node.name)
        self.nodes[node.name] = node

    def find(self, name: str) -> Optional[Node]:
        return self.nodes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.root.traverse())

    def __len__(self) -> int:
        return len(self.root.traverse())

    def __repr__(self) -> str:
        return f"PhylogeneticNetwork({self.root.to_newick()!r})"

    def traverse(self) -> List[Node]:
        return self.root.traverse()

    @property
    def leaves(self) -> List[Node]:
        return self.root.leaves

    def subtree_size(self, node: Optional[Node] = None) -> int:
        return (node or self.root).subtree_size()

    def subtree_depth(self, node: Optional[Node] = None) -> float:
        return (node or self.root).subtree_depth()

    def node_ids(self) -> Dict[Node, str]:
        """
        Stable string identity for every node.

        Named nodes use their name; unnamed ones are ``internal-<i>`` where
        ``i`` is the pre-order index of the node. Ids are unique: when a name
        is already taken, the later node in pre-order gets ``<name>-<i>``.
        """
        ids: Dict[Node, str] = {}
        taken = set()
        for index, node in enumerate(self.root.traverse()):
            base = node.name if node.name is not None else "internal"
            candidate = node.name if node.name is not None else f"{base}-{index}"
            suffix = index
            while candidate in taken:
                candidate = f"{base}-{suffix}"
                suffix += 1
            taken.add(candidate)
            ids[node] = candidate
        return ids

    def node_id(self, node: Node) -> str:
        return self.node_ids()[node]

    def to_newick(self) -> str:
        return self.root.to_newick()
