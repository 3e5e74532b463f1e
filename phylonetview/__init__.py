"""Parse extended Newick trees and lay them out for line-and-point drawing."""

from .exceptions import (
    PhyloNetViewError,
    ParseError,
    LexError,
    EmptyInputError,
    DanglingLengthError,
    UnbalancedParenthesesError,
    MalformedTreeError,
    LayoutError,
    DegenerateLayoutError,
    InvalidCanvasError,
)
from .tree import Node, PhylogeneticNetwork
from .parser import parse_newick, parse_newick_trees, tokenize
from .layout import NodePlacement, TreeLayout, compute_layout
from .render import DrawingSink, NetworkDiagram, render_network

__all__ = [
    "PhyloNetViewError",
    "ParseError",
    "LexError",
    "EmptyInputError",
    "DanglingLengthError",
    "UnbalancedParenthesesError",
    "MalformedTreeError",
    "LayoutError",
    "DegenerateLayoutError",
    "InvalidCanvasError",
    "Node",
    "PhylogeneticNetwork",
    "parse_newick",
    "parse_newick_trees",
    "tokenize",
    "NodePlacement",
    "TreeLayout",
    "compute_layout",
    "DrawingSink",
    "NetworkDiagram",
    "render_network",
]
