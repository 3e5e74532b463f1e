"""
Newick parser module for phylogenetic trees.

Turns extended Newick strings into PhylogeneticNetwork objects via a lexer and
a stack-based bottom-up tree builder.
"""

from .tokens import Token, TokenKind
from .lexer import tokenize
from .newick_parser import (
    parse_newick,
    parse_newick_trees,
    build_tree,
)

__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
    "parse_newick",
    "parse_newick_trees",
    "build_tree",
]
