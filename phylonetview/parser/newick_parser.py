import logging
from typing import List, Optional, Union

from phylonetview.exceptions import (
    DanglingLengthError,
    MalformedTreeError,
    UnbalancedParenthesesError,
)
from phylonetview.parser.lexer import tokenize
from phylonetview.parser.tokens import Token, TokenKind
from phylonetview.tree import Node, PhylogeneticNetwork

logger = logging.getLogger(__name__)


class _GroupMarker:
    """Stack sentinel pushed for every '('. Never a Node."""

    __slots__ = ("position",)

    def __init__(self, position: int):
        self.position = position

    def __repr__(self) -> str:
        return f"GROUP_MARKER@{self.position}"


Frame = Union[Node, _GroupMarker]

# Token kinds that can end a complete subtree
_SUBTREE_END = (TokenKind.NAME, TokenKind.LENGTH, TokenKind.CLOSE)


def _ends_subtree(previous: Optional[Token]) -> bool:
    return previous is not None and previous.kind in _SUBTREE_END


# ===================================================================
# 1. STACK OPERATIONS
# ===================================================================


def push_name(stack: List[Frame], token: Token, previous: Optional[Token]) -> None:
    """
    Push a new node for a NAME token, or name the internal node that a
    preceding ')' just closed.
    """
    if previous is not None and previous.kind is TokenKind.CLOSE:
        top = stack[-1]
        if not isinstance(top, Node):
            raise MalformedTreeError("')' did not produce a node to name", token.position)
        top.name = str(token.value)
        return

    if previous is not None and previous.kind in (TokenKind.NAME, TokenKind.LENGTH):
        raise MalformedTreeError(
            f"Unexpected name {token.value!r}, expected ',' or ')'", token.position
        )

    stack.append(Node(name=str(token.value)))


def apply_length(stack: List[Frame], token: Token, previous: Optional[Token]) -> None:
    """Set the branch length of the node on top of the stack."""
    top = stack[-1] if stack else None
    if not isinstance(top, Node):
        raise DanglingLengthError(
            f"Branch length {token.value} has no preceding node", token.position
        )
    if previous is None or previous.kind not in (TokenKind.NAME, TokenKind.CLOSE):
        raise DanglingLengthError(
            f"Branch length {token.value} must follow a name or ')'", token.position
        )
    top.distance_to_parent = float(token.value)  # type: ignore[arg-type]


def check_separator(
    token: Token, previous: Optional[Token], open_groups: int
) -> None:
    """A ',' only separates two subtrees inside a group."""
    if open_groups == 0:
        raise MalformedTreeError("',' outside of any group", token.position)
    if not _ends_subtree(previous):
        raise MalformedTreeError("Empty subtree before ','", token.position)


def close_group(stack: List[Frame], token: Token, previous: Optional[Token]) -> None:
    """
    Pop nodes down to the nearest group marker and gather them under a new
    internal node, which is pushed in their place.
    """
    children: List[Node] = []
    while stack:
        frame = stack.pop()
        if isinstance(frame, _GroupMarker):
            break
        children.append(frame)
    else:
        raise UnbalancedParenthesesError("')' without matching '('", token.position)

    if not children or not _ends_subtree(previous):
        raise MalformedTreeError("Empty subtree before ')'", token.position)

    children.reverse()
    stack.append(Node(children=children))


def finish(stack: List[Frame], position: int) -> Node:
    """Reduce the final stack to the root node."""
    for frame in stack:
        if isinstance(frame, _GroupMarker):
            raise UnbalancedParenthesesError("'(' is never closed", frame.position)
    if len(stack) != 1:
        raise MalformedTreeError(
            f"Expected a single root, found {len(stack)} top-level subtrees", position
        )
    root = stack.pop()
    if not isinstance(root, Node):
        raise MalformedTreeError("Input does not contain a tree", position)
    return root


# ===================================================================
# 2. CORE PARSING
# ===================================================================


def build_tree(tokens: List[Token]) -> Node:
    """
    Build a tree bottom-up from one tree's tokens.

    The token list may end with a TERMINATOR; end of input is treated the same
    way. Tokens after the terminator are rejected.

    Raises:
        DanglingLengthError, UnbalancedParenthesesError, MalformedTreeError
    """
    stack: List[Frame] = []
    open_groups = 0
    previous: Optional[Token] = None

    for index, token in enumerate(tokens):
        kind = token.kind

        if kind is TokenKind.NAME:
            push_name(stack, token, previous)

        elif kind is TokenKind.LENGTH:
            apply_length(stack, token, previous)

        elif kind is TokenKind.OPEN:
            if _ends_subtree(previous):
                raise MalformedTreeError("Unexpected '('", token.position)
            stack.append(_GroupMarker(token.position))
            open_groups += 1

        elif kind is TokenKind.COMMA:
            check_separator(token, previous, open_groups)

        elif kind is TokenKind.CLOSE:
            close_group(stack, token, previous)
            open_groups -= 1

        elif kind is TokenKind.TERMINATOR:
            if index != len(tokens) - 1:
                raise MalformedTreeError(
                    "Unexpected input after ';'", tokens[index + 1].position
                )
            return finish(stack, token.position)

        previous = token

    end_position = tokens[-1].position + 1 if tokens else 0
    return finish(stack, end_position)


def _split_trees(tokens: List[Token]) -> List[List[Token]]:
    trees: List[List[Token]] = []
    current: List[Token] = []
    for token in tokens:
        current.append(token)
        if token.kind is TokenKind.TERMINATOR:
            trees.append(current)
            current = []
    if current:
        trees.append(current)
    # Stray terminators (";;") carry no tree
    return [tree for tree in trees if tree[0].kind is not TokenKind.TERMINATOR]


# ===================================================================
# 3. PUBLIC API
# ===================================================================


def parse_newick(newick: str) -> PhylogeneticNetwork:
    """
    Parse a single extended Newick tree.

    Args:
        newick: e.g. ``"(A:1.5,B:2.0)C:0.5;"``. The terminator is optional.

    Returns:
        The parsed PhylogeneticNetwork.

    Raises:
        ParseError: Any of its subclasses; no partial tree is returned.
    """
    tokens = tokenize(newick)
    root = build_tree(tokens)
    network = PhylogeneticNetwork(root)
    logger.debug(
        "Parsed tree with %d nodes (%d named)", len(network), len(network.nodes)
    )
    return network


def parse_newick_trees(newick: str) -> List[PhylogeneticNetwork]:
    """
    Parse every ';'-terminated tree of a string, e.g. the content of a tree
    file. A malformed tree fails the whole call.
    """
    tokens = tokenize(newick)
    networks = [PhylogeneticNetwork(build_tree(chunk)) for chunk in _split_trees(tokens)]
    logger.debug("Parsed %d trees", len(networks))
    return networks
