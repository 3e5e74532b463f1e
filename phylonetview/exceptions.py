"""
Custom exceptions for Newick parsing and tree layout.
"""

from typing import Optional


class PhyloNetViewError(Exception):
    """Base exception for all phylonetview errors."""

    pass


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class ParseError(PhyloNetViewError):
    """Raised when a Newick string cannot be turned into a tree."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class LexError(ParseError):
    """Raised when the lexer meets a character outside the Newick alphabet."""

    def __init__(self, position: int, character: str):
        super().__init__(f"Unexpected character {character!r}", position)
        self.character = character


class EmptyInputError(ParseError):
    """Raised when the input holds no tokens besides terminators."""

    def __init__(self) -> None:
        super().__init__("Newick string is empty")


class DanglingLengthError(ParseError):
    """Raised when a branch length does not follow a node."""

    pass


class UnbalancedParenthesesError(ParseError):
    """Raised for a ')' without matching '(' or a '(' that is never closed."""

    pass


class MalformedTreeError(ParseError):
    """Raised when the token stream does not reduce to a single root."""

    pass


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class LayoutError(PhyloNetViewError):
    """Base exception for layout failures. The tree stays valid."""

    pass


class DegenerateLayoutError(LayoutError):
    """Raised in strict mode when the tree has zero total depth."""

    pass


class InvalidCanvasError(LayoutError):
    """Raised when the target width or height cannot be scaled into."""

    pass
