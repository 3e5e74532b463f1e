"""
Lexer for extended Newick strings.

Names are runs of ``[A-Za-z0-9_]``; branch lengths are a ``:`` followed by a
decimal number with an optional fractional part. Whitespace between tokens is
skipped, everything else outside the alphabet is rejected.
"""

import logging
import re
from typing import List

from phylonetview.exceptions import EmptyInputError, LexError
from phylonetview.parser.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<name>[A-Za-z0-9_]+)
    |:(?P<length>\d+(?:\.\d+)?)
    |(?P<open>\()
    |(?P<close>\))
    |(?P<comma>,)
    |(?P<terminator>;)
    |(?P<space>\s+)
    """,
    re.VERBOSE | re.ASCII,
)

_PUNCTUATION = {
    "open": TokenKind.OPEN,
    "close": TokenKind.CLOSE,
    "comma": TokenKind.COMMA,
    "terminator": TokenKind.TERMINATOR,
}


def tokenize(newick: str) -> List[Token]:
    """
    Convert a Newick string into an ordered list of tokens.

    Args:
        newick: The raw Newick string, with or without a trailing ``;``.

    Returns:
        The tokens in source order.

    Raises:
        LexError: If a character outside the Newick alphabet is met.
        EmptyInputError: If nothing but terminators and whitespace is present.
    """
    tokens: List[Token] = []
    position = 0
    end = len(newick)

    while position < end:
        match = _TOKEN_PATTERN.match(newick, position)
        if match is None:
            raise LexError(position, newick[position])

        group = match.lastgroup
        if group == "name":
            tokens.append(Token(TokenKind.NAME, match.group("name"), position))
        elif group == "length":
            tokens.append(
                Token(TokenKind.LENGTH, float(match.group("length")), position)
            )
        elif group in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[group], None, position))
        # whitespace produces no token

        position = match.end()

    if all(token.kind is TokenKind.TERMINATOR for token in tokens):
        raise EmptyInputError()

    logger.debug("Tokenized %d characters into %d tokens", end, len(tokens))
    return tokens
