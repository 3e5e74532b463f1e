from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(Enum):
    NAME = "name"
    LENGTH = "length"
    OPEN = "open"
    CLOSE = "close"
    COMMA = "comma"
    TERMINATOR = "terminator"


@dataclass(frozen=True)
class Token:
    """A lexical unit of a Newick string.

    ``value`` holds the matched text for NAME, the parsed float for LENGTH and
    ``None`` for punctuation. ``position`` is the 0-based offset in the source.
    """

    kind: TokenKind
    value: Optional[Union[str, float]] = None
    position: int = 0

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.name}@{self.position})"
        return f"Token({self.kind.name}={self.value!r}@{self.position})"
