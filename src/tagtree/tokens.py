"""Token and TokenType definitions for the tagtree lexer.

The lexer produces a flat stream of Token objects that the parser consumes.
A token is either a raw tag (``<div class="a">``) or a run of trimmed text.
Tokens carry no source position.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by the lexer."""

    TAG = auto()  # <...> inclusive
    TEXT = auto()  # trimmed text between tags


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw string value from source (trimmed for TEXT)

    """

    type: TokenType
    value: str

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r})"

    def __str__(self) -> str:
        return self.value

    @property
    def is_tag(self) -> bool:
        return self.type is TokenType.TAG

    @property
    def is_text(self) -> bool:
        return self.type is TokenType.TEXT
