"""Single-cursor markup lexer.

Splits markup into TAG and TEXT tokens in one left-to-right pass.

Known limitations, kept on purpose so trees stay comparable across versions:
- A ``>`` inside a quoted attribute value ends the tag early.
- An unterminated ``<`` discards the rest of the input.
- Whitespace-only text between tags produces no token.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from tagtree.tokens import Token, TokenType


class Lexer:
    """Left-to-right lexer producing TAG and TEXT tokens.

    Usage:
            >>> list(Lexer("<p>Hi</p>").tokenize())
        [Token(TAG, '<p>'), Token(TEXT, 'Hi'), Token(TAG, '</p>')]

    Complexity: O(n) where n = len(source); each character is visited once
    by ``str.find``.

    """

    __slots__ = ("_source", "_source_len", "_pos")

    def __init__(self, source: str) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time
        """
        source = self._source
        source_len = self._source_len
        while self._pos < source_len:
            if source[self._pos] == "<":
                tag_end = source.find(">", self._pos)
                if tag_end == -1:
                    # Unterminated tag: drop the remainder
                    self._pos = source_len
                    return
                tag = source[self._pos : tag_end + 1]
                self._pos = tag_end + 1
                if tag.strip():
                    yield Token(TokenType.TAG, tag)
            else:
                next_tag = source.find("<", self._pos)
                if next_tag == -1:
                    next_tag = source_len
                text = source[self._pos : next_tag].strip()
                self._pos = next_tag
                if text:
                    yield Token(TokenType.TEXT, text)


def tokenize(markup: str) -> Iterator[Token]:
    """Lazily tokenize markup. Each call starts a fresh scan.

    Example:
        >>> [t.value for t in tokenize("<b> bold </b>")]
        ['<b>', 'bold', '</b>']
    """
    return Lexer(markup).tokenize()


__all__ = ["Lexer", "tokenize"]
