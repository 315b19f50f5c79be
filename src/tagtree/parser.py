"""Stack-based tree builder.

Consumes the token stream from the lexer and builds a :class:`Node` tree
under a synthetic ``root``, tracking currently-open elements on a stack.

Token classification (in order):
- blank tokens are skipped
- ``<!DOCTYPE ...>`` appends a ``!DOCTYPE`` node, no stack effect
- ``<!-- ... >`` appends a ``#comment`` node, no stack effect
- ``</name>`` closes, reconciled per :class:`ReconcileMode`
- ``<name ...>`` opens; void elements are appended but never entered.
  A tag with no name (``<>``, ``</>``) is still a tag: it opens or closes
  an element whose name is the empty string
- anything else becomes a ``#text`` node

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per
parse operation. Configuration is read from ContextVar (thread-local).

"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from tagtree.config import ReconcileMode, get_parse_config
from tagtree.errors import ParseError
from tagtree.lexer import tokenize
from tagtree.nodes import Node
from tagtree.tags import is_void
from tagtree.tokens import Token
from tagtree.utils.logger import get_logger

logger = get_logger(__name__)

# name [= "double" | 'single' | unquoted]; groups 2-4 are tried in that order,
# all None for a bare name
_ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s"'=<>/]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+)))?"""
)
_TAG_NAME_END = re.compile(r"[\s>/]")
_WHITESPACE = re.compile(r"\s")


def extract_tag_name(tag: str) -> str:
    """Extract the element name from a raw tag token.

    Strips the leading ``<``, ``<!``, ``</`` or ``/`` and stops at the first
    whitespace, ``>`` or ``/``. Case is preserved.

    Example:
        >>> extract_tag_name('<DIV class="a">')
        'DIV'
        >>> extract_tag_name("</p >")
        'p'
        >>> extract_tag_name("<br/>")
        'br'
    """
    name = tag.strip()
    if name.startswith(("</", "<!")):
        name = name[2:]
    elif name.startswith("<"):
        name = name[1:]
    name = name.lstrip("/")
    match = _TAG_NAME_END.search(name)
    if match is not None:
        name = name[: match.start()]
    return name


def _scan_attributes(tag: str) -> list[tuple[str, str | None]]:
    """``(name, value)`` for every attribute in a raw tag; value is None when bare."""
    space = _WHITESPACE.search(tag)
    if space is None:
        return []
    region = tag[space.start() :].rstrip()
    if region.endswith(">"):
        region = region[:-1].rstrip()
    if region.endswith("/"):
        region = region[:-1]

    found: list[tuple[str, str | None]] = []
    for match in _ATTRIBUTE_PATTERN.finditer(region):
        double, single, unquoted = match.group(2, 3, 4)
        if double is not None:
            value = double
        elif single is not None:
            value = single
        else:
            value = unquoted
        found.append((match.group(1), value))
    return found


def parse_attribute_pairs(tag: str) -> tuple[tuple[str, str], ...]:
    """Every attribute of a raw tag token, in source order.

    Repeated names are all returned. A bare attribute (``disabled``) is
    listed with an empty value.

    Example:
        >>> parse_attribute_pairs('<input class=big disabled title=\\'t\\'>')
        (('class', 'big'), ('disabled', ''), ('title', 't'))
    """
    return tuple((name, value or "") for name, value in _scan_attributes(tag))


def parse_attributes(tag: str) -> dict[str, str]:
    """``name=value`` mapping for a raw tag token.

    The last repeated name wins. Bare attributes are left out.
    """
    return {name: value for name, value in _scan_attributes(tag) if value is not None}


def _comment_body(tag: str) -> str:
    body = tag[4:]
    if body.endswith("-->"):
        body = body[:-3]
    elif body.endswith(">"):
        body = body[:-1]
    return body.strip()


class Parser:
    """Builds a tree from tokens with an open-element stack.

    Usage:
            >>> root = Parser(tokenize("<div>hi</div>")).parse()
            >>> root.children[0].children[0].content
            'hi'

    Args:
        tokens: Tokens from :func:`tagtree.lexer.tokenize`, or raw strings
        mode: Reconciliation mode; defaults to the active ParseConfig
        void_elements: Lowercase void-element names; defaults to the active
            ParseConfig

    """

    __slots__ = ("_tokens", "_mode", "_void_elements", "_root", "_current", "_open")

    def __init__(
        self,
        tokens: Iterable[Token | str],
        *,
        mode: ReconcileMode | None = None,
        void_elements: frozenset[str] | None = None,
    ) -> None:
        config = get_parse_config()
        self._tokens = tokens
        self._mode = mode if mode is not None else config.mode
        self._void_elements = (
            void_elements if void_elements is not None else config.void_elements
        )
        self._root = Node.root()
        self._current = self._root
        # Open elements, bottom to top; the root is never popped
        self._open: list[Node] = [self._root]

    @property
    def mode(self) -> ReconcileMode:
        return self._mode

    def parse(self) -> Node:
        """Consume all tokens and return the root node.

        Raises:
            ParseError: On an unreconcilable closing tag, or when elements are
                still open at end of input (never in RECOVER mode).
        """
        for token in self._tokens:
            value = token.value if isinstance(token, Token) else token
            if not value or value.isspace():
                continue
            self._consume(value)
        self._finish()
        return self._root

    # =========================================================================
    # Token handlers
    # =========================================================================

    def _consume(self, value: str) -> None:
        if value[:9].upper() == "<!DOCTYPE":
            self._current.append(Node.doctype_node())
        elif value.startswith("<!--"):
            self._current.append(Node.comment_node(_comment_body(value)))
        elif value.startswith("</"):
            self._close(extract_tag_name(value))
        elif value.startswith("<"):
            self._open_element(value)
        else:
            self._current.append(Node.text_node(value.strip()))

    def _open_element(self, tag: str) -> None:
        name = extract_tag_name(tag)
        scanned = _scan_attributes(tag)
        void = is_void(name, self._void_elements)
        node = self._current.append(
            Node(
                name,
                attributes={k: v for k, v in scanned if v is not None},
                attribute_pairs=tuple((k, v or "") for k, v in scanned),
                void=void,
            )
        )
        if not void:
            self._open.append(node)
            self._current = node

    def _close(self, name: str) -> None:
        if self._mode is ReconcileMode.STRICT:
            self._close_strict(name)
        else:
            index = self._find_open(name)
            if index is None:
                if self._mode is ReconcileMode.RECOVER:
                    logger.debug("Dropping unmatched closing tag </%s>", name)
                    return
                raise ParseError(f"Unmatched closing tag: </{name}>", (name,))
            if index < len(self._open) - 1:
                logger.debug(
                    "</%s> auto-closes %s",
                    name,
                    ", ".join(n.tag_name for n in reversed(self._open[index + 1 :])),
                )
            del self._open[index:]

        self._current = self._open[-1]

    def _close_strict(self, name: str) -> None:
        if len(self._open) == 1:
            raise ParseError(f"Unmatched closing tag: </{name}>", (name,))
        top = self._open[-1]
        if top.tag_name.lower() != name.lower():
            raise ParseError(
                f"Mismatched closing tag: </{name}> (expected </{top.tag_name}>)",
                (name, top.tag_name),
            )
        self._open.pop()

    def _find_open(self, name: str) -> int | None:
        """Stack index of the topmost open element named ``name``."""
        wanted = name.lower()
        for index in range(len(self._open) - 1, 0, -1):
            if self._open[index].tag_name.lower() == wanted:
                return index
        return None

    def _finish(self) -> None:
        if len(self._open) == 1:
            return
        still_open = tuple(n.tag_name for n in reversed(self._open[1:]))
        if self._mode is ReconcileMode.RECOVER:
            logger.debug("Leaving unclosed elements open: %s", ", ".join(still_open))
            return
        raise ParseError(
            "Unclosed tags at end of input: " + ", ".join(still_open),
            still_open,
        )


# =============================================================================
# Result type
# =============================================================================


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of :func:`try_parse`: a tree or the structural error, never both."""

    root: Node | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Node:
        """Return the tree, or raise the stored ParseError."""
        if self.error is not None:
            raise self.error
        assert self.root is not None
        return self.root


# =============================================================================
# Module API
# =============================================================================


def parse(tokens: Iterable[Token | str], *, mode: ReconcileMode | None = None) -> Node:
    """Parse a token sequence into a tree.

    Example:
        >>> root = parse(tokenize("<ul><li>a</li></ul>"))
        >>> [n.tag_name for n in root.iter_elements()]
        ['ul', 'li']
    """
    return Parser(tokens, mode=mode).parse()


def parse_markup(markup: str, *, mode: ReconcileMode | None = None) -> Node:
    """Tokenize and parse markup in one call."""
    return Parser(tokenize(markup), mode=mode).parse()


def try_parse(tokens: Iterable[Token | str], *, mode: ReconcileMode | None = None) -> ParseResult:
    """Parse without raising; structural failures come back in the result."""
    try:
        return ParseResult(root=Parser(tokens, mode=mode).parse())
    except ParseError as e:
        return ParseResult(error=e)


__all__ = [
    "ParseResult",
    "Parser",
    "extract_tag_name",
    "parse",
    "parse_attribute_pairs",
    "parse_attributes",
    "parse_markup",
    "try_parse",
]
