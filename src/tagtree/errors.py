"""Exception classes for tagtree.

Provides standardized exceptions for error handling throughout tagtree.
Diagnostics produced by the detector are not exceptions; only structural
failures and misuse of the tree raise.
"""

from __future__ import annotations


class TagtreeError(Exception):
    """Base exception for all tagtree errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(TagtreeError):
    """Structural parse failure.

    Raised when a closing tag cannot be reconciled with the open-element
    stack, or when elements are still open at end of input. The parse call
    that raised it produces no tree.
    """

    def __init__(self, message: str, tags: tuple[str, ...] = ()) -> None:
        """Initialize parse error.

        Args:
            message: Error description
            tags: Tag names involved, in the order they are reported
        """
        self.message = message
        self.tags = tags
        super().__init__(message)


class TreeError(TagtreeError):
    """Tree invariant violation.

    Raised when a child is appended to a node that cannot own children
    (text, comment, doctype, void element) or to a second parent.
    """

    pass


class SerializationError(TagtreeError):
    """Malformed input to ``from_dict`` / ``from_json``."""

    pass
