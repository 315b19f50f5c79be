"""Parent/child nesting rule table.

The incorrect-nesting check asks a NestingRules table whether each
element may appear directly inside its parent element. The default table
is empty and accepts every pair; rules are added per parent tag without
touching the walk itself.

Example:
    >>> rules = NestingRules().forbid("p", "div", "table")
    >>> rules.allows("p", "DIV")
    False
    >>> rules.allows("div", "p")
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from tagtree.tags import BLOCK_ELEMENTS

_HEADINGS = ("h1", "h2", "h3", "h4", "h5", "h6")


class NestingRules:
    """Immutable table of forbidden (parent, child) tag pairs.

    Thread Safety:
        Immutable after creation. ``forbid`` returns a new table.
    """

    __slots__ = ("_forbidden",)

    def __init__(self, forbidden: Mapping[str, Iterable[str]] | None = None) -> None:
        table: dict[str, frozenset[str]] = {}
        for parent, children in (forbidden or {}).items():
            table[parent.lower()] = frozenset(c.lower() for c in children)
        self._forbidden = MappingProxyType(table)

    @classmethod
    def html(cls) -> NestingRules:
        """Common HTML content-model violations.

        Block content inside ``<p>``, interactive content inside ``<a>`` and
        ``<button>``, nested forms, labels and headings.
        """
        return (
            cls()
            .forbid("p", *BLOCK_ELEMENTS)
            .forbid("a", "a", "button")
            .forbid("button", "a", "button")
            .forbid("form", "form")
            .forbid("label", "label")
            .forbid("h1", *_HEADINGS)
            .forbid("h2", *_HEADINGS)
            .forbid("h3", *_HEADINGS)
            .forbid("h4", *_HEADINGS)
            .forbid("h5", *_HEADINGS)
            .forbid("h6", *_HEADINGS)
        )

    def forbid(self, parent: str, *children: str) -> NestingRules:
        """New table that also rejects ``children`` directly inside ``parent``."""
        table = {p: set(c) for p, c in self._forbidden.items()}
        table.setdefault(parent.lower(), set()).update(c.lower() for c in children)
        return NestingRules(table)

    def allows(self, parent: str, child: str) -> bool:
        """True unless ``child`` is forbidden directly inside ``parent``."""
        forbidden = self._forbidden.get(parent.lower())
        return forbidden is None or child.lower() not in forbidden

    @property
    def parents(self) -> frozenset[str]:
        """Parent tags that carry at least one rule."""
        return frozenset(self._forbidden)

    def __bool__(self) -> bool:
        return bool(self._forbidden)

    def __repr__(self) -> str:
        return f"NestingRules(parents={sorted(self._forbidden)})"
