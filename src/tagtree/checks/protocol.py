"""Check protocol and shared types for the detector.

A check is a named callable taking a :class:`CheckContext` and yielding
:class:`Diagnostic` findings. Checks are independent: each one rescans the
markup or walks the shared recovered tree on its own.

Thread Safety:
Diagnostic is frozen. CheckContext is per-``run`` state and must not be
shared across threads.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tagtree.config import ReconcileMode
from tagtree.lexer import tokenize
from tagtree.parser import Parser
from tagtree.tags import VOID_ELEMENTS

if TYPE_CHECKING:
    from tagtree.checks.nesting import NestingRules
    from tagtree.nodes import Node


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A non-fatal finding.

    Attributes:
        check: Name of the check that produced it (e.g. "unclosed-tags")
        message: Human-readable description

    """

    check: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class CheckContext:
    """Input handed to every check during one detector run.

    Attributes:
        markup: The raw document text
        valid_tags: Lowercase element names accepted by the invalid-tag check
        nesting_rules: Parent/child rule table for the nesting check
        void_elements: Lowercase void-element names, never expected to close

    """

    markup: str
    valid_tags: frozenset[str]
    nesting_rules: NestingRules
    void_elements: frozenset[str] = VOID_ELEMENTS
    _tree: Node | None = field(default=None, repr=False)

    @property
    def tree(self) -> Node:
        """Recovered parse of the markup, built on first access and reused.

        Parsed in RECOVER mode so it exists for any input: unmatched closing
        tags are dropped and unclosed elements stay in place.
        """
        if self._tree is None:
            self._tree = Parser(
                tokenize(self.markup),
                mode=ReconcileMode.RECOVER,
                void_elements=self.void_elements,
            ).parse()
        return self._tree


@runtime_checkable
class Check(Protocol):
    """Callable detector pass."""

    check_name: str

    def __call__(self, ctx: CheckContext) -> Iterable[Diagnostic]: ...
