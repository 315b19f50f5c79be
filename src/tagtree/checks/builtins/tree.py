"""Checks that walk the recovered parse tree.

The tree comes from :attr:`CheckContext.tree`, built once per run in
RECOVER mode. Tag names are compared and reported in lowercase.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator

from tagtree.checks.protocol import CheckContext, Diagnostic
from tagtree.checks.registry import check
from tagtree.nodes import Node


def _with_next_sibling(root: Node) -> Iterator[tuple[Node, Node | None]]:
    """Pre-order walk yielding each node with its following sibling."""
    stack: list[tuple[Node, Node | None]] = [(root, None)]
    while stack:
        node, following = stack.pop()
        yield node, following
        children = node.children
        pairs = zip(children, [*children[1:], None])
        stack.extend(reversed(list(pairs)))


@check("mismatched-siblings")
def find_mismatched_siblings(ctx: CheckContext) -> Iterator[Diagnostic]:
    """Adjacent sibling elements with different names.

    Flags an element followed directly by an element of another name,
    unless the first one shares its parent's name. A loose heuristic for
    a closing tag that went missing between the two.
    """
    for node, following in _with_next_sibling(ctx.tree):
        if not node.is_element or following is None or not following.is_element:
            continue
        parent = node.parent
        current = node.tag_name.lower()
        nxt = following.tag_name.lower()
        if current != nxt and (parent is None or current != parent.tag_name.lower()):
            yield Diagnostic(
                "mismatched-siblings", f"Potential mismatched tags: <{current}> and <{nxt}>"
            )


@check("incorrect-nesting")
def find_incorrect_nesting(ctx: CheckContext) -> Iterator[Diagnostic]:
    rules = ctx.nesting_rules
    if not rules:
        return
    for node in ctx.tree.iter_elements():
        parent = node.parent
        if parent is None or not parent.is_element:
            continue
        if not rules.allows(parent.tag_name, node.tag_name):
            outer, inner = parent.tag_name.lower(), node.tag_name.lower()
            yield Diagnostic(
                "incorrect-nesting", f"Incorrect nesting: <{outer}> contains <{inner}>"
            )


@check("duplicate-attributes")
def find_duplicate_attributes(ctx: CheckContext) -> Iterator[Diagnostic]:
    """Attribute names repeated on one element, once per name."""
    for node in ctx.tree.iter_elements():
        if len(node.attribute_pairs) < 2:
            continue
        counts = Counter(name.lower() for name, _ in node.attribute_pairs)
        for name, count in counts.items():
            if count > 1:
                yield Diagnostic(
                    "duplicate-attributes",
                    f"Duplicate attribute in <{node.tag_name.lower()}>: {name}",
                )
