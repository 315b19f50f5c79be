"""Indented text outlines of a tree.

``render_tree`` is a depth-first outline, one node per line, the way a tree
view shows it. ``render_levels`` lists nodes breadth-first, level by level,
as ``Element:`` / ``Text:`` lines.

Example:
    >>> root = parse_markup('<ul id="x"><li>a</li></ul>')
    >>> print(render_tree(root))
    root
      ul [id="x"]
        li
          a
"""

from __future__ import annotations

from collections import deque

from tagtree.nodes import Node
from tagtree.visitor import BaseVisitor


def _label(node: Node) -> str:
    if node.is_text:
        return node.content or ""
    if node.is_comment:
        return f"<!-- {node.content} -->"
    if not node.attributes:
        return node.tag_name
    attrs = ", ".join(f'{k}="{v}"' for k, v in node.attributes.items())
    return f"{node.tag_name} [{attrs}]"


class _OutlineBuilder(BaseVisitor[None]):
    def __init__(self, indent: str, base_depth: int) -> None:
        self.indent = indent
        self.base_depth = base_depth
        self.lines: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.lines.append(self.indent * (node.depth - self.base_depth) + _label(node))


def render_tree(node: Node, *, indent: str = "  ") -> str:
    """Depth-first outline of ``node`` and its descendants."""
    builder = _OutlineBuilder(indent, node.depth)
    builder.visit(node)
    return "\n".join(builder.lines)


def render_levels(root: Node, *, indent: str = "  ") -> str:
    """Breadth-first listing of the nodes under ``root``.

    Each line is indented by the node's depth below ``root``. The root
    itself is not listed.
    """
    lines: list[str] = []
    queue: deque[tuple[Node, int]] = deque((child, 0) for child in root.children)
    while queue:
        node, depth = queue.popleft()
        prefix = indent * depth
        if node.is_text:
            lines.append(f"{prefix}Text: {node.content}")
        elif node.is_comment:
            lines.append(f"{prefix}Comment: {node.content}")
        elif node.is_doctype:
            lines.append(f"{prefix}Doctype")
        else:
            lines.append(f"{prefix}Element: {node.tag_name}")
        queue.extend((child, depth + 1) for child in node.children)
    return "\n".join(lines)
