"""Tree nodes for tagtree.

A parse produces a tree of :class:`Node` objects under a synthetic ``root``
node. Every node has a tag name; text, comments and the doctype use the
sentinel names from :mod:`tagtree.tags`.

Ownership:
A parent owns its ``children`` list. The ``parent`` back-reference is a weak
reference, so a detached subtree never keeps its former ancestors alive and
the tree holds no reference cycles.

Thread Safety:
Nodes are built by a single parser call and not mutated afterwards. Sharing
a finished tree across threads is safe as long as nobody calls ``append``.

"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field

from tagtree.errors import TreeError
from tagtree.tags import COMMENT_TAG, DOCTYPE_TAG, ROOT_TAG, TEXT_TAG


@dataclass(slots=True, weakref_slot=True, eq=False)
class Node:
    """A node in the parsed tree.

    Attributes:
        tag_name: Element name as written in source, or a sentinel
            (``#text``, ``#comment``, ``!DOCTYPE``, ``root``)
        attributes: ``name=value`` attributes; the last repeated name wins
        attribute_pairs: Every attribute in source order, repeats kept; bare
            names (``disabled``) carry an empty value
        content: Text payload for ``#text`` and ``#comment`` nodes
        void: True for void elements (``br``, ``img``, ...)
        children: Owned child nodes, in document order

    """

    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    attribute_pairs: tuple[tuple[str, str], ...] = ()
    content: str | None = None
    void: bool = False
    children: list[Node] = field(default_factory=list)
    _parent: weakref.ReferenceType[Node] | None = field(
        default=None, init=False, repr=False
    )

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def root(cls) -> Node:
        return cls(ROOT_TAG)

    @classmethod
    def text_node(cls, content: str) -> Node:
        return cls(TEXT_TAG, content=content)

    @classmethod
    def comment_node(cls, content: str) -> Node:
        return cls(COMMENT_TAG, content=content)

    @classmethod
    def doctype_node(cls) -> Node:
        return cls(DOCTYPE_TAG, void=True)

    # =========================================================================
    # Structure
    # =========================================================================

    @property
    def parent(self) -> Node | None:
        """The owning node, or None for the root and detached nodes."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def can_have_children(self) -> bool:
        return not (self.void or self.tag_name in (TEXT_TAG, COMMENT_TAG, DOCTYPE_TAG))

    def append(self, child: Node) -> Node:
        """Attach ``child`` as the last child of this node.

        Returns:
            The appended child.

        Raises:
            TreeError: If this node cannot own children or ``child`` already
                has a parent.
        """
        if not self.can_have_children:
            raise TreeError(f"<{self.tag_name}> cannot have children")
        if child.parent is not None:
            raise TreeError(f"<{child.tag_name}> is already attached to <{child.parent.tag_name}>")
        if child is self:
            raise TreeError(f"<{self.tag_name}> cannot contain itself")
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    # =========================================================================
    # Classification
    # =========================================================================

    @property
    def is_root(self) -> bool:
        return self.tag_name == ROOT_TAG and self.parent is None

    @property
    def is_text(self) -> bool:
        return self.tag_name == TEXT_TAG

    @property
    def is_comment(self) -> bool:
        return self.tag_name == COMMENT_TAG

    @property
    def is_doctype(self) -> bool:
        return self.tag_name == DOCTYPE_TAG

    @property
    def is_element(self) -> bool:
        """True for real elements (not text, comment, doctype or root)."""
        return not (self.is_root or self.tag_name in (TEXT_TAG, COMMENT_TAG, DOCTYPE_TAG))

    # =========================================================================
    # Traversal
    # =========================================================================

    def walk(self) -> Iterator[Node]:
        """Iterate this node and all descendants in document (pre-)order.

        Iterative, so deeply nested documents don't hit the recursion limit.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_elements(self) -> Iterator[Node]:
        """Descendant elements in document order (self excluded)."""
        for node in self.walk():
            if node is not self and node.is_element:
                yield node

    def find_all(self, tag_name: str) -> list[Node]:
        """All descendant elements named ``tag_name`` (case-insensitive)."""
        wanted = tag_name.lower()
        return [n for n in self.iter_elements() if n.tag_name.lower() == wanted]

    @property
    def text(self) -> str:
        """Descendant text contents joined by single spaces."""
        if self.is_text:
            return self.content or ""
        return " ".join(n.content or "" for n in self.walk() if n.is_text)

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    # =========================================================================
    # Display
    # =========================================================================

    def __str__(self) -> str:
        """Display form: text content, or the tag name followed by attributes."""
        if self.is_text:
            return self.content or ""
        if not self.attributes:
            return self.tag_name
        attrs = " ".join(f'{k}="{v}"' for k, v in self.attributes.items())
        return f"{self.tag_name} {attrs}"

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        if self.is_text or self.is_comment:
            content = self.content or ""
            if len(content) > 20:
                content = content[:17] + "..."
            return f"Node({self.tag_name}, {content!r})"
        return f"Node({self.tag_name}, attrs={len(self.attributes)}, children={len(self.children)})"
