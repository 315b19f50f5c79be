"""Tree visitor with kind-based dispatch.

Example — collect link targets:

    class LinkCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.hrefs: list[str] = []

        def visit_element(self, node: Node) -> None:
            if node.tag_name.lower() == "a" and "href" in node.attributes:
                self.hrefs.append(node.attributes["href"])

    collector = LinkCollector()
    collector.visit(root)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread.

"""

from typing import Generic, TypeVar

from tagtree.nodes import Node

T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor.

    Subclass and override ``visit_*`` methods for node kinds you care about.
    Unhandled kinds fall through to ``visit_default``. Descendants are
    visited automatically in document order after the node itself.

    """

    def visit(self, node: Node) -> T:
        """Dispatch ``node`` and then every descendant.

        Returns the result for ``node`` itself.
        """
        result = self._dispatch(node)
        walker = node.walk()
        next(walker)
        for descendant in walker:
            self._dispatch(descendant)
        return result

    def visit_default(self, node: Node) -> T:
        return None  # type: ignore[return-value]

    def visit_root(self, node: Node) -> T:
        return self.visit_default(node)

    def visit_element(self, node: Node) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Node) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Node) -> T:
        return self.visit_default(node)

    def visit_doctype(self, node: Node) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        if node.is_text:
            return self.visit_text(node)
        if node.is_comment:
            return self.visit_comment(node)
        if node.is_doctype:
            return self.visit_doctype(node)
        if node.is_root:
            return self.visit_root(node)
        return self.visit_element(node)
