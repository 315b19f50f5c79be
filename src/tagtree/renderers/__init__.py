"""Plain-text renderers for parsed trees."""

from tagtree.renderers.outline import render_levels, render_tree

__all__ = ["render_levels", "render_tree"]
