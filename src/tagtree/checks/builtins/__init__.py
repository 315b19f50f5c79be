"""Built-in detector checks.

BUILTIN_CHECKS lists the default set in run order. find_unclosed_nonvoid_tags
is opt-in.
"""

from tagtree.checks.builtins.markup import (
    find_invalid_tags,
    find_missing_attribute_values,
    find_missing_doctype,
    find_unclosed_comment,
    find_unclosed_nonvoid_tags,
    find_unclosed_tags,
    find_unescaped_characters,
    find_unquoted_attributes,
)
from tagtree.checks.builtins.tree import (
    find_duplicate_attributes,
    find_incorrect_nesting,
    find_mismatched_siblings,
)

BUILTIN_CHECKS = (
    find_unclosed_tags,
    find_mismatched_siblings,
    find_unquoted_attributes,
    find_missing_attribute_values,
    find_incorrect_nesting,
    find_invalid_tags,
    find_duplicate_attributes,
    find_unescaped_characters,
    find_missing_doctype,
    find_unclosed_comment,
)

__all__ = [
    "BUILTIN_CHECKS",
    "find_duplicate_attributes",
    "find_incorrect_nesting",
    "find_invalid_tags",
    "find_mismatched_siblings",
    "find_missing_attribute_values",
    "find_missing_doctype",
    "find_unclosed_comment",
    "find_unclosed_nonvoid_tags",
    "find_unclosed_tags",
    "find_unescaped_characters",
    "find_unquoted_attributes",
]
