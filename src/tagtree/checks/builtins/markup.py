"""Checks that rescan the raw markup with their own patterns.

None of these use the parser. Each pattern is deliberately loose: the
checks overlap and a malformed document usually trips several of them.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from tagtree.checks.protocol import CheckContext, Diagnostic
from tagtree.checks.registry import check
from tagtree.tags import is_void

# <tag ...> or </tag ...>; group 1 marks a closer
_TAG_PATTERN = re.compile(r"<(/)?(\w+)[^>]*>")
_TAG_OPEN_PATTERN = re.compile(r"<(\w+)")

# An opening tag up to (not including) its ">"; comments, doctype,
# processing instructions and closers are skipped
_TAG_SPAN_PATTERN = re.compile(r"<(?![!?/])[^<>]*")
# Matched against one whitespace-separated piece of a span at a time
_UNQUOTED_VALUE_PATTERN = re.compile(r"""([^\s"'=<>/]+)=([^\s"'<>`]+)""")
_QUOTED_PATTERN = re.compile(r"'[^']*'|\"[^\"]*\"")
_NAME_STOP = frozenset(" \t\n\r\f\v\"'=<>/")

_ENTITY_PATTERN = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|\w+);")
_SPECIAL_CHARACTERS = ("&", "<", ">")

_DOCTYPE_PATTERN = re.compile(r"<!DOCTYPE\s+html", re.IGNORECASE)


def _balance_tags(ctx: CheckContext, check_name: str, *, skip_void: bool) -> Iterator[Diagnostic]:
    stack: list[str] = []
    for match in _TAG_PATTERN.finditer(ctx.markup):
        tag = match.group(2).lower()
        if match.group(1) is None:
            if not (skip_void and is_void(tag, ctx.void_elements)):
                stack.append(tag)
        elif stack and stack[-1] == tag:
            stack.pop()
        else:
            yield Diagnostic(check_name, f"Mismatched or unclosed tag: <{tag}>")

    while stack:
        yield Diagnostic(check_name, f"Unclosed tag: <{stack.pop()}>")


@check("unclosed-tags")
def find_unclosed_tags(ctx: CheckContext) -> Iterator[Diagnostic]:
    """Balance opening and closing tags with a simple stack.

    Every opening tag is pushed, void elements included, so a lone
    ``<br>`` is reported. A closer that doesn't match the top of the stack
    is reported at once and leaves the stack alone. Whatever is still open
    at the end is reported innermost first.
    """
    return _balance_tags(ctx, "unclosed-tags", skip_void=False)


@check("unclosed-nonvoid-tags")
def find_unclosed_nonvoid_tags(ctx: CheckContext) -> Iterator[Diagnostic]:
    """Like :func:`find_unclosed_tags`, but void elements are never pushed.

    Not part of the default registry; swap it in for documents that write
    ``<br>`` and ``<img>`` without closers.
    """
    return _balance_tags(ctx, "unclosed-nonvoid-tags", skip_void=True)


def _tag_spans(markup: str) -> Iterator[str]:
    """Opening-tag spans with quoted values blanked to '""'."""
    for match in _TAG_SPAN_PATTERN.finditer(markup):
        yield _QUOTED_PATTERN.sub('""', match.group(0)).rstrip()


def _trailing_name(text: str) -> str:
    """The run of attribute-name characters ending ``text``."""
    start = len(text)
    while start > 0 and text[start - 1] not in _NAME_STOP:
        start -= 1
    return text[start:]


@check("unquoted-attributes")
def find_unquoted_attributes(ctx: CheckContext) -> Iterator[Diagnostic]:
    for span in _tag_spans(ctx.markup):
        pieces = span.split()
        for index, piece in enumerate(pieces):
            match = _UNQUOTED_VALUE_PATTERN.match(piece)
            if match is None:
                continue
            name, value = match.group(1), match.group(2)
            if index == len(pieces) - 1 and match.end() == len(piece) and value.endswith("/"):
                # <img src=x/> : the slash closes the tag
                value = value[:-1]
            if value:
                yield Diagnostic(
                    "unquoted-attributes", f"Unquoted attribute value: {name}={value}"
                )


@check("missing-attribute-values")
def find_missing_attribute_values(ctx: CheckContext) -> Iterator[Diagnostic]:
    """``name=`` with nothing after it before the end of the tag."""
    for span in _tag_spans(ctx.markup):
        head = span.removesuffix("/").rstrip()
        if not head.endswith("="):
            continue
        name = _trailing_name(head[:-1].rstrip())
        if name:
            yield Diagnostic("missing-attribute-values", f"Missing attribute value for: {name}")


@check("invalid-tags")
def find_invalid_tags(ctx: CheckContext) -> Iterator[Diagnostic]:
    """Every ``<name`` whose name isn't a known element, once per occurrence."""
    for match in _TAG_OPEN_PATTERN.finditer(ctx.markup):
        tag = match.group(1).lower()
        if tag not in ctx.valid_tags:
            yield Diagnostic("invalid-tags", f"Invalid HTML tag: <{tag}>")


@check("unescaped-characters")
def find_unescaped_characters(ctx: CheckContext) -> Iterator[Diagnostic]:
    """Report each of ``& < >`` at most once when found outside an entity reference."""
    stripped = _ENTITY_PATTERN.sub("", ctx.markup)
    for char in _SPECIAL_CHARACTERS:
        if char in stripped:
            yield Diagnostic("unescaped-characters", f"Unescaped special character: {char}")


@check("missing-doctype")
def find_missing_doctype(ctx: CheckContext) -> Iterator[Diagnostic]:
    if _DOCTYPE_PATTERN.search(ctx.markup) is None:
        yield Diagnostic("missing-doctype", "Missing DOCTYPE declaration")


@check("unclosed-comment")
def find_unclosed_comment(ctx: CheckContext) -> Iterator[Diagnostic]:
    """A ``<!--`` with no ``-->`` anywhere after it. Reported once."""
    markup = ctx.markup
    start = markup.find("<!--")
    while start != -1:
        end = markup.find("-->", start + 4)
        if end == -1:
            yield Diagnostic("unclosed-comment", "Unclosed HTML comment detected")
            return
        start = markup.find("<!--", end + 3)
