"""Tests for the stack-based parser and its reconciliation modes."""

import pytest

from tagtree import ParseError, ReconcileMode, parse, parse_markup, tokenize, try_parse
from tagtree.parser import extract_tag_name, parse_attribute_pairs, parse_attributes


def _tags(markup: str, **kwargs) -> list[str]:  # type: ignore[no-untyped-def]
    return [n.tag_name for n in parse_markup(markup, **kwargs).iter_elements()]


# =============================================================================
# Tree building
# =============================================================================


class TestTreeBuilding:
    """Opening tags, text and void elements."""

    def test_round_trip_div(self) -> None:
        root = parse(tokenize("<div>hi</div>"))
        assert root.tag_name == "root"
        assert len(root.children) == 1
        div = root.children[0]
        assert div.tag_name == "div"
        assert div.attributes == {}
        assert len(div.children) == 1
        assert div.children[0].tag_name == "#text"
        assert div.children[0].content == "hi"

    def test_parent_links(self) -> None:
        root = parse_markup("<div><p>x</p></div>")
        div = root.children[0]
        p = div.children[0]
        assert p.parent is div
        assert div.parent is root
        assert root.parent is None

    def test_siblings_after_close(self) -> None:
        root = parse_markup("<p>a</p><p>b</p>")
        assert [c.tag_name for c in root.children] == ["p", "p"]

    def test_text_between_children(self) -> None:
        root = parse_markup("<p>a<b>bold</b>c</p>")
        p = root.children[0]
        assert [c.tag_name for c in p.children] == ["#text", "b", "#text"]
        assert p.children[2].content == "c"

    def test_void_element_is_not_entered(self) -> None:
        root = parse_markup('<img src="x">')
        img = root.children[0]
        assert img.void
        assert img.attributes == {"src": "x"}
        assert img.children == []

    def test_void_element_siblings(self) -> None:
        root = parse_markup("<p>a<br>b</p>")
        assert [c.tag_name for c in root.children[0].children] == ["#text", "br", "#text"]

    def test_void_set_is_case_insensitive(self) -> None:
        root = parse_markup("<P>one<BR>two</p>")
        p = root.children[0]
        assert p.tag_name == "P"
        assert p.children[1].void

    def test_tag_order_matches_source(self) -> None:
        markup = "<html><body><ul><li>a</li><li>b<img></li></ul><hr></body></html>"
        assert _tags(markup) == ["html", "body", "ul", "li", "li", "img", "hr"]

    def test_plain_string_tokens(self) -> None:
        root = parse(["<p>", "hi", "</p>"])
        assert root.children[0].children[0].content == "hi"

    def test_blank_tokens_are_skipped(self) -> None:
        root = parse(["<p>", "   ", "", "</p>"])
        assert root.children[0].children == []

    def test_text_tokens_are_trimmed(self) -> None:
        root = parse(["<p>", "  padded  ", "</p>"])
        assert root.children[0].children[0].content == "padded"

    def test_nameless_tags_pair_up(self) -> None:
        root = parse_markup("a<>b</>c")
        nameless = root.children[1]
        assert nameless.tag_name == ""
        assert nameless.is_element
        assert [c.content for c in nameless.children] == ["b"]
        assert root.children[2].content == "c"

    def test_nameless_opening_tag_stays_open(self) -> None:
        with pytest.raises(ParseError) as exc:
            parse_markup("a < b > c")
        assert exc.value.tags == ("",)


class TestDeclarations:
    """DOCTYPE and comments are inert."""

    def test_doctype(self) -> None:
        root = parse_markup("<!DOCTYPE html><html></html>")
        assert [c.tag_name for c in root.children] == ["!DOCTYPE", "html"]
        assert root.children[0].children == []

    def test_doctype_case_insensitive(self) -> None:
        root = parse_markup("<!doctype html><p>x</p>")
        assert root.children[0].is_doctype

    def test_comment(self) -> None:
        root = parse_markup("<!-- note --><p>x</p>")
        comment = root.children[0]
        assert comment.tag_name == "#comment"
        assert comment.content == "note"
        assert root.children[1].tag_name == "p"

    def test_comment_inside_element(self) -> None:
        root = parse_markup("<div><!--x--></div>")
        assert root.children[0].children[0].content == "x"


# =============================================================================
# Attributes and tag names
# =============================================================================


class TestAttributes:
    def test_quoting_styles(self) -> None:
        attrs = parse_attributes("<a href=\"/x\" class='c' id=main>")
        assert attrs == {"href": "/x", "class": "c", "id": "main"}

    def test_no_attributes(self) -> None:
        assert parse_attributes("<div>") == {}

    def test_boolean_attribute_is_ignored(self) -> None:
        assert parse_attributes("<input disabled>") == {}

    def test_boolean_attribute_kept_in_pairs(self) -> None:
        pairs = parse_attribute_pairs('<input type="checkbox" disabled checked>')
        assert pairs == (("type", "checkbox"), ("disabled", ""), ("checked", ""))

    def test_node_separates_bare_attributes(self) -> None:
        node = parse_markup("<input disabled value=x>").children[0]
        assert node.attributes == {"value": "x"}
        assert node.attribute_pairs == (("disabled", ""), ("value", "x"))

    def test_empty_quoted_value(self) -> None:
        assert parse_attributes('<img alt="">') == {"alt": ""}

    def test_spaces_around_equals(self) -> None:
        assert parse_attributes('<a href = "x">') == {"href": "x"}

    def test_self_closing_slash(self) -> None:
        assert parse_attributes('<img src="a.png"/>') == {"src": "a.png"}

    def test_hyphenated_names(self) -> None:
        attrs = parse_attributes('<div data-id="7" aria-label="x">')
        assert attrs == {"data-id": "7", "aria-label": "x"}

    def test_repeated_name_last_wins(self) -> None:
        root = parse_markup('<div class="a" class="b"></div>')
        div = root.children[0]
        assert div.attributes == {"class": "b"}
        assert div.attribute_pairs == (("class", "a"), ("class", "b"))

    def test_pairs_keep_source_order(self) -> None:
        pairs = parse_attribute_pairs("<p b=2 a=1 b=3>")
        assert pairs == (("b", "2"), ("a", "1"), ("b", "3"))

    def test_attribute_region_starts_at_any_whitespace(self) -> None:
        assert parse_attributes('<div\nclass="x">') == {"class": "x"}


class TestExtractTagName:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ('<div class="a">', "div"),
            ("</div>", "div"),
            ("<br/>", "br"),
            ("</p >", "p"),
            ("<DIV>", "DIV"),
            ('<div\nclass="x">', "div"),
            ("<!foo>", "foo"),
        ],
    )
    def test_extract(self, tag: str, expected: str) -> None:
        assert extract_tag_name(tag) == expected


# =============================================================================
# Reconciliation
# =============================================================================


class TestLenientMode:
    """Default mode: search the stack, auto-close above the match."""

    def test_auto_closes_intervening(self) -> None:
        root = parse_markup("<div><span></div><p>x</p>")
        div = root.children[0]
        assert div.children[0].tag_name == "span"
        assert root.children[1].tag_name == "p"

    def test_auto_closes_several(self) -> None:
        root = parse_markup("<section><div><b><i>x</section>after")
        assert root.children[-1].content == "after"

    def test_closing_is_case_insensitive(self) -> None:
        root = parse_markup("<DIV>x</div>")
        assert root.children[0].tag_name == "DIV"

    def test_closes_innermost_match(self) -> None:
        root = parse_markup("<div><div>a</div>b</div>")
        outer = root.children[0]
        assert outer.children[1].content == "b"

    def test_unmatched_closer_raises(self) -> None:
        with pytest.raises(ParseError, match=r"Unmatched closing tag: </span>") as exc:
            parse_markup("<div></span></div>")
        assert exc.value.tags == ("span",)

    def test_closer_on_empty_stack_raises(self) -> None:
        with pytest.raises(ParseError, match="Unmatched"):
            parse_markup("</p>")

    def test_nameless_closer_raises(self) -> None:
        with pytest.raises(ParseError, match=r"Unmatched closing tag: </>") as exc:
            parse(tokenize("a</>"))
        assert exc.value.tags == ("",)

    def test_root_cannot_be_closed(self) -> None:
        with pytest.raises(ParseError, match=r"</root>"):
            parse_markup("</root>")

    def test_unclosed_at_end_lists_top_first(self) -> None:
        with pytest.raises(ParseError) as exc:
            parse_markup("<div><p>text")
        assert str(exc.value) == "Unclosed tags at end of input: p, div"
        assert exc.value.tags == ("p", "div")

    def test_void_element_never_left_open(self) -> None:
        parse_markup('<img src="x">')
        parse_markup("<br><hr><input><meta><link>")


class TestStrictMode:
    """Closing tag must match the top of the stack."""

    def test_well_formed(self) -> None:
        root = parse_markup("<div><p>x</p></div>", mode=ReconcileMode.STRICT)
        assert _tags("<div><p>x</p></div>") == [n.tag_name for n in root.iter_elements()]

    def test_mismatch_raises(self) -> None:
        with pytest.raises(ParseError) as exc:
            parse_markup("<div><span></div>", mode=ReconcileMode.STRICT)
        assert str(exc.value) == "Mismatched closing tag: </div> (expected </span>)"
        assert exc.value.tags == ("div", "span")

    def test_closer_on_empty_stack(self) -> None:
        with pytest.raises(ParseError, match=r"Unmatched closing tag: </p>"):
            parse_markup("</p>", mode=ReconcileMode.STRICT)

    def test_case_insensitive(self) -> None:
        parse_markup("<B>x</b>", mode=ReconcileMode.STRICT)

    def test_nameless_closer_mismatch(self) -> None:
        with pytest.raises(ParseError, match=r"Mismatched closing tag: </> \(expected </div>\)"):
            parse(tokenize("<div>x</ ></div>"), mode=ReconcileMode.STRICT)

    def test_unclosed_still_reported(self) -> None:
        with pytest.raises(ParseError, match="Unclosed tags"):
            parse_markup("<div>", mode=ReconcileMode.STRICT)


class TestRecoverMode:
    """Never raises; used by the detector's tree checks."""

    def test_unclosed_left_in_tree(self) -> None:
        root = parse_markup("<div><p>text", mode=ReconcileMode.RECOVER)
        p = root.children[0].children[0]
        assert p.children[0].content == "text"

    def test_unmatched_closer_dropped(self) -> None:
        root = parse_markup("<div></span>x</div>", mode=ReconcileMode.RECOVER)
        div = root.children[0]
        assert [c.content for c in div.children] == ["x"]

    def test_nameless_closer_dropped(self) -> None:
        root = parse_markup("<div>x</></div>", mode=ReconcileMode.RECOVER)
        assert [c.content for c in root.children[0].children] == ["x"]

    def test_still_auto_closes(self) -> None:
        root = parse_markup("<div><span></div>x", mode=ReconcileMode.RECOVER)
        assert root.children[1].content == "x"


class TestParserObject:
    def test_mode_property(self) -> None:
        from tagtree import Parser

        assert Parser([]).mode is ReconcileMode.LENIENT
        assert Parser([], mode=ReconcileMode.STRICT).mode is ReconcileMode.STRICT

    def test_custom_void_elements(self) -> None:
        from tagtree import Parser

        root = Parser(tokenize("<icon><p>x</p>"), void_elements=frozenset({"icon"})).parse()
        assert [c.tag_name for c in root.children] == ["icon", "p"]


# =============================================================================
# Result type
# =============================================================================


class TestTryParse:
    def test_ok(self) -> None:
        result = try_parse(tokenize("<p>x</p>"))
        assert result.ok
        assert result.error is None
        assert result.unwrap().children[0].tag_name == "p"

    def test_error(self) -> None:
        result = try_parse(tokenize("<p>"))
        assert not result.ok
        assert result.root is None
        assert isinstance(result.error, ParseError)
        with pytest.raises(ParseError, match="Unclosed"):
            result.unwrap()

    def test_mode_forwarded(self) -> None:
        assert try_parse(tokenize("<a><b></a>")).ok
        assert not try_parse(tokenize("<a><b></a>"), mode=ReconcileMode.STRICT).ok
