"""Tests for mdchunk.markdown.wrappers — ancestor wrappers and HTML spans."""

from mdchunk.markdown.tree import Node, NodeType, parse_markdown
from mdchunk.markdown.wrappers import (
    HtmlTagStack,
    Piece,
    Wrapper,
    ancestor_wrappers,
    closing_tag,
    code_wrapper,
    is_standalone_tag,
)


def _first_text(md: str, literal: str) -> Node:
    root = parse_markdown(md)
    return next(n for n in root.walk() if n.literal == literal)


class TestAncestorWrappers:

    def test_closest_ancestor_first(self):
        node = _first_text("**bold _both_**", "both")
        assert ancestor_wrappers(node) == [Wrapper("_", "_"), Wrapper("**", "**")]

    def test_strikethrough(self):
        node = _first_text("~~gone~~", "gone")
        assert ancestor_wrappers(node) == [Wrapper("~~", "~~")]

    def test_heading(self):
        node = _first_text("### Deep", "Deep")
        assert ancestor_wrappers(node) == [Wrapper("### ", "\n\n")]

    def test_link_with_and_without_title(self):
        node = _first_text('[a](http://x.io "Some title")', "a")
        assert ancestor_wrappers(node) == [Wrapper("[", '](http://x.io "Some title")')]
        node = _first_text("[b](http://x.io)", "b")
        assert ancestor_wrappers(node) == [Wrapper("[", "](http://x.io)")]

    def test_image(self):
        node = _first_text("![alt](img.png)", "alt")
        assert ancestor_wrappers(node) == [Wrapper("![", "](img.png)")]

    def test_plain_paragraph(self):
        node = _first_text("just text", "just text")
        assert ancestor_wrappers(node) == []


class TestCodeWrapper:

    def test_fence_with_info(self):
        node = _first_text("```go\nfmt.Println()\n```", "fmt.Println()\n")
        assert code_wrapper(node) == Wrapper("```go\n", "\n```")

    def test_tilde_fence(self):
        node = _first_text("~~~\nx\n~~~", "x\n")
        assert code_wrapper(node) == Wrapper("~~~\n", "\n~~~")

    def test_indented_code_gets_backtick_fence(self):
        node = _first_text("    indented\n", "indented\n")
        assert code_wrapper(node) == Wrapper("```\n", "\n```")

    def test_inline_code(self):
        node = _first_text("use `ls -la` here", "ls -la")
        assert code_wrapper(node) == Wrapper("`", "`")

    def test_inline_code_containing_backtick(self):
        node = Node(NodeType.CODE, literal="`x", markup="``")
        assert code_wrapper(node) == Wrapper("`` ", " ``")


class TestPieceRender:

    def test_first_wrapper_innermost(self):
        piece = Piece("x", (Wrapper("_", "_"), Wrapper("**", "**")))
        assert piece.render() == "**_x_**"

    def test_no_wrappers(self):
        assert Piece("plain").render() == "plain"


class TestHtmlTagStack:

    def test_open_and_close(self):
        tags = HtmlTagStack()
        assert tags.feed("<b>") == ""
        assert tags.wrappers == [Wrapper("<b>", "</b>")]
        assert tags.feed("</b>") == ""
        assert len(tags) == 0

    def test_nested_order_oldest_first(self):
        tags = HtmlTagStack()
        tags.feed("<b>")
        tags.feed("<i>")
        assert tags.wrappers == [Wrapper("<b>", "</b>"), Wrapper("<i>", "</i>")]

    def test_mismatched_close_is_literal(self):
        """Only the most recently opened span can be closed."""
        tags = HtmlTagStack()
        tags.feed("<b>")
        tags.feed("<i>")
        assert tags.feed("</b>") == "</b>"
        assert len(tags) == 2

    def test_close_on_empty_stack_is_literal(self):
        assert HtmlTagStack().feed("</p>") == "</p>"

    def test_standalone_tags_are_literal(self):
        tags = HtmlTagStack()
        assert tags.feed("<br/>") == "<br/>"
        assert tags.feed("<!-- note -->") == "<!-- note -->"
        assert len(tags) == 0

    def test_closing_tag_drops_attributes(self):
        assert closing_tag('<a href="x">') == "</a>"
        assert closing_tag("<tag1>") == "</tag1>"
        tags = HtmlTagStack()
        tags.feed('<span class="c">')
        assert tags.feed("</span>") == ""

    def test_is_standalone_tag(self):
        assert is_standalone_tag("<img src=x />")
        assert not is_standalone_tag("<img src=x>")
