"""Markdown to node tree parser.

Converts the markdown-it token stream into a tree of typed nodes with parent
back-references, so the splitter can walk ancestors of any text run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator

from markdown_it import MarkdownIt


class NodeType(enum.Enum):
    DOCUMENT = "document"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    STRIKETHROUGH = "strikethrough"
    LINK = "link"
    IMAGE = "image"
    CODE = "code"
    CODE_BLOCK = "code_block"
    HTML_SPAN = "html_span"
    HTML_BLOCK = "html_block"
    THEMATIC_BREAK = "thematic_break"
    BLOCKQUOTE = "blockquote"
    LIST = "list"
    LIST_ITEM = "list_item"
    TEXT = "text"
    OTHER = "other"


# Block-level nodes that separate runs of text in the output.
BLOCK_TYPES = frozenset({
    NodeType.PARAGRAPH,
    NodeType.HEADING,
    NodeType.CODE_BLOCK,
    NodeType.HTML_BLOCK,
    NodeType.THEMATIC_BREAK,
})


@dataclass(eq=False)
class Node:
    type: NodeType
    literal: str | None = None
    children: list[Node] = field(default_factory=list)
    parent: Node | None = field(default=None, repr=False)
    level: int = 0
    destination: str = ""
    title: str = ""
    info: str = ""
    markup: str = ""

    def append(self, child: Node) -> Node:
        child.parent = self
        self.children.append(child)
        return child

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def ancestors(self) -> Iterator[Node]:
        """Yield parents from the closest one up to the root."""
        parent = self.parent
        while parent is not None:
            yield parent
            parent = parent.parent

    def plain_text(self) -> str:
        return "".join(n.literal for n in self.walk() if n.literal is not None)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

_TYPE_MAP = {
    "paragraph": NodeType.PARAGRAPH,
    "heading": NodeType.HEADING,
    "em": NodeType.EMPHASIS,
    "strong": NodeType.STRONG,
    "s": NodeType.STRIKETHROUGH,
    "link": NodeType.LINK,
    "image": NodeType.IMAGE,
    "bullet_list": NodeType.LIST,
    "ordered_list": NodeType.LIST,
    "list_item": NodeType.LIST_ITEM,
    "blockquote": NodeType.BLOCKQUOTE,
    "text": NodeType.TEXT,
    "text_special": NodeType.TEXT,
    "softbreak": NodeType.TEXT,
    "hardbreak": NodeType.TEXT,
    "code_inline": NodeType.CODE,
    "fence": NodeType.CODE_BLOCK,
    "code_block": NodeType.CODE_BLOCK,
    "html_inline": NodeType.HTML_SPAN,
    "html_block": NodeType.HTML_BLOCK,
    "hr": NodeType.THEMATIC_BREAK,
}


def make_parser() -> MarkdownIt:
    parser = MarkdownIt("commonmark", {"typographer": False})
    # Enable strikethrough
    parser.enable("strikethrough")
    # Keep escapes and entities as separate text_special tokens
    parser.disable("text_join")
    return parser


def parse_markdown(md: str) -> Node:
    """Parse markdown into a node tree rooted at a DOCUMENT node."""
    root = Node(NodeType.DOCUMENT)
    _attach_tokens(make_parser().parse(md), root)
    return root


def _attach_tokens(tokens: list, root: Node) -> None:
    """Build nodes from a flat token list, nesting on open/close pairs."""
    stack = [root]
    for tok in tokens:
        if tok.nesting == -1:
            stack.pop()
            continue

        # Empty text runs carry nothing to split
        if tok.type == "text" and not tok.content:
            continue

        # Inline containers have no node of their own
        if tok.type == "inline":
            _attach_tokens(tok.children or [], stack[-1])
            continue

        node = stack[-1].append(_node_from_token(tok))
        if tok.nesting == 1:
            stack.append(node)
        elif tok.type == "image":
            _attach_tokens(tok.children or [], node)


def _node_from_token(tok) -> Node:
    base = tok.type[:-5] if tok.nesting == 1 else tok.type
    node = Node(_TYPE_MAP.get(base, NodeType.OTHER), markup=tok.markup or "")

    if base == "heading":
        node.level = int(tok.tag[1:])
    elif base in ("link", "image"):
        node.destination = tok.attrGet("href" if base == "link" else "src") or ""
        node.title = tok.attrGet("title") or ""
    elif base in ("text", "code_inline"):
        node.literal = tok.content
    elif base == "text_special":
        # Source form, so "\\*" and "&lt;" aren't turned into markup
        node.literal = tok.markup
    elif base in ("softbreak", "hardbreak"):
        node.literal = "\n"
    elif base in ("fence", "code_block"):
        node.literal = tok.content
        node.info = (tok.info or "").strip()
    elif base == "html_inline":
        node.literal = tok.content
    elif base == "html_block":
        node.literal = tok.content.rstrip("\n")
    elif base == "hr":
        node.literal = tok.markup

    return node
