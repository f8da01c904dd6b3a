"""Markdown-aware splitting of long documents into size-limited chunks.

Every text run of the document is cut into pieces that each carry the
wrappers (emphasis markers, heading prefix, link target, open HTML spans,
code fences) needed to stay valid markdown on their own. Pieces are then
packed back into chunks. When that can't be done safely the document is
split at fixed byte offsets instead.
"""

from __future__ import annotations

from loguru import logger

from mdchunk.markdown.assemble import TITLE_MARGIN, PaginationTitle, assemble_chunks
from mdchunk.markdown.cut import byte_len, content_budget, cut_pieces
from mdchunk.markdown.errors import BudgetExhaustedError, SplitAborted, UnsupportedConstructError
from mdchunk.markdown.fallback import simple_split
from mdchunk.markdown.tree import BLOCK_TYPES, Node, NodeType, parse_markdown
from mdchunk.markdown.wrappers import (
    HtmlTagStack,
    Piece,
    ancestor_wrappers,
    block_break,
    code_wrapper,
    heading_prefix,
)

# GitHub rejects issue and PR comments longer than this
MAX_GITHUB_COMMENT_SIZE = 65536


def split_github_comment(text: str, sep: str = "") -> tuple[list[str] | None, bool]:
    """markdown_split() with GitHub's comment size limit."""
    return markdown_split(text, MAX_GITHUB_COMMENT_SIZE, sep)


def markdown_split(
    text: str,
    max_length: int,
    sep: str = "",
    *,
    title_margin: int = TITLE_MARGIN,
) -> tuple[list[str] | None, bool]:
    """Split *text* into chunks of at most *max_length* bytes, keeping markdown valid.

    Returns ``(chunks, ok)``. ``ok`` is False when the document had to be
    split with simple_split() instead (lists, or not enough room for the
    wrappers). ``(None, False)`` means *sep* alone doesn't fit *max_length*.
    """
    # If we're under the limit then no need to split
    if byte_len(text) <= max_length:
        return [text], True

    if max_length <= byte_len(sep):
        logger.warning(f"Cannot split: max length {max_length} doesn't fit separator {sep!r}")
        return None, False

    try:
        chunks = _SplitRun(max_length, sep, title_margin).run(parse_markdown(text))
    except SplitAborted as e:
        logger.debug(f"Markdown split aborted, falling back to simple split: {e}")
        return simple_split(text, max_length, sep), False

    return chunks, True


class _SplitRun:
    """State of a single markdown_split() call.

    Holds the raw HTML tag stack, the pieces cut so far and the pagination
    title, none of which outlive the call.
    """

    def __init__(self, max_length: int, sep: str, title_margin: int) -> None:
        self.max_length = max_length
        self.sep = sep
        self.title_margin = title_margin
        self.tags = HtmlTagStack()
        self.pieces: list[Piece] = []
        self.title: PaginationTitle | None = None
        self._title_heading: Node | None = None
        self._last_block: Node | None = None

    def run(self, root: Node) -> list[str]:
        for node in root.walk():
            self._visit(node)

        if not self.pieces:
            raise SplitAborted("no content left to split outside the title")

        return assemble_chunks(self.pieces, self.max_length, self.title)

    def _visit(self, node: Node) -> None:
        if node.type is NodeType.LIST:
            raise UnsupportedConstructError("lists are not supported")

        if node.type is NodeType.HEADING and self._takes_title(node):
            self._capture_title(node)
            return

        if node.literal is None or self._in_title(node):
            return

        content = node.literal
        wrappers = ancestor_wrappers(node)

        if node.type is NodeType.CODE_BLOCK:
            content = content.rstrip("\n")
            wrappers.append(code_wrapper(node))
        elif node.type is NodeType.CODE:
            wrappers.append(code_wrapper(node))
        elif node.type is NodeType.HTML_SPAN:
            content = self.tags.feed(content)

        # Open HTML spans wrap everything that follows them
        wrappers.extend(self.tags.wrappers)

        title_len = self.title.reserved_len if self.title else 0
        budget = content_budget(wrappers, self.max_length, title_len, self.sep)

        self._separate_blocks(node)
        self.pieces.extend(cut_pieces(content, budget, wrappers))

    # -- pagination title ---------------------------------------------------

    def _takes_title(self, heading: Node) -> bool:
        # Only a heading that comes before any content can title the chunks
        return self.title is None and not self.pieces and bool(heading.plain_text())

    def _capture_title(self, heading: Node) -> None:
        base = f"{heading_prefix(heading.level)} {heading.plain_text()}"
        title = PaginationTitle.create(base, self.title_margin)
        if title.reserved_len >= self.max_length:
            raise BudgetExhaustedError(f"title {base!r} doesn't fit in {self.max_length} bytes")

        logger.debug(f"Paginating chunks under title {base!r}")
        self.title = title
        self._title_heading = heading

    def _in_title(self, node: Node) -> bool:
        if self._title_heading is None:
            return False
        return any(a is self._title_heading for a in node.ancestors())

    # -- block separation ---------------------------------------------------

    def _separate_blocks(self, node: Node) -> None:
        """Queue a paragraph break when *node* starts a new block."""
        block = _enclosing_block(node)
        last, self._last_block = self._last_block, block
        if not self.pieces or last is None or block is last:
            return
        # Heading wrappers already end with a blank line
        if last.type is NodeType.HEADING:
            return
        self.pieces.append(block_break())


def _enclosing_block(node: Node) -> Node | None:
    if node.type in BLOCK_TYPES:
        return node
    for parent in node.ancestors():
        if parent.type in BLOCK_TYPES:
            return parent
    return None
