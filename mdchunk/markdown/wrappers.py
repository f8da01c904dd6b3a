"""Wrappers: the prefix/suffix pairs that keep a text run valid markdown.

A run of text isolated into its own chunk loses the formatting of the nodes
around it. The resolver here walks a node's ancestors and rebuilds that
context as an ordered list of wrappers, closest ancestor first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mdchunk.markdown.tree import Node, NodeType

BLOCK_BREAK = "\n\n"

_TAG_NAME_RE = re.compile(r"<([A-Za-z][A-Za-z0-9-]*)")


@dataclass(frozen=True)
class Wrapper:
    begin: str
    end: str


@dataclass(frozen=True)
class Piece:
    content: str
    wrappers: tuple[Wrapper, ...] = ()
    soft: bool = False  # only merged into an open chunk, never opens one

    def render(self) -> str:
        """Render content inside its wrappers, first wrapper innermost."""
        begin = "".join(w.begin for w in reversed(self.wrappers))
        end = "".join(w.end for w in self.wrappers)
        return begin + self.content + end


def block_break() -> Piece:
    return Piece(content=BLOCK_BREAK, soft=True)


# ---------------------------------------------------------------------------
# Ancestor resolution
# ---------------------------------------------------------------------------

_STYLE_WRAPPERS = {
    NodeType.STRIKETHROUGH: Wrapper("~~", "~~"),
    NodeType.EMPHASIS: Wrapper("_", "_"),
    NodeType.STRONG: Wrapper("**", "**"),
}


def heading_prefix(level: int) -> str:
    return "#" * level


def link_suffix(destination: str, title: str) -> str:
    suffix = "](" + destination
    if title:
        suffix += f' "{title}"'
    return suffix + ")"


def ancestor_wrappers(node: Node) -> list[Wrapper]:
    """Collect wrappers from the node's ancestors, closest first."""
    wrappers: list[Wrapper] = []
    for parent in node.ancestors():
        if parent.type in _STYLE_WRAPPERS:
            wrappers.append(_STYLE_WRAPPERS[parent.type])
        elif parent.type is NodeType.HEADING:
            wrappers.append(Wrapper(heading_prefix(parent.level) + " ", BLOCK_BREAK))
        elif parent.type is NodeType.LINK:
            wrappers.append(Wrapper("[", link_suffix(parent.destination, parent.title)))
        elif parent.type is NodeType.IMAGE:
            wrappers.append(Wrapper("![", link_suffix(parent.destination, parent.title)))
    return wrappers


def code_wrapper(node: Node) -> Wrapper:
    """Fence or backtick wrapper for a code node's own literal."""
    if node.type is NodeType.CODE_BLOCK:
        fence = node.markup or "```"
        return Wrapper(f"{fence}{node.info}\n", f"\n{fence}")

    ticks = node.markup or "`"
    content = node.literal or ""
    if content.startswith("`") or content.endswith("`"):
        return Wrapper(ticks + " ", " " + ticks)
    return Wrapper(ticks, ticks)


# ---------------------------------------------------------------------------
# Raw HTML spans
# ---------------------------------------------------------------------------

def is_opening_tag(tag: str) -> bool:
    return not tag.startswith("</")


def is_standalone_tag(tag: str) -> bool:
    """Comments, declarations, processing instructions and ``<br/>``-style tags."""
    return tag.startswith(("<!", "<?")) or tag.endswith("/>")


def closing_tag(open_tag: str) -> str:
    """``<b>`` -> ``</b>``; attributes are dropped: ``<a href="x">`` -> ``</a>``."""
    m = _TAG_NAME_RE.match(open_tag)
    if m is None:
        return open_tag.replace("<", "</", 1)
    return f"</{m.group(1)}>"


class HtmlTagStack:
    """Raw HTML spans opened so far and not yet closed, oldest first.

    Every open span wraps all text that follows it, so a chunk boundary
    inside the span closes it at the end of one chunk and reopens it at the
    start of the next.
    """

    def __init__(self) -> None:
        self._open: list[Wrapper] = []

    def __len__(self) -> int:
        return len(self._open)

    @property
    def wrappers(self) -> list[Wrapper]:
        return list(self._open)

    def feed(self, tag: str) -> str:
        """Track a raw HTML span and return the text it still contributes.

        Opening tags are pushed and contribute nothing. A closing tag that
        matches the most recently opened span pops it and contributes
        nothing; any other closing tag is kept as literal text, and so are
        standalone tags, which never enclose anything.
        """
        if is_standalone_tag(tag):
            return tag
        if is_opening_tag(tag):
            self._open.append(Wrapper(tag, closing_tag(tag)))
            return ""
        if self._open and self._open[-1].end == tag:
            self._open.pop()
            return ""
        return tag
