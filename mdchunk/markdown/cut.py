"""Byte-budget arithmetic and length-bounded cutting of text runs.

All lengths are UTF-8 byte lengths. Cuts always land on character
boundaries, so a piece can come out a few bytes short of its budget when
the text isn't ASCII.
"""

from __future__ import annotations

from typing import Sequence

from mdchunk.markdown.errors import BudgetExhaustedError
from mdchunk.markdown.wrappers import Piece, Wrapper


def byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def wrapper_overhead(wrappers: Sequence[Wrapper]) -> int:
    return sum(byte_len(w.begin) + byte_len(w.end) for w in wrappers)


def content_budget(
    wrappers: Sequence[Wrapper],
    max_length: int,
    title_len: int = 0,
    sep: str = "",
) -> int:
    """Bytes left for literal content once every decoration is accounted for.

    Raises BudgetExhaustedError if the wrappers, the reserved title and the
    separator alone fill *max_length*.
    """
    extra = wrapper_overhead(wrappers) + title_len + byte_len(sep)
    if extra >= max_length:
        raise BudgetExhaustedError(
            f"{extra} bytes of overhead leave no room within {max_length}"
        )
    return max_length - extra


def boundary_cut(data: bytes, limit: int) -> int:
    """Largest cut position <= *limit* that doesn't split a UTF-8 sequence."""
    if limit >= len(data):
        return len(data)
    cut = limit
    # Continuation bytes look like 0b10xxxxxx
    while cut > 0 and (data[cut] & 0xC0) == 0x80:
        cut -= 1
    return cut


def cut_bytes(text: str, limit: int) -> list[str] | None:
    """Cut *text* into consecutive parts of at most *limit* bytes each.

    Returns None when a single character is wider than *limit*.
    """
    data = text.encode("utf-8")
    parts: list[str] = []
    while data:
        cut = boundary_cut(data, limit)
        if cut == 0:
            return None
        parts.append(data[:cut].decode("utf-8"))
        data = data[cut:]
    return parts


def cut_pieces(content: str, budget: int, wrappers: Sequence[Wrapper]) -> list[Piece]:
    """Slice *content* into pieces of at most *budget* bytes sharing *wrappers*."""
    parts = cut_bytes(content, budget)
    if parts is None:
        raise BudgetExhaustedError(f"a character doesn't fit in {budget} bytes")
    shared = tuple(wrappers)
    return [Piece(content=part, wrappers=shared) for part in parts]
