"""Pieces to chunk strings.

Renders each piece inside its wrappers and packs the results greedily into
chunks no longer than the byte limit, stamping a pagination title on every
chunk once a document title was captured.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable, Iterable

from mdchunk.markdown.cut import byte_len
from mdchunk.markdown.errors import BudgetExhaustedError
from mdchunk.markdown.wrappers import Piece

TITLE_SUFFIX_FMT = " (%d/%s)\n\n"
# Room for the page numbers to grow past the width of the format string
TITLE_MARGIN = 10


def new_total_token() -> str:
    """Placeholder for the chunk count, swapped out once all chunks exist."""
    return f"<{uuid.uuid4()}>"


@dataclass(frozen=True)
class PaginationTitle:
    base: str
    reserved_len: int
    token: str = field(default_factory=new_total_token)

    @classmethod
    def create(
        cls,
        base: str,
        margin: int = TITLE_MARGIN,
        token_factory: Callable[[], str] = new_total_token,
    ) -> PaginationTitle:
        reserved = byte_len(base) + len(TITLE_SUFFIX_FMT) + margin
        return cls(base=base, reserved_len=reserved, token=token_factory())

    def render(self, index: int) -> str:
        return self.base + TITLE_SUFFIX_FMT % (index, self.token)

    def resolve(self, chunk: str, total: int) -> str:
        return chunk.replace(self.token, str(total), 1)


def assemble_chunks(
    pieces: Iterable[Piece],
    max_length: int,
    title: PaginationTitle | None = None,
) -> list[str]:
    """Greedily pack rendered pieces into chunks of at most *max_length* bytes.

    Raises BudgetExhaustedError if the resolved page numbers turn out wider
    than the title reserved for them.
    """
    chunks: list[str] = []
    sizes: list[int] = []

    for piece in pieces:
        rendered = piece.render()
        size = byte_len(rendered)

        # Merge into the open chunk when it still fits
        if chunks and sizes[-1] + size <= max_length:
            chunks[-1] += rendered
            sizes[-1] += size
            continue

        if piece.soft:
            continue

        if title is not None:
            rendered = title.render(len(chunks) + 1) + rendered
        chunks.append(rendered)
        sizes.append(byte_len(rendered))

    if title is not None:
        total = len(chunks)
        chunks = [title.resolve(c, total) for c in chunks]
        # A margin too small for the page numbers can push a chunk over
        for chunk in chunks:
            if byte_len(chunk) > max_length:
                raise BudgetExhaustedError(
                    f"page numbers up to {total} don't fit the reserved title length"
                )

    return chunks
