"""Tests for mdchunk.markdown.assemble — chunk packing and pagination titles."""

import pytest

from mdchunk.markdown.assemble import PaginationTitle, assemble_chunks
from mdchunk.markdown.errors import BudgetExhaustedError
from mdchunk.markdown.wrappers import Piece, Wrapper, block_break


def _fixed_title(base: str = "# T", margin: int = 10) -> PaginationTitle:
    return PaginationTitle.create(base, margin=margin, token_factory=lambda: "<TOTAL>")


class TestAssembleChunks:

    def test_greedy_merge(self):
        pieces = [Piece("aaaa"), Piece("bbbb"), Piece("cccc")]
        assert assemble_chunks(pieces, 8) == ["aaaabbbb", "cccc"]

    def test_wrappers_rendered(self):
        pieces = [Piece("ab", (Wrapper("**", "**"),)), Piece("cd", (Wrapper("**", "**"),))]
        assert assemble_chunks(pieces, 7) == ["**ab**", "**cd**"]

    def test_no_pieces(self):
        assert assemble_chunks([], 10) == []

    def test_soft_piece_never_opens_chunk(self):
        pieces = [Piece("aaaaa"), block_break(), Piece("bbbbb")]
        assert assemble_chunks(pieces, 6) == ["aaaaa", "bbbbb"]
        assert assemble_chunks([block_break()], 10) == []

    def test_soft_piece_merged_when_it_fits(self):
        pieces = [Piece("aaa"), block_break(), Piece("bbb")]
        assert assemble_chunks(pieces, 8) == ["aaa\n\nbbb"]

    def test_title_total_resolved(self):
        title = _fixed_title()
        chunks = assemble_chunks([Piece("abc"), Piece("def")], 100, title)
        assert chunks == ["# T (1/1)\n\nabcdef"]

    def test_title_numbering(self):
        title = _fixed_title()
        # The unresolved placeholder counts against the limit while packing
        chunks = assemble_chunks([Piece("abc"), Piece("def"), Piece("ghi")], 22, title)
        assert chunks == ["# T (1/3)\n\nabc", "# T (2/3)\n\ndef", "# T (3/3)\n\nghi"]

    def test_page_numbers_wider_than_reserved(self):
        """Without margin, "(100/100)" outgrows the room kept for the title."""
        title = _fixed_title(margin=0)
        pieces = [Piece("x" * 17)] * 100
        with pytest.raises(BudgetExhaustedError):
            assemble_chunks(pieces, 30, title)

    def test_page_numbers_within_reserved(self):
        title = _fixed_title(margin=0)
        chunks = assemble_chunks([Piece("x" * 17)] * 9, 30, title)
        assert len(chunks) == 9
        assert chunks[-1] == "# T (9/9)\n\n" + "x" * 17


class TestPaginationTitle:

    def test_reserved_length(self):
        title = PaginationTitle.create("# Main title")
        assert title.reserved_len == 12 + 10 + 10

    def test_custom_margin(self):
        assert PaginationTitle.create("# T", margin=0).reserved_len == 13

    def test_token_is_unique(self):
        assert PaginationTitle.create("# T").token != PaginationTitle.create("# T").token

    def test_render_and_resolve(self):
        title = _fixed_title("## Notes")
        rendered = title.render(2)
        assert rendered == "## Notes (2/<TOTAL>)\n\n"
        assert title.resolve(rendered, 5) == "## Notes (2/5)\n\n"

