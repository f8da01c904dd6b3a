"""Signals used to abandon a markdown-aware split in favour of the fallback."""


class SplitAborted(Exception):
    """Markdown-aware splitting can't be done safely for this document."""


class UnsupportedConstructError(SplitAborted):
    """The document contains a construct the splitter doesn't handle (lists)."""


class BudgetExhaustedError(SplitAborted):
    """Wrapper, title and separator overhead leave no room for content."""
