"""
mdchunk - split long markdown documents into size-limited chunks.
"""

__version__ = "0.1.0"

from mdchunk.config.schema import SplitConfig
from mdchunk.markdown.fallback import simple_split
from mdchunk.markdown.format import SplitResult, split_comment
from mdchunk.markdown.split import MAX_GITHUB_COMMENT_SIZE, markdown_split, split_github_comment

__all__ = [
    "MAX_GITHUB_COMMENT_SIZE",
    "SplitConfig",
    "SplitResult",
    "markdown_split",
    "simple_split",
    "split_comment",
    "split_github_comment",
]
