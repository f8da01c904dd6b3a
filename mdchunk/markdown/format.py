"""Unified entry point for config-driven comment splitting."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from mdchunk.config.schema import SplitConfig
from mdchunk.markdown.split import markdown_split


@dataclass
class SplitResult:
    chunks: list[str] = field(default_factory=list)
    markdown_aware: bool = True


def split_comment(md: str, config: SplitConfig | None = None) -> SplitResult:
    """Split a markdown comment into chunks that each fit *config.max_length*.

    Falls back to a plain fixed-size split (``markdown_aware=False``) when
    the markdown can't be split safely, e.g. because it contains lists.
    """
    cfg = config or SplitConfig()
    chunks, ok = markdown_split(
        md, cfg.max_length, cfg.separator, title_margin=cfg.title_margin,
    )
    if chunks is None:
        raise ValueError(f"Cannot split into chunks of {cfg.max_length} bytes")

    if not ok and cfg.warn_on_fallback:
        logger.warning(
            f"Markdown split not possible, used plain split into {len(chunks)} chunks"
        )
    return SplitResult(chunks=chunks, markdown_aware=ok)
