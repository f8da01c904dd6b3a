"""Fixed-length splitting used when markdown-aware splitting isn't safe."""

from __future__ import annotations

from loguru import logger

from mdchunk.markdown.cut import byte_len, cut_bytes


def simple_split(text: str, max_length: int, sep: str = "") -> list[str] | None:
    """Split *text* into chunks of at most *max_length* bytes.

    Every chunk but the last ends with *sep*. Returns None if *sep* leaves
    no room for content, or a character is wider than the room left.
    """
    if byte_len(text) <= max_length:
        return [text]

    sep_len = byte_len(sep)
    if max_length <= sep_len:
        logger.warning(f"Cannot split: max length {max_length} doesn't fit separator ({sep_len} bytes)")
        return None

    parts = cut_bytes(text, max_length - sep_len)
    if parts is None:
        logger.warning(f"Cannot split: a character is wider than {max_length - sep_len} bytes")
        return None

    return [part + sep for part in parts[:-1]] + parts[-1:]
