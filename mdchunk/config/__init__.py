"""Configuration module for mdchunk."""

from mdchunk.config.schema import SplitConfig

__all__ = ["SplitConfig"]
