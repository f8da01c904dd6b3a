"""Configuration schema using Pydantic."""

from pydantic import BaseModel, Field, model_validator

from mdchunk.markdown.assemble import TITLE_MARGIN
from mdchunk.markdown.split import MAX_GITHUB_COMMENT_SIZE


class SplitConfig(BaseModel):
    """How comments are split before posting."""
    max_length: int = Field(default=MAX_GITHUB_COMMENT_SIZE, gt=0)  # bytes per chunk
    separator: str = ""  # appended to every chunk but the last by the fallback split
    title_margin: int = Field(default=TITLE_MARGIN, ge=0)  # extra bytes reserved for "(i/N)"
    warn_on_fallback: bool = True

    @model_validator(mode="after")
    def check_separator_fits(self) -> "SplitConfig":
        if self.max_length <= len(self.separator.encode("utf-8")):
            raise ValueError(
                f"max_length ({self.max_length}) must be larger than the separator"
            )
        return self

    @classmethod
    def github(cls, separator: str = "") -> "SplitConfig":
        return cls(max_length=MAX_GITHUB_COMMENT_SIZE, separator=separator)
