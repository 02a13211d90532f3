from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict, Field
from .base_enums import QuoteStyle, RowKind
from ..utils.env_syntax import encode_value
from typing import Optional, Union


class BaseRow(BaseModel, ABC):
    """Base class for the rows an env file is decomposed into."""

    model_config = ConfigDict(frozen=True)

    kind : RowKind = Field(..., description="Type of the row")
    newline : str = Field(default="\n", description="Line terminator; empty for an unterminated last line")

    @abstractmethod
    def render_line(self) -> str:
        """Return the line text without its terminator."""

    def render(self) -> str:
        """Return the line text followed by its terminator."""
        return self.render_line() + self.newline


class Declaration(BaseRow):
    """
    A single ``KEY=value`` assignment.

    Besides the decoded value, the row keeps every piece of the original
    line so that ``prefix + name + separator + raw_value + trailer`` is the
    line exactly as it was read.
    """

    kind : RowKind = Field(default=RowKind.DECLARATION, frozen=True, description="Should be 'declaration'")
    name : str = Field(..., description="Key of the declaration")
    value : str = Field(default="", description="Decoded value")
    quote : QuoteStyle = Field(default=QuoteStyle.NONE, description="Quote style the value is written in")
    prefix : str = Field(default="", description="Indentation and optional 'export ' keyword before the key")
    separator : str = Field(default="=", description="The '=' with any surrounding whitespace")
    raw_value : str = Field(default="", description="Value exactly as written, quotes and escapes included")
    trailer : str = Field(default="", description="Whitespace and inline comment after the value")

    @classmethod
    def create(cls, name: str, value: str, newline: str = "\n") -> "Declaration":
        """Build a declaration with the default rendering (bare when possible, no comment)."""
        raw_value, quote = encode_value(value)
        return cls(name=name, value=value, quote=quote, raw_value=raw_value, newline=newline)

    @property
    def exported(self) -> bool:
        return self.prefix.strip() == "export"

    @property
    def comment(self) -> Optional[str]:
        """Inline comment text without the '#' marker, if any."""
        stripped = self.trailer.strip()
        if not stripped:
            return None
        return stripped[1:].strip()

    def with_value(self, value: str) -> "Declaration":
        """
        Return this declaration carrying a new value.

        The same object is returned when the value is unchanged, so the
        original formatting survives untouched. Otherwise the value is
        re-encoded in the current quote style when possible; prefix,
        separator, trailer and terminator are kept.
        """
        if value == self.value:
            return self
        raw_value, quote = encode_value(value, self.quote)
        return self.model_copy(update={
            "value": value,
            "quote": quote,
            "raw_value": raw_value,
        })

    def render_line(self) -> str:
        return f"{self.prefix}{self.name}{self.separator}{self.raw_value}{self.trailer}"


class CommentOnly(BaseRow):
    """A line holding nothing but a comment."""

    kind : RowKind = Field(default=RowKind.COMMENT_ONLY, frozen=True, description="Should be 'comment_only'")
    text : str = Field(..., description="Comment text without the '#' marker and its following space")
    raw : Optional[str] = Field(default=None, description="Line as read; derived from text when omitted")

    def render_line(self) -> str:
        if self.raw is not None:
            return self.raw
        return f"# {self.text}" if self.text else "#"


class Empty(BaseRow):
    """A blank or whitespace-only line."""

    kind : RowKind = Field(default=RowKind.EMPTY, frozen=True, description="Should be 'empty'")
    raw : str = Field(default="", description="Whitespace the line contained")

    def render_line(self) -> str:
        return self.raw


Row = Union[Declaration, CommentOnly, Empty]
