from enum import Enum


class RowKind(str, Enum):
    DECLARATION = "declaration"
    COMMENT_ONLY = "comment_only"
    EMPTY = "empty"


class QuoteStyle(str, Enum):
    """How a declaration value is written on disk."""
    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"
