"""
Domain package for envsync.

This package contains the env file document model, its row types,
enums and the exception hierarchy used throughout the application.
"""

from .base_enums import QuoteStyle, RowKind
from .errors import ConfigurationError, EnvSyncException, OutputPathError, ParseError
from .rows import BaseRow, CommentOnly, Declaration, Empty, Row
from .env_file import EnvFile, parse_row
from .types import AsyncPromptFn, EnvMapping, PromptFn
from .requests import PromptRequest
from .responses import TemplateResult, UpdateResult

__all__ = [
    # Enums
    "QuoteStyle",
    "RowKind",

    # Errors
    "EnvSyncException",
    "ParseError",
    "OutputPathError",
    "ConfigurationError",

    # Rows
    "BaseRow",
    "Declaration",
    "CommentOnly",
    "Empty",
    "Row",

    # Document
    "EnvFile",
    "parse_row",

    # Requests / Responses
    "PromptRequest",
    "UpdateResult",
    "TemplateResult",

    # Types
    "EnvMapping",
    "PromptFn",
    "AsyncPromptFn",
]
