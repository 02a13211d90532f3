"""
envsync: keep a real env file in sync with its template.

The public surface is the round-trip preserving document model:

    from envsync import EnvFile
    doc = EnvFile.parse(text)
"""

from .domain import CommentOnly, Declaration, Empty, EnvFile, ParseError, Row

__version__ = "0.1.0"

__all__ = ["EnvFile", "Declaration", "CommentOnly", "Empty", "Row", "ParseError", "__version__"]
