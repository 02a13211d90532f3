"""
Low-level syntax helpers for env files.

Everything here works on plain strings: splitting a document into lines,
validating keys, reading a value as written on disk and encoding a value
back into its on-disk form. The row models and the parser build on these.

On-disk value forms:
    KEY=bare value        # unquoted, ends at the first '#', trailing spaces dropped
    KEY='literal'         # single-quoted, no escapes
    KEY="escaped\\tvalue"  # double-quoted, backslash escapes decoded
"""

import re
from typing import List, Optional, Tuple

from ..domain.base_enums import QuoteStyle
from ..domain.errors import ParseError


KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

# Left-hand side of an assignment: indentation, optional export keyword, key, spacing
_HEAD_PATTERN = re.compile(r"(\s*(?:export\s+)?)(\S+)(\s*)\Z")

# One line and its terminator; the terminator is empty only at end of text
_LINE_PATTERN = re.compile(r"([^\n]*?)(\r\n|\n|\Z)")

# Whatever may follow a closing quote
_TRAILER_PATTERN = re.compile(r"\s*(#.*)?\Z")

_DECODE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

_ENCODE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def split_lines(text: str) -> List[Tuple[str, str]]:
    """
    Split text into (line, terminator) pairs.

    Terminators are kept per line (``\\n`` or ``\\r\\n``) so that joining
    ``line + terminator`` for every pair reproduces ``text`` exactly. The
    last line has an empty terminator when the text does not end with a
    newline; a text ending with a newline produces no extra empty line.
    """
    lines: List[Tuple[str, str]] = []
    for match in _LINE_PATTERN.finditer(text):
        # The only match starting at the end of text is the empty one after the last line
        if match.start() == len(text):
            break
        lines.append((match.group(1), match.group(2)))
    return lines


def detect_newline(text: str) -> str:
    """Return the first line terminator used in text, ``\\n`` if there is none."""
    index = text.find("\n")
    if index > 0 and text[index - 1] == "\r":
        return "\r\n"
    return "\n"


def is_valid_key(name: str) -> bool:
    """Check that name is a non-empty identifier (letters, digits, underscore, no leading digit)."""
    return bool(KEY_PATTERN.match(name))


def split_head(head: str) -> Tuple[str, str, str]:
    """
    Split the text left of ``=`` into (prefix, key, spacing).

    Raises:
        ParseError: If the key is empty or not an identifier
    """
    match = _HEAD_PATTERN.match(head)
    if match is None:
        if not head.strip():
            raise ParseError("empty key")
        raise ParseError(f"invalid key {head.strip()!r}")

    prefix, name, spacing = match.groups()
    if not is_valid_key(name):
        raise ParseError(f"invalid key {name!r}")
    return prefix, name, spacing


def read_value(text: str) -> Tuple[str, str, QuoteStyle, str]:
    """
    Read the value part of a declaration (everything after ``=`` and its spacing).

    Args:
        text: Right-hand side with leading whitespace already removed

    Returns:
        Tuple of (decoded value, raw value as written, quote style, trailer)
        where ``raw + trailer == text``.

    Raises:
        ParseError: On unterminated quotes or garbage after a closing quote
    """
    if text.startswith('"'):
        value, end = _read_double_quoted(text)
        quote = QuoteStyle.DOUBLE
    elif text.startswith("'"):
        end = text.find("'", 1)
        if end < 0:
            raise ParseError("unterminated single-quoted value")
        value = text[1:end]
        end += 1
        quote = QuoteStyle.SINGLE
    else:
        comment_at = text.find("#")
        body = text if comment_at < 0 else text[:comment_at]
        value = body.rstrip()
        return value, value, QuoteStyle.NONE, text[len(value):]

    raw, trailer = text[:end], text[end:]
    if not _TRAILER_PATTERN.match(trailer):
        raise ParseError(f"unexpected characters after quoted value: {trailer.strip()!r}")
    return value, raw, quote, trailer


def _read_double_quoted(text: str) -> Tuple[str, int]:
    """Decode a double-quoted value; returns the value and the index after the closing quote."""
    chars: List[str] = []
    pos = 1
    while pos < len(text):
        char = text[pos]
        if char == '"':
            return "".join(chars), pos + 1
        if char == "\\" and pos + 1 < len(text):
            escaped = text[pos + 1]
            chars.append(_DECODE_ESCAPES.get(escaped, "\\" + escaped))
            pos += 2
            continue
        chars.append(char)
        pos += 1
    raise ParseError("unterminated double-quoted value")


def can_write_bare(value: str) -> bool:
    """Check whether value survives being written without quotes."""
    if value != value.strip():
        return False
    if "#" in value or "\n" in value or "\r" in value:
        return False
    return not value.startswith(('"', "'"))


def encode_value(value: str, preferred: QuoteStyle = QuoteStyle.NONE) -> Tuple[str, QuoteStyle]:
    """
    Encode a value for writing, honouring the preferred quote style when possible.

    Falls back to double quotes, which can represent any string.

    Returns:
        Tuple of (raw on-disk text, quote style actually used)
    """
    if preferred == QuoteStyle.NONE and can_write_bare(value):
        return value, QuoteStyle.NONE
    if preferred == QuoteStyle.SINGLE and not any(c in value for c in "'\n\r"):
        return f"'{value}'", QuoteStyle.SINGLE
    escaped = "".join(_ENCODE_ESCAPES.get(c, c) for c in value)
    return f'"{escaped}"', QuoteStyle.DOUBLE


def comment_text(line: str) -> Optional[str]:
    """
    Return the text of a comment-only line, or None if line is not a comment.

    The ``#`` marker and one following space are removed.
    """
    stripped = line.lstrip()
    if not stripped.startswith("#"):
        return None
    text = stripped[1:]
    if text.startswith(" "):
        text = text[1:]
    return text
