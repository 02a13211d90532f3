"""
Structured, round-trip preserving env file document.

An EnvFile is an ordered list of rows (declarations, comment-only lines and
empty lines). Parsing and rendering an untouched document reproduces the
input text byte for byte; rendering after a change rewrites only the
declarations whose value changed.

Lifecycle:
    doc = EnvFile.parse(text)            # or EnvFile.from_path(path)
    values = doc.env()                   # independent snapshot
    values["API_KEY"] = "secret"
    text = doc.apply(values, include_missing=True).render()

Working mapping:
    apply_assign() merges another mapping into the document's working
    mapping without touching the rows. env() keeps describing the rows;
    working_env() and apply() see the merged values.
"""

from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import ParseError
from .rows import CommentOnly, Declaration, Empty, Row
from .types import EnvMapping
from ..utils.env_syntax import comment_text, detect_newline, read_value, split_head, split_lines
from ..utils.logging import get_module_logger


logger = get_module_logger()


def parse_row(line: str, newline: str = "\n") -> Row:
    """
    Classify and parse a single line (without its terminator).

    Raises:
        ParseError: If the line is a malformed declaration (no location attached)
    """
    if not line.strip():
        return Empty(raw=line, newline=newline)

    text = comment_text(line)
    if text is not None:
        return CommentOnly(text=text, raw=line, newline=newline)

    head, sep, rest = line.partition("=")
    if not sep:
        raise ParseError("expected KEY=VALUE, comment or blank line")

    prefix, name, spacing = split_head(head)
    stripped = rest.lstrip(" \t")
    value, raw_value, quote, trailer = read_value(stripped)

    return Declaration(
        name=name,
        value=value,
        quote=quote,
        prefix=prefix,
        separator=spacing + "=" + rest[:len(rest) - len(stripped)],
        raw_value=raw_value,
        trailer=trailer,
        newline=newline,
    )


class EnvFile:
    """
    Env file document: ordered rows plus a working mapping.

    Usage:
        doc = EnvFile.parse("# comment\\nKEY=value\\n")
        doc.env()        # {"KEY": "value"}
        doc.render()     # "# comment\\nKEY=value\\n"
    """

    def __init__(
        self,
        rows: Optional[List[Row]] = None,
        newline: str = "\n",
        assigned: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize a document.

        Args:
            rows: Rows in document order
            newline: Terminator used for rows appended by apply()
            assigned: Initial working mapping (see apply_assign)
        """
        self.rows: List[Row] = list(rows or [])
        self.newline = newline
        self._assigned: Dict[str, str] = dict(assigned or {})

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "EnvFile":
        """
        Parse env file text.

        Args:
            text: Full file content

        Returns:
            Parsed document

        Raises:
            ParseError: On the first malformed line; no partial document is returned
        """
        rows: List[Row] = []
        for number, (line, newline) in enumerate(split_lines(text), start=1):
            try:
                rows.append(parse_row(line, newline))
            except ParseError as e:
                raise ParseError(e.reason, line_number=number, line=line) from None

        document = cls(rows, newline=detect_newline(text))
        logger.debug(
            "Env file parsed",
            rows=len(rows),
            declarations=sum(1 for row in rows if isinstance(row, Declaration)),
        )
        return document

    @classmethod
    def from_path(cls, path: Union[str, Path], encoding: str = "utf-8") -> "EnvFile":
        """
        Read and parse an env file.

        OSError (missing file, permission denied, directory) propagates unchanged.

        Raises:
            ParseError: If the content is not valid in the given encoding or is malformed
        """
        path = Path(path)
        # Decoding the bytes directly keeps \r\n terminators intact
        raw = path.read_bytes()
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise ParseError(
                f"{path}: not valid {encoding} at byte {e.start}",
                details={"path": str(path), "encoding": encoding, "offset": e.start},
            ) from e
        document = cls.parse(text)
        logger.debug("Env file loaded", path=str(path))
        return document

    def copy(self) -> "EnvFile":
        """Return an independent document with the same rows and working mapping."""
        # Rows are frozen models, sharing them is safe
        return EnvFile(self.rows, newline=self.newline, assigned=self._assigned)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def stream(self) -> Iterator[Row]:
        """Iterate over the rows in document order; every call starts over."""
        return iter(list(self.rows))

    def __iter__(self) -> Iterator[Row]:
        return self.stream()

    def declarations(self) -> Iterator[Declaration]:
        for row in self.rows:
            if isinstance(row, Declaration):
                yield row

    def env(self) -> EnvMapping:
        """
        Build the key/value view of the rows.

        The last declaration of a key wins; comment and empty rows are
        skipped. The working mapping is not included (see working_env).

        Returns:
            New dict the caller may mutate freely
        """
        values: EnvMapping = {}
        for declaration in self.declarations():
            values[declaration.name] = declaration.value
        return values

    def working_env(self) -> EnvMapping:
        """Return env() overlaid with the working mapping filled by apply_assign()."""
        values = self.env()
        values.update(self._assigned)
        return values

    # -------------------------------------------------------------------------
    # Merge and render
    # -------------------------------------------------------------------------

    def apply_assign(self, source: Mapping[str, str], overwrite: bool) -> None:
        """
        Merge source into the working mapping.

        Args:
            source: Values to merge
            overwrite: Replace values of keys that are already present

        Keys missing from this document are always added; keys absent from
        source are never removed. Rows are left untouched.
        """
        current = self.working_env()
        added = 0
        replaced = 0
        for key, value in source.items():
            if key not in current:
                added += 1
            elif overwrite:
                replaced += 1
            else:
                continue
            self._assigned[key] = value

        logger.debug("Mapping merged", added=added, replaced=replaced, overwrite=overwrite)

    def apply(self, final_values: Mapping[str, str], include_missing: bool) -> "EnvFile":
        """
        Render a new document with values substituted.

        Args:
            final_values: Values to write; they take precedence over the working mapping
            include_missing: Append keys that have no declaration in this document

        Returns:
            New document; this one is not modified
        """
        effective: EnvMapping = dict(self._assigned)
        effective.update(final_values)

        original = self.env()

        # Only the last declaration of a key defines its value, so only that one is rewritten
        last_declared: Dict[str, Tuple[int, Declaration]] = {}
        for index, row in enumerate(self.rows):
            if isinstance(row, Declaration):
                last_declared[row.name] = (index, row)

        rows: List[Row] = list(self.rows)
        for name, (index, declaration) in last_declared.items():
            if name in effective and effective[name] != original[name]:
                rows[index] = declaration.with_value(effective[name])

        appended = 0
        if include_missing:
            for name, value in effective.items():
                if name in original:
                    continue
                if rows and not rows[-1].newline:
                    rows[-1] = rows[-1].model_copy(update={"newline": self.newline})
                rows.append(Declaration.create(name, value, newline=self.newline))
                appended += 1

        logger.debug(
            "Values applied",
            keys=len(effective),
            appended=appended,
            omitted=0 if include_missing else len(set(effective) - set(original)),
        )
        return EnvFile(rows, newline=self.newline)

    def render(self) -> str:
        """Serialize the document to text."""
        return "".join(row.render() for row in self.rows)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"EnvFile(rows={len(self.rows)}, keys={len(self.env())})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnvFile):
            return NotImplemented
        return self.rows == other.rows and self._assigned == other._assigned
