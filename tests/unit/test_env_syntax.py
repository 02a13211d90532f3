"""Unit tests for env_syntax helpers."""

import pytest

from envsync.domain.base_enums import QuoteStyle
from envsync.domain.errors import ParseError
from envsync.utils.env_syntax import (
    can_write_bare,
    comment_text,
    detect_newline,
    encode_value,
    is_valid_key,
    read_value,
    split_head,
    split_lines,
)


class TestSplitLines:
    """Tests for split_lines function."""

    def test_empty_text(self):
        """Empty text has no lines."""
        assert split_lines("") == []

    def test_unterminated_last_line(self):
        """Last line without newline gets an empty terminator."""
        assert split_lines("A=1\nB=2") == [("A=1", "\n"), ("B=2", "")]

    def test_trailing_newline_adds_no_extra_line(self):
        """A final newline does not produce a phantom empty line."""
        assert split_lines("A=1\n") == [("A=1", "\n")]

    def test_crlf_and_blank_lines(self):
        """CRLF terminators are kept per line."""
        assert split_lines("A=1\r\n\nB=2\r\n") == [("A=1", "\r\n"), ("", "\n"), ("B=2", "\r\n")]

    def test_blank_lines_only(self):
        """Every newline closes its own empty line, with no phantom line at the end."""
        assert split_lines("\n\r\n") == [("", "\n"), ("", "\r\n")]

    def test_join_reproduces_text(self):
        """Joining lines and terminators gives the original text back."""
        text = "# c\r\n\n  \nA=1\nB='x'"
        assert "".join(line + end for line, end in split_lines(text)) == text


class TestDetectNewline:
    """Tests for detect_newline function."""

    def test_lf(self):
        assert detect_newline("A=1\nB=2\n") == "\n"

    def test_crlf(self):
        assert detect_newline("A=1\r\nB=2\r\n") == "\r\n"

    def test_no_newline_defaults_to_lf(self):
        assert detect_newline("A=1") == "\n"


class TestKeys:
    """Tests for key validation and assignment heads."""

    @pytest.mark.parametrize("name", ["KEY", "_private", "key_2", "A"])
    def test_valid_keys(self, name):
        assert is_valid_key(name)

    @pytest.mark.parametrize("name", ["", "1BAD", "MY-KEY", "MY KEY", "KEY.NAME"])
    def test_invalid_keys(self, name):
        assert not is_valid_key(name)

    def test_split_head_plain(self):
        """Indentation and spacing around the key are kept."""
        assert split_head("  KEY ") == ("  ", "KEY", " ")

    def test_split_head_export(self):
        """The export keyword becomes part of the prefix."""
        assert split_head("export  KEY") == ("export  ", "KEY", "")

    def test_split_head_key_named_export(self):
        """A bare 'export' is a key, not a keyword."""
        assert split_head("export") == ("", "export", "")

    def test_split_head_digit_key_fails(self):
        with pytest.raises(ParseError):
            split_head("1BAD")

    def test_split_head_empty_key_fails(self):
        with pytest.raises(ParseError, match="empty key"):
            split_head("  ")

    def test_split_head_key_with_space_fails(self):
        with pytest.raises(ParseError, match="invalid key"):
            split_head("MY KEY")


class TestReadValue:
    """Tests for read_value function."""

    def test_empty_value(self):
        assert read_value("") == ("", "", QuoteStyle.NONE, "")

    def test_bare_value(self):
        assert read_value("hello") == ("hello", "hello", QuoteStyle.NONE, "")

    def test_bare_value_with_inner_space(self):
        assert read_value("hello world") == ("hello world", "hello world", QuoteStyle.NONE, "")

    def test_bare_value_with_inline_comment(self):
        """Whitespace before the comment belongs to the trailer."""
        assert read_value("abc  # note") == ("abc", "abc", QuoteStyle.NONE, "  # note")

    def test_bare_value_ends_at_hash(self):
        assert read_value("abc#def") == ("abc", "abc", QuoteStyle.NONE, "#def")

    def test_double_quoted_keeps_hash(self):
        """A '#' inside double quotes is part of the value."""
        text = '"quoted value with # not a comment"'
        assert read_value(text) == ("quoted value with # not a comment", text, QuoteStyle.DOUBLE, "")

    def test_double_quoted_escapes(self):
        value, raw, quote, trailer = read_value(r'"a\nb\t\"c\" \\" # c')
        assert value == 'a\nb\t"c" \\'
        assert raw == r'"a\nb\t\"c\" \\"'
        assert quote == QuoteStyle.DOUBLE
        assert trailer == " # c"

    def test_unknown_escape_kept_literally(self):
        assert read_value(r'"a\qb"')[0] == r"a\qb"

    def test_single_quoted_is_literal(self):
        assert read_value(r"'a\nb'") == (r"a\nb", r"'a\nb'", QuoteStyle.SINGLE, "")

    def test_unterminated_double_quote(self):
        with pytest.raises(ParseError, match="unterminated double-quoted"):
            read_value('"unterminated')

    def test_escaped_closing_quote_is_unterminated(self):
        with pytest.raises(ParseError):
            read_value('"abc\\"')

    def test_unterminated_single_quote(self):
        with pytest.raises(ParseError, match="unterminated single-quoted"):
            read_value("'abc")

    def test_garbage_after_closing_quote(self):
        with pytest.raises(ParseError, match="unexpected characters"):
            read_value('"abc" tail')


class TestEncodeValue:
    """Tests for encode_value and can_write_bare."""

    def test_plain_value_stays_bare(self):
        assert encode_value("plain") == ("plain", QuoteStyle.NONE)

    def test_empty_value_stays_bare(self):
        assert encode_value("") == ("", QuoteStyle.NONE)

    def test_inner_quotes_stay_bare(self):
        assert encode_value('say "hi"') == ('say "hi"', QuoteStyle.NONE)

    @pytest.mark.parametrize("value", [" lead", "trail ", "a#b", "'quoted", '"quoted', "two\nlines"])
    def test_unsafe_values_are_not_bare(self, value):
        assert not can_write_bare(value)

    def test_hash_falls_back_to_double_quotes(self):
        assert encode_value("a#b") == ('"a#b"', QuoteStyle.DOUBLE)

    def test_single_quote_preference_kept(self):
        assert encode_value("a b", QuoteStyle.SINGLE) == ("'a b'", QuoteStyle.SINGLE)

    def test_single_quote_in_value_forces_double(self):
        assert encode_value("it's", QuoteStyle.SINGLE) == ('"it\'s"', QuoteStyle.DOUBLE)

    def test_double_quote_escapes(self):
        raw, quote = encode_value('line1\nsay "hi" \\', QuoteStyle.DOUBLE)
        assert raw == r'"line1\nsay \"hi\" \\"'
        assert quote == QuoteStyle.DOUBLE

    def test_encoded_value_reads_back(self):
        """Double-quoted encoding is decoded to the same value."""
        value = 'tab\there "q" back\\slash #hash'
        raw, _ = encode_value(value, QuoteStyle.DOUBLE)
        assert read_value(raw)[0] == value


class TestCommentText:
    """Tests for comment_text function."""

    def test_strips_marker_and_one_space(self):
        assert comment_text("# hello") == "hello"

    def test_leading_indentation(self):
        assert comment_text("   # hello") == "hello"

    def test_no_space_after_marker(self):
        assert comment_text("#hello") == "hello"

    def test_only_one_space_removed(self):
        assert comment_text("#   indented") == "  indented"

    def test_not_a_comment(self):
        assert comment_text("A=1 # c") is None
