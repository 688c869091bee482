"""Unit tests for the .properties parser."""
import io

import pytest
from loguru import logger

from propfile.parser import load_properties, parse_properties


@pytest.fixture
def warnings():
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="WARNING")
    yield records
    logger.remove(sink_id)


class TestSeparators:
    """Tests for key/value splitting."""

    def test_equals_colon_and_whitespace(self):
        # Act
        result = parse_properties("a=1\nb:2\nc 3\n")

        # Assert
        assert result == {"a": "1", "b": "2", "c": "3"}

    def test_whitespace_around_separator_is_trimmed(self):
        result = parse_properties("   key   =   value   \n")

        assert result == {"key": "value"}

    def test_only_first_separator_splits(self):
        result = parse_properties("url=http://host:80/?a=b\n")

        assert result == {"url": "http://host:80/?a=b"}

    def test_key_without_value(self):
        result = parse_properties("flag\nother=\n")

        assert result == {"flag": "", "other": ""}

    def test_escaped_separator_in_key(self):
        result = parse_properties("my\\=key=v\nsp\\ ace=w\n")

        assert result == {"my=key": "v", "sp ace": "w"}


class TestCommentsAndLines:
    """Tests for comments, blank lines and continuations."""

    def test_comments_and_blank_lines_are_ignored(self):
        text = "# comment\n! also comment\n   # indented comment\n\n   \na=1\n"

        result = parse_properties(text)

        assert result == {"a": "1"}

    def test_line_continuation_drops_leading_whitespace(self):
        text = "list = one, \\\n       two, \\\n       three\n"

        result = parse_properties(text)

        assert result == {"list": "one, two, three"}

    def test_even_backslashes_do_not_continue(self):
        text = "path=C:\\\\\nnext=1\n"

        result = parse_properties(text)

        assert result == {"path": "C:\\", "next": "1"}

    def test_continued_line_is_never_a_comment(self):
        result = parse_properties("a=1\\\n#2\n")

        assert result == {"a": "1#2"}

    def test_crlf_and_cr_line_endings(self):
        result = parse_properties("a=1\r\nb=2\rc=3")

        assert result == {"a": "1", "b": "2", "c": "3"}

    def test_dangling_continuation_at_end_of_text(self):
        result = parse_properties("a=1\\")

        assert result == {"a": "1"}

    def test_empty_text(self):
        assert parse_properties("") == {}


class TestValues:
    """Tests for escapes and duplicate keys."""

    def test_escape_sequences(self):
        text = "tab=a\\tb\nnl=a\\nb\nuni=caf\\u00e9\nplain=\\q\n"

        result = parse_properties(text)

        assert result == {"tab": "a\tb", "nl": "a\nb", "uni": "café", "plain": "q"}

    def test_escaped_trailing_space_is_kept(self):
        result = parse_properties("sp=x\\ \n")

        assert result == {"sp": "x "}

    def test_unicode_text_is_kept(self):
        result = parse_properties("greeting=héllo wörld\n")

        assert result["greeting"] == "héllo wörld"

    def test_last_duplicate_wins(self):
        result = parse_properties("a=1\nb=2\na=3\n")

        assert result == {"a": "3", "b": "2"}

    def test_malformed_unicode_escape_skips_only_that_line(self, warnings):
        text = "good=1\nbad=\\u12\nalso.good=2\n"

        result = parse_properties(text, source="test.properties")

        assert result == {"good": "1", "also.good": "2"}
        assert len(warnings) == 1
        assert "test.properties:2" in warnings[0]["message"]

    def test_load_from_stream(self):
        stream = io.StringIO("a = 1\n")

        assert load_properties(stream) == {"a": "1"}
