"""Tests for Cursor, the in-place splitting state."""

import logging

import pytest

from strview.cursor import Cursor
from strview.stringview import INVALID, wrap
from strview.types import Eol


class TestDelimiterSplitting:
    """Tests for consuming a cursor by delimiter."""

    def test_date(self, date_view):
        cursor = Cursor(date_view)

        assert cursor.split_first_delimiter("/") == "2023"
        assert cursor.split_first_delimiter("/") == "07"
        assert cursor.view == "03"
        assert not cursor.exhausted

        assert cursor.split_first_delimiter("/") == "03"
        assert cursor.exhausted
        assert not cursor.view.is_valid()

    def test_date_backwards(self, date_view):
        cursor = Cursor(date_view)

        assert cursor.split_last_delimiter("/") == "03"
        assert cursor.split_last_delimiter("/") == "07"
        assert cursor.split_last_delimiter("/") == "2023"
        assert cursor.exhausted

    def test_nocase(self):
        cursor = Cursor("oneXtwoxthree")

        assert cursor.split_first_delimiter_nocase("x") == "one"
        assert cursor.split_last_delimiter_nocase("X") == "three"
        assert cursor.view == "two"

    def test_exhausted_cursor_keeps_returning_invalid(self):
        cursor = Cursor("abc")
        cursor.split_first_delimiter("/")

        assert not cursor.split_first_delimiter("/").is_valid()
        assert cursor.exhausted

    @pytest.mark.parametrize("text", ["", "a", "/", "a/b", "//", "/a/", "2023/07/03"])
    def test_tokens_reassemble(self, text):
        pieces = list(Cursor(text).tokens("/"))

        assert "/".join(str(piece) for piece in pieces) == text
        assert [str(piece) for piece in pieces] == text.split("/")

    def test_tokens_with_disjoint_delimiters(self):
        cursor = Cursor("no delimiters here")

        assert list(cursor.tokens(";,")) == ["no delimiters here"]
        assert cursor.exhausted

    def test_tokens_nocase(self):
        assert list(Cursor("aXbxc").tokens("x", nocase=True)) == ["a", "b", "c"]

    def test_tokens_on_invalid(self):
        assert list(Cursor().tokens("/")) == []

    def test_parse_header(self):
        cursor = Cursor("Content-Type:  text/html ")

        name = cursor.split_first_delimiter(":")

        assert name == "Content-Type"
        assert cursor.view.trim() == "text/html"

    def test_logs_exhaustion(self, caplog):
        with caplog.at_level(logging.DEBUG):
            Cursor("abc").split_first_delimiter("/")

        assert "exhausted" in caplog.text


class TestIndexSplitting:
    """Tests for split_index and pop_first_char."""

    def test_split_index(self):
        cursor = Cursor("ABCDE........FGHIJ")

        assert cursor.split_index(5) == "ABCDE"
        assert cursor.split_index(-5) == "FGHIJ"
        assert cursor.view == "........"

    def test_split_index_everything(self):
        cursor = Cursor("abc")

        assert cursor.split_index(100) == "abc"
        assert cursor.view.is_valid()
        assert len(cursor.view) == 0

    def test_pop_first_char(self):
        cursor = Cursor("ab")

        assert cursor.pop_first_char() == "a"
        assert cursor.pop_first_char() == "b"
        assert cursor.pop_first_char() is None
        assert cursor.view.is_valid()

    def test_pop_first_char_bytes(self):
        assert Cursor(b"ab").pop_first_char() == ord("a")

    def test_pop_first_char_invalid(self):
        cursor = Cursor()

        assert cursor.pop_first_char() is None
        assert cursor.view is INVALID


class TestSplitAroundMatch:
    """Tests for split_left and split_right on a cursor."""

    def test_split_right(self, names_view):
        cursor = Cursor(names_view)

        assert cursor.split_right(cursor.view.find_first("name: ")) == "FRED, Second name: SMITH"
        assert cursor.view == "First "

    def test_split_left(self):
        cursor = Cursor("Activity cancelled 2023-07-01")

        assert cursor.split_left(cursor.view.find_first("cancelled")) == "Activity "
        assert cursor.view == "cancelled 2023-07-01"

    def test_foreign_position_leaves_cursor_alone(self, caplog):
        cursor = Cursor("abc")
        before = cursor.view

        with caplog.at_level(logging.DEBUG):
            piece = cursor.split_left(wrap("xyz").find_first("y"))

        assert not piece.is_valid()
        assert cursor.view is before
        assert "split_left" in caplog.text

    def test_find_then_split(self, names_view):
        cursor = Cursor(names_view)
        cursor.split_right(cursor.view.find_last("name: "))

        assert cursor.view == "First name: FRED, Second "
        assert cursor.split_right(cursor.view.find_first("name: ")) == "FRED, Second "


class TestLineSplitting:
    """Tests for split_line, lines and feed."""

    def test_mixed_terminators(self, mixed_lines):
        cursor = Cursor(mixed_lines)

        assert cursor.split_line() == "line1"
        assert cursor.split_line() == "line2"
        assert not cursor.split_line().is_valid()
        assert cursor.view == "line3"
        assert cursor.eol is Eol.CR

    def test_lines(self):
        cursor = Cursor("a\nb\r\n\nc")

        assert list(cursor.lines()) == ["a", "b", ""]
        assert cursor.view == "c"

    def test_lfcr(self):
        cursor = Cursor("a\n\rb\n")

        assert list(cursor.lines()) == ["a", "b"]
        assert cursor.view.is_valid()
        assert len(cursor.view) == 0

    def test_http_head(self):
        cursor = Cursor(b"GET / HTTP/1.1\r\nHost: example.com\r\n\r\nbody")

        assert list(cursor.lines()) == [b"GET / HTTP/1.1", b"Host: example.com", b""]
        assert cursor.view == b"body"

    def test_no_lines(self):
        assert list(Cursor().lines()) == []
        assert list(Cursor("").lines()) == []

    def test_crlf_split_across_buffers(self):
        cursor = Cursor("first\r")

        assert cursor.split_line() == "first"
        assert cursor.eol is Eol.CR
        assert len(cursor.view) == 0

        cursor.feed("\nsecond\n")

        assert cursor.split_line() == "second"
        assert cursor.eol is Eol.LF

    def test_without_pending_state_the_lf_is_a_blank_line(self):
        assert Cursor("\nsecond\n").split_line() == ""

    def test_incomplete_line_keeps_pending_state(self, caplog):
        cursor = Cursor("x\r")
        cursor.split_line()

        cursor.feed("\nabc")
        with caplog.at_level(logging.DEBUG):
            assert not cursor.split_line().is_valid()

        assert cursor.view == "\nabc"
        assert cursor.eol is Eol.CR
        assert "No line terminator" in caplog.text

        cursor.feed("\nabc\n")
        assert cursor.split_line() == "abc"

    def test_feed_wraps_plain_text(self):
        cursor = Cursor()
        cursor.feed("abc")

        assert cursor.view == "abc"
        assert cursor.view.is_valid()
        assert Cursor(None).exhausted
