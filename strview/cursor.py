from __future__ import annotations

from logging import debug
from typing import Iterator

from attrs import define, field

from .stringview import INVALID, StringView, wrap
from .types import Eol, Source


def _as_view(value: StringView | Source | None) -> StringView:
    return value if isinstance(value, StringView) else wrap(value)


@define
class Cursor:
    """
    The consuming side of the split operations.

    A cursor holds the view still to be parsed and, for line splitting, the
    pending half of a CRLF/LFCR pair. Each split hands back the piece it took
    and moves `view` on to what is left, so a parsing loop only ever moves
    forward:

        cursor = Cursor("2023/07/03")
        year = cursor.split_first_delimiter("/")

    A delimiter split that finds nothing returns the rest of the view and
    leaves the cursor exhausted (its view invalid). A line split that finds no
    terminator returns an invalid view and leaves the cursor where it was.
    """
    view: StringView = field(default=INVALID, converter=_as_view)
    eol: Eol = Eol.NONE

    @property
    def exhausted(self) -> bool:
        return not self.view.is_valid()

    def feed(self, view: StringView | Source | None) -> None:
        """Moves on to a new view, keeping any pending line terminator."""
        self.view = view

    def _advance(self, piece: StringView, rest: StringView, how: str) -> StringView:
        self.view = rest
        if self.exhausted:
            debug(f"Cursor exhausted by {how} after {len(piece)} characters")
        return piece

    def split_first_delimiter(self, delimiters: StringView | Source | None) -> StringView:
        return self._advance(*self.view.split_first_delimiter(delimiters), "split_first_delimiter")

    def split_first_delimiter_nocase(self, delimiters: StringView | Source | None) -> StringView:
        return self._advance(*self.view.split_first_delimiter(delimiters, nocase=True),
                             "split_first_delimiter_nocase")

    def split_last_delimiter(self, delimiters: StringView | Source | None) -> StringView:
        return self._advance(*self.view.split_last_delimiter(delimiters), "split_last_delimiter")

    def split_last_delimiter_nocase(self, delimiters: StringView | Source | None) -> StringView:
        return self._advance(*self.view.split_last_delimiter(delimiters, nocase=True),
                             "split_last_delimiter_nocase")

    def split_index(self, index: int) -> StringView:
        piece, self.view = self.view.split_index(index)
        return piece

    def split_left(self, pos: StringView) -> StringView:
        piece, self.view = self.view.split_left(pos)
        if not piece.is_valid():
            debug(f"split_left: {pos!r} is not inside {self.view!r}")
        return piece

    def split_right(self, pos: StringView) -> StringView:
        piece, self.view = self.view.split_right(pos)
        if not piece.is_valid():
            debug(f"split_right: {pos!r} is not inside {self.view!r}")
        return piece

    def pop_first_char(self) -> str | int | None:
        """Takes the first character off the view. None if there isn't one."""
        if not len(self.view):
            return None
        piece, self.view = self.view.split_index(1)
        return piece[0]

    def split_line(self) -> StringView:
        line, self.view, self.eol = self.view.split_line(self.eol)
        if not line.is_valid():
            debug(f"No line terminator in the remaining {len(self.view)} characters")
        return line

    def tokens(self, delimiters: StringView | Source | None, nocase: bool = False) -> Iterator[StringView]:
        """Yields every delimited piece, the last undelimited one included, until exhausted."""
        split = self.split_first_delimiter_nocase if nocase else self.split_first_delimiter
        while not self.exhausted:
            yield split(delimiters)

    def lines(self) -> Iterator[StringView]:
        """Yields every complete line. An unterminated tail is left in `view`."""
        while (line := self.split_line()).is_valid():
            yield line
