# Grew out of https://gist.github.com/saxbophone/e988cef9f351863f4312f2eef41a3a83

from __future__ import annotations

from functools import total_ordering
from typing import Any, Iterator

from attrs import Factory, field, frozen

from . import constants, errors, utils
from .types import Eol, Source


@total_ordering
@frozen(eq=False, repr=False)
class StringView:
    """
    StringView implementation using minimal copying with maximum use of
    reference semantics. A view is just the source object, an offset into it
    and a length; creating a sub-view, trimming or splitting reuses the same
    source object rather than a copy.
    A view without a source is *invalid*. It is how searches and splits say
    "not found", and it's distinct from a valid view of length zero, although
    every operation treats it as having length zero.
    A brand new string object is only created if the view is materialized,
    either explicitly or by casting it to str or bytes.
    """
    source: Source | None
    start: int = 0
    size: int = field(default=Factory(
        lambda self: len(self.source) - self.start if self.source is not None else 0,
        takes_self=True,
    ))

    def __attrs_post_init__(self):
        if self.source is None:
            return
        utils.check_source(self.source)
        if self.start < 0 or self.size < 0 or self.start + self.size > len(self.source):
            raise errors.ViewBoundsError(self.start, self.size, len(self.source))

    def is_valid(self) -> bool:
        return self.source is not None

    @property
    def end(self) -> int:
        return self.start + len(self)

    def _view(self, start: int, size: int) -> StringView:
        if self.source is None:
            return INVALID
        return StringView(self.source, start, size)

    def _chunk(self) -> Source:
        return self.source[self.start:self.end]

    #region Comparison

    def equals(self, other: StringView | Source | None) -> bool:
        """Same length and same contents. Invalid views count as empty here."""
        other = _coerce(other)
        if len(self) != len(other):
            return False
        if not len(self) or (self.source is other.source and self.start == other.start):
            return True
        if utils.is_text(self.source) != utils.is_text(other.source):
            return False
        return self.source.startswith(other._chunk(), self.start, self.end)

    def equals_nocase(self, other: StringView | Source | None) -> bool:
        other = _coerce(other)
        if len(self) != len(other):
            return False
        if not len(self) or (self.source is other.source and self.start == other.start):
            return True
        if utils.is_text(self.source) != utils.is_text(other.source):
            return False
        return utils.fold(self._chunk()) == utils.fold(other._chunk())

    def starts_with(self, prefix: StringView | Source | None) -> bool:
        prefix = _coerce(prefix)
        if not prefix.is_valid():
            return not self.is_valid()
        if len(self) < len(prefix):
            return False
        if not len(prefix) or (self.source is prefix.source and self.start == prefix.start):
            return True
        utils.check_compatible(self.source, prefix.source)
        return self.source.startswith(prefix._chunk(), self.start, self.end)

    def starts_with_nocase(self, prefix: StringView | Source | None) -> bool:
        prefix = _coerce(prefix)
        if not prefix.is_valid():
            return not self.is_valid()
        if len(self) < len(prefix):
            return False
        if not len(prefix) or (self.source is prefix.source and self.start == prefix.start):
            return True
        utils.check_compatible(self.source, prefix.source)
        head = self.source[self.start:self.start + len(prefix)]
        return utils.fold(head) == utils.fold(prefix._chunk())

    def compare(self, other: StringView | Source | None) -> int:
        """Lexicographic three-way comparison: -1, 0 or +1.

        Characters are compared over the shorter length first; if those tie the
        longer view is the greater one."""
        other = _coerce(other)
        utils.check_compatible(self.source, other.source)
        common = min(len(self), len(other))
        result = 0
        if common:
            mine = self.source[self.start:self.start + common]
            theirs = other.source[other.start:other.start + common]
            result = (mine > theirs) - (mine < theirs)
        if not result and len(self) != len(other):
            result = 1 if len(self) > len(other) else -1
        return result

    #endregion

    #region Search

    def contains(self, needle: StringView | Source | None) -> bool:
        return self.find_first(needle).is_valid()

    def find_first(self, needle: StringView | Source | None) -> StringView:
        """
        Finds the first occurrence of `needle`. The result views the match
        inside this view's source, not the needle's, so it can be handed to
        `split_left`/`split_right`. An empty needle matches at the very start.
        Returns INVALID when there's no match or either side is invalid.
        """
        needle = _coerce(needle)
        if not (self.is_valid() and needle.is_valid()):
            return INVALID
        utils.check_compatible(self.source, needle.source)
        found = self.source.find(needle._chunk(), self.start, self.end)
        if found < 0:
            return INVALID
        return StringView(self.source, found, len(needle))

    def find_last(self, needle: StringView | Source | None) -> StringView:
        """Like find_first, scanning from the end. An empty needle matches at the very end."""
        needle = _coerce(needle)
        if not (self.is_valid() and needle.is_valid()):
            return INVALID
        utils.check_compatible(self.source, needle.source)
        found = self.source.rfind(needle._chunk(), self.start, self.end)
        if found < 0:
            return INVALID
        return StringView(self.source, found, len(needle))

    #endregion

    #region Region extraction

    def sub(self, begin: int, end: int = constants.END) -> StringView:
        """
        The view from `begin` up to, not including, `end`.
        Negative indexes count back from the end of the view. After that, a
        range that is inverted or lies wholly outside the view gives INVALID;
        otherwise it's clipped to the view, so `sub(n, END)` is always the rest.
        An empty view gives back an empty view at the same place.
        """
        size = len(self)
        if not size:
            return self._view(self.start, 0)
        if begin < 0:
            begin += size
        if end < 0:
            end += size
        if begin > end or begin >= size or end < 0:
            return INVALID
        begin = max(begin, 0)
        end = min(end, size)
        return StringView(self.source, self.start + begin, end - begin)

    def trim_start(self, chars: StringView | Source | None = None) -> StringView:
        """Drops leading characters found in `chars` (whitespace by default)."""
        members = self._charset(chars)
        start, end = self.start, self.end
        while start < end and self.source[start] in members:
            start += 1
        return self._view(start, end - start)

    def trim_end(self, chars: StringView | Source | None = None) -> StringView:
        members = self._charset(chars)
        start, end = self.start, self.end
        while end > start and self.source[end - 1] in members:
            end -= 1
        return self._view(start, end - start)

    def trim(self, chars: StringView | Source | None = None) -> StringView:
        return self.trim_start(chars).trim_end(chars)

    def _charset(self, chars: StringView | Source | None, nocase: bool = False) -> frozenset:
        if chars is None:
            chars = utils.like(self.source, constants.WHITESPACE)
        chars = _coerce(chars)
        utils.check_compatible(self.source, chars.source)
        if not chars.is_valid():
            return frozenset()
        return utils.charset(chars._chunk(), nocase)

    #endregion

    #region Splitting
    # Every split hands back (piece, remainder) and leaves this view alone;
    # strview.cursor.Cursor wraps these for the consume-in-place style.

    def split_first_delimiter(self, delimiters: StringView | Source | None,
                              nocase: bool = False) -> tuple[StringView, StringView]:
        """
        Splits at the first character that appears in `delimiters`.
        The piece is everything before it and the remainder everything after;
        the delimiter itself belongs to neither. A delimiter at the very end
        leaves an empty (still valid) remainder. With no delimiter at all the
        whole view is the piece and the remainder is INVALID, which is what
        ends a tokenizing loop.
        """
        delimiters = _coerce(delimiters)
        if self.is_valid() and delimiters.is_valid():
            members = self._charset(delimiters, nocase)
            for pos in range(self.start, self.end):
                if utils.is_member(self.source[pos], members, nocase):
                    remaining = self.end - pos - 1
                    # an empty remainder stays anchored on the delimiter
                    return (
                        StringView(self.source, self.start, pos - self.start),
                        StringView(self.source, pos + 1 if remaining else pos, remaining),
                    )
        return self, INVALID

    def split_last_delimiter(self, delimiters: StringView | Source | None,
                             nocase: bool = False) -> tuple[StringView, StringView]:
        """Mirror image of split_first_delimiter: the piece is what follows the last delimiter."""
        delimiters = _coerce(delimiters)
        if self.is_valid() and len(self) and delimiters.is_valid():
            members = self._charset(delimiters, nocase)
            for pos in range(self.end - 1, self.start - 1, -1):
                if utils.is_member(self.source[pos], members, nocase):
                    remaining = self.end - pos - 1
                    return (
                        StringView(self.source, pos + 1 if remaining else pos, remaining),
                        StringView(self.source, self.start, pos - self.start),
                    )
        return self, INVALID

    def split_index(self, index: int) -> tuple[StringView, StringView]:
        """
        Splits off `index` characters from the front, or for a negative index
        the last `-index` characters from the back. The count is clipped to the
        view, so splitting everything leaves an empty but valid remainder.
        """
        size = len(self)
        from_end = index < 0
        if from_end:
            index += size
        index = min(max(index, 0), size)
        head = self._view(self.start, index)
        tail = self._view(self.start + index, size - index)
        if from_end:
            return tail, head
        return head, tail

    def split_left(self, pos: StringView) -> tuple[StringView, StringView]:
        """
        Splits before `pos`, a view into this view's source (usually a
        find_first/find_last result). The piece is everything before `pos`,
        the remainder starts at `pos`. If `pos` doesn't start inside this view
        the piece is INVALID and the remainder is this view, unchanged.
        """
        if self._holds(pos, pos.start):
            return self.split_index(pos.start - self.start)
        return INVALID, self

    def split_right(self, pos: StringView) -> tuple[StringView, StringView]:
        """
        Splits after `pos`. The piece is everything following `pos`, the
        remainder is everything before it. If `pos` doesn't end inside this
        view the piece is INVALID and the remainder is this view, unchanged.
        """
        split_point = pos.start + len(pos)
        if self._holds(pos, split_point):
            keep = max(pos.start, self.start) - self.start
            return (
                StringView(self.source, split_point, self.end - split_point),
                StringView(self.source, self.start, keep),
            )
        return INVALID, self

    def _holds(self, pos: StringView, offset: int) -> bool:
        return (self.is_valid() and pos.is_valid() and pos.source is self.source
                and self.start <= offset <= self.end)

    def split_line(self, eol: Eol = Eol.NONE) -> tuple[StringView, StringView, Eol]:
        """
        Splits off the next line, without its terminator. CR, LF, CRLF and LFCR
        all end a line, a pair counting once.

        `eol` is the terminator a previous call ended on, when the character
        after it wasn't available yet; if this view opens with the other half
        of the pair, that half is skipped first. The returned Eol is the state
        to pass to the next call.

        Without a terminator the line is INVALID, and the view and `eol` come
        back unchanged, so the caller can wait for more input.
        """
        if not len(self):
            return INVALID, self, eol
        src = self
        if eol.completed_by(src[0]):
            src = src.split_index(1)[1]
        line, rest = src.split_first_delimiter(utils.like(self.source, constants.EOL_CHARS))
        if not rest.is_valid():
            return INVALID, self, eol
        terminator = Eol.of(self.source[line.end])
        if len(rest) and terminator.completed_by(rest[0]):
            rest = rest.split_index(1)[1]
            terminator = Eol.NONE
        return line, rest, terminator

    #endregion

    #region Materializing

    def materialize(self, capacity: int | None = None) -> Source:
        """
        Copies the view out as a new object of its source's type.
        With a capacity, at most `capacity - 1` characters are copied, leaving
        room for a terminator the way a fixed C buffer would.
        """
        if capacity is not None and capacity < 0:
            raise errors.CapacityError(capacity)
        if not self.is_valid():
            return ""
        count = len(self) if capacity is None else min(len(self), max(capacity - 1, 0))
        return self.source[self.start:self.start + count]

    def write_into(self, buffer: bytearray, capacity: int | None = None) -> int:
        """
        Writes the view into `buffer` followed by a NUL, never touching more
        than `capacity` bytes (or the buffer's length). Returns the number of
        bytes written, not counting the NUL.
        """
        if capacity is None:
            capacity = len(buffer)
        if capacity < 0:
            raise errors.CapacityError(capacity)
        capacity = min(capacity, len(buffer))
        if not capacity:
            return 0
        if utils.is_text(self.source):
            raise errors.IncompatibleSourceError(self.source, buffer)
        count = min(capacity - 1, len(self))
        if count:
            buffer[:count] = self.source[self.start:self.start + count]
        buffer[count] = 0
        return count

    def contents(self) -> Iterator[str | int]:
        """
        Returns Generator for efficient no-copy iteration over view contents
        """
        return (self.source[i] for i in range(self.start, self.end))

    #endregion

    def __len__(self) -> int:
        return self.size if self.source is not None else 0

    def __str__(self) -> str:
        if not self.is_valid():
            return ""
        chunk = self._chunk()
        if isinstance(chunk, str):
            return chunk
        return bytes(chunk).decode("utf-8", errors="replace")

    def __bytes__(self) -> bytes:
        if not self.is_valid():
            return b""
        chunk = self._chunk()
        if isinstance(chunk, str):
            return chunk.encode("utf-8")
        return bytes(chunk)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        if not self.is_valid():
            return '<StringView: invalid>'
        return f'<StringView: {self}>'

    def __getitem__(self, key):
        if isinstance(key, slice):
            if key.step is not None:
                raise TypeError('StringView does not support step when slicing')
            return self.sub(
                0 if key.start is None else key.start,
                constants.END if key.stop is None else key.stop,
            )
        size = len(self)
        if key < 0:
            key += size
        if not 0 <= key < size:
            raise IndexError('StringView index out of range')
        return self.source[self.start + key]

    def __iter__(self) -> Iterator[str | int]:
        return self.contents()

    def __contains__(self, needle: Any) -> bool:
        return self.contains(needle)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, (StringView, *utils.SOURCE_TYPES)):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, (StringView, *utils.SOURCE_TYPES)):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        if not len(self):
            return hash("")
        chunk = self._chunk()
        return hash(chunk if isinstance(chunk, str) else bytes(chunk))


INVALID = StringView(None, 0, 0)


def _coerce(value: StringView | Source | None) -> StringView:
    if isinstance(value, StringView):
        return value
    return wrap(value)


def wrap(text: Source | None) -> StringView:
    """A view of all of `text`, or INVALID for None."""
    if text is None:
        return INVALID
    return StringView(utils.check_source(text), 0, len(text))


def wrap_literal(text: Source | None, known_length: int) -> StringView:
    """
    A view of the first `known_length` characters of `text`, for when the
    length is already known. A negative length gives an empty view and a
    length past the end is clipped.
    """
    if text is None:
        return INVALID
    utils.check_source(text)
    return StringView(text, 0, min(max(known_length, 0), len(text)))


def wrap_cstr(buffer: Source | None) -> StringView:
    """A view of `buffer` up to its first NUL, or all of it if there is none."""
    if buffer is None:
        return INVALID
    utils.check_source(buffer)
    terminator = buffer.find(utils.like(buffer, constants.NUL))
    return StringView(buffer, 0, terminator if terminator >= 0 else len(buffer))
