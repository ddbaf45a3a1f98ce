from __future__ import annotations

import string
from typing import Any

from . import errors
from .types import Source

SOURCE_TYPES = (str, bytes, bytearray)

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def check_source(source: Any) -> Source:
    if not isinstance(source, SOURCE_TYPES):
        raise errors.UnsupportedSourceError(source)
    return source


def is_text(source: Source | None) -> bool:
    return isinstance(source, str)


def check_compatible(left: Source | None, right: Source | None) -> None:
    """Raises if one source is text and the other is bytes. Absent sources mix with anything."""
    if left is None or right is None:
        return
    if is_text(left) != is_text(right):
        raise errors.IncompatibleSourceError(left, right)


def like(source: Source | None, text: str) -> str | bytes:
    """`text` in the same flavour as `source`, for the ASCII constants."""
    if source is None or is_text(source):
        return text
    return text.encode("ascii")


def fold(chunk: Source) -> Source:
    # bytes.lower() only touches ASCII already, str.lower() doesn't
    if isinstance(chunk, str):
        return chunk.translate(_ASCII_FOLD)
    return chunk.lower()


def fold_char(char: str | int) -> str | int:
    if isinstance(char, int):
        return char + 32 if 65 <= char <= 90 else char
    return char.translate(_ASCII_FOLD)


def charset(chunk: Source, nocase: bool = False) -> frozenset:
    """The members of a character set, folded when matching ignores case."""
    return frozenset(fold(chunk) if nocase else chunk)


def is_member(char: str | int, members: frozenset, nocase: bool = False) -> bool:
    return (fold_char(char) if nocase else char) in members
