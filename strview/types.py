from __future__ import annotations

from enum import IntEnum
from typing import TypeAlias

Source: TypeAlias = str | bytes | bytearray


class Eol(IntEnum):
    """Pending half of a two character line terminator.

    Carried between calls to `split_line` so that a CRLF or LFCR pair split
    across two buffers still counts as a single line ending."""
    NONE = 0
    LF = 10
    CR = 13

    def __str__(self) -> str:
        if self == Eol.NONE:
            return "none"
        if self == Eol.LF:
            return "lf"
        if self == Eol.CR:
            return "cr"

    @staticmethod
    def parse(string: str) -> Eol | None:
        return {
            "none": Eol.NONE,
            "lf": Eol.LF,
            "cr": Eol.CR,
        }.get(string.lower(), None)

    @staticmethod
    def of(char: str | int) -> Eol:
        """The terminator a single character represents, NONE for anything else."""
        code = ord(char) if isinstance(char, str) else char
        if code == Eol.CR:
            return Eol.CR
        if code == Eol.LF:
            return Eol.LF
        return Eol.NONE

    def completed_by(self, char: str | int) -> bool:
        """Whether `char` is the other half of this terminator."""
        return (self, Eol.of(char)) in ((Eol.CR, Eol.LF), (Eol.LF, Eol.CR))
