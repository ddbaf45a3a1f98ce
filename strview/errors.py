from __future__ import annotations


class StringViewError(Exception):
    """Base class for misuse of the view API.

    Searches and splits that come up empty never raise; they hand back an
    invalid view instead. These are for calls that can't mean anything."""


class UnsupportedSourceError(StringViewError, TypeError):
    """Tried to view something that isn't str, bytes or bytearray."""

    def __init__(self, source):
        self.source = source
        super().__init__(f"Can't view an object of type `{type(source).__name__}`.")


class IncompatibleSourceError(StringViewError, TypeError):
    """Mixed a text view with a bytes view."""

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__(
            f"Can't mix `{type(left).__name__}` and `{type(right).__name__}` views."
        )


class ViewBoundsError(StringViewError, ValueError):
    def __init__(self, start: int, size: int, limit: int):
        self.start = start
        self.size = size
        self.limit = limit
        super().__init__(
            f"View of {size} starting at {start} doesn't fit in a source of length {limit}."
        )


class CapacityError(StringViewError, ValueError):
    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Capacity must not be negative, got `{capacity}`.")
