"""Fixed-width text records for ephemeris tables."""

from __future__ import annotations

from typing import TextIO


class Record:
    """One table line built field by field; fields are joined by a single blank."""

    def __init__(self, max_length: int = 4096) -> None:
        self._fields: list[str] = []
        self._max_length = max_length

    def clear(self) -> None:
        """Drop all fields."""
        self._fields = []

    def append(self, text: str, width: int = 0) -> None:
        """Append a field, right-justified to ``width`` characters if given.

        Fields past ``max_length`` are truncated; nothing is appended once the
        line is full.
        """
        used = len(self.get_line())
        remaining = self._max_length - used - (1 if self._fields else 0)
        if remaining <= 0:
            return
        self._fields.append(text.rjust(width)[:remaining])

    def get_line(self) -> str:
        """Current line without trailing blanks."""
        return ' '.join(self._fields).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the current line (if not blank) and clear the record."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.clear()
