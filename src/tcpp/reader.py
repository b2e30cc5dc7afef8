"""
Character Reader
================

Streams characters from a text source for the tokenizer, one at a time,
with one character of lookahead.

Two translations are applied to every character read or peeked:

- CR and CRLF line endings are normalized to a single LF.
- A backslash immediately followed by a line terminator (a continued
  line) is dropped together with the terminator, so reading carries on
  transparently on the next line.

The reader tracks the location of the next character to be read. Reading
a newline moves to the next line and resets the column to 0; any other
character advances the column by one. An elided continuation does not
move the location at all: the continued line is one logical line, so a
multi-line #define still ends on the line it started on.

Example
-------
>>> reader = CharReader.from_string("ab\\\\\\ncd")
>>> reader.read() + reader.read() + reader.read()
'abc'
>>> reader.location.line, reader.location.column
(1, 3)
"""

import io
from pathlib import Path
from typing import TextIO

from tcpp.errors import SourceLocation


class CharReader:
    """
    Character reader over a text stream.

    Attributes:
        filename: Name reported in every location produced by this reader
    """

    def __init__(self, stream: TextIO, filename: str = "<input>"):
        """
        Initialize the reader.

        Args:
            stream: Text stream opened with newline="" so that CR
                    characters reach the reader untranslated
            filename: Source filename for locations
        """
        self.filename = filename
        self._stream = stream

        # Raw characters pulled from the stream but not consumed yet
        self._pending: list[str] = []

        self._line = 1
        self._column = 0

    @classmethod
    def from_string(cls, source: str, filename: str = "<input>") -> "CharReader":
        """Create a reader over an in-memory string."""
        return cls(io.StringIO(source, newline=""), filename)

    @classmethod
    def open(cls, path: Path) -> "CharReader":
        """
        Open a file for reading.

        The caller owns the returned reader and must close() it.

        Raises:
            OSError: If the file cannot be opened
        """
        stream = open(path, "r", encoding="utf-8", errors="replace", newline="")
        return cls(stream, str(path))

    def close(self) -> None:
        """Release the underlying stream."""
        self._stream.close()

    def __enter__(self) -> "CharReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def location(self) -> SourceLocation:
        """Location of the next character to be read."""
        return SourceLocation(self.filename, self._line, self._column)

    # =========================================================================
    # Public Interface
    # =========================================================================

    def peek(self) -> str:
        """
        Return the next character without consuming it.

        Returns an empty string at end of input. Peeking never changes
        the reader's location.
        """
        ch, _ = self._scan()
        return ch

    def read(self) -> str:
        """
        Consume and return the next character.

        Returns an empty string at end of input.
        """
        ch, used = self._scan()
        del self._pending[:used]

        if ch == "\n":
            self._line += 1
            self._column = 0
        elif ch:
            self._column += 1
        return ch

    # =========================================================================
    # Raw Stream Handling
    # =========================================================================

    def _raw(self, index: int) -> str:
        """Return the raw character at `index` in the lookahead buffer."""
        while len(self._pending) <= index:
            ch = self._stream.read(1)
            if not ch:
                return ""
            self._pending.append(ch)
        return self._pending[index]

    def _newline_width(self, index: int) -> int:
        """Width of a line terminator starting at `index`, 0 if there is none."""
        ch = self._raw(index)
        if ch == "\n":
            return 1
        if ch == "\r":
            return 2 if self._raw(index + 1) == "\n" else 1
        return 0

    def _scan(self) -> tuple[str, int]:
        """
        Decode the next logical character from the lookahead buffer.

        Returns:
            (character, raw characters used)
        """
        index = 0
        while self._raw(index) == "\\":
            width = self._newline_width(index + 1)
            if not width:
                break
            index += 1 + width

        width = self._newline_width(index)
        if width:
            return "\n", index + width

        ch = self._raw(index)
        return ch, index + (1 if ch else 0)
