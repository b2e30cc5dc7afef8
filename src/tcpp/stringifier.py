"""
Stringifier
===========

Rebuilds source text from a token list. Whitespace is not stored in the
tokens; it is regenerated from their locations. A cursor tracks the file,
line and column reached so far, and before each token the stringifier
emits newlines until the cursor reaches the token's line, then spaces
until it reaches the token's column.

Tokens from another file (spliced in by #include) start a new section:
a line break is emitted and the cursor jumps to the new file's position.
Spacer tokens position the cursor but emit no text, which is how the
preprocessor keeps the includer's remaining lines in place.

Unmodified single-file input renders back to the original text, minus
trailing whitespace on each line and trailing blank lines. A tab between
tokens comes back as a single space.
"""

import io
from typing import Iterable, TextIO

from tcpp.tokens import Token


class _Cursor:
    """Output position: file, line (1-indexed) and column (0-indexed)."""

    def __init__(self, filename: str, line: int = 1, column: int = 0):
        self.filename = filename
        self.line = line
        self.column = column

    def advance(self, text: str) -> None:
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n") - 1
        else:
            self.column += len(text)


def write(tokens: Iterable[Token], stream: TextIO) -> None:
    """
    Render tokens to a text stream.

    Args:
        tokens: Tokens in output order (usually a TokenList)
        stream: Destination stream
    """
    cursor = None
    for token in tokens:
        start = token.start
        if cursor is None:
            cursor = _Cursor(start.filename)
        elif start.filename != cursor.filename:
            stream.write("\n")
            cursor = _Cursor(start.filename, start.line)

        if start.line > cursor.line:
            stream.write("\n" * (start.line - cursor.line))
            cursor.line = start.line
            cursor.column = 0
        if start.column > cursor.column:
            stream.write(" " * (start.column - cursor.column))
            cursor.column = start.column

        if token.text:
            stream.write(token.text)
            cursor.advance(token.text)


def render(tokens: Iterable[Token]) -> str:
    """Render tokens to a string."""
    buffer = io.StringIO()
    write(tokens, buffer)
    return buffer.getvalue()
