"""
Tokenizer
=========

Splits C source into preprocessing tokens. The rules are deliberately
simple and purely character-class driven (longest match):

| Lead characters                   | Token runs until                      |
|-----------------------------------|---------------------------------------|
| letter, digit, '_' or '$'         | the next char is not one of those     |
| //                                | end of line (newline not included)    |
| /*                                | the matching */ (included)            |
| " or '                            | the matching quote or end of line     |
| < right after a directive include | the matching > or end of line         |
| anything else                     | that single character                 |

Identifiers and numbers share one rule, so `0x1Fu` and `foo$bar` are each
a single token. Escapes inside literals are not interpreted: `"a\\"b"`
ends at the second quote. Whitespace between tokens is skipped; the
stringifier restores it from token locations.

Example
-------
>>> from tcpp.tokenizer import tokenize_string
>>> tokenize_string('#include <stdio.h>').texts()
['#', 'include', '<stdio.h>']
"""

import logging
from pathlib import Path
from typing import Union

from tcpp.errors import SourceFileError
from tcpp.reader import CharReader
from tcpp.tokens import DIGITS, IDENTIFIER_START, Token, TokenList


logger = logging.getLogger(__name__)

WORD_CHARS = IDENTIFIER_START | DIGITS
WHITESPACE = frozenset(" \t\n\v\f")


class Tokenizer:
    """
    Turns the characters of a CharReader into a TokenList.

    Usage:
        with CharReader.open(path) as reader:
            tokens = Tokenizer(reader).tokenize()
    """

    def __init__(self, reader: CharReader):
        self._reader = reader
        self._tokens = TokenList()

    def tokenize(self) -> TokenList:
        """Consume the whole reader and return the token list."""
        reader = self._reader
        while True:
            while reader.peek() in WHITESPACE:
                reader.read()
            if not reader.peek():
                break

            start = reader.location
            text = self._scan_token()
            self._tokens.append(Token(text, reader.location, start))

        logger.debug(f"Tokenized {reader.filename}: {len(self._tokens)} tokens")
        return self._tokens

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> str:
        """Read one raw token string, starting at a non-whitespace char."""
        reader = self._reader
        chars = [reader.read()]
        lead = chars[0]

        if lead in WORD_CHARS:
            while reader.peek() in WORD_CHARS:
                chars.append(reader.read())

        elif lead == "/" and reader.peek() == "/":
            while reader.peek() not in ("\n", ""):
                chars.append(reader.read())

        elif lead == "/" and reader.peek() == "*":
            chars.append(reader.read())
            self._read_block_comment(chars)

        elif lead in ('"', "'"):
            self._read_until(chars, lead)

        elif lead == "<" and self._after_include():
            self._read_until(chars, ">")

        return "".join(chars)

    def _read_block_comment(self, chars: list[str]) -> None:
        # An unterminated comment runs to end of input
        reader = self._reader
        while reader.peek():
            ch = reader.read()
            chars.append(ch)
            if ch == "*" and reader.peek() == "/":
                chars.append(reader.read())
                return

    def _read_until(self, chars: list[str], closing: str) -> None:
        """Read through `closing`, stopping early (exclusive) at end of line."""
        reader = self._reader
        while reader.peek() not in ("\n", ""):
            ch = reader.read()
            chars.append(ch)
            if ch == closing:
                return

    def _after_include(self) -> bool:
        previous = self._tokens.back
        return (
            previous is not None
            and previous.is_directive
            and previous.text == "include"
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(path: Union[str, Path]) -> TokenList:
    """
    Tokenize a source file.

    The file is closed before this function returns.

    Raises:
        SourceFileError: If the file cannot be opened or read
    """
    try:
        with CharReader.open(Path(path)) as reader:
            return Tokenizer(reader).tokenize()
    except OSError as e:
        raise SourceFileError(str(path), e.strerror or str(e)) from e


def tokenize_string(source: str, filename: str = "<input>") -> TokenList:
    """Tokenize in-memory source text."""
    return Tokenizer(CharReader.from_string(source, filename)).tokenize()
