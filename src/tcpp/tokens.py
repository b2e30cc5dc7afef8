"""
Tokens and Token Lists
======================

The token list is the shared substrate of the preprocessor: the tokenizer
fills it, the preprocessor edits it in place (deleting directive tokens,
rewriting macro uses, grafting in the tokens of included files) and the
stringifier renders it.

Token Flags
-----------
Flags are derived exactly once, when a token is linked into a list, from
its own text and from the token right before it:

| Flag          | Holds when                                           |
|---------------|------------------------------------------------------|
| is_identifier | first character is a letter, '_' or '$'              |
| is_number     | first character is a digit                           |
| is_comment    | text starts with '//' or '/*'                        |
| is_directive  | previous token is a '#' that starts its source line  |

Later text changes (macro substitution, comment blanking) leave the flags
alone.

Ownership
---------
A token belongs to at most one list. delete() detaches it; splice() moves
every token of a donor list into the receiving list and leaves the donor
empty. Nothing is ever copied.
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, Optional

from tcpp.errors import SourceLocation


IDENTIFIER_START = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_$"
)
DIGITS = frozenset("0123456789")


# =============================================================================
# Token
# =============================================================================

@dataclass(eq=False)
class Token:
    """
    A single preprocessing token.

    Attributes:
        text: Token text, or None for a spacer (renders as nothing)
        location: Position just past the token's last character
        start: Position of the token's first character
    """
    text: Optional[str]
    location: SourceLocation
    start: Optional[SourceLocation] = None

    operator: Optional[str] = field(default=None, init=False)
    is_identifier: bool = field(default=False, init=False)
    is_number: bool = field(default=False, init=False)
    is_comment: bool = field(default=False, init=False)
    is_directive: bool = field(default=False, init=False)

    prev: Optional["Token"] = field(default=None, init=False, repr=False)
    next: Optional["Token"] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.start is None:
            # Single-line token: the start is derived from the text length
            length = len(self.text) if self.text else 0
            self.start = replace(self.location, column=self.location.column - length)

    @classmethod
    def spacer(cls, location: SourceLocation) -> "Token":
        """Create a zero-width token that only carries a location."""
        return cls(None, location, location)

    @property
    def filename(self) -> str:
        return self.location.filename

    @property
    def line(self) -> int:
        """Line the token ends on."""
        return self.location.line

    @property
    def is_spacer(self) -> bool:
        return self.text is None

    def derive_flags(self) -> None:
        """Classify the token from its text and its predecessor."""
        text = self.text or ""
        self.operator = text if len(text) == 1 else None
        self.is_identifier = text[:1] in IDENTIFIER_START
        self.is_number = text[:1] in DIGITS
        self.is_comment = text.startswith(("//", "/*"))

        hash_token = self.prev
        self.is_directive = (
            hash_token is not None
            and hash_token.operator == "#"
            and starts_line(hash_token)
        )

    def shift(self, delta: int) -> None:
        """Move the token `delta` columns along its line."""
        self.start = replace(self.start, column=self.start.column + delta)
        self.location = replace(self.location, column=self.location.column + delta)

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.location})"


def starts_line(token: Token) -> bool:
    """Return True if no earlier token in the list ends on the token's line."""
    prev = token.prev
    return (
        prev is None
        or prev.filename != token.filename
        or prev.line != token.line
    )


# =============================================================================
# Token List
# =============================================================================

class TokenList:
    """
    Doubly-linked list of tokens with front and back anchors.

    Iteration tolerates deletion of the token currently being visited:
    the successor is fetched before the token is yielded.

    Attributes:
        front: First token (None when empty)
        back: Last token (None when empty)
    """

    def __init__(self):
        self.front: Optional[Token] = None
        self.back: Optional[Token] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self.front is not None

    def __iter__(self) -> Iterator[Token]:
        token = self.front
        while token is not None:
            following = token.next
            yield token
            token = following

    def texts(self) -> list[Optional[str]]:
        """Return the text of every token, in order (handy for debugging)."""
        return [token.text for token in self]

    # =========================================================================
    # Insertion
    # =========================================================================

    def append(self, token: Token) -> Token:
        """Link a token at the back of the list and derive its flags."""
        token.prev = self.back
        token.next = None
        if self.back is None:
            self.front = token
        else:
            self.back.next = token
        self.back = token
        self._size += 1
        token.derive_flags()
        return token

    def insert_after(self, anchor: Optional[Token], token: Token) -> Token:
        """
        Link a token right after `anchor` and derive its flags.

        A None anchor inserts at the front.
        """
        following = self.front if anchor is None else anchor.next
        token.prev = anchor
        token.next = following
        if anchor is None:
            self.front = token
        else:
            anchor.next = token
        if following is None:
            self.back = token
        else:
            following.prev = token
        self._size += 1
        token.derive_flags()
        return token

    # =========================================================================
    # Removal
    # =========================================================================

    def delete(self, token: Token) -> Optional[Token]:
        """
        Unlink a token from the list.

        Returns:
            The token that followed it, so callers can keep walking
        """
        following = token.next
        if token.prev is None:
            self.front = following
        else:
            token.prev.next = following
        if following is None:
            self.back = token.prev
        else:
            following.prev = token.prev
        token.prev = token.next = None
        self._size -= 1
        return following

    def splice(self, anchor: Token, sublist: "TokenList", width: int = 1) -> Optional[Token]:
        """
        Replace a window of tokens with the whole chain of another list.

        The window is `anchor` and the `width - 1` tokens after it. Every
        token of `sublist` is moved into this list and `sublist` is left
        empty. Flags of grafted tokens are kept as they were derived in
        their own list.

        Returns:
            The last grafted token, or the token before the window when
            `sublist` is empty
        """
        before = anchor.prev
        after = anchor
        for _ in range(width):
            if after is None:
                break
            following = after.next
            after.prev = after.next = None
            self._size -= 1
            after = following

        if not sublist:
            self._link(before, after)
            return before

        self._link(before, sublist.front)
        self._link(sublist.back, after)
        last = sublist.back
        self._size += len(sublist)

        sublist.front = sublist.back = None
        sublist._size = 0
        return last

    def _link(self, left: Optional[Token], right: Optional[Token]) -> None:
        if left is None:
            self.front = right
        else:
            left.next = right
        if right is None:
            self.back = left
        else:
            right.prev = left

    # =========================================================================
    # Line Queries
    # =========================================================================

    @staticmethod
    def rest_of_line(token: Token) -> Iterator[Token]:
        """Yield the tokens after `token` that end on the same line of the same file."""
        following = token.next
        while (
            following is not None
            and following.filename == token.filename
            and following.line == token.line
        ):
            after = following.next
            yield following
            following = after
