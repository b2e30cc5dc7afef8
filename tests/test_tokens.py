# =============================================================================
# test_tokens.py - Token and TokenList Unit Tests
# =============================================================================
# Tests for the doubly-linked token list.
#
# Test coverage includes:
#   - Append, iteration and length
#   - O(1) deletion (front, middle, back, during iteration)
#   - Splicing another list over a window of tokens
#   - Insertion after an anchor
#   - Token helpers (derived start, spacers, shifting, line queries)
# =============================================================================

from tcpp.errors import SourceLocation
from tcpp.tokenizer import tokenize_string
from tcpp.tokens import Token, TokenList


def make_list(*words: str, filename: str = "t.c", line: int = 1) -> TokenList:
    """Build a list of one-line tokens separated by single spaces."""
    tokens = TokenList()
    column = 0
    for word in words:
        column += len(word)
        tokens.append(Token(word, SourceLocation(filename, line, column)))
        column += 1
    return tokens


def assert_linked(tokens: TokenList) -> None:
    """Check prev/next links agree with forward iteration."""
    items = list(tokens)
    assert len(items) == len(tokens)
    if not items:
        assert tokens.front is None and tokens.back is None
        return
    assert tokens.front is items[0] and tokens.back is items[-1]
    assert items[0].prev is None and items[-1].next is None
    for left, right in zip(items, items[1:]):
        assert left.next is right
        assert right.prev is left


# =============================================================================
# Token
# =============================================================================

class TestToken:
    """Tests for the Token class."""

    def test_start_derived_from_text_length(self):
        """Without an explicit start, it is derived from the length."""
        token = Token("abc", SourceLocation("f.c", 2, 7))
        assert token.start == SourceLocation("f.c", 2, 4)

    def test_spacer(self):
        """A spacer has no text and zero width."""
        spacer = Token.spacer(SourceLocation("f.c", 3, 0))
        assert spacer.is_spacer
        assert spacer.text is None
        assert spacer.start == spacer.location

    def test_shift_moves_both_ends(self):
        """shift() moves start and end columns together."""
        token = Token("ab", SourceLocation("f.c", 1, 5))
        token.shift(-2)
        assert token.start.column == 1
        assert token.location.column == 3

    def test_flags_not_recomputed_on_text_change(self):
        """Changing the text keeps the flags derived at append time."""
        token = list(tokenize_string("name"))[0]
        token.text = "42"
        assert token.is_identifier
        assert not token.is_number


# =============================================================================
# Append and Iteration
# =============================================================================

class TestAppend:
    """Tests for append(), len() and iteration."""

    def test_empty_list(self):
        """A new list is empty."""
        tokens = TokenList()
        assert len(tokens) == 0
        assert not tokens
        assert list(tokens) == []

    def test_append_keeps_order(self):
        """Tokens iterate in append order."""
        tokens = make_list("a", "b", "c")
        assert tokens.texts() == ["a", "b", "c"]
        assert len(tokens) == 3
        assert_linked(tokens)


# =============================================================================
# Deletion
# =============================================================================

class TestDelete:
    """Tests for delete()."""

    def test_delete_middle(self):
        """Deleting a middle token returns its successor."""
        tokens = make_list("a", "b", "c")
        middle = tokens.front.next
        following = tokens.delete(middle)
        assert following.text == "c"
        assert tokens.texts() == ["a", "c"]
        assert_linked(tokens)

    def test_delete_front_and_back(self):
        """Deleting the ends updates the anchors."""
        tokens = make_list("a", "b", "c")
        tokens.delete(tokens.front)
        assert tokens.delete(tokens.back) is None
        assert tokens.texts() == ["b"]
        assert_linked(tokens)

    def test_delete_only_token(self):
        """Deleting the last remaining token empties the list."""
        tokens = make_list("a")
        tokens.delete(tokens.front)
        assert_linked(tokens)

    def test_deleted_token_is_detached(self):
        """A deleted token no longer links into the list."""
        tokens = make_list("a", "b", "c")
        middle = tokens.front.next
        tokens.delete(middle)
        assert middle.prev is None and middle.next is None

    def test_delete_while_iterating(self):
        """Iteration survives deletion of the current token."""
        tokens = make_list("a", "x", "b", "x", "c")
        for token in tokens:
            if token.text == "x":
                tokens.delete(token)
        assert tokens.texts() == ["a", "b", "c"]
        assert_linked(tokens)


# =============================================================================
# Splicing
# =============================================================================

class TestSplice:
    """Tests for splice()."""

    def test_splice_replaces_window(self):
        """A three-token window is replaced by the sublist's tokens."""
        tokens = make_list("a", "#", "include", '"f.h"', "b")
        sublist = make_list("x", "y", filename="f.h")
        anchor = tokens.front.next
        last = tokens.splice(anchor, sublist, width=3)
        assert tokens.texts() == ["a", "x", "y", "b"]
        assert last.text == "y"
        assert_linked(tokens)

    def test_splice_empties_donor(self):
        """Ownership of the sublist's tokens moves to the target list."""
        tokens = make_list("a", "b")
        sublist = make_list("x", "y")
        tokens.splice(tokens.front, sublist)
        assert len(sublist) == 0
        assert sublist.front is None and sublist.back is None
        assert len(tokens) == 3

    def test_splice_at_front(self):
        """Splicing over the first token updates the front anchor."""
        tokens = make_list("#", "include", '"f.h"', "b")
        tokens.splice(tokens.front, make_list("x"), width=3)
        assert tokens.texts() == ["x", "b"]
        assert_linked(tokens)

    def test_splice_at_back(self):
        """Splicing over the last tokens updates the back anchor."""
        tokens = make_list("a", "#", "include", '"f.h"')
        tokens.splice(tokens.front.next, make_list("x", "y"), width=3)
        assert tokens.texts() == ["a", "x", "y"]
        assert_linked(tokens)

    def test_splice_empty_sublist(self):
        """An empty sublist just removes the window."""
        tokens = make_list("a", "#", "include", '"f.h"', "b")
        last = tokens.splice(tokens.front.next, TokenList(), width=3)
        assert last is tokens.front
        assert tokens.texts() == ["a", "b"]
        assert_linked(tokens)

    def test_splice_keeps_sublist_identity(self):
        """Grafted tokens keep their own file and flags."""
        tokens = make_list("a", "b")
        sublist = tokenize_string("#define X", "inner.h")
        tokens.splice(tokens.back, sublist)
        grafted = list(tokens)[1:]
        assert [t.filename for t in grafted] == ["inner.h"] * 3
        assert grafted[1].is_directive


# =============================================================================
# Insertion
# =============================================================================

class TestInsertAfter:
    """Tests for insert_after()."""

    def test_insert_in_middle(self):
        """A token can be linked after any anchor."""
        tokens = make_list("a", "c")
        tokens.insert_after(tokens.front, Token("b", SourceLocation("t.c", 1, 3)))
        assert tokens.texts() == ["a", "b", "c"]
        assert_linked(tokens)

    def test_insert_at_front_and_back(self):
        """A None anchor inserts at the front; the back anchor follows."""
        tokens = make_list("b")
        tokens.insert_after(None, Token("a", SourceLocation("t.c", 1, 0)))
        tokens.insert_after(tokens.back, Token.spacer(SourceLocation("t.c", 2, 0)))
        assert tokens.texts() == ["a", "b", None]
        assert_linked(tokens)


# =============================================================================
# Line Queries
# =============================================================================

class TestRestOfLine:
    """Tests for TokenList.rest_of_line()."""

    def test_stops_at_next_line(self):
        """Only tokens ending on the same line are yielded."""
        tokens = tokenize_string("a b c\nd")
        rest = TokenList.rest_of_line(tokens.front)
        assert [t.text for t in rest] == ["b", "c"]

    def test_allows_deletion(self):
        """Yielded tokens may be deleted while iterating."""
        tokens = tokenize_string("a b c\nd")
        for token in TokenList.rest_of_line(tokens.front):
            tokens.delete(token)
        assert tokens.texts() == ["a", "d"]
