"""
tcpp Preprocessor
=================

Walks a token list once, left to right, and edits it in place:

- `#include "file"` is replaced by the tokens of that file, which are
  tokenized and preprocessed first (recursively, with the same context).
- `#define NAME body` records NAME in the macro table and removes the
  directive's tokens from the list.
- Identifiers naming a macro have their text replaced by the macro's text.
- Comments are blanked unless keep_comments is set.

Supported Directives
--------------------
#include "filename"   - Include a file relative to the including file
#include <filename>   - Recognised but never resolved (reported)
#define NAME text     - Object-like macro; text is the rest of the line
                        with the whitespace between tokens removed

Any other directive is passed through untouched.

Macro Expansion
---------------
Expansion is a single textual replacement: the substituted text is not
scanned again, so `#define A B` followed by `#define B 1` turns `A` into
`B`, not `1`. Macros are not scoped to files; a macro defined in an
included file stays defined in the includer after the #include.

Layout
------
When a macro use changes the length of a token, every later token on the
same line is shifted by the difference, keeping the line's spacing. After
an included file and anything left on the #include line (such as a
trailing comment), a zero-width spacer token carrying the includer's next
line number is inserted so the includer's remaining lines render where
they were.

Example
-------
>>> from tcpp.preprocessor import preprocess_string
>>> result = preprocess_string("int x; // note\\n#define N 5\\nint y = N;")
>>> result.text
'int x; \\n\\nint y = 5;'
>>> result.comment_count, result.line_count
(1, 3)
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

from tcpp.errors import (
    DirectiveError,
    SourceLocation,
    UnresolvedIncludeError,
)
from tcpp.macros import DEFAULT_SEED, DEFAULT_TABLE_SIZE, MacroTable
from tcpp.stringifier import render
from tcpp.tokenizer import tokenize, tokenize_string
from tcpp.tokens import Token, TokenList


logger = logging.getLogger(__name__)


# =============================================================================
# Options and Results
# =============================================================================

@dataclass
class PreprocessorOptions:
    """
    Preprocessor configuration options.

    Attributes:
        keep_comments: Leave comments in the output instead of removing them
        macro_table_size: Number of slots in the macro table
        macro_seed: Seed of the macro table's hash function
        alias_collisions: Let any identifier that hashes to an occupied
                          macro slot pick up that slot's text
    """
    keep_comments: bool = False
    macro_table_size: int = DEFAULT_TABLE_SIZE
    macro_seed: int = DEFAULT_SEED
    alias_collisions: bool = False


@dataclass(frozen=True)
class Diagnostic:
    """A reported problem that did not stop preprocessing."""
    message: str
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: warning: {self.message}"
        return f"warning: {self.message}"


@dataclass
class PreprocessResult:
    """
    Outcome of preprocessing one entry file.

    Attributes:
        text: Reconstructed preprocessed source
        line_count: Non-empty lines of the entry file (before preprocessing)
        comment_count: Comments in the entry file (before preprocessing)
        tokens: Final token list the text was rendered from
        diagnostics: Problems reported along the way
        macros: Macros defined when preprocessing finished
    """
    text: str
    line_count: int
    comment_count: int
    tokens: TokenList
    diagnostics: list[Diagnostic] = field(default_factory=list)
    macros: dict[str, str] = field(default_factory=dict)


# =============================================================================
# Token Statistics
# =============================================================================

def count_non_empty_lines(tokens: TokenList) -> int:
    """Number of distinct line numbers among the tokens."""
    return len({token.line for token in tokens})


def count_comments(tokens: TokenList) -> int:
    """Number of comment tokens."""
    return sum(1 for token in tokens if token.is_comment)


# =============================================================================
# Preprocessor
# =============================================================================

class Preprocessor:
    """
    Directive and macro engine.

    One Preprocessor is one top-level run: its macro table and diagnostics
    are shared by the entry file and every file it includes.

    Attributes:
        options: Preprocessor configuration
        macros: Macro table shared across all files of the run
        diagnostics: Problems reported so far
    """

    def __init__(self, options: Optional[PreprocessorOptions] = None):
        self.options = options or PreprocessorOptions()
        self.macros = MacroTable(
            size=self.options.macro_table_size,
            seed=self.options.macro_seed,
            alias_collisions=self.options.alias_collisions,
        )
        self.diagnostics: list[Diagnostic] = []

    def run(self, tokens: TokenList) -> PreprocessResult:
        """
        Preprocess an entry file's tokens and render the result.

        Counts are taken before the list is modified.
        """
        line_count = count_non_empty_lines(tokens)
        comment_count = count_comments(tokens)
        self.process(tokens)
        return PreprocessResult(
            text=render(tokens),
            line_count=line_count,
            comment_count=comment_count,
            tokens=tokens,
            diagnostics=list(self.diagnostics),
            macros=dict(self.macros.items()),
        )

    def process(self, tokens: TokenList) -> TokenList:
        """Preprocess a token list in place and return it."""
        token = tokens.front
        while token is not None:
            token = self._visit(tokens, token)
        return tokens

    def _visit(self, tokens: TokenList, token: Token) -> Optional[Token]:
        """Handle one token and return the next token to visit."""
        if token.is_directive and token.text in ("include", "define"):
            try:
                if token.text == "include":
                    return self._process_include(tokens, token)
                return self._process_define(tokens, token)
            except DirectiveError as e:
                self._report(e)
                return token.next

        if token.is_comment:
            if not self.options.keep_comments:
                token.text = None
        elif token.is_identifier and not token.is_directive:
            self._substitute(token)
        return token.next

    # =========================================================================
    # Directives
    # =========================================================================

    def _process_include(self, tokens: TokenList, directive: Token) -> Optional[Token]:
        """Replace `# include "file"` with the preprocessed tokens of the file."""
        target = self._operand(directive)
        if target is None:
            raise DirectiveError(
                "#include expects \"FILENAME\"",
                directive.location,
            )

        name = target.text
        if name.startswith("<"):
            raise UnresolvedIncludeError(name, "system include paths are not searched", target.start)
        if not name.startswith('"'):
            raise UnresolvedIncludeError(name, "not a quoted file name", target.start)

        filename = name.strip('"')
        if not filename:
            raise DirectiveError("empty file name in #include", target.start)

        path = Path(directive.filename).parent / filename
        if not path.is_file():
            raise UnresolvedIncludeError(name, "file not found", target.start)

        logger.debug(f"{directive.location}: including {path}")
        included = self.process(tokenize(path))

        # Tokens after the file name stay on the directive line, before the spacer
        trailing = list(TokenList.rest_of_line(target))

        spacer = Token.spacer(SourceLocation(directive.filename, target.line + 1, 0))
        last = tokens.splice(directive.prev, included, width=3)
        tokens.insert_after(trailing[-1] if trailing else last, spacer)
        return trailing[0] if trailing else spacer.next

    def _process_define(self, tokens: TokenList, directive: Token) -> Optional[Token]:
        """Record `# define NAME body` and remove it from the list."""
        name_token = self._operand(directive)
        if name_token is None:
            raise DirectiveError("macro name missing in #define", directive.location)
        if not name_token.is_identifier:
            raise DirectiveError(
                f"macro name must be an identifier, got '{name_token.text}'",
                name_token.start,
            )

        body = []
        for token in TokenList.rest_of_line(name_token):
            if token.is_comment:
                continue
            body.append(token.text or "")
            tokens.delete(token)

        name = name_token.text
        text = "".join(body)
        self.macros.define(name, text)
        logger.debug(f"{directive.location}: #define {name} {text}")

        following = name_token.next
        tokens.delete(directive.prev)
        tokens.delete(directive)
        tokens.delete(name_token)
        return following

    @staticmethod
    def _operand(directive: Token) -> Optional[Token]:
        """Return the token after a directive name if it is on the same line."""
        operand = directive.next
        if (
            operand is None
            or not operand.text
            or operand.filename != directive.filename
            or operand.line != directive.line
        ):
            return None
        return operand

    # =========================================================================
    # Macro Substitution
    # =========================================================================

    def _substitute(self, token: Token) -> None:
        """Replace a macro use in place, shifting the rest of its line."""
        replacement = self.macros.lookup(token.text)
        if replacement is None:
            return

        delta = len(replacement) - len(token.text)
        if delta:
            for later in TokenList.rest_of_line(token):
                later.shift(delta)
            token.location = replace(token.location, column=token.location.column + delta)
        logger.debug(f"{token.location}: {token.text} -> {replacement}")
        token.text = replacement

    def _report(self, error: DirectiveError) -> None:
        diagnostic = Diagnostic(error.message, error.location)
        logger.warning(str(diagnostic))
        self.diagnostics.append(diagnostic)


# =============================================================================
# Convenience Functions
# =============================================================================

def preprocess_file(
    path: Union[str, Path],
    options: Optional[PreprocessorOptions] = None,
) -> PreprocessResult:
    """
    Preprocess a C source file.

    Args:
        path: Entry source file
        options: Preprocessor configuration (defaults if None)

    Returns:
        PreprocessResult with the rendered text, counts and diagnostics

    Raises:
        SourceFileError: If a source file cannot be opened
    """
    tokens = tokenize(path)
    return Preprocessor(options).run(tokens)


def preprocess_string(
    source: str,
    filename: str = "<input>",
    options: Optional[PreprocessorOptions] = None,
) -> PreprocessResult:
    """
    Preprocess in-memory C source.

    Quoted includes are resolved relative to the directory of `filename`.
    """
    tokens = tokenize_string(source, filename)
    return Preprocessor(options).run(tokens)
