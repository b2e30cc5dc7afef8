"""
tcpp - Tomaszal's C PreProcessor
================================

A small C preprocessor. It tokenizes C source, resolves `#include "file"`
and object-like `#define` directives, strips comments, and writes the
preprocessed source back out with the original line and column layout.

Pipeline
--------
    Source → CharReader → Tokenizer → TokenList → Preprocessor → Stringifier

Main Components
---------------
- **reader**: character stream with line-ending normalization and
  continued-line elision
- **tokenizer**: character-class driven tokenizer producing a TokenList
- **tokens**: Token and the splice-capable doubly-linked TokenList
- **macros**: fixed-size MurmurHash2 macro table
- **preprocessor**: the directive/macro engine and the top-level API
- **stringifier**: rebuilds text from token locations

Quick Start
-----------
>>> from tcpp import preprocess_string
>>> print(preprocess_string("#define N 5\\nint a[N];").text)
<BLANKLINE>
int a[5];

Or from the command line:
    $ tcpp -i main.c -o main.o

Not Supported
-------------
Function-like macros, nested macro expansion, conditional compilation,
#line, the # and ## operators, system include paths and include-cycle
detection.
"""

__version__ = "0.1.0"

from tcpp.errors import (
    TcppError,
    SourceFileError,
    DirectiveError,
    UnresolvedIncludeError,
    SourceLocation,
)
from tcpp.macros import MacroTable, murmur_hash2
from tcpp.preprocessor import (
    Diagnostic,
    PreprocessResult,
    Preprocessor,
    PreprocessorOptions,
    count_comments,
    count_non_empty_lines,
    preprocess_file,
    preprocess_string,
)
from tcpp.reader import CharReader
from tcpp.stringifier import render, write
from tcpp.tokenizer import Tokenizer, tokenize, tokenize_string
from tcpp.tokens import Token, TokenList

__all__ = [
    "__version__",
    # Errors
    "TcppError",
    "SourceFileError",
    "DirectiveError",
    "UnresolvedIncludeError",
    "SourceLocation",
    # Tokens
    "CharReader",
    "Token",
    "TokenList",
    "Tokenizer",
    "tokenize",
    "tokenize_string",
    # Macros
    "MacroTable",
    "murmur_hash2",
    # Preprocessing
    "Diagnostic",
    "PreprocessResult",
    "Preprocessor",
    "PreprocessorOptions",
    "count_comments",
    "count_non_empty_lines",
    "preprocess_file",
    "preprocess_string",
    # Output
    "render",
    "write",
]
