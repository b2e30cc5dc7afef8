"""
tcpp Error Hierarchy
====================

This module defines the exception hierarchy for the preprocessor.
All exceptions inherit from TcppError, allowing callers to catch every
preprocessing failure with a single except clause if desired.

Exception Hierarchy
-------------------
TcppError (base)
├── SourceFileError - a source file cannot be opened or read (fatal)
└── DirectiveError - malformed #define/#include (recoverable)
    └── UnresolvedIncludeError - include target cannot be resolved

Fatal vs. Recoverable
---------------------
SourceFileError aborts the whole run: no partial output is produced.
DirectiveError and its subclasses are raised by the directive handlers,
caught by the preprocessor, turned into a Diagnostic and reported. The
offending directive is skipped and processing continues.

Error messages follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in a source file.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (0-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception
# =============================================================================

class TcppError(Exception):
    """
    Base exception for all preprocessor errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []
        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")
        if self.hint:
            parts.append(f"hint: {self.hint}")
        return "\n".join(parts)


# =============================================================================
# Fatal Errors
# =============================================================================

class SourceFileError(TcppError):
    """
    A source file could not be opened or read.

    Raised by the tokenizer for the entry file and for included files
    that exist but cannot be read. Preprocessing stops immediately.
    """

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot open '{filename}': {reason}")


# =============================================================================
# Recoverable Directive Errors
# =============================================================================

class DirectiveError(TcppError):
    """
    A #define or #include line that cannot be processed.

    The preprocessor reports it and leaves the directive's tokens in place.
    """
    pass


class UnresolvedIncludeError(DirectiveError):
    """
    An #include whose target cannot be resolved.

    Only quoted includes are looked up (relative to the including file);
    angle-bracket includes are recognised but never resolved.
    """

    def __init__(
        self,
        target: str,
        reason: str,
        location: Optional[SourceLocation] = None,
    ):
        self.target = target
        self.reason = reason
        hint = None
        if target.startswith("<"):
            hint = "system headers are not searched; use a quoted include"
        super().__init__(
            f"cannot resolve include {target}: {reason}",
            location=location,
            hint=hint,
        )
