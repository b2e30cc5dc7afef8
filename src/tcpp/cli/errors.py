"""
CLI Error Handling
==================

Maps exceptions to messages and exit codes for the tcpp command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes of the tcpp command."""
    SUCCESS = 0
    PREPROCESS_ERROR = 1  # Unreadable source file or other preprocessing error
    INVALID_ARGS = 2      # Invalid arguments or missing files
    INTERNAL_ERROR = 3    # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while preprocessing and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print the traceback of internal errors

    Raises:
        SystemExit: Always, with the matching ExitCode
    """
    from tcpp.errors import TcppError

    if isinstance(error, TcppError):
        # Already formatted with an "error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.PREPROCESS_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, MemoryError):
        click.echo("Internal error: out of memory", err=True)
        sys.exit(ExitCode.INTERNAL_ERROR)

    elif isinstance(error, RecursionError):
        click.echo("Internal error: includes nested too deeply (include cycle?)", err=True)
        sys.exit(ExitCode.INTERNAL_ERROR)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
