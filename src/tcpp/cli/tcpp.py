"""
tcpp - Command-Line Interface
=============================

Preprocesses a C source file from the terminal.

Usage Examples
--------------
Basic preprocessing (writes main.o next to main.c):
    $ tcpp -i main.c

With output file:
    $ tcpp -i main.c -o main.i

To standard output, keeping comments:
    $ tcpp -i main.c -o - -c

Verbose trace:
    $ tcpp -v -i main.c
"""

import logging
from pathlib import Path
from typing import Optional

import click

from tcpp import __version__
from tcpp.cli.errors import handle_cli_exception
from tcpp.preprocessor import PreprocessorOptions, preprocess_file


# =============================================================================
# Helpers
# =============================================================================

class ClickHandler(logging.Handler):
    """Logging handler that writes records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(self.format(record), err=True)


def configure_logging(verbose: bool, quiet: bool) -> None:
    """
    Route the library's log records to stderr.

    --verbose shows the DEBUG trace, --quiet hides everything but errors.
    """
    logger = logging.getLogger("tcpp")
    for handler in list(logger.handlers):
        if isinstance(handler, ClickHandler):
            logger.removeHandler(handler)

    handler = ClickHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)

    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.ERROR)
    else:
        logger.setLevel(logging.WARNING)


def validate_input_file(ctx: click.Context, param: click.Parameter, value: Path) -> Path:
    """Accept only "*.c" input file names."""
    name = str(value)
    if len(name) <= 2 or not name.endswith(".c"):
        raise click.BadParameter('Wrong C input file format ("*.c" expected).')
    return value


def default_output_path(input_file: Path) -> Path:
    """Derive the output name by turning the trailing 'c' into 'o' (main.c -> main.o)."""
    return Path(str(input_file)[:-1] + "o")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-i", "--input", "input_file",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    callback=validate_input_file,
    metavar="<file>",
    help='Name of the "*.c" input <file>',
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    metavar="<file>",
    help="Place output into <file> (default: input with .o, '-' for stdout)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Produce verbose output",
)
@click.option(
    "-q", "--quiet", "-s", "--silent", "quiet",
    is_flag=True,
    help="Do not produce any output at all",
)
@click.option(
    "-c", "--keep-comments", "--keep_comments", "keep_comments",
    is_flag=True,
    help="Keep the comments instead of removing them",
)
@click.version_option(version=__version__, prog_name="tcpp")
def main(
    input_file: Path,
    output: Optional[Path],
    verbose: bool,
    quiet: bool,
    keep_comments: bool,
) -> None:
    """
    Tomaszal's C PreProcessor (tcpp) -- a program for preprocessing C
    computer programming language.

    Resolves #include "file" and object-like #define directives, removes
    comments, and writes the result with the original layout preserved.

    \b
    Examples:
        tcpp -i main.c               # Outputs main.o
        tcpp -i main.c -o out.i      # Specify output file
        tcpp -i main.c -o -          # Write to stdout
        tcpp -c -i main.c            # Keep comments
    """
    configure_logging(verbose, quiet)
    if output is None:
        output = default_output_path(input_file)
    to_stdout = str(output) == "-"

    options = PreprocessorOptions(keep_comments=keep_comments)

    try:
        if verbose:
            click.echo(f"Preprocessing {input_file}...", err=to_stdout)
            click.echo(f"Keep comments: {'yes' if keep_comments else 'no'}", err=to_stdout)

        result = preprocess_file(input_file, options)

        if not quiet:
            click.echo(f"Non-empty lines: {result.line_count}", err=to_stdout)
            click.echo(f"Comments: {result.comment_count}", err=to_stdout)

        if to_stdout:
            click.echo(result.text)
        else:
            output.write_text(result.text, encoding="utf-8")
            if not quiet:
                click.echo(f"Wrote {output}")

        if verbose and result.diagnostics:
            click.echo(f"{len(result.diagnostics)} warning(s)", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
