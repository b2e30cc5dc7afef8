# =============================================================================
# test_cli.py - tcpp Command-Line Tests
# =============================================================================
# Tests for the tcpp command, run through click's CliRunner.
# =============================================================================

from pathlib import Path

import pytest
from click.testing import CliRunner

from tcpp import __version__
from tcpp.cli.errors import ExitCode
from tcpp.cli.tcpp import default_output_path, main


SOURCE = "int x; // note\n#define N 5\nint y = N;\n"


@pytest.fixture
def runner():
    return CliRunner()


# =============================================================================
# Output
# =============================================================================

class TestOutput:
    """Tests for the written output and the summary."""

    def test_default_output_file(self, runner):
        """Without -o, main.c is written to main.o."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-i", "main.c"])

            assert result.exit_code == ExitCode.SUCCESS
            assert Path("main.o").read_text() == "int x; \n\nint y = 5;"
            assert "Non-empty lines: 3" in result.output
            assert "Comments: 1" in result.output
            assert "Wrote main.o" in result.output

    def test_explicit_output_file(self, runner):
        """-o names the output file."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-i", "main.c", "-o", "out.i"])

            assert result.exit_code == 0
            assert Path("out.i").exists()
            assert not Path("main.o").exists()

    def test_output_to_stdout(self, runner):
        """'-o -' prints the preprocessed text."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-i", "main.c", "-o", "-"])

            assert result.exit_code == 0
            assert "int y = 5;" in result.output
            assert not Path("main.o").exists()

    def test_quiet(self, runner):
        """-q suppresses all normal output."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-q", "-i", "main.c"])

            assert result.exit_code == 0
            assert result.output == ""
            assert Path("main.o").exists()

    def test_silent_alias(self, runner):
        """-s is an alias of -q."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-s", "-i", "main.c"])

            assert result.exit_code == 0
            assert result.output == ""

    def test_keep_comments(self, runner):
        """-c leaves comments in the output."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-c", "-i", "main.c"])

            assert result.exit_code == 0
            assert Path("main.o").read_text() == "int x; // note\n\nint y = 5;"

    def test_verbose(self, runner):
        """-v reports what is being done."""
        with runner.isolated_filesystem():
            Path("main.c").write_text(SOURCE)
            result = runner.invoke(main, ["-v", "-i", "main.c"])

            assert result.exit_code == 0
            assert "Preprocessing main.c" in result.output
            assert "Keep comments: no" in result.output

    def test_include(self, runner):
        """Included files are resolved next to the input file."""
        with runner.isolated_filesystem():
            Path("defs.h").write_text("#define SIZE 8\n")
            Path("main.c").write_text('#include "defs.h"\nchar buf[SIZE];\n')
            result = runner.invoke(main, ["-i", "main.c"])

            assert result.exit_code == 0
            assert Path("main.o").read_text() == "\nchar buf[8];"

    def test_unresolved_include_is_a_warning(self, runner):
        """A missing include is reported but output is still written."""
        with runner.isolated_filesystem():
            Path("main.c").write_text('#include "missing.h"\nint x;\n')
            result = runner.invoke(main, ["-i", "main.c"])

            assert result.exit_code == 0
            assert "missing.h" in result.output
            assert Path("main.o").exists()


# =============================================================================
# Argument Errors
# =============================================================================

class TestArgumentErrors:
    """Tests for rejected command lines."""

    @pytest.mark.parametrize("name", ["main.cpp", "main.h", ".c", "c"])
    def test_wrong_input_format(self, runner, name):
        """Input names must end in '.c' and have a stem."""
        result = runner.invoke(main, ["-i", name])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert 'Wrong C input file format ("*.c" expected).' in result.output

    def test_input_required(self, runner):
        """-i is mandatory."""
        result = runner.invoke(main, [])

        assert result.exit_code == 2
        assert "-i" in result.output

    def test_missing_input_file(self, runner):
        """A missing input file is a preprocessing error."""
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["-i", "missing.c"])

            assert result.exit_code == ExitCode.PREPROCESS_ERROR
            assert "cannot open" in result.output
            assert not Path("missing.o").exists()


# =============================================================================
# Miscellaneous
# =============================================================================

class TestMisc:
    """Tests for --version, --help and helpers."""

    def test_version(self, runner):
        """--version prints the program name and version."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "tcpp" in result.output
        assert __version__ in result.output

    def test_help(self, runner):
        """--help lists the options."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for option in ("--input", "--output", "--verbose", "--quiet", "--keep-comments"):
            assert option in result.output

    @pytest.mark.parametrize("source, expected", [
        ("main.c", "main.o"),
        ("dir/prog.c", "dir/prog.o"),
    ])
    def test_default_output_path(self, source, expected):
        """The trailing 'c' of the input name becomes 'o'."""
        assert default_output_path(Path(source)) == Path(expected)
