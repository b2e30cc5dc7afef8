"""
tcpp Command-Line Interface
===========================

This package provides the `tcpp` command, a Click-based application that
runs the preprocessor on a single "*.c" file.
"""

__all__ = ["tcpp"]
