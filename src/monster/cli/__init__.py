"""
Monster Command-Line Interface
==============================

This package provides command-line tools for the Monster toolchain:

- **mtok**: prints the tokens of a Monster script

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["mtok"]
