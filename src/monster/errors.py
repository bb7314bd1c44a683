"""
Monster Error Hierarchy
=======================

This module defines the root of the exception hierarchy for the Monster
toolchain. All exceptions inherit from MonsterError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
MonsterError (base)
├── LexError - lexical errors raised by the tokenizer
└── TokenTableError - invalid token table (startup fault)

The concrete classes live in ``monster.compiler.errors``.

Error messages follow this format:
    filename:line: description
        source_line_text
    hint: suggestion for fixing (when available)

Errors raised while tokenizing a single line (console mode) carry no
location and omit the ``filename:line:`` prefix.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class MonsterError(Exception):
    """
    Base exception for all Monster toolchain errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch every toolchain error with a single except clause:

        try:
            tokens = tokenize_file("script.mn")
        except MonsterError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class Location:
    """
    Represents a location in source code for error reporting.

    Tokens record the line they were read from, not a column: the tokenizer
    works on whole lines and the parser only needs line granularity for its
    diagnostics. No file handle is retained, only the name.

    Attributes:
        filename: Name of the source (or "<input>" for in-memory input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"
