"""
Tokenizer Error Types
=====================

This module defines the errors raised by the Monster tokenizer. Both
inherit from MonsterError for consistent error handling across the
package.

Exception Hierarchy
-------------------
MonsterError
├── LexError - every lexical failure, tagged with a LexErrorKind
└── TokenTableError - the token table violates its invariants

A LexError is not recoverable: once one has been raised, the tokenizer
that raised it must be discarded. The tokenizer never catches or
downgrades these errors; they propagate unchanged to the caller, which
decides how to present them.

Error Message Format
--------------------
File mode errors carry the source name and line:

    script.mn:12: unterminated string literal '"hello'
        print("hello
    hint: add the closing " on the same line

Single-line (console) mode errors carry no location:

    invalid token #
"""

from enum import Enum, auto
from typing import Optional

from monster.errors import MonsterError, Location


# =============================================================================
# Lexical Error Classification
# =============================================================================

class LexErrorKind(Enum):
    """Classification of lexical failures."""

    UNSUPPORTED_ENCODING = auto()   # UTF-16/32 or unknown byte order mark
    INVALID_ENCODING = auto()       # Byte line is not valid UTF-8
    UNTERMINATED_COMMENT = auto()   # End of input inside /* */ or /+ +/
    UNMATCHED_COMMENT_END = auto()  # */ or +/ outside a comment
    UNTERMINATED_STRING = auto()    # No closing quote on the line
    INVALID_ESCAPE = auto()         # Numeric escape without digits, or out of range
    UNHANDLED_ESCAPE = auto()       # Unknown backslash escape
    MULTILINE_STRING = auto()       # Backslash at the end of the line
    RESERVED_IDENTIFIER = auto()    # Identifier starting with __
    INVALID_TOKEN = auto()          # Nothing matched at the current position


# =============================================================================
# Lexical Error
# =============================================================================

class LexError(MonsterError):
    """
    A lexical error in Monster source.

    Attributes:
        message: The error description
        kind: What went wrong, as a LexErrorKind
        location: Where the error occurred, or None in single-line mode
        hint: A suggestion for fixing the error
        source_line: The remaining source text at the error position
    """

    def __init__(
        self,
        message: str,
        kind: LexErrorKind,
        location: Optional[Location] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.kind = kind
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            script.mn:3: unhandled escape code: \\q
                "a\\qb"
            hint: use \\\\ for a literal backslash
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: {self.message}")
        else:
            parts.append(self.message)

        if self.source_line:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Token Table Fault
# =============================================================================

class TokenTableError(MonsterError):
    """
    The token table is malformed or was built twice.

    This is a programming error detected at startup. Well-formed input can
    never trigger it, which is why it is kept apart from LexError.
    """
    pass
