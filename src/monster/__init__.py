"""
Monster - Tokenizer for the Monster Game Scripting Language
===========================================================

This package provides the lexical front end for Monster, a scripting
language for games. It converts script source into the token sequence
consumed by the Monster parser.

Main Components
---------------
- **compiler**: the tokenizer and its building blocks
    Character classes, token table, string decoding, comment handling

- **options**: tokenizer configuration
    Case-insensitive comparison operators, directive line skipping

- **cli**: command-line tools
    mtok, which prints the tokens of a script

Quick Start
-----------
Tokenize a file:
    >>> from monster import tokenize_file
    >>> tokens = tokenize_file("hello.mn")

Tokenize a single line (console use):
    >>> from monster import tokenize_line
    >>> [str(t) for t in tokenize_line('print("hi")')]
    ['print', '(', '"hi"', ')']

Or use the command-line tool:
    $ mtok hello.mn
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from monster.errors import MonsterError, Location
from monster.options import TokenizerOptions
from monster.compiler import (
    TT,
    Token,
    Tokenizer,
    LexError,
    LexErrorKind,
    TokenTableError,
    is_valid_identifier,
    tokenize_file,
    tokenize_line,
    tokenize_stream,
)

__all__ = [
    "__version__",
    # Errors
    "MonsterError",
    "Location",
    "LexError",
    "LexErrorKind",
    "TokenTableError",
    # Configuration
    "TokenizerOptions",
    # Tokenizer
    "TT",
    "Token",
    "Tokenizer",
    "is_valid_identifier",
    "tokenize_file",
    "tokenize_line",
    "tokenize_stream",
]
