"""
Monster Compiler Front End
==========================

This package implements the lexical front end of the Monster scripting
language compiler: it converts source text into the flat token sequence
the parser consumes.

Pipeline
--------
    Source lines → Comment filter → Recognizers → Tokens → Parser

Modules
-------
- chars: character classification for identifiers and numbers
- tokens: token kinds, the Token record and the token table
- strings: string literal decoding
- scanners: number, identifier and operator scanners
- comments: the line/block/nested comment state machine
- source: byte order mark detection and file opening
- tokenizer: the line driver tying it all together

Usage
-----
>>> from monster.compiler import tokenize_line, TT
>>> [t.type for t in tokenize_line("x += 1..5")]
[<TT.IDENTIFIER: ...>, <TT.PLUS_EQ: ...>, <TT.INT_LITERAL: ...>, <TT.DDOT: ...>, <TT.INT_LITERAL: ...>]
"""

from monster.compiler.chars import (
    is_digit,
    is_ident_char,
    is_ident_start,
    is_valid_identifier,
)
from monster.compiler.comments import CommentFilter, CommentMode
from monster.compiler.errors import LexError, LexErrorKind, TokenTableError
from monster.compiler.source import Bom, detect_bom, open_source
from monster.compiler.strings import StringLiteral, decode_string_literal, escape_string
from monster.compiler.tokenizer import (
    Tokenizer,
    tokenize_file,
    tokenize_line,
    tokenize_stream,
)
from monster.compiler.tokens import (
    TT,
    Token,
    TokenTable,
    default_token_table,
    init_token_table,
)

__all__ = [
    # Characters
    "is_digit",
    "is_ident_char",
    "is_ident_start",
    "is_valid_identifier",
    # Tokens
    "TT",
    "Token",
    "TokenTable",
    "default_token_table",
    "init_token_table",
    # Strings
    "StringLiteral",
    "decode_string_literal",
    "escape_string",
    # Comments
    "CommentFilter",
    "CommentMode",
    # Input
    "Bom",
    "detect_bom",
    "open_source",
    # Tokenizer
    "Tokenizer",
    "tokenize_file",
    "tokenize_line",
    "tokenize_stream",
    # Errors
    "LexError",
    "LexErrorKind",
    "TokenTableError",
]
