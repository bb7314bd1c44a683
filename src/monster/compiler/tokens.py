"""
Monster Token Types and Token Table
===================================

This module defines the token kinds produced by the tokenizer, the Token
record itself, and the table mapping each kind to its spelling.

Token Kind Ranges
-----------------
The TT enumeration is ordered and split into four contiguous ranges:

| Range     | First member     | Spelling used for                 |
|-----------|------------------|-----------------------------------|
| Operators | SEMICOLON        | longest-match scanning            |
| Keywords  | CLASS            | keyword lookup after identifiers  |
| Literals  | STRING_LITERAL   | error messages only               |
| Sentinels | EOF              | error messages only               |

Every operator and keyword has a unique, non-empty spelling. The keyword
lookup is built once, by init_token_table(), and is read-only afterwards.

Example Usage
-------------
>>> table = default_token_table()
>>> table.lookup_keyword("while")
<TT.WHILE: ...>
>>> table.spelling(TT.NOT_EQUAL)
'!='
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Optional

from monster.errors import Location
from monster.compiler.chars import is_valid_identifier
from monster.compiler.errors import TokenTableError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TT(Enum):
    """
    Token types for the Monster language.

    The member order matters: operators come first, then keywords starting
    at CLASS, then literal kinds, then sentinels. Operators are matched in
    this order when scanning.
    """

    # === Syntax Characters ===
    SEMICOLON = auto()          # ;
    DDDOT = auto()              # ...
    DDOT = auto()               # ..
    LEFT_PAREN = auto()         # (
    RIGHT_PAREN = auto()        # )
    LEFT_CURL = auto()          # {
    RIGHT_CURL = auto()         # }
    LEFT_SQUARE = auto()        # [
    RIGHT_SQUARE = auto()       # ]
    DOT = auto()                # .
    COMMA = auto()              # ,
    COLON = auto()              # :
    DOLLAR = auto()             # $ (array length)
    ALPHA = auto()              # @

    # === Conditional Operators ===
    IS_EQUAL = auto()           # ==
    NOT_EQUAL = auto()          # !=
    IS_CASE_EQUAL = auto()      # =i=
    IS_CASE_EQUAL2 = auto()     # =I= (reported as IS_CASE_EQUAL)
    NOT_CASE_EQUAL = auto()     # !=i=
    NOT_CASE_EQUAL2 = auto()    # !=I= (reported as NOT_CASE_EQUAL)
    LESS = auto()               # <
    MORE = auto()               # >
    LESS_EQ = auto()            # <=
    MORE_EQ = auto()            # >=
    AND = auto()                # &&
    OR = auto()                 # ||
    NOT = auto()                # !

    # === Assignment Operators ===
    EQUALS = auto()             # =
    PLUS_EQ = auto()            # +=
    MINUS_EQ = auto()           # -=
    MULT_EQ = auto()            # *=
    DIV_EQ = auto()             # /=
    REM_EQ = auto()             # %=
    IDIV_EQ = auto()            # \=
    CAT_EQ = auto()             # ~=

    # === Increment/Decrement ===
    PLUS_PLUS = auto()          # ++
    MINUS_MINUS = auto()        # --

    # === Arithmetic Operators ===
    PLUS = auto()               # +
    MINUS = auto()              # -
    MULT = auto()               # *
    DIV = auto()                # /
    REM = auto()                # %
    IDIV = auto()               # \ (integer division)
    CAT = auto()                # ~ (concatenation)

    # === Keywords (CLASS must stay first) ===
    CLASS = auto()
    MODULE = auto()
    SINGLETON = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    FOREACH = auto()
    FOREACH_REV = auto()
    DO = auto()
    WHILE = auto()
    UNTIL = auto()
    CONTINUE = auto()
    BREAK = auto()
    TYPEOF = auto()
    RETURN = auto()
    SWITCH = auto()
    SELECT = auto()
    STATE = auto()
    STRUCT = auto()
    ENUM = auto()
    IMPORT = auto()
    CLONE = auto()
    OVERRIDE = auto()
    FINAL = auto()
    FUNCTION = auto()
    WITH = auto()
    THIS = auto()
    NEW = auto()
    STATIC = auto()
    CONST = auto()
    OUT = auto()
    REF = auto()
    ABSTRACT = auto()
    IDLE = auto()
    PUBLIC = auto()
    PRIVATE = auto()
    PROTECTED = auto()
    TRUE = auto()
    FALSE = auto()
    NATIVE = auto()
    NULL = auto()
    GOTO = auto()
    VAR = auto()

    # === Literals (no fixed spelling) ===
    STRING_LITERAL = auto()     # "something" or 'something'
    INT_LITERAL = auto()        # anything starting with a digit, except floats
    FLOAT_LITERAL = auto()      # number containing a period
    IDENTIFIER = auto()         # user-named identifier

    # === Sentinels ===
    EOF = auto()                # end of file
    EMPTY = auto()              # empty line, never returned to the caller


_ALL_KINDS = list(TT)

OPERATOR_KINDS: tuple[TT, ...] = tuple(_ALL_KINDS[:_ALL_KINDS.index(TT.CLASS)])
KEYWORD_KINDS: tuple[TT, ...] = tuple(
    _ALL_KINDS[_ALL_KINDS.index(TT.CLASS):_ALL_KINDS.index(TT.STRING_LITERAL)]
)
LITERAL_KINDS: tuple[TT, ...] = (
    TT.STRING_LITERAL,
    TT.INT_LITERAL,
    TT.FLOAT_LITERAL,
    TT.IDENTIFIER,
)
SENTINEL_KINDS: tuple[TT, ...] = (TT.EOF, TT.EMPTY)

# The caseless comparison family, switched on and off as a group
CASE_INSENSITIVE_OPERATORS = frozenset({
    TT.IS_CASE_EQUAL,
    TT.IS_CASE_EQUAL2,
    TT.NOT_CASE_EQUAL,
    TT.NOT_CASE_EQUAL2,
})

# Upper case variants are reported as their lower case twins
CANONICAL_KINDS: Mapping[TT, TT] = MappingProxyType({
    TT.IS_CASE_EQUAL2: TT.IS_CASE_EQUAL,
    TT.NOT_CASE_EQUAL2: TT.NOT_CASE_EQUAL,
})


# =============================================================================
# Token Spellings
# =============================================================================

TOKEN_SPELLINGS: Mapping[TT, str] = MappingProxyType({
    TT.SEMICOLON: ";",
    TT.DDDOT: "...",
    TT.DDOT: "..",
    TT.LEFT_PAREN: "(",
    TT.RIGHT_PAREN: ")",
    TT.LEFT_CURL: "{",
    TT.RIGHT_CURL: "}",
    TT.LEFT_SQUARE: "[",
    TT.RIGHT_SQUARE: "]",
    TT.DOT: ".",
    TT.COMMA: ",",
    TT.COLON: ":",
    TT.DOLLAR: "$",
    TT.ALPHA: "@",

    TT.IS_EQUAL: "==",
    TT.NOT_EQUAL: "!=",
    TT.IS_CASE_EQUAL: "=i=",
    TT.IS_CASE_EQUAL2: "=I=",
    TT.NOT_CASE_EQUAL: "!=i=",
    TT.NOT_CASE_EQUAL2: "!=I=",
    TT.LESS: "<",
    TT.MORE: ">",
    TT.LESS_EQ: "<=",
    TT.MORE_EQ: ">=",
    TT.AND: "&&",
    TT.OR: "||",
    TT.NOT: "!",

    TT.EQUALS: "=",
    TT.PLUS_EQ: "+=",
    TT.MINUS_EQ: "-=",
    TT.MULT_EQ: "*=",
    TT.DIV_EQ: "/=",
    TT.REM_EQ: "%=",
    TT.IDIV_EQ: "\\=",
    TT.CAT_EQ: "~=",

    TT.PLUS_PLUS: "++",
    TT.MINUS_MINUS: "--",

    TT.PLUS: "+",
    TT.MINUS: "-",
    TT.MULT: "*",
    TT.DIV: "/",
    TT.REM: "%",
    TT.IDIV: "\\",
    TT.CAT: "~",

    TT.CLASS: "class",
    TT.MODULE: "module",
    TT.SINGLETON: "singleton",
    TT.IF: "if",
    TT.ELSE: "else",
    TT.FOR: "for",
    TT.FOREACH: "foreach",
    TT.FOREACH_REV: "foreach_reverse",
    TT.DO: "do",
    TT.WHILE: "while",
    TT.UNTIL: "until",
    TT.CONTINUE: "continue",
    TT.BREAK: "break",
    TT.TYPEOF: "typeof",
    TT.RETURN: "return",
    TT.SWITCH: "switch",
    TT.SELECT: "select",
    TT.STATE: "state",
    TT.STRUCT: "struct",
    TT.ENUM: "enum",
    TT.IMPORT: "import",
    TT.CLONE: "clone",
    TT.OVERRIDE: "override",
    TT.FINAL: "final",
    TT.FUNCTION: "function",
    TT.WITH: "with",
    TT.THIS: "this",
    TT.NEW: "new",
    TT.STATIC: "static",
    TT.CONST: "const",
    TT.OUT: "out",
    TT.REF: "ref",
    TT.ABSTRACT: "abstract",
    TT.IDLE: "idle",
    TT.PUBLIC: "public",
    TT.PRIVATE: "private",
    TT.PROTECTED: "protected",
    TT.TRUE: "true",
    TT.FALSE: "false",
    TT.NATIVE: "native",
    TT.NULL: "null",
    TT.GOTO: "goto",
    TT.VAR: "var",

    # Only used in error messages
    TT.STRING_LITERAL: "string literal",
    TT.INT_LITERAL: "integer literal",
    TT.FLOAT_LITERAL: "floating point literal",
    TT.IDENTIFIER: "identifier",
    TT.EOF: "end of file",
    TT.EMPTY: "empty line - you should never see this",
})


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Monster source.

    Attributes:
        type: The TT classification
        text: The exact source spelling consumed (canonical spelling for
            keywords and operators)
        location: Source name and line number
        starts_line: True if this was the first token on its line. A '}'
            token always has it set, since it also separates statements.
        decoded: The escape-resolved value of a string literal, empty for
            every other kind
    """
    type: TT
    text: str
    location: Location
    starts_line: bool = False
    decoded: str = ""

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.type is TT.STRING_LITERAL:
            return f"Token({self.type.name}, {self.text!r} -> {self.decoded!r}, {self.location})"
        return f"Token({self.type.name}, {self.text!r}, {self.location})"

    @property
    def line(self) -> int:
        return self.location.line

    def is_keyword(self) -> bool:
        """Return True if this token is a keyword."""
        return self.type in KEYWORD_KINDS

    def is_literal(self) -> bool:
        """Return True if this token is a string, integer or float literal."""
        return self.type in (TT.STRING_LITERAL, TT.INT_LITERAL, TT.FLOAT_LITERAL)


# =============================================================================
# Token Table
# =============================================================================

class TokenTable:
    """
    Immutable lookup tables derived from the token spellings.

    Construction validates the table; a violation raises TokenTableError.
    The checks are:
    - every kind has a non-empty spelling (a description for literals and
      sentinels)
    - no two operators or keywords share a spelling, so two matching
      operators can never tie on length during longest-match scanning
    - every keyword spelling is a valid identifier, otherwise the
      identifier scanner could never produce it

    Most code should use default_token_table() instead of building its own.
    """

    def __init__(self, spellings: Mapping[TT, str] = TOKEN_SPELLINGS):
        for kind in TT:
            if not spellings.get(kind, ""):
                raise TokenTableError(f"token {kind.name} has no spelling")

        seen: dict[str, TT] = {}
        for kind in OPERATOR_KINDS + KEYWORD_KINDS:
            spelling = spellings[kind]
            if spelling in seen:
                raise TokenTableError(
                    f"tokens {seen[spelling].name} and {kind.name} "
                    f"share the spelling {spelling!r}"
                )
            seen[spelling] = kind

        for kind in KEYWORD_KINDS:
            if not is_valid_identifier(spellings[kind]):
                raise TokenTableError(
                    f"keyword {kind.name} spelling {spellings[kind]!r} "
                    f"is not a valid identifier"
                )

        self._spellings = MappingProxyType(dict(spellings))
        self.keywords: Mapping[str, TT] = MappingProxyType(
            {spellings[kind]: kind for kind in KEYWORD_KINDS}
        )

        operators = tuple((kind, spellings[kind]) for kind in OPERATOR_KINDS)
        self._operators_all = operators
        self._operators_cs = tuple(
            entry for entry in operators if entry[0] not in CASE_INSENSITIVE_OPERATORS
        )

    def spelling(self, kind: TT) -> str:
        """Return the spelling of a kind (a description for literals and sentinels)."""
        return self._spellings[kind]

    def lookup_keyword(self, name: str) -> Optional[TT]:
        """Return the keyword kind spelled by name, or None."""
        return self.keywords.get(name)

    def operators(self, case_insensitive_ops: bool = True) -> tuple[tuple[TT, str], ...]:
        """
        Return the (kind, spelling) operator entries in table order.

        Args:
            case_insensitive_ops: Include the =i= family. When False those
                entries are left out entirely.
        """
        if case_insensitive_ops:
            return self._operators_all
        return self._operators_cs


# =============================================================================
# Process-wide Table
# =============================================================================

_token_table: Optional[TokenTable] = None


def init_token_table() -> TokenTable:
    """
    Build the process-wide token table.

    Raises:
        TokenTableError: If the table was already built, or is invalid
    """
    global _token_table
    if _token_table is not None:
        raise TokenTableError("token table has already been initialized")
    _token_table = TokenTable(TOKEN_SPELLINGS)
    logger.debug(
        f"Token table built: {len(OPERATOR_KINDS)} operators, "
        f"{len(KEYWORD_KINDS)} keywords"
    )
    return _token_table


def default_token_table() -> TokenTable:
    """Return the process-wide token table, building it on first use."""
    if _token_table is None:
        return init_token_table()
    return _token_table
