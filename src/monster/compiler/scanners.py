"""
Number, Identifier and Operator Scanners
========================================

Each scanner looks at the start of the remaining line and reports the kind
and spelling of the token found there. None of them modify the line; the
tokenizer removes the spelling afterwards.

Numbers
-------
Numbers are scanned by shape only. A number starts with a digit, or with a
dot followed by a digit, and continues over identifier characters and
single dots, so 0x1F, 1_000_000 and 3.5e10 are all single tokens. Turning
the text into a value is the parser's job.

Two dots in a row end the number without either dot, so that ranges like
1..5 come out as INT_LITERAL, DDOT, INT_LITERAL. A number containing a
dot is a FLOAT_LITERAL, anything else an INT_LITERAL.

Identifiers
-----------
Identifiers starting with a double underscore are reserved for the
runtime; only __STACK__ may be used in scripts. Keywords are reported with
their canonical spelling from the token table.

Operators
---------
Operators are matched by longest spelling, so "!=" is never read as "!"
followed by "=".
"""

from typing import Optional

from monster.errors import Location
from monster.compiler.chars import is_digit, is_ident_char, is_ident_start
from monster.compiler.errors import LexError, LexErrorKind
from monster.compiler.tokens import CANONICAL_KINDS, TT, TokenTable

RESERVED_PREFIX = "__"

# Names with the reserved prefix that scripts may still use
ALLOWED_RESERVED_NAMES = frozenset({"__STACK__"})


# =============================================================================
# Numeric Literals
# =============================================================================

def starts_number(line: str) -> bool:
    """Return True if line starts with a digit, or a dot followed by a digit."""
    if not line:
        return False
    if is_digit(line[0]):
        return True
    return len(line) >= 2 and line[0] == "." and is_digit(line[1])


def scan_number(line: str) -> tuple[TT, str]:
    """
    Scan the numeric literal at the start of line.

    Returns:
        (INT_LITERAL or FLOAT_LITERAL, spelling)
    """
    length = 1
    dots = 1 if line[0] == "." else 0
    last_dot = dots == 1

    for char in line[1:]:
        if char == ".":
            # ".." might be an operator: give back the dot we already took
            if last_dot:
                length -= 1
                dots -= 1
                break
            last_dot = True
            dots += 1
        else:
            if not is_ident_char(char):
                break
            last_dot = False
        length += 1

    text = line[:length]
    if dots:
        return TT.FLOAT_LITERAL, text
    return TT.INT_LITERAL, text


# =============================================================================
# Identifiers and Keywords
# =============================================================================

def scan_identifier(
    line: str,
    table: TokenTable,
    location: Optional[Location] = None,
) -> tuple[TT, str]:
    """
    Scan the identifier or keyword at the start of line.

    Args:
        line: Remaining source text, starting with an identifier start char
        table: Token table used for the keyword lookup
        location: Source location for error messages

    Returns:
        (keyword kind, canonical spelling) or (IDENTIFIER, name)

    Raises:
        LexError: If the name uses the reserved double underscore prefix
    """
    length = 1
    while length < len(line) and is_ident_char(line[length]):
        length += 1
    name = line[:length]

    if name.startswith(RESERVED_PREFIX) and name not in ALLOWED_RESERVED_NAMES:
        raise LexError(
            f"identifier {name} is not allowed to begin with {RESERVED_PREFIX}",
            LexErrorKind.RESERVED_IDENTIFIER,
            location,
            hint="names starting with __ are reserved for internal use",
        )

    keyword = table.lookup_keyword(name)
    if keyword is not None:
        return keyword, table.spelling(keyword)

    return TT.IDENTIFIER, name


def starts_identifier(line: str) -> bool:
    return bool(line) and is_ident_start(line[0])


# =============================================================================
# Operators and Punctuation
# =============================================================================

def match_operator(
    line: str,
    table: TokenTable,
    case_insensitive_ops: bool = True,
    location: Optional[Location] = None,
) -> tuple[TT, str]:
    """
    Find the longest operator spelling that starts line.

    Args:
        line: Remaining source text
        table: Token table supplying the operator entries
        case_insensitive_ops: Whether the =i= family takes part
        location: Source location for error messages

    Returns:
        (operator kind, spelling). The upper case =I= and !=I= spellings are
        reported with the IS_CASE_EQUAL and NOT_CASE_EQUAL kinds.

    Raises:
        LexError: If no operator matches ("invalid token")
    """
    match: Optional[TT] = None
    match_text = ""

    for kind, spelling in table.operators(case_insensitive_ops):
        # Spellings are unique, so two matches never have the same length
        if len(spelling) > len(match_text) and line.startswith(spelling):
            match = kind
            match_text = spelling

    if match is None:
        raise LexError(
            f"invalid token {line}",
            LexErrorKind.INVALID_TOKEN,
            location,
        )

    return CANONICAL_KINDS.get(match, match), match_text
