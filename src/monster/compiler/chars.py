"""
Character classification for Monster identifiers and numbers.

Identifiers are restricted to ASCII letters, digits and underscores. These
predicates are also used outside the tokenizer, for example to validate
names supplied by a host application.
"""

import string

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)


def is_ident_start(char: str) -> bool:
    """Return True if char may start an identifier (letter or underscore)."""
    return char in IDENT_START


def is_ident_char(char: str) -> bool:
    """Return True if char may appear after the first identifier character."""
    return char in IDENT_CHARS


def is_digit(char: str) -> bool:
    """Return True if char is a decimal digit 0-9."""
    return char in DIGITS


def is_valid_identifier(name: str) -> bool:
    """
    Check whether a whole string is a valid identifier.

    >>> is_valid_identifier("player_1")
    True
    >>> is_valid_identifier("1player")
    False
    """
    if not name:
        return False
    if not is_ident_start(name[0]):
        return False
    return all(is_ident_char(c) for c in name)
