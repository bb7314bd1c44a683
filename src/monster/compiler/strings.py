"""
String Literal Decoder
======================

This module decodes Monster string literals. It is given the remainder of
a source line starting at a string literal, and returns both the raw
spelling consumed from the line and the decoded value.

Literal Forms
-------------
| Opening    | Terminator | Escapes |
|------------|------------|---------|
| "  or  '   | same quote | yes     |
| r" or r'   | same quote | no      |
| \\" or \\' | same quote | no      |

The r and backslash forms are "wysiwyg" strings: every character except
the terminating quote is taken literally, so r"c:\\dir" is the seven
characters c, :, \\, d, i, r. In every form a doubled quote ("" inside a
double quoted string, '' inside a single quoted one) stands for one quote
character.

Escape Sequences
----------------
| Escape       | Value                          |
|--------------|--------------------------------|
| \\" \\' \\\\ | the character itself           |
| \\a \\b \\f  | bell (7), backspace (8), form feed (12) |
| \\n \\r \\t  | newline, carriage return, tab  |
| \\v \\e      | vertical tab (11), ANSI escape (27) |
| \\0N \\oN    | octal, 1-3 digits              |
| \\N          | decimal, 1-3 digits, N = 1-9 first |
| \\xNN        | hex, 1-2 digits                |
| \\uNNNN      | Unicode, 1-4 hex digits        |
| \\UNNNNNNNN  | Unicode, 1-8 hex digits        |

String literals cannot span lines. A backslash at the very end of a line
is reported as an attempt at a multi-line literal.

Example Usage
-------------
>>> lit = decode_string_literal('"a\\tb" + x')
>>> lit.raw
'"a\\tb"'
>>> lit.decoded
'a\\tb'
"""

import string
from dataclasses import dataclass
from typing import Optional

from monster.errors import Location
from monster.compiler.errors import LexError, LexErrorKind


QUOTES = "\"'"

# Prefix characters that turn off escape processing
WYSIWYG_PREFIXES = "r\\"

NAMED_ESCAPES = {
    '"': '"',       # Double quote
    "'": "'",       # Single quote
    "\\": "\\",     # Backslash
    "a": "\a",      # Bell
    "b": "\b",      # Backspace
    "f": "\f",      # Form feed
    "n": "\n",      # Newline
    "r": "\r",      # Carriage return
    "t": "\t",      # Tab
    "v": "\v",      # Vertical tab
    "e": "\x1b",    # ANSI escape
}

OCTAL_DIGITS = "01234567"
DECIMAL_DIGITS = string.digits
HEX_DIGITS = string.hexdigits


@dataclass(frozen=True)
class NumericEscape:
    """
    How to read one kind of numeric escape.

    Attributes:
        skip: Characters to skip before the digits (backslash plus any
            introducer letter or digit that is not part of the number)
        max_digits: Longest digit run accepted
        base: Radix of the digits
        digits: Characters accepted as digits
        name: Name used in error messages
    """
    skip: int
    max_digits: int
    base: int
    digits: str
    name: str


_OCTAL = NumericEscape(2, 3, 8, OCTAL_DIGITS, "octal")
_DECIMAL = NumericEscape(1, 3, 10, DECIMAL_DIGITS, "decimal")

NUMERIC_ESCAPES = {
    "0": _OCTAL,
    "o": _OCTAL,
    "x": NumericEscape(2, 2, 16, HEX_DIGITS, "hex"),
    "u": NumericEscape(2, 4, 16, HEX_DIGITS, "Unicode hex"),
    "U": NumericEscape(2, 8, 16, HEX_DIGITS, "Unicode hex"),
}
# \1 to \9 start a decimal escape whose first digit is part of the number
NUMERIC_ESCAPES.update({d: _DECIMAL for d in "123456789"})

MAX_CODE_POINT = 0x10FFFF


@dataclass(frozen=True)
class StringLiteral:
    """
    A decoded string literal.

    Attributes:
        raw: The source spelling, including quotes and any prefix
        decoded: The literal's value with all escapes resolved
        quote: The quote character that delimits the literal
        wysiwyg: True if escapes were not interpreted
    """
    raw: str
    decoded: str
    quote: str
    wysiwyg: bool


def starts_string_literal(line: str) -> bool:
    """Return True if line begins with any of the string literal openings."""
    if line and line[0] in QUOTES:
        return True
    return len(line) >= 2 and line[0] in WYSIWYG_PREFIXES and line[1] in QUOTES


def decode_string_literal(
    line: str,
    location: Optional[Location] = None,
) -> StringLiteral:
    """
    Decode the string literal at the start of line.

    Only the literal itself is consumed; anything after the closing quote
    is left for the caller (len(result.raw) tells how much was used).

    Args:
        line: Source text beginning with a string literal opening
        location: Where the line came from, for error messages. None in
            single-line mode.

    Returns:
        The raw spelling and decoded value of the literal

    Raises:
        LexError: If the literal is unterminated or contains a bad escape
        ValueError: If line does not start with a string literal
    """
    if not starts_string_literal(line):
        raise ValueError(f"no string literal at start of {line!r}")

    if line[0] in QUOTES:
        quote = line[0]
        wysiwyg = False
        pos = 1
    else:
        quote = line[1]
        wysiwyg = True
        pos = 2

    doubled = quote * 2
    result: list[str] = []

    while pos < len(line):
        # "" or '' is a literal quote in every form
        if line.startswith(doubled, pos):
            result.append(quote)
            pos += 2
            continue

        char = line[pos]

        if char == "\\" and not wysiwyg:
            pos = _decode_escape(line, pos, result, location)
            continue

        if char == quote:
            pos += 1
            return StringLiteral(line[:pos], "".join(result), quote, wysiwyg)

        result.append(char)
        pos += 1

    raise LexError(
        f"unterminated string literal '{line}'",
        LexErrorKind.UNTERMINATED_STRING,
        location,
        hint=f"add the closing {quote} on the same line",
    )


def _decode_escape(
    line: str,
    pos: int,
    result: list[str],
    location: Optional[Location],
) -> int:
    """
    Decode the backslash escape at line[pos].

    Appends the decoded character to result and returns the position just
    after the escape.
    """
    if pos + 1 >= len(line):
        raise LexError(
            "multiline string literals not supported",
            LexErrorKind.MULTILINE_STRING,
            location,
            source_line=line,
        )

    code = line[pos + 1]

    named = NAMED_ESCAPES.get(code)
    if named is not None:
        result.append(named)
        return pos + 2

    numeric = NUMERIC_ESCAPES.get(code)
    if numeric is not None:
        start = pos + numeric.skip
        end = start
        while (
            end < len(line)
            and end - start < numeric.max_digits
            and line[end] in numeric.digits
        ):
            end += 1

        if end == start:
            raise LexError(
                f"invalid {numeric.name} escape code",
                LexErrorKind.INVALID_ESCAPE,
                location,
                source_line=line,
            )

        value = int(line[start:end], numeric.base)
        if value > MAX_CODE_POINT:
            raise LexError(
                f"invalid {numeric.name} escape code: "
                f"0x{value:X} is beyond U+{MAX_CODE_POINT:X}",
                LexErrorKind.INVALID_ESCAPE,
                location,
                source_line=line,
            )
        result.append(chr(value))
        return end

    raise LexError(
        f"unhandled escape code: \\{code}",
        LexErrorKind.UNHANDLED_ESCAPE,
        location,
        hint="use \\\\ for a literal backslash, or a r\"...\" string",
        source_line=line,
    )


# =============================================================================
# Encoding (used for diagnostics output)
# =============================================================================

_ESCAPE_FOR_CHAR = {
    value: code
    for code, value in NAMED_ESCAPES.items()
    if code not in QUOTES
}


def escape_string(value: str, quote: str = '"') -> str:
    """
    Spell a decoded value as an escaped string literal.

    The quote character is written doubled; other characters with a named
    escape use it, and remaining control characters use \\x or \\u.
    Decoding the result gives back value.

    >>> escape_string('say "hi"\\n')
    '"say ""hi""\\\\n"'
    """
    if quote not in QUOTES:
        raise ValueError(f"invalid quote character {quote!r}")

    parts = [quote]
    for char in value:
        if char == quote:
            parts.append(quote * 2)
        elif char in _ESCAPE_FOR_CHAR:
            parts.append("\\" + _ESCAPE_FOR_CHAR[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\x{ord(char):02x}")
        elif not char.isprintable():
            parts.append(f"\\U{ord(char):08x}")
        else:
            parts.append(char)
    parts.append(quote)
    return "".join(parts)
