"""
Monster Tokenizer
=================

This module turns Monster source text into tokens for the parser. It pulls
one line at a time from the input, strips comments, and then tries each
recognizer in a fixed order:

    1. string literals   "abc", 'abc', r"c:\\dir", \\"c:\\dir"
    2. numeric literals  42, 0x1F, 1_000, 3.14, .5
    3. identifiers and keywords
    4. operators and punctuation (longest match)

The first recognizer that matches produces the token. Its spelling, and
any whitespace after it, is then removed from the line so the next call
starts at the following token.

Modes
-----
File mode reads lines from a stream and ends with exactly one EOF token.
Errors carry the file name and line number.

Single-line mode, for consoles, tokenizes text handed over with set_line().
next_from_line() returns None once the line is used up, and errors carry
no location. Comment state persists between lines in both modes.

Token Flags
-----------
The first token read from each line has starts_line set. The parser uses
it to decide where statements end. A '}' token always has it set, and so
does the EOF token.

Directive Lines
---------------
In file mode, with skip_directive_lines on, a '#' found where a token could
start (outside comments) ends the line: "#!/usr/bin/monster" is ignored,
and "x # note" yields only x.

Example Usage
-------------
>>> from monster.compiler import tokenize_file
>>> for token in tokenize_file("hello.mn"):
...     print(repr(token))
Token(IDENTIFIER, 'print', hello.mn:1)
Token(LEFT_PAREN, '(', hello.mn:1)
Token(STRING_LITERAL, '"Hello"' -> 'Hello', hello.mn:1)
Token(RIGHT_PAREN, ')', hello.mn:1)
Token(SEMICOLON, ';', hello.mn:1)
Token(EOF, '<end of file>', hello.mn:1)
"""

import logging
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from monster.errors import Location
from monster.options import TokenizerOptions
from monster.compiler.comments import CommentFilter
from monster.compiler.errors import LexError, LexErrorKind
from monster.compiler.scanners import (
    match_operator,
    scan_identifier,
    scan_number,
    starts_identifier,
    starts_number,
)
from monster.compiler.source import Bom, check_bom, open_source
from monster.compiler.strings import decode_string_literal, starts_string_literal
from monster.compiler.tokens import TT, Token, TokenTable, default_token_table

logger = logging.getLogger(__name__)

EOF_TEXT = "<end of file>"
DIRECTIVE_MARKER = "#"
LINE_MODE_NAME = "<input>"


# =============================================================================
# Tokenizer Implementation
# =============================================================================

class Tokenizer:
    """
    Tokenizes Monster source, one token per call.

    Usage (file mode):
        with Tokenizer.open("script.mn") as tokenizer:
            tokens = tokenizer.tokenize()

    Usage (single-line mode):
        tokenizer = Tokenizer()
        tokenizer.set_line("x = 1")
        while (token := tokenizer.next_from_line()) is not None:
            ...

    A tokenizer is not thread safe, and must be discarded after it raises
    a LexError.

    Attributes:
        filename: Source name used in locations and error messages
        options: The TokenizerOptions in effect
        table: The token table used for keywords and operators
        comments: The comment state machine
    """

    def __init__(
        self,
        filename: Optional[str] = None,
        stream: Optional[IO] = None,
        bom: Bom = Bom.NONE,
        *,
        options: Optional[TokenizerOptions] = None,
        table: Optional[TokenTable] = None,
        owns_stream: bool = False,
    ):
        """
        Create a tokenizer.

        Args:
            filename: Name of the source, for error messages
            stream: Line-oriented text or binary stream. None selects
                single-line mode.
            bom: Byte order mark detected at the start of the stream
            options: Tokenizer options (defaults if None)
            table: Token table (the process-wide table if None)
            owns_stream: Close the stream when the tokenizer is closed

        Raises:
            LexError: If bom names an unsupported encoding
        """
        if stream is not None:
            check_bom(bom, filename or LINE_MODE_NAME)

        self.filename = filename or LINE_MODE_NAME
        self.options = options or TokenizerOptions()
        self.table = table or default_token_table()
        self.comments = CommentFilter()

        self._stream = stream
        self._owns_stream = owns_stream and stream is not None
        self._bom = bom
        self._closed = False

        # Unconsumed rest of the current line
        self._line = ""
        self._line_num = 0
        self._starts_line = False

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        options: Optional[TokenizerOptions] = None,
    ) -> "Tokenizer":
        """
        Open a source file for tokenizing.

        The returned tokenizer owns the file; use it as a context manager or
        call close() when done. A tokenizer dropped without either still
        closes the file when it is garbage collected.
        """
        stream, bom = open_source(path)
        try:
            return cls(str(path), stream, bom, options=options, owns_stream=True)
        except BaseException:
            stream.close()
            raise

    # =========================================================================
    # Resource Handling
    # =========================================================================

    def close(self) -> None:
        """Close the stream if this tokenizer owns it. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if self._owns_stream:
            logger.debug(f"Closing {self.filename}")
            self._stream.close()

    def __del__(self) -> None:
        # __init__ may have raised before the stream was attached
        if getattr(self, "_owns_stream", False):
            self.close()

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # Public Interface
    # =========================================================================

    @property
    def file_mode(self) -> bool:
        return self._stream is not None

    @property
    def line_number(self) -> int:
        return self._line_num

    def next_token(self) -> Token:
        """
        Return the next token from the stream.

        After the last real token this returns an EOF token; further calls
        keep returning EOF tokens.

        Raises:
            LexError: On any lexical error
            RuntimeError: If called in single-line mode
        """
        if not self.file_mode:
            raise RuntimeError("next_token() requires a stream; use next_from_line()")

        while True:
            while not self._line:
                text = self._read_line()
                if text is None:
                    self.comments.check_closed(self._location())
                    return self._eof_token()
                self._start_line(text)

            token = self._scan_line()
            if token is not None:
                return token

    def set_line(self, text: str) -> None:
        """
        Give a new line to a single-line mode tokenizer.

        Any text left over from the previous line is discarded.

        Raises:
            RuntimeError: If the tokenizer reads from a stream
        """
        if self.file_mode:
            raise RuntimeError("set_line() is only supported in single-line mode")
        self._start_line(text)

    def next_from_line(self) -> Optional[Token]:
        """
        Return the next token from the current line, or None at its end.

        In file mode this only looks at the line already read, so it never
        triggers a read from the stream.

        Raises:
            LexError: On any lexical error
        """
        return self._scan_line()

    def tokenize(self) -> list[Token]:
        """Read all remaining tokens, ending with the EOF token."""
        tokens = list(self)
        logger.debug(f"Tokenized {self.filename}: {len(tokens)} tokens")
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TT.EOF:
                return

    # =========================================================================
    # Line Handling
    # =========================================================================

    def _read_line(self) -> Optional[str]:
        """Read the next raw line from the stream, or None at end of input."""
        raw = self._stream.readline()
        if not raw:
            return None

        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise LexError(
                    f"invalid UTF-8 sequence: {e.reason}",
                    LexErrorKind.INVALID_ENCODING,
                    Location(self.filename, self._line_num + 1),
                ) from e

        # Text streams opened as plain utf-8 keep the mark as U+FEFF
        if self._line_num == 0 and self._bom is Bom.UTF8:
            raw = raw.lstrip("\ufeff")

        return raw

    def _start_line(self, text: str) -> None:
        self._line = text.strip()
        self._line_num += 1
        self._starts_line = True

    def _location(self) -> Optional[Location]:
        """Location for error messages: None in single-line mode."""
        if not self.file_mode:
            return None
        return Location(self.filename, self._line_num)

    # =========================================================================
    # Token Recognition
    # =========================================================================

    def _scan_line(self) -> Optional[Token]:
        """
        Produce the next token from the current line.

        Returns:
            The token, or None if nothing but whitespace and comments is
            left on the line
        """
        location = self._location()

        line = self.comments.filter(self._line, location)
        self._line = line
        if not line:
            return None

        if self._at_directive(line):
            logger.debug(f"{location}: skipping directive {line!r}")
            self._line = ""
            return None

        if starts_string_literal(line):
            literal = decode_string_literal(line, location)
            return self._make_token(TT.STRING_LITERAL, literal.raw, literal.decoded)

        if starts_number(line):
            kind, text = scan_number(line)
            return self._make_token(kind, text)

        if starts_identifier(line):
            kind, text = scan_identifier(line, self.table, location)
            return self._make_token(kind, text)

        kind, text = match_operator(
            line,
            self.table,
            self.options.case_insensitive_comparison_operators,
            location,
        )
        return self._make_token(kind, text)

    def _at_directive(self, line: str) -> bool:
        """
        Check whether the rest of the line is a '#' directive to ignore.

        Only applies in file mode, outside comments, and when
        skip_directive_lines is on. The check runs at every token
        boundary, so "x # note" yields just x.
        """
        return (
            self.file_mode
            and self.options.skip_directive_lines
            and not self.comments.in_comment
            and line.startswith(DIRECTIVE_MARKER)
        )

    def _make_token(self, kind: TT, text: str, decoded: str = "") -> Token:
        """
        Create a token and remove its spelling from the line.

        Whitespace following the spelling is removed too.
        """
        assert self._line.startswith(text), f"{text!r} is not at the start of the line"

        token = Token(
            type=kind,
            text=text,
            location=Location(self.filename, max(self._line_num, 1)),
            starts_line=self._starts_line or kind is TT.RIGHT_CURL,
            decoded=decoded,
        )

        self._line = self._line[len(text):].lstrip()
        self._starts_line = False
        return token

    def _eof_token(self) -> Token:
        return Token(
            type=TT.EOF,
            text=EOF_TEXT,
            location=Location(self.filename, max(self._line_num, 1)),
            starts_line=True,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize_stream(
    filename: str,
    stream: IO,
    bom: Bom = Bom.NONE,
    options: Optional[TokenizerOptions] = None,
) -> list[Token]:
    """
    Read an entire stream into a list of tokens, ending with EOF.

    The stream is not closed.
    """
    return Tokenizer(filename, stream, bom, options=options).tokenize()


def tokenize_file(
    path: Union[str, Path],
    options: Optional[TokenizerOptions] = None,
) -> list[Token]:
    """
    Tokenize a source file, ending with EOF.

    The file is closed before returning, including when an error is raised.
    """
    with Tokenizer.open(path, options) as tokenizer:
        return tokenizer.tokenize()


def tokenize_line(
    text: str,
    options: Optional[TokenizerOptions] = None,
) -> list[Token]:
    """
    Tokenize a single line in single-line mode.

    No EOF token is added, and errors carry no location.
    """
    tokenizer = Tokenizer(options=options)
    tokenizer.set_line(text)
    tokens = []
    while (token := tokenizer.next_from_line()) is not None:
        tokens.append(token)
    return tokens
