"""
Comment Handling
================

Monster has three kinds of comments:

- Line comments: // to the end of the line
- Block comments: /* ... */, which do not nest
- Nested comments: /+ ... +/, which may contain further /+ +/ pairs

Block and nested comments may span any number of lines, so the tokenizer
keeps a small state machine between lines:

    NORMAL --"/*"--> BLOCK --"*/"--> NORMAL
    NORMAL --"/+"--> NEST (depth 1)
    NEST   --"/+"--> NEST (depth + 1)
    NEST   --"+/"--> NEST (depth - 1), NORMAL when depth reaches 0

Comment markers are only recognized where a token could start. A "*/" or
"+/" found there outside a comment is an error, as is reaching the end of
the input while still inside a comment.
"""

import logging
from enum import Enum, auto
from typing import Optional

from monster.errors import Location
from monster.compiler.errors import LexError, LexErrorKind

logger = logging.getLogger(__name__)

LINE_COMMENT = "//"
BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"
NEST_OPEN = "/+"
NEST_CLOSE = "+/"


class CommentMode(Enum):
    """Where the tokenizer is relative to multi-line comments."""
    NORMAL = auto()     # Not in a comment
    BLOCK = auto()      # Inside /* */
    NEST = auto()       # Inside /+ +/, depth tracked separately


class CommentFilter:
    """
    Removes comments from the front of source lines.

    One instance lives as long as the tokenizer that owns it, since a
    comment opened on one line may close several lines later.

    Attributes:
        mode: The current CommentMode
        depth: Nesting level of /+ +/ comments, 0 unless mode is NEST
    """

    def __init__(self) -> None:
        self.mode = CommentMode.NORMAL
        self.depth = 0

    @property
    def in_comment(self) -> bool:
        return self.mode is not CommentMode.NORMAL

    def filter(self, line: str, location: Optional[Location] = None) -> str:
        """
        Skip comments at the start of line.

        Args:
            line: Remaining text of the current line, without leading
                whitespace
            location: Source location for error messages

        Returns:
            The text left once all leading comments are removed. An empty
            string means the rest of the line was comment.

        Raises:
            LexError: If a comment close marker appears outside a comment
        """
        while True:
            if self.mode is CommentMode.BLOCK:
                line = self._skip_block(line)
            elif self.mode is CommentMode.NEST:
                line = self._skip_nest(line)

            if not line or line.startswith(LINE_COMMENT):
                return ""

            if line.startswith(BLOCK_OPEN):
                self._enter(CommentMode.BLOCK)
                line = line[len(BLOCK_OPEN):]
                continue

            if line.startswith(NEST_OPEN):
                self._enter(CommentMode.NEST)
                self.depth = 1
                line = line[len(NEST_OPEN):]
                continue

            if line.startswith(BLOCK_CLOSE):
                raise LexError(
                    "unexpected end of block comment",
                    LexErrorKind.UNMATCHED_COMMENT_END,
                    location,
                    source_line=line,
                )
            if line.startswith(NEST_CLOSE):
                raise LexError(
                    "unexpected end of nested comment",
                    LexErrorKind.UNMATCHED_COMMENT_END,
                    location,
                    source_line=line,
                )

            return line

    def check_closed(self, location: Optional[Location] = None) -> None:
        """
        Verify that no comment is left open at the end of the input.

        Raises:
            LexError: If still inside a block or nested comment
        """
        if self.mode is CommentMode.BLOCK:
            raise LexError(
                "unterminated block comment",
                LexErrorKind.UNTERMINATED_COMMENT,
                location,
                hint=f"add {BLOCK_CLOSE} to close the comment",
            )
        if self.mode is CommentMode.NEST:
            raise LexError(
                "unterminated nested comment",
                LexErrorKind.UNTERMINATED_COMMENT,
                location,
                hint=f"{self.depth} {NEST_CLOSE} still missing",
            )

    # =========================================================================
    # State Transitions
    # =========================================================================

    def _enter(self, mode: CommentMode) -> None:
        logger.debug(f"Comment mode {self.mode.name} -> {mode.name}")
        self.mode = mode

    def _skip_block(self, line: str) -> str:
        """Skip to the end of a block comment, or discard the whole line."""
        index = line.find(BLOCK_CLOSE)
        if index == -1:
            return ""
        self._enter(CommentMode.NORMAL)
        return line[index + len(BLOCK_CLOSE):].lstrip()

    def _skip_nest(self, line: str) -> str:
        """
        Track /+ and +/ markers until the nested comment closes.

        Markers are processed left to right. If the comment is still open
        when the line runs out, the whole line is discarded.
        """
        while len(line) >= 2:
            open_index = line.find(NEST_OPEN)
            close_index = line.find(NEST_CLOSE)

            if open_index != -1 and (close_index == -1 or open_index < close_index):
                self.depth += 1
                line = line[open_index + len(NEST_OPEN):].lstrip()
                continue

            if close_index != -1:
                self.depth -= 1
                assert self.depth >= 0, "nested comment depth went negative"
                line = line[close_index + len(NEST_CLOSE):].lstrip()
                if self.depth == 0:
                    self._enter(CommentMode.NORMAL)
                    return line
                continue

            break

        return ""
