"""
Source input helpers.

Monster source files are read line by line. The tokenizer itself only
accepts UTF-8 input; this module detects the byte order mark at the start
of a file so that files in other encodings are rejected up front instead
of producing garbage tokens.
"""

import codecs
import logging
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO, Optional, Union

from monster.errors import Location
from monster.compiler.errors import LexError, LexErrorKind

logger = logging.getLogger(__name__)


class Bom(Enum):
    """Byte order marks that can start a source file."""
    NONE = auto()       # No mark, read as UTF-8
    UTF8 = auto()
    UTF16LE = auto()
    UTF16BE = auto()
    UTF32LE = auto()
    UTF32BE = auto()


# UTF-32 LE starts with the UTF-16 LE mark, so it must be tested first
_BOM_SIGNATURES: tuple[tuple[bytes, Bom], ...] = (
    (codecs.BOM_UTF32_LE, Bom.UTF32LE),
    (codecs.BOM_UTF32_BE, Bom.UTF32BE),
    (codecs.BOM_UTF8, Bom.UTF8),
    (codecs.BOM_UTF16_LE, Bom.UTF16LE),
    (codecs.BOM_UTF16_BE, Bom.UTF16BE),
)

SUPPORTED_BOMS = frozenset({Bom.NONE, Bom.UTF8})


def detect_bom(data: bytes) -> tuple[Bom, int]:
    """
    Identify the byte order mark at the start of data.

    Returns:
        (Bom, length of the mark in bytes). Bom.NONE with length 0 if there
        is no mark.
    """
    for signature, bom in _BOM_SIGNATURES:
        if data.startswith(signature):
            return bom, len(signature)
    return Bom.NONE, 0


def check_bom(bom: Bom, filename: Optional[str] = None) -> None:
    """
    Reject byte order marks the tokenizer cannot read.

    Raises:
        LexError: For UTF-16 and UTF-32 marks, or a value that is not a Bom
    """
    location = Location(filename, 1) if filename is not None else None

    if not isinstance(bom, Bom):
        raise LexError(
            f"unknown BOM value {bom!r}",
            LexErrorKind.UNSUPPORTED_ENCODING,
            location,
        )
    if bom not in SUPPORTED_BOMS:
        raise LexError(
            "UTF16 and UTF32 files are not supported yet",
            LexErrorKind.UNSUPPORTED_ENCODING,
            location,
            hint="save the file as UTF-8",
        )


def open_source(path: Union[str, Path]) -> tuple[BinaryIO, Bom]:
    """
    Open a source file and skip its byte order mark.

    The caller owns the returned stream and must close it.

    Returns:
        (binary stream positioned after the mark, detected Bom)
    """
    stream = open(path, "rb")
    try:
        bom, length = detect_bom(stream.read(4))
        stream.seek(length)
    except OSError:
        stream.close()
        raise
    logger.debug(f"Opened {path} (BOM: {bom.name})")
    return stream, bom
