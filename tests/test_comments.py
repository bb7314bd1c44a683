# =============================================================================
# test_comments.py - Comment Filter and Source Input Tests
# =============================================================================
# Tests for the comment state machine, byte order mark detection and
# opening source files.
# =============================================================================

import codecs

import pytest

from monster.compiler.comments import CommentFilter, CommentMode
from monster.compiler.errors import LexError, LexErrorKind
from monster.compiler.source import Bom, check_bom, detect_bom, open_source
from monster.errors import Location


# =============================================================================
# Comment Filter Tests
# =============================================================================

class TestLineComments:
    """Test // comments."""

    def test_whole_line(self):
        assert CommentFilter().filter("// note") == ""

    def test_only_at_token_start(self):
        """Text before a // is left for the tokenizer."""
        assert CommentFilter().filter("a // note") == "a // note"

    def test_empty_line(self):
        comments = CommentFilter()
        assert comments.filter("") == ""
        assert comments.mode is CommentMode.NORMAL


class TestBlockComments:
    """Test /* */ comments."""

    def test_same_line(self):
        comments = CommentFilter()
        assert comments.filter("/* a */ b") == "b"
        assert comments.mode is CommentMode.NORMAL

    def test_across_lines(self):
        comments = CommentFilter()
        assert comments.filter("/* a") == ""
        assert comments.mode is CommentMode.BLOCK
        assert comments.in_comment
        assert comments.filter("still inside") == ""
        assert comments.filter("end */ c") == "c"
        assert comments.mode is CommentMode.NORMAL

    def test_do_not_nest(self):
        comments = CommentFilter()
        assert comments.filter("/* /* */ x */") == "x */"

    def test_followed_by_line_comment(self):
        assert CommentFilter().filter("/* a */ // b") == ""

    def test_several_in_a_row(self):
        assert CommentFilter().filter("/* a */ /+ b +/ /* c */ d") == "d"

    def test_open_marker_not_reused_as_close(self):
        assert CommentFilter().filter("/*/ x */ y") == "y"

    def test_unexpected_end(self):
        with pytest.raises(LexError) as exc_info:
            CommentFilter().filter("*/ x", Location("a.mn", 3))
        error = exc_info.value
        assert error.kind is LexErrorKind.UNMATCHED_COMMENT_END
        assert error.message == "unexpected end of block comment"
        assert error.location.line == 3


class TestNestedComments:
    """Test /+ +/ comments and their depth tracking."""

    def test_balanced(self):
        comments = CommentFilter()
        assert comments.filter("/+ /+ +/ +/") == ""
        assert comments.mode is CommentMode.NORMAL
        assert comments.depth == 0

    def test_text_after(self):
        assert CommentFilter().filter("/+ a /+ b +/ c +/ d") == "d"

    def test_depth_across_lines(self):
        comments = CommentFilter()
        assert comments.filter("/+ a /+ b") == ""
        assert comments.mode is CommentMode.NEST
        assert comments.depth == 2

        assert comments.filter("+/ c") == ""
        assert comments.depth == 1

        assert comments.filter("+/ d") == "d"
        assert comments.depth == 0
        assert comments.mode is CommentMode.NORMAL

    def test_other_markers_ignored_inside(self):
        assert CommentFilter().filter("/+ // /* +/ x") == "x"

    def test_unbalanced(self):
        with pytest.raises(LexError) as exc_info:
            CommentFilter().filter("/+ +/ +/")
        assert exc_info.value.kind is LexErrorKind.UNMATCHED_COMMENT_END
        assert exc_info.value.message == "unexpected end of nested comment"


class TestCheckClosed:
    """Test detection of comments left open at end of input."""

    def test_closed(self):
        comments = CommentFilter()
        comments.filter("/* a */")
        comments.check_closed()

    def test_block_open(self):
        comments = CommentFilter()
        comments.filter("/* a")
        with pytest.raises(LexError) as exc_info:
            comments.check_closed(Location("a.mn", 9))
        error = exc_info.value
        assert error.kind is LexErrorKind.UNTERMINATED_COMMENT
        assert error.message == "unterminated block comment"
        assert str(error).startswith("a.mn:9: ")

    def test_nest_open(self):
        comments = CommentFilter()
        comments.filter("/+ /+ +/")
        with pytest.raises(LexError) as exc_info:
            comments.check_closed()
        assert exc_info.value.message == "unterminated nested comment"
        assert "1 +/ still missing" in str(exc_info.value)


# =============================================================================
# Byte Order Mark Tests
# =============================================================================

class TestBom:
    """Test byte order mark detection and checking."""

    @pytest.mark.parametrize("data,bom,length", [
        (b"abc", Bom.NONE, 0),
        (b"", Bom.NONE, 0),
        (codecs.BOM_UTF8 + b"abc", Bom.UTF8, 3),
        (codecs.BOM_UTF16_LE + b"a\x00", Bom.UTF16LE, 2),
        (codecs.BOM_UTF16_BE + b"\x00a", Bom.UTF16BE, 2),
        (codecs.BOM_UTF32_LE + b"a\x00\x00\x00", Bom.UTF32LE, 4),
        (codecs.BOM_UTF32_BE + b"\x00\x00\x00a", Bom.UTF32BE, 4),
    ])
    def test_detect(self, data, bom, length):
        assert detect_bom(data) == (bom, length)

    @pytest.mark.parametrize("bom", [Bom.NONE, Bom.UTF8])
    def test_supported(self, bom):
        check_bom(bom, "a.mn")

    @pytest.mark.parametrize("bom", [Bom.UTF16LE, Bom.UTF16BE, Bom.UTF32LE, Bom.UTF32BE])
    def test_unsupported(self, bom):
        with pytest.raises(LexError) as exc_info:
            check_bom(bom, "a.mn")
        error = exc_info.value
        assert error.kind is LexErrorKind.UNSUPPORTED_ENCODING
        assert error.message == "UTF16 and UTF32 files are not supported yet"
        assert error.location == Location("a.mn", 1)

    def test_unknown(self):
        with pytest.raises(LexError) as exc_info:
            check_bom(7)
        assert "unknown BOM value" in exc_info.value.message
        assert exc_info.value.location is None


class TestOpenSource:
    """Test opening source files."""

    def test_plain(self, write_script):
        path = write_script(b"abc\n")
        stream, bom = open_source(path)
        with stream:
            assert bom is Bom.NONE
            assert stream.read() == b"abc\n"

    def test_mark_skipped(self, write_script):
        path = write_script(codecs.BOM_UTF8 + b"abc\n")
        stream, bom = open_source(path)
        with stream:
            assert bom is Bom.UTF8
            assert stream.read() == b"abc\n"

    def test_short_file(self, write_script):
        path = write_script(b"a")
        stream, bom = open_source(path)
        with stream:
            assert bom is Bom.NONE
            assert stream.read() == b"a"

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            open_source(tmp_path / "missing.mn")
