"""Unit tests for the backtracking input cursor."""

from templ_parser.core.input import Input
from templ_parser.models import Position


class TestPeekAndTake:
    def test_peek_does_not_consume(self) -> None:
        pi = Input("abc")
        assert pi.peek(2) == "ab"
        assert pi.index() == 0

    def test_peek_past_end_is_truncated(self) -> None:
        pi = Input("abc")
        pi.take(2)
        assert pi.peek(5) == "c"

    def test_peek_negative_returns_remainder(self) -> None:
        pi = Input("abcdef")
        pi.take(2)
        assert pi.peek(-1) == "cdef"

    def test_take_advances(self) -> None:
        pi = Input("abc")
        assert pi.take(2) == ("ab", True)
        assert pi.index() == 2

    def test_take_past_end_fails_without_moving(self) -> None:
        pi = Input("abc")
        pi.take(2)
        assert pi.take(2) == ("", False)
        assert pi.index() == 2

    def test_take_zero_at_end_succeeds(self) -> None:
        pi = Input("")
        assert pi.take(0) == ("", True)


class TestSeek:
    def test_seek_restores_saved_index(self) -> None:
        pi = Input("hello world")
        saved = pi.index()
        pi.take(6)
        pi.seek(saved)
        assert pi.peek(5) == "hello"

    def test_seek_is_clamped(self) -> None:
        pi = Input("abc")
        pi.seek(10)
        assert pi.index() == 3
        pi.seek(-4)
        assert pi.index() == 0


class TestPosition:
    def test_start_of_input(self) -> None:
        assert Input("abc").position() == Position(index=0, line=0, col=0)

    def test_tracks_lines_and_columns(self) -> None:
        pi = Input("ab\ncd\nef")
        pi.take(4)
        assert pi.position() == Position(index=4, line=1, col=1)

    def test_position_just_after_newline(self) -> None:
        pi = Input("ab\ncd")
        pi.take(3)
        assert pi.position() == Position(index=3, line=1, col=0)

    def test_index_is_a_byte_offset(self) -> None:
        pi = Input("é\nü")
        pi.take(3)
        assert pi.position() == Position(index=5, line=1, col=1)

    def test_column_counts_code_points(self) -> None:
        pi = Input("日本語x")
        pi.take(3)
        assert pi.peek(1) == "x"
        assert pi.position() == Position(index=9, line=0, col=3)
