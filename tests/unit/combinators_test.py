"""Unit tests for the parser combinator primitives."""

from templ_parser.core.combinators import (
    any_of,
    close_brace_with_optional_padding,
    close_bracket_with_optional_padding,
    expression_of,
    lookahead,
    open_brace,
    open_brace_with_optional_padding,
    open_bracket,
    optional_whitespace,
    string,
    string_from,
    string_until_newline_or_eof,
    strip_type,
)
from templ_parser.core.input import Input
from templ_parser.models import Position


class TestString:
    def test_matches_literal(self) -> None:
        pi = Input("switch x")
        assert string("switch ")(pi) == "switch "
        assert pi.index() == 7

    def test_no_match_leaves_cursor(self) -> None:
        pi = Input("swap")
        assert string("switch ")(pi) is None
        assert pi.index() == 0


class TestSequencing:
    def test_string_from_concatenates(self) -> None:
        pi = Input("ab!")
        assert string_from(string("a"), string("b"))(pi) == "ab"

    def test_string_from_rewinds_on_partial_match(self) -> None:
        pi = Input("ac")
        assert string_from(string("a"), string("b"))(pi) is None
        assert pi.index() == 0

    def test_any_of_returns_first_match(self) -> None:
        pi = Input("}")
        assert any_of(string(" }"), string("}"))(pi) == "}"

    def test_any_of_with_no_match(self) -> None:
        pi = Input("x")
        assert any_of(string("a"), string("b"))(pi) is None
        assert pi.index() == 0

    def test_lookahead_does_not_consume(self) -> None:
        pi = Input("case 1:")
        assert lookahead(string("case"))(pi) == "case"
        assert pi.index() == 0


class TestBraces:
    def test_open_brace(self) -> None:
        assert open_brace(Input("{")) == "{"
        assert open_brace(Input("x")) is None

    def test_open_brace_with_padding(self) -> None:
        pi = Input("  {  x")
        assert open_brace_with_optional_padding(pi) == "  {  "
        assert pi.peek(1) == "x"

    def test_open_brace_without_padding(self) -> None:
        assert open_brace_with_optional_padding(Input("{x")) == "{"

    def test_close_brace_with_single_space(self) -> None:
        assert close_brace_with_optional_padding(Input(" }")) == " }"

    def test_close_brace_bare(self) -> None:
        assert close_brace_with_optional_padding(Input("}")) == "}"

    def test_close_brace_rejects_two_spaces(self) -> None:
        pi = Input("  }")
        assert close_brace_with_optional_padding(pi) is None
        assert pi.index() == 0


class TestBrackets:
    def test_open_bracket(self) -> None:
        assert open_bracket(Input("(a)")) == "("

    def test_close_bracket_with_padding(self) -> None:
        pi = Input("   ) {")
        assert close_bracket_with_optional_padding(pi) == "   )"
        assert pi.peek(-1) == " {"


class TestUntilNewline:
    def test_stops_before_newline(self) -> None:
        pi = Input("abc\ndef")
        assert string_until_newline_or_eof(pi) == "abc"
        assert pi.index() == 3

    def test_runs_to_end_of_input(self) -> None:
        pi = Input("abc")
        assert string_until_newline_or_eof(pi) == "abc"
        assert pi.peek(-1) == ""

    def test_optional_whitespace_matches_nothing(self) -> None:
        pi = Input("x")
        assert optional_whitespace(pi) == ""
        assert pi.index() == 0

    def test_optional_whitespace_crosses_lines(self) -> None:
        pi = Input(" \n\t x")
        assert optional_whitespace(pi) == " \n\t "


class TestExpressionOf:
    def test_records_span(self) -> None:
        pi = Input("ab\ncd!")
        pi.take(1)
        expression = expression_of(string("b\ncd"))(pi)
        assert expression is not None
        assert expression.value == "b\ncd"
        assert expression.span.start == Position(index=1, line=0, col=1)
        assert expression.span.end == Position(index=5, line=1, col=2)

    def test_no_match(self) -> None:
        assert expression_of(string("x"))(Input("y")) is None


class TestStripType:
    def test_erases_value(self) -> None:
        assert strip_type(string("a"))(Input("a")) is True

    def test_keeps_empty_matches(self) -> None:
        assert strip_type(optional_whitespace)(Input("x")) is True

    def test_combines_heterogeneous_parsers(self) -> None:
        parser = any_of(strip_type(expression_of(string("a"))), strip_type(string("b")))
        pi = Input("b")
        assert parser(pi) is True
        assert pi.index() == 1
