"""Small parser combinators shared by the scanners and the switch parser.

A parser is a callable taking an ``Input`` and returning a value, or ``None``
when it does not match. A non-matching parser leaves the cursor where it
found it; hard failures are raised as ``ParseError``.
"""

from collections.abc import Callable
from typing import TypeVar

from templ_parser.core.input import Input
from templ_parser.models import Expression, new_expression

T = TypeVar("T")

Parser = Callable[[Input], T | None]


def string(expected: str) -> Parser[str]:
    def parse(pi: Input) -> str | None:
        if pi.peek(len(expected)) != expected:
            return None
        text, _ = pi.take(len(expected))
        return text

    return parse


def any_of(*parsers: Parser[T]) -> Parser[T]:
    def parse(pi: Input) -> T | None:
        start = pi.index()
        for parser in parsers:
            result = parser(pi)
            if result is not None:
                return result
            pi.seek(start)
        return None

    return parse


def string_from(*parsers: Parser[str]) -> Parser[str]:
    """Match every parser in sequence and concatenate their output."""

    def parse(pi: Input) -> str | None:
        start = pi.index()
        parts = []
        for parser in parsers:
            result = parser(pi)
            if result is None:
                pi.seek(start)
                return None
            parts.append(result)
        return "".join(parts)

    return parse


def lookahead(parser: Parser[T]) -> Parser[T]:
    """Run ``parser`` and rewind the cursor whether or not it matched."""

    def parse(pi: Input) -> T | None:
        start = pi.index()
        try:
            return parser(pi)
        finally:
            pi.seek(start)

    return parse


def strip_type(parser: Parser[T]) -> Parser[object]:
    """Discard the value of ``parser`` so parsers of different types can share an ``any_of``."""

    def parse(pi: Input) -> object | None:
        if parser(pi) is None:
            return None
        return True

    return parse


def expression_of(parser: Parser[str]) -> Parser[Expression]:
    def parse(pi: Input) -> Expression | None:
        start = pi.position()
        value = parser(pi)
        if value is None:
            return None
        return new_expression(value, start, pi.position())

    return parse


def _while(predicate: Callable[[str], bool]) -> Parser[str]:
    def parse(pi: Input) -> str | None:
        rest = pi.peek(-1)
        count = 0
        while count < len(rest) and predicate(rest[count]):
            count += 1
        text, _ = pi.take(count)
        return text

    return parse


def string_until_newline_or_eof(pi: Input) -> str | None:
    rest = pi.peek(-1)
    end = rest.find("\n")
    text, _ = pi.take(len(rest) if end == -1 else end)
    return text


optional_spaces = _while(lambda c: c == " ")
optional_whitespace = _while(str.isspace)

open_brace = string("{")
open_brace_with_optional_padding = string_from(optional_spaces, open_brace, optional_spaces)

close_brace = string("}")
close_brace_with_optional_padding = any_of(string(" }"), close_brace)

open_bracket = string("(")
close_bracket = string(")")
close_bracket_with_optional_padding = string_from(optional_spaces, close_bracket)
