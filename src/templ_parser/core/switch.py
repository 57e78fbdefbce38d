from __future__ import annotations

import re

from templ_parser.core.combinators import (
    Parser,
    any_of,
    close_brace_with_optional_padding,
    lookahead,
    optional_whitespace,
    strip_type,
)
from templ_parser.core.errors import ParseError, UnterminatedBlockError
from templ_parser.core.expressions import parse_go_expression
from templ_parser.core.input import Input
from templ_parser.core.ports.nodes import NodeSequenceParser
from templ_parser.models import CaseExpression, Expression, SwitchExpression

_SWITCH_KEYWORD = "switch "
_CASE_KEYWORD = re.compile(r"^(case|default)\b")
_LONGEST_KEYWORD = len("default") + 1


def _case_keyword_ahead(pi: Input) -> str | None:
    optional_whitespace(pi)
    keyword = _CASE_KEYWORD.match(pi.peek(_LONGEST_KEYWORD))
    return keyword.group(0) if keyword else None


def _case_expression_start(pi: Input) -> Expression | None:
    start = pi.index()
    if _case_keyword_ahead(pi) is None:
        pi.seek(start)
        return None
    expression = parse_go_expression("case expression", pi)
    if pi.peek(1) == "\n":
        pi.take(1)
    return expression


# The end of a case body: the switch's closing brace or the next clause.
_end_of_case: Parser[object] = lookahead(
    any_of(strip_type(close_brace_with_optional_padding), strip_type(_case_keyword_ahead))
)


class SwitchExpressionParser:
    """Parses ``switch x { case ...: <children> ... }`` blocks in templ source.

    Markup between clause headers is handed to ``children``.
    """

    def __init__(self, children: NodeSequenceParser) -> None:
        self._children = children

    def parse(self, pi: Input) -> SwitchExpression | None:
        if pi.peek(len(_SWITCH_KEYWORD)) != _SWITCH_KEYWORD:
            return None

        # Past the keyword, the block has to be complete.
        expression = parse_go_expression("switch", pi)

        cases = []
        while True:
            case = self._parse_case(pi)
            if case is None:
                break
            cases.append(case)

        optional_whitespace(pi)
        if close_brace_with_optional_padding(pi) is None:
            raise UnterminatedBlockError("switch: missing closing brace", pi.position())

        return SwitchExpression(expression=expression, cases=tuple(cases))

    def _parse_case(self, pi: Input) -> CaseExpression | None:
        expression = _case_expression_start(pi)
        if expression is None:
            return None

        nodes = self._children.parse(pi, _end_of_case)
        if nodes is None:
            raise ParseError("case: expected nodes, but none were found", pi.position())

        optional_whitespace(pi)
        return CaseExpression(expression=expression, children=nodes.nodes, diagnostics=nodes.diagnostics)
