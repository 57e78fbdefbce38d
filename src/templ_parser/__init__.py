from templ_parser.core.errors import (
    ContainerNotFoundError,
    EmptyBodyError,
    GoSyntaxError,
    ParseError,
    StructureMismatchError,
    UnbalancedBraceError,
    UnbalancedClosingError,
    UnterminatedBlockError,
)
from templ_parser.core.expressions import parse_go_expression, parse_go_func_decl
from templ_parser.core.goexpression import ConstructKind, extract, parse_expression, parse_func
from templ_parser.core.input import Input
from templ_parser.core.scanner import BraceScanner, parse_braced_expression
from templ_parser.core.switch import SwitchExpressionParser
from templ_parser.models import CaseExpression, Expression, Nodes, Position, Span, SwitchExpression

__all__ = [
    "BraceScanner",
    "CaseExpression",
    "ConstructKind",
    "ContainerNotFoundError",
    "EmptyBodyError",
    "Expression",
    "GoSyntaxError",
    "Input",
    "Nodes",
    "ParseError",
    "Position",
    "Span",
    "StructureMismatchError",
    "SwitchExpression",
    "SwitchExpressionParser",
    "UnbalancedBraceError",
    "UnbalancedClosingError",
    "UnterminatedBlockError",
    "extract",
    "parse_braced_expression",
    "parse_expression",
    "parse_func",
    "parse_go_expression",
    "parse_go_func_decl",
]
