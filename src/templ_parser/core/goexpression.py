"""Find the exact extent of Go code embedded in a templ file.

The fragment is wrapped in just enough Go to form a compilation unit, parsed
with tree-sitter, and the construct of interest is sliced back out of the
original text by its byte offsets. Nothing here knows Go's grammar beyond
the node types it looks for.
"""

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node

from templ_parser.config import get_settings
from templ_parser.core.errors import (
    ContainerNotFoundError,
    EmptyBodyError,
    GoSyntaxError,
    ParseError,
    StructureMismatchError,
)
from templ_parser.core.goparse import (
    block_statements,
    describe_error,
    first_function,
    function_name,
    has_error_before,
    opening_brace,
    parse_go,
)
from templ_parser.core.input import Input
from templ_parser.core.literals import skip_literal

logger = logging.getLogger(__name__)

CONTAINER_NAME = "templ_container"

_PACKAGE_SCAFFOLD = "package main\n"
_CONTAINER_SCAFFOLD = f"package main\nfunc {CONTAINER_NAME}() {{\n"

# Synthetic switch headers a lone case clause is parsed inside, tried in order.
_CASE_WRAPPERS = ("switch {\n", "switch templ_switch.(type) {\n")

_ELSE = re.compile(r"^else\s*\{")
_ELSE_IF = re.compile(r"^(else\s+)if\b")
_CASE_OR_DEFAULT = re.compile(r"^(case|default)\b")


class ConstructKind(Enum):
    IF = "if"
    FOR = "for"
    SWITCH = "switch"
    TYPE_SWITCH = "type_switch"
    CASE = "case"
    EXPR = "expr"


_KEYWORD_PREFIXES = (
    (re.compile(r"^if\b"), ConstructKind.IF),
    (re.compile(r"^for\b"), ConstructKind.FOR),
    (re.compile(r"^switch\b"), ConstructKind.SWITCH),
)


class _Cut(Enum):
    HEADER = "header"
    CLAUSE = "clause"
    EXPRESSION = "expression"


@dataclass(frozen=True)
class _Rule:
    scaffold: str
    target: Callable[[Node], Node]
    span: Callable[[Node], tuple[int, int]]
    cut: _Cut
    closing: str
    # Reject a tolerant tree with errors anywhere, not just in the target.
    strict: bool = False


def _container_statement(root: Node) -> Node:
    fn = first_function(root)
    if fn is None or function_name(fn) != CONTAINER_NAME:
        raise ContainerNotFoundError("templ container function not found")
    body = fn.child_by_field_name("body")
    statements = block_statements(body) if body is not None else []
    if not statements:
        if root.has_error:
            raise GoSyntaxError(f"syntax error: {describe_error(root)}")
        raise EmptyBodyError("templ container function has no statements")
    return statements[0]


def _function_declaration(root: Node) -> Node:
    fn = first_function(root)
    if fn is None:
        raise StructureMismatchError("expected function declaration, found none")
    return fn


def _mismatch(expected: str, node: Node) -> StructureMismatchError:
    return StructureMismatchError(f"expected {expected}, found {node.type}")


def _header_span(expected: str, node_types: frozenset[str]) -> Callable[[Node], tuple[int, int]]:
    def span(node: Node) -> tuple[int, int]:
        if node.type not in node_types:
            raise _mismatch(expected, node)
        brace = opening_brace(node)
        if brace is None or brace.is_missing or has_error_before(node, brace.start_byte):
            raise StructureMismatchError(f"{expected} has no well-formed opening brace")
        return node.start_byte, brace.end_byte

    return span


def _case_span(node: Node) -> tuple[int, int]:
    if node.type not in ("expression_switch_statement", "type_switch_statement"):
        raise _mismatch("switch statement", node)
    brace = opening_brace(node)
    if brace is None:
        raise StructureMismatchError("switch statement has no opening brace")
    clause = next(
        (child for child in node.named_children if child.start_byte >= brace.end_byte and child.type != "comment"),
        None,
    )
    if clause is None or clause.type not in ("expression_case", "type_case", "default_case"):
        raise StructureMismatchError("expected case or default clause")
    colon = next((child for child in clause.children if child.type == ":"), None)
    if colon is None or colon.is_missing or has_error_before(clause, colon.start_byte):
        raise StructureMismatchError(f"{clause.type} has no well-formed colon")
    return clause.start_byte, colon.end_byte


def _expression_span(node: Node) -> tuple[int, int]:
    if node.type != "expression_statement":
        raise _mismatch("expression statement", node)
    if node.has_error:
        raise StructureMismatchError("expression statement contains a syntax error")
    return node.start_byte, node.end_byte


def _signature_span(node: Node) -> tuple[int, int]:
    brace = opening_brace(node)
    if brace is None or brace.is_missing or has_error_before(node, brace.start_byte):
        raise StructureMismatchError("function declaration has no well-formed body")
    return node.start_byte, brace.start_byte


def _statement_rule(
    span: Callable[[Node], tuple[int, int]], cut: _Cut, closing: str, strict: bool = False
) -> _Rule:
    return _Rule(_CONTAINER_SCAFFOLD, _container_statement, span, cut, closing, strict)


_RULES = {
    ConstructKind.IF: _statement_rule(
        _header_span("if statement", frozenset({"if_statement"})), _Cut.HEADER, "}\n}\n"
    ),
    ConstructKind.FOR: _statement_rule(
        _header_span("for statement", frozenset({"for_statement"})), _Cut.HEADER, "}\n}\n"
    ),
    ConstructKind.SWITCH: _statement_rule(
        _header_span("switch statement", frozenset({"expression_switch_statement", "type_switch_statement"})),
        _Cut.HEADER,
        "}\n}\n",
    ),
    ConstructKind.TYPE_SWITCH: _statement_rule(
        _header_span("type switch statement", frozenset({"type_switch_statement"})), _Cut.HEADER, "}\n}\n"
    ),
    ConstructKind.CASE: _statement_rule(_case_span, _Cut.CLAUSE, "\n}\n}\n"),
    ConstructKind.EXPR: _statement_rule(_expression_span, _Cut.EXPRESSION, "\n}\n", strict=True),
}

if set(_RULES) != set(ConstructKind):
    raise RuntimeError(f"no extraction rule for {sorted(k.value for k in set(ConstructKind) - set(_RULES))}")

_FUNC_RULE = _Rule(_PACKAGE_SCAFFOLD, _function_declaration, _signature_span, _Cut.HEADER, "}\n")


def _ends_statement(c: str) -> bool:
    # Go inserts a semicolon at a newline following these tokens.
    return c.isalnum() or c in "_)]}\"'`"


def _cut_points(content: str, cut: _Cut) -> Iterator[int]:
    """Yield offsets at which ``content`` may be truncated for a trial parse.

    Offsets are code-point indexes into ``content``. Brackets inside comments
    and literals are ignored.
    """
    pi = Input(content)
    floor = 1 if cut is _Cut.CLAUSE else 0
    depth = 0
    last = ""
    after_space = False
    while True:
        start = pi.index()
        literal = skip_literal(pi)
        if literal is not None:
            if not literal.startswith("/"):
                last = literal[-1]
            after_space = False
            continue
        c, ok = pi.take(1)
        if not ok:
            if cut is _Cut.EXPRESSION:
                yield start
            return
        if c in "([{":
            if cut is _Cut.HEADER and c == "{" and depth == 0:
                yield start + 1
            depth += 1
        elif c in ")]}":
            if cut is _Cut.EXPRESSION and depth == 0:
                yield start
                return
            depth -= 1
            if depth < floor and (cut is not _Cut.CLAUSE or c == "}"):
                return
        elif cut is _Cut.CLAUSE and c == ":" and depth == floor and pi.peek(1) != "=":
            yield start + 1
        elif cut is _Cut.EXPRESSION and depth == 0:
            if c.isspace():
                if not after_space:
                    yield start
                if c == "\n" and _ends_statement(last):
                    return
            elif c == "." and pi.peek(2) == "..":
                yield start
                return
        after_space = c.isspace()
        if not after_space:
            last = c


def _trial_span(rule: _Rule, source: bytes, boundary: int) -> tuple[int, int] | None:
    try:
        root = parse_go(source)
        if root.has_error:
            return None
        start, end = rule.span(rule.target(root))
    except ParseError:
        return None
    if end > boundary:
        return None
    return start, end


def _retry_truncated(rule: _Rule, content: str) -> tuple[int, int] | None:
    """Find the construct by parsing truncated copies of ``content`` that must be error free.

    Header and clause rules take the shortest cut that parses; expressions
    take the longest, so their cuts are tried from the end. Returns None when
    no cut parses within the trial limit.
    """
    scaffold = rule.scaffold.encode("utf-8")
    closing = rule.closing.encode("utf-8")
    limit = get_settings().max_trial_parses
    cuts: Iterable[int] = _cut_points(content, rule.cut)
    if rule.cut is _Cut.EXPRESSION:
        cuts = reversed(list(cuts))
    for attempt, cut in enumerate(cuts):
        if attempt >= limit:
            logger.debug("Stopped after %d truncated parses", limit)
            return None
        head = scaffold + content[:cut].encode("utf-8")
        span = _trial_span(rule, head + closing, len(head))
        if span is not None:
            return span
    return None


def _apply(rule: _Rule, content: str) -> str:
    scaffold = rule.scaffold.encode("utf-8")
    source = scaffold + content.encode("utf-8")
    try:
        root = parse_go(source)
        if rule.strict and root.has_error:
            raise GoSyntaxError(f"syntax error: {describe_error(root)}")
        start, end = rule.span(rule.target(root))
    except ParseError as err:
        logger.debug("Tolerant parse unusable (%s), retrying on truncated input", err)
        span = _retry_truncated(rule, content)
        if span is None:
            raise
        start, end = span
    offset = len(scaffold)
    return content.encode("utf-8")[start - offset : end - offset].decode("utf-8")


def extract(content: str, kind: ConstructKind) -> str:
    """Apply the extraction rule for ``kind`` to ``content`` inside the container function."""
    return _apply(_RULES[kind], content)


def _extract_case(content: str) -> str:
    errors = []
    for wrapper in _CASE_WRAPPERS:
        wrapped = f"{wrapper}{content}\n}}"
        try:
            return extract(wrapped, ConstructKind.CASE)
        except ParseError as err:
            errors.append(err)
    raise errors[0]


def parse_expression(content: str) -> str:
    """Return the Go code at the start of ``content``.

    For control-flow keywords this is the header up to and including the
    opening brace (or the colon of a case clause); otherwise it is a single
    expression, including a trailing ``...`` spread.
    """
    match = _ELSE.match(content)
    if match:
        return match.group(0)

    match = _ELSE_IF.match(content)
    if match:
        prefix = match.group(1)
        return prefix + extract(content[len(prefix) :], ConstructKind.IF)

    if _CASE_OR_DEFAULT.match(content):
        return _extract_case(content)

    for pattern, kind in _KEYWORD_PREFIXES:
        if pattern.match(content):
            return extract(content, kind)

    expr = extract(content, ConstructKind.EXPR)
    if content[len(expr) :].startswith("..."):
        expr += "..."
    return expr


def parse_func(content: str) -> str:
    """Return the first function declaration in ``content`` up to, not including, its body's brace."""
    return _apply(_FUNC_RULE, content)
