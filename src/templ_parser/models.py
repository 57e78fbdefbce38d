from typing import Any

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    line: int
    col: int


class Span(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class Expression(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    span: Span


def new_expression(value: str, start: Position, end: Position) -> Expression:
    return Expression(value=value, span=Span(start=start, end=end))


class Nodes(BaseModel):
    """Child nodes and diagnostics produced by a node-sequence parser."""

    model_config = ConfigDict(frozen=True)

    nodes: tuple[Any, ...] = ()
    diagnostics: tuple[Any, ...] = ()


class CaseExpression(BaseModel):
    model_config = ConfigDict(frozen=True)

    expression: Expression
    children: tuple[Any, ...] = ()
    diagnostics: tuple[Any, ...] = ()


class SwitchExpression(BaseModel):
    model_config = ConfigDict(frozen=True)

    expression: Expression
    cases: tuple[CaseExpression, ...] = ()
