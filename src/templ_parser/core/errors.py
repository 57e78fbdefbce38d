from __future__ import annotations

from templ_parser.models import Position


class ParseError(Exception):
    """A parse failure, optionally pinned to a position in the caller's text."""

    def __init__(self, message: str, position: Position | None = None) -> None:
        self.message = message
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message}: line {self.position.line}, col {self.position.col}"

    def at(self, prefix: str, position: Position) -> ParseError:
        """Return a copy of this error with a message prefix and a position attached."""
        return type(self)(f"{prefix}: {self.message}", position)


class GoSyntaxError(ParseError):
    pass


class ContainerNotFoundError(ParseError):
    pass


class StructureMismatchError(ParseError):
    pass


class EmptyBodyError(ParseError):
    pass


class UnbalancedClosingError(ParseError):
    pass


class UnbalancedBraceError(ParseError):
    pass


class UnterminatedBlockError(ParseError):
    pass
