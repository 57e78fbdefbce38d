from typing import Protocol

from templ_parser.core.combinators import Parser
from templ_parser.core.input import Input
from templ_parser.models import Nodes


class NodeSequenceParser(Protocol):
    def parse(self, pi: Input, until: Parser[object]) -> Nodes | None:
        """Parse child nodes until ``until`` matches, leaving the matched text unconsumed."""
        ...
