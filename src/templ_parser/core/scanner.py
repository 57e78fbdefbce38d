from templ_parser.core.combinators import close_brace_with_optional_padding, open_brace
from templ_parser.core.errors import UnbalancedBraceError, UnbalancedClosingError
from templ_parser.core.input import Input
from templ_parser.core.literals import skip_literal
from templ_parser.models import Expression, new_expression

_REPLACEMENT_CHARACTER = "\ufffd"


class BraceScanner:
    """Reads the interior of a brace-delimited expression.

    The cursor must sit just after the opening brace(s). Comments, string
    literals and rune literals are copied through untouched, so braces inside
    them do not count. On success the cursor is left before the matching
    closing brace (or the single space in front of it).
    """

    def __init__(self, start_depth: int = 1) -> None:
        self.start_depth = start_depth

    def parse(self, pi: Input) -> Expression:
        start = pi.position()
        depth = self.start_depth
        parts: list[str] = []
        while True:
            text = skip_literal(pi)
            if text is not None:
                parts.append(text)
                continue

            text = open_brace(pi)
            if text is not None:
                depth += 1
                parts.append(text)
                continue

            closer_index = pi.index()
            text = close_brace_with_optional_padding(pi)
            if text is not None:
                depth -= 1
                if depth < 0:
                    raise UnbalancedClosingError("expression: too many closing braces", pi.position())
                if depth == 0:
                    pi.seek(closer_index)
                    break
                parts.append(text)
                continue

            c, ok = pi.take(1)
            if not ok or c == _REPLACEMENT_CHARACTER:
                break
            parts.append(c)

        if depth != 0:
            raise UnbalancedBraceError("expression: unexpected brace count", pi.position())
        return new_expression("".join(parts), start, pi.position())


parse_braced_expression = BraceScanner(start_depth=1).parse
