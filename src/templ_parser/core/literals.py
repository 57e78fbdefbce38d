"""Matchers for Go string literals, rune literals and comments.

Each matcher takes an ``Input``, returns the matched text verbatim, and
returns ``None`` (with the cursor restored) when the literal is absent or
unterminated. See https://go.dev/ref/spec#Rune_literals and
https://go.dev/ref/spec#String_literals.
"""

from templ_parser.core.input import Input

_OCTAL_DIGITS = frozenset("01234567")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_ESCAPED_CHARS = frozenset("abfnrtv\\'\"")

# (introducer, digit set, digit count)
_NUMERIC_ESCAPES = (
    ("\\u", _HEX_DIGITS, 4),
    ("\\U", _HEX_DIGITS, 8),
    ("\\x", _HEX_DIGITS, 2),
    ("\\", _OCTAL_DIGITS, 3),
)

_LONGEST_ESCAPE = 10


def escape_sequence(text: str) -> str:
    """Return the escape sequence at the start of ``text``, or an empty string."""
    if not text.startswith("\\"):
        return ""
    if len(text) > 1 and text[1] in _ESCAPED_CHARS:
        return text[:2]
    for introducer, digits, count in _NUMERIC_ESCAPES:
        if not text.startswith(introducer):
            continue
        candidate = text[len(introducer) : len(introducer) + count]
        if len(candidate) == count and all(c in digits for c in candidate):
            return text[: len(introducer) + count]
    return ""


def _quoted(pi: Input, quote: str, forbidden: str = "") -> str | None:
    start = pi.index()
    if pi.peek(1) != quote:
        return None
    pi.take(1)
    parts = [quote]
    while True:
        c = pi.peek(1)
        if c == "" or c in forbidden:
            pi.seek(start)
            return None
        if c == quote:
            pi.take(1)
            parts.append(c)
            return "".join(parts)
        escape = escape_sequence(pi.peek(_LONGEST_ESCAPE))
        if escape:
            pi.take(len(escape))
            parts.append(escape)
            continue
        pi.take(1)
        parts.append(c)


def interpreted_string_literal(pi: Input) -> str | None:
    return _quoted(pi, '"', forbidden="\n")


def raw_string_literal(pi: Input) -> str | None:
    return _quoted(pi, "`")


def string_literal(pi: Input) -> str | None:
    return interpreted_string_literal(pi) or raw_string_literal(pi)


def rune_literal(pi: Input) -> str | None:
    return _quoted(pi, "'")


def line_comment(pi: Input) -> str | None:
    if pi.peek(2) != "//":
        return None
    rest = pi.peek(-1)
    end = rest.find("\n")
    text, _ = pi.take(len(rest) if end == -1 else end)
    return text


def block_comment(pi: Input) -> str | None:
    if pi.peek(2) != "/*":
        return None
    rest = pi.peek(-1)
    end = rest.find("*/", 2)
    if end == -1:
        return None
    text, _ = pi.take(end + 2)
    return text


def skip_literal(pi: Input) -> str | None:
    """Match any comment or literal, in the order the scanners try them."""
    for matcher in (line_comment, block_comment, string_literal, rune_literal):
        text = matcher(pi)
        if text is not None:
            return text
    return None
