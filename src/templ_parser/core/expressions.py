from templ_parser.core.errors import ParseError
from templ_parser.core.goexpression import parse_expression, parse_func
from templ_parser.core.input import Input
from templ_parser.models import Expression, new_expression

_TEMPL_KEYWORD = "templ "


def parse_go_expression(name: str, pi: Input) -> Expression:
    """Consume the Go expression or statement header at the cursor.

    ``name`` labels the construct in error messages.
    """
    start = pi.position()
    src = pi.peek(-1)
    try:
        expr = parse_expression(src)
    except ParseError as err:
        raise err.at(f"{name}: invalid go expression", pi.position()) from err
    pi.take(len(expr))
    return new_expression(expr, start, pi.position())


def parse_go_func_decl(pi: Input) -> Expression:
    """Consume a template signature such as ``templ Name(x int) {``, returning ``Name(x int) ``.

    The cursor is left on the opening brace of the template body.
    """
    if pi.peek(len(_TEMPL_KEYWORD)) == _TEMPL_KEYWORD:
        pi.take(len(_TEMPL_KEYWORD))
    start = pi.position()
    src = pi.peek(-1)
    try:
        header = parse_func("func " + src)
    except ParseError as err:
        raise ParseError(f"invalid template declaration: {err.message}", pi.position()) from err
    signature = header[len("func ") :]
    pi.take(len(signature))
    return new_expression(signature, start, pi.position())
