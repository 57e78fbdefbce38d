import logging
from collections.abc import Iterator
from functools import lru_cache
from typing import cast

from tree_sitter import Node, Parser
from tree_sitter_language_pack import SupportedLanguage, get_parser

from templ_parser.config import get_settings
from templ_parser.core.errors import GoSyntaxError

logger = logging.getLogger(__name__)

FUNCTION_TYPES = frozenset({"function_declaration", "method_declaration"})

# Nodes that may sit between statements without being statements.
_NON_STATEMENTS = frozenset({"comment", "empty_statement"})


@lru_cache(maxsize=1)
def get_go_parser() -> Parser:
    language = get_settings().go_language
    logger.debug("Loading tree-sitter grammar %r", language)
    return get_parser(cast(SupportedLanguage, language))


def parse_go(source: bytes) -> Node:
    """Parse Go source, tolerating errors, and return the root node.

    Raises ``GoSyntaxError`` when no usable tree comes back.
    """
    tree = get_go_parser().parse(source)
    if tree is None or tree.root_node is None:
        raise GoSyntaxError("syntax error: the Go parser returned no tree")
    root = tree.root_node
    if root.is_error:
        raise GoSyntaxError(f"syntax error: {describe_error(root)}")
    return root


def describe_error(root: Node) -> str:
    for node in walk(root):
        if node.is_error or node.is_missing:
            row, column = node.start_point
            kind = f"missing {node.type}" if node.is_missing else "unexpected input"
            return f"{kind} at {row + 1}:{column + 1}"
    return "unknown error"


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in pre-order."""
    yield node
    for child in node.children:
        yield from walk(child)


def first_function(root: Node) -> Node | None:
    return next((node for node in walk(root) if node.type in FUNCTION_TYPES), None)


def function_name(node: Node) -> str:
    name = node.child_by_field_name("name")
    if name is None or name.text is None:
        return ""
    return name.text.decode("utf-8")


def block_statements(block: Node) -> list[Node]:
    """Return the statements of a block, looking through ``statement_list`` wrappers."""
    statements = []
    for child in block.named_children:
        if child.type == "statement_list":
            statements.extend(block_statements(child))
        elif child.type not in _NON_STATEMENTS:
            statements.append(child)
    return statements


def opening_brace(node: Node) -> Node | None:
    """Return the ``{`` token opening the body of a block-bodied construct."""
    body = node.child_by_field_name("body")
    if body is None:
        body = node.child_by_field_name("consequence")
    if body is not None:
        return next((child for child in body.children if child.type == "{"), None)
    return next((child for child in node.children if child.type == "{"), None)


def has_error_before(node: Node, offset: int) -> bool:
    """Report whether any child of ``node`` starting before ``offset`` is or contains an error."""
    return any(child.has_error or child.is_missing for child in node.children if child.start_byte < offset)
