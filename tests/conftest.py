"""Shared fixtures and helpers for tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from pydantic import BaseModel
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from templ_parser.config import get_settings
from templ_parser.core.combinators import Parser as TemplParser
from templ_parser.core.input import Input
from templ_parser.models import Nodes

_REPO_ROOT = Path(__file__).parent.parent


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Node-sequence parser double
# ---------------------------------------------------------------------------


class TextNode(BaseModel):
    value: str


class TextNodeParser:
    """Collects everything up to the stop condition into a single text node."""

    def parse(self, pi: Input, until: TemplParser[object]) -> Nodes | None:
        parts = []
        while until(pi) is None:
            c, ok = pi.take(1)
            if not ok:
                break
            parts.append(c)
        text = "".join(parts)
        return Nodes(nodes=(TextNode(value=text),) if text else ())


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def go_parser() -> Parser:
    """Return a tree-sitter parser for Go."""
    return get_parser("go")


@pytest.fixture
def text_nodes() -> TextNodeParser:
    return TextNodeParser()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
