"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from phpnav.core.converter import NodeMappingConverter

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PHPNAV_* settings from the developer's shell out of the tests."""
    for name in ("PHPNAV_AST_VERSION", "PHPNAV_TRACE", "PHPNAV_NAME_KINDS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def php_parser() -> Parser:
    """Return a tree-sitter parser for PHP."""
    return get_parser("php")


@pytest.fixture
def converter() -> NodeMappingConverter:
    return NodeMappingConverter()


@pytest.fixture
def php_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write PHP source to a temporary file and return its path."""

    def _write(source: str, name: str = "sample.php") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
