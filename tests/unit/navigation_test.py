"""Unit tests for position translation and the Navigator adapter."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from phpnav.core.navigation import Navigator
from phpnav.core.positions import location_for_node, offset_to_position, path_to_uri, position_to_offset
from phpnav.core.tracing import LoggingTracer, NullTracer
from phpnav.core.versions import UnsupportedVersionError
from phpnav.models import AbstractNode, Position

SOURCE = "<?php\n$a->b;\n"


class TestPositions:
    def test_position_to_offset(self) -> None:
        assert position_to_offset(SOURCE.encode(), 1, 1) == 0
        assert position_to_offset(SOURCE.encode(), 2, 1) == 6
        assert position_to_offset(SOURCE.encode(), 2, 5) == 10

    def test_offset_to_position(self) -> None:
        assert offset_to_position(SOURCE.encode(), 0) == Position(line=1, column=1)
        assert offset_to_position(SOURCE.encode(), 10) == Position(line=2, column=5)
        assert offset_to_position(SOURCE.encode(), 5) == Position(line=1, column=6)

    def test_multibyte_columns_count_characters(self) -> None:
        source = "<?php\n$é = 'ü'; $b;\n".encode()
        offset = position_to_offset(source, 2, 3)

        assert offset == 9
        assert source[offset:offset + 1] == b" "
        assert offset_to_position(source, offset) == Position(line=2, column=3)

    def test_out_of_range_positions_are_clamped(self) -> None:
        source = SOURCE.encode()
        assert position_to_offset(source, 0, 0) == 0
        assert position_to_offset(source, 2, 99) == 12
        assert position_to_offset(source, 99, 1) == len(source)
        assert offset_to_position(source, 500) == Position(line=3, column=1)

    def test_path_to_uri(self, tmp_path: Path) -> None:
        uri = path_to_uri(tmp_path / "a.php")
        assert uri.startswith("file://")
        assert uri.endswith("/a.php")

    def test_location_for_node(self, tmp_path: Path) -> None:
        node = AbstractNode(kind="AST_PROP", line=2, start_byte=6, end_byte=11)
        location = location_for_node(tmp_path / "a.php", SOURCE.encode(), node)

        assert location.range is not None
        assert location.range.start == Position(line=2, column=1)
        assert location.range.end == Position(line=2, column=6)


class _RecordingAnalyzer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def analyze_class(self, source_path: str, class_node: AbstractNode) -> None:
        self.calls.append((source_path, class_node.kind))
        class_node.children.append("analyzed")


class TestNavigator:
    def test_resolve_returns_selected_node(self, php_file: Callable[..., Path]) -> None:
        path = php_file(SOURCE)
        node = Navigator().resolve(path, 2, 5)

        assert node is not None
        assert node.kind == "AST_PROP"
        assert node.selected

    def test_resolve_location(self, php_file: Callable[..., Path]) -> None:
        path = php_file(SOURCE)
        location = Navigator().resolve_location(path, 2, 5)

        assert location is not None
        assert location.uri == path.resolve().as_uri()
        assert location.range is not None
        assert location.range.start == Position(line=2, column=1)
        assert location.range.end == Position(line=2, column=6)

    def test_resolve_past_end_returns_none(self, php_file: Callable[..., Path]) -> None:
        path = php_file("<?php $x = 1;")
        assert Navigator().resolve(path, 1, 200) is None
        assert Navigator().resolve_location(path, 1, 200) is None

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            Navigator().resolve(tmp_path / "nope.php", 1, 1)

    def test_class_analyzers_run_after_parse(self, php_file: Callable[..., Path]) -> None:
        path = php_file("<?php\nclass A {}\nclass B {}\n")
        analyzer = _RecordingAnalyzer()

        result = Navigator(analyzers=[analyzer]).parse_file(path, 0)

        assert analyzer.calls == [(str(path), "AST_CLASS"), (str(path), "AST_CLASS")]
        classes = [n for n in result.tree.iter_nodes() if n.kind == "AST_CLASS"]
        assert all("analyzed" in n.children for n in classes)

    def test_settings_supply_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PHPNAV_AST_VERSION", "80")
        monkeypatch.setenv("PHPNAV_TRACE", "true")
        monkeypatch.setenv("PHPNAV_NAME_KINDS", "name,php_tag")

        navigator = Navigator()

        assert navigator.ast_version == 80
        assert isinstance(navigator.tracer, LoggingTracer)
        assert navigator.policy.kinds == frozenset({"name", "php_tag"})  # type: ignore[attr-defined]

    def test_explicit_arguments_override_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PHPNAV_AST_VERSION", "80")
        navigator = Navigator(ast_version=70)

        assert navigator.ast_version == 70
        assert isinstance(navigator.tracer, NullTracer)

    def test_unsupported_configured_version_fails(
        self, php_file: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PHPNAV_AST_VERSION", "3")
        with pytest.raises(UnsupportedVersionError):
            Navigator().resolve(php_file(SOURCE), 2, 5)
