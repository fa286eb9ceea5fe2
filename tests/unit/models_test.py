"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from phpnav.models import AbstractNode, Diagnostic, Location, Position, Range


def _node(kind: str, start: int = 0, end: int = 1, children: list | None = None) -> AbstractNode:
    return AbstractNode(kind=kind, line=1, start_byte=start, end_byte=end, children=children or [])


class TestAbstractNodeModel:
    def test_selected_defaults_to_false(self) -> None:
        assert _node("AST_VAR").selected is False

    def test_children_mix_nodes_and_scalars(self) -> None:
        var = _node("AST_VAR", children=["x"])
        assign = _node("AST_ASSIGN", children=[var, 1, 2.5, None])

        assert assign.children[0] is var
        assert assign.children[1:] == [1, 2.5, None]

    def test_iter_nodes_is_preorder(self) -> None:
        leaf_a = _node("AST_VAR", children=["a"])
        leaf_b = _node("AST_VAR", children=["b"])
        prop = _node("AST_PROP", children=[leaf_a, "p"])
        root = _node("AST_STMT_LIST", children=[prop, leaf_b])

        assert root.iter_nodes() == [root, prop, leaf_a, leaf_b]

    def test_requires_kind(self) -> None:
        with pytest.raises(ValidationError):
            AbstractNode(line=1, start_byte=0, end_byte=1)  # type: ignore[call-arg]

    def test_serializes_selection_marker(self) -> None:
        node = _node("AST_VAR", children=["a"])
        node.selected = True
        assert node.model_dump()["selected"] is True


class TestLocationModel:
    def test_from_dict(self) -> None:
        data = {
            "uri": "file:///tmp/a.php",
            "range": {"start": {"line": 2, "column": 1}, "end": {"line": 2, "column": 6}},
        }
        location = Location.from_dict(data)

        assert location.uri == "file:///tmp/a.php"
        assert location.range == Range(start=Position(line=2, column=1), end=Position(line=2, column=6))

    def test_round_trips_through_model_dump(self) -> None:
        span = Range(start=Position(line=1, column=1), end=Position(line=1, column=2))
        location = Location(uri="file:///a.php", range=span)
        assert Location.from_dict(location.model_dump()) == location

    def test_empty_location(self) -> None:
        assert Location().uri is None


def test_diagnostic_fields() -> None:
    diagnostic = Diagnostic(message="Missing ';'", start=12, length=0, line=1)
    assert diagnostic.model_dump() == {"message": "Missing ';'", "start": 12, "length": 0, "line": 1}
