from typing import Any

from pydantic import BaseModel

Scalar = str | int | float | None


class AbstractNode(BaseModel):
    kind: str
    line: int
    start_byte: int
    end_byte: int
    children: list["AbstractNode | Scalar"] = []
    selected: bool = False

    def iter_nodes(self) -> "list[AbstractNode]":
        """Return this node and every descendant node in pre-order."""
        found: list[AbstractNode] = []
        stack: list[AbstractNode] = [self]
        while stack:
            node = stack.pop()
            found.append(node)
            stack.extend(reversed([c for c in node.children if isinstance(c, AbstractNode)]))
        return found


AbstractNode.model_rebuild()  # necessary for recursive types


class Diagnostic(BaseModel):
    message: str
    start: int
    length: int
    line: int


class Position(BaseModel):
    """1-based line and character column inside a text document."""

    line: int
    column: int


class Range(BaseModel):
    start: Position
    end: Position

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Range":
        return cls(start=Position.model_validate(data["start"]), end=Position.model_validate(data["end"]))


class Location(BaseModel):
    """A location inside a resource, such as a span inside a PHP file."""

    uri: str | None = None
    range: Range | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Location":
        return cls(uri=data["uri"], range=Range.from_dict(data["range"]))
