"""Concrete syntax tree arena built from a tree-sitter parse.

tree-sitter nodes are flattened into ``ConcreteEntity`` records during one
pre-order pass. Every record gets a stable integer index, so later stages
link concrete and abstract entities by index rather than by object identity.
Leaves (other than the root) are tokens; everything else is a node.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

PHP_LANGUAGE = "php"


@dataclass(frozen=True, slots=True)
class ConcreteEntity:
    index: int
    kind: str
    start_byte: int
    end_byte: int
    start_row: int
    start_column: int
    parent: int | None
    children: tuple[int, ...]
    is_token: bool
    is_named: bool
    is_error: bool
    is_missing: bool
    text: bytes


@dataclass(frozen=True)
class ConcreteTree:
    source: bytes
    entities: tuple[ConcreteEntity, ...]
    has_error: bool

    @property
    def root(self) -> ConcreteEntity:
        return self.entities[0]

    def __getitem__(self, index: int) -> ConcreteEntity:
        return self.entities[index]

    def __len__(self) -> int:
        return len(self.entities)

    def ancestors(self, index: int) -> Iterator[int]:
        """Yield the indices enclosing ``index``, innermost first."""
        parent = self.entities[index].parent
        while parent is not None:
            yield parent
            parent = self.entities[parent].parent


def parse_concrete_tree(source_bytes: bytes) -> ConcreteTree:
    parser = get_parser(cast(SupportedLanguage, PHP_LANGUAGE))
    tree = parser.parse(source_bytes)
    return build_arena(tree.root_node, source_bytes)


def build_arena(root: Node, source_bytes: bytes) -> ConcreteTree:
    # Indices are assigned in pre-order; children lists are filled once the
    # subtree has been numbered, hence the two-phase build.
    order: list[tuple[Node, int | None]] = []
    stack: list[tuple[Node, int | None]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        index = len(order)
        order.append((node, parent))
        stack.extend((child, index) for child in reversed(node.children))

    child_indices: list[list[int]] = [[] for _ in order]
    for index, (_, parent) in enumerate(order):
        if parent is not None:
            child_indices[parent].append(index)

    entities = []
    for index, (node, parent) in enumerate(order):
        is_token = parent is not None and node.child_count == 0
        entities.append(
            ConcreteEntity(
                index=index,
                kind=node.type,
                start_byte=node.start_byte,
                end_byte=node.end_byte,
                start_row=node.start_point[0],
                start_column=node.start_point[1],
                parent=parent,
                children=tuple(child_indices[index]),
                is_token=is_token,
                is_named=node.is_named,
                is_error=node.type == "ERROR",
                is_missing=node.is_missing,
                text=source_bytes[node.start_byte : node.end_byte] if is_token else b"",
            )
        )

    return ConcreteTree(source=source_bytes, entities=tuple(entities), has_error=root.has_error)
