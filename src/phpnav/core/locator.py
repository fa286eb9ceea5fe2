"""Find the concrete entity under a byte offset.

The walk is depth-first and pre-order over children in document order. The
first token whose end lies past the offset wins. Spans are half-open, so a
token ending exactly at the offset belongs to whatever comes next. Bare name
tokens are promoted to their enclosing node: pointing at ``b`` in ``$a->b``
means the property access, not the identifier.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from phpnav.core.cst import ConcreteEntity, ConcreteTree

DEFAULT_NAME_KINDS: frozenset[str] = frozenset({"name"})


class SelectionPolicy(Protocol):
    def promotes_to_parent(self, token: ConcreteEntity) -> bool: ...


@dataclass(frozen=True)
class NameTokenPolicy:
    kinds: frozenset[str] = field(default=DEFAULT_NAME_KINDS)

    @classmethod
    def with_kinds(cls, kinds: Iterable[str]) -> "NameTokenPolicy":
        return cls(kinds=frozenset(k.strip() for k in kinds if k.strip()))

    def promotes_to_parent(self, token: ConcreteEntity) -> bool:
        return token.is_named and token.kind in self.kinds


def clamp_offset(offset: int, source_length: int) -> int:
    return max(0, min(source_length, offset))


def locate(tree: ConcreteTree, offset: int, policy: SelectionPolicy | None = None) -> int | None:
    """Return the index of the entity at ``offset``, or None past the last token."""
    policy = policy or NameTokenPolicy()
    root = tree.root
    stack: list[tuple[ConcreteEntity, Iterator[int]]] = [(root, iter(root.children))]
    while stack:
        node, pending = stack[-1]
        child_index = next(pending, None)
        if child_index is None:
            stack.pop()
            continue
        child = tree[child_index]
        if child.is_token:
            if child.end_byte > offset:
                return node.index if policy.promotes_to_parent(child) else child.index
            continue
        # Tokens never extend past their parent, so an exhausted subtree holds no match.
        if child.end_byte > offset:
            stack.append((child, iter(child.children)))
    return None
