from dataclasses import dataclass, field

from phpnav.core.builder import Converted, TreeBuilder
from phpnav.core.cst import ConcreteTree
from phpnav.core.tracing import NullTracer, SelectionTracer
from phpnav.models import AbstractNode


@dataclass
class SelectionContext:
    """Request-scoped holder for the located concrete entity.

    ``ancestors`` are the indices of every node enclosing ``index``; the
    overlay falls back to the innermost of them whose conversion yields a
    single node.
    """

    index: int | None = None
    ancestors: frozenset[int] = field(default_factory=frozenset)
    resolved: bool = False

    def select(self, tree: ConcreteTree, index: int | None) -> None:
        self.index = index
        self.ancestors = frozenset(tree.ancestors(index)) if index is not None else frozenset()
        self.resolved = False

    @property
    def empty(self) -> bool:
        return self.index is None


class SelectingTreeBuilder(TreeBuilder):
    """``TreeBuilder`` that marks the abstract node produced for the selected entity."""

    def __init__(
        self,
        tree: ConcreteTree,
        version: int,
        context: SelectionContext,
        tracer: SelectionTracer | None = None,
    ) -> None:
        super().__init__(tree, version)
        self.context = context
        self.tracer = tracer or NullTracer()

    def _after_convert(self, index: int, converted: Converted) -> Converted:
        context = self.context
        if context.empty or context.resolved:
            return converted
        if index == context.index or index in context.ancestors:
            node = _single_node(converted)
            if node is not None:
                node.selected = True
                context.resolved = True
                self.tracer.marked(node, self.tree[index])
        return converted


def _single_node(converted: Converted) -> AbstractNode | None:
    if len(converted) == 1 and isinstance(converted[0], AbstractNode):
        return converted[0]
    return None
