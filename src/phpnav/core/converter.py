"""Conversion entry point that tags the abstract node under a byte offset.

Workflow:

1. A navigation request asks for the node at byte offset N of a file.
2. The concrete tree is searched for the token containing N. Names are
   promoted to the expression they belong to (property access, class
   reference, ...), see ``phpnav.core.locator``.
3. The abstract tree is built while ``SelectingTreeBuilder`` marks the node
   produced for that concrete entity.

A converter instance is not safe for concurrent use: the selection slot lives
on the instance for the duration of one ``convert`` call. Use one instance per
concurrent request.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from phpnav.core.cst import ConcreteEntity, parse_concrete_tree
from phpnav.core.locator import NameTokenPolicy, SelectionPolicy, clamp_offset, locate
from phpnav.core.selection import SelectingTreeBuilder, SelectionContext
from phpnav.core.tracing import NullTracer, SelectionTracer
from phpnav.core.versions import SUPPORTED_AST_VERSIONS, UnsupportedVersionError
from phpnav.models import AbstractNode, Diagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    tree: AbstractNode
    diagnostics: list[Diagnostic]
    selected_entity: ConcreteEntity | None
    selected_node: AbstractNode | None
    version: int
    offset: int


class NodeMappingConverter:
    def __init__(self, policy: SelectionPolicy | None = None, tracer: SelectionTracer | None = None) -> None:
        self.policy = policy or NameTokenPolicy()
        self.tracer = tracer or NullTracer()
        self._selection: SelectionContext | None = None

    @property
    def selection(self) -> SelectionContext | None:
        """The in-flight selection; always None outside of ``convert``."""
        return self._selection

    def convert(self, source: str | bytes, version: int, offset: int) -> ConversionResult:
        if isinstance(version, bool) or version not in SUPPORTED_AST_VERSIONS:
            raise UnsupportedVersionError(version)

        source_bytes = source.encode("utf-8") if isinstance(source, str) else source
        byte_offset = clamp_offset(offset, len(source_bytes))

        with self._selection_scope() as context:
            self.tracer.searching(byte_offset)
            tree = parse_concrete_tree(source_bytes)
            index = locate(tree, byte_offset, self.policy)
            selected_entity = tree[index] if index is not None else None
            self.tracer.located(selected_entity)
            context.select(tree, index)
            builder = SelectingTreeBuilder(tree, version, context, self.tracer)
            abstract_tree = builder.build()
            selected_node = _enforce_single_selection(abstract_tree)

        return ConversionResult(
            tree=abstract_tree,
            diagnostics=builder.diagnostics,
            selected_entity=selected_entity,
            selected_node=selected_node,
            version=version,
            offset=byte_offset,
        )

    @contextmanager
    def _selection_scope(self) -> Iterator[SelectionContext]:
        if self._selection is not None:
            logger.error("Selection state was not cleared before a new request; resetting it")
        self._selection = SelectionContext()
        try:
            yield self._selection
        finally:
            self._selection = None


def _enforce_single_selection(tree: AbstractNode) -> AbstractNode | None:
    selected = [node for node in tree.iter_nodes() if node.selected]
    if len(selected) > 1:
        logger.error("%d abstract nodes were marked as selected; keeping the first", len(selected))
        for node in selected[1:]:
            node.selected = False
    return selected[0] if selected else None


def convert(
    source: str | bytes,
    version: int,
    offset: int,
    policy: SelectionPolicy | None = None,
    tracer: SelectionTracer | None = None,
) -> ConversionResult:
    return NodeMappingConverter(policy, tracer).convert(source, version, offset)
