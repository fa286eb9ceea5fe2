import logging
from typing import Protocol

from phpnav.core.cst import ConcreteEntity
from phpnav.models import AbstractNode

trace_logger = logging.getLogger("phpnav.trace")


class SelectionTracer(Protocol):
    def searching(self, offset: int) -> None: ...

    def located(self, entity: ConcreteEntity | None) -> None: ...

    def marked(self, node: AbstractNode, entity: ConcreteEntity) -> None: ...


class NullTracer:
    def searching(self, offset: int) -> None:
        return None

    def located(self, entity: ConcreteEntity | None) -> None:
        return None

    def marked(self, node: AbstractNode, entity: ConcreteEntity) -> None:
        return None


class LoggingTracer:
    """Emit locate/mark events on the ``phpnav.trace`` logger at DEBUG level."""

    def __init__(self, logger: logging.Logger = trace_logger) -> None:
        self._logger = logger

    def searching(self, offset: int) -> None:
        self._logger.debug("Searching for byte offset %d", offset)

    def located(self, entity: ConcreteEntity | None) -> None:
        if entity is None:
            self._logger.debug("No entity at offset")
            return
        what = "token" if entity.is_token else "node"
        self._logger.debug("Found %s %s [%d, %d)", what, entity.kind, entity.start_byte, entity.end_byte)

    def marked(self, node: AbstractNode, entity: ConcreteEntity) -> None:
        self._logger.debug(
            "Marking %s (line %d) as selected for %s #%d", node.kind, node.line, entity.kind, entity.index
        )


def tracer_for(enabled: bool) -> SelectionTracer:
    return LoggingTracer() if enabled else NullTracer()
