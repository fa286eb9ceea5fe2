from typing import Protocol

from phpnav.models import AbstractNode


class ClassAnalyzer(Protocol):
    """Analyze (and possibly modify) a class declaration after parsing, before the result is used."""

    def analyze_class(self, source_path: str, class_node: AbstractNode) -> None: ...
