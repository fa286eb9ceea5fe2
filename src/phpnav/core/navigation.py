from collections.abc import Sequence
from pathlib import Path

from phpnav.config import get_settings
from phpnav.core.converter import ConversionResult, NodeMappingConverter
from phpnav.core.locator import NameTokenPolicy, SelectionPolicy
from phpnav.core.ports.plugins import ClassAnalyzer
from phpnav.core.positions import location_for_node, position_to_offset
from phpnav.core.tracing import SelectionTracer, tracer_for
from phpnav.models import AbstractNode, Location

CLASS_KIND = "AST_CLASS"


class Navigator:
    """Answer navigation requests (line/column in a file) with the selected abstract node.

    Every request runs on a fresh ``NodeMappingConverter``, so a single
    navigator can serve concurrent requests.
    """

    def __init__(
        self,
        ast_version: int | None = None,
        policy: SelectionPolicy | None = None,
        tracer: SelectionTracer | None = None,
        analyzers: Sequence[ClassAnalyzer] = (),
    ) -> None:
        settings = get_settings()
        self.ast_version = ast_version if ast_version is not None else settings.ast_version
        self.policy = policy or NameTokenPolicy.with_kinds(settings.name_kinds)
        self.tracer = tracer or tracer_for(settings.trace)
        self.analyzers = list(analyzers)

    def parse_source(self, source: bytes, offset: int, source_path: str = "") -> ConversionResult:
        converter = NodeMappingConverter(self.policy, self.tracer)
        result = converter.convert(source, self.ast_version, offset)
        if self.analyzers:
            for node in result.tree.iter_nodes():
                if node.kind == CLASS_KIND:
                    for analyzer in self.analyzers:
                        analyzer.analyze_class(source_path, node)
        return result

    def parse_file(self, file_path: str | Path, offset: int) -> ConversionResult:
        path = Path(file_path)
        return self.parse_source(_read_source(path), offset, str(path))

    def resolve(self, file_path: str | Path, line: int, column: int) -> AbstractNode | None:
        found = self.locate(file_path, line, column)
        return found[0] if found is not None else None

    def resolve_location(self, file_path: str | Path, line: int, column: int) -> Location | None:
        found = self.locate(file_path, line, column)
        return found[1] if found is not None else None

    def locate(self, file_path: str | Path, line: int, column: int) -> tuple[AbstractNode, Location] | None:
        """Return the selected node at a 1-based position and its location, or None."""
        path = Path(file_path)
        source = _read_source(path)
        offset = position_to_offset(source, line, column)
        node = self.parse_source(source, offset, str(path)).selected_node
        if node is None:
            return None
        return node, location_for_node(path, source, node)


def _read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
