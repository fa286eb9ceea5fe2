"""Translate between 1-based line/column positions and byte offsets.

Columns count characters, not bytes. Undecodable bytes count as one character
each (``surrogateescape``), so translations stay reversible on any input.
"""

from pathlib import Path

from phpnav.models import AbstractNode, Location, Position, Range

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _line_starts(source: bytes) -> list[int]:
    starts = [0]
    for i, byte in enumerate(source):
        if byte == 0x0A:
            starts.append(i + 1)
    return starts


def position_to_offset(source: bytes, line: int, column: int) -> int:
    """Return the byte offset of a 1-based (line, column); out-of-range values are clamped."""
    starts = _line_starts(source)
    line_index = max(0, min(len(starts) - 1, line - 1))
    line_start = starts[line_index]
    line_end = starts[line_index + 1] - 1 if line_index + 1 < len(starts) else len(source)
    text = source[line_start:line_end].decode(_ENCODING, errors=_ERRORS)
    prefix = text[: max(0, column - 1)]
    return line_start + len(prefix.encode(_ENCODING, errors=_ERRORS))


def offset_to_position(source: bytes, offset: int) -> Position:
    offset = max(0, min(len(source), offset))
    line_start = source.rfind(b"\n", 0, offset) + 1
    line = source.count(b"\n", 0, offset) + 1
    column = len(source[line_start:offset].decode(_ENCODING, errors=_ERRORS)) + 1
    return Position(line=line, column=column)


def path_to_uri(path: str | Path) -> str:
    return Path(path).resolve().as_uri()


def location_for_node(path: str | Path, source: bytes, node: AbstractNode) -> Location:
    return Location(
        uri=path_to_uri(path),
        range=Range(
            start=offset_to_position(source, node.start_byte),
            end=offset_to_position(source, node.end_byte),
        ),
    )
