from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from phpnav.core.navigation import Navigator
from phpnav.core.tracing import LoggingTracer
from phpnav.core.versions import UnsupportedVersionError, normalize_version
from phpnav.models import AbstractNode, Diagnostic

console = Console()


def _navigator(ast_version: str | None, trace: bool) -> Navigator:
    try:
        version = normalize_version(ast_version) if ast_version is not None else None
        return Navigator(ast_version=version, tracer=LoggingTracer() if trace else None)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from None


def _render_diagnostics(diagnostics: list[Diagnostic]) -> None:
    if not diagnostics:
        return
    table = Table(title="Diagnostics", show_lines=False)
    for h in ("line", "start", "length", "message"):
        table.add_column(h)
    for d in diagnostics:
        table.add_row(str(d.line), str(d.start), str(d.length), d.message)
    console.print(table)


def _label(node: AbstractNode) -> str:
    scalars = [escape(repr(c)) for c in node.children if not isinstance(c, AbstractNode)]
    text = f"{node.kind} [dim](line {node.line}, {node.start_byte}..{node.end_byte})[/dim]"
    if scalars:
        text += " " + ", ".join(scalars)
    return f"[bold green]{text} <selected>[/bold green]" if node.selected else text


def _render_tree(node: AbstractNode) -> Tree:
    root = Tree(_label(node))
    stack: list[tuple[AbstractNode, Tree]] = [(node, root)]
    while stack:
        current, branch = stack.pop()
        # Add branches in document order, then visit them last-first.
        added = [(c, branch.add(_label(c))) for c in current.children if isinstance(c, AbstractNode)]
        stack.extend(reversed(added))
    return root


def locate(
    path: Annotated[Path, typer.Argument(help="Path to a PHP file.")],
    line: Annotated[int, typer.Option(help="1-based line of the cursor.")],
    column: Annotated[int, typer.Option(help="1-based column of the cursor.")],
    ast_version: Annotated[str | None, typer.Option(help="Target AST version (e.g. 80, 100).")] = None,
    trace: Annotated[bool, typer.Option(help="Log locate/mark decisions.")] = False,
) -> None:
    """Show the syntax node under a line/column position."""
    navigator = _navigator(ast_version, trace)
    try:
        found = navigator.locate(path, line, column)
    except (FileNotFoundError, UnsupportedVersionError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from None

    if found is None:
        console.print("(no selection)")
        return

    node, location = found
    assert location.range is not None

    table = Table(show_lines=False)
    for h in ("kind", "line", "start_byte", "end_byte", "range"):
        table.add_column(h)
    start, end = location.range.start, location.range.end
    table.add_row(
        node.kind,
        str(node.line),
        str(node.start_byte),
        str(node.end_byte),
        f"{start.line}:{start.column}-{end.line}:{end.column}",
    )
    console.print(table)
    console.print(location.uri)


def tree(
    path: Annotated[Path, typer.Argument(help="Path to a PHP file.")],
    offset: Annotated[int, typer.Option(help="Byte offset to select.")] = 0,
    ast_version: Annotated[str | None, typer.Option(help="Target AST version (e.g. 80, 100).")] = None,
    trace: Annotated[bool, typer.Option(help="Log locate/mark decisions.")] = False,
) -> None:
    """Print the abstract tree with the node at OFFSET highlighted."""
    navigator = _navigator(ast_version, trace)
    try:
        result = navigator.parse_file(path, offset)
    except (FileNotFoundError, UnsupportedVersionError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from None

    console.print(_render_tree(result.tree))
    _render_diagnostics(result.diagnostics)
