"""FastMCP server exposing phpnav navigation tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from phpnav.core.navigation import Navigator
from phpnav.core.versions import UnsupportedVersionError, normalize_version


def _navigator_for(default: Navigator, ast_version: int | None) -> Navigator:
    if ast_version is None:
        return default
    return Navigator(
        ast_version=normalize_version(ast_version),
        policy=default.policy,
        tracer=default.tracer,
        analyzers=default.analyzers,
    )


def create_mcp_server(navigator: Navigator) -> FastMCP:
    """Create a FastMCP server wired to the given navigator."""

    mcp = FastMCP("phpnav", instructions="Find the PHP syntax node under a cursor position.")

    @mcp.tool()
    async def locate(path: str, line: int, column: int, ast_version: int | None = None) -> dict[str, Any] | str | None:
        """Return the syntax node at a 1-based line/column of a PHP file, with its location."""
        try:
            found = _navigator_for(navigator, ast_version).locate(path, line, column)
        except (FileNotFoundError, UnsupportedVersionError) as exc:
            return f"Error: {exc}"
        if found is None:
            return None
        node, location = found
        return {
            "kind": node.kind,
            "line": node.line,
            "start_byte": node.start_byte,
            "end_byte": node.end_byte,
            "location": location.model_dump(),
        }

    @mcp.tool()
    async def diagnostics(path: str, ast_version: int | None = None) -> list[dict[str, Any]] | str:
        """List parse diagnostics for a PHP file."""
        try:
            result = _navigator_for(navigator, ast_version).parse_file(path, 0)
        except (FileNotFoundError, UnsupportedVersionError) as exc:
            return f"Error: {exc}"
        return [d.model_dump() for d in result.diagnostics]

    return mcp
