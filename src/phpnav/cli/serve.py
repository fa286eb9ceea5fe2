import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from phpnav.core.navigation import Navigator
    from phpnav.mcp.server import create_mcp_server

    server = create_mcp_server(Navigator())
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]", highlight=False)
    server.run(transport=transport)  # type: ignore[arg-type]
