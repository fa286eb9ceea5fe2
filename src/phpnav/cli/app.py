import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from phpnav.cli.locate import locate, tree
from phpnav.cli.serve import serve_app

app = typer.Typer(
    name="phpnav",
    help="phpnav CLI: find the PHP syntax node under a cursor.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


app.command("locate")(locate)
app.command("tree")(tree)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
