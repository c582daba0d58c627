"""h5nav CLI for inspecting HDF5 files."""
import logging

import typer
from rich.logging import RichHandler

from . import browse, general

app = typer.Typer()
app.add_typer(general.app, name="self")
app.command("tree")(browse.tree)
app.command("show")(browse.show)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log opening and closing of objects."
    )
):
    """Navigate HDF5 files by position."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )
