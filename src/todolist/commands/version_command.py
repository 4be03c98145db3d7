"""Command 'version' of todolist"""

import typer

from todolist import __version__
from todolist.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(__version__)
