"""Version command."""

from . import app
from ._common import console


@app.command()
def version():
    """Show the SensorBuffer version."""
    from .. import __version__

    console.print(f"[bold cyan]SensorBuffer[/bold cyan] version [green]{__version__}[/green]")
