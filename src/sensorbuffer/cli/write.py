"""Write command: buffer a single sensor event."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..api import writer_from_config
from ..config import load_config
from ..exceptions import SensorBufferError
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import console, err_console, parse_properties

logger = get_logger(__name__)


@app.command()
def write(
    tool: str = typer.Option(..., "--tool", "-t", help="Tool the event originates from"),
    sensor_data_type: str = typer.Option(
        ..., "--type", "-d", help="Sensor data type, e.g. Activity"
    ),
    resource: str = typer.Option(
        ..., "--resource", "-r", help="Resource the event applies to (file, ticket, ...)"
    ),
    owner: str = typer.Option(
        ..., "--owner", "-o", help="Owner of the event, preferably an email address"
    ),
    properties: Optional[List[str]] = typer.Option(
        None,
        "--property",
        "-p",
        help="Extra property as key=value (repeatable)",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        help="Storage root directory (default: root_dir from config)",
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """
    Write one sensor event below the storage root and print its path.

    [bold cyan]Examples:[/bold cyan]

      sensorbuffer write --root ~/sensors -t IDE -d Activity -r src/app.py -o alice@example.com

      sensorbuffer write -t IDE -d Activity -r app.py -o alice@example.com -p editor=vim
    """
    props = parse_properties(properties)

    try:
        settings = load_config(config_file=config, root_dir=root, verbose=verbose, quiet=quiet)
        setup_logging(settings.verbosity)
        writer = writer_from_config(settings)
        path = writer.write(tool, sensor_data_type, resource, owner, props)
    except SensorBufferError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
        raise typer.Exit(1)

    console.print(str(path), markup=False, highlight=False, soft_wrap=True)
