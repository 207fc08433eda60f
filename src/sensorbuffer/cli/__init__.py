"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="sensorbuffer",
    help="SensorBuffer - buffer sensor events as XML files for later import",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .version import version as _version  # noqa: F401, E402
from .write import write as _write  # noqa: F401, E402


def main() -> None:
    app()
