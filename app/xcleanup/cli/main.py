"""Command line entry point.

Defines the Typer application, its global options, and registers the
subcommands.
"""

from typing import Annotated

import typer

from xcleanup import __version__
from xcleanup.cli.commands import init, plan, run, status
from xcleanup.core.logger import enable_console_logging

app = typer.Typer(
    name="xcleanup",
    help="Disk-pressure aware cleanup of aged files and empty directories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"xcleanup version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Mirror log records to stderr.",
        ),
    ] = False,
) -> None:
    """xcleanup - Keep disks from filling up.

    Deletes aged files and empty directories under allowed paths, and
    escalates to emergency paths when free space runs low.
    """
    if verbose:
        enable_console_logging()


app.add_typer(init.app, name="init")
app.add_typer(plan.app, name="plan")
app.add_typer(run.app, name="run")
app.add_typer(status.app, name="status")


if __name__ == "__main__":
    app()
