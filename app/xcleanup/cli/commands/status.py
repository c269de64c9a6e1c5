"""Status command implementation.

Reports disk usage, the emergency decision, and the ledger size.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from xcleanup.cleanup.emergency import is_emergency
from xcleanup.cleanup.state import CleanupStateStore
from xcleanup.core.config import require_config
from xcleanup.core.errors import XCleanupError
from xcleanup.filesystem.disk import read_disk_usage
from xcleanup.utils.formatting import console, create_table, format_size, print_error

app = typer.Typer(
    help="Show disk usage and cleanup state.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_status(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file.",
        ),
    ] = None,
) -> None:
    """Display disk usage and whether emergency mode would trigger."""
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path)

    try:
        disk_usage = read_disk_usage(config.disk_check_path)
        emergency = is_emergency(config.emergency, disk_usage)
        store = CleanupStateStore(Path(config.logging.state_file))
    except XCleanupError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = create_table("Cleanup Status")
    table.add_column("Property", style="muted")
    table.add_column("Value")

    table.add_row("Disk check path", escape(config.disk_check_path))
    table.add_row("Total", format_size(disk_usage.total_bytes))
    table.add_row("Free", format_size(disk_usage.free_bytes))
    table.add_row("Free percent", f"{disk_usage.free_percent:.2f}%")
    table.add_row(
        "Emergency mode",
        "[emergency]active[/]" if emergency else "[success]inactive[/]",
    )
    table.add_row("Ledger entries", str(len(store)))
    table.add_row("State file", escape(str(store.state_file)))
    table.add_row("Log directory", escape(config.logging.directory))

    console.print(table)
