"""Plan command implementation.

Shows what a cleanup run would delete without writing any report.
"""

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from xcleanup.cleanup.emergency import is_emergency
from xcleanup.cleanup.models import CleanupPlan
from xcleanup.cleanup.planner import CleanupPlanner
from xcleanup.cleanup.state import CleanupStateStore
from xcleanup.core.config import require_config
from xcleanup.core.errors import XCleanupError
from xcleanup.filesystem.disk import read_disk_usage
from xcleanup.utils.formatting import (
    console,
    create_table,
    format_size,
    mode_label,
    print_error,
    print_info,
)

app = typer.Typer(
    help="Show deletion candidates without deleting anything.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_plan(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file.",
        ),
    ] = None,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-l",
            min=0,
            help="Show at most this many items (0 = all).",
        ),
    ] = 50,
) -> None:
    """Display the current cleanup plan.

    Examples:
        xcleanup plan
        xcleanup plan --limit 0
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path)

    try:
        disk_usage = read_disk_usage(config.disk_check_path)
        emergency = is_emergency(config.emergency, disk_usage)
        store = CleanupStateStore(Path(config.logging.state_file))
        plan = CleanupPlanner(store).plan(config, disk_usage, emergency)
    except XCleanupError as e:
        print_error(f"Planning failed: {e}")
        raise typer.Exit(code=1) from e

    if plan.is_empty:
        print_info("No items to delete.")
        return

    _print_plan(plan, limit)


def _print_plan(plan: CleanupPlan, limit: int) -> None:
    table = create_table(f"Cleanup Plan ({mode_label(plan.emergency)})")
    table.add_column("Type", width=5)
    table.add_column("Path", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="muted")

    shown = plan.items if limit == 0 else plan.items[:limit]
    for item in shown:
        style = "file" if item.is_file else "dir"
        table.add_row(
            f"[{style}]{item.item_type.value}[/]",
            escape(item.path),
            format_size(item.size_bytes),
            datetime.fromtimestamp(item.modified_at).strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)

    hidden = len(plan.items) - len(shown)
    if hidden > 0:
        print_info(f"... and {hidden} more item(s). Use --limit 0 to show all.")

    console.print(
        f"Total: {plan.file_count} file(s), {plan.dir_count} directory(ies), "
        f"{format_size(plan.total_size_bytes)}"
    )
