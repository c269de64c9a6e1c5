"""Run command implementation.

Plans and executes a cleanup according to the configuration, with an
interactive confirmation step, dry-run reports, and notifications.
"""

import logging
import secrets
import string
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from xcleanup.cleanup.emergency import is_emergency
from xcleanup.cleanup.executor import CleanupExecutor
from xcleanup.cleanup.models import CleanupPlan, CleanupResult
from xcleanup.cleanup.planner import CleanupPlanner
from xcleanup.cleanup.report import CleanupReport, ReportPaths, write_reports, write_text
from xcleanup.cleanup.state import CleanupStateStore
from xcleanup.core.config import CleanupConfig, require_config
from xcleanup.core.errors import XCleanupError
from xcleanup.core.logger import setup_logging
from xcleanup.filesystem.disk import read_disk_usage
from xcleanup.notifications.composite import NotifierComposite, build_notifiers
from xcleanup.utils.formatting import (
    console,
    create_table,
    mode_label,
    print_error,
    print_info,
    print_path,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Plan and execute a cleanup run.",
    invoke_without_command=True,
)

CONFIRM_KEY_LENGTH = 6
CANCEL_WORD = "exit"

_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(length: int = CONFIRM_KEY_LENGTH) -> str:
    """Generate a random lowercase alphanumeric identifier."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


@app.callback(invoke_without_command=True)
def run_cleanup(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            "--quiet",
            help="Run without the confirmation prompt.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Preview cleanup without deleting any data.",
        ),
    ] = False,
    fail_on_error: Annotated[
        bool,
        typer.Option(
            "--fail-on-error",
            help="Exit with code 1 if any item could not be deleted.",
        ),
    ] = False,
) -> None:
    """Run the cleanup job based on configuration.

    Reads disk usage, decides between standard and emergency mode,
    plans deletion candidates and, after confirmation, deletes them.

    Examples:
        xcleanup run                  # Plan, confirm with key, delete
        xcleanup run --dry-run        # Write reports only
        xcleanup run --yes            # Unattended (cron/systemd timer)
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(config_path)
    logging_ready = False

    try:
        setup_logging(
            Path(config.logging.directory), config.logging.level, config.logging.json_logs
        )
        logging_ready = True

        result = _run(config, yes=yes, dry_run=dry_run)
    except XCleanupError as e:
        if logging_ready:
            logger.error("Cleanup failed", extra={"error": str(e)})
        print_error(f"Cleanup failed: {e}")
        raise typer.Exit(code=1) from e

    if result is not None and result.has_failures:
        print_warning(f"{len(result.failed)} item(s) could not be deleted.")
        if fail_on_error:
            raise typer.Exit(code=1)


def _run(config: CleanupConfig, *, yes: bool, dry_run: bool) -> CleanupResult | None:
    """Execute the cleanup workflow.

    Returns:
        CleanupResult for real runs, None for dry-runs, empty plans,
        and cancelled runs.

    Raises:
        XCleanupError: On configuration or storage failure.
    """
    disk_usage = read_disk_usage(config.disk_check_path)
    emergency = is_emergency(config.emergency, disk_usage)

    store = CleanupStateStore(Path(config.logging.state_file))
    planner = CleanupPlanner(store)
    plan = planner.plan(config, disk_usage, emergency)

    if plan.is_empty:
        print_info("No items to delete.")
        return None

    if emergency:
        console.print(f"Mode: {mode_label(emergency)} (low free disk space)")

    log_dir = Path(config.logging.directory)

    if not dry_run and not yes and not _confirm_execution(plan, log_dir):
        print_info("Cleanup canceled by user.")
        return None

    report = CleanupReport()

    if dry_run:
        summary = report.render_dry_run_summary(plan)
        detail = report.render_dry_run_detail(plan)
        paths = write_reports(log_dir, summary, detail)
        _send_notifications(config, summary, paths, dry_run=True)

        print_success("Dry-run completed.")
        _print_report_paths(paths)
        return None

    result = CleanupExecutor(store).execute(plan)

    summary = report.render_execution_summary(result, plan)
    detail = report.render_execution_detail(result)
    paths = write_reports(log_dir, summary, detail)
    _send_notifications(config, summary, paths, dry_run=False)

    _print_results(result)
    print_success("Cleanup completed.")
    _print_report_paths(paths)
    return result


def _confirm_execution(plan: CleanupPlan, log_dir: Path) -> bool:
    """Ask the operator to type the confirm key from the review file.

    The plan summary, including a one-time confirm key, is written to
    ``job-confirm-<id>.log`` in the log directory. Typing "exit" cancels.

    Returns:
        True when the correct key was entered, False when cancelled.
    """
    job_id = generate_id()
    confirm_key = generate_id()

    content = CleanupReport().render_plan_summary(confirm_key, plan)
    confirm_path = write_text(log_dir / f"job-confirm-{job_id}.log", content)

    print_info("Confirmation required.")
    print_path("Review", confirm_path)

    while True:
        answer = typer.prompt(f'Enter confirm key or type "{CANCEL_WORD}" to cancel')
        if answer == CANCEL_WORD:
            return False
        if answer == confirm_key:
            return True
        print_warning("Invalid confirm key. Try again.")


def _send_notifications(
    config: CleanupConfig,
    summary: str,
    paths: ReportPaths,
    *,
    dry_run: bool,
) -> None:
    """Forward the summary to every enabled notification channel."""
    notifiers = build_notifiers(config.notifications)
    if not notifiers:
        return

    label = "dry-run " if dry_run else ""
    subject = f"Cleanup {label}report {datetime.now():%Y-%m-%d %H:%M:%S}"
    message = f"{summary}\nDetail report: {paths.detail}"

    delivered = NotifierComposite(notifiers).send_all(subject, message)
    if len(delivered) < len(notifiers):
        print_warning(
            f"Notifications delivered to {len(delivered)} of {len(notifiers)} channel(s)."
        )


def _print_results(result: CleanupResult) -> None:
    """Display deletion results."""
    table = create_table("Deletion Results")
    table.add_column("Status", width=8, justify="center")
    table.add_column("Type", width=5)
    table.add_column("Path", no_wrap=True)
    table.add_column("Details", style="muted")

    for item in result.deleted:
        table.add_row("[success]OK[/]", item.item_type.value, escape(item.path), "")
    for item in result.failed:
        table.add_row(
            "[error]FAIL[/]",
            item.item_type.value,
            escape(item.path),
            escape(result.errors.get(item.path, "Unknown error")),
        )

    console.print(table)


def _print_report_paths(paths: ReportPaths) -> None:
    print_path("Summary report", paths.summary)
    print_path("Detail report", paths.detail)
