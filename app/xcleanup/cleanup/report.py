"""Plain-text cleanup reports.

Renders the confirmation, dry-run, and execution reports that are
written to the log directory and forwarded to notification channels.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from xcleanup.cleanup.models import CleanupItem, CleanupPlan, CleanupResult
from xcleanup.core.errors import StorageError
from xcleanup.core.paths import ensure_dir

REPORT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def bytes_to_mb(size_bytes: int) -> float:
    return size_bytes / 1024 / 1024


def render_items(items: Iterable[CleanupItem]) -> str:
    """Render one ``type | path | size MB`` line per item."""
    lines = [
        f"{item.item_type.value} | {item.path} | {bytes_to_mb(item.size_bytes):.2f} MB"
        for item in items
    ]
    return "\n".join(lines) + "\n"


def _mode(emergency: bool) -> str:
    return "EMERGENCY" if emergency else "STANDARD"


def _space_lines(total_size_bytes: int, free_bytes: int) -> str:
    return (
        f"Total size (MB): {bytes_to_mb(total_size_bytes):.2f}\n"
        f"Free before (MB): {bytes_to_mb(free_bytes):.2f}\n"
        f"Free after (MB): {bytes_to_mb(free_bytes + total_size_bytes):.2f}\n"
    )


class CleanupReport:
    """Renders summary and detail reports for a cleanup run.

    "Free after" is an estimate: free space before the run plus the
    size of the planned (or deleted) items.
    """

    def render_plan_summary(self, confirm_key: str, plan: CleanupPlan) -> str:
        """Render the confirmation file shown before execution."""
        summary = (
            f"Confirm key: {confirm_key}\n"
            f"Total files: {plan.file_count}\n"
            f"Total directories: {plan.dir_count}\n"
        ) + _space_lines(plan.total_size_bytes, plan.disk_usage.free_bytes)
        return summary + "\nPlanned items:\n" + render_items(plan.items)

    def render_execution_summary(self, result: CleanupResult, plan: CleanupPlan) -> str:
        return (
            f"Mode: {_mode(plan.emergency)}\n"
            f"Deleted files: {result.deleted_file_count}\n"
            f"Deleted directories: {result.deleted_dir_count}\n"
            f"Failed items: {len(result.failed)}\n"
        ) + _space_lines(result.deleted_size_bytes, plan.disk_usage.free_bytes)

    def render_execution_detail(self, result: CleanupResult) -> str:
        detail = "Deleted items:\n" + render_items(result.deleted)
        if result.failed:
            lines = [
                f"{item.item_type.value} | {item.path} | {result.errors.get(item.path, 'unknown error')}"
                for item in result.failed
            ]
            detail += "\nFailed items:\n" + "\n".join(lines) + "\n"
        return detail

    def render_dry_run_summary(self, plan: CleanupPlan) -> str:
        return (
            f"Mode: {_mode(plan.emergency)} (DRY-RUN)\n"
            f"Planned files: {plan.file_count}\n"
            f"Planned directories: {plan.dir_count}\n"
        ) + _space_lines(plan.total_size_bytes, plan.disk_usage.free_bytes)

    def render_dry_run_detail(self, plan: CleanupPlan) -> str:
        return "Planned items (dry-run):\n" + render_items(plan.items)


@dataclass(frozen=True, slots=True)
class ReportPaths:
    """Locations of the written report files."""

    summary: Path
    detail: Path


def write_text(path: Path, contents: str) -> Path:
    """Write a report file, creating its directory if needed.

    Raises:
        StorageError: If the directory or file cannot be written.
    """
    ensure_dir(path.parent, "report")
    try:
        path.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Unable to write file {path}: {e}") from e
    return path


def write_reports(
    log_dir: Path,
    summary: str,
    detail: str,
    now: datetime | None = None,
) -> ReportPaths:
    """Write summary and detail reports into the log directory.

    Args:
        log_dir: Directory receiving the reports.
        summary: Rendered summary report.
        detail: Rendered detail report.
        now: Timestamp for the file names (defaults to the current time).

    Returns:
        ReportPaths with both file locations.

    Raises:
        StorageError: If a report cannot be written.
    """
    stamp = (now or datetime.now()).strftime(REPORT_TIMESTAMP_FORMAT)
    summary_path = write_text(log_dir / f"cleanup-summary-{stamp}.log", summary)
    detail_path = write_text(log_dir / f"cleanup-detail-{stamp}.log", detail)
    return ReportPaths(summary=summary_path, detail=detail_path)
