"""Cleanup planning and execution.

This module provides the decision pipeline: planning deletion
candidates, the recently-deleted ledger, plan execution, the emergency
decision, and report rendering.
"""

from xcleanup.cleanup.emergency import is_emergency
from xcleanup.cleanup.executor import CleanupExecutor
from xcleanup.cleanup.models import CleanupItem, CleanupPlan, CleanupResult, ItemType
from xcleanup.cleanup.planner import CleanupPlanner, is_directory_empty, resolve_root_paths
from xcleanup.cleanup.report import CleanupReport, ReportPaths, write_reports
from xcleanup.cleanup.state import CleanupStateStore

__all__ = [
    "CleanupExecutor",
    "CleanupItem",
    "CleanupPlan",
    "CleanupPlanner",
    "CleanupReport",
    "CleanupResult",
    "CleanupStateStore",
    "ItemType",
    "ReportPaths",
    "is_directory_empty",
    "is_emergency",
    "resolve_root_paths",
    "write_reports",
]
