"""Emergency mode decision."""

import logging

from xcleanup.core.config import EmergencySettings
from xcleanup.filesystem.models import DiskUsage

logger = logging.getLogger(__name__)


def is_emergency(settings: EmergencySettings, disk_usage: DiskUsage) -> bool:
    """Decide whether low free space warrants emergency cleanup.

    Any one breached threshold is enough. Nothing is checked when
    emergency mode is disabled.

    Args:
        settings: Emergency thresholds from configuration.
        disk_usage: Current disk usage snapshot.

    Returns:
        True if emergency mode should be used for this run.
    """
    if not settings.enabled:
        return False

    breached: list[str] = []
    if disk_usage.free_percent < settings.free_percent_threshold:
        breached.append("free_percent_threshold")
    if disk_usage.free_bytes < settings.free_bytes_threshold:
        breached.append("free_bytes_threshold")
    if disk_usage.free_bytes < settings.free_bytes_critical_threshold:
        breached.append("free_bytes_critical_threshold")

    if breached:
        logger.warning(
            "Emergency mode triggered (free %.2f%%, %d bytes): %s",
            disk_usage.free_percent,
            disk_usage.free_bytes,
            ", ".join(breached),
        )
        return True

    return False
