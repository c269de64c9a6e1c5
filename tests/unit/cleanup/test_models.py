"""Unit tests for cleanup plan and result models."""

import pytest
from xcleanup.cleanup.models import CleanupItem, CleanupPlan, CleanupResult, ItemType
from xcleanup.filesystem.models import DiskUsage


def _item(path: str, item_type: ItemType = ItemType.FILE, size: int = 0) -> CleanupItem:
    return CleanupItem(path=path, item_type=item_type, size_bytes=size, modified_at=0)


class TestCleanupItem:
    """Tests for CleanupItem."""

    def test_type_helpers(self) -> None:
        assert _item("/a").is_file is True
        assert _item("/a", ItemType.DIR).is_dir is True

    def test_item_type_values(self) -> None:
        assert ItemType.FILE.value == "file"
        assert ItemType.DIR.value == "dir"

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="Path cannot be empty"):
            _item("")

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            _item("/a", size=-5)


class TestCleanupPlan:
    """Tests for CleanupPlan aggregates."""

    def test_counts_and_size(self) -> None:
        plan = CleanupPlan(
            items=(_item("/a", size=3), _item("/b", size=4), _item("/c", ItemType.DIR)),
            disk_usage=DiskUsage(total_bytes=10, free_bytes=5),
        )

        assert plan.file_count == 2
        assert plan.dir_count == 1
        assert plan.total_size_bytes == 7
        assert plan.is_empty is False
        assert plan.emergency is False

    def test_empty_plan(self) -> None:
        plan = CleanupPlan(items=(), disk_usage=DiskUsage(total_bytes=10, free_bytes=5))

        assert plan.is_empty is True
        assert plan.total_size_bytes == 0


class TestCleanupResult:
    """Tests for CleanupResult aggregates."""

    def test_deleted_aggregates(self) -> None:
        result = CleanupResult(
            deleted=(_item("/a", size=10), _item("/d", ItemType.DIR)),
            failed=(_item("/b"),),
            errors={"/b": "Permission denied"},
        )

        assert result.deleted_file_count == 1
        assert result.deleted_dir_count == 1
        assert result.deleted_size_bytes == 10
        assert result.has_failures is True

    def test_defaults(self) -> None:
        result = CleanupResult()

        assert result.has_failures is False
        assert result.errors == {}
