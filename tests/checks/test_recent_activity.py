"""
Tests for the recent_activity check.
"""

from datetime import timedelta

import pytest

from devsuite.checks.recent_activity import check_recent_activity


class TestRecentActivityCheck:
    """Test the check_recent_activity function."""

    @pytest.mark.parametrize(
        "days, status",
        [
            (0, "pass"),
            (30, "pass"),
            (31, "warning"),
            (90, "warning"),
            (91, "fail"),
            (800, "fail"),
        ],
    )
    def test_activity_thresholds(self, make_snapshot, now, days, status):
        """Test the 30 and 90 day boundaries."""
        result = check_recent_activity(make_snapshot(days_since_push=days), now)
        assert result.name == "Recent Activity"
        assert result.status == status
        assert result.description == f"Last updated {days} days ago"

    def test_recommendation_only_after_thirty_days(self, make_snapshot, now):
        """Test that recently active repositories get no recommendation."""
        fresh = check_recent_activity(make_snapshot(days_since_push=30), now)
        stale = check_recent_activity(make_snapshot(days_since_push=31), now)
        assert fresh.recommendation is None
        assert stale.recommendation == (
            "Consider updating the repository more frequently"
        )

    def test_partial_days_are_floored(self, make_snapshot, now):
        """Test that 30 days and 23 hours still counts as 30 days."""
        snapshot = make_snapshot()._replace(
            pushed_at=now - timedelta(days=30, hours=23)
        )
        result = check_recent_activity(snapshot, now)
        assert result.status == "pass"
        assert result.description == "Last updated 30 days ago"

    def test_uses_supplied_time(self, make_snapshot, now):
        """Test that the result depends only on the supplied reference time."""
        snapshot = make_snapshot(days_since_push=10)
        later = now + timedelta(days=100)
        assert check_recent_activity(snapshot, now).status == "pass"
        assert check_recent_activity(snapshot, later).status == "fail"
