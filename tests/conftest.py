"""
Shared fixtures for the test suite.
"""

from datetime import datetime, timedelta, timezone

import pytest

from devsuite.checks.base import RepositorySnapshot

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for activity checks."""
    return NOW


@pytest.fixture
def make_snapshot():
    """Build snapshots that are healthy unless a field is overridden."""

    def _make(days_since_push: int = 10, **overrides) -> RepositorySnapshot:
        fields = {
            "full_name": "octo/repo",
            "pushed_at": NOW - timedelta(days=days_since_push),
            "description": "A tool",
            "open_issues_count": 5,
            "has_readme": True,
            "has_license": True,
            "license_name": "MIT License",
            "contributor_count": 8,
            "release_count": 3,
        }
        fields.update(overrides)
        return RepositorySnapshot(**fields)

    return _make
