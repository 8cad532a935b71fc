"""
Shared health check types and the repository snapshot they evaluate.
"""

from datetime import datetime
from typing import Callable, NamedTuple


class CheckStatus:
    """Possible outcomes of a single health check."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"

    ALL = (PASS, WARNING, FAIL)


class RepositorySnapshot(NamedTuple):
    """Already-fetched repository facts consumed by the health checks."""

    full_name: str
    pushed_at: datetime
    description: str = ""
    open_issues_count: int = 0
    has_readme: bool = False
    has_license: bool = False
    license_name: str = ""
    contributor_count: int = 0
    release_count: int = 0

    def days_since_push(self, now: datetime) -> int:
        """Whole days elapsed between the last push and ``now``."""
        return (now - self.pushed_at).days


class HealthCheck(NamedTuple):
    """A single named evaluation of a repository best practice."""

    name: str
    status: str  # "pass", "warning", "fail"
    description: str
    recommendation: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS


class CheckSpec(NamedTuple):
    """Specification for a health check."""

    name: str
    checker: Callable[[RepositorySnapshot, datetime], HealthCheck]
