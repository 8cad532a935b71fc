"""
Repository health scoring.

A health report is the ordered result of every registered check plus a
0-100 score: the share of checks that passed.
"""

from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from devsuite.checks import load_check_specs
from devsuite.checks.base import CheckStatus, HealthCheck, RepositorySnapshot


class HealthReport(NamedTuple):
    """The result of a repository health analysis."""

    full_name: str
    score: int
    checks: tuple[HealthCheck, ...]

    @property
    def pass_count(self) -> int:
        return sum(1 for check in self.checks if check.passed)

    @property
    def recommendations(self) -> list[str]:
        return [check.recommendation for check in self.checks if check.recommendation]


class HealthSummary(NamedTuple):
    """Aggregate statistics over several health reports."""

    repository_count: int = 0
    total_score: int = 0
    # Read-only defaults; merge and summarize_reports build new dicts
    status_counts: Mapping[str, int] = MappingProxyType({})
    # Check name -> number of non-pass results
    failing_checks: Mapping[str, int] = MappingProxyType({})

    @property
    def average_score(self) -> float:
        if self.repository_count == 0:
            return 0.0
        return self.total_score / self.repository_count

    def merge(self, other: "HealthSummary") -> "HealthSummary":
        """Combine two summaries computed over disjoint sets of reports."""
        return HealthSummary(
            repository_count=self.repository_count + other.repository_count,
            total_score=self.total_score + other.total_score,
            status_counts=_add_counts(self.status_counts, other.status_counts),
            failing_checks=_add_counts(self.failing_checks, other.failing_checks),
        )


def _add_counts(left: Mapping[str, int], right: Mapping[str, int]) -> dict[str, int]:
    merged = dict(left)
    for key, count in right.items():
        merged[key] = merged.get(key, 0) + count
    return merged


def compute_score(checks: Iterable[HealthCheck]) -> int:
    """
    Percentage of passing checks, rounded half-up to an integer.

    Returns 0 when there are no checks.
    """
    checks = list(checks)
    total = len(checks)
    if total == 0:
        return 0
    passed = sum(1 for check in checks if check.passed)
    # Integer form of round-half-up(100 * passed / total)
    return (200 * passed + total) // (2 * total)


def run_checks(snapshot: RepositorySnapshot, now: datetime) -> tuple[HealthCheck, ...]:
    """Evaluate every registered check against the snapshot, in registry order."""
    return tuple(spec.checker(snapshot, now) for spec in load_check_specs())


def compute_health(snapshot: RepositorySnapshot, now: datetime) -> HealthReport:
    """
    Score a repository snapshot.

    Args:
        snapshot: Repository facts supplied by the data-fetch layer.
        now: Reference time for the activity check. Never read from the
             system clock here so that identical inputs give identical reports.

    Returns:
        HealthReport with the score and the ordered checks.
    """
    checks = run_checks(snapshot, now)
    return HealthReport(
        full_name=snapshot.full_name,
        score=compute_score(checks),
        checks=checks,
    )


def analyze_snapshots(
    snapshots: Iterable[RepositorySnapshot], now: datetime
) -> list[HealthReport]:
    """Score many snapshots against the same reference time, preserving order."""
    return [compute_health(snapshot, now) for snapshot in snapshots]


def summarize_reports(reports: Iterable[HealthReport]) -> HealthSummary:
    """Reduce health reports to aggregate counts and an average score."""
    summary = HealthSummary(
        status_counts={status: 0 for status in CheckStatus.ALL}, failing_checks={}
    )
    for report in reports:
        status_counts: dict[str, int] = {}
        failing: dict[str, int] = {}
        for check in report.checks:
            status_counts[check.status] = status_counts.get(check.status, 0) + 1
            if not check.passed:
                failing[check.name] = failing.get(check.name, 0) + 1
        summary = summary.merge(
            HealthSummary(
                repository_count=1,
                total_score=report.score,
                status_counts=status_counts,
                failing_checks=failing,
            )
        )
    return summary


def health_label(score: int) -> str:
    """Supportive wording for a score, as shown in reports."""
    if score >= 80:
        return "Healthy"
    if score >= 50:
        return "Needs attention"
    return "Needs support"
