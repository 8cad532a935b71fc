"""Issue management check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot

OPEN_ISSUES_THRESHOLD = 50


def check_issue_management(snapshot: RepositorySnapshot) -> HealthCheck:
    """Warns once the open issue backlog reaches 50."""
    open_issues = snapshot.open_issues_count
    description = f"{open_issues} open issues"

    if open_issues < OPEN_ISSUES_THRESHOLD:
        return HealthCheck("Issue Management", CheckStatus.PASS, description)
    return HealthCheck(
        "Issue Management",
        CheckStatus.WARNING,
        description,
        "Consider addressing some open issues",
    )


def _check(snapshot: RepositorySnapshot, _now: datetime) -> HealthCheck:
    return check_issue_management(snapshot)


CHECK = CheckSpec(name="Issue Management", checker=_check)
