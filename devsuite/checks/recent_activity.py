"""Recent activity check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot

ACTIVE_DAYS = 30
STALE_DAYS = 90


def check_recent_activity(snapshot: RepositorySnapshot, now: datetime) -> HealthCheck:
    """
    Checks how recently the repository received a push.

    ``now`` is supplied by the caller so results are reproducible; it must be
    timezone-aware whenever ``snapshot.pushed_at`` is.

    Status levels:
    - 30 days or less: pass
    - 31-90 days: warning
    - More than 90 days: fail
    """
    days = snapshot.days_since_push(now)

    if days <= ACTIVE_DAYS:
        status = CheckStatus.PASS
    elif days <= STALE_DAYS:
        status = CheckStatus.WARNING
    else:
        status = CheckStatus.FAIL

    recommendation = None
    if days > ACTIVE_DAYS:
        recommendation = "Consider updating the repository more frequently"

    return HealthCheck(
        "Recent Activity",
        status,
        f"Last updated {days} days ago",
        recommendation,
    )


CHECK = CheckSpec(name="Recent Activity", checker=check_recent_activity)
