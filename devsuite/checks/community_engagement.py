"""Community engagement check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot

HEALTHY_CONTRIBUTORS = 5
MIN_CONTRIBUTORS = 2


def check_community_engagement(snapshot: RepositorySnapshot) -> HealthCheck:
    """
    Evaluates the size of the contributor base.

    Status levels:
    - 5+ contributors: pass
    - 2-4 contributors: warning
    - 0-1 contributors: fail
    """
    contributors = snapshot.contributor_count

    if contributors >= HEALTHY_CONTRIBUTORS:
        status = CheckStatus.PASS
    elif contributors >= MIN_CONTRIBUTORS:
        status = CheckStatus.WARNING
    else:
        status = CheckStatus.FAIL

    recommendation = None
    if contributors < HEALTHY_CONTRIBUTORS:
        recommendation = "Encourage more community contributions"

    return HealthCheck(
        "Community Engagement",
        status,
        f"{contributors} contributors",
        recommendation,
    )


def _check(snapshot: RepositorySnapshot, _now: datetime) -> HealthCheck:
    return check_community_engagement(snapshot)


CHECK = CheckSpec(name="Community Engagement", checker=_check)
