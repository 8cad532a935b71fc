"""Release management check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot


def check_release_management(snapshot: RepositorySnapshot) -> HealthCheck:
    """Passes once at least one release has been published."""
    releases = snapshot.release_count
    description = f"{releases} releases published"

    if releases > 0:
        return HealthCheck("Release Management", CheckStatus.PASS, description)
    return HealthCheck(
        "Release Management",
        CheckStatus.WARNING,
        description,
        "Consider creating releases to mark important milestones",
    )


def _check(snapshot: RepositorySnapshot, _now: datetime) -> HealthCheck:
    return check_release_management(snapshot)


CHECK = CheckSpec(name="Release Management", checker=_check)
