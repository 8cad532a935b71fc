"""Repository description check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot


def check_documentation(snapshot: RepositorySnapshot) -> HealthCheck:
    if snapshot.description.strip():
        return HealthCheck(
            "Documentation",
            CheckStatus.PASS,
            "Repository has a description",
        )
    return HealthCheck(
        "Documentation",
        CheckStatus.WARNING,
        "No repository description",
        "Add a clear description to your repository",
    )


def _check(snapshot: RepositorySnapshot, _now: datetime) -> HealthCheck:
    return check_documentation(snapshot)


CHECK = CheckSpec(name="Documentation", checker=_check)
