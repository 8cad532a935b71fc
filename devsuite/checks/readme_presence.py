"""README presence check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot


def check_readme_presence(snapshot: RepositorySnapshot) -> HealthCheck:
    """
    Checks that the repository ships a README.

    Status:
    - README found: pass
    - No README: fail
    """
    if snapshot.has_readme:
        return HealthCheck(
            "README.md Present",
            CheckStatus.PASS,
            "Repository has a README file",
        )
    return HealthCheck(
        "README.md Present",
        CheckStatus.FAIL,
        "No README file found",
        "Add a comprehensive README file to help users understand your project",
    )


def _check(snapshot: RepositorySnapshot, _now: datetime) -> HealthCheck:
    return check_readme_presence(snapshot)


CHECK = CheckSpec(name="README.md Present", checker=_check)
