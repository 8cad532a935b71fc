"""License file check."""

from datetime import datetime

from devsuite.checks.base import CheckSpec, CheckStatus, HealthCheck, RepositorySnapshot


def check_license_file(snapshot: RepositorySnapshot) -> HealthCheck:
    """
    Checks that a license file is present.

    A missing license is a warning rather than a failure: the code is still
    usable by its owners, but outside users cannot rely on it.
    """
    if snapshot.has_license:
        license_name = snapshot.license_name or "Unknown"
        return HealthCheck(
            "License File",
            CheckStatus.PASS,
            f"{license_name} license detected",
        )
    return HealthCheck(
        "License File",
        CheckStatus.WARNING,
        "No license file found",
        "Add a license file to clarify usage rights",
    )


def _check(snapshot: RepositorySnapshot, _now: datetime) -> HealthCheck:
    return check_license_file(snapshot)


CHECK = CheckSpec(name="License File", checker=_check)
