"""
Health check registry.

Checks are evaluated in the order of ``_BUILTIN_MODULES``; that order is the
display order of a health report.
"""

from importlib import import_module

from devsuite.checks.base import (
    CheckSpec,
    CheckStatus,
    HealthCheck,
    RepositorySnapshot,
)

__all__ = [
    "CheckSpec",
    "CheckStatus",
    "HealthCheck",
    "RepositorySnapshot",
    "load_check_specs",
]

_BUILTIN_MODULES = [
    "devsuite.checks.readme_presence",
    "devsuite.checks.license_file",
    "devsuite.checks.recent_activity",
    "devsuite.checks.issue_management",
    "devsuite.checks.community_engagement",
    "devsuite.checks.documentation",
    "devsuite.checks.release_management",
]

_CHECK_SPECS: list[CheckSpec] | None = None


def _load_builtin_check_specs() -> list[CheckSpec]:
    specs: list[CheckSpec] = []
    for module_path in _BUILTIN_MODULES:
        module = import_module(module_path)
        spec = getattr(module, "CHECK", None)
        if isinstance(spec, CheckSpec):
            specs.append(spec)
    return specs


def load_check_specs() -> list[CheckSpec]:
    """
    Return the ordered list of health check specs.

    Specs are loaded once and reused; duplicate names keep the first entry.
    """
    global _CHECK_SPECS
    if _CHECK_SPECS is None:
        seen: set[str] = set()
        specs: list[CheckSpec] = []
        for spec in _load_builtin_check_specs():
            if spec.name in seen:
                continue
            seen.add(spec.name)
            specs.append(spec)
        _CHECK_SPECS = specs
    return list(_CHECK_SPECS)
