"""
Configuration management for GitHub DevSuite.

Loads settings from:
1. .devsuite.toml (local config)
2. pyproject.toml (project-level config)

Both files use the ``[tool.devsuite]`` table.
"""

import os
import tomllib
from pathlib import Path

from devsuite.classifier import DEFAULT_LABEL_RULES, LabelRule, RuleSet

# project_root is the parent directory of devsuite/
PROJECT_ROOT = Path(__file__).resolve().parent.parent

LOCAL_CONFIG_NAME = ".devsuite.toml"
PYPROJECT_NAME = "pyproject.toml"

WEBHOOK_SECRET_ENV = "DEVSUITE_WEBHOOK_SECRET"

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict:
    """
    Return the ``[tool.devsuite]`` table.

    Priority:
    1. .devsuite.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        The first non-empty table found, or an empty dict.
    """
    for config_name in (LOCAL_CONFIG_NAME, PYPROJECT_NAME):
        config_path = PROJECT_ROOT / config_name
        if config_path.exists():
            config = load_config_file(config_path)
            tool_config = config.get("tool", {}).get("devsuite", {})
            if tool_config:
                return tool_config
    return {}


def get_excluded_repositories() -> list[str]:
    """
    Load excluded repositories (``owner/repo``) from configuration files.

    Returns:
        List of excluded repository names.
    """
    excluded = get_tool_config().get("exclude", [])
    return list(dict.fromkeys(excluded))  # Remove duplicates, keep order


def is_repository_excluded(full_name: str) -> bool:
    """
    Check if a repository is in the excluded list.

    Args:
        full_name: Repository name in ``owner/repo`` form.

    Returns:
        True if the repository is excluded, False otherwise.
    """
    excluded = get_excluded_repositories()
    return full_name.lower() in [repo.lower() for repo in excluded]


def build_label_rules(
    overrides: dict[str, dict], base: RuleSet = DEFAULT_LABEL_RULES
) -> RuleSet:
    """
    Apply ``[tool.devsuite.labels.<label>]`` overrides to a rule set.

    Known labels keep their unspecified fields; unknown labels are appended
    as new rules and must define ``keywords``.

    Raises:
        ValueError: If an override is malformed.
    """
    rules = base
    for label, override in overrides.items():
        if not isinstance(override, dict):
            raise ValueError(f"Label rule '{label}' must be a table.")

        keywords = override.get("keywords")
        if keywords is not None and (
            not isinstance(keywords, list)
            or not all(isinstance(keyword, str) for keyword in keywords)
        ):
            raise ValueError(
                f"Label rule '{label}': keywords must be a list of strings."
            )

        existing = rules.get(label)
        if existing is None:
            if not keywords:
                raise ValueError(f"New label rule '{label}' requires keywords.")
            existing = LabelRule(label, ())

        changes = {}
        if keywords is not None:
            changes["keywords"] = tuple(keywords)
        for field in ("active", "description", "color"):
            if field in override:
                changes[field] = override[field]
        if "active" in changes:
            changes["active"] = bool(changes["active"])

        rules = rules.with_rule(existing._replace(**changes))
    return rules


def get_label_rules() -> RuleSet:
    """
    Build the active label rule table.

    Defaults come from ``DEFAULT_LABEL_RULES``; each
    ``[tool.devsuite.labels.<label>]`` table may change ``keywords``,
    ``active``, ``description`` or ``color``.
    """
    overrides = get_tool_config().get("labels", {})
    return build_label_rules(overrides)


def get_webhook_secret() -> str | None:
    """Return the webhook HMAC secret, or None when it is not configured."""
    return os.getenv(WEBHOOK_SECRET_ENV) or None


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL
