"""
Tests for the configuration module.
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from devsuite.classifier import DEFAULT_LABEL_RULES
from devsuite.config import (
    build_label_rules,
    get_excluded_repositories,
    get_label_rules,
    get_verify_ssl,
    get_webhook_secret,
    is_repository_excluded,
    set_verify_ssl,
)


@pytest.fixture
def temp_project_root(monkeypatch):
    """Create a temporary project root for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        monkeypatch.setattr("devsuite.config.PROJECT_ROOT", tmpdir_path)
        yield tmpdir_path


def test_get_excluded_repositories_from_local_config(temp_project_root):
    """Test loading excluded repositories from .devsuite.toml."""
    (temp_project_root / ".devsuite.toml").write_text(
        """
[tool.devsuite]
exclude = ["octo/legacy", "octo/archive"]
"""
    )

    excluded = get_excluded_repositories()
    assert excluded == ["octo/legacy", "octo/archive"]


def test_get_excluded_repositories_from_pyproject(temp_project_root):
    """Test loading excluded repositories from pyproject.toml."""
    (temp_project_root / "pyproject.toml").write_text(
        """
[tool.devsuite]
exclude = ["psf/requests"]
"""
    )

    assert get_excluded_repositories() == ["psf/requests"]


def test_local_config_takes_priority(temp_project_root):
    """Test that .devsuite.toml takes priority over pyproject.toml."""
    (temp_project_root / "pyproject.toml").write_text(
        """
[tool.devsuite]
exclude = ["psf/requests"]
"""
    )
    (temp_project_root / ".devsuite.toml").write_text(
        """
[tool.devsuite]
exclude = ["pallets/flask"]
"""
    )

    excluded = get_excluded_repositories()
    assert "pallets/flask" in excluded
    assert "psf/requests" not in excluded


def test_pyproject_without_tool_table_is_ignored(temp_project_root):
    (temp_project_root / "pyproject.toml").write_text('[project]\nname = "x"\n')
    assert get_excluded_repositories() == []


def test_duplicates_are_removed(temp_project_root):
    (temp_project_root / ".devsuite.toml").write_text(
        """
[tool.devsuite]
exclude = ["a/b", "c/d", "a/b"]
"""
    )
    assert get_excluded_repositories() == ["a/b", "c/d"]


def test_is_repository_excluded_case_insensitive(temp_project_root):
    """Test that repository exclusion check is case-insensitive."""
    (temp_project_root / ".devsuite.toml").write_text(
        """
[tool.devsuite]
exclude = ["Octo/Legacy"]
"""
    )

    assert is_repository_excluded("octo/legacy")
    assert is_repository_excluded("OCTO/LEGACY")
    assert not is_repository_excluded("octo/current")


def test_missing_files_return_empty_list(temp_project_root):
    assert get_excluded_repositories() == []


def test_malformed_config_raises(temp_project_root):
    (temp_project_root / ".devsuite.toml").write_text("[tool.devsuite\nexclude = ")
    with pytest.raises(ValueError, match="Failed to load config"):
        get_excluded_repositories()


class TestLabelRules:
    """Test label rule configuration."""

    def test_defaults_without_config(self, temp_project_root):
        assert get_label_rules() == DEFAULT_LABEL_RULES

    def test_disable_and_extend_rules(self, temp_project_root):
        (temp_project_root / ".devsuite.toml").write_text(
            """
[tool.devsuite.labels.bug]
active = false

[tool.devsuite.labels.testing]
keywords = ["pytest", "flaky"]

[tool.devsuite.labels.api]
active = true

[tool.devsuite.labels.i18n]
keywords = ["translation", "locale"]
description = "Internationalization"
"""
        )

        rules = get_label_rules()

        assert rules.get("bug").active is False
        assert rules.get("bug").keywords == DEFAULT_LABEL_RULES.get("bug").keywords
        assert rules.get("testing").keywords == ("pytest", "flaky")
        assert rules.get("api").active is True
        assert rules.labels[-1] == "i18n"
        assert rules.get("i18n").description == "Internationalization"
        assert rules.get("i18n").active is True

    def test_new_rule_requires_keywords(self):
        with pytest.raises(ValueError, match="requires keywords"):
            build_label_rules({"i18n": {"active": True}})

    def test_keywords_must_be_strings(self):
        with pytest.raises(ValueError, match="keywords must be a list of strings"):
            build_label_rules({"bug": {"keywords": "crash"}})

    def test_rule_must_be_table(self):
        with pytest.raises(ValueError, match="must be a table"):
            build_label_rules({"bug": True})


def test_get_webhook_secret():
    with patch.dict("os.environ", {"DEVSUITE_WEBHOOK_SECRET": "s3cret"}):
        assert get_webhook_secret() == "s3cret"
    with patch.dict("os.environ", {}, clear=True):
        assert get_webhook_secret() is None


def test_set_verify_ssl():
    original = get_verify_ssl()
    try:
        set_verify_ssl(False)
        assert get_verify_ssl() is False
        set_verify_ssl(True)
        assert get_verify_ssl() is True
    finally:
        set_verify_ssl(original)
