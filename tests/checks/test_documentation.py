"""
Tests for the documentation check.
"""

from devsuite.checks.documentation import check_documentation


class TestDocumentationCheck:
    """Test the check_documentation function."""

    def test_description_present(self, make_snapshot):
        result = check_documentation(make_snapshot(description="A tool"))
        assert result.name == "Documentation"
        assert result.status == "pass"
        assert result.recommendation is None

    def test_description_empty(self, make_snapshot):
        result = check_documentation(make_snapshot(description=""))
        assert result.status == "warning"
        assert result.description == "No repository description"
        assert result.recommendation == "Add a clear description to your repository"

    def test_description_whitespace_only(self, make_snapshot):
        """Test that a blank description counts as missing."""
        result = check_documentation(make_snapshot(description="   "))
        assert result.status == "warning"
