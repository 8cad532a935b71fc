"""
GitHub VCS provider implementation for GitHub DevSuite.

Uses the GitHub REST API to collect the facts the health checks need and
the issue lists the label classifier works on.
"""

import os
from datetime import datetime, timezone
from typing import Any

import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from devsuite.checks.base import RepositorySnapshot
from devsuite.http_client import _get_http_client
from devsuite.vcs.base import BaseVCSProvider

# Load environment variables
load_dotenv()
console = Console()

# Page sizes used for list endpoints
PAGE_SIZES = {
    "contributors": 100,
    "releases": 50,
    "issues": 100,
}

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


class GitHubAPIError(ValueError):
    """Raised when the GitHub API refuses or cannot serve a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def parse_repository_spec(spec: str) -> tuple[str, str]:
    """
    Split an ``owner/repo`` specification.

    Accepts full ``https://github.com/owner/repo`` URLs as well.

    Raises:
        ValueError: If the specification is not in ``owner/repo`` form.
    """
    cleaned = spec.strip().removeprefix("https://github.com/").strip("/")
    cleaned = cleaned.removesuffix(".git")
    parts = cleaned.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid repository format: '{spec}'. Use owner/repo")
    return parts[0], parts[1]


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


class GitHubProvider(BaseVCSProvider):
    """GitHub VCS provider using the REST API."""

    def __init__(self, token: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub access token. If not provided, reads from the
                   GITHUB_TOKEN environment variable.

        Raises:
            ValueError: If token is not provided and GITHUB_TOKEN env var is not set
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GITHUB_TOKEN is required for GitHub provider.\n"
                "\n"
                "To get started:\n"
                "1. Create a GitHub Personal Access Token:\n"
                "   → https://github.com/settings/tokens/new\n"
                "2. Select scope: 'public_repo'\n"
                "3. Set the token:\n"
                "   export GITHUB_TOKEN='your_token_here'  # Linux/macOS\n"
                "   or add to your .env file: GITHUB_TOKEN=your_token_here\n"
            )

    def get_platform_name(self) -> str:
        """Return 'github' as the platform identifier."""
        return "github"

    def validate_credentials(self) -> bool:
        """Check if GitHub token is configured."""
        return bool(self.token)

    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct GitHub repository URL."""
        return f"https://github.com/{owner}/{repo}"

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a REST endpoint and return its decoded JSON body.

        Raises:
            GitHubAPIError: On authentication, permission, rate limit or
                not-found errors.
            httpx.HTTPStatusError: On any other error status.
        """
        client = _get_http_client()
        response = client.get(path, params=params, headers=self._headers())

        if response.status_code == 401:
            raise GitHubAPIError(
                "GitHub authentication failed. Check your GITHUB_TOKEN.", 401
            )
        if response.status_code == 403:
            # The reset header comes with every response, not only throttled ones
            reset = response.headers.get("x-ratelimit-reset")
            if response.headers.get("x-ratelimit-remaining") == "0" and reset:
                reset_at = datetime.fromtimestamp(int(reset), tz=timezone.utc)
                raise GitHubAPIError(
                    "GitHub API rate limit exceeded. "
                    f"Resets at {reset_at.strftime('%H:%M:%S')} UTC",
                    403,
                )
            raise GitHubAPIError(f"Access forbidden: {path}", 403)
        if response.status_code == 404:
            raise GitHubAPIError(f"Not found or access denied: {path}", 404)

        response.raise_for_status()
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _request_optional(self, path: str, **params: Any) -> Any:
        """GET an endpoint whose failure means 'absent' rather than an error."""
        try:
            return self._request(path, params or None)
        except (GitHubAPIError, httpx.HTTPError) as e:
            status = getattr(e, "status_code", None)
            if status != 404:
                console.print(
                    f"  [yellow]⚠️  {path} unavailable, treated as absent: "
                    f"{escape(str(e))}[/yellow]"
                )
            return None

    def get_repository(self, owner: str, repo: str) -> dict[str, Any]:
        """
        Fetch repository metadata.

        Raises:
            ValueError: If the repository is not found or inaccessible.
        """
        try:
            return self._request(f"/repos/{owner}/{repo}")
        except GitHubAPIError as e:
            if e.status_code == 404:
                raise GitHubAPIError(
                    f"Repository {owner}/{repo} not found or access denied.", 404
                ) from e
            raise

    def get_snapshot(self, owner: str, repo: str) -> RepositorySnapshot:
        """
        Collect a RepositorySnapshot for the health checks.

        Only the repository metadata request is mandatory; README, license,
        contributor and release lookups that fail are recorded as absent.
        """
        repository = self.get_repository(owner, repo)
        base = f"/repos/{owner}/{repo}"

        readme = self._request_optional(f"{base}/readme")
        license_data = self._request_optional(f"{base}/license")
        contributors = self._request_optional(
            f"{base}/contributors", per_page=PAGE_SIZES["contributors"]
        )
        releases = self._request_optional(
            f"{base}/releases", per_page=PAGE_SIZES["releases"]
        )

        return self._normalize_snapshot(
            repository, readme, license_data, contributors, releases
        )

    def _normalize_snapshot(
        self,
        repository: dict[str, Any],
        readme: Any,
        license_data: Any,
        contributors: Any,
        releases: Any,
    ) -> RepositorySnapshot:
        pushed_at = (
            _parse_timestamp(repository.get("pushed_at"))
            or _parse_timestamp(repository.get("created_at"))
            or _EPOCH
        )

        # The /license lookup can fail while the metadata still names a license
        repository_license = repository.get("license") or {}
        license_name = repository_license.get("name") or ""
        if isinstance(license_data, dict):
            license_info = license_data.get("license") or {}
            license_name = license_info.get("name") or license_name

        return RepositorySnapshot(
            full_name=repository.get("full_name", ""),
            pushed_at=pushed_at,
            description=repository.get("description") or "",
            open_issues_count=repository.get("open_issues_count") or 0,
            has_readme=readme is not None,
            has_license=license_data is not None or bool(repository_license),
            license_name=license_name,
            contributor_count=len(contributors) if isinstance(contributors, list) else 0,
            release_count=len(releases) if isinstance(releases, list) else 0,
        )

    def get_issues(
        self, owner: str, repo: str, state: str = "open", limit: int = 100
    ) -> list[dict[str, Any]]:
        """
        Fetch issues (pull requests included, as GitHub lists them together).

        Args:
            owner: Repository owner
            repo: Repository name
            state: 'open', 'closed' or 'all'
            limit: Maximum number of issues returned

        Raises:
            ValueError: If the repository is not found or inaccessible.
        """
        if state not in ("open", "closed", "all"):
            raise ValueError(f"Invalid issue state: {state}")
        issues = self._request(
            f"/repos/{owner}/{repo}/issues",
            {"state": state, "per_page": min(limit, PAGE_SIZES["issues"])},
        )
        return list(issues or [])[:limit]
