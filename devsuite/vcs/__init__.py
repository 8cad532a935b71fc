"""
Repository hosting providers.

Providers turn platform API responses into the plain values consumed by the
health checks and the label classifier. GitHub is the only platform.
"""

from devsuite.vcs.base import BaseVCSProvider
from devsuite.vcs.github import GitHubAPIError, GitHubProvider, parse_repository_spec

__all__ = [
    "BaseVCSProvider",
    "GitHubAPIError",
    "GitHubProvider",
    "get_vcs_provider",
    "parse_repository_spec",
]


def get_vcs_provider(platform: str = "github", **kwargs) -> BaseVCSProvider:
    """
    Return an initialized provider for ``platform``.

    Raises:
        ValueError: If the platform is unsupported or the provider cannot be
            configured (for example, a missing GITHUB_TOKEN).
    """
    if platform.lower() != "github":
        raise ValueError(f"Unsupported VCS platform: {platform}. Use 'github'")
    return GitHubProvider(**kwargs)
